"""Domain profile table for project classification.

Keywords are matched against normalized text padded with one space on each
side, so a keyword written with surrounding spaces (" iot ") only matches
as a whole word while a bare keyword ("summariz") matches inside words.
Profile order is significant: on equal scores the earlier profile wins.
"""

import re
from typing import List

from .models import DomainProfile

DOMAIN_PROFILES: List[DomainProfile] = [
    DomainProfile(
        name="Healthcare AI / Medical Imaging",
        keywords=(
            ("cancer", 3), ("tumor", 3), (" mri ", 3), ("x ray", 2), ("disease", 2),
            ("medical", 2), ("health", 2), ("patient", 2), ("diagnos", 2),
            ("diabet", 2), ("covid", 2), ("retina", 2), (" heart ", 1),
        ),
        difficulty="Advanced",
        duration="10-14 weeks",
        team_size="3-4 members",
    ),
    DomainProfile(
        name="Computer Vision",
        keywords=(
            (" cnn ", 3), ("opencv", 3), ("yolo", 3), ("object detection", 3),
            ("face recognition", 3), ("image", 2), ("video", 2), ("vision", 2),
            (" ocr ", 2), ("camera", 1),
        ),
    ),
    DomainProfile(
        name="Natural Language Processing",
        keywords=(
            (" nlp ", 3), ("chatbot", 3), ("sentiment", 3), ("text classification", 3),
            ("language model", 3), (" bert ", 3), ("summariz", 2), ("translation", 2),
            ("speech", 2), ("fake news", 2),
        ),
        team_size="2-3 members",
    ),
    DomainProfile(
        name="Data Science / Predictive Analytics",
        keywords=(
            ("forecast", 3), ("churn", 3), ("predict", 2), ("analytics", 2),
            ("regression", 2), ("dashboard", 2), ("recommend", 2), ("stock", 2),
            (" data ", 1),
        ),
        duration="6-10 weeks",
        team_size="2-3 members",
    ),
    DomainProfile(
        name="Cybersecurity",
        keywords=(
            ("security", 3), ("intrusion", 3), ("malware", 3), ("phishing", 3),
            ("cyber", 3), ("encrypt", 2), ("fraud", 2), ("vulnerab", 2),
            (" soc ", 2), ("forensic", 2),
        ),
        team_size="2-3 members",
    ),
    DomainProfile(
        name="Blockchain / Web3",
        keywords=(
            ("blockchain", 4), ("web3", 3), ("smart contract", 3), ("ethereum", 3),
            ("crypto", 2), (" nft", 2), ("decentrali", 2),
        ),
        difficulty="Advanced",
        duration="10-14 weeks",
    ),
    DomainProfile(
        name="IoT / Embedded Systems",
        keywords=(
            (" iot ", 4), ("arduino", 3), ("raspberry pi", 3), ("embedded", 3),
            ("sensor", 2), ("smart home", 2), ("robot", 2), ("drone", 2),
            ("rfid", 2), ("automation", 1),
        ),
        team_size="3-4 members",
    ),
    DomainProfile(
        name="Cloud Computing / DevOps",
        keywords=(
            ("cloud", 3), ("devops", 3), ("kubernetes", 3), ("docker", 2),
            (" aws ", 2), ("azure", 2), ("serverless", 2), ("microservice", 2),
            (" ci cd ", 2),
        ),
        duration="6-10 weeks",
        team_size="2-3 members",
    ),
    DomainProfile(
        name="Web & Mobile Development",
        keywords=(
            ("full stack", 3), ("android", 3), ("website", 2), (" web ", 2),
            ("mobile", 2), ("e commerce", 2), ("portal", 2), ("management system", 2),
            ("react", 2), (" app ", 1),
        ),
        difficulty="Beginner",
        duration="4-8 weeks",
        team_size="1-3 members",
    ),
]

FALLBACK_PROFILE = DomainProfile(
    name="Applied Machine Learning / Software Engineering",
    keywords=(),
)

# Applied to normalized text; upgrades whichever profile won
ADVANCED_BOOST = re.compile(
    r"\b(transformers?|gans?|generative adversarial|federated|real time|hybrid"
    r"|multi modal|reinforcement learning|graph neural|edge ai)\b"
)
ADVANCED_DIFFICULTY = "Advanced"
ADVANCED_DURATION = "12-16 weeks"
ADVANCED_TEAM_SIZE = "3-5 members"
