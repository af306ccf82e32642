"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class PathStyle(str, Enum):
    """Form of detail page links written into pages and feeds."""

    DIRECTORY = "directory"
    QUERY = "query"


def _normalize_url(value: Optional[str], field_name: str) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip().rstrip("/")
    if not stripped:
        return None
    if not stripped.startswith(("http://", "https://")):
        raise ValueError(f"{field_name} must start with http:// or https://")
    return stripped


class SiteConfig(BaseModel):
    """Public site identity used for titles, canonical URLs and images."""

    name: str = Field("StudentTechProjects", min_length=1, description="Site name in page titles")
    base_url: str = Field(
        "https://studenttechprojects.com", description="Origin for canonical and image URLs"
    )
    image_dir: str = Field(
        "/images/opportunities", description="Site path holding per-slug listing images"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip whitespace from site name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("name cannot be empty")
        return stripped

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) URL without trailing slash."""
        normalized = _normalize_url(v, "base_url")
        if normalized is None:
            raise ValueError("base_url cannot be empty")
        return normalized

    @field_validator("image_dir")
    @classmethod
    def normalize_image_dir(cls, v: str) -> str:
        """Ensure a leading slash and no trailing slash."""
        return "/" + v.strip().strip("/")


class DataConfig(BaseModel):
    """Where listing and detail JSON is read from."""

    data_dir: Path = Field(Path("data"), description="Directory holding <category>.json files")
    content_dir: Optional[Path] = Field(
        None, description="Directory holding <slug>.json detail records (default: data_dir/content)"
    )
    base_url: Optional[str] = Field(
        None, description="Fetch data over HTTP from this base URL instead of data_dir"
    )
    request_timeout: int = Field(
        30, ge=5, le=300, description="HTTP request timeout in seconds"
    )
    user_agent: str = Field(
        "OpportunitySiteBuilder/1.0", min_length=1, description="User-Agent for HTTP requests"
    )
    max_workers: int = Field(
        4, ge=1, le=16, description="Concurrent category loads"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: Optional[str]) -> Optional[str]:
        """Require an absolute http(s) URL without trailing slash."""
        return _normalize_url(v, "data.base_url")

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped

    @model_validator(mode="after")
    def default_content_dir(self):
        """Detail records live under data_dir/content unless configured."""
        if self.content_dir is None:
            self.content_dir = self.data_dir / "content"
        return self


class FeedConfig(BaseModel):
    """Feed and related-items limits."""

    home_section_limit: int = Field(9, ge=1, le=100, description="Cards per home page section")
    related_limit: int = Field(4, ge=0, le=20, description="Related items per detail page")
    recent_days: int = Field(14, ge=1, le=365, description="Window for 'recent' listings")


class OutputConfig(BaseModel):
    """Static build output."""

    output_dir: Path = Field(Path("dist"), description="Directory receiving the built site")
    path_style: PathStyle = Field(
        PathStyle.DIRECTORY, description="Link form for detail pages (directory or query)"
    )

    model_config = {"use_enum_values": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the opportunity site build."""

    site: SiteConfig = Field(default_factory=SiteConfig, description="Site identity")
    data: DataConfig = Field(default_factory=DataConfig, description="Data sources")
    feed: FeedConfig = Field(default_factory=FeedConfig, description="Feed limits")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Build output")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
