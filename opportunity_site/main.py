"""Command-line entry point for the opportunity site build."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from opportunity_site.config.environment import EnvironmentConfig
from opportunity_site.config.exceptions import ConfigurationError
from opportunity_site.config.loader import load_config
from opportunity_site.config.models import AppConfig
from opportunity_site.data.repository import ListingRepository
from opportunity_site.data.sources import build_data_source
from opportunity_site.domain.ordering import sort_by_recency
from opportunity_site.feed.search import SearchIndex
from opportunity_site.logging import get_logger
from opportunity_site.logging.config import configure_logging
from opportunity_site.pipeline import SiteBuilder
from opportunity_site.rendering.detail import DetailPageService, DetailRenderer
from opportunity_site.rendering.paths import (
    DetailPathResolver,
    PathExistenceCache,
    output_dir_exists_check,
    resolve_page_request,
)

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path],
    log_level_override: Optional[str] = None,
    data_dir_override: Optional[Path] = None,
    output_dir_override: Optional[Path] = None,
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and apply command-line overrides.

    Priority: CLI > environment > config file > defaults.

    Args:
        config_path: Path to configuration file (None to search the defaults)
        log_level_override: Log level from CLI
        data_dir_override: Data directory from CLI
        output_dir_override: Output directory from CLI

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    data = app_config.model_dump()
    if data_dir_override is not None:
        data["data"]["data_dir"] = data_dir_override
        data["data"]["content_dir"] = None
    if output_dir_override is not None:
        data["output"]["output_dir"] = output_dir_override
    if log_level_override:
        data["logging"]["level"] = log_level_override.upper()

    try:
        app_config = AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(e, suggestions=["Check command-line overrides"])

    env_config.log_level = app_config.logging.level
    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opportunity-site",
        description="Opportunity site builder - render listing pages, feeds and search index",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml if present)",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding <category>.json files")
    parser.add_argument("--output-dir", type=Path, default=None, help="Build output directory")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--render",
        metavar="CATEGORY/SLUG",
        help="Render one detail page to stdout instead of building the site "
        "(also accepts /opportunity.html?category=...&slug=...)",
    )
    mode.add_argument("--search", metavar="QUERY", help="Print listings matching QUERY and exit")
    return parser


def run_render(app_config: AppConfig, target: str) -> int:
    """Render one page to stdout; exit code 2 when the page is not rendered."""
    path = target if target.startswith("/") else f"/{target}"
    if resolve_page_request(path) is None:
        print(f"Not a detail page address: {target}", file=sys.stderr)
        return 2

    resolver = DetailPathResolver(
        exists=output_dir_exists_check(app_config.output.output_dir),
        cache=PathExistenceCache(),
    )
    repository = ListingRepository(build_data_source(app_config.data), max_workers=app_config.data.max_workers)
    service = DetailPageService(
        repository,
        renderer=DetailRenderer(site=app_config.site, link_for=resolver.resolve),
        related_limit=app_config.feed.related_limit,
    )
    result = service.render_path(path)
    print(result.document)
    return 0 if result.succeeded else 2


def run_search(app_config: AppConfig, query: str) -> int:
    """Print ``category/slug  title - company`` for every match."""
    repository = ListingRepository(build_data_source(app_config.data), max_workers=app_config.data.max_workers)
    listings = sort_by_recency(repository.load_all().listings())
    matches = SearchIndex(listings).search(query)

    lines: List[str] = [
        f"{listing.category.value if listing.category else '-'}/{listing.slug}  {listing.title} - {listing.company}"
        for listing in matches
    ]
    for line in lines:
        print(line)

    logger.info(
        f"Search matched {len(matches)} of {len(listings)} listings",
        extra={"event": "cli.search.completed", "query": query, "matches": len(matches)},
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the opportunity site builder.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(
            args.config, args.log_level, args.data_dir, args.output_dir
        )

        configure_logging(
            level=app_config.logging.level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
            stream=sys.stderr,
        )

        logger.info(
            "Opportunity site builder starting",
            extra={
                "event": "cli.starting",
                "config_path": str(args.config) if args.config else None,
                "data_dir": str(app_config.data.data_dir),
                "output_dir": str(app_config.output.output_dir),
                "mode": "render" if args.render else "search" if args.search is not None else "build",
            },
        )

        if args.render:
            return run_render(app_config, args.render)
        if args.search is not None:
            return run_search(app_config, args.search)

        result = SiteBuilder(app_config).run()
        logger.info(
            f"Build completed: {result.total_pages} pages, {result.feeds_written} feeds, "
            f"{result.total_errors} errors",
            extra={
                "event": "cli.build.completed",
                "build_id": result.build_id,
                "uptime_seconds": round(time.time() - start_time, 2),
                "had_errors": result.had_errors,
            },
        )
        return 1 if result.had_errors else 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except KeyboardInterrupt:
        print("\nBuild interrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during build",
            extra={
                "event": "cli.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
