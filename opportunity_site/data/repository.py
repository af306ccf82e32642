"""Listing repository: validated, failure-tolerant access to listing data.

Every public method is total. Missing or corrupt data degrades to empty
results and a log record, never an exception.
"""

import contextvars
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from pydantic import ValidationError

from opportunity_site.domain.models import Category, Listing
from opportunity_site.logging import get_logger

from .exceptions import DataSourceError, DataSourceHTTPError, DataSourceNotFoundError
from .sources import DataSource

logger = get_logger(__name__, component="data")


@dataclass
class CategoryLoad:
    """Result of loading one category.

    Attributes:
        category: Category loaded
        listings: Valid listings in file order
        skipped: Number of records dropped as invalid
        failed: True when the fetch itself failed (network or read error)
        missing: True when the category file does not exist or is corrupt
        error_message: Error text when failed or missing
    """

    category: Category
    listings: List[Listing] = field(default_factory=list)
    skipped: int = 0
    failed: bool = False
    missing: bool = False
    error_message: Optional[str] = None


@dataclass
class ListingSet:
    """Listings of several categories loaded together."""

    loads: Dict[Category, CategoryLoad] = field(default_factory=dict)

    def listings(self, category: Optional[Category] = None) -> List[Listing]:
        """Listings of one category, or of all categories in enum order."""
        if category is not None:
            load = self.loads.get(category)
            return list(load.listings) if load else []
        merged: List[Listing] = []
        for cat in Category:
            merged.extend(self.listings(cat))
        return merged

    def counts(self) -> Dict[str, int]:
        """Number of listings per category name."""
        return {cat.value: len(self.listings(cat)) for cat in Category if cat in self.loads}

    @property
    def failed_categories(self) -> Set[Category]:
        return {cat for cat, load in self.loads.items() if load.failed}

    @property
    def all_failed(self) -> bool:
        return bool(self.loads) and all(load.failed for load in self.loads.values())


class ListingRepository:
    """Loads and validates listings from a DataSource."""

    def __init__(
        self,
        source: DataSource,
        max_workers: int = 4,
        logger_instance: Optional[logging.LoggerAdapter] = None,
    ):
        """Initialize repository.

        Args:
            source: Data source to read from
            max_workers: Thread pool size for concurrent category loads
            logger_instance: Optional logger (defaults to module logger)
        """
        self.source = source
        self.max_workers = max_workers
        self.logger = logger_instance or logger

    def load_category(self, category: Category) -> CategoryLoad:
        """Load and validate one category file.

        Records that are not objects, fail validation, or carry a ``type``
        other than the category's are skipped with a warning.

        Args:
            category: Category to load

        Returns:
            CategoryLoad (empty with ``failed`` or ``missing`` set on errors)
        """
        result = CategoryLoad(category=category)

        try:
            raw_items = self.source.fetch_category(category)
        except DataSourceHTTPError as e:
            result.failed = True
            result.error_message = str(e)
            self.logger.warning(
                f"Failed to fetch {category.value}: {e}",
                extra={
                    "event": "data.category.failed",
                    "category": category.value,
                    "location": e.location,
                    "status_code": e.status_code,
                },
            )
            return result
        except DataSourceNotFoundError as e:
            result.missing = True
            result.error_message = str(e)
            self.logger.warning(
                f"No data for {category.value}: {e}",
                extra={"event": "data.category.missing", "category": category.value, "location": e.location},
            )
            return result
        except DataSourceError as e:
            result.missing = True
            result.error_message = str(e)
            self.logger.warning(
                f"Unreadable data for {category.value}: {e}",
                extra={
                    "event": "data.category.corrupt",
                    "category": category.value,
                    "location": e.location,
                    "error_type": type(e).__name__,
                },
            )
            return result
        except Exception as e:
            result.failed = True
            result.error_message = str(e)
            self.logger.error(
                f"Unexpected error loading {category.value}: {e}",
                extra={
                    "event": "data.category.failed",
                    "category": category.value,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            return result

        for index, raw in enumerate(raw_items):
            listing = self._validate_record(category, index, raw)
            if listing is None:
                result.skipped += 1
            else:
                result.listings.append(listing)

        self.logger.info(
            f"Loaded {len(result.listings)} {category.value}",
            extra={
                "event": "data.category.loaded",
                "category": category.value,
                "count": len(result.listings),
                "skipped": result.skipped,
            },
        )
        return result

    def load_all(self, categories: Optional[Iterable[Category]] = None) -> ListingSet:
        """Load several categories concurrently.

        Each category is fetched in its own worker; a failure in one never
        affects the others.

        Args:
            categories: Categories to load (default: all)

        Returns:
            ListingSet keyed by category
        """
        wanted = list(categories) if categories is not None else list(Category)
        listing_set = ListingSet()
        if not wanted:
            return listing_set

        workers = max(1, min(self.max_workers, len(wanted)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="category-load") as pool:
            futures = {
                category: pool.submit(contextvars.copy_context().run, self.load_category, category)
                for category in wanted
            }
            for category in wanted:
                listing_set.loads[category] = futures[category].result()

        return listing_set

    def find(self, category: Category, slug: str, listings: Optional[List[Listing]] = None) -> Optional[Listing]:
        """Find a listing by slug within its category.

        Args:
            category: Category to search
            slug: Slug to find
            listings: Already-loaded listings of the category (skips a fetch)

        Returns:
            Listing or None
        """
        pool = listings if listings is not None else self.load_category(category).listings
        for listing in pool:
            if listing.slug == slug:
                return listing
        return None

    def load_detail(self, slug: str) -> Dict[str, Any]:
        """Load a slug's detail record; {} when absent or unreadable."""
        try:
            return self.source.fetch_detail(slug)
        except DataSourceNotFoundError:
            self.logger.debug(
                f"No detail record for {slug}",
                extra={"event": "data.detail.missing", "slug": slug},
            )
            return {}
        except DataSourceError as e:
            self.logger.warning(
                f"Unreadable detail record for {slug}: {e}",
                extra={"event": "data.detail.corrupt", "slug": slug, "error_type": type(e).__name__},
            )
            return {}

    def _validate_record(self, category: Category, index: int, raw: Any) -> Optional[Listing]:
        if not isinstance(raw, dict):
            self.logger.warning(
                f"Skipping non-object record #{index} in {category.value}",
                extra={"event": "data.record.invalid", "category": category.value, "index": index},
            )
            return None

        try:
            listing = Listing.model_validate(raw)
        except ValidationError as e:
            self.logger.warning(
                f"Skipping invalid record #{index} in {category.value}",
                extra={
                    "event": "data.record.invalid",
                    "category": category.value,
                    "index": index,
                    "error": str(e),
                },
            )
            return None

        if listing.type != category.listing_type:
            self.logger.warning(
                f"Skipping record #{index} in {category.value}: type {listing.type!r}",
                extra={
                    "event": "data.record.type_mismatch",
                    "category": category.value,
                    "index": index,
                    "slug": listing.slug,
                    "listing_type": listing.type,
                },
            )
            return None

        return listing
