"""Readers for category listing files and per-slug detail records.

Two interchangeable sources are provided:
- FileDataSource reads ``<data_dir>/<category>.json`` and
  ``<content_dir>/<slug>.json`` from disk
- HttpDataSource fetches the same layout below a base URL
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from opportunity_site.config.models import DataConfig
from opportunity_site.domain.models import Category
from opportunity_site.logging import get_logger

from .exceptions import (
    DataSourceError,
    DataSourceFormatError,
    DataSourceHTTPError,
    DataSourceNotFoundError,
)

logger = get_logger(__name__, component="data")

_SAFE_SLUG = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def _require_safe_slug(slug: str, location: str) -> None:
    if not slug or not _SAFE_SLUG.match(slug) or ".." in slug:
        raise DataSourceNotFoundError(f"Invalid slug: {slug!r}", location=location)


class DataSource(ABC):
    """Where listing JSON comes from."""

    @abstractmethod
    def fetch_category(self, category: Category) -> List[Any]:
        """Return the raw JSON array for a category.

        Raises:
            DataSourceError: If the data cannot be read or is not a JSON array
        """

    @abstractmethod
    def fetch_detail(self, slug: str) -> Dict[str, Any]:
        """Return the raw detail record for a slug.

        Raises:
            DataSourceNotFoundError: If no detail record exists
            DataSourceError: If the record cannot be read or is not a JSON object
        """

    def describe(self) -> str:
        return type(self).__name__


def _expect_list(payload: Any, location: str) -> List[Any]:
    if not isinstance(payload, list):
        raise DataSourceFormatError(
            f"Expected a JSON array in {location}, got {type(payload).__name__}",
            location=location,
        )
    return payload


def _expect_dict(payload: Any, location: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise DataSourceFormatError(
            f"Expected a JSON object in {location}, got {type(payload).__name__}",
            location=location,
        )
    return payload


class FileDataSource(DataSource):
    """Reads JSON files from a local data directory."""

    def __init__(self, data_dir: Path, content_dir: Optional[Path] = None) -> None:
        """Initialize file source.

        Args:
            data_dir: Directory holding <category>.json files
            content_dir: Directory holding <slug>.json files (default: data_dir/content)
        """
        self.data_dir = Path(data_dir)
        self.content_dir = Path(content_dir) if content_dir else self.data_dir / "content"

    def fetch_category(self, category: Category) -> List[Any]:
        path = self.data_dir / f"{category.value}.json"
        return _expect_list(self._read_json(path), str(path))

    def fetch_detail(self, slug: str) -> Dict[str, Any]:
        path = self.content_dir / f"{slug}.json"
        _require_safe_slug(slug, str(path))
        return _expect_dict(self._read_json(path), str(path))

    def describe(self) -> str:
        return f"file:{self.data_dir}"

    def _read_json(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise DataSourceNotFoundError(f"File not found: {path}", location=str(path)) from e
        except json.JSONDecodeError as e:
            raise DataSourceFormatError(f"Invalid JSON in {path}: {e}", location=str(path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise DataSourceError(f"Failed to read {path}: {e}", location=str(path)) from e


class HttpDataSource(DataSource):
    """Fetches JSON over HTTP below a base URL.

    Layout mirrors the data directory: ``{base_url}/{category}.json`` and
    ``{base_url}/content/{slug}.json``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        user_agent: str = "OpportunitySiteBuilder/1.0",
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize HTTP source.

        Args:
            base_url: URL prefix of the data files
            timeout: Request timeout in seconds
            user_agent: User-Agent header
            session: Optional pre-built session (tests inject a mock)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent})

    def fetch_category(self, category: Category) -> List[Any]:
        url = f"{self.base_url}/{category.value}.json"
        return _expect_list(self._make_request(url), url)

    def fetch_detail(self, slug: str) -> Dict[str, Any]:
        url = f"{self.base_url}/content/{slug}.json"
        _require_safe_slug(slug, url)
        return _expect_dict(self._make_request(url), url)

    def describe(self) -> str:
        return f"http:{self.base_url}"

    def _make_request(self, url: str) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            DataSourceNotFoundError: On HTTP 404
            DataSourceHTTPError: On other 4xx/5xx statuses, timeouts and connection errors
            DataSourceFormatError: On an invalid JSON body
        """
        try:
            logger.debug(
                f"HTTP GET {url}",
                extra={"event": "data.fetch.request", "url": url, "timeout": self.timeout},
            )
            response = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "data.fetch.timeout", "url": url, "timeout": self.timeout},
            )
            raise DataSourceHTTPError(
                f"Request to {url} timed out after {self.timeout} seconds", location=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"event": "data.fetch.error", "url": url, "error_type": type(e).__name__},
            )
            raise DataSourceHTTPError(f"Request to {url} failed: {e}", location=url) from e

        if response.status_code == 404:
            raise DataSourceNotFoundError(f"Not found: {url}", location=url)

        if response.status_code >= 400:
            log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
            logger.log(
                log_level,
                f"HTTP {response.status_code} error from {url}",
                extra={"event": "data.fetch.error", "status_code": response.status_code, "url": url},
            )
            raise DataSourceHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                location=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DataSourceFormatError(f"Invalid JSON from {url}: {e}", location=url) from e


def build_data_source(data_config: DataConfig) -> DataSource:
    """Pick the HTTP source when a base URL is configured, else the file source."""
    if data_config.base_url:
        return HttpDataSource(
            data_config.base_url,
            timeout=data_config.request_timeout,
            user_agent=data_config.user_agent,
        )
    return FileDataSource(data_config.data_dir, data_config.content_dir)
