"""Listing data sources and repository."""

from .exceptions import (
    DataSourceError,
    DataSourceFormatError,
    DataSourceHTTPError,
    DataSourceNotFoundError,
)
from .repository import CategoryLoad, ListingRepository, ListingSet
from .sources import DataSource, FileDataSource, HttpDataSource, build_data_source

__all__ = [
    "DataSource",
    "FileDataSource",
    "HttpDataSource",
    "build_data_source",
    "ListingRepository",
    "ListingSet",
    "CategoryLoad",
    "DataSourceError",
    "DataSourceNotFoundError",
    "DataSourceFormatError",
    "DataSourceHTTPError",
]
