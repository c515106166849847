"""
Custom exception classes for the image finder.

Every catalog failure degrades to an empty catalog at the store boundary;
these types exist so that the cause is reported precisely in the logs.
"""

from typing import Any, Dict, List, Optional


class ImageFinderError(Exception):
    """
    Base exception for all image finder errors.

    Attributes:
        code: Error code (e.g., "CATALOG_TRANSPORT_ERROR")
        message: Human-readable message
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class CatalogError(ImageFinderError):
    """Catalog could not be loaded."""


class CatalogTransportError(CatalogError):
    """Catalog fetch failed (network error or non-2xx status)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(
            code="CATALOG_TRANSPORT_ERROR",
            message=message,
            details={"url": url, "status_code": status_code}
        )


class CatalogParseError(CatalogError):
    """Catalog text lacks a mandatory column."""

    def __init__(self, missing_headers: List[str]):
        self.missing_headers = list(missing_headers)
        super().__init__(
            code="CATALOG_PARSE_ERROR",
            message=f"Missing required catalog headers: {', '.join(self.missing_headers)}",
            details={"missing_headers": self.missing_headers}
        )
