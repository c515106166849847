"""
Catalog HTTP Client

Fetches the raw catalog feed. One GET per call, no retries: the store
decides when a new attempt is allowed.
"""

import logging

import requests

from ..exceptions import CatalogTransportError

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Fetches catalog CSV text over HTTP.

    Usage:
        with CatalogClient(url) as client:
            text = client.fetch_text()
    """

    def __init__(self, url: str, timeout: int = 30):
        """
        Initialize the client.

        Args:
            url: Catalog CSV URL
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout
        self.session = requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def fetch_text(self) -> str:
        """
        Download the catalog.

        Returns:
            Response body as text

        Raises:
            CatalogTransportError: On network failure or a non-2xx status
        """
        logger.debug("Fetching catalog from %s", self.url)
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise CatalogTransportError(self.url, f"Catalog request timed out: {self.url}")
        except requests.exceptions.RequestException as e:
            raise CatalogTransportError(self.url, f"Catalog request failed: {e}")

        if not 200 <= response.status_code < 300:
            raise CatalogTransportError(
                self.url,
                f"Catalog fetch failed: HTTP {response.status_code} for {self.url}",
                status_code=response.status_code,
            )

        # raw.githubusercontent.com serves text/plain without a charset
        response.encoding = response.encoding or 'utf-8'
        if response.encoding.lower() == 'iso-8859-1':
            response.encoding = 'utf-8'
        return response.text


class FileCatalogClient:
    """Reads the catalog from a local CSV file (offline runs and fixtures)."""

    def __init__(self, path: str, encoding: str = 'utf-8'):
        self.url = str(path)
        self.encoding = encoding

    def close(self):
        pass

    def fetch_text(self) -> str:
        try:
            with open(self.url, 'r', encoding=self.encoding) as f:
                return f.read()
        except OSError as e:
            raise CatalogTransportError(self.url, f"Could not read catalog file: {e}")
