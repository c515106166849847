"""
Catalog loading.

Modules:
    client - CatalogClient (HTTP) and FileCatalogClient (local CSV)
    parser - CatalogParser and the quote-aware line tokenizer
    store  - CatalogStore, the session-scoped single-flight loader
"""

from .client import CatalogClient, FileCatalogClient
from .parser import CatalogParser, split_csv_line
from .store import CatalogStore, LoadState

__all__ = [
    'CatalogClient',
    'FileCatalogClient',
    'CatalogParser',
    'split_csv_line',
    'CatalogStore',
    'LoadState',
]
