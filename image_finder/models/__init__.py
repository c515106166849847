"""
Data models for catalog matching and page layout.

This module contains pure data classes with no I/O.
"""

from .catalog import Catalog, CatalogEntry, ColumnRoles, RowIdentifiers
from .layout import AlternateTableRule, TableLayout, WatchConfig

__all__ = [
    'Catalog',
    'CatalogEntry',
    'ColumnRoles',
    'RowIdentifiers',
    'AlternateTableRule',
    'TableLayout',
    'WatchConfig',
]
