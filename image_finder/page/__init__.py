"""
Page augmentation.

Modules:
    scanner    - PageScanner, walks configured tables and augments rows
    augmenter  - RowAugmenter, injects images and links idempotently
    image_urls - Full-size URL rewrite rules per image host
    overlay    - ImageOverlay lightbox with thumbnail fallback
    watcher    - ChangeWatcher and MutationFilter, the debounced rescan loop
"""

from .augmenter import IMAGE_MARKER_CLASS, LINK_MARKER_CLASS, LinkStyle, RowAugmenter
from .image_urls import get_full_size_image_url
from .overlay import CLOSE_BUTTON_CLASS, ImageOverlay, ImageProbe
from .scanner import PageScanner, hide_table_columns
from .watcher import (
    ChangeWatcher,
    DomEventSource,
    MutationFilter,
    MutationRecord,
    WatcherState,
)

__all__ = [
    'CLOSE_BUTTON_CLASS',
    'IMAGE_MARKER_CLASS',
    'LINK_MARKER_CLASS',
    'LinkStyle',
    'RowAugmenter',
    'get_full_size_image_url',
    'ImageOverlay',
    'ImageProbe',
    'PageScanner',
    'hide_table_columns',
    'ChangeWatcher',
    'DomEventSource',
    'MutationFilter',
    'MutationRecord',
    'WatcherState',
]
