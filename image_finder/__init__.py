"""
Catalog Image Finder

Augments product tables on Lionwheel task pages with catalog images and
product links.

Modules:
    models      - Data models (CatalogEntry, Catalog, RowIdentifiers, layouts)
    common      - Shared utilities (config loader, logging, SKU normalization)
    catalog     - Catalog transport, CSV parsing and the session-scoped store
    matching    - Row-to-catalog match resolution
    page        - Page scanning, row augmentation, overlay and change watching
    session     - Wires the components together for one page session
"""

__version__ = "3.1.0"
