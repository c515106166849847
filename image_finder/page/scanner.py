"""
Page Scanner

Walks the configured product tables of a page and augments every row that
resolves to a catalog entry. Also hides the table columns that the
augmented view does not need.

Missing rows, cells or tables are skipped; a broken layout never stops the
rest of the pass.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from ..matching import MatchResolver
from ..models import AlternateTableRule, Catalog, RowIdentifiers, TableLayout
from .augmenter import RowAugmenter
from .dom_utils import element_text, get_style, set_style

logger = logging.getLogger(__name__)

ORIGINAL_SKU_ATTRIBUTE = "data-original-sku"


def hide_table_columns(table: Optional[Tag], column_indices: Iterable[int]) -> int:
    """
    Hide columns of a table by 1-based index.

    Args:
        table: Table element (None is ignored)
        column_indices: 1-based column positions

    Returns:
        Number of cells newly hidden
    """
    if table is None:
        return 0

    hidden = 0
    for index in column_indices:
        cells = table.select(f'thead > tr > th:nth-child({index})')
        cells += table.select(f'tbody > tr > td:nth-child({index})')
        for cell in cells:
            if get_style(cell, 'display') != 'none':
                set_style(cell, display='none')
                hidden += 1
    return hidden


class PageScanner:
    """
    Applies catalog matches to the product tables of one document.

    Usage:
        scanner = PageScanner(soup, MatchResolver(), RowAugmenter(soup), layouts)
        scanner.hide_columns()
        augmented = scanner.scan(catalog)
    """

    def __init__(
        self,
        soup: BeautifulSoup,
        resolver: MatchResolver,
        augmenter: RowAugmenter,
        layouts: Sequence[TableLayout],
        alternate_tables: Sequence[AlternateTableRule] = ()
    ):
        self.soup = soup
        self.resolver = resolver
        self.augmenter = augmenter
        self.layouts = list(layouts)
        self.alternate_tables = list(alternate_tables)

    def hide_columns(self) -> int:
        """Hide the configured columns. Returns the number of cells hidden."""
        hidden = 0
        layout_tables: List[Tag] = []

        for layout in self.layouts:
            if not layout.table_selector:
                continue
            tables = self.soup.select(layout.table_selector)
            if tables:
                # Only the first is hidden, but none of them is an alternate table
                layout_tables.extend(tables)
                hidden += hide_table_columns(tables[0], layout.hidden_columns)

        for rule in self.alternate_tables:
            for table in self.soup.select(rule.table_selector):
                if any(table is known for known in layout_tables):
                    continue
                if self._is_alternate_product_table(table, rule):
                    hidden += hide_table_columns(table, rule.hidden_columns)

        return hidden

    @staticmethod
    def _is_alternate_product_table(table: Tag, rule: AlternateTableRule) -> bool:
        headers = table.select('thead th')
        sku_column = -1
        for idx, header in enumerate(headers, 1):
            text = header.get_text().lower()
            if any(marker.lower() in text for marker in rule.sku_header_markers):
                sku_column = idx

        if sku_column not in rule.sku_columns:
            return False
        return not rule.hidden_columns or len(headers) >= max(rule.hidden_columns)

    def scan(self, catalog: Catalog) -> int:
        """
        Augment every matching row in the configured layouts.

        Args:
            catalog: Catalog to match against

        Returns:
            Number of rows augmented
        """
        if not catalog:
            return 0

        augmented = 0
        for layout in self.layouts:
            try:
                augmented += self._scan_layout(layout, catalog)
            except Exception as e:
                logger.warning("Skipping layout %s: %s", layout.name, e)

        logger.debug("Scan pass augmented %d rows", augmented)
        return augmented

    def _scan_layout(self, layout: TableLayout, catalog: Catalog) -> int:
        augmented = 0
        allow_links = catalog.roles.has_link

        for name_cell in self.soup.select(layout.cells_selector):
            row = name_cell.find_parent('tr')
            if row is None:
                continue

            target_cell = row.select_one(layout.image_target_selector)
            if target_cell is None:
                continue

            sku_cell = row.select_one(layout.sku_cell_selector) if layout.sku_cell_selector else None
            identifiers = self.extract_identifiers(name_cell, sku_cell)

            match = self.resolver.resolve(identifiers, catalog)
            if self.augmenter.augment(name_cell, target_cell, match, allow_links=allow_links):
                augmented += 1

        return augmented

    @staticmethod
    def extract_identifiers(name_cell: Tag, sku_cell: Optional[Tag]) -> RowIdentifiers:
        """
        Read the matching identifiers of one row.

        Args:
            name_cell: Product name cell
            sku_cell: SKU cell, or None when the layout has none

        Returns:
            RowIdentifiers (empty SKU values when sku_cell is None)
        """
        if sku_cell is None:
            return RowIdentifiers(display_name=element_text(name_cell))

        original = sku_cell.get(ORIGINAL_SKU_ATTRIBUTE)
        return RowIdentifiers(
            current_text=element_text(sku_cell),
            original_attribute_value=original.strip() if isinstance(original, str) else None,
            display_name=element_text(name_cell),
        )
