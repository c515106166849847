"""
Match Resolver

Resolves a table row to at most one catalog entry using a fixed trust order:
1. The SKU shown in the row (or the original-SKU attribute when the cell is empty)
2. The original-SKU attribute, when it disagrees with the shown SKU
3. Exact product name (trimmed, case-insensitive)

Name matching is exact only. Substring or fuzzy comparison would pair
similarly named products.
"""

import logging
from typing import Optional, Tuple

from ..common.text_utils import normalize_sku
from ..models import Catalog, CatalogEntry, RowIdentifiers

logger = logging.getLogger(__name__)


class MatchResolver:
    """
    Picks the catalog entry for a table row.

    Usage:
        resolver = MatchResolver()
        entry = resolver.resolve(
            RowIdentifiers(current_text="X9", original_attribute_value="55"),
            catalog,
        )
        # Returns the entry with SKU "55" when no entry has SKU "9"
    """

    def resolve(
        self,
        identifiers: RowIdentifiers,
        catalog: Catalog,
        has_product_name_role: Optional[bool] = None
    ) -> Optional[CatalogEntry]:
        """
        Resolve a row to a catalog entry.

        Priority order (first success wins):
        1. Primary SKU key
        2. Secondary SKU key (edited SKU on the page)
        3. Exact product name, only if the catalog has a product name column

        Args:
            identifiers: Values read from the row
            catalog: Catalog to search
            has_product_name_role: Override for the catalog's product name role

        Returns:
            Matched entry or None
        """
        if has_product_name_role is None:
            has_product_name_role = catalog.roles.has_product_name

        primary_key, secondary_key = self.sku_keys(identifiers)

        # Priority 1: SKU as shown
        normalized = normalize_sku(primary_key)
        if normalized:
            match = catalog.find_by_sku(normalized)
            if match:
                logger.debug("Matched SKU %s", normalized)
                return match

        # Priority 2: original SKU that the page overrode
        normalized = normalize_sku(secondary_key)
        if normalized:
            match = catalog.find_by_sku(normalized)
            if match:
                logger.debug("Matched original SKU %s", normalized)
                return match

        # Priority 3: exact product name
        display_name = (identifiers.display_name or '').strip()
        if has_product_name_role and display_name:
            match = catalog.find_by_name(display_name)
            if match:
                logger.debug("Matched product name %r", display_name)
                return match

        return None

    @staticmethod
    def sku_keys(identifiers: RowIdentifiers) -> Tuple[str, str]:
        """
        Build the primary and secondary SKU search keys.

        The secondary key is only set when the row shows a SKU and the
        original attribute normalizes to something different.

        Returns:
            (primary_key, secondary_key), either may be empty
        """
        current = (identifiers.current_text or '').strip()
        original = (identifiers.original_attribute_value or '').strip()

        if current:
            if original and normalize_sku(original) != normalize_sku(current):
                return current, original
            return current, ''

        return original, ''

