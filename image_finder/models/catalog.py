"""
Catalog data models.

Pure data classes for the parsed product catalog and the identifiers read
from a table row. The catalog builds its lookup indexes once; nothing here
fetches or parses.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from ..common.text_utils import fold_name


@dataclass
class CatalogEntry:
    """One product row from the catalog feed."""
    skus: Set[str] = field(default_factory=set)   # Normalized, digits only
    image: str = ""                               # Thumbnail URL
    link: str = ""                                # Product page URL
    product_name: str = ""

    def is_blank(self) -> bool:
        """True when the entry carries no data at all."""
        return not (self.skus or self.image or self.link or self.product_name)


@dataclass
class ColumnRoles:
    """Header index for each catalog column role (-1 when absent)."""
    sku: int = -1
    image: int = -1
    link: int = -1
    product_name: int = -1

    @property
    def has_link(self) -> bool:
        return self.link != -1

    @property
    def has_product_name(self) -> bool:
        return self.product_name != -1

    def max_index(self) -> int:
        """Highest index among the roles present in the header."""
        return max(self.sku, self.image, self.link, self.product_name)


@dataclass
class RowIdentifiers:
    """Identifiers read from one table row during a scan pass."""
    current_text: str = ""
    original_attribute_value: Optional[str] = None
    display_name: str = ""


class Catalog:
    """
    Ordered, read-only product catalog.

    Entries keep source row order and are never deduplicated. Lookups go
    through indexes that remember the first entry per key, so a duplicate
    SKU or name always resolves to the earliest row.

    Usage:
        catalog = Catalog(entries, roles)
        entry = catalog.find_by_sku("7290011")
        entry = catalog.find_by_name("Cat Food")
    """

    def __init__(self, entries: List[CatalogEntry], roles: Optional[ColumnRoles] = None):
        self._entries = list(entries)
        self.roles = roles or ColumnRoles()

        self._by_sku: Dict[str, CatalogEntry] = {}
        self._by_name: Dict[str, CatalogEntry] = {}
        for entry in self._entries:
            for sku in entry.skus:
                self._by_sku.setdefault(sku, entry)
            folded = fold_name(entry.product_name)
            if folded:
                self._by_name.setdefault(folded, entry)

    @classmethod
    def empty(cls) -> "Catalog":
        return cls([])

    @property
    def entries(self) -> List[CatalogEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def find_by_sku(self, normalized_sku: str) -> Optional[CatalogEntry]:
        """
        Find the first entry whose SKU set contains a normalized SKU.

        Args:
            normalized_sku: Digit-only SKU

        Returns:
            First matching entry in catalog order, or None
        """
        if not normalized_sku:
            return None
        return self._by_sku.get(normalized_sku)

    def find_by_name(self, name: str) -> Optional[CatalogEntry]:
        """
        Find the first entry whose product name equals a name exactly.

        Comparison is trimmed and case-insensitive, never substring.
        """
        folded = fold_name(name)
        if not folded:
            return None
        return self._by_name.get(folded)
