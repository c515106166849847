"""
Catalog CSV Parser

Turns the raw catalog feed into a Catalog:
- Resolves column roles from the header row (case-insensitive)
- Tokenizes each line with double-quote escaping
- Splits the SKU column into normalized, digit-only SKUs
- Skips rows too short to fill a present column

Real-world catalog exports only need comma separation, quoted fields and
doubled-quote escapes; records spanning several lines are not supported.
"""

import logging
from typing import List, Optional

from ..common.text_utils import normalize_sku
from ..exceptions import CatalogParseError
from ..models import Catalog, CatalogEntry, ColumnRoles

logger = logging.getLogger(__name__)

SKU_HEADER = "SKUs"
IMAGE_HEADER = "Image URL"
LINK_HEADER = "Product URL"
NAME_HEADER = "Product Name"


def split_csv_line(line: str) -> List[str]:
    """
    Split one CSV line into trimmed fields.

    A double quote toggles quoting, a doubled quote inside a quoted field is
    a literal quote, and commas inside quotes are not separators.

    Args:
        line: Single line of CSV text

    Returns:
        List of fields (always at least one)

    Example:
        >>> split_csv_line('"123, 456",http://img,,"Widget ""Deluxe"" Bowl"')
        ['123, 456', 'http://img', '', 'Widget "Deluxe" Bowl']
    """
    fields = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append(''.join(current).strip())
    return fields


def _strip_outer_quotes(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


class CatalogParser:
    """
    Parses catalog feed text into a Catalog.

    Usage:
        parser = CatalogParser()
        catalog = parser.parse(text)
        catalog.roles.has_product_name  # True when 'Product Name' exists
    """

    def parse(self, text: str) -> Catalog:
        """
        Parse catalog text.

        Args:
            text: Raw CSV text (header row + data rows)

        Returns:
            Catalog in source row order (empty for empty or header-only feeds)

        Raises:
            CatalogParseError: If the 'SKUs' or 'Image URL' header is missing
        """
        lines = [line.strip() for line in (text or "").strip().split("\n")]
        if len(lines) <= 1:
            logger.warning("Catalog is empty or has only headers")
            return Catalog.empty()

        roles = self.resolve_roles(split_csv_line(lines[0]))

        entries = []
        skipped = 0
        for line_number, line in enumerate(lines[1:], 2):
            entry = self.parse_row(split_csv_line(line), roles)
            if entry is None:
                skipped += 1
                logger.debug("Skipping malformed catalog row %d: %r", line_number, line[:80])
                continue
            if entry.is_blank():
                continue
            entries.append(entry)

        logger.info("Parsed %d catalog entries (%d malformed rows skipped)", len(entries), skipped)
        return Catalog(entries, roles)

    def resolve_roles(self, headers: List[str]) -> ColumnRoles:
        """
        Map header names to column roles.

        Raises:
            CatalogParseError: If a mandatory role is missing
        """
        lowered = [header.lower() for header in headers]

        roles = ColumnRoles(
            sku=self._find_header(lowered, SKU_HEADER),
            image=self._find_header(lowered, IMAGE_HEADER),
            link=self._find_header(lowered, LINK_HEADER),
            product_name=self._find_header(lowered, NAME_HEADER),
        )

        missing = []
        if roles.sku == -1:
            missing.append(SKU_HEADER)
        if roles.image == -1:
            missing.append(IMAGE_HEADER)
        if missing:
            logger.error("Catalog headers missing: %s", ", ".join(missing))
            raise CatalogParseError(missing)

        return roles

    @staticmethod
    def _find_header(lowered_headers: List[str], name: str) -> int:
        target = name.lower()
        if target in lowered_headers:
            return lowered_headers.index(target)

        # Fallback: headers that kept stray quotes
        for idx, header in enumerate(lowered_headers):
            if _strip_outer_quotes(header) == target:
                return idx

        return -1

    def parse_row(self, fields: List[str], roles: ColumnRoles) -> Optional[CatalogEntry]:
        """
        Build a CatalogEntry from one tokenized row.

        Returns:
            CatalogEntry, or None when the row has too few fields
        """
        if len(fields) <= roles.max_index():
            return None

        raw_skus = fields[roles.sku]
        skus = {normalize_sku(token.strip()) for token in raw_skus.split(',') if token.strip()}
        skus.discard('')

        return CatalogEntry(
            skus=skus,
            image=fields[roles.image],
            link=fields[roles.link] if roles.has_link else '',
            product_name=fields[roles.product_name] if roles.has_product_name else '',
        )
