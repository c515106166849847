"""
Text Utilities

Identifier normalization shared by the catalog parser and the match resolver.
"""

import re

_NON_DIGITS = re.compile(r'[^0-9]')


def normalize_sku(sku) -> str:
    """
    Reduce a raw SKU to its digit-only canonical form.

    Vendor prefixes, punctuation and whitespace are dropped; digits are the
    stable matching key.

    Args:
        sku: Raw SKU value (anything that is not a string normalizes to "")

    Returns:
        String of ASCII digits, possibly empty

    Example:
        >>> normalize_sku("AN-7290 011")
        '7290011'
    """
    if not isinstance(sku, str):
        return ''
    return _NON_DIGITS.sub('', sku)


def fold_name(name) -> str:
    """Trim and case-fold a product name for exact comparison."""
    if not isinstance(name, str):
        return ''
    return name.strip().casefold()
