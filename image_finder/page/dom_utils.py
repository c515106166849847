"""
DOM helpers for BeautifulSoup elements.

Inline style editing and text extraction shared by the scanner, augmenter
and overlay.
"""

from typing import Dict

from bs4 import Tag


def parse_style(style: str) -> Dict[str, str]:
    """Parse an inline style attribute into an ordered property dict."""
    properties = {}
    for declaration in (style or '').split(';'):
        if ':' not in declaration:
            continue
        name, value = declaration.split(':', 1)
        name = name.strip().lower()
        if name:
            properties[name] = value.strip()
    return properties


def get_style(tag: Tag, name: str) -> str:
    """Return one inline style property ('' when unset)."""
    return parse_style(tag.get('style', '')).get(name.lower(), '')


def set_style(tag: Tag, **properties: str) -> None:
    """
    Set inline style properties, keeping the others.

    Underscores in keyword names become dashes:
        set_style(cell, display='flex', justify_content='center')
    """
    current = parse_style(tag.get('style', ''))
    for name, value in properties.items():
        current[name.replace('_', '-')] = value
    tag['style'] = '; '.join(f"{name}: {value}" for name, value in current.items()) + ';'


def has_class(tag, class_name: str) -> bool:
    """True if tag is an element carrying class_name."""
    if not isinstance(tag, Tag):
        return False
    return class_name in (tag.get('class') or [])


def element_text(tag) -> str:
    """Visible text of an element, trimmed ('' for None)."""
    if tag is None:
        return ''
    return tag.get_text().strip()
