"""
Row Augmenter

Writes a matched catalog entry into a table row:
- A thumbnail image in the image target cell (click opens the overlay)
- A product link wrapping the name cell's content

Injected elements carry marker classes; each application first removes the
markers from earlier passes, so a row never shows two images or two links.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..models import CatalogEntry
from .dom_utils import set_style
from .image_urls import get_full_size_image_url

logger = logging.getLogger(__name__)

IMAGE_MARKER_CLASS = "image-finder-sku-image"
LINK_MARKER_CLASS = "image-finder-product-link"
MARKER_CLASSES = (IMAGE_MARKER_CLASS, LINK_MARKER_CLASS)


@dataclass
class LinkStyle:
    """Link colors: storefront links stand out from supplier links."""
    primary_host: str = "anipet.co.il"
    primary_color: str = "#3d9cfe"
    other_color: str = "#809fba"

    def color_for(self, url: str) -> str:
        if self.primary_host and self.primary_host in url:
            return self.primary_color
        return self.other_color


class RowAugmenter:
    """
    Injects catalog images and links into table rows.

    Usage:
        augmenter = RowAugmenter(soup)
        augmenter.augment(name_cell, target_cell, entry)
    """

    def __init__(self, soup: BeautifulSoup, link_style: Optional[LinkStyle] = None):
        self.soup = soup
        self.link_style = link_style or LinkStyle()

    def augment(
        self,
        name_cell: Tag,
        target_cell: Tag,
        match: Optional[CatalogEntry],
        allow_links: bool = True
    ) -> bool:
        """
        Apply a match to one row.

        Args:
            name_cell: Cell holding the product name (wrapped in the link)
            target_cell: Cell that receives the image
            match: Matched catalog entry, or None
            allow_links: False when the catalog has no product URL column

        Returns:
            True if anything was injected
        """
        if match is None:
            return False

        display_name = name_cell.get_text().strip()
        changed = False

        if match.image:
            self.remove_image(target_cell)
            self._insert_image(target_cell, match.image, display_name)
            changed = True

        if match.link and allow_links:
            self.remove_link(name_cell)
            self._wrap_link(name_cell, match.link, display_name)
            changed = True

        if changed:
            logger.debug("Augmented row %r", display_name)

        return changed

    @staticmethod
    def remove_image(target_cell: Tag) -> int:
        """Remove injected images from a cell. Returns the number removed."""
        images = target_cell.select(f'img.{IMAGE_MARKER_CLASS}')
        for image in images:
            image.decompose()
        return len(images)

    @staticmethod
    def remove_link(name_cell: Tag) -> int:
        """Unwrap injected links, keeping their content in place."""
        links = name_cell.select(f'a.{LINK_MARKER_CLASS}')
        for link in links:
            link.unwrap()
        return len(links)

    def _insert_image(self, target_cell: Tag, thumbnail_url: str, display_name: str) -> None:
        image = self.soup.new_tag(
            'img',
            src=thumbnail_url,
            alt=f"תמונה עבור {display_name or 'מוצר'}",
            title="לחץ להגדלת התמונה",
        )
        image['class'] = [IMAGE_MARKER_CLASS]
        image['data-thumbnail-url'] = thumbnail_url
        image['data-full-size-url'] = get_full_size_image_url(thumbnail_url)
        set_style(
            image,
            width='auto', height='110px', max_height='110px', max_width='110px',
            object_fit='contain', border_radius='4px', vertical_align='middle',
            cursor='pointer', display='block', margin='0',
        )

        set_style(target_cell, display='flex', justify_content='center', align_items='center', padding='2px')
        target_cell.insert(0, image)

    def _wrap_link(self, name_cell: Tag, url: str, display_name: str) -> None:
        link = self.soup.new_tag(
            'a',
            href=url,
            target='_blank',
            rel='noopener noreferrer',
            title=f"פתח דף מוצר עבור {display_name or 'מוצר'}",
        )
        link['class'] = [LINK_MARKER_CLASS]
        set_style(link, color=self.link_style.color_for(url), text_decoration='none', cursor='pointer')

        # Originals are cloned, not moved
        for node in list(name_cell.contents):
            link.append(copy.copy(node))

        name_cell.clear()
        name_cell.append(link)
