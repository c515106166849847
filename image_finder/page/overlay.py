"""
Image Overlay

Full-screen lightbox for an enlarged product image. Opening it probes the
derived full-size URL, falls back once to the catalog thumbnail, and shows
an inline message when neither loads.
"""

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup, Tag

from .dom_utils import set_style

logger = logging.getLogger(__name__)

OVERLAY_ID = "image-finder-overlay"

ENLARGED_ALT = "תמונה מוגדלת"
THUMBNAIL_ALT = "תמונה ממוזערת (מקורית)"
LOAD_FAILED_TEXT = "לא ניתן לטעון את התמונה."
CLOSE_TITLE = "סגור (Esc)"
CLOSE_BUTTON_CLASS = "image-finder-overlay-close"


class ImageProbe:
    """
    Checks whether an image URL loads.

    A URL loads when it answers 2xx with an image (or unspecified)
    content type. HEAD is tried first; servers that reject HEAD get a
    streamed GET.
    """

    def __init__(self, timeout: int = 10, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def is_loadable(self, url: str) -> bool:
        if not url:
            return False
        try:
            response = self.session.head(url, timeout=self.timeout, allow_redirects=True)
            if response.status_code in (403, 405):
                response = self.session.get(url, timeout=self.timeout, stream=True)
                response.close()
        except requests.exceptions.RequestException as e:
            logger.debug("Image probe failed for %s: %s", url, e)
            return False

        if not 200 <= response.status_code < 300:
            return False

        content_type = response.headers.get('Content-Type', '')
        return not content_type or content_type.startswith('image/')


class ImageOverlay:
    """
    Builds and removes the lightbox element in a document.

    Usage:
        overlay = ImageOverlay(soup)
        overlay.open_for(img_tag)   # Same as clicking the injected image
        overlay.close()
    """

    def __init__(self, soup: BeautifulSoup, probe: Optional[ImageProbe] = None):
        self.soup = soup
        self.probe = probe or ImageProbe()

    def current(self) -> Optional[Tag]:
        return self.soup.find(id=OVERLAY_ID)

    def open_for(self, img: Tag) -> Tag:
        """Open the overlay for an image injected by RowAugmenter."""
        thumbnail_url = img.get('data-thumbnail-url') or img.get('src', '')
        full_size_url = img.get('data-full-size-url') or thumbnail_url
        return self.open(full_size_url, thumbnail_url)

    def open(self, full_size_url: str, thumbnail_url: str) -> Tag:
        """
        Show the overlay, replacing any open one.

        Args:
            full_size_url: Preferred image URL
            thumbnail_url: Fallback image URL

        Returns:
            The overlay element (already attached to the body)
        """
        self.close()

        overlay = self.soup.new_tag('div', id=OVERLAY_ID)
        set_style(
            overlay,
            position='fixed', top='0', left='0', width='100%', height='100%',
            background_color='rgba(0,0,0,0.85)', display='flex',
            justify_content='center', align_items='center', z_index='10000',
            padding='20px', box_sizing='border-box',
        )

        image = self._build_image(full_size_url, thumbnail_url)
        if image is not None:
            overlay.append(image)
        else:
            message = self.soup.new_tag('p')
            message.string = LOAD_FAILED_TEXT
            set_style(message, color='white', text_align='center')
            overlay.append(message)

        close_button = self.soup.new_tag('button', type='button', title=CLOSE_TITLE)
        close_button['class'] = [CLOSE_BUTTON_CLASS]
        close_button.string = '×'
        set_style(
            close_button,
            position='absolute', top='15px', right='25px', font_size='36px',
            color='white', background_color='transparent', border='none', cursor='pointer',
        )
        overlay.append(close_button)

        body = self.soup.body or self.soup
        body.append(overlay)
        return overlay

    def close(self) -> bool:
        """Remove the overlay. Returns True if one was open."""
        existing = self.current()
        if existing is None:
            return False
        existing.decompose()
        return True

    def _build_image(self, full_size_url: str, thumbnail_url: str) -> Optional[Tag]:
        if self.probe.is_loadable(full_size_url):
            src, alt = full_size_url, ENLARGED_ALT
        else:
            logger.warning("Failed to load: %s. Loading thumbnail: %s", full_size_url, thumbnail_url)
            if thumbnail_url == full_size_url or not self.probe.is_loadable(thumbnail_url):
                logger.error("Failed to load both images: %s", thumbnail_url)
                return None
            src, alt = thumbnail_url, THUMBNAIL_ALT

        image = self.soup.new_tag('img', src=src, alt=alt)
        set_style(
            image,
            max_width='90%', max_height='90%', object_fit='contain',
            border_radius='8px', box_shadow='0 10px 30px rgba(0,0,0,0.3)',
        )
        return image
