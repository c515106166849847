"""
Full-Size Image URLs

Catalog images point at thumbnails. Each supplier CDN has its own naming
for the large variant; the rules below are tried in order and the first
rule whose host marker appears in the URL decides. Unknown hosts keep the
thumbnail URL.
"""

import logging
import re
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)

_SIZE_SUFFIX = re.compile(r'-\d+x\d+(\.[a-zA-Z0-9]+(?:[?#].*)?)$')
_SIZE_SUFFIX_BARE = re.compile(r'-\d+x\d+$')
_SMALL_SUFFIX = re.compile(r'_small(\.[a-zA-Z0-9]+(?:[?#].*)?)$')
_SMALL_SUFFIX_BARE = re.compile(r'_small$')


def _strip_query(url: str) -> str:
    return url.split('?')[0]


def _strip_size_suffix(url: str) -> str:
    # image-300x300.jpg -> image.jpg
    return _SIZE_SUFFIX_BARE.sub('', _SIZE_SUFFIX.sub(r'\1', url))


def _strip_small_suffix(url: str) -> str:
    # image_small.png -> image.png
    return _SMALL_SUFFIX_BARE.sub('', _SMALL_SUFFIX.sub(r'\1', url))


def _extra_large_path(url: str) -> str:
    for segment in ('/show/', '/index/', '/large/'):
        if segment in url:
            return url.replace(segment, '/extra_large/', 1)
    return url


def _strip_thumbnail_prefix(url: str) -> str:
    # .../tn_image.jpg?v=2 -> .../image.jpg?v=2
    head, _, filename_with_query = url.rpartition('/')
    filename, sep, query = filename_with_query.partition('?')
    if filename.startswith('tn_'):
        return f"{head}/{filename[3:]}{sep}{query}"
    return url


URL_REWRITE_RULES: List[Tuple[str, Callable[[str], str]]] = [
    ('cdn.modulus.co.il', _strip_query),
    ('www.gag-lachayot.co.il', _strip_size_suffix),
    ('www.all4pet.co.il', _strip_small_suffix),
    ('d3m9l0v76dty0.cloudfront.net', _extra_large_path),
    ('just4pet.co.il', _strip_thumbnail_prefix),
]


def get_full_size_image_url(thumbnail_url) -> str:
    """
    Best-effort full-size URL for a catalog thumbnail.

    Args:
        thumbnail_url: Thumbnail URL from the catalog

    Returns:
        Rewritten URL, the input unchanged for unknown hosts, or '' for
        empty or non-string input

    Example:
        >>> get_full_size_image_url("https://d3m9l0v76dty0.cloudfront.net/show/a.jpg")
        'https://d3m9l0v76dty0.cloudfront.net/extra_large/a.jpg'
    """
    if not thumbnail_url or not isinstance(thumbnail_url, str):
        return ''

    for host_marker, rewrite in URL_REWRITE_RULES:
        if host_marker in thumbnail_url:
            try:
                return rewrite(thumbnail_url)
            except Exception as e:
                logger.warning("Error processing thumbnail URL %s, returning original: %s", thumbnail_url, e)
                return thumbnail_url

    return thumbnail_url
