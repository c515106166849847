"""Row-to-catalog matching."""

from .resolver import MatchResolver

__all__ = ['MatchResolver']
