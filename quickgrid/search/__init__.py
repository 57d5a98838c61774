"""
Search package - Query filtering and search-key derivation.
"""

from .index import SearchIndex, filter_items
from .keys import initials, make_item, transliterate

__all__ = ["SearchIndex", "filter_items", "initials", "make_item", "transliterate"]
