"""
Extractors for WordPress export files.

This subpackage parses a WXR export into plain Python structures and
provides accessors that normalize item fields regardless of whether a
value was parsed as a scalar or as a list.
"""

from .wordpress_extractor import (
    category_labels,
    extract_post,
    find_items,
    get_list,
    get_val,
    parse_export,
)

__all__ = [
    "category_labels",
    "extract_post",
    "find_items",
    "get_list",
    "get_val",
    "parse_export",
]
