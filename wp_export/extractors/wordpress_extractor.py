"""
Parsing of WordPress WXR export files.

The export is parsed with :mod:`xml.etree.ElementTree` and converted into
plain dictionaries: an element with neither children nor attributes becomes
its text, anything else becomes a mapping of child names and attribute names
to values, with the element text stored under ``"_"``.  Child names keep the
namespace prefix declared in the document (``wp:post_type``,
``content:encoded``).  A child name that repeats becomes a list, a child name
that appears once stays a scalar, which is why item fields are read through
:func:`get_val` and :func:`get_list`.
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from wp_export.utils.errors import InputMalformedError, InputUnavailableError

# Prefixes used by WordPress exports; applied when a document does not
# declare its own prefix for one of these namespaces.
WXR_NS: Dict[str, str] = {
    "content": "http://purl.org/rss/1.0/modules/content/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "excerpt": "http://wordpress.org/export/1.2/excerpt/",
    "wfw": "http://wellformedweb.org/CommentAPI/",
    "wp": "http://wordpress.org/export/1.2/",
}

TEXT_KEY = "_"


def get_val(record: Optional[Dict[str, Any]], key: str) -> Any:
    """Return a single value for ``key``.

    The first element is returned when the parsed value is a list, the value
    itself otherwise, and an empty string when the record or key is missing.
    """
    if not record:
        return ""
    value = record.get(key)
    if value is None:
        return ""
    if isinstance(value, list):
        return value[0] if value else ""
    return value


def get_list(record: Optional[Dict[str, Any]], key: str) -> List[Any]:
    """Return the value for ``key`` as a list (``[]`` when missing)."""
    if not record:
        return []
    value = record.get(key)
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def text_of(value: Any) -> str:
    """Text content of a parsed value, whether plain text or a mapping."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get(TEXT_KEY)
        return text if isinstance(text, str) else ""
    return ""


def category_labels(record: Optional[Dict[str, Any]]) -> List[str]:
    """Labels of every ``category`` entry of an item, in document order.

    Both post categories and tags are exported by WordPress as ``category``
    elements; all of them are returned.  Empty labels are dropped.
    """
    labels = [text_of(c) for c in get_list(record, "category")]
    return [label for label in labels if label]


def extract_post(record: Dict[str, Any]) -> Dict[str, Any]:
    """Project a parsed ``item`` into a normalized post dictionary."""
    return {
        "Title": text_of(get_val(record, "title")),
        "Link": text_of(get_val(record, "link")),
        "ContentHTML": text_of(get_val(record, "content:encoded")),
        "Excerpt": text_of(get_val(record, "excerpt:encoded")),
        "Date": text_of(get_val(record, "pubDate")),
        "Categories": category_labels(record),
        "Post Type": text_of(get_val(record, "wp:post_type")),
        "Status": text_of(get_val(record, "wp:status")),
        "Slug": text_of(get_val(record, "wp:post_name")),
    }


def _qualified_name(tag: str, prefixes: Dict[str, str]) -> str:
    if not tag.startswith("{"):
        return tag
    uri, _, local = tag[1:].partition("}")
    prefix = prefixes.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _element_to_value(element: ET.Element, prefixes: Dict[str, str]) -> Union[str, Dict[str, Any]]:
    children = list(element)
    text = element.text or ""
    if not children and not element.attrib:
        return text

    node: Dict[str, Any] = {}
    for name, value in element.attrib.items():
        node[_qualified_name(name, prefixes)] = value
    if text.strip():
        node[TEXT_KEY] = text

    for child in children:
        key = _qualified_name(child.tag, prefixes)
        value = _element_to_value(child, prefixes)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]
    return node


def parse_export_bytes(data: bytes) -> Dict[str, Any]:
    """Parse WXR content into a dictionary keyed by the root element name.

    Raises:
        xml.etree.ElementTree.ParseError: If the content is not well-formed XML.
    """
    prefixes = {uri: prefix for prefix, uri in WXR_NS.items()}
    events = ET.iterparse(io.BytesIO(data), events=("start-ns",))
    for _event, (prefix, uri) in events:
        if prefix:
            prefixes[uri] = prefix
        else:
            # Default namespace maps to bare local names.
            prefixes.pop(uri, None)
    root = events.root
    return {_qualified_name(root.tag, prefixes): _element_to_value(root, prefixes)}


def parse_export(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Read and parse a WordPress export file.

    Args:
        file_path: Path of the WXR (XML) export.

    Returns:
        The parsed document, e.g. ``{"rss": {"version": "2.0", "channel": {...}}}``.

    Raises:
        InputUnavailableError: If the file is missing or cannot be read.
        InputMalformedError: If the file is not well-formed XML.
    """
    path = Path(file_path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputUnavailableError(path, e) from e
    try:
        return parse_export_bytes(data)
    except ET.ParseError as e:
        raise InputMalformedError(path, e) from e


def find_channel(parsed: Any) -> Optional[Dict[str, Any]]:
    """Return ``rss.channel`` of a parsed export, or ``None`` when absent."""
    if not isinstance(parsed, dict):
        return None
    rss = parsed.get("rss")
    if not isinstance(rss, dict):
        return None
    channel = get_val(rss, "channel")
    return channel if isinstance(channel, dict) else None


def find_items(parsed: Any) -> Optional[List[Dict[str, Any]]]:
    """Return the item records of a parsed export.

    ``None`` means the export has no ``channel``; an empty list means the
    channel holds no items.  Items that parsed as bare text (no child
    elements) carry no fields and are dropped.
    """
    channel = find_channel(parsed)
    if channel is None:
        return None
    return [item for item in get_list(channel, "item") if isinstance(item, dict)]
