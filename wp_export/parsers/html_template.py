"""
Rendering of exported posts as standalone HTML documents.

Documents are rendered from ``wp_export/templates/post.html`` with Jinja2
autoescaping, so every value taken from the export (title, link,
description, date text and categories) is escaped.  The post body is the
only exception: it is already HTML and is marked ``|safe`` in the template.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Iterable, Optional, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import escape

HUMAN_DATE_FORMAT = "%B %d, %Y, %H:%M UTC"

_env = Environment(
    loader=PackageLoader("wp_export", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def escape_html(value: Optional[str]) -> str:
    """Escape ``& < > " '`` for use in HTML text and attribute values."""
    if not value:
        return ""
    return str(escape(value))


def parse_pub_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an export timestamp into an aware UTC datetime.

    Accepts RFC 2822 dates (``Sat, 14 Sep 2024 10:30:00 +0000``, the
    ``pubDate`` format) and ISO 8601.  Naive values are taken as UTC.
    Returns ``None`` when the text is empty, not a date, or a date that
    falls outside the representable range once converted to UTC.
    """
    text = (value or "").strip()
    if not text:
        return None

    parsed: Optional[datetime]
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError, OverflowError):
        parsed = None
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(text)
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def format_pub_date(value: Optional[str]) -> Tuple[str, str]:
    """
    Return ``(iso_date, display_text)`` for a raw export timestamp.

    When the timestamp cannot be parsed the ISO value is empty and the raw
    text is returned unchanged as the display text.  A blank timestamp
    gives two empty strings.
    """
    raw = value or ""
    if not raw.strip():
        return "", ""
    parsed = parse_pub_date(raw)
    if parsed is None:
        return "", raw
    iso = parsed.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso, parsed.strftime(HUMAN_DATE_FORMAT)


def render_post_html(
    title: Optional[str],
    link: Optional[str],
    content: Optional[str],
    iso_date: Optional[str],
    categories: Iterable[str],
    *,
    date_text: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    """
    Build the HTML document for one post.

    Args:
        title: Post title.
        link: Canonical URL of the original post; omitted when empty.
        content: Sanitized post body (HTML, inserted without escaping).
        iso_date: ISO 8601 publish date, or empty when unknown.
        categories: Category labels listed in the footer; the footer is
            omitted when there are none.
        date_text: Text shown inside ``<time>``.  When ``iso_date`` is empty
            this is the raw timestamp of the export.
        description: Plain text for the description meta tag.

    Returns:
        The complete document as a string.
    """
    if iso_date and date_text is None:
        date_text = iso_date
    return _env.get_template("post.html").render(
        title=title or "",
        link=link or "",
        description=description or "",
        iso_date=iso_date or "",
        date_text=date_text or "",
        content=content or "",
        categories=[c for c in categories if c],
    )
