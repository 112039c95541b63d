"""
Content sanitizing and HTML rendering used by the export pipeline.

Exposes :func:`strip_wp_comments` and the markup helpers from
:mod:`wp_export.parsers.content_sanitizer`, and :func:`render_post_html`
from :mod:`wp_export.parsers.html_template`.
"""

from .content_sanitizer import absolutize_images, clean_markup, excerpt_text, strip_wp_comments
from .html_template import escape_html, format_pub_date, parse_pub_date, render_post_html

__all__ = [
    "absolutize_images",
    "clean_markup",
    "escape_html",
    "excerpt_text",
    "format_pub_date",
    "parse_pub_date",
    "render_post_html",
    "strip_wp_comments",
]
