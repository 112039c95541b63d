from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

# Block editor annotations: <!-- wp:paragraph {...} --> and <!-- /wp:paragraph -->
WP_COMMENT_RE = re.compile(r"<!--\s*/?wp:[^>]*-->")

# Embeds, share buttons, related-post widgets and screen reader only text.
_NOISE_SELECTOR = (
    "script, style, iframe, .wp-block-embed, .sharedaddy, .jp-relatedposts, [class*=screen-reader]"
)

SKIP_LINK_TEXT = "Skip to the content"


def strip_wp_comments(html: Optional[str]) -> str:
    """
    Remove block editor comments from post content.

    Only the ``<!-- wp:... -->`` / ``<!-- /wp:... -->`` markers are removed;
    the HTML between them is returned unchanged.
    """
    if not html:
        return ""
    return WP_COMMENT_RE.sub("", html)


def clean_markup(html: Optional[str]) -> str:
    """
    Drop theme and plugin noise from post content.

    Removes scripts, styles, iframes and embed blocks, sharing/related-post
    widgets, screen reader text, "Skip to the content" links,
    doubled line breaks and empty paragraphs, and turns ``.wp-block-quote``
    wrappers into plain ``<blockquote>`` elements.
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")

    for bad in soup.select(_NOISE_SELECTOR):
        bad.decompose()

    for link in soup.find_all("a"):
        if SKIP_LINK_TEXT in link.get_text():
            link.decompose()

    for quote in soup.select(".wp-block-quote"):
        quote.name = "blockquote"
        quote.attrs = {}

    for br in soup.select("br + br"):
        br.decompose()

    for p in soup.find_all("p"):
        if not p.contents:
            p.decompose()

    return str(soup)


def absolutize_images(html: Optional[str], site_url: str) -> str:
    """
    Resolve relative ``img`` sources against ``site_url``.

    Images without an ``alt`` attribute get an empty one.  Content without
    images is returned unchanged.
    """
    if not html:
        return ""
    if not site_url:
        return html
    soup = BeautifulSoup(html, "html.parser")
    images = soup.find_all("img")
    if not images:
        return html

    base = site_url.rstrip("/") + "/"
    for img in images:
        src = img.get("src")
        if src:
            img["src"] = urljoin(base, src)
        if not img.has_attr("alt"):
            img["alt"] = ""
    return str(soup)


def excerpt_text(html: Optional[str]) -> str:
    """Plain text of an excerpt: tags removed, whitespace collapsed."""
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return re.sub(r"\s+", " ", text).strip()
