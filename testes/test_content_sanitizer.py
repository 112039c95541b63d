import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
pytest.importorskip("bs4")

from wp_export.parsers.content_sanitizer import (
    absolutize_images,
    clean_markup,
    excerpt_text,
    strip_wp_comments,
)


def test_paired_annotations_removed_inner_html_verbatim():
    inner = '<p class="lead">Hello <strong>world</strong></p>'
    html = f'<!-- wp:paragraph {{"className":"lead"}} -->{inner}<!-- /wp:paragraph -->'
    assert strip_wp_comments(html) == inner


def test_self_closing_and_spaced_annotations_removed():
    html = "<!--wp:separator /-->\n<hr/>\n<!--   /wp:separator   -->"
    assert strip_wp_comments(html) == "\n<hr/>\n"


def test_other_comments_are_kept():
    html = "<!-- more --><p>x</p><!-- wp:image -->"
    assert strip_wp_comments(html) == "<!-- more --><p>x</p>"


def test_empty_input():
    assert strip_wp_comments(None) == ""
    assert strip_wp_comments("") == ""
    assert clean_markup(None) == ""
    assert excerpt_text(None) == ""
    assert absolutize_images("", "https://example.com") == ""


def test_clean_markup_drops_noise():
    html = (
        "<p>Keep</p><script>alert(1)</script><style>p{}</style>"
        '<div class="sharedaddy">share</div><span class="screen-reader-text">skip</span>'
        '<figure class="wp-block-quote"><p>Quote</p></figure><p></p>'
    )
    cleaned = clean_markup(html)
    assert "<p>Keep</p>" in cleaned
    assert "script" not in cleaned and "style" not in cleaned
    assert "share" not in cleaned and "skip" not in cleaned
    assert "<blockquote><p>Quote</p></blockquote>" in cleaned
    assert "<p></p>" not in cleaned


def test_clean_markup_collapses_double_breaks():
    assert clean_markup("<p>a<br/><br/>b</p>").count("<br/>") == 1


def test_absolutize_images():
    html = '<p><img src="/wp-content/a.png"><img src="b.png" alt="B"><img src="https://cdn.example.org/c.png" alt="C"></p>'
    out = absolutize_images(html, "https://example.com/")
    assert 'src="https://example.com/wp-content/a.png"' in out
    assert 'src="https://example.com/b.png"' in out
    assert 'src="https://cdn.example.org/c.png"' in out
    assert 'alt=""' in out


def test_absolutize_images_without_images_or_site_url_is_unchanged():
    html = "<p>No images  here</p>"
    assert absolutize_images(html, "https://example.com") == html
    assert absolutize_images('<img src="a.png">', "") == '<img src="a.png">'


def test_excerpt_text():
    assert excerpt_text("<p>Short   <em>summary</em>\n of post.</p>") == "Short summary of post."


def test_clean_markup_drops_embeds_and_skip_link():
    html = (
        '<a class="skip-link" href="#content">Skip to the content</a>'
        '<figure class="wp-block-embed is-provider-spotify"><div>embed</div></figure>'
        '<iframe src="https://open.spotify.com/embed/x"></iframe>'
        '<p><a href="/next">Next post</a></p>'
    )
    cleaned = clean_markup(html)
    assert "Skip to the content" not in cleaned
    assert "embed" not in cleaned
    assert "iframe" not in cleaned
    assert '<a href="/next">Next post</a>' in cleaned
