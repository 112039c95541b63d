import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from wp_export.parsers.html_template import (
    escape_html,
    format_pub_date,
    parse_pub_date,
    render_post_html,
)


def test_escape_html_reserved_characters():
    assert escape_html("""<a href="x">Tom & Jerry's</a>""") == (
        "&lt;a href=&#34;x&#34;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;"
    )
    assert escape_html(None) == ""
    assert escape_html("") == ""


def test_escape_html_does_not_double_escape_ampersand_order():
    assert escape_html("&lt;") == "&amp;lt;"


def test_title_is_escaped_everywhere():
    doc = render_post_html("""<b>"Fish" & 'Chips'</b>""", "", "<p>body</p>", "", [])
    escaped = "&lt;b&gt;&#34;Fish&#34; &amp; &#39;Chips&#39;&lt;/b&gt;"
    assert f"<title>{escaped}</title>" in doc
    assert f"<h1>{escaped}</h1>" in doc
    assert "<b>" not in doc
    assert '"Fish"' not in doc


def test_categories_and_link_are_escaped():
    doc = render_post_html("T", 'https://ex.com/?a=1&b="2"', "", "", ["R&D", "<Ops>"])
    assert '<link rel="canonical" href="https://ex.com/?a=1&amp;b=&#34;2&#34;">' in doc
    assert "<footer><p>Categories: R&amp;D, &lt;Ops&gt;</p></footer>" in doc


def test_optional_parts_are_omitted():
    doc = render_post_html("T", "", "<p>x</p>", "", [])
    assert "canonical" not in doc
    assert "<time" not in doc
    assert "<footer>" not in doc
    assert 'name="description"' not in doc
    assert doc.startswith("<!doctype html>")
    assert '<section class="content">\n      <p>x</p>\n    </section>' in doc


def test_content_is_not_escaped():
    doc = render_post_html("T", "", '<p class="a">x &amp; y</p>', "", [])
    assert '<p class="a">x &amp; y</p>' in doc


def test_description_meta():
    doc = render_post_html("T", "", "", "", [], description='Say "hi"')
    assert '<meta name="description" content="Say &#34;hi&#34;">' in doc


def test_parse_pub_date_formats():
    rfc = parse_pub_date("Sat, 14 Sep 2024 10:30:00 +0200")
    assert rfc.isoformat() == "2024-09-14T08:30:00+00:00"
    iso = parse_pub_date("2024-09-14 10:30:00")
    assert iso.isoformat() == "2024-09-14T10:30:00+00:00"
    assert parse_pub_date("not-a-date") is None
    assert parse_pub_date("") is None
    assert parse_pub_date(None) is None


def test_format_pub_date_valid():
    iso, text = format_pub_date("Sat, 14 Sep 2024 10:30:00 +0000")
    assert iso == "2024-09-14T10:30:00.000Z"
    assert "2024" in text and "10:30" in text


def test_unparsable_date_is_kept_verbatim():
    iso, text = format_pub_date("not-a-date")
    assert (iso, text) == ("", "not-a-date")
    doc = render_post_html("T", "", "", iso, [], date_text=text)
    assert "<time>not-a-date</time>" in doc


def test_valid_date_renders_datetime_attribute():
    iso, text = format_pub_date("Sat, 14 Sep 2024 10:30:00 +0000")
    doc = render_post_html("T", "", "", iso, [], date_text=text)
    assert '<time datetime="2024-09-14T10:30:00.000Z">' in doc


def test_out_of_range_date_falls_back_to_raw_text():
    assert parse_pub_date("0001-01-01T00:00:00+05:00") is None
    assert format_pub_date("0001-01-01T00:00:00+05:00") == ("", "0001-01-01T00:00:00+05:00")


def test_unparsable_date_keeps_surrounding_whitespace():
    assert format_pub_date("  not-a-date ") == ("", "  not-a-date ")
    assert format_pub_date("   ") == ("", "")


def test_template_output_ends_with_newline():
    assert render_post_html("T", "", "", "", []).endswith("</html>\n")
