import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from wp_export.utils.filenames import FilenameRegistry, post_filename, safe_filename


def test_safe_filename_collapses_and_trims():
    assert safe_filename("  Hello, World!  ") == "hello-world"
    assert safe_filename("--Already--slugged--") == "already-slugged"
    assert safe_filename("Café au lait") == "caf-au-lait"


def test_safe_filename_is_deterministic():
    title = "Kubernetes: 10 Tips & Tricks (2024)"
    assert safe_filename(title) == safe_filename(title) == "kubernetes-10-tips-tricks-2024"


def test_safe_filename_fallback():
    assert safe_filename("") == "post"
    assert safe_filename(None) == "post"
    assert safe_filename("!!! ??? ...") == "post"
    assert safe_filename("", fallback="item") == "item"


def test_safe_filename_length_cap():
    assert len(safe_filename("a" * 500)) == 200
    assert safe_filename("abcdef", max_length=3) == "abc"


def test_post_filename_prefers_slug():
    assert post_filename("my-slug", "Some Title") == "my-slug.html"
    assert post_filename("", "Some Title") == "some-title.html"
    assert post_filename("", "") == "post.html"
    assert post_filename("Weird Slug", "x", extension="htm") == "weird-slug.htm"


def test_registry_overwrite_mode_reports_collision():
    registry = FilenameRegistry()
    assert registry.claim("a.html", "First") == ("a.html", False)
    assert registry.claim("a.html", "Second") == ("a.html", True)
    assert registry.owner("a.html") == "Second"


def test_registry_suffix_mode_picks_free_name():
    registry = FilenameRegistry(suffix=True)
    assert registry.claim("a.html") == ("a.html", False)
    assert registry.claim("a.html") == ("a-2.html", True)
    assert registry.claim("a.html") == ("a-3.html", True)
    assert "a-2.html" in registry


def test_registry_suffix_respects_length_cap():
    stem = "a" * 200
    registry = FilenameRegistry(suffix=True, max_length=200)
    registry.claim(f"{stem}.html")
    name, collided = registry.claim(f"{stem}.html")
    assert collided
    assert name == "a" * 198 + "-2.html"
    assert len(name[: -len(".html")]) == 200


def test_registry_release_frees_or_restores_name():
    registry = FilenameRegistry(suffix=True)
    registry.claim("a.html", "First")
    registry.release("a.html")
    assert registry.claim("a.html", "Second") == ("a.html", False)

    registry = FilenameRegistry()
    registry.claim("b.html", "First")
    registry.claim("b.html", "Second")
    registry.release("b.html", "First")
    assert registry.owner("b.html") == "First"
