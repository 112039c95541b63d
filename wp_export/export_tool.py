"""
High-level orchestration of the WordPress export → static HTML conversion.

This module defines a :class:`WordPressExportTool` class that ties together
the extractor, the content sanitizer, the HTML template and the utilities
into one batch run: read the export file, keep the published posts, render
each one as a standalone HTML document and write it to the output directory.

Configuration is supplied via a JSON file path or directly as a dictionary.
The ``paths`` section holds the input file, output directory and reports
directory (relative paths are resolved against ``paths.base_dir``); the
``export`` section holds the eligibility filter and rendering options.
"""

from __future__ import annotations

import copy
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from wp_export.extractors.wordpress_extractor import extract_post, find_items, parse_export
from wp_export.parsers.content_sanitizer import (
    absolutize_images,
    clean_markup,
    excerpt_text,
    strip_wp_comments,
)
from wp_export.parsers.html_template import format_pub_date, render_post_html
from wp_export.utils.errors import (
    ConfigError,
    InputMalformedError,
    InputUnavailableError,
    StructureUnexpectedError,
    report_error,
    report_ok,
)
from wp_export.utils.filenames import FilenameRegistry, post_filename, safe_filename
from wp_export.utils.redirects import generate_redirects_csv

DEBUG_SNAPSHOT_NAME = "parsed-debug.json"
LOG_FILE_NAME = "export.log"
REDIRECTS_FILE_NAME = "redirect_map.csv"


def load_config(config_file: Union[str, Path]) -> Dict[str, Any]:
    """Load a JSON configuration file.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object.
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = json.load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_file}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {config_file} is not valid JSON: {e}") from e
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_file} must contain a JSON object")
    return config


def apply_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill missing configuration keys in place and return ``config``."""
    config.setdefault("paths", {})
    config["paths"].setdefault("base_dir", ".")
    config["paths"].setdefault("input_file", "artifacts/opsinventor.WordPress.2024-09-14.xml")
    config["paths"].setdefault("output_dir", "artifacts/posts")
    config["paths"].setdefault("reports_dir", "reports/export")

    config.setdefault("export", {})
    config["export"].setdefault("post_type", "post")
    config["export"].setdefault("status", "publish")
    config["export"].setdefault("extension", "html")
    config["export"].setdefault("max_filename_length", 200)
    config["export"].setdefault("fallback_filename", "post")
    config["export"].setdefault("on_collision", "overwrite")
    config["export"].setdefault("clean_markup", False)
    config["export"].setdefault("site_url", "")
    config["export"].setdefault("new_base_url", "")
    config["export"].setdefault("verbose", False)
    return config


class WordPressExportTool:
    """
    Encapsulates the state and behavior of one export run.  This class reads
    configuration, parses the export, filters and renders posts and writes
    the resulting documents.  Per-post outcomes are recorded using the
    :mod:`wp_export.utils.errors` reports.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file:
            config = load_config(config_file)
        elif config is None:
            config = {}
        self.config = apply_defaults(copy.deepcopy(config))

        on_collision = self.config["export"]["on_collision"]
        if on_collision not in ("overwrite", "suffix"):
            raise ConfigError(f"export.on_collision must be 'overwrite' or 'suffix', got {on_collision!r}")

        paths = self.config["paths"]
        base_dir = Path(paths["base_dir"])
        self.input_file = self._resolve(base_dir, paths["input_file"])
        self.output_dir = self._resolve(base_dir, paths["output_dir"])
        self.reports_dir = self._resolve(base_dir, paths["reports_dir"])
        self.log_file = self.reports_dir / LOG_FILE_NAME
        self.verbose = bool(self.config["export"]["verbose"])

    @staticmethod
    def _resolve(base_dir: Path, value: Union[str, Path]) -> Path:
        path = Path(value)
        return path if path.is_absolute() else base_dir / path

    def log_message(self, message: str, level: str = "INFO") -> None:
        if level != "DEBUG" or self.verbose:
            stream = sys.stderr if level == "ERROR" else sys.stdout
            print(f"[{level}] {message}", file=stream)
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        os.makedirs(self.reports_dir, exist_ok=True)
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {level}: {message}\n")

    def is_eligible(self, post: Dict[str, Any]) -> bool:
        """Only regular published posts are exported."""
        export_cfg = self.config["export"]
        return post.get("Post Type") == export_cfg["post_type"] and post.get("Status") == export_cfg["status"]

    def write_debug_snapshot(self, parsed: Any) -> Optional[Path]:
        """Dump the parsed export as JSON into the output directory."""
        snapshot = self.output_dir / DEBUG_SNAPSHOT_NAME
        try:
            with open(snapshot, "w", encoding="utf-8") as f:
                json.dump(parsed, f, indent=2, ensure_ascii=False)
        except OSError as e:
            self.log_message(f"Could not write debug snapshot {snapshot}: {e}", "WARNING")
            return None
        self.log_message(f"Parsed structure written to {snapshot}", "DEBUG")
        return snapshot

    def render_post(self, post: Dict[str, Any]) -> str:
        """Render one normalized post as an HTML document."""
        export_cfg = self.config["export"]
        slug = post.get("Slug") or ""

        content = strip_wp_comments(post.get("ContentHTML"))
        if export_cfg["clean_markup"]:
            content = clean_markup(content)
        if export_cfg["site_url"]:
            content = absolutize_images(content, export_cfg["site_url"])

        raw_date = post.get("Date") or ""
        iso_date, date_text = format_pub_date(raw_date)
        if raw_date.strip() and not iso_date:
            self.log_message(f"Post '{slug}': could not parse date {raw_date!r}; keeping raw text", "WARNING")
            report_error("DATE_UNPARSABLE", post, reports_dir=self.reports_dir, extra={"date": raw_date})

        return render_post_html(
            post.get("Title"),
            post.get("Link"),
            content,
            iso_date,
            post.get("Categories") or [],
            date_text=date_text,
            description=excerpt_text(post.get("Excerpt")),
        )

    def export_post(self, post: Dict[str, Any], registry: FilenameRegistry) -> str:
        """Write one post and return the file name used."""
        export_cfg = self.config["export"]
        title = post.get("Title") or ""
        slug = post.get("Slug") or ""
        if not title.strip():
            self.log_message(f"Post '{slug}' has no title", "WARNING")

        if not safe_filename(slug or title, fallback=""):
            self.log_message(
                f"Post '{title}' has no usable slug or title; using '{export_cfg['fallback_filename']}'",
                "WARNING",
            )
            report_error("FILENAME_FALLBACK", post, reports_dir=self.reports_dir)

        filename = post_filename(
            slug,
            title,
            extension=export_cfg["extension"],
            max_length=export_cfg["max_filename_length"],
            fallback=export_cfg["fallback_filename"],
        )
        html = self.render_post(post)

        previous_owner = registry.owner(filename)
        filename, collided = registry.claim(filename, owner=title)
        out_path = self.output_dir / filename
        try:
            with open(out_path, "w", encoding="utf-8") as f:
                f.write(html)
        except OSError:
            # The earlier post still owns the file when it was not replaced.
            registry.release(filename, previous_owner if collided and not registry.suffix else None)
            raise

        if collided:
            action = f"wrote {filename} instead" if registry.suffix else "overwrote it"
            self.log_message(
                f"Post '{title}' maps to the same file as '{previous_owner}'; {action}",
                "WARNING",
            )
            report_error(
                "FILENAME_COLLISION",
                post,
                reports_dir=self.reports_dir,
                extra={"file": filename, "previous_title": previous_owner},
            )
        report_ok("WRITTEN", post, {"file": str(out_path)}, reports_dir=self.reports_dir)
        return filename

    def run(self) -> int:
        """
        Convert the configured export file and return the number of documents
        written.

        :raises InputUnavailableError: the export file cannot be read.
        :raises InputMalformedError: the export file is not well-formed XML.
        :raises StructureUnexpectedError: the export has no channel or no
            items; ``parsed-debug.json`` is written to the output directory
            first.
        """
        os.makedirs(self.output_dir, exist_ok=True)

        try:
            parsed = parse_export(self.input_file)
        except (InputUnavailableError, InputMalformedError) as e:
            self.log_message(str(e), "ERROR")
            raise

        self.log_message(f"Parsed top-level keys: {list(parsed)}")

        items = find_items(parsed)
        if not items:
            if items is None:
                message = "No <channel> element found under rss. Parsed structure may differ."
            else:
                message = "No items found in channel."
            self.log_message(message, "ERROR")
            snapshot = self.write_debug_snapshot(parsed)
            raise StructureUnexpectedError(message, snapshot)

        self.log_message(f"Found {len(items)} items; processing posts...")

        registry = FilenameRegistry(
            suffix=self.config["export"]["on_collision"] == "suffix",
            max_length=self.config["export"]["max_filename_length"],
        )
        written: List[Dict[str, str]] = []
        for index, item in enumerate(items, start=1):
            post: Dict[str, Any] = {}
            try:
                post = extract_post(item)
                if not self.is_eligible(post):
                    self.log_message(
                        f"Skipping item {index} ({post['Post Type'] or '?'}/{post['Status'] or '?'}): "
                        f"{post['Title']}",
                        "DEBUG",
                    )
                    continue
                filename = self.export_post(post, registry)
            except Exception as e:
                report_error("RECORD_FAILED", post, e, reports_dir=self.reports_dir, extra={"item": index})
                self.log_message(f"An unexpected error occurred while exporting item {index}: {e}", "ERROR")
                continue
            written.append({"Filename": filename, "Link": post.get("Link") or "", "Title": post.get("Title") or ""})

        new_base_url = self.config["export"]["new_base_url"]
        if new_base_url:
            try:
                out_path = generate_redirects_csv(
                    written, new_base=new_base_url, out_path=self.reports_dir / REDIRECTS_FILE_NAME
                )
                self.log_message(f"Redirect CSV generated at {out_path}")
            except OSError as e:
                self.log_message(f"Failed to generate redirects: {e}", "ERROR")

        count = len(written)
        self.log_message(f"Wrote {count} post HTML files to {self.output_dir}")
        return count
