"""
Entry point for the WordPress export → static HTML tool.

Run without arguments to convert
``artifacts/opsinventor.WordPress.2024-09-14.xml`` into
``artifacts/posts/``.  The exit code is 0 when the run completes and 1 when
the export cannot be read, parsed, or holds no items.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from wp_export.export_tool import WordPressExportTool, load_config
from wp_export.utils.errors import ExportError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert a WordPress export (WXR) into one HTML file per published post.",
    )
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--input", help="Export file (overrides paths.input_file)")
    parser.add_argument("--output-dir", help="Output directory (overrides paths.output_dir)")
    parser.add_argument("--verbose", action="store_true", help="Print debug messages")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to run the export.
    """
    args = parse_args(argv)
    try:
        config = load_config(args.config) if args.config else {}
        paths = config.setdefault("paths", {})
        if args.input:
            paths["input_file"] = args.input
        if args.output_dir:
            paths["output_dir"] = args.output_dir
        if args.verbose:
            config.setdefault("export", {})["verbose"] = True

        tool = WordPressExportTool(config)
        tool.log_message("Starting WordPress export.")
        tool.run()
    except ExportError as e:
        print(f"[ERROR] Export aborted: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
