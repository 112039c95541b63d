"""
Generation of redirect mapping CSV files.

The :func:`generate_redirects_csv` helper writes a CSV file containing the
mapping of WordPress URLs to the location of the exported HTML documents.
The resulting file is used to configure 301 redirects so that existing links
continue to work after the content moves to the new site.
"""

from __future__ import annotations

import csv
import os
from pathlib import Path
from typing import Dict, Iterable, Union


def generate_redirects_csv(
    posts: Iterable[Dict[str, str]], *, new_base: str, out_path: Union[str, Path]
) -> Path:
    """Generate a CSV mapping old WordPress URLs to new document URLs.

    Parameters
    ----------
    posts:
        Iterable of dictionaries with at least ``Filename`` and ``Link`` keys.
        Posts without a ``Link`` have no old URL and are left out.
    new_base:
        Base URL under which the exported documents are published.  The new
        URL of a post is ``<new_base>/<Filename>``.
    out_path:
        Location of the CSV file to be written.  The parent directory is
        created automatically.

    Returns
    -------
    Path
        The path of the generated CSV file.
    """
    out_path = Path(out_path)
    os.makedirs(out_path.parent, exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["OldURL", "NewURL"])
        for post in posts:
            old_url = post.get("Link")
            if not old_url:
                continue
            new_url = f"{new_base.rstrip('/')}/{post.get('Filename', '')}"
            writer.writerow([old_url, new_url])
    return out_path
