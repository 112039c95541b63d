"""
Top-level package for the WordPress export → static HTML utility.

This package bundles the components required to read a WordPress export
(WXR) file and write one self-contained HTML document per published post.
Modules are split into subpackages:

* :mod:`wp_export.extractors` – parse the export and normalize item fields
* :mod:`wp_export.parsers` – content sanitizing and HTML rendering
* :mod:`wp_export.utils` – filenames, error reporting and redirect CSVs

Orchestration (configuration, logging and the batch loop) lives in
:mod:`wp_export.export_tool`.
"""

__version__ = "0.1.0"
