"""
Top-level package for the HTML → Kontent.ai rich text migration utility.

This package bundles all components required to read HTML documents,
convert them to the Kontent.ai rich text dialect with async transformers,
upload the images they reference as assets, and store the result in new
content items.  Modules are split into subpackages:

* :mod:`rich_text_migrator.extractors` – helpers to read HTML source files
* :mod:`rich_text_migrator.models` – immutable node tree and API payloads
* :mod:`rich_text_migrator.parsers` – HTML parsing, attribute filtering,
  transformers and the async traversal
* :mod:`rich_text_migrator.migrators` – Management API interactions
* :mod:`rich_text_migrator.utils` – error types, reports and pre-flight checks

The intention of this separation is to make the tool composable and
testable.  Each layer has no direct knowledge of configuration or
execution strategy; orchestration is handled in the migration_tool.
"""
