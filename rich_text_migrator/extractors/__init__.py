"""
Extractors for HTML source files.

This subpackage reads the HTML fragments to migrate from disk into a
normalized document representation (``Name``, ``Codename``,
``ContentHTML``) used by the migration tool.
"""

from .html_extractor import extract_document_from_html, extract_documents_from_dir

__all__ = ["extract_document_from_html", "extract_documents_from_dir"]
