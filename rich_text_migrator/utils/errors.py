"""
Error types and structured logging helpers for the migration.

The :mod:`rich_text_migrator.utils.errors` module defines the exceptions
raised while converting HTML to Kontent.ai rich text and centralizes the
writing of log entries for both failed and successful operations.  Each
entry is appended to a JSON Lines file under ``reports/migration`` (or the
directory named by the ``MIGRATION_REPORT_DIR`` environment variable) so
that the information can be reviewed or parsed after a run.

Two public reporting functions are provided:

``report_error``
    Record an error that occurred for a document.  An optional exception
    can be supplied and will be serialized to the log.

``report_ok``
    Record a successful step for a document.  Additional key/value
    information can be attached to the entry via the ``extra`` parameter.

The ``ERRORS`` dictionary maps error or event codes to human readable
messages.  Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional


class MigrationError(Exception):
    """Base class for every error raised by the migrator."""


class TransformerError(MigrationError):
    """A transformer could not rewrite its node."""


class MissingSourceAttribute(TransformerError):
    """A resource-bearing element has no URL attribute to fetch from."""

    def __init__(self, tag_name: str, attribute: str = "src") -> None:
        super().__init__(f"Invalid <{tag_name}> tag: no {attribute} attribute.")
        self.tag_name = tag_name
        self.attribute = attribute


class FetchError(MigrationError):
    """The bytes of a referenced resource could not be downloaded."""


class UploadError(MigrationError):
    """The storage system rejected or failed a binary upload."""


class RegistrationError(MigrationError):
    """The storage system failed to register an uploaded file as an asset."""


# Mapping of event codes used throughout the migration to descriptive messages.
# The keys include both error and success codes as the same lookup is used by
# :func:`report_error` and :func:`report_ok`.
ERRORS: Dict[str, str] = {
    "ASSET_UPLOAD": "Failed to upload asset to Kontent.ai",
    "DOCUMENT_FAILED": "Failed to migrate document",
    "ITEM_CREATED": "Content item created successfully",
    "MIGRATED": "Document migrated successfully",
}

_DEFAULT_REPORT_DIR = os.path.join("reports", "migration")


def _report_dir() -> str:
    return os.getenv("MIGRATION_REPORT_DIR") or _DEFAULT_REPORT_DIR


def _write_jsonl(filename: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``filename``."""
    report_dir = _report_dir()
    os.makedirs(report_dir, exist_ok=True)
    with open(os.path.join(report_dir, filename), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def report_error(code: str, item: Dict[str, Any], exc: Optional[BaseException] = None) -> None:
    """Log an error event for ``item``.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    item:
        The document dictionary associated with the error.  Only the
        ``Name`` and ``Url`` keys are referenced if present.
    exc:
        Optional exception instance that triggered the error.  The string
        representation of the exception will be included in the log entry.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {
        "code": code,
        "message": message,
        "name": item.get("Name"),
        "url": item.get("Url"),
    }
    if exc is not None:
        entry["error"] = str(exc)
        entry["error_type"] = type(exc).__name__
    print(f"[ERROR] {message} - {item.get('Name', '')}")
    _write_jsonl("errors.jsonl", entry)


def report_ok(code: str, item: Dict[str, Any], extra: Optional[Dict[str, Any]] = None) -> None:
    """Log a successful event for ``item``.

    Parameters
    ----------
    code:
        A key identifying the type of event.
    item:
        The document dictionary associated with the event.
    extra:
        Optional dictionary of additional fields to merge into the log entry.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {
        "code": code,
        "message": message,
        "name": item.get("Name"),
    }
    if extra:
        entry.update(extra)
    print(f"[OK] {message} - {item.get('Name', '')}")
    _write_jsonl("success.jsonl", entry)
