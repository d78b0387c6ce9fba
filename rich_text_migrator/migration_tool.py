"""
High-level orchestration of the HTML → Kontent.ai rich text migration.

This module defines a :class:`RichTextMigrationTool` class that ties
together the extractors, parsers, migrators and utilities into a
complete pipeline.  Each HTML document is parsed, converted to rich text
by the async transformers (uploading its images as assets on the way),
stored in a newly created content item and reported.

Configuration is supplied via a JSON file path or directly as a
dictionary.  The ``kontent`` section must include ``environment_id`` and
``api_key``.  Optional migration settings (e.g., dry-run, target content
type) can be provided under the ``migration`` key.
"""

from __future__ import annotations

import asyncio
import json
import os
from typing import Any, Dict, List, Optional

from rich_text_migrator.extractors.html_extractor import extract_documents_from_dir
from rich_text_migrator.migrators.kontent_migrator import DEFAULT_BASE_URL, ManagementClient
from rich_text_migrator.parsers.context import TransformContext, TransformerRegistry
from rich_text_migrator.parsers.html_parser import parse_html
from rich_text_migrator.parsers.transformers import build_registry
from rich_text_migrator.parsers.traversal import nodes_to_html
from rich_text_migrator.utils.errors import MigrationError, report_error, report_ok


class RichTextMigrationTool:
    """
    Encapsulates all state and behavior required to migrate a set of HTML
    documents to Kontent.ai.  This class is responsible for reading
    configuration, extracting documents, converting them and storing the
    result.  Detailed success and failure information is recorded using
    the :mod:`rich_text_migrator.utils.errors` module.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        *,
        config_file: Optional[str] = None,
        client: Any = None,
        registry: Optional[TransformerRegistry] = None,
    ) -> None:
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                config = json.load(f)
        elif config is None:
            # Default configuration
            config = {}

        # Ensure essential keys exist to prevent KeyErrors
        config.setdefault("kontent", {})
        config["kontent"].setdefault("environment_id", os.getenv("KONTENT_ENVIRONMENT_ID", ""))
        config["kontent"].setdefault("api_key", os.getenv("KONTENT_API_KEY", ""))
        config["kontent"].setdefault("base_url", DEFAULT_BASE_URL)

        config.setdefault("migration", {})
        config["migration"].setdefault("dry_run", False)
        config["migration"].setdefault("limit", None)
        config["migration"].setdefault("language_codename", "default")
        config["migration"].setdefault("content_type_codename", "rich_text")
        config["migration"].setdefault("rich_text_element_codename", "rich_text_element")
        config["migration"].setdefault("register_assets", True)
        config["migration"].setdefault("docs_path", "docs/")

        self.config = config
        self.dry_run: bool = bool(config["migration"]["dry_run"])
        self._client = client
        self.registry = registry or build_registry(upload_assets=not self.dry_run)

    @property
    def client(self) -> Any:
        # Created lazily so that dry runs never need credentials
        if self._client is None:
            self._client = ManagementClient(self.config["kontent"])
        return self._client

    def log_message(self, message: str, level: str = "INFO") -> None:
        print(f"[{level}] {message}")
        # Append to log file
        report_dir = os.getenv("MIGRATION_REPORT_DIR") or os.path.join("reports", "migration")
        os.makedirs(report_dir, exist_ok=True)
        with open(os.path.join(report_dir, "migration.log"), "a", encoding="utf-8") as f:
            f.write(f"{level}: {message}\n")

    def extract_documents(self, docs_path: Optional[str] = None) -> List[Dict[str, Any]]:
        docs_path = docs_path or self.config["migration"]["docs_path"]
        if not os.path.isdir(docs_path):
            self.log_message(f"Documents directory '{docs_path}' does not exist", "ERROR")
            return []
        self.log_message(f"Extracting documents from {docs_path}")
        try:
            return extract_documents_from_dir(docs_path)
        except (OSError, ValueError) as e:
            self.log_message(f"Error extracting documents: {e}", "ERROR")
            return []

    def make_context(self, document: Dict[str, Any]) -> TransformContext:
        migration = self.config["migration"]
        return TransformContext(
            client=None if self.dry_run else self.client,
            item={"Name": document.get("Name")},
            language_codename=migration["language_codename"],
            register_assets=bool(migration["register_assets"]),
        )

    async def convert_document(self, document: Dict[str, Any]) -> str:
        """Convert the document's ``ContentHTML`` into rich text markup."""
        nodes = parse_html(document.get("ContentHTML") or "")
        return await nodes_to_html(nodes, self.registry, self.make_context(document))

    async def migrate_document(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert a single document and store it in a new content item.

        In dry-run mode only the conversion runs; images are left as
        they are and no Management API call is made.

        :return: A dictionary with ``Name``, ``ItemId`` and ``RichText``.
        :raises MigrationError: when the conversion or a storage call fails.
        """
        migration = self.config["migration"]
        name = document.get("Name") or "Untitled"
        rich_text = await self.convert_document(document)

        if self.dry_run:
            self.log_message(f"Dry-run: would create item '{name}'")
            return {"Name": name, "ItemId": None, "RichText": rich_text}

        item_id = await self.client.create_record(
            name,
            migration["content_type_codename"],
            codename=document.get("Codename"),
        )
        report_ok("ITEM_CREATED", document, {"item_id": item_id})
        await self.client.upsert_record_variant(
            item_id,
            migration["language_codename"],
            migration["rich_text_element_codename"],
            rich_text,
        )
        return {"Name": name, "ItemId": item_id, "RichText": rich_text}

    async def _migrate_all(self, documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        limit: Optional[int] = self.config["migration"].get("limit")
        migrated: List[Dict[str, Any]] = []
        for count, document in enumerate(documents):
            if limit is not None and count >= limit:
                break
            name = document.get("Name") or ""
            self.log_message(f"Migrating document '{name}'")
            try:
                result = await self.migrate_document(document)
            except MigrationError as e:
                report_error("DOCUMENT_FAILED", document, e)
                self.log_message(f"Failed to migrate document '{name}': {e}", "ERROR")
                continue
            migrated.append(result)
            report_ok("MIGRATED", document, {"item_id": result["ItemId"]})
        return migrated

    def migrate_documents(self, documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Migrate a list of documents one after another.  A failing document
        is reported and skipped; the remaining ones are still migrated.

        :param documents: Documents as returned by :meth:`extract_documents`.
        :return: The results of the successfully migrated documents.
        """
        return asyncio.run(self._migrate_all(documents))
