"""
Entry point for the HTML to Kontent.ai rich text migration tool.
"""

from rich_text_migrator.migration_tool import RichTextMigrationTool
from rich_text_migrator.utils.pre_flight_checks import PreFlightCheckError, run_kontent_pre_flight_checks

CONFIG_FILE = "config/migration_config.json"


def main():
    """
    Main function to run the HTML to Kontent.ai migration tool.
    """
    tool = RichTextMigrationTool(config_file=CONFIG_FILE)
    tool.log_message("Starting HTML to Kontent.ai migration.")

    documents = tool.extract_documents()
    tool.log_message(f"Discovered documents: {[d['SourcePath'] for d in documents]}", level="DEBUG")

    if not documents:
        tool.log_message(
            f"No HTML documents (.html) found in '{tool.config['migration']['docs_path']}' directory.",
            level="ERROR",
        )
        return

    tool.log_message(f"Found a total of {len(documents)} documents to migrate.")

    if not tool.dry_run:
        try:
            run_kontent_pre_flight_checks(tool.config)
        except PreFlightCheckError as e:
            tool.log_message(str(e), level="ERROR")
            return

    migrated = tool.migrate_documents(documents)

    tool.log_message(f"Migration process finished: {len(migrated)}/{len(documents)} documents migrated.")

if __name__ == "__main__":
    main()
