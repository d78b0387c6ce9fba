import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest


@pytest.fixture(autouse=True)
def report_dir(tmp_path, monkeypatch):
    """Keep JSONL reports and logs of every test inside its temporary directory."""
    path = tmp_path / "reports"
    monkeypatch.setenv("MIGRATION_REPORT_DIR", str(path))
    return path
