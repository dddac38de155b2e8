from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/wfam/cli.py",
        "src/wfam/config.py",
        "src/wfam/output.py",
        "src/wfam/scan/__init__.py",
        "src/wfam/scan/expander.py",
        "src/wfam/scan/indexer.py",
        "src/wfam/scan/comparator.py",
        "src/wfam/logging/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
