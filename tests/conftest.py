# tests/conftest.py
"""
Pytest configuration and fixtures.
Adds src/ to sys.path so `import policybook` works without installing.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
src_root = project_root / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from policybook.utils.logging_config import Logger  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path: Path, monkeypatch):
    """Send every log file written during a test into its tmp_path."""
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("POLICYBOOK_LOG_DIR", str(log_dir))
    Logger.reset()
    yield log_dir
    Logger.reset()
