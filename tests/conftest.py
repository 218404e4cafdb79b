"""Pytest configuration. Ensures project root is in sys.path for top-level modules (xbar_cli, cli)."""
import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(scope="session", autouse=True)
def _add_project_root_to_path():
    root = Path(__file__).resolve().parent.parent
    import sys
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Copy of tests/fixtures/Sample.xcodeproj under tmp_path; returns the bundle path."""
    target = tmp_path / "Carthage" / "Checkouts" / "Sample" / "Sample.xcodeproj"
    shutil.copytree(FIXTURES / "Sample.xcodeproj", target)
    return target
