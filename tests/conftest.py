"""
Shared test fixtures and path constants for unix-dsv tests.

Sample input files live in ``inputs/`` at the repository root.  If
input files move or new ones are added, update this file.
"""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Input file paths -- edit here if files move or new ones are added
# ---------------------------------------------------------------------------
INPUT_DIR = Path(__file__).resolve().parent.parent / "inputs"

PASSWD_DSV = INPUT_DIR / "passwd.dsv"
GROUP_DSV = INPUT_DIR / "group.dsv"


@pytest.fixture()
def passwd_path() -> Path:
    if not PASSWD_DSV.exists():
        pytest.skip(f"Input file not found: {PASSWD_DSV}")
    return PASSWD_DSV


@pytest.fixture()
def group_path() -> Path:
    if not GROUP_DSV.exists():
        pytest.skip(f"Input file not found: {GROUP_DSV}")
    return GROUP_DSV


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs against files in inputs/)",
    )
