"""Shared fixtures for tests."""

from pathlib import Path

import pytest

SAMPLE_SOURCE = """\
def add(a, b):
    return a + b


def sub(a, b):
    return a - b
"""

SAMPLE_TEST = """\
import mathlib


def main():
    assert mathlib.add(1, 2) == 3
"""


@pytest.fixture
def repo_root() -> Path:
    """Return the root of this repository."""
    return Path(__file__).parent.parent


@pytest.fixture
def package_root(tmp_path) -> Path:
    """A package with sources in src/ and two test files under test/."""
    root = tmp_path / "pkg"
    (root / "src").mkdir(parents=True)
    (root / "src" / "mathlib.py").write_text(SAMPLE_SOURCE)
    for relative in ("a/x_test.py", "b/y_test.py"):
        path = root / "test" / relative
        path.parent.mkdir(parents=True)
        path.write_text(SAMPLE_TEST)
    return root


@pytest.fixture
def hitmap(package_root) -> dict[str, dict[int, int]]:
    """Hit data for one source file with lines {1: 1, 2: 0, 3: 3}."""
    return {str(package_root / "src" / "mathlib.py"): {1: 1, 2: 0, 3: 3}}
