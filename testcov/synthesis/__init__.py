"""Test discovery and generation of the aggregate entry-point script."""

from .discovery import TEST_DIR, find_test_files
from .errors import SynthesisError
from .models import TestFileInfo, derive_alias, split_test_path
from .script import GENERATED_SCRIPT, generate_main_script, render_main_script, script_path

__all__ = [
    "GENERATED_SCRIPT",
    "TEST_DIR",
    "SynthesisError",
    "TestFileInfo",
    "derive_alias",
    "find_test_files",
    "generate_main_script",
    "render_main_script",
    "script_path",
    "split_test_path",
]
