"""Rendering and writing of the aggregate test entry-point script."""

import logging
from pathlib import Path
from typing import Iterable

from .discovery import TEST_DIR
from .errors import SynthesisError
from .models import TestFileInfo

logger = logging.getLogger(__name__)

GENERATED_SCRIPT = ".test_coverage.py"

_HEADER = (
    "# Auto-generated by testcov. Do not edit by hand.\n"
    "# Consider adding this file to your .gitignore.\n"
)

# Test files are loaded by path relative to the script directory.
_LOADER = '''\
import importlib.util
import os
import sys

_TEST_ROOT = os.path.dirname(os.path.abspath(__file__))


def _load_test(name, relative_path):
    path = os.path.join(_TEST_ROOT, *relative_path.split("/"))
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module

'''


def script_path(package_root: str | Path) -> Path:
    """Location of the generated script for a package."""
    return Path(package_root).absolute() / TEST_DIR / GENERATED_SCRIPT


def render_main_script(infos: Iterable[TestFileInfo]) -> str:
    """Render the script that calls every test file's ``main()``.

    Imports are sorted by their text and ``main()`` calls follow the same
    order, so the output only depends on the set of test files.

    Raises:
        SynthesisError: If two test files map to the same alias.
    """
    ordered = sorted(infos, key=lambda info: info.import_statement)

    seen: dict[str, TestFileInfo] = {}
    for info in ordered:
        if info.alias in seen:
            raise SynthesisError(
                f"Test files {seen[info.alias].relative_import_path} and "
                f"{info.relative_import_path} share the alias '{info.alias}'",
                str(info.test_file),
            )
        seen[info.alias] = info

    lines = [_HEADER, _LOADER]
    lines.extend(info.import_statement for info in ordered)
    lines.append("")
    lines.append("")
    lines.append("def main():")
    if ordered:
        lines.extend(f"    {info.alias}.main()" for info in ordered)
    else:
        lines.append("    pass")
    lines.append("")
    lines.append("")
    lines.append('if __name__ == "__main__":')
    lines.append("    main()")
    return "\n".join(lines) + "\n"


def generate_main_script(
    package_root: str | Path, test_files: Iterable[str | Path]
) -> Path:
    """Write the aggregate script to ``test/.test_coverage.py``.

    Any previous content is overwritten.

    Returns:
        Path of the written script.
    """
    infos = [TestFileInfo.for_file(test_file) for test_file in test_files]
    content = render_main_script(infos)
    path = script_path(package_root)
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote %s with %d test import(s)", path, len(infos))
    return path
