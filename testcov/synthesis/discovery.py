"""Discovery of test files under a package's test directory."""

import errno
import logging
import os
from fnmatch import fnmatchcase
from pathlib import Path

logger = logging.getLogger(__name__)

TEST_DIR = "test"
DEFAULT_SUFFIX = "_test.py"


def find_test_files(
    package_root: str | Path,
    exclude: str | None = None,
    suffix: str = DEFAULT_SUFFIX,
) -> list[Path]:
    """Find every test file under ``<package_root>/test``.

    Args:
        package_root: Root directory of the package.
        exclude: Optional glob matched against the posix path relative to
            the package root (e.g. ``test/slow/*``).
        suffix: File name suffix identifying a test file.

    Returns:
        Absolute paths of the matching files, sorted.

    Raises:
        FileNotFoundError: If the test directory does not exist.
    """
    root = Path(package_root).absolute()
    tests_root = root / TEST_DIR
    if not tests_root.is_dir():
        raise FileNotFoundError(
            errno.ENOENT, os.strerror(errno.ENOENT), str(tests_root)
        )

    result: list[Path] = []
    for item in sorted(tests_root.rglob("*")):
        if not item.is_file():
            continue
        if not item.name.endswith(suffix):
            continue
        relative_path = item.relative_to(root).as_posix()
        if exclude is not None and fnmatchcase(relative_path, exclude):
            logger.debug("Excluding %s", relative_path)
            continue
        result.append(item)

    logger.info("Found %d test file(s) under %s", len(result), tests_root)
    return result
