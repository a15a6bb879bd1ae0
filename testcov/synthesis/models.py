"""Load metadata derived from discovered test files."""

import keyword
from dataclasses import dataclass
from pathlib import Path, PurePath

from .discovery import TEST_DIR
from .errors import SynthesisError


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def split_test_path(parts: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """Return the path segments that follow the nearest ``test`` segment.

    Segments are collected walking backward from the file name and returned
    in root-to-file order.

    Raises:
        SynthesisError: If no segment equals ``test``.
    """
    relative: list[str] = []
    for part in reversed(parts):
        if part == TEST_DIR:
            if not relative:
                break
            return tuple(reversed(relative))
        relative.append(part)
    raise SynthesisError(
        f"Test file is not located under a '{TEST_DIR}' directory: "
        + "/".join(parts)
    )


def _strip_extension(name: str) -> str:
    return PurePath(name).stem


def derive_alias(segments: tuple[str, ...] | list[str]) -> str:
    """Build the module alias for a test file from its segments.

    ``("a", "x_test.py")`` becomes ``a_x_test``.

    Raises:
        SynthesisError: If the alias is not a valid Python identifier.
    """
    if not segments:
        raise SynthesisError("Cannot derive an alias from an empty path")
    names = [*segments[:-1], _strip_extension(segments[-1])]
    alias = "_".join(names)
    if not _is_identifier(alias):
        raise SynthesisError(
            f"'{alias}' is not a valid identifier", "/".join(segments)
        )
    return alias


@dataclass(frozen=True)
class TestFileInfo:
    """How the generated script loads one test file."""

    __test__ = False  # not a pytest class

    test_file: Path
    segments: tuple[str, ...]
    alias: str

    @classmethod
    def for_file(cls, test_file: str | Path) -> "TestFileInfo":
        """Build the load metadata for a discovered test file.

        Raises:
            SynthesisError: If the path has no ``test`` segment or the alias is
                not a valid identifier.
        """
        test_file = Path(test_file).absolute()
        segments = split_test_path(test_file.parts)
        alias = derive_alias(segments)
        return cls(test_file=test_file, segments=segments, alias=alias)

    @property
    def relative_import_path(self) -> str:
        """Path of the file relative to the test root, forward slashes."""
        return "/".join(self.segments)

    @property
    def import_statement(self) -> str:
        """Line binding ``alias`` to the module loaded from the test file.

        The file is loaded by path, so a ``test/`` subdirectory named like a
        package elsewhere on ``sys.path`` cannot shadow it.
        """
        return f"{self.alias} = _load_test({self.alias!r}, {self.relative_import_path!r})"
