"""Data models for line coverage reports."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineData:
    """Execution count of one source line."""

    line: int
    count: int


@dataclass
class FileRecord:
    """Coverage of one source file.

    ``lines`` is None when the record carries no line data at all.
    """

    source_file: str
    lines: list[LineData] | None = None

    @property
    def lines_found(self) -> int:
        return len(self.lines) if self.lines else 0

    @property
    def lines_hit(self) -> int:
        if not self.lines:
            return 0
        return sum(1 for line in self.lines if line.count > 0)


@dataclass
class CoverageReport:
    """Ordered per-file line coverage."""

    records: list[FileRecord] = field(default_factory=list)
