"""Aggregate line coverage of a report."""

import math
from dataclasses import dataclass
from pathlib import Path

from .errors import NoCoverageDataError
from .lcov import parse_lcov
from .models import CoverageReport


def floor_percentage(fraction: float) -> int:
    """Floored integer percentage of a fraction.

    The product is rounded to 6 decimals first so that binary artifacts such
    as ``0.57 * 100 == 56.99999999999999`` floor to 57.
    """
    return math.floor(round(fraction * 100, 6))


@dataclass(frozen=True)
class CoverageSummary:
    """Hit and total line counts of a report."""

    hit_lines: int
    total_lines: int

    @property
    def fraction(self) -> float:
        """Hit lines over total lines.

        Raises:
            NoCoverageDataError: If no lines are tracked.
        """
        if self.total_lines == 0:
            raise NoCoverageDataError()
        return self.hit_lines / self.total_lines

    @property
    def percentage(self) -> int:
        return floor_percentage(self.fraction)


def summarize(report: CoverageReport) -> CoverageSummary:
    """Count tracked and executed lines, skipping records without line data."""
    total_lines = 0
    hit_lines = 0
    for record in report.records:
        if record is None or record.lines is None:
            continue
        for line in record.lines:
            total_lines += 1
            if line.count > 0:
                hit_lines += 1
    return CoverageSummary(hit_lines=hit_lines, total_lines=total_lines)


def line_coverage(report: CoverageReport) -> float:
    """Fraction of tracked lines that executed at least once.

    Raises:
        NoCoverageDataError: If the report tracks no lines.
    """
    return summarize(report).fraction


def read_summary(lcov_report: str | Path) -> CoverageSummary:
    """Read an LCOV file and count its tracked and executed lines.

    Raises:
        OSError: If the file cannot be read.
        ReportParseError: If the file is not valid LCOV.
        NoCoverageDataError: If the report tracks no lines.
    """
    text = Path(lcov_report).read_text(encoding="utf-8")
    summary = summarize(parse_lcov(text))
    if summary.total_lines == 0:
        raise NoCoverageDataError(f"No tracked lines in {lcov_report}")
    return summary


def calculate_line_coverage(lcov_report: str | Path) -> float:
    """Read an LCOV file and return its line coverage fraction.

    Raises:
        OSError: If the file cannot be read.
        ReportParseError: If the file is not valid LCOV.
        NoCoverageDataError: If the report tracks no lines.
    """
    return read_summary(lcov_report).fraction
