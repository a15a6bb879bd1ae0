"""LCOV report formatting, parsing and aggregate line coverage."""

from .calculator import (
    CoverageSummary,
    calculate_line_coverage,
    floor_percentage,
    line_coverage,
    read_summary,
    summarize,
)
from .errors import NoCoverageDataError, ReportError, ReportParseError
from .formatter import LcovFormatter, Resolver, report_path, write_report
from .lcov import format_lcov, parse_lcov
from .models import CoverageReport, FileRecord, LineData

__all__ = [
    "CoverageReport",
    "CoverageSummary",
    "FileRecord",
    "LcovFormatter",
    "LineData",
    "NoCoverageDataError",
    "ReportError",
    "ReportParseError",
    "Resolver",
    "calculate_line_coverage",
    "floor_percentage",
    "format_lcov",
    "line_coverage",
    "parse_lcov",
    "read_summary",
    "report_path",
    "summarize",
    "write_report",
]
