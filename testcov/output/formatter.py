"""Output formatting for coverage results."""

import json
from typing import Literal

from ..pipeline import CoverageResult


def format_coverage_result(
    result: CoverageResult,
    format: Literal["text", "json"] = "text",
    min_coverage: float | None = None,
) -> str:
    """Format a coverage result for output.

    Args:
        result: The coverage result to format.
        format: Output format ("text" or "json").
        min_coverage: Minimum percentage the run is checked against, if any.

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(result, min_coverage)
    return _format_text(result, min_coverage)


def _format_text(result: CoverageResult, min_coverage: float | None) -> str:
    """Format result as human-readable text."""
    summary = result.summary
    lines: list[str] = []

    if result.test_files:
        lines.append(f"Test files: {len(result.test_files)}")
    lines.append(f"Lines hit: {summary.hit_lines}/{summary.total_lines}")
    lines.append(f"Report: {result.report_path}")
    if result.badge_path is not None:
        lines.append(f"Badge: {result.badge_path}")

    lines.append("")
    lines.append(f"Line coverage: {summary.percentage}%")
    if min_coverage is not None:
        if result.meets(min_coverage):
            lines.append(f"✔ Minimum coverage of {min_coverage:g}% reached")
        else:
            lines.append(f"✘ Coverage is below the minimum of {min_coverage:g}%")

    return "\n".join(lines)


def _format_json(result: CoverageResult, min_coverage: float | None) -> str:
    """Format result as JSON."""
    summary = result.summary
    data = {
        "hit_lines": summary.hit_lines,
        "total_lines": summary.total_lines,
        "fraction": result.fraction,
        "percentage": result.percentage,
        "report": str(result.report_path),
        "badge": str(result.badge_path) if result.badge_path else None,
        "test_files": [str(p) for p in result.test_files],
        "min_coverage": min_coverage,
        "passed": result.meets(min_coverage),
    }
    return json.dumps(data, indent=2)
