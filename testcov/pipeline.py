"""Main coverage orchestrator."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .badge.renderer import write_badge
from .config.models import CoverageConfig
from .report.calculator import CoverageSummary, read_summary
from .report.formatter import report_path as default_report_path
from .report.formatter import write_report
from .runner.controller import InstrumentedRun
from .synthesis.discovery import find_test_files
from .synthesis.script import generate_main_script

logger = logging.getLogger(__name__)


@dataclass
class CoverageResult:
    """Outcome of a coverage run."""

    summary: CoverageSummary
    report_path: Path
    badge_path: Path | None = None
    test_files: list[Path] = field(default_factory=list)

    @property
    def fraction(self) -> float:
        return self.summary.fraction

    @property
    def percentage(self) -> int:
        return self.summary.percentage

    def meets(self, min_coverage: float | None) -> bool:
        """Check the coverage against a minimum percentage."""
        if min_coverage is None:
            return True
        return self.fraction * 100 >= min_coverage


def run_coverage(
    package_root: str | Path,
    config: CoverageConfig | None = None,
    on_output: Callable[[str], None] | None = None,
) -> CoverageResult:
    """Run every test of a package under coverage and write the artifacts.

    Steps: discover test files, write ``test/.test_coverage.py``, run it
    under the instrumented runtime, write ``coverage/lcov.info``, compute the
    line coverage and, if enabled, write ``coverage_badge.svg``. A failing
    step raises and no later artifact is written.

    Args:
        package_root: Root directory of the package.
        config: Run settings; defaults apply when omitted.
        on_output: Receives the test process output line by line.

    Returns:
        CoverageResult describing the run.
    """
    config = config or CoverageConfig()
    root = Path(package_root).absolute()

    test_files = find_test_files(root, exclude=config.exclude, suffix=config.test_suffix)
    generate_main_script(root, test_files)

    run = InstrumentedRun(
        root,
        config.port,
        runtime=config.runtime,
        timeout=config.timeout,
        on_output=on_output if config.print_test_output else None,
    )
    hitmap = run.run()

    path = write_report(root, hitmap, report_on=config.report_on)
    summary = read_summary(path)
    logger.info(
        "Line coverage %d/%d (%d%%)",
        summary.hit_lines,
        summary.total_lines,
        summary.percentage,
    )

    badge = write_badge(root, summary.fraction) if config.badge else None
    return CoverageResult(
        summary=summary, report_path=path, badge_path=badge, test_files=test_files
    )


def badge_from_report(
    package_root: str | Path, report_path: str | Path | None = None
) -> CoverageResult:
    """Regenerate the badge from an existing LCOV report."""
    root = Path(package_root).absolute()
    path = Path(report_path) if report_path else default_report_path(root)
    summary = read_summary(path)
    badge = write_badge(root, summary.fraction)
    return CoverageResult(summary=summary, report_path=path, badge_path=badge)
