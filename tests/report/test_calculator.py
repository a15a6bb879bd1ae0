"""Tests for report.calculator."""

import pytest

from testcov.report.calculator import (
    CoverageSummary,
    calculate_line_coverage,
    floor_percentage,
    line_coverage,
    read_summary,
    summarize,
)
from testcov.report.errors import NoCoverageDataError, ReportError
from testcov.report.formatter import write_report
from testcov.report.models import CoverageReport, FileRecord, LineData


def _record(name, *counts):
    return FileRecord(
        source_file=name,
        lines=[LineData(i + 1, c) for i, c in enumerate(counts)],
    )


class TestSummarize:
    def test_counts_hit_and_total(self):
        report = CoverageReport(records=[_record("a.py", 1, 0, 3), _record("b.py", 0)])
        summary = summarize(report)

        assert summary == CoverageSummary(hit_lines=2, total_lines=4)

    def test_records_without_lines_are_skipped(self):
        report = CoverageReport(
            records=[_record("a.py", 1, 0), FileRecord(source_file="b.py")]
        )
        assert summarize(report) == CoverageSummary(hit_lines=1, total_lines=2)


class TestLineCoverage:
    def test_fraction(self):
        report = CoverageReport(records=[_record("a.py", 1, 0, 3)])
        assert line_coverage(report) == pytest.approx(2 / 3)

    def test_fraction_is_within_bounds(self):
        full = CoverageReport(records=[_record("a.py", 1, 5)])
        none = CoverageReport(records=[_record("a.py", 0, 0)])

        assert line_coverage(full) == 1.0
        assert line_coverage(none) == 0.0

    def test_no_tracked_lines(self):
        report = CoverageReport(records=[FileRecord(source_file="a.py")])

        with pytest.raises(NoCoverageDataError):
            line_coverage(report)

    def test_no_tracked_lines_is_a_division_error(self):
        with pytest.raises(ZeroDivisionError):
            line_coverage(CoverageReport())
        with pytest.raises(ReportError):
            line_coverage(CoverageReport())


class TestCalculateLineCoverage:
    def test_round_trip_through_report_file(self, package_root, hitmap):
        path = write_report(package_root, hitmap)

        counts = list(next(iter(hitmap.values())).values())
        direct = sum(1 for c in counts if c > 0) / len(counts)
        assert calculate_line_coverage(path) == direct

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            calculate_line_coverage(tmp_path / "lcov.info")

    def test_empty_report(self, tmp_path):
        path = tmp_path / "lcov.info"
        path.write_text("")

        with pytest.raises(NoCoverageDataError) as exc_info:
            calculate_line_coverage(path)
        assert str(path) in str(exc_info.value)


class TestReadSummary:
    def test_counts(self, package_root, hitmap):
        summary = read_summary(write_report(package_root, hitmap))

        assert summary == CoverageSummary(hit_lines=2, total_lines=3)

    def test_record_without_line_data(self, tmp_path):
        path = tmp_path / "lcov.info"
        path.write_text("SF:src/a.py\nend_of_record\nSF:src/b.py\nDA:1,0\nend_of_record\n")

        assert read_summary(path) == CoverageSummary(hit_lines=0, total_lines=1)


class TestFloorPercentage:
    @pytest.mark.parametrize(
        "fraction,expected",
        [(0.0, 0), (0.05, 5), (0.42, 42), (2 / 3, 66), (0.57, 57), (0.999, 99), (1.0, 100)],
    )
    def test_floor(self, fraction, expected):
        assert floor_percentage(fraction) == expected

    def test_summary_percentage(self):
        assert CoverageSummary(hit_lines=2, total_lines=3).percentage == 66
