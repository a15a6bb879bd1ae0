"""End-to-end tests running the real instrumented runtime in a subprocess."""

import os

import pytest

from testcov.config.models import CoverageConfig
from testcov.pipeline import badge_from_report, run_coverage
from testcov.report.errors import NoCoverageDataError
from testcov.runner.errors import CollectionError, TestsFailedError


@pytest.fixture
def child_env(monkeypatch, repo_root, package_root):
    """Make testcov and the sample sources importable in the child process."""
    monkeypatch.setenv(
        "PYTHONPATH", os.pathsep.join([str(repo_root), str(package_root / "src")])
    )


@pytest.fixture
def config():
    return CoverageConfig(port=0, timeout=60)


class TestRunCoverage:
    def test_full_run(self, child_env, package_root, config):
        result = run_coverage(package_root, config)

        # mathlib has four statements; sub() is never called.
        assert result.summary.hit_lines == 3
        assert result.summary.total_lines == 4
        assert result.percentage == 75
        assert len(result.test_files) == 2

        assert result.report_path == package_root / "coverage" / "lcov.info"
        report = result.report_path.read_text()
        assert report.startswith("SF:src/mathlib.py\n")
        assert "DA:6,0" in report
        assert "x_test" not in report

        assert result.badge_path == package_root / "coverage_badge.svg"
        assert ">75%<" in result.badge_path.read_text()

        script = (package_root / "test" / ".test_coverage.py").read_text()
        assert "a_x_test = _load_test('a_x_test', 'a/x_test.py')\n" in script

    def test_test_directory_mirrors_source_packages(self, child_env, package_root, config):
        (package_root / "src" / "mylib").mkdir()
        (package_root / "src" / "mylib" / "__init__.py").write_text("")
        (package_root / "src" / "mylib" / "core.py").write_text(
            "def double(x):\n    return x * 2\n"
        )
        for relative in ("mylib/core_test.py", "json/codec_test.py"):
            path = package_root / "test" / relative
            path.parent.mkdir(parents=True)
            path.write_text(
                "from mylib.core import double\n\n\n"
                "def main():\n    assert double(2) == 4\n"
            )

        result = run_coverage(package_root, config)

        assert len(result.test_files) == 4
        assert result.summary.hit_lines == 5
        assert result.summary.total_lines == 6
        assert "SF:src/mylib/core.py\n" in result.report_path.read_text()

    def test_badge_disabled(self, child_env, package_root, config):
        result = run_coverage(package_root, config.merged(badge=False))

        assert result.badge_path is None
        assert not (package_root / "coverage_badge.svg").exists()

    def test_exclusion(self, child_env, package_root, config):
        result = run_coverage(package_root, config.merged(exclude="test/b/*"))

        assert [f.name for f in result.test_files] == ["x_test.py"]

    def test_test_output_is_forwarded(self, child_env, package_root, config):
        (package_root / "test" / "c_test.py").write_text(
            "def main():\n    print('hello from c')\n"
        )
        lines = []
        run_coverage(package_root, config.merged(print_test_output=True), lines.append)

        assert "hello from c" in lines

    def test_failing_tests(self, child_env, package_root, config):
        (package_root / "test" / "c_test.py").write_text(
            "def main():\n    assert False, 'broken'\n"
        )

        with pytest.raises(TestsFailedError) as exc_info:
            run_coverage(package_root, config)

        assert exc_info.value.exit_code == 1
        assert "broken" in exc_info.value.stderr
        assert not (package_root / "coverage" / "lcov.info").exists()

    def test_timeout_writes_no_report(self, child_env, package_root, config):
        (package_root / "test" / "c_test.py").write_text(
            "import time\n\n\ndef main():\n    time.sleep(60)\n"
        )

        with pytest.raises(CollectionError):
            run_coverage(package_root, config.merged(timeout=1))

        assert not (package_root / "coverage" / "lcov.info").exists()
        assert not (package_root / "coverage_badge.svg").exists()

    def test_nothing_to_report_on(self, child_env, package_root, config):
        with pytest.raises(NoCoverageDataError):
            run_coverage(package_root, config.merged(report_on=["lib/"]))

    def test_missing_test_directory(self, tmp_path, config):
        with pytest.raises(FileNotFoundError):
            run_coverage(tmp_path, config)


class TestBadgeFromReport:
    def test_regenerates_badge(self, package_root, hitmap):
        from testcov.report.formatter import write_report

        write_report(package_root, hitmap)
        result = badge_from_report(package_root)

        assert result.percentage == 66
        assert ">66%<" in result.badge_path.read_text()
