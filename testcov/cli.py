"""Command-line interface for testcov."""

import logging
import sys

import click

from .config.errors import ConfigLoadError, ConfigValidationError
from .config.loader import load_config
from .output.formatter import format_coverage_result
from .report.errors import NoCoverageDataError, ReportError
from .runner.errors import CollectionError, RunError, TestsFailedError
from .synthesis.errors import SynthesisError


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@click.group()
@click.version_option(package_name="testcov")
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug)")
def main(verbose: int):
    """testcov: line coverage and a badge for all tests of a package."""
    _configure_logging(verbose)


@main.command()
@click.argument(
    "package_root",
    type=click.Path(exists=True, file_okay=False),
    default=".",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file (defaults to testcov.yaml in the package root)",
)
@click.option("--exclude", help="Glob of test files to skip, relative to the package root")
@click.option(
    "--port",
    type=click.IntRange(0, 65535),
    help="Port of the diagnostics service (0 picks a free one)",
)
@click.option(
    "--report-on",
    multiple=True,
    help="Path prefix of the sources to report on (repeatable)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds to wait for the tests before giving up",
)
@click.option(
    "--print-test-output",
    is_flag=True,
    default=None,
    help="Show the output of the tests",
)
@click.option(
    "--badge/--no-badge",
    default=None,
    help="Write coverage_badge.svg",
)
@click.option(
    "--min-coverage",
    type=click.FloatRange(0, 100),
    help="Fail when line coverage is below this percentage",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def run(
    package_root: str,
    config_file: str | None,
    exclude: str | None,
    port: int | None,
    report_on: tuple[str, ...],
    timeout: float | None,
    print_test_output: bool | None,
    badge: bool | None,
    min_coverage: float | None,
    output_format: str,
):
    """Run all tests of a package and report line coverage.

    PACKAGE_ROOT is the package directory; test files are looked up in its
    test/ subdirectory.

    Exit codes:
      0 - Tests passed and coverage is high enough
      1 - Tests failed or coverage is below --min-coverage
      2 - Configuration, discovery, runtime or report error
    """
    from .pipeline import run_coverage

    try:
        config = load_config(package_root, config_file).merged(
            exclude=exclude,
            port=port,
            report_on=list(report_on) or None,
            timeout=timeout,
            print_test_output=print_test_output,
            badge=badge,
            min_coverage=min_coverage,
        )
    except ConfigLoadError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(2)
    except ConfigValidationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)

    if output_format == "text":
        click.echo("Running tests, please wait ...")

    # Test output goes to stderr when stdout carries JSON.
    json_output = output_format == "json"
    try:
        result = run_coverage(
            package_root,
            config,
            on_output=lambda line: click.echo(line, err=json_output),
        )
    except FileNotFoundError as e:
        click.echo(f"Error finding tests: {e}", err=True)
        sys.exit(2)
    except SynthesisError as e:
        click.echo(f"Error generating test script: {e}", err=True)
        sys.exit(2)
    except TestsFailedError as e:
        click.echo(str(e), err=True)
        if e.stderr and not config.print_test_output:
            click.echo(e.stderr, err=True)
        sys.exit(1)
    except CollectionError as e:
        click.echo(str(e), err=True)
        sys.exit(2)
    except RunError as e:
        click.echo(f"Error running tests: {e}", err=True)
        if getattr(e, "stderr", None):
            click.echo(e.stderr, err=True)
        sys.exit(2)
    except NoCoverageDataError as e:
        click.echo(f"Cannot compute coverage: {e}", err=True)
        sys.exit(2)
    except ReportError as e:
        click.echo(f"Report error: {e}", err=True)
        sys.exit(2)

    click.echo(format_coverage_result(result, output_format, config.min_coverage))  # type: ignore

    if not result.meets(config.min_coverage):
        sys.exit(1)
    sys.exit(0)


@main.command()
@click.argument(
    "package_root",
    type=click.Path(exists=True, file_okay=False),
    default=".",
)
@click.option(
    "--report",
    "report_file",
    type=click.Path(dir_okay=False),
    help="LCOV report to read (defaults to coverage/lcov.info)",
)
def badge(package_root: str, report_file: str | None):
    """Regenerate coverage_badge.svg from an existing LCOV report.

    Exit codes:
      0 - Badge written
      2 - Report missing, invalid or empty
    """
    from .pipeline import badge_from_report

    try:
        result = badge_from_report(package_root, report_file)
    except OSError as e:
        click.echo(f"Cannot read report: {e}", err=True)
        sys.exit(2)
    except NoCoverageDataError as e:
        click.echo(f"Cannot compute coverage: {e}", err=True)
        sys.exit(2)
    except ReportError as e:
        click.echo(f"Report error: {e}", err=True)
        sys.exit(2)

    click.echo(f"Line coverage: {result.percentage}%")
    click.echo(f"Badge: {result.badge_path}")
    sys.exit(0)


if __name__ == "__main__":
    main()
