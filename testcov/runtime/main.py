"""Command line of the instrumented runtime."""

import os
import runpy
import sys
import traceback

import click
from coverage import Coverage

from .hits import coverage_hits
from .service import SERVICE_LISTENING_MARKER, DiagnosticsService, IsolateState


def _exit_code(code) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    click.echo(str(code), err=True)
    return 1


def run_script(script: str, args: tuple[str, ...] = ()) -> int:
    """Run ``script`` as ``__main__`` and return its exit status.

    The script's directory is put first on ``sys.path``, as ``python script.py``
    would do. An uncaught exception is printed and maps to status 1.
    """
    script = os.path.abspath(script)
    sys.argv = [script, *args]
    sys.path.insert(0, os.path.dirname(script))
    try:
        runpy.run_path(script, run_name="__main__")
    except SystemExit as e:
        return _exit_code(e.code)
    except Exception:
        traceback.print_exc()
        return 1
    return 0


@click.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "allow_interspersed_args": False,
    }
)
@click.option(
    "--pause-isolates-on-exit",
    "pause_on_exit",
    is_flag=True,
    help="Keep the process alive after the script ends until hit data is collected",
)
@click.option(
    "--enable-instrumentation-asserts",
    "enable_asserts",
    is_flag=True,
    help="Refuse to run when assert statements are stripped (-O)",
)
@click.option(
    "--enable-diagnostics-service",
    "port",
    type=click.IntRange(0, 65535),
    default=None,
    help="Serve hit data on this port (0 picks a free one)",
)
@click.argument("script", type=click.Path(exists=True, dir_okay=False))
@click.argument("script_args", nargs=-1, type=click.UNPROCESSED)
def main(
    pause_on_exit: bool,
    enable_asserts: bool,
    port: int | None,
    script: str,
    script_args: tuple[str, ...],
):
    """Run SCRIPT under coverage measurement.

    With --enable-diagnostics-service the process prints the endpoint URI
    on its first line of output.
    """
    if enable_asserts and sys.flags.optimize:
        click.echo("Cannot enable asserts: interpreter runs with -O", err=True)
        sys.exit(2)

    state = IsolateState()
    service = None
    if port is not None:
        service = DiagnosticsService(state, port=port)
        service.start()
        click.echo(f"{SERVICE_LISTENING_MARKER}{service.uri}")
        sys.stdout.flush()

    cov = Coverage(data_file=None)
    cov.start()
    try:
        exit_code = run_script(script, script_args)
    finally:
        cov.stop()

    state.pause(coverage_hits(cov))
    sys.stdout.flush()
    if service is not None:
        if pause_on_exit:
            state.resumed.wait()
        service.stop()

    sys.exit(exit_code)
