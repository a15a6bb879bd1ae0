"""Launching the generated script under the instrumented runtime."""

import logging
import subprocess
import threading
import traceback
from collections import deque
from concurrent.futures import Future
from pathlib import Path
from typing import IO, Callable

from ..synthesis.script import script_path
from .collector import (
    COLLECTION_TIMEOUT,
    DEFAULT_PORT,
    HitMap,
    build_command,
    collect,
    create_hitmap,
    extract_service_uri,
)
from .errors import (
    CollectionError,
    ServiceUriError,
    ServiceUriParseError,
    TestsFailedError,
)
from .states import FailureReason, RunState, RunStateMachine

logger = logging.getLogger(__name__)

STDERR_TAIL_LINES = 50
_STDERR_JOIN_TIMEOUT = 5.0


class InstrumentedRun:
    """One run of ``test/.test_coverage.py`` with coverage collection.

    The run goes through the states of :class:`RunState`. Standard output is
    read on one thread until the diagnostics URI shows up (and echoed after
    that), standard error is drained on another, and the main thread makes a
    single collection request bounded by ``timeout``.
    """

    def __init__(
        self,
        package_root: str | Path,
        port: int = DEFAULT_PORT,
        *,
        runtime: list[str] | None = None,
        timeout: float = COLLECTION_TIMEOUT,
        on_output: Callable[[str], None] | None = None,
    ):
        """Initialize the run.

        Args:
            package_root: Root directory of the package under test.
            port: Port requested for the diagnostics service (0 = any).
            runtime: Command prefix replacing ``python -m testcov.runtime``.
            timeout: Upper bound in seconds for the collection request.
            on_output: Called with every line the tests print on stdout/stderr.
        """
        self.package_root = Path(package_root).absolute()
        self.port = port
        self.runtime = runtime
        self.timeout = timeout
        self.on_output = on_output
        self.machine = RunStateMachine()
        self._process: subprocess.Popen | None = None
        self._stderr_tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)

    @property
    def state(self) -> RunState:
        return self.machine.state

    @property
    def stderr_tail(self) -> str:
        """Last lines the child wrote to standard error."""
        return "\n".join(self._stderr_tail)

    def run(self) -> HitMap:
        """Run the tests and return the collected hit map.

        Raises:
            ServiceUriError: If the runtime could not be started or never
                announced a usable diagnostics URI.
            CollectionError: If collection timed out or failed.
            TestsFailedError: If the tests exited with a non-zero status.
        """
        command = build_command(
            script_path(self.package_root), self.port, self.runtime
        )
        logger.info("Launching %s", " ".join(command))
        try:
            process = subprocess.Popen(
                command,
                cwd=self.package_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            self.machine.fail(FailureReason.NO_URI)
            raise ServiceUriError(
                f"Could not start the instrumented runtime: {e}"
            ) from e
        self._process = process
        self.machine.advance(RunState.AWAITING_SERVICE_URI)

        uri_future: Future[str] = Future()
        stdout_thread = threading.Thread(
            target=self._read_stdout,
            args=(process.stdout, uri_future),
            name="testcov-stdout",
            daemon=True,
        )
        stderr_thread = threading.Thread(
            target=self._drain_stderr,
            args=(process.stderr,),
            name="testcov-stderr",
            daemon=True,
        )
        stdout_thread.start()
        stderr_thread.start()

        service_uri = self._await_service_uri(uri_future, stderr_thread)

        self.machine.advance(RunState.COLLECTING)
        logger.info("Collecting coverage from %s", service_uri)
        try:
            data = collect(service_uri, timeout=self.timeout)
            hitmap = create_hitmap(data["coverage"])
        except Exception as e:
            stack = traceback.format_exc()
            self._kill()
            self.machine.fail(FailureReason.COLLECTION_ERROR)
            raise CollectionError(e, stack) from e
        self.machine.advance(RunState.COLLECTED)

        exit_code = process.wait()
        stdout_thread.join()
        stderr_thread.join()
        if exit_code != 0:
            self.machine.fail(FailureReason.NONZERO_EXIT)
            raise TestsFailedError(exit_code, stderr=self.stderr_tail)

        self.machine.advance(RunState.DONE)
        logger.info("Collected hit data for %d file(s)", len(hitmap))
        return hitmap

    def _await_service_uri(
        self, uri_future: "Future[str]", stderr_thread: threading.Thread
    ) -> str:
        try:
            return uri_future.result()
        except ServiceUriParseError as e:
            self._kill()
            stderr_thread.join(_STDERR_JOIN_TIMEOUT)
            self.machine.fail(FailureReason.PARSE_ERROR)
            raise ServiceUriError(
                f"Could not parse the diagnostics service URI: {e}",
                FailureReason.PARSE_ERROR,
                stderr=self.stderr_tail,
            ) from e
        except ServiceUriError as e:
            self._kill()
            stderr_thread.join(_STDERR_JOIN_TIMEOUT)
            self.machine.fail(FailureReason.NO_URI)
            raise ServiceUriError(str(e), stderr=self.stderr_tail) from e

    def _read_stdout(self, stream: IO[str], uri_future: "Future[str]") -> None:
        try:
            for line in stream:
                line = line.rstrip("\r\n")
                if uri_future.done():
                    self._emit(line)
                    continue
                try:
                    uri = extract_service_uri(line)
                except ServiceUriParseError as e:
                    uri_future.set_exception(e)
                    continue
                if uri is not None:
                    uri_future.set_result(uri)
                else:
                    self._emit(line)
        finally:
            if not uri_future.done():
                uri_future.set_exception(
                    ServiceUriError(
                        "Could not run tests with the diagnostics service enabled. "
                        "Try setting a different port with the --port option."
                    )
                )

    def _drain_stderr(self, stream: IO[str]) -> None:
        for line in stream:
            line = line.rstrip("\r\n")
            self._stderr_tail.append(line)
            self._emit(line)

    def _emit(self, line: str) -> None:
        if self.on_output is not None:
            self.on_output(line)

    def _kill(self) -> None:
        process = self._process
        if process is not None and process.poll() is None:
            logger.debug("Killing instrumented runtime (pid %d)", process.pid)
            process.kill()
            process.wait()


def run_tests_and_collect(
    package_root: str | Path,
    port: int = DEFAULT_PORT,
    *,
    runtime: list[str] | None = None,
    timeout: float = COLLECTION_TIMEOUT,
    on_output: Callable[[str], None] | None = None,
) -> HitMap:
    """Convenience function running the generated script once."""
    run = InstrumentedRun(
        package_root, port, runtime=runtime, timeout=timeout, on_output=on_output
    )
    return run.run()
