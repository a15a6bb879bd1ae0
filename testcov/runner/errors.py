"""Exceptions raised by the instrumented run controller."""

from .states import FailureReason


class RunError(Exception):
    """Base exception for a failed instrumented run."""

    reason: FailureReason

    def __init__(self, message: str, reason: FailureReason):
        self.reason = reason
        super().__init__(message)


class ServiceUriParseError(ValueError):
    """Raised when a startup line carries the marker but no usable URI."""

    def __init__(self, message: str, line: str):
        self.line = line
        super().__init__(message)


class ServiceUriError(RunError):
    """Raised when the diagnostics URI could not be obtained."""

    def __init__(
        self,
        message: str,
        reason: FailureReason = FailureReason.NO_URI,
        stderr: str | None = None,
    ):
        self.stderr = stderr
        super().__init__(message, reason)


class CollectionError(RunError):
    """Raised when collecting hit data timed out or failed."""

    def __init__(self, cause: BaseException, stack: str | None = None):
        self.cause = cause
        self.stack = stack
        message = (
            "Tests timed out: there are some problems with the unit test code\n"
            f"error: {cause}"
        )
        if stack:
            message += f"\nstacktrace:\n{stack}"
        super().__init__(message, FailureReason.COLLECTION_ERROR)


class TestsFailedError(RunError):
    """Raised when the test process exits with a non-zero status."""

    __test__ = False

    def __init__(self, exit_code: int, stderr: str | None = None):
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(
            f"Tests failed with exit code {exit_code}", FailureReason.NONZERO_EXIT
        )
