"""Exceptions raised while synthesizing the aggregate test script."""


class SynthesisError(Exception):
    """Raised when a discovered test file cannot be turned into an import."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
