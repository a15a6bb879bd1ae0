"""Instrumented runtime: runs a script under coverage.py and serves its hit data.

Invoked as ``python -m testcov.runtime``.
"""

from .service import SERVICE_LISTENING_MARKER, DiagnosticsService, IsolateState

__all__ = ["SERVICE_LISTENING_MARKER", "DiagnosticsService", "IsolateState"]
