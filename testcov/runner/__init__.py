"""Instrumented run controller: launch, URI handshake, collection, exit check."""

from .collector import (
    COLLECTION_TIMEOUT,
    DEFAULT_PORT,
    HitMap,
    build_command,
    collect,
    create_hitmap,
    extract_service_uri,
)
from .controller import InstrumentedRun, run_tests_and_collect
from .errors import (
    CollectionError,
    RunError,
    ServiceUriError,
    ServiceUriParseError,
    TestsFailedError,
)
from .states import FailureReason, RunState, RunStateMachine

__all__ = [
    "COLLECTION_TIMEOUT",
    "DEFAULT_PORT",
    "CollectionError",
    "FailureReason",
    "HitMap",
    "InstrumentedRun",
    "RunError",
    "RunState",
    "RunStateMachine",
    "ServiceUriError",
    "ServiceUriParseError",
    "TestsFailedError",
    "build_command",
    "collect",
    "create_hitmap",
    "extract_service_uri",
    "run_tests_and_collect",
]
