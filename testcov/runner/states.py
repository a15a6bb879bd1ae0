"""States and legal transitions of an instrumented run."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """Lifecycle state of an instrumented run."""

    STARTING = "starting"
    AWAITING_SERVICE_URI = "awaiting_service_uri"
    COLLECTING = "collecting"
    COLLECTED = "collected"
    DONE = "done"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Why a run ended in the FAILED state."""

    PARSE_ERROR = "parse_error"
    NO_URI = "no_uri"
    COLLECTION_ERROR = "collection_error"
    NONZERO_EXIT = "nonzero_exit"


TRANSITIONS: dict[RunState, frozenset[RunState]] = {
    RunState.STARTING: frozenset({RunState.AWAITING_SERVICE_URI, RunState.FAILED}),
    RunState.AWAITING_SERVICE_URI: frozenset({RunState.COLLECTING, RunState.FAILED}),
    RunState.COLLECTING: frozenset({RunState.COLLECTED, RunState.FAILED}),
    RunState.COLLECTED: frozenset({RunState.DONE, RunState.FAILED}),
    RunState.DONE: frozenset(),
    RunState.FAILED: frozenset(),
}


class RunStateMachine:
    """Tracks the current state and refuses illegal transitions."""

    def __init__(self):
        self.state = RunState.STARTING
        self.reason: FailureReason | None = None
        self.history: list[RunState] = [RunState.STARTING]

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self.state]

    def advance(self, target: RunState) -> None:
        """Move to ``target``.

        Raises:
            RuntimeError: If the transition is not allowed from the current state.
        """
        if target not in TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Illegal run transition {self.state.value} -> {target.value}"
            )
        logger.debug("Run state %s -> %s", self.state.value, target.value)
        self.state = target
        self.history.append(target)

    def fail(self, reason: FailureReason) -> None:
        self.advance(RunState.FAILED)
        self.reason = reason
