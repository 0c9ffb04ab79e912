"""Loading cycle sessions.

A session covers one start-to-hidden lifetime of the indicator. Sessions
are immutable: advancing a phase returns a new instance, mirroring how
the controller replaces its current session on every transition.
"""

from dataclasses import dataclass
from enum import Enum


class LoadingPhase(Enum):
    """Phases of a loading cycle."""

    IDLE = "idle"  # No session; indicator hidden
    DELAYING = "delaying"  # Waiting out the start delay; indicator hidden
    ACTIVE = "active"  # Indicator visible
    SETTLING = "settling"  # Completed early; holding for the minimum time


class InvalidPhaseTransitionError(Exception):
    """Raised when a session is advanced out of order."""

    def __init__(self, current: LoadingPhase, target: LoadingPhase) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Invalid phase transition from {current.value} to {target.value}"
        )


VALID_PHASE_TRANSITIONS: dict[LoadingPhase, set[LoadingPhase]] = {
    LoadingPhase.DELAYING: {LoadingPhase.ACTIVE},
    LoadingPhase.ACTIVE: {LoadingPhase.SETTLING},
    LoadingPhase.SETTLING: set(),
}

VISIBLE_PHASES: frozenset[LoadingPhase] = frozenset(
    {LoadingPhase.ACTIVE, LoadingPhase.SETTLING}
)


@dataclass(frozen=True, slots=True)
class Session:
    """One loading cycle.

    ``started_at`` is a monotonic clock reading in seconds, recorded when
    the indicator became visible rather than when the trigger arrived.
    It is set exactly while the phase is ACTIVE or SETTLING.
    """

    phase: LoadingPhase = LoadingPhase.DELAYING
    started_at: float | None = None

    def __post_init__(self) -> None:
        if self.phase is LoadingPhase.IDLE:
            raise ValueError("An idle controller holds no session")
        if (self.started_at is not None) != (self.phase in VISIBLE_PHASES):
            raise ValueError(
                f"started_at must be set exactly in visible phases "
                f"(phase={self.phase.value}, started_at={self.started_at})"
            )

    @classmethod
    def begin(cls) -> "Session":
        """Create a session waiting out its start delay."""
        return cls(phase=LoadingPhase.DELAYING)

    @property
    def is_visible(self) -> bool:
        """Whether the indicator is shown during this session."""
        return self.phase in VISIBLE_PHASES

    def can_advance(self, target: LoadingPhase) -> bool:
        """Check if the session may move to the target phase."""
        return target in VALID_PHASE_TRANSITIONS[self.phase]

    def activate(self, now: float) -> "Session":
        """Return the visible form of this session, started at ``now``.

        Raises:
            InvalidPhaseTransitionError: If the session is not delaying.
        """
        if not self.can_advance(LoadingPhase.ACTIVE):
            raise InvalidPhaseTransitionError(self.phase, LoadingPhase.ACTIVE)
        return Session(phase=LoadingPhase.ACTIVE, started_at=now)

    def settle(self) -> "Session":
        """Return the settling form of this session.

        Raises:
            InvalidPhaseTransitionError: If the session is not active.
        """
        if not self.can_advance(LoadingPhase.SETTLING):
            raise InvalidPhaseTransitionError(self.phase, LoadingPhase.SETTLING)
        return Session(phase=LoadingPhase.SETTLING, started_at=self.started_at)

    def visible_elapsed_ms(self, now: float) -> float:
        """Milliseconds the indicator has been visible, 0 if not yet shown."""
        if self.started_at is None:
            return 0.0
        return max(0.0, (now - self.started_at) * 1000.0)
