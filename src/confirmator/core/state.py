"""Per-loop scheduling state."""

from dataclasses import dataclass, field

from confirmator.session.models import Confirmation


@dataclass
class ScheduleState:
    """Transient state owned by one scheduler loop.

    Created at loop start, mutated every cycle, never persisted.
    """

    next_delay_seconds: int = 0
    pending: list[Confirmation] = field(default_factory=list)

    # Counters
    cycles: int = 0
    fetches: int = 0
    accepted: int = 0
    accept_failures: int = 0
    auth_refreshes: int = 0
    transport_errors: int = 0  # consecutive, reset on a successful fetch

    def summary(self) -> str:
        """One-line counter summary for debug logging."""
        return (
            f"cycles={self.cycles} fetches={self.fetches} accepted={self.accepted} "
            f"accept_failures={self.accept_failures} refreshes={self.auth_refreshes} "
            f"transport_errors={self.transport_errors} pending={len(self.pending)}"
        )
