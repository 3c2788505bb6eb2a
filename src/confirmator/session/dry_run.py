"""Dry run session - simulates confirmations without touching the network."""

import itertools
import logging
from collections.abc import Iterable, Sequence

from confirmator.core.types import ConfirmationType
from confirmator.session.base import AccountSession
from confirmator.session.models import AccountCredentials, Confirmation

logger = logging.getLogger(__name__)

_SEED_CYCLE = (
    (ConfirmationType.TRADE, "Trade offer"),
    (ConfirmationType.MARKET_SELL_TRANSACTION, "Market listing"),
    (ConfirmationType.UNKNOWN, "Account action"),
)


class DryRunSession(AccountSession):
    """Local simulation of an account session.

    Holds a list of pending confirmations; fetching returns them oldest
    first and accepting removes them. Useful for trying out policies and
    delays without an authenticator.
    """

    def __init__(
        self,
        identity: str = "dry-run",
        confirmations: Iterable[Confirmation] = (),
    ) -> None:
        self._identity = identity
        self._pending: list[Confirmation] = list(confirmations)
        self._accepted: list[Confirmation] = []
        self._refresh_count = 0
        logger.info(f"[DRY RUN] Session for {identity} with {len(self._pending)} pending confirmations")

    @classmethod
    def from_credentials(cls, credentials: AccountCredentials, seed: int = 0) -> "DryRunSession":
        """Create a session seeded with ``seed`` synthetic confirmations."""
        return cls(identity=credentials.identity, confirmations=generate_confirmations(seed))

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def accepted(self) -> list[Confirmation]:
        return list(self._accepted)

    @property
    def refresh_count(self) -> int:
        return self._refresh_count

    def add(self, *confirmations: Confirmation) -> None:
        """Queue more confirmations, as if they appeared remotely."""
        self._pending.extend(confirmations)

    async def refresh_session(self) -> None:
        self._refresh_count += 1
        logger.info("[DRY RUN] Session refreshed")

    async def fetch_confirmations(self) -> Sequence[Confirmation]:
        return list(self._pending)

    async def accept_multiple_confirmations(self, batch: Sequence[Confirmation]) -> bool:
        ids = {conf.id for conf in batch}
        self._accepted.extend(conf for conf in self._pending if conf.id in ids)
        self._pending = [conf for conf in self._pending if conf.id not in ids]
        logger.info(f"[DRY RUN] Accepted {len(ids)} confirmations, {len(self._pending)} left")
        return True


def generate_confirmations(count: int, start_id: int = 1) -> list[Confirmation]:
    """Synthetic confirmations cycling through trade, market and other."""
    confirmations = []
    for offset, (conf_type, label) in zip(range(count), itertools.cycle(_SEED_CYCLE)):
        conf_id = start_id + offset
        confirmations.append(
            Confirmation(
                id=conf_id,
                key=f"dry{conf_id}",
                type=conf_type,
                description=f"{label} #{conf_id}",
                creator_id=900000 + conf_id if conf_type == ConfirmationType.TRADE else 0,
            )
        )
    return confirmations
