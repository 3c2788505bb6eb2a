"""Confirmation harvesting and adaptive batch-acceptance loop.

Each cycle:
1. Waits ``next_delay_seconds`` (skipped when zero)
2. Takes the deferred overflow as its working set, or fetches a new one
3. Classifies in fetch order, filling one batch of at most MAX_BATCH_SIZE
   and deferring everything past the bound to the next cycle
4. Accepts the batch in a single remote call
5. Picks the next delay: idle delay normally, the shorter accept-retry
   delay after overflow, a failed accept or a session refresh
"""

from collections.abc import Sequence
from typing import NoReturn

from confirmator.core.classifier import classify
from confirmator.core.interval import format_interval
from confirmator.core.state import ScheduleState
from confirmator.core.ticker import WaitTicker
from confirmator.core.types import AcceptPolicy, Decision
from confirmator.errors import AuthExpiredError, TransportError
from confirmator.logging import get_logger
from confirmator.session.base import AccountSession
from confirmator.session.models import Confirmation

MAX_BATCH_SIZE = 10


def _plural(count: int) -> str:
    return "s" if count != 1 else ""


def partition(
    confirmations: Sequence[Confirmation],
    policy: AcceptPolicy,
    max_batch: int = MAX_BATCH_SIZE,
) -> tuple[list[Confirmation], list[Confirmation]]:
    """Split a working set into (batch, overflow).

    Items are visited in order. Once the batch is full every remaining
    item goes to overflow unclassified; before that, accepted items join
    the batch and skipped items are dropped.
    """
    batch: list[Confirmation] = []
    overflow: list[Confirmation] = []
    for conf in confirmations:
        if len(batch) >= max_batch:
            overflow.append(conf)
        elif classify(conf.type, policy) == Decision.ACCEPT:
            batch.append(conf)
    return batch, overflow


class BatchScheduler:
    """Drives one account: fetch, classify, accept, wait, forever."""

    def __init__(
        self,
        session: AccountSession,
        policy: AcceptPolicy,
        idle_delay_seconds: int = 60,
        accept_retry_delay_seconds: int = 15,
        transport_error_threshold: int = 0,
        ticker: WaitTicker | None = None,
    ) -> None:
        """Initialize scheduler.

        Args:
            session: Account session used for all remote calls
            policy: Confirmation kinds to accept
            idle_delay_seconds: Wait after a cycle with nothing left to do
            accept_retry_delay_seconds: Wait before revisiting overflow, a
                failed accept or a refreshed session (capped by the idle delay)
            transport_error_threshold: 0 makes transport errors fatal; N > 0
                retries them and refreshes the session every N in a row
            ticker: Pacing primitive (default: silent ticker on asyncio.sleep)
        """
        self._session = session
        self._policy = policy or AcceptPolicy.ALL
        self._idle_delay = max(idle_delay_seconds, 0)
        self._accept_retry_delay = max(accept_retry_delay_seconds, 0)
        self._transport_error_threshold = max(transport_error_threshold, 0)
        self._ticker = ticker or WaitTicker()
        self._logger = get_logger(f"account.{session.identity}")

    @property
    def policy(self) -> AcceptPolicy:
        return self._policy

    @property
    def retry_delay(self) -> int:
        """Shortened delay, never longer than the idle delay."""
        return min(self._accept_retry_delay, self._idle_delay)

    async def start(self) -> ScheduleState:
        """Announce the account, refresh its session and create loop state."""
        self._logger.info(
            f"Starting account '{self._session.identity}'. Accepting: {self._policy.describe()}."
        )
        self._logger.info("Refreshing session...")
        await self._session.refresh_session()
        return ScheduleState()

    async def run_forever(self, state: ScheduleState | None = None) -> NoReturn:
        """Run cycles until the task is cancelled or a fatal error propagates."""
        if state is None:
            state = await self.start()
        while True:
            state = await self.run_cycle(state)

    async def run_cycle(self, state: ScheduleState) -> ScheduleState:
        """Execute exactly one scheduling cycle."""
        state.cycles += 1

        if state.next_delay_seconds > 0:
            self._logger.info(f"Please wait... {format_interval(state.next_delay_seconds)}")
            await self._ticker.wait(state.next_delay_seconds)
        state.next_delay_seconds = self._idle_delay

        if state.pending:
            working = state.pending
            state.pending = []
            self._logger.info(f"Processing {len(working)} deferred confirmation{_plural(len(working))}")
        else:
            fetched = await self._fetch(state)
            if fetched is None:
                return state
            if not fetched:
                self._logger.info("Nothing to confirm.")
                return state
            working = fetched

        batch, overflow = partition(working, self._policy)
        state.pending = overflow
        if not batch:
            self._logger.info("Nothing to confirm.")
            self._logger.debug(state.summary())
            return state

        for conf in batch:
            offer = f" offerID:{conf.creator_id}" if conf.is_trade else ""
            self._logger.info(f"\t{conf.id}: {conf.description}{offer}")

        await self._accept(state, batch, len(working))

        if state.pending:
            state.next_delay_seconds = self.retry_delay
        self._logger.debug(state.summary())
        return state

    async def _fetch(self, state: ScheduleState) -> list[Confirmation] | None:
        """Fetch a working set; None means the cycle ended on a handled error."""
        self._logger.info("Fetching confirmations...")
        try:
            confirmations = await self._session.fetch_confirmations()
        except AuthExpiredError as e:
            self._logger.warning(f"Fetching confirmations failed: {e}", exc_info=True)
            await self._refresh(state)
            return None
        except TransportError as e:
            if not self._transport_error_threshold:
                raise
            state.transport_errors += 1
            self._logger.warning(
                f"Fetching confirmations failed "
                f"({state.transport_errors}/{self._transport_error_threshold}): {e}",
                exc_info=True,
            )
            if state.transport_errors >= self._transport_error_threshold:
                state.transport_errors = 0
                await self._refresh(state)
            state.next_delay_seconds = self.retry_delay
            return None

        state.fetches += 1
        state.transport_errors = 0
        fetched = list(confirmations or [])
        if fetched:
            self._logger.info(f"Got {len(fetched)} confirmation{_plural(len(fetched))}")
        return fetched

    async def _accept(self, state: ScheduleState, batch: list[Confirmation], total: int) -> None:
        self._logger.info(
            f"Accepting {len(batch)} out of {total} confirmation{_plural(total)}..."
        )
        try:
            ok = await self._session.accept_multiple_confirmations(batch)
        except AuthExpiredError as e:
            self._logger.warning(f"Accepting confirmations failed: {e}", exc_info=True)
            state.accept_failures += 1
            await self._refresh(state)
            return

        if ok:
            state.accepted += len(batch)
            self._logger.info("Accept success!")
        else:
            state.accept_failures += 1
            self._logger.warning("Accept failed!")
            state.next_delay_seconds = self.retry_delay

    async def _refresh(self, state: ScheduleState) -> None:
        """Refresh the session; a RefreshError propagates."""
        self._logger.info("Refreshing session...")
        await self._session.refresh_session()
        state.auth_refreshes += 1
        state.next_delay_seconds = self.retry_delay


async def run_scheduler_loop(
    policy: AcceptPolicy,
    idle_delay_seconds: int,
    session: AccountSession,
    accept_retry_delay_seconds: int = 15,
    transport_error_threshold: int = 0,
    ticker: WaitTicker | None = None,
) -> NoReturn:
    """Run the acceptance loop for one account. Never returns normally."""
    scheduler = BatchScheduler(
        session,
        policy,
        idle_delay_seconds=idle_delay_seconds,
        accept_retry_delay_seconds=accept_retry_delay_seconds,
        transport_error_threshold=transport_error_threshold,
        ticker=ticker,
    )
    await scheduler.run_forever()
