"""Pytest configuration and shared fixtures."""

from collections.abc import Sequence

import pytest

from confirmator.core.types import ConfirmationType
from confirmator.errors import AuthExpiredError
from confirmator.session.base import AccountSession
from confirmator.session.models import Confirmation


def make_confirmation(
    conf_id: int,
    conf_type: ConfirmationType = ConfirmationType.TRADE,
    description: str = "",
) -> Confirmation:
    """Build a confirmation with predictable fields."""
    return Confirmation(
        id=conf_id,
        key=f"k{conf_id}",
        type=conf_type,
        description=description or f"{conf_type.value} #{conf_id}",
        creator_id=1000 + conf_id if conf_type == ConfirmationType.TRADE else 0,
    )


class FakeSession(AccountSession):
    """Scripted session recording every call.

    ``fetch_results`` is consumed one entry per fetch; an entry that is an
    exception instance is raised instead of returned. When exhausted,
    fetches return an empty list.
    """

    def __init__(self, fetch_results=(), accept_results=(), refresh_error: Exception | None = None):
        self.fetch_results = list(fetch_results)
        self.accept_results = list(accept_results)
        self.refresh_error = refresh_error
        self.fetch_calls = 0
        self.refresh_calls = 0
        self.accept_batches: list[list[Confirmation]] = []

    @property
    def identity(self) -> str:
        return "76561198000000001"

    async def refresh_session(self) -> None:
        self.refresh_calls += 1
        if self.refresh_error is not None:
            raise self.refresh_error

    async def fetch_confirmations(self) -> Sequence[Confirmation] | None:
        self.fetch_calls += 1
        if not self.fetch_results:
            return []
        result = self.fetch_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def accept_multiple_confirmations(self, batch: Sequence[Confirmation]) -> bool:
        self.accept_batches.append(list(batch))
        if not self.accept_results:
            return True
        result = self.accept_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class RecordingSleep:
    """Stand-in for asyncio.sleep that returns immediately."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
def trades():
    """Three trade confirmations, oldest first."""
    return [make_confirmation(i) for i in range(1, 4)]


@pytest.fixture
def auth_expired():
    return AuthExpiredError("session token expired")
