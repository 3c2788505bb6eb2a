"""Abstract account session interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from confirmator.session.models import Confirmation


class AccountSession(ABC):
    """Owns the remote session state of one account.

    Implementations perform credential refresh, confirmation listing and
    confirmation acceptance against the remote service. The scheduler
    only relies on the error contract below.
    """

    @property
    @abstractmethod
    def identity(self) -> str:
        """Stable display string, e.g. the account identifier."""
        ...

    @abstractmethod
    async def refresh_session(self) -> None:
        """Refresh the session token.

        Raises:
            RefreshError: The credential itself is invalid
        """
        ...

    @abstractmethod
    async def fetch_confirmations(self) -> Sequence[Confirmation] | None:
        """List pending confirmations, oldest first.

        Raises:
            AuthExpiredError: The session token is stale or invalid
            TransportError: Any other network or protocol failure
        """
        ...

    @abstractmethod
    async def accept_multiple_confirmations(self, batch: Sequence[Confirmation]) -> bool:
        """Accept a batch in a single remote call.

        Returns:
            True if the remote service reported overall success
        """
        ...
