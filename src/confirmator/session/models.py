"""Session layer data models."""

from dataclasses import dataclass, field
from typing import Any

from confirmator.core.types import ConfirmationType


@dataclass(frozen=True)
class Confirmation:
    """A pending remote action awaiting approval."""

    id: int
    key: str
    type: ConfirmationType = ConfirmationType.UNKNOWN
    description: str = ""
    creator_id: int = 0  # trade offer ID for trades

    @property
    def is_trade(self) -> bool:
        return self.type == ConfirmationType.TRADE


@dataclass
class SessionData:
    """Session block stored in the credential file."""

    steam_id: int = 0
    session_id: str = ""
    steam_login: str = ""
    steam_login_secure: str = ""
    oauth_token: str = ""


@dataclass
class AccountCredentials:
    """Authenticator credentials for one account."""

    account_name: str
    shared_secret: str = ""
    identity_secret: str = ""
    device_id: str = ""
    session: SessionData = field(default_factory=SessionData)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def steam_id(self) -> int:
        return self.session.steam_id

    @property
    def identity(self) -> str:
        """Stable display string for logs and the terminal title."""
        if self.session.steam_id:
            return str(self.session.steam_id)
        return self.account_name
