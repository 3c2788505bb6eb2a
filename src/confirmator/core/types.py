"""Global type definitions."""

from enum import Enum, Flag


class ConfirmationType(str, Enum):
    """Kind of action a confirmation approves."""

    TRADE = "trade"
    MARKET_SELL_TRANSACTION = "market_sell_transaction"
    UNKNOWN = "unknown"


class AcceptPolicy(Flag):
    """Set of confirmation kinds this run may approve automatically."""

    NONE = 0
    TRADES = 1
    MARKET_SALES = 1 << 1
    OTHER = 1 << 2
    ALL = TRADES | MARKET_SALES | OTHER

    @classmethod
    def from_flags(cls, trades: bool = False, market: bool = False, other: bool = False) -> "AcceptPolicy":
        """Build a policy from individual selections.

        An empty selection means "accept everything", never "accept nothing".
        """
        policy = cls.NONE
        if trades:
            policy |= cls.TRADES
        if market:
            policy |= cls.MARKET_SALES
        if other:
            policy |= cls.OTHER
        return policy or cls.ALL

    def describe(self) -> str:
        """Human readable list of accepted kinds, e.g. "market trades"."""
        parts = []
        if self & AcceptPolicy.MARKET_SALES:
            parts.append("market")
        if self & AcceptPolicy.TRADES:
            parts.append("trades")
        if self & AcceptPolicy.OTHER:
            parts.append("others")
        return " ".join(parts) if parts else "nothing"


class Decision(str, Enum):
    """Classifier outcome for a single confirmation."""

    ACCEPT = "accept"
    SKIP = "skip"
