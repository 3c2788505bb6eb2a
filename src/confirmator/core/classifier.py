"""Accept/skip decision for a confirmation under an accept policy."""

from confirmator.core.types import AcceptPolicy, ConfirmationType, Decision

_REQUIRED_FLAG: dict[ConfirmationType, AcceptPolicy] = {
    ConfirmationType.TRADE: AcceptPolicy.TRADES,
    ConfirmationType.MARKET_SELL_TRANSACTION: AcceptPolicy.MARKET_SALES,
    ConfirmationType.UNKNOWN: AcceptPolicy.OTHER,
}


def classify(conf_type: ConfirmationType, policy: AcceptPolicy) -> Decision:
    """Return ACCEPT iff the policy includes the flag for this type."""
    required = _REQUIRED_FLAG.get(conf_type, AcceptPolicy.OTHER)
    return Decision.ACCEPT if policy & required else Decision.SKIP
