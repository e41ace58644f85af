"""Fee reserve applied to the native currency balance."""

# 0.1 XYM in micro-XYM. A single-mosaic transfer is 176 bytes, so this covers
# its fee up to a multiplier of about 550. Fixed, not derived from live fees.
DEFAULT_NATIVE_RESERVE = 100_000


def sendable(balance: int, reserve: int = DEFAULT_NATIVE_RESERVE) -> int:
    """Return the part of ``balance`` that can leave the account.

    Both values are in the currency's smallest unit. The reserve stays behind
    to pay transfer fees; a balance at or below the reserve leaves nothing to
    send.
    """
    if reserve < 0:
        raise ValueError("Reserve must not be negative")
    return balance - reserve if balance > reserve else 0
