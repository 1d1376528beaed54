"""Error vocabulary for the sizing engine.

Every calculator raises ``SizingError`` instead of producing NaN or
infinite numbers. The ``kind`` tells the caller which input was rejected.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Reason a calculation was refused."""
    INVALID_PROBABILITY = "INVALID_PROBABILITY"
    INVALID_MARKET_ODDS = "INVALID_MARKET_ODDS"
    ZERO_PRICE = "ZERO_PRICE"
    INVALID_INVESTMENT = "INVALID_INVESTMENT"
    INVALID_BANKROLL = "INVALID_BANKROLL"
    INVALID_PERCENT = "INVALID_PERCENT"


class SizingError(Exception):
    """Raised when a calculation cannot produce a meaningful number.

    Not a ``ValueError`` subclass: pydantic re-wraps ``ValueError`` raised in
    validators, and callers should see the kind directly.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
