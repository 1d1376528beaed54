"""Shared price conversions for binary prediction-market contracts.

A contract trading at ``market_odds`` percent costs ``market_odds / 100``
per share and redeems for 1 on a win.
"""

import math

from data.errors import ErrorKind, SizingError


def price(market_odds: float) -> float:
    """Convert a market-implied percentage to a price per share.
    
    Raises:
        SizingError: ZERO_PRICE when the price is (or underflows to) 0
    """
    p = market_odds / 100
    if p <= 0:
        raise SizingError(ErrorKind.ZERO_PRICE, f"market_odds of {market_odds} gives a zero share price")
    return p


def ensure_finite(kind: ErrorKind, **values: float) -> None:
    """Raise instead of handing out an infinite or NaN result."""
    for name, value in values.items():
        if not math.isfinite(value):
            raise SizingError(kind, f"{name} is not a finite number ({value})")


def shares_for(investment: float, market_odds: float) -> float:
    """Number of shares ``investment`` buys at ``market_odds``."""
    shares = investment / price(market_odds)
    ensure_finite(ErrorKind.INVALID_INVESTMENT, shares=shares)
    return shares


def decimal_odds(market_odds: float) -> float:
    """Total payout per unit staked on a win."""
    odds = 1 / price(market_odds)
    ensure_finite(ErrorKind.ZERO_PRICE, decimal_odds=odds)
    return odds


def to_percentage(value: float) -> float:
    """Convert a 0-1 price back to the 0-100 convention."""
    return value * 100


def expected_value(probability: float, market_odds: float, investment: float) -> float:
    """Expected profit of a binary contract.
    
    ``p * profit - (1 - p) * investment`` with ``profit = investment / c - investment``
    reduces to ``investment * (p - c) / c``. This is the canonical EV; the
    reduced form is exactly 0 when the model agrees with the market.
    
    Args:
        probability: Win probability (0-100)
        market_odds: Market-implied probability (0-100)
        investment: Stake lost on a loss
    """
    price(market_odds)
    ev = investment * (probability - market_odds) / market_odds
    ensure_finite(ErrorKind.INVALID_INVESTMENT, expected_value=ev)
    return ev


def payout_expected_value(probability: float, payout: float, investment: float) -> float:
    """Legacy EV variant weighing the gross payout instead of the profit.
    
    ``p * payout - (1 - p) * investment``. The stake is already inside
    ``payout``, so this overstates EV by ``p * investment`` compared with
    ``expected_value``. Kept for numbers that must match the old dashboard.
    """
    p = probability / 100
    ev = p * payout - (1 - p) * investment
    ensure_finite(ErrorKind.INVALID_INVESTMENT, payout_expected_value=ev)
    return ev
