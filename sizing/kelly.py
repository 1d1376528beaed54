"""Kelly criterion sizing for binary prediction-market contracts.

With win probability ``p``, price ``c`` and net odds ``b = 1/c - 1``, the
full Kelly stake is ``f* = (b*p - q) / b``. For a binary contract this
reduces to ``(p - c) / (1 - c)``, which is what we evaluate: it is exactly
zero whenever the model agrees with the market, and it never divides by
the share price.
"""

from loguru import logger

from data.errors import ErrorKind, SizingError
from data.models import MarketSignal, SizingRecommendation, check_bankroll, check_kelly_fraction
from sizing.advice import KELLY_ADVICE, ThresholdTable
from sizing.price_math import price


def full_kelly_percent(model_probability: float, market_odds: float) -> float:
    """Unclamped full Kelly stake as a percentage of bankroll.
    
    Negative when the model gives the contract less than the market does.
    
    Raises:
        SizingError: ZERO_PRICE at 0 odds, INVALID_MARKET_ODDS at 100 odds
    """
    # A contract priced at 1 pays nothing on a win: b == 0
    if price(market_odds) >= 1:
        raise SizingError(ErrorKind.INVALID_MARKET_ODDS, "market_odds of 100 leaves no payout on a win")
    return (model_probability - market_odds) / (100 - market_odds) * 100


def fraction_label(kelly_fraction: float) -> str:
    """Human name for a Kelly multiplier."""
    if kelly_fraction == 1:
        return "Full"
    if kelly_fraction == 0.5:
        return "Half"
    if kelly_fraction == 0.25:
        return "Quarter"
    return f"{kelly_fraction * 100:.0f}%"


def size_kelly(
    signal: MarketSignal,
    bankroll: float,
    kelly_fraction: float = 1.0,
    table: ThresholdTable = KELLY_ADVICE,
) -> SizingRecommendation:
    """Calculate the fractional Kelly stake for a signal.
    
    A negative Kelly stake (a losing bet) is clamped to zero: "no bet",
    never a negative stake.
    
    Args:
        signal: Signal being sized
        bankroll: Total capital to size against
        kelly_fraction: Multiplier on full Kelly (1 = full, 0.25 = quarter)
        table: Advice ladder for the resulting percentage
        
    Returns:
        SizingRecommendation with stake percentage and amount
    """
    check_bankroll(bankroll)
    check_kelly_fraction(kelly_fraction)
    
    full = full_kelly_percent(signal.model_probability, signal.market_odds)
    adjusted = max(0.0, full * kelly_fraction)
    bet = adjusted / 100 * bankroll
    
    recommendation = SizingRecommendation(
        full_kelly_percent=full,
        kelly_percentage=adjusted,
        kelly_fraction=kelly_fraction,
        fraction_label=fraction_label(kelly_fraction),
        bankroll=bankroll,
        recommended_bet=bet,
        advice_label=table.classify(adjusted),
    )
    
    logger.debug(
        f"Kelly sized | Edge: {signal.edge:+.1f}pt | Full: {full:.2f}% | "
        f"{recommendation.fraction_label}: {adjusted:.2f}% | Bet: ${bet:.2f} | "
        f"{recommendation.advice_label}"
    )
    
    return recommendation
