"""Position sizer: payoff of a literal investment in a binary contract."""

from loguru import logger

from data.errors import ErrorKind
from data.models import MarketSignal, PositionOutcome, check_investment
from sizing.price_math import ensure_finite, expected_value, payout_expected_value, shares_for


def size_position(signal: MarketSignal, investment: float) -> PositionOutcome:
    """Compute shares, payout, profit and ROI for ``investment``.
    
    Each share redeems for exactly 1 on a win, so the payout equals the
    share count.
    
    Args:
        signal: Signal providing market odds and model probability
        investment: Amount staked
        
    Returns:
        PositionOutcome for the stake
        
    Raises:
        SizingError: INVALID_INVESTMENT or ZERO_PRICE
    """
    check_investment(investment)
    
    shares = shares_for(investment, signal.market_odds)
    payout = shares * 1
    profit = payout - investment
    ev = expected_value(signal.model_probability, signal.market_odds, investment)
    roi = profit / investment * 100
    expected_roi = ev / investment * 100
    ensure_finite(ErrorKind.INVALID_INVESTMENT, roi_if_win=roi, expected_roi=expected_roi)
    
    outcome = PositionOutcome(
        investment=investment,
        shares=shares,
        potential_payout=payout,
        profit_if_win=profit,
        roi_if_win=roi,
        expected_value=ev,
        payout_expected_value=payout_expected_value(signal.model_probability, payout, investment),
        expected_roi=expected_roi,
        risk_reward_ratio=abs(profit / -investment),
        edge=signal.edge,
    )
    
    logger.debug(
        f"Position sized | ${investment:.2f} @ {signal.market_odds:.1f}% | "
        f"Shares: {shares:.2f} | Profit if win: ${profit:.2f} | EV: ${ev:+.2f}"
    )
    
    return outcome
