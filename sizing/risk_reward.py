"""Risk/reward analysis of a binary contract position."""

from loguru import logger

from data.errors import ErrorKind
from data.models import MarketSignal, RiskRewardAnalysis, check_investment
from sizing.advice import EDGE_STRENGTH, RISK_REWARD, ThresholdTable
from sizing.price_math import ensure_finite, expected_value, payout_expected_value, shares_for


def analyze_risk_reward(
    signal: MarketSignal,
    investment: float,
    reward_table: ThresholdTable = RISK_REWARD,
    edge_table: ThresholdTable = EDGE_STRENGTH,
) -> RiskRewardAnalysis:
    """Compare what a position can win against what it can lose.
    
    The loss branch is always the whole stake. The bet is favorable when
    the expected value is strictly positive.
    
    Args:
        signal: Signal providing market odds and model probability
        investment: Amount staked
        reward_table: Ladder for the risk/reward ratio
        edge_table: Ladder for the edge in points
        
    Returns:
        RiskRewardAnalysis for the stake
    """
    check_investment(investment)
    
    shares = shares_for(investment, signal.market_odds)
    profit = shares * 1 - investment
    loss = -investment
    ratio = abs(profit / loss)
    ev = expected_value(signal.model_probability, signal.market_odds, investment)
    roi = profit / investment * 100
    expected_roi = ev / investment * 100
    ensure_finite(ErrorKind.INVALID_INVESTMENT, ratio=ratio, roi_if_win=roi, expected_roi=expected_roi)
    
    analysis = RiskRewardAnalysis(
        investment=investment,
        shares=shares,
        potential_payout=shares * 1,
        profit_if_win=profit,
        roi_if_win=roi,
        expected_value=ev,
        payout_expected_value=payout_expected_value(signal.model_probability, shares, investment),
        expected_roi=expected_roi,
        risk_reward_ratio=ratio,
        edge=signal.edge,
        reward_label=reward_table.classify(ratio),
        edge_label=edge_table.classify(signal.edge),
    )
    
    logger.debug(
        f"Risk/reward | Win: ${profit:.2f} | Lose: ${loss:.2f} | Ratio: {ratio:.2f} "
        f"({analysis.reward_label}) | EV: ${ev:+.2f} | "
        f"{'Favorable' if analysis.is_favorable else 'Unfavorable'}"
    )
    
    return analysis
