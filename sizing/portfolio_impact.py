"""Portfolio impact simulation for a single position."""

from loguru import logger

from data.errors import ErrorKind, SizingError
from data.models import MarketSignal, PortfolioImpact, check_bankroll, check_investment
from sizing.advice import PORTFOLIO_RISK, ThresholdTable
from sizing.price_math import ensure_finite, expected_value, shares_for


def simulate_portfolio_impact(
    signal: MarketSignal,
    investment: float,
    bankroll: float,
    table: ThresholdTable = PORTFOLIO_RISK,
) -> PortfolioImpact:
    """Project how a position changes the portfolio it is drawn from.
    
    Portfolio risk assumes the position is lost in full. Scenario values
    cover a win, a total loss and the expected outcome.
    
    Args:
        signal: Signal providing market odds and model probability
        investment: Amount staked
        bankroll: Portfolio value before the position
        table: Ladder for the portfolio risk percent
        
    Returns:
        PortfolioImpact
        
    Raises:
        SizingError: INVALID_INVESTMENT, INVALID_BANKROLL or ZERO_PRICE
    """
    check_investment(investment)
    check_bankroll(bankroll)
    
    shares = shares_for(investment, signal.market_odds)
    profit = shares * 1 - investment
    ev = expected_value(signal.model_probability, signal.market_odds, investment)
    
    projected_value = bankroll + ev
    ensure_finite(
        ErrorKind.INVALID_BANKROLL,
        projected_portfolio_value=projected_value,
        portfolio_value_if_win=bankroll + profit,
    )
    if projected_value <= 0:
        raise SizingError(
            ErrorKind.INVALID_BANKROLL,
            f"bankroll ${bankroll:.2f} is fully consumed by the expected loss ${ev:.2f}",
        )
    
    risk_percent = investment / bankroll * 100
    bucket = table.bucket_for(risk_percent)
    
    impact = PortfolioImpact(
        bankroll=bankroll,
        expected_value=ev,
        current_allocation_percent=investment / bankroll * 100,
        projected_allocation_percent=investment / projected_value * 100,
        portfolio_risk_percent=risk_percent,
        expected_portfolio_return_percent=ev / bankroll * 100,
        portfolio_value_if_win=bankroll + profit,
        portfolio_value_if_loss=bankroll - investment,
        projected_portfolio_value=projected_value,
        risk_tier=bucket.label,
        guidance=bucket.guidance,
    )
    
    logger.debug(
        f"Portfolio impact | ${investment:.2f} of ${bankroll:.2f} | "
        f"Risk: {risk_percent:.2f}% ({impact.risk_tier}) | "
        f"Expected return: {impact.expected_portfolio_return_percent:+.2f}%"
    )
    
    return impact
