"""Stop-loss planning: exit price and the loss it locks in."""

from loguru import logger

from data.errors import ErrorKind
from data.models import StopLossPlan, check_investment, check_market_odds, check_stop_loss_percent
from sizing.advice import STOP_LOSS_RISK, ThresholdTable
from sizing.price_math import ensure_finite, price


def plan_stop_loss(
    market_odds: float,
    investment: float,
    stop_loss_percent: float,
    table: ThresholdTable = STOP_LOSS_RISK,
) -> StopLossPlan:
    """Compute the stop price and the maximum loss if it triggers.
    
    The stop-loss percent is a cap on the loss, not a floor: a wider stop
    always means a larger loss when it fires. Selling ``investment / entry``
    shares at ``entry * (1 - s)`` loses exactly ``investment * s``, so the
    loss is taken from that product rather than from a subtraction.
    
    Args:
        market_odds: Market-implied probability at entry (0-100)
        investment: Amount staked
        stop_loss_percent: Drop below entry that triggers the exit (0-100)
        table: Ladder for the resulting risk percent
        
    Returns:
        StopLossPlan
    """
    check_market_odds(market_odds)
    check_investment(investment)
    check_stop_loss_percent(stop_loss_percent)
    
    entry_price = price(market_odds)
    shares = investment / entry_price
    stop_price = entry_price * (1 - stop_loss_percent / 100)
    max_loss = investment * stop_loss_percent / 100
    exit_value = investment - max_loss
    risk_percent = stop_loss_percent
    ensure_finite(ErrorKind.INVALID_INVESTMENT, shares=shares, max_loss=max_loss)
    
    bucket = table.bucket_for(risk_percent)
    plan = StopLossPlan(
        stop_loss_percent=stop_loss_percent,
        entry_price=entry_price,
        shares=shares,
        exit_price=stop_price,
        exit_value=exit_value,
        max_loss=max_loss,
        risk_percent=risk_percent,
        risk_tier=bucket.label,
        guidance=bucket.guidance,
    )
    
    logger.debug(
        f"Stop-loss planned | Entry: {entry_price:.4f} | Stop: {stop_price:.4f} | "
        f"Max loss: ${max_loss:.2f} ({risk_percent:.1f}%) | {plan.risk_tier}"
    )
    
    return plan
