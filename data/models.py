"""Pydantic V2 models for the position sizing engine.

This module defines the value records shared by every calculator:
- MarketSignal: model probability vs. market-implied probability
- PositionRequest: a sizing request layered on a signal
- PositionOutcome / RiskRewardAnalysis: payoff of a literal investment
- SizingRecommendation: Kelly stake for a bankroll
- StopLossPlan: exit price and capped loss for a stop-loss
- PortfolioImpact: how a position moves a whole portfolio

All percentages are plain numbers in [0, 100]. Records are frozen.
Validators raise ``SizingError`` so callers get the error kind directly;
the ``check_*`` helpers are shared with the calculators.
"""

import math
from typing import Optional
from pydantic import BaseModel, Field, field_validator, computed_field

from data.errors import ErrorKind, SizingError


def _require_finite(v: float, kind: ErrorKind, name: str) -> float:
    if not math.isfinite(v):
        raise SizingError(kind, f"{name} must be a finite number, got {v!r}")
    return v


def check_probability(v: float) -> float:
    """Model probability must be finite and within [0, 100]."""
    _require_finite(v, ErrorKind.INVALID_PROBABILITY, "model_probability")
    if v < 0.0 or v > 100.0:
        raise SizingError(ErrorKind.INVALID_PROBABILITY, f"model_probability must be between 0 and 100, got {v}")
    return v


def check_market_odds(v: float) -> float:
    """Market odds must be finite and within [0, 100]."""
    _require_finite(v, ErrorKind.INVALID_MARKET_ODDS, "market_odds")
    if v < 0.0 or v > 100.0:
        raise SizingError(ErrorKind.INVALID_MARKET_ODDS, f"market_odds must be between 0 and 100, got {v}")
    return v


def check_investment(v: float) -> float:
    """Investment must be a positive, finite amount."""
    _require_finite(v, ErrorKind.INVALID_INVESTMENT, "investment")
    if v <= 0:
        raise SizingError(ErrorKind.INVALID_INVESTMENT, f"investment must be positive, got {v}")
    return v


def check_bankroll(v: Optional[float]) -> float:
    """Bankroll must be present, positive and finite."""
    if v is None:
        raise SizingError(ErrorKind.INVALID_BANKROLL, "bankroll is required for this calculation")
    _require_finite(v, ErrorKind.INVALID_BANKROLL, "bankroll")
    if v <= 0:
        raise SizingError(ErrorKind.INVALID_BANKROLL, f"bankroll must be positive, got {v}")
    return v


def check_kelly_fraction(v: float) -> float:
    """Kelly multiplier must lie in [0, 1]."""
    _require_finite(v, ErrorKind.INVALID_PERCENT, "kelly_fraction")
    if v < 0.0 or v > 1.0:
        raise SizingError(ErrorKind.INVALID_PERCENT, f"kelly_fraction must be between 0 and 1, got {v}")
    return v


def check_stop_loss_percent(v: float) -> float:
    """Stop-loss must lie strictly between 0 and 100."""
    _require_finite(v, ErrorKind.INVALID_PERCENT, "stop_loss_percent")
    if v <= 0.0 or v >= 100.0:
        raise SizingError(
            ErrorKind.INVALID_PERCENT,
            f"stop_loss_percent must be between 0 and 100 (exclusive), got {v}",
        )
    return v


class MarketSignal(BaseModel):
    """The normalized signal under analysis.
    
    Attributes:
        model_probability: Estimated win probability (0-100)
        market_odds: Market-implied probability (0-100), also the share price in cents
    """
    model_probability: float = Field(..., description="Model win probability (0-100)")
    market_odds: float = Field(..., description="Market-implied probability (0-100)")

    @field_validator("model_probability")
    @classmethod
    def validate_probability(cls, v: float) -> float:
        return check_probability(v)

    @field_validator("market_odds")
    @classmethod
    def validate_market_odds(cls, v: float) -> float:
        return check_market_odds(v)

    @computed_field
    @property
    def edge(self) -> float:
        """Model probability minus market-implied probability, in points."""
        return self.model_probability - self.market_odds

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "model_probability": 70.0,
                "market_odds": 50.0,
            }
        },
    }


class PositionRequest(BaseModel):
    """A sizing request layered on a MarketSignal.
    
    The same request is handed to every calculator; each one reads only
    the fields it needs.
    
    Attributes:
        signal: Signal being sized
        investment: Amount the user is considering risking
        bankroll: Total portfolio value (Kelly and portfolio impact only)
        kelly_fraction: Multiplier on full Kelly (0-1)
        stop_loss_percent: Drop below entry that triggers an exit (0-100, exclusive)
    """
    signal: MarketSignal
    investment: float = Field(..., description="Investment in base currency")
    bankroll: Optional[float] = Field(None, description="Total portfolio value")
    kelly_fraction: float = Field(default=1.0, description="Fraction of full Kelly (0-1)")
    stop_loss_percent: float = Field(default=20.0, description="Stop-loss percent below entry")

    @field_validator("investment")
    @classmethod
    def validate_investment(cls, v: float) -> float:
        return check_investment(v)

    @field_validator("bankroll")
    @classmethod
    def validate_bankroll(cls, v: Optional[float]) -> Optional[float]:
        """Bankroll is optional, but positive and finite when given."""
        if v is None:
            return v
        return check_bankroll(v)

    @field_validator("kelly_fraction")
    @classmethod
    def validate_kelly_fraction(cls, v: float) -> float:
        return check_kelly_fraction(v)

    @field_validator("stop_loss_percent")
    @classmethod
    def validate_stop_loss_percent(cls, v: float) -> float:
        return check_stop_loss_percent(v)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "signal": {"model_probability": 70.0, "market_odds": 50.0},
                "investment": 100.0,
                "bankroll": 10000.0,
                "kelly_fraction": 0.25,
                "stop_loss_percent": 20.0,
            }
        },
    }


class PositionOutcome(BaseModel):
    """Payoff of a literal investment in a binary contract.
    
    Each share redeems for exactly 1 unit on a win and 0 on a loss.
    
    Attributes:
        investment: Amount staked
        shares: Shares bought at the market price
        potential_payout: Redemption value on a win
        profit_if_win: Payout minus investment
        roi_if_win: Profit as a percentage of investment
        expected_value: p * profit - (1 - p) * investment
        payout_expected_value: p * payout - (1 - p) * investment (legacy variant)
        expected_roi: Expected value as a percentage of investment
        risk_reward_ratio: |profit / loss|
        edge: Model probability minus market odds, in points
    """
    investment: float
    shares: float
    potential_payout: float
    profit_if_win: float
    roi_if_win: float
    expected_value: float
    payout_expected_value: float
    expected_roi: float
    risk_reward_ratio: float
    edge: float

    @computed_field
    @property
    def loss_if_lose(self) -> float:
        """Loss on a losing contract: the whole stake."""
        return -self.investment

    @computed_field
    @property
    def is_favorable(self) -> bool:
        """Bet has positive expected value."""
        return self.expected_value > 0

    model_config = {"frozen": True}


class RiskRewardAnalysis(PositionOutcome):
    """PositionOutcome with qualitative risk/reward and edge labels."""
    reward_label: str
    edge_label: str


class SizingRecommendation(BaseModel):
    """Kelly-optimal stake for a bankroll.
    
    Attributes:
        full_kelly_percent: Unclamped full Kelly stake (may be negative)
        kelly_percentage: Fractional Kelly stake, clamped at 0
        kelly_fraction: Multiplier applied to full Kelly
        fraction_label: "Full", "Half", "Quarter" or "N%"
        bankroll: Bankroll the stake is sized against
        recommended_bet: kelly_percentage / 100 * bankroll
        advice_label: Qualitative bucket for kelly_percentage
    """
    full_kelly_percent: float
    kelly_percentage: float = Field(..., ge=0.0)
    kelly_fraction: float
    fraction_label: str
    bankroll: float
    recommended_bet: float = Field(..., ge=0.0)
    advice_label: str

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "full_kelly_percent": 40.0,
                "kelly_percentage": 40.0,
                "kelly_fraction": 1.0,
                "fraction_label": "Full",
                "bankroll": 1000.0,
                "recommended_bet": 400.0,
                "advice_label": "Very Large (Risky)",
            }
        },
    }


class StopLossPlan(BaseModel):
    """Exit plan for a stop-loss below the entry price.
    
    Attributes:
        stop_loss_percent: Drop below entry that triggers the exit
        entry_price: Price per share at entry (0-1)
        shares: Shares held
        exit_price: Price at which the stop triggers
        exit_value: Value of the shares sold at the exit price
        max_loss: Loss realized if the stop triggers
        risk_percent: max_loss as a percentage of investment
        risk_tier: Qualitative bucket for risk_percent
        guidance: One-line advice for the tier
    """
    stop_loss_percent: float
    entry_price: float
    shares: float
    exit_price: float
    exit_value: float
    max_loss: float
    risk_percent: float
    risk_tier: str
    guidance: Optional[str] = None

    model_config = {"frozen": True}


class PortfolioImpact(BaseModel):
    """Effect of a position on a whole portfolio.
    
    Attributes:
        bankroll: Portfolio value before the position
        expected_value: Expected profit of the position
        current_allocation_percent: investment / bankroll
        projected_allocation_percent: investment / projected portfolio value
        portfolio_risk_percent: Total loss of the position as a share of bankroll
        expected_portfolio_return_percent: expected_value / bankroll
        portfolio_value_if_win: Bankroll after a win
        portfolio_value_if_loss: Bankroll after a total loss
        projected_portfolio_value: Bankroll plus expected value
        risk_tier: Qualitative bucket for portfolio_risk_percent
        guidance: One-line advice for the tier
    """
    bankroll: float
    expected_value: float
    current_allocation_percent: float
    projected_allocation_percent: float
    portfolio_risk_percent: float
    expected_portfolio_return_percent: float
    portfolio_value_if_win: float
    portfolio_value_if_loss: float
    projected_portfolio_value: float
    risk_tier: str
    guidance: Optional[str] = None

    model_config = {"frozen": True}
