"""Stateless facade over the sizing calculators.

Holds nothing but threshold tables and defaults, so one engine can be
shared freely between callers. ``recommend`` runs every calculator on a
single PositionRequest, the way a dashboard panel shares one investment
across its tabs.
"""

import os
from dataclasses import dataclass, field
from typing import Optional
from loguru import logger
from pydantic import BaseModel

from data.errors import SizingError
from data.models import (
    MarketSignal,
    PortfolioImpact,
    PositionOutcome,
    PositionRequest,
    RiskRewardAnalysis,
    SizingRecommendation,
    StopLossPlan,
)
from sizing.advice import DEFAULT_TABLES, ThresholdTable, load_tables
from sizing.kelly import size_kelly
from sizing.portfolio_impact import simulate_portfolio_impact
from sizing.position_sizer import size_position
from sizing.risk_reward import analyze_risk_reward
from sizing.stop_loss import plan_stop_loss


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class SizingDefaults:
    """Configurable defaults for requests that leave fields out."""
    bankroll: float = 10000.0
    kelly_fraction: float = 1.0  # Full Kelly
    stop_loss_percent: float = 20.0
    advice_tables_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "SizingDefaults":
        """Read defaults from SIZING_* environment variables."""
        return cls(
            bankroll=_env_float("SIZING_BANKROLL", cls.bankroll),
            kelly_fraction=_env_float("SIZING_KELLY_FRACTION", cls.kelly_fraction),
            stop_loss_percent=_env_float("SIZING_STOP_LOSS_PERCENT", cls.stop_loss_percent),
            advice_tables_path=os.getenv("SIZING_ADVICE_TABLES") or None,
        )


class Recommendation(BaseModel):
    """Every calculator's result for one request.
    
    A calculator that could not run leaves its slot as None and records
    the error under its operation name.
    """
    request: PositionRequest
    position: Optional[PositionOutcome] = None
    risk_reward: Optional[RiskRewardAnalysis] = None
    kelly: Optional[SizingRecommendation] = None
    stop_loss: Optional[StopLossPlan] = None
    portfolio: Optional[PortfolioImpact] = None
    errors: dict[str, str] = {}

    model_config = {"frozen": True}


@dataclass
class SizingEngine:
    """Facade exposing the five sizing operations."""
    defaults: SizingDefaults = field(default_factory=SizingDefaults)
    tables: dict[str, ThresholdTable] = field(default_factory=lambda: dict(DEFAULT_TABLES))

    @classmethod
    def from_defaults(cls, defaults: SizingDefaults) -> "SizingEngine":
        """Build an engine, loading custom advice tables if configured."""
        if defaults.advice_tables_path:
            return cls(defaults=defaults, tables=load_tables(defaults.advice_tables_path))
        return cls(defaults=defaults)

    def build_request(
        self,
        model_probability: float,
        market_odds: float,
        investment: float,
        bankroll: Optional[float] = None,
        kelly_fraction: Optional[float] = None,
        stop_loss_percent: Optional[float] = None,
    ) -> PositionRequest:
        """Build a validated request, filling gaps from the defaults."""
        return PositionRequest(
            signal=MarketSignal(model_probability=model_probability, market_odds=market_odds),
            investment=investment,
            bankroll=bankroll if bankroll is not None else self.defaults.bankroll,
            kelly_fraction=kelly_fraction if kelly_fraction is not None else self.defaults.kelly_fraction,
            stop_loss_percent=(
                stop_loss_percent if stop_loss_percent is not None else self.defaults.stop_loss_percent
            ),
        )

    def size_position(
        self, investment: float, market_odds: float, model_probability: float
    ) -> PositionOutcome:
        signal = MarketSignal(model_probability=model_probability, market_odds=market_odds)
        return size_position(signal, investment)

    def size_kelly(
        self,
        model_probability: float,
        market_odds: float,
        kelly_fraction: float,
        bankroll: float,
    ) -> SizingRecommendation:
        signal = MarketSignal(model_probability=model_probability, market_odds=market_odds)
        return size_kelly(signal, bankroll, kelly_fraction, table=self.tables["kelly_advice"])

    def analyze_risk_reward(
        self, investment: float, model_probability: float, market_odds: float
    ) -> RiskRewardAnalysis:
        signal = MarketSignal(model_probability=model_probability, market_odds=market_odds)
        return analyze_risk_reward(
            signal,
            investment,
            reward_table=self.tables["risk_reward"],
            edge_table=self.tables["edge_strength"],
        )

    def plan_stop_loss(
        self, investment: float, market_odds: float, stop_loss_percent: float
    ) -> StopLossPlan:
        return plan_stop_loss(market_odds, investment, stop_loss_percent, table=self.tables["stop_loss_risk"])

    def simulate_portfolio_impact(
        self,
        investment: float,
        bankroll: float,
        model_probability: float,
        market_odds: float,
    ) -> PortfolioImpact:
        signal = MarketSignal(model_probability=model_probability, market_odds=market_odds)
        return simulate_portfolio_impact(
            signal, investment, bankroll, table=self.tables["portfolio_risk"]
        )

    def recommend(self, request: PositionRequest) -> Recommendation:
        """Run every calculator against one shared request.
        
        Args:
            request: Validated request shared by all calculators
            
        Returns:
            Recommendation with one slot per calculator
        """
        signal = request.signal
        bankroll = request.bankroll if request.bankroll is not None else self.defaults.bankroll
        
        operations = {
            "position": lambda: size_position(signal, request.investment),
            "risk_reward": lambda: analyze_risk_reward(
                signal,
                request.investment,
                reward_table=self.tables["risk_reward"],
                edge_table=self.tables["edge_strength"],
            ),
            "kelly": lambda: size_kelly(
                signal, bankroll, request.kelly_fraction, table=self.tables["kelly_advice"]
            ),
            "stop_loss": lambda: plan_stop_loss(
                signal.market_odds,
                request.investment,
                request.stop_loss_percent,
                table=self.tables["stop_loss_risk"],
            ),
            "portfolio": lambda: simulate_portfolio_impact(
                signal, request.investment, bankroll, table=self.tables["portfolio_risk"]
            ),
        }
        
        results: dict[str, BaseModel] = {}
        errors: dict[str, str] = {}
        for name, operation in operations.items():
            try:
                results[name] = operation()
            except SizingError as e:
                logger.warning(f"No {name} recommendation available | {e}")
                errors[name] = str(e)
        
        return Recommendation(request=request, errors=errors, **results)
