"""Sizing module for position sizing and risk analysis calculators."""

from .advice import ThresholdTable, Bucket, DEFAULT_TABLES, classify, load_tables
from .position_sizer import size_position
from .kelly import size_kelly, full_kelly_percent
from .risk_reward import analyze_risk_reward
from .stop_loss import plan_stop_loss
from .portfolio_impact import simulate_portfolio_impact
from .engine import SizingEngine, SizingDefaults, Recommendation

__all__ = [
    # Advice
    "ThresholdTable",
    "Bucket",
    "DEFAULT_TABLES",
    "classify",
    "load_tables",
    # Calculators
    "size_position",
    "size_kelly",
    "full_kelly_percent",
    "analyze_risk_reward",
    "plan_stop_loss",
    "simulate_portfolio_impact",
    # Facade
    "SizingEngine",
    "SizingDefaults",
    "Recommendation",
]
