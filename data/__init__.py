"""Data module for sizing engine value records and errors."""

from .errors import ErrorKind, SizingError
from .models import (
    MarketSignal,
    PositionRequest,
    PositionOutcome,
    RiskRewardAnalysis,
    SizingRecommendation,
    StopLossPlan,
    PortfolioImpact,
)

__all__ = [
    "ErrorKind",
    "SizingError",
    "MarketSignal",
    "PositionRequest",
    "PositionOutcome",
    "RiskRewardAnalysis",
    "SizingRecommendation",
    "StopLossPlan",
    "PortfolioImpact",
]
