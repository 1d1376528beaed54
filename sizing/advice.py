"""Advice classifier: numeric outputs to qualitative labels.

Thresholds live in versioned ``ThresholdTable`` records instead of inline
if/else ladders, so they can be tuned (or loaded from JSON) without
touching the calculators.
"""

import json
import math
from pathlib import Path
from typing import Optional, Union
from loguru import logger
from pydantic import BaseModel, Field, model_validator


class Bucket(BaseModel):
    """One rung of a threshold ladder.
    
    A value falls in this bucket when it is below ``upper`` (or equal to
    it when ``inclusive`` is set) and did not match an earlier rung.
    """
    upper: float
    label: str
    inclusive: bool = False
    guidance: Optional[str] = None

    def matches(self, value: float) -> bool:
        if self.inclusive:
            return value <= self.upper
        return value < self.upper

    model_config = {"frozen": True}


class Fallback(BaseModel):
    """Bucket for values above every rung."""
    label: str
    guidance: Optional[str] = None

    model_config = {"frozen": True}


class ThresholdTable(BaseModel):
    """Named, versioned ascending ladder of buckets."""
    name: str
    version: str = "1"
    buckets: tuple[Bucket, ...] = Field(..., min_length=1)
    fallback: Fallback

    @model_validator(mode="after")
    def validate_ascending(self) -> "ThresholdTable":
        """Rungs must be strictly ascending so every value has one bucket."""
        uppers = [b.upper for b in self.buckets]
        if any(math.isnan(u) for u in uppers):
            raise ValueError(f"{self.name}: bucket bounds must not be NaN")
        if any(lo >= hi for lo, hi in zip(uppers, uppers[1:])):
            raise ValueError(f"{self.name}: bucket bounds must be strictly ascending, got {uppers}")
        return self

    def bucket_for(self, value: float) -> Union[Bucket, Fallback]:
        """Return the first bucket (ascending) that ``value`` falls in."""
        if math.isnan(value):
            raise ValueError(f"{self.name}: cannot classify NaN")
        for bucket in self.buckets:
            if bucket.matches(value):
                return bucket
        return self.fallback

    def classify(self, value: float) -> str:
        return self.bucket_for(value).label

    def guidance_for(self, value: float) -> Optional[str]:
        return self.bucket_for(value).guidance

    model_config = {"frozen": True}


KELLY_ADVICE = ThresholdTable(
    name="kelly_advice",
    buckets=(
        Bucket(upper=0, inclusive=True, label="No Bet"),
        Bucket(upper=2, label="Very Small"),
        Bucket(upper=5, label="Small"),
        Bucket(upper=10, label="Moderate"),
        Bucket(upper=20, label="Large"),
    ),
    fallback=Fallback(label="Very Large (Risky)"),
)

STOP_LOSS_RISK = ThresholdTable(
    name="stop_loss_risk",
    buckets=(
        Bucket(upper=10, inclusive=True, label="Conservative",
               guidance="Stop-loss protects most of your capital"),
        Bucket(upper=25, inclusive=True, label="Moderate",
               guidance="Acceptable risk for most traders"),
    ),
    fallback=Fallback(label="High", guidance="Consider tightening stop-loss to reduce risk"),
)

PORTFOLIO_RISK = ThresholdTable(
    name="portfolio_risk",
    buckets=(
        Bucket(upper=2, inclusive=True, label="Low",
               guidance="Position size is well-diversified and conservative"),
        Bucket(upper=5, inclusive=True, label="Moderate",
               guidance="Moderate concentration - acceptable for most portfolios"),
        Bucket(upper=10, inclusive=True, label="High",
               guidance="High concentration - consider reducing position size"),
    ),
    fallback=Fallback(label="Very High", guidance="Very high concentration - significant portfolio risk"),
)

RISK_REWARD = ThresholdTable(
    name="risk_reward",
    buckets=(
        Bucket(upper=1, label="Poor"),
        Bucket(upper=2, label="Fair"),
    ),
    fallback=Fallback(label="Good"),
)

EDGE_STRENGTH = ThresholdTable(
    name="edge_strength",
    buckets=(
        Bucket(upper=2, label="Weak"),
        Bucket(upper=5, label="Moderate"),
    ),
    fallback=Fallback(label="Strong"),
)

DEFAULT_TABLES: dict[str, ThresholdTable] = {
    table.name: table
    for table in (KELLY_ADVICE, STOP_LOSS_RISK, PORTFOLIO_RISK, RISK_REWARD, EDGE_STRENGTH)
}


def classify(value: float, table: ThresholdTable) -> str:
    """Map ``value`` to its label in ``table``."""
    return table.classify(value)


def load_tables(path: Union[str, Path]) -> dict[str, ThresholdTable]:
    """Load threshold tables from a JSON file, layered over the defaults.
    
    The file holds a list of table objects; a table whose name matches a
    built-in one replaces it.
    
    Args:
        path: Path to the JSON file
        
    Returns:
        Mapping of table name to table
    """
    raw = json.loads(Path(path).read_text())
    tables = dict(DEFAULT_TABLES)
    for entry in raw:
        table = ThresholdTable.model_validate(entry)
        if table.name not in DEFAULT_TABLES:
            logger.warning(f"Unknown advice table '{table.name}' in {path} - loaded but unused")
        tables[table.name] = table
    logger.info(f"Loaded {len(raw)} advice table(s) from {path}")
    return tables
