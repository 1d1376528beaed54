"""Tests for the advice classifier threshold tables."""

import json
import math

import pytest
from pydantic import ValidationError

from sizing.advice import (
    DEFAULT_TABLES,
    EDGE_STRENGTH,
    KELLY_ADVICE,
    PORTFOLIO_RISK,
    RISK_REWARD,
    STOP_LOSS_RISK,
    Bucket,
    Fallback,
    ThresholdTable,
    classify,
    load_tables,
)


class TestKellyAdvice:
    """Kelly percentage ladder."""

    @pytest.mark.parametrize("value,label", [
        (-5.0, "No Bet"),
        (0.0, "No Bet"),
        (0.01, "Very Small"),
        (1.99, "Very Small"),
        (2.0, "Small"),
        (4.99, "Small"),
        (5.0, "Moderate"),
        (10.0, "Large"),
        (19.99, "Large"),
        (20.0, "Very Large (Risky)"),
        (100.0, "Very Large (Risky)"),
    ])
    def test_buckets(self, value, label):
        assert classify(value, KELLY_ADVICE) == label


class TestRiskTiers:
    """Stop-loss and portfolio risk ladders."""

    @pytest.mark.parametrize("value,label", [
        (0.0, "Conservative"),
        (10.0, "Conservative"),
        (10.01, "Moderate"),
        (25.0, "Moderate"),
        (25.01, "High"),
    ])
    def test_stop_loss_tiers(self, value, label):
        assert STOP_LOSS_RISK.classify(value) == label

    @pytest.mark.parametrize("value,label", [
        (0.5, "Low"),
        (2.0, "Low"),
        (2.01, "Moderate"),
        (5.0, "Moderate"),
        (10.0, "High"),
        (10.01, "Very High"),
    ])
    def test_portfolio_tiers(self, value, label):
        assert PORTFOLIO_RISK.classify(value) == label

    def test_guidance_follows_tier(self):
        """Tiers carry their advice line."""
        assert STOP_LOSS_RISK.guidance_for(5) == "Stop-loss protects most of your capital"
        assert PORTFOLIO_RISK.guidance_for(50).startswith("Very high concentration")

    def test_risk_reward_and_edge(self):
        assert RISK_REWARD.classify(0.5) == "Poor"
        assert RISK_REWARD.classify(1.0) == "Fair"
        assert RISK_REWARD.classify(2.0) == "Good"
        assert EDGE_STRENGTH.classify(-3) == "Weak"
        assert EDGE_STRENGTH.classify(2) == "Moderate"
        assert EDGE_STRENGTH.classify(5) == "Strong"


class TestCoverage:
    """Every value maps to exactly one label."""

    @pytest.mark.parametrize("table", list(DEFAULT_TABLES.values()), ids=list(DEFAULT_TABLES))
    def test_exactly_one_bucket_per_value(self, table):
        """Ladders are contiguous and exhaustive."""
        labels = {b.label for b in table.buckets} | {table.fallback.label}
        for step in range(-200, 2001):
            value = step / 10
            matching = [b for b in table.buckets if b.matches(value)]
            label = table.classify(value)
            assert label in labels
            if matching:
                assert label == matching[0].label
            else:
                assert label == table.fallback.label

    def test_nan_is_rejected(self):
        with pytest.raises(ValueError):
            KELLY_ADVICE.classify(math.nan)

    def test_tables_are_versioned(self):
        assert all(t.version == "1" for t in DEFAULT_TABLES.values())


class TestThresholdTable:
    """Construction and loading of custom tables."""

    def test_rejects_descending_bounds(self):
        with pytest.raises(ValidationError):
            ThresholdTable(
                name="broken",
                buckets=(Bucket(upper=10, label="a"), Bucket(upper=5, label="b")),
                fallback=Fallback(label="c"),
            )

    def test_load_tables_overrides_defaults(self, tmp_path):
        """A file-provided table replaces the built-in one of the same name."""
        path = tmp_path / "tables.json"
        path.write_text(json.dumps([
            {
                "name": "kelly_advice",
                "version": "2",
                "buckets": [
                    {"upper": 0, "inclusive": True, "label": "Pass"},
                    {"upper": 10, "label": "Bet"},
                ],
                "fallback": {"label": "Too Much"},
            }
        ]))

        tables = load_tables(path)

        assert tables["kelly_advice"].version == "2"
        assert tables["kelly_advice"].classify(5) == "Bet"
        assert tables["stop_loss_risk"] is STOP_LOSS_RISK
