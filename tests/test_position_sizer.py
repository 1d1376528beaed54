"""Tests for the position sizer and risk/reward analyzer."""

import pytest

from data.errors import ErrorKind, SizingError
from data.models import MarketSignal
from sizing.position_sizer import size_position
from sizing.risk_reward import analyze_risk_reward


@pytest.fixture
def signal():
    return MarketSignal(model_probability=70, market_odds=50)


class TestPositionSizer:
    """Test suite for size_position."""

    def test_even_money_position(self, signal):
        """$100 at 50% buys 200 shares paying $200."""
        outcome = size_position(signal, 100)

        assert outcome.shares == pytest.approx(200)
        assert outcome.potential_payout == pytest.approx(200)
        assert outcome.profit_if_win == pytest.approx(100)
        assert outcome.roi_if_win == pytest.approx(100)
        assert outcome.loss_if_lose == -100

    def test_reports_both_ev_variants(self, signal):
        """Canonical EV and the legacy payout variant are both exposed."""
        outcome = size_position(signal, 100)

        assert outcome.expected_value == pytest.approx(40.0)
        assert outcome.payout_expected_value == pytest.approx(110.0)
        assert outcome.expected_roi == pytest.approx(40.0)
        assert outcome.is_favorable is True

    def test_longshot(self):
        """Cheap contracts buy many shares."""
        outcome = size_position(MarketSignal(model_probability=10, market_odds=20), 50)

        assert outcome.shares == pytest.approx(250)
        assert outcome.profit_if_win == pytest.approx(200)
        assert outcome.expected_value == pytest.approx(0.1 * 200 - 0.9 * 50)
        assert outcome.is_favorable is False

    def test_zero_price(self):
        with pytest.raises(SizingError) as exc:
            size_position(MarketSignal(model_probability=50, market_odds=0), 100)
        assert exc.value.kind == ErrorKind.ZERO_PRICE

    def test_invalid_investment(self, signal):
        with pytest.raises(SizingError) as exc:
            size_position(signal, 0)
        assert exc.value.kind == ErrorKind.INVALID_INVESTMENT

    def test_underflowing_price(self):
        """Odds too small to form a price are refused, not divided by."""
        with pytest.raises(SizingError) as exc:
            size_position(MarketSignal(model_probability=50, market_odds=1e-323), 100)
        assert exc.value.kind == ErrorKind.ZERO_PRICE

    @pytest.mark.parametrize("fn", [size_position, analyze_risk_reward])
    def test_overflow_is_an_error_not_infinity(self, fn):
        """A stake too large for the price never yields inf or NaN."""
        signal = MarketSignal(model_probability=0, market_odds=1e-10)
        with pytest.raises(SizingError) as exc:
            fn(signal, 1e300)
        assert exc.value.kind == ErrorKind.INVALID_INVESTMENT

    def test_huge_expected_roi_is_an_error(self):
        """A tiny stake on a tiny price can still overflow the ROI."""
        signal = MarketSignal(model_probability=50, market_odds=1e-306)
        with pytest.raises(SizingError) as exc:
            size_position(signal, 1e-300)
        assert exc.value.kind == ErrorKind.INVALID_INVESTMENT


class TestRiskRewardAnalyzer:
    """Test suite for analyze_risk_reward."""

    def test_favorable_scenario(self, signal):
        """70% model at 50% odds: win 100, lose 100, EV 40."""
        analysis = analyze_risk_reward(signal, 100)

        assert analysis.profit_if_win == pytest.approx(100)
        assert analysis.loss_if_lose == -100
        assert analysis.expected_value == pytest.approx(40.0)
        assert analysis.risk_reward_ratio == pytest.approx(1.0)
        assert analysis.is_favorable is True
        assert analysis.reward_label == "Fair"
        assert analysis.edge_label == "Strong"

    def test_unfavorable_when_model_below_market(self):
        analysis = analyze_risk_reward(MarketSignal(model_probability=30, market_odds=50), 100)

        assert analysis.expected_value == pytest.approx(-40.0)
        assert analysis.is_favorable is False
        assert analysis.edge_label == "Weak"

    def test_even_odds_ratio(self):
        analysis = analyze_risk_reward(MarketSignal(model_probability=25, market_odds=25), 100)

        assert analysis.risk_reward_ratio == pytest.approx(3.0)
        assert analysis.reward_label == "Good"

    @pytest.mark.parametrize("x", [0.1, 0.4, 0.7, 1.2, 7.3, 25, 33.3, 50, 66.6, 81.9, 99.9])
    def test_no_edge_is_not_favorable(self, x):
        """With no edge the EV is exactly zero and the bet is not favorable."""
        signal = MarketSignal(model_probability=x, market_odds=x)

        for outcome in (analyze_risk_reward(signal, 100), size_position(signal, 100)):
            assert outcome.expected_value == 0
            assert outcome.expected_roi == 0
            assert outcome.is_favorable is False

    def test_expensive_contract_has_poor_ratio(self):
        analysis = analyze_risk_reward(MarketSignal(model_probability=90, market_odds=80), 100)
        assert analysis.risk_reward_ratio == pytest.approx(0.25)
        assert analysis.reward_label == "Poor"

    def test_agrees_with_position_sizer(self, signal):
        """Both calculators share one canonical EV."""
        assert analyze_risk_reward(signal, 250).expected_value == pytest.approx(
            size_position(signal, 250).expected_value
        )

    def test_zero_price(self):
        with pytest.raises(SizingError) as exc:
            analyze_risk_reward(MarketSignal(model_probability=50, market_odds=0), 100)
        assert exc.value.kind == ErrorKind.ZERO_PRICE
