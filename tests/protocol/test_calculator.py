"""Tests for the end-to-end rate calculation."""

import dataclasses
import logging

import pytest

from src.data.constants import IrmConstants
from src.data.static_params import default_request
from src.protocol.calculator import (
    calculate,
    rate_per_second_to_apy_percent,
    rate_per_second_to_rate_per_year,
)
from src.protocol.errors import FixedPointOverflow, IRMError, InvalidConfiguration
from src.protocol.fixed_point import FixedPoint


class TestConversions:
    def test_rate_per_year(self) -> None:
        rate = FixedPoint.from_num(2)
        assert rate_per_second_to_rate_per_year(rate) == FixedPoint.from_num(2 * 31_557_600)

    def test_apy_percent(self) -> None:
        per_second = FixedPoint.from_num(1) / 31_557_600
        assert rate_per_second_to_apy_percent(per_second).to_float() == pytest.approx(100.0, rel=1e-6)

    def test_custom_constants(self) -> None:
        constants = IrmConstants(seconds_per_year=10)
        assert rate_per_second_to_rate_per_year(FixedPoint.ONE, constants) == FixedPoint.from_num(10)


class TestDefaultScenario:
    @pytest.fixture
    def result(self):
        return calculate(default_request(current_utilization=100, elapsed_time_seconds=3600))

    def test_full_error(self, result) -> None:
        assert result.error == FixedPoint.ONE

    def test_rate_before_curve(self, result) -> None:
        # One hour at full error and speed 50 per year: 4% grows to about 4.0114%
        assert result.avg_rate_before_curve_apy.to_float() == pytest.approx(4.0114, abs=0.0005)
        assert result.avg_rate_before_curve_apy > FixedPoint.from_num(4)

    def test_rate_after_curve(self, result) -> None:
        # steepness 4 at error 1 multiplies the rate by 4
        assert result.avg_rate_after_curve_apy.to_float() == pytest.approx(16.0457, abs=0.002)
        assert result.avg_borrow_rate == result.avg_rate_at_target * 4

    def test_end_rate_above_average(self, result) -> None:
        assert result.end_rate_at_target > result.avg_rate_at_target

    def test_formatted(self, result) -> None:
        assert result.formatted() == {
            "avg_rate_before_curve_apy": "4.01",
            "avg_rate_after_curve_apy": "16.05",
        }


class TestAtTargetScenario:
    def test_rates_equal(self) -> None:
        result = calculate(default_request(current_utilization=90, elapsed_time_seconds=3600))
        assert result.error == FixedPoint.ZERO
        assert result.avg_rate_after_curve_apy == result.avg_rate_before_curve_apy
        assert result.formatted() == {
            "avg_rate_before_curve_apy": "4.00",
            "avg_rate_after_curve_apy": "4.00",
        }


class TestBelowTarget:
    def test_curve_damps_rate(self) -> None:
        result = calculate(default_request(current_utilization=45, elapsed_time_seconds=3600))
        assert result.error.to_float() == pytest.approx(-0.5, abs=1e-9)
        assert result.avg_rate_after_curve_apy < result.avg_rate_before_curve_apy
        # coefficient 0.75 at error -0.5 gives a multiplier of 0.625
        ratio = result.avg_rate_after_curve_apy.to_float() / result.avg_rate_before_curve_apy.to_float()
        assert ratio == pytest.approx(0.625, rel=1e-4)


class TestAppliedRateUnclamped:
    def test_exceeds_max_rate(self) -> None:
        request = dataclasses.replace(default_request(100, 3600), initial_rate=200)
        result = calculate(request)
        assert result.avg_rate_before_curve_apy.to_float() == pytest.approx(200.0, rel=1e-4)
        assert result.avg_rate_after_curve_apy.to_float() == pytest.approx(800.0, rel=1e-4)


class TestZeroInitialRate:
    def test_both_rates_zero(self) -> None:
        request = dataclasses.replace(default_request(100, 3600), initial_rate=0)
        result = calculate(request)
        assert result.avg_rate_before_curve_apy == FixedPoint.ZERO
        assert result.avg_rate_after_curve_apy == FixedPoint.ZERO
        assert result.end_rate_at_target == FixedPoint.ZERO


class TestErrors:
    @pytest.mark.parametrize(
        "changes",
        [
            {"target_utilization": 0},
            {"target_utilization": 100},
            {"curve_steepness": 0},
            {"elapsed_time_seconds": -60},
        ],
    )
    def test_invalid_configuration(self, changes: dict) -> None:
        request = dataclasses.replace(default_request(100, 3600), **changes)
        with pytest.raises(InvalidConfiguration):
            calculate(request)

    def test_overflow(self) -> None:
        request = dataclasses.replace(default_request(100, 3600), elapsed_time_seconds=2**80)
        with pytest.raises(FixedPointOverflow):
            calculate(request)

    def test_errors_share_base_class(self) -> None:
        request = dataclasses.replace(default_request(100, 3600), curve_steepness=0)
        with pytest.raises(IRMError):
            calculate(request)


class TestInputTypes:
    def test_string_and_decimal_inputs(self) -> None:
        from decimal import Decimal

        request = dataclasses.replace(
            default_request("100", 3600),
            curve_steepness=Decimal("4"),
            min_rate="0.1",
        )
        assert calculate(request).formatted()["avg_rate_after_curve_apy"] == "16.05"

    def test_stateless(self) -> None:
        request = default_request(97.5, 86_400)
        assert calculate(request) == calculate(request)


class TestStartOutsideBounds:
    def test_average_keeps_unclamped_start(self) -> None:
        request = dataclasses.replace(default_request(100, 0), initial_rate=300)
        result = calculate(request)
        # (300 + 3 * 200) / 4 at zero elapsed time
        assert result.avg_rate_before_curve_apy.to_float() == pytest.approx(225.0, rel=1e-5)
        assert rate_per_second_to_apy_percent(result.end_rate_at_target).to_float() == pytest.approx(
            200.0, rel=1e-5
        )


class TestDebugLogging:
    def test_logs_rates_when_enabled(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="src.protocol.calculator"):
            calculate(default_request(100, 3600))
        assert any("before curve" in r.getMessage() for r in caplog.records)

    def test_silent_when_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="src.protocol.calculator"):
            calculate(default_request(100, 3600))
        assert not [r for r in caplog.records if r.name == "src.protocol.calculator"]
