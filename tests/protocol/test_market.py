"""Tests for the market state record."""

import pytest

from src.protocol.fixed_point import FixedPoint
from src.protocol.market import MarketState


class TestMarketState:
    def test_utilization(self) -> None:
        market = MarketState(
            total_supply_assets=FixedPoint.from_num(800_000),
            total_borrow_assets=FixedPoint.from_num(200_000),
        )
        assert market.utilization == FixedPoint.from_num(0.25)
        assert market.utilization_percent() == FixedPoint.from_num(25)

    def test_empty_market(self) -> None:
        market = MarketState(total_supply_assets=FixedPoint.ZERO, total_borrow_assets=FixedPoint.ZERO)
        assert market.utilization == FixedPoint.ZERO

    def test_high_utilization(self) -> None:
        market = MarketState(
            total_supply_assets=FixedPoint.from_num(1_000_000),
            total_borrow_assets=FixedPoint.from_num(900_000),
            last_update=1_700_000_000,
        )
        assert market.utilization.to_float() == pytest.approx(0.9, abs=1e-12)
