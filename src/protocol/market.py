"""Market state record."""

from dataclasses import dataclass

from src.protocol.fixed_point import FixedPoint


@dataclass(frozen=True)
class MarketState:
    """Snapshot of a lending market.

    Rate calculations take utilization directly; this record only derives
    it from supply and borrow totals.
    """

    total_supply_assets: FixedPoint
    total_borrow_assets: FixedPoint
    last_update: int = 0  # unix timestamp

    @property
    def utilization(self) -> FixedPoint:
        if self.total_supply_assets <= FixedPoint.ZERO:
            return FixedPoint.ZERO
        return self.total_borrow_assets / self.total_supply_assets

    def utilization_percent(self) -> FixedPoint:
        return self.utilization * 100
