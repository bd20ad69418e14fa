"""Sidebar parameter controls."""

import streamlit as st

from src.data.constants import (
    DEFAULT_ADJUSTMENT_SPEED,
    DEFAULT_CURVE_STEEPNESS,
    DEFAULT_INITIAL_RATE,
    DEFAULT_MAX_RATE,
    DEFAULT_MIN_RATE,
    DEFAULT_TARGET_UTILIZATION,
)
from src.data.interfaces import RateRequest
from src.protocol.fixed_point import FixedPoint
from src.protocol.market import MarketState

_DEFAULTS = {
    "curve_steepness": float(DEFAULT_CURVE_STEEPNESS),
    "initial_rate": float(DEFAULT_INITIAL_RATE),
    "adjustment_speed": float(DEFAULT_ADJUSTMENT_SPEED),
    "target_utilization": float(DEFAULT_TARGET_UTILIZATION),
    "min_rate": float(DEFAULT_MIN_RATE),
    "max_rate": float(DEFAULT_MAX_RATE),
}


def _reset_defaults() -> None:
    for key, value in _DEFAULTS.items():
        st.session_state[key] = value


def _utilization_input() -> float:
    from_market = st.sidebar.checkbox("Derive From Market Totals", value=False)
    if not from_market:
        return st.sidebar.number_input(
            "Current Utilization (%)",
            min_value=0.0,
            max_value=100.0,
            value=90.0,
            step=0.01,
        )

    supply = st.sidebar.number_input("Total Supply Assets", min_value=0.0, value=1_000_000.0, step=1_000.0)
    borrow = st.sidebar.number_input("Total Borrow Assets", min_value=0.0, value=900_000.0, step=1_000.0)
    market = MarketState(
        total_supply_assets=FixedPoint.from_num(supply),
        total_borrow_assets=FixedPoint.from_num(borrow),
    )
    utilization = float(market.utilization_percent())
    st.sidebar.caption(f"Derived utilization: {utilization:.2f}%")
    return utilization


def render_sidebar() -> RateRequest:
    """Render sidebar controls and return the calculator request."""
    for key, value in _DEFAULTS.items():
        st.session_state.setdefault(key, value)

    st.sidebar.header("Market")

    utilization = _utilization_input()

    elapsed = st.sidebar.number_input(
        "Elapsed Time (seconds)",
        min_value=0,
        value=3600,
        step=60,
    )

    st.sidebar.header("Curve Configuration")

    curve_steepness = st.sidebar.number_input("Curve Steepness", step=0.01, key="curve_steepness")
    initial_rate = st.sidebar.number_input("Initial Rate (% per year)", step=0.01, key="initial_rate")
    adjustment_speed = st.sidebar.number_input(
        "Adjustment Speed (per year)", step=0.01, key="adjustment_speed"
    )
    target_utilization = st.sidebar.number_input(
        "Target Utilization (%)", step=0.01, key="target_utilization"
    )
    min_rate = st.sidebar.number_input("Minimum Rate (% per year)", step=0.01, key="min_rate")
    max_rate = st.sidebar.number_input("Maximum Rate (% per year)", step=0.01, key="max_rate")

    st.sidebar.button("Use Default Config", on_click=_reset_defaults)

    return RateRequest(
        current_utilization=utilization,
        elapsed_time_seconds=int(elapsed),
        curve_steepness=curve_steepness,
        initial_rate=initial_rate,
        adjustment_speed=adjustment_speed,
        target_utilization=target_utilization,
        min_rate=min_rate,
        max_rate=max_rate,
    )
