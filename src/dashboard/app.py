"""Adaptive curve rate calculator: Streamlit entry point."""

import logging
import os
from pathlib import Path

import streamlit as st

# Load .env file if present (for IRM_RATE_PATH_STEPS, etc.)
_env_path = Path(__file__).resolve().parents[2] / ".env"
if _env_path.exists():
    for line in _env_path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            os.environ.setdefault(key.strip(), value.strip())

from src.dashboard.components.charts import rate_curve_chart, rate_path_chart
from src.dashboard.components.sidebar import render_sidebar
from src.data.constants import IrmConstants
from src.protocol.adaptive_irm import AdaptiveCurveModel, build_parameter_set
from src.protocol.calculator import calculate
from src.protocol.errors import IRMError
from src.simulation.rate_path import simulate_rate_path

logger = logging.getLogger(__name__)

_DEFAULT_PATH_STEPS = 48


def _path_steps() -> int:
    raw = os.environ.get("IRM_RATE_PATH_STEPS", "")
    if not raw:
        return _DEFAULT_PATH_STEPS
    try:
        return max(1, int(raw))
    except ValueError:
        logger.warning("Ignoring invalid IRM_RATE_PATH_STEPS=%r", raw)
        return _DEFAULT_PATH_STEPS


def main() -> None:
    st.set_page_config(
        page_title="Interest Rate Calculator",
        page_icon="📈",
        layout="wide",
    )

    st.title("Interest Rate Calculator")
    st.caption("Adaptive curve rate model: average borrow rate over an elapsed period")

    request = render_sidebar()
    constants = IrmConstants()

    try:
        result = calculate(request, constants)
    except IRMError as exc:
        st.error(f"Cannot calculate rates: {exc}")
        return

    text = result.formatted()
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Average Rate before Applying Curve (APY)", f"{text['avg_rate_before_curve_apy']}%")
    with col2:
        st.metric("Average Rate after Applying Curve (APY)", f"{text['avg_rate_after_curve_apy']}%")

    st.divider()
    st.subheader("Borrow Rate Curve")

    parameter_set = build_parameter_set(request, constants)
    model = AdaptiveCurveModel(parameter_set.params)
    df_curve = model.rate_curve(result.avg_rate_at_target)
    fig_curve = rate_curve_chart(
        df_curve,
        current_utilization=parameter_set.utilization.to_float(),
        target_utilization=parameter_set.params.target_utilization.to_float(),
        title="Borrow Rate Curve at Average Rate at Target",
    )
    st.plotly_chart(fig_curve, use_container_width=True)

    st.divider()
    st.subheader("Rate Path")

    n_steps = _path_steps()
    step_seconds = max(1, request.elapsed_time_seconds // n_steps)
    try:
        path = simulate_rate_path(request, n_steps, step_seconds, constants)
    except IRMError as exc:
        st.error(f"Cannot simulate rate path: {exc}")
        return
    st.plotly_chart(rate_path_chart(path), use_container_width=True)


if __name__ == "__main__":
    main()
