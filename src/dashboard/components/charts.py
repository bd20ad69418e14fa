"""Plotly chart builders for the rate calculator."""

import pandas as pd
import plotly.graph_objects as go

from src.simulation.results import RatePathResult


def rate_curve_chart(
    df: pd.DataFrame,
    current_utilization: float | None = None,
    target_utilization: float | None = None,
    title: str = "Borrow Rate Curve",
) -> go.Figure:
    """Create an interactive rate curve chart.

    Args:
        df: DataFrame with columns: utilization, borrow_rate.
        current_utilization: If provided, marks current utilization on chart.
        target_utilization: If provided, marks target utilization on chart.
        title: Chart title.
    """
    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=df["utilization"] * 100,
            y=df["borrow_rate"] * 100,
            name="Borrow Rate",
            line=dict(color="#ef4444", width=2),
            hovertemplate="Utilization: %{x:.1f}%<br>Borrow Rate: %{y:.2f}%<extra></extra>",
        )
    )

    if target_utilization is not None:
        fig.add_vline(
            x=target_utilization * 100,
            line_dash="dot",
            line_color="#22c55e",
            annotation_text=f"Target: {target_utilization*100:.1f}%",
            annotation_position="bottom right",
        )

    if current_utilization is not None:
        fig.add_vline(
            x=current_utilization * 100,
            line_dash="dash",
            line_color="#6b7280",
            annotation_text=f"Current: {current_utilization*100:.1f}%",
        )

    fig.update_layout(
        title=title,
        xaxis_title="Utilization (%)",
        yaxis_title="Rate (%)",
        hovermode="x unified",
        template="plotly_dark",
        height=450,
    )

    return fig


def rate_path_chart(path: RatePathResult) -> go.Figure:
    """Rate at target and borrow rate over simulated time."""
    hours = path.elapsed_seconds / 3600

    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=hours,
            y=path.rate_at_target_apy,
            mode="lines",
            name="Rate at Target",
            line=dict(color="#3b82f6", width=2),
            hovertemplate="Hour %{x:.1f}<br>Rate at Target: %{y:.2f}%<extra></extra>",
        )
    )

    fig.add_trace(
        go.Scatter(
            x=hours,
            y=path.borrow_rate_apy,
            mode="lines",
            name="Borrow Rate",
            line=dict(color="#ef4444", width=2),
            hovertemplate="Hour %{x:.1f}<br>Borrow Rate: %{y:.2f}%<extra></extra>",
        )
    )

    fig.update_layout(
        title="Rate Path at Constant Utilization",
        xaxis_title="Hours",
        yaxis_title="Rate (%)",
        hovermode="x unified",
        template="plotly_dark",
        height=450,
    )

    return fig
