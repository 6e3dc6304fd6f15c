"""Shared chart helpers for the deals dashboard."""

from __future__ import annotations

from typing import Any

import altair as alt
import pandas as pd
import streamlit as st

CHART_HEIGHT = 320
BAR_COLOR = "#3B82F6"
GRID_COLOR = "#334155"
LABEL_COLOR = "#94A3B8"
TITLE_COLOR = "#E2E8F0"

_BASE_CONFIG = {
    "background": "#0F172A",
    "font": "Fira Sans, sans-serif",
    "axis": {
        "labelColor": LABEL_COLOR,
        "titleColor": LABEL_COLOR,
        "gridColor": GRID_COLOR,
        "gridOpacity": 0.2,
        "domainColor": GRID_COLOR,
        "tickColor": GRID_COLOR,
        "labelFontSize": 11,
        "titleFontSize": 12,
    },
    "title": {"color": TITLE_COLOR, "fontSize": 16, "fontWeight": 600, "anchor": "start"},
    "view": {"strokeWidth": 0},
}

DEAL_COLUMNS = ["dealId", "fromCurrency", "toCurrency", "dealTimestamp", "dealAmount"]


def deals_frame(deals: list[dict[str, Any]]) -> pd.DataFrame:
    """Deals as a DataFrame with a numeric amount column for aggregation."""
    df = pd.DataFrame(deals, columns=DEAL_COLUMNS)
    df["pair"] = df["fromCurrency"] + "/" + df["toCurrency"]
    df["amount"] = pd.to_numeric(df["dealAmount"])
    return df


def deals_by_pair(df: pd.DataFrame) -> pd.DataFrame:
    """Deal count and total amount per currency pair, most active first."""
    if df.empty:
        return pd.DataFrame(columns=["Pair", "Deals", "Volume"])
    grouped = (
        df.groupby("pair")
        .agg(Deals=("dealId", "count"), Volume=("amount", "sum"))
        .reset_index()
        .rename(columns={"pair": "Pair"})
    )
    return grouped.sort_values("Deals", ascending=False, kind="stable").reset_index(drop=True)


def static_bar_chart(
    df: pd.DataFrame,
    x_field: str,
    y_field: str,
    title: str = "",
    height: int = CHART_HEIGHT,
) -> None:
    """Render a static vertical bar chart with consistent styling."""
    if df.empty:
        st.info("No data to display.")
        return

    chart = (
        alt.Chart(df)
        .mark_bar(cornerRadiusTopLeft=6, cornerRadiusTopRight=6)
        .encode(
            x=alt.X(
                f"{x_field}:N",
                sort=alt.SortField(field=y_field, order="descending"),
                title=None,
                axis=alt.Axis(labelAngle=0, labelLimit=150),
            ),
            y=alt.Y(f"{y_field}:Q", title=y_field, axis=alt.Axis(grid=True)),
            color=alt.value(BAR_COLOR),
            tooltip=[
                alt.Tooltip(f"{x_field}:N"),
                alt.Tooltip(f"{y_field}:Q", format=",.2f"),
            ],
        )
        .properties(height=height, **({"title": title} if title else {}))
        .configure(**_BASE_CONFIG)
    )
    st.altair_chart(chart, use_container_width=True)
