# apps/organizations_app.py
#
# Orient Affiliation summaries: raw claim counts, militia/civilian split per
# known affiliation, deaths bar chart and two pies.

from __future__ import annotations

from typing import Callable

import streamlit as st

from lonerbox_data.aggregate import SORT_LABEL, AggregationConfig, aggregate
from lonerbox_data.charts import bar_figure, pie_figure
from lonerbox_data.config import (
    BAR_BOX,
    CLAIMS_DATASET,
    DEFAULT_CATEGORIES,
    PIE_BOX_PLAIN,
    SPLIT_COLORS,
)
from lonerbox_data.layout import bar_layout, inside_labels, pie_radius, pie_slices
from lonerbox_data.loader import LoadToken, load_records
from lonerbox_data.tables import claims_frame, groups_frame


def main(go_home: Callable[[], None] | None = None, token: LoadToken | None = None):
    top_left, top_right = st.columns([0.8, 0.2])
    with top_left:
        st.title("Orient Claims Summary")
    with top_right:
        if go_home is not None:
            if st.button("← Back to Home", key="back_home"):
                go_home()

    records = load_records(CLAIMS_DATASET.path(), token=token)
    summary = aggregate(
        records,
        AggregationConfig.for_dataset(CLAIMS_DATASET, categories=DEFAULT_CATEGORIES, sort_by=SORT_LABEL),
    )

    if not summary.claim_counts:
        st.info("No data available")
        return

    left, right = st.columns(2, gap="large")
    with left:
        st.dataframe(claims_frame(summary.claim_counts), width="stretch", hide_index=True)
    with right:
        st.dataframe(groups_frame(summary.known_groups), width="stretch", hide_index=True)

    st.subheader("Deaths by Orient Affiliation")
    layout = bar_layout([(g.category, g.total) for g in summary.known_groups], DEFAULT_CATEGORIES.color_for, BAR_BOX)
    st.plotly_chart(bar_figure(layout, BAR_BOX), width="stretch")

    radius = pie_radius(PIE_BOX_PLAIN)

    st.subheader("Militia Losses by Orient Affiliation")
    if summary.militia_total:
        slices = pie_slices([(g.category, g.militia_count) for g in summary.known_groups])
        fig = pie_figure(
            slices,
            inside_labels(slices, radius),
            radius,
            DEFAULT_CATEGORIES.colors,
            PIE_BOX_PLAIN,
            font_size=10,
        )
        st.plotly_chart(fig, width="stretch")
    else:
        st.info("No data available")

    st.subheader("Militant vs Civilian Casualties")
    slices = pie_slices([("Militia", summary.militia_total), ("Civilian", summary.civilian_total)])
    fig = pie_figure(slices, inside_labels(slices, radius), radius, SPLIT_COLORS, PIE_BOX_PLAIN, font_size=10)
    st.plotly_chart(fig, width="stretch")
