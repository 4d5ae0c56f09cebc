# apps/affiliation_losses_app.py
#
# Militia losses per known affiliation: pie with outside labels and
# leader lines, smallest militia count first.

from __future__ import annotations

from typing import Callable

import streamlit as st

from lonerbox_data.aggregate import SORT_MILITIA, group_known_categories
from lonerbox_data.charts import pie_figure
from lonerbox_data.config import CLAIMS_DATASET, DEFAULT_CATEGORIES, PIE_BOX
from lonerbox_data.layout import outside_labels, pie_radius, pie_slices
from lonerbox_data.loader import LoadToken, load_records

EXCLUDED = ("Unaffiliated",)


def main(go_home: Callable[[], None] | None = None, token: LoadToken | None = None):
    top_left, top_right = st.columns([0.8, 0.2])
    with top_left:
        st.title("Militia Losses by Orient Affiliation")
    with top_right:
        if go_home is not None:
            if st.button("← Back to Home", key="back_home"):
                go_home()

    records = load_records(CLAIMS_DATASET.path(), token=token)
    groups = group_known_categories(
        records,
        CLAIMS_DATASET.category_field,
        DEFAULT_CATEGORIES,
        exclude=EXCLUDED,
        sort_by=SORT_MILITIA,
    )

    if not records or not any(g.militia_count for g in groups):
        st.info("No data available")
        return

    radius = pie_radius(PIE_BOX)
    slices = pie_slices([(g.category, g.militia_count) for g in groups])
    fig = pie_figure(slices, outside_labels(slices, radius), radius, DEFAULT_CATEGORIES.colors, PIE_BOX)
    st.plotly_chart(fig, width="stretch")
