# apps/civilian_losses_app.py
#
# Militant vs civilian split over every distinct Orient Affiliation value.

from __future__ import annotations

from typing import Callable

import streamlit as st

from lonerbox_data.aggregate import group_raw_categories, split_totals
from lonerbox_data.charts import pie_figure
from lonerbox_data.config import CLAIMS_DATASET, PIE_BOX, SPLIT_COLORS
from lonerbox_data.layout import inside_labels, pie_radius, pie_slices
from lonerbox_data.loader import LoadToken, load_records


def main(go_home: Callable[[], None] | None = None, token: LoadToken | None = None):
    top_left, top_right = st.columns([0.8, 0.2])
    with top_left:
        st.title("Militant vs Civilian Casualties")
    with top_right:
        if go_home is not None:
            if st.button("← Back to Home", key="back_home"):
                go_home()

    records = load_records(CLAIMS_DATASET.path(), token=token)
    militia, civilian = split_totals(group_raw_categories(records, CLAIMS_DATASET.category_field))

    if militia + civilian == 0:
        st.info("No data available")
        return

    radius = pie_radius(PIE_BOX)
    slices = pie_slices([("Militia", militia), ("Civilian", civilian)])
    fig = pie_figure(slices, inside_labels(slices, radius), radius, SPLIT_COLORS, PIE_BOX)
    st.plotly_chart(fig, width="stretch")
