# apps/timeline_app.py
#
# Deaths per day of death, one sub-bar per Orient claim.

from __future__ import annotations

from typing import Callable

import streamlit as st

from lonerbox_data.aggregate import bin_by_date
from lonerbox_data.charts import timeline_figure
from lonerbox_data.config import TIMELINE_DATASET
from lonerbox_data.layout import timeline_layout
from lonerbox_data.loader import LoadToken, load_records
from lonerbox_data.tables import timeline_frame


def main(go_home: Callable[[], None] | None = None, token: LoadToken | None = None):
    top_left, top_right = st.columns([0.8, 0.2])
    with top_left:
        st.title("Deaths Timeline")
    with top_right:
        if go_home is not None:
            if st.button("← Back to Home", key="back_home"):
                go_home()

    records = load_records(TIMELINE_DATASET.path(), token=token)
    buckets = bin_by_date(records, TIMELINE_DATASET.category_field, TIMELINE_DATASET.date_field)

    if not buckets:
        st.info("No data available")
        return

    layout = timeline_layout(buckets)
    st.plotly_chart(timeline_figure(layout), width="stretch")

    with st.expander("Table (deaths by date and claim)"):
        st.dataframe(
            timeline_frame(buckets, TIMELINE_DATASET.category_field),
            width="stretch",
            hide_index=True,
        )
