# apps/verdicts_app.py
#
# Verdict tally (table + bar chart) over the timeline dataset.

from __future__ import annotations

from typing import Callable

import streamlit as st

from lonerbox_data.aggregate import tally_verdicts
from lonerbox_data.charts import bar_figure
from lonerbox_data.config import TIMELINE_DATASET
from lonerbox_data.layout import bar_layout, ordinal_colors
from lonerbox_data.loader import LoadToken, load_records
from lonerbox_data.tables import verdicts_frame


def main(go_home: Callable[[], None] | None = None, token: LoadToken | None = None):
    top_left, top_right = st.columns([0.8, 0.2])
    with top_left:
        st.title("Verdicts Summary")
    with top_right:
        if go_home is not None:
            if st.button("← Back to Home", key="back_home"):
                go_home()

    records = load_records(TIMELINE_DATASET.path(), token=token)
    verdicts = tally_verdicts(records, TIMELINE_DATASET.verdict_field)

    if not verdicts:
        st.info("No data available")
        return

    st.dataframe(verdicts_frame(verdicts), width="stretch", hide_index=True)

    st.subheader("Deaths by Verdict")
    items = [(v.verdict, v.count) for v in verdicts]
    layout = bar_layout(items, ordinal_colors(v for v, _ in items))
    st.plotly_chart(bar_figure(layout), width="stretch")
