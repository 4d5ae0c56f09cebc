# apps/records_app.py
#
# Claims table with Orient Affiliation / Verdict filters.
# NOTE: Do NOT call st.set_page_config() here (dashboard_home owns it)

from __future__ import annotations


import streamlit as st

from lonerbox_data.aggregate import filter_options, filter_records
from lonerbox_data.config import CLAIMS_DATASET
from lonerbox_data.loader import LoadToken, load_records
from lonerbox_data.tables import records_frame

ALL = ""


def _select(label: str, options: list[str], key: str) -> str:
    return st.selectbox(
        label,
        options=[ALL] + options,
        format_func=lambda v: "All" if v == ALL else v,
        key=key,
    )


def main(token: LoadToken | None = None):
    st.title("Claims")

    records = load_records(CLAIMS_DATASET.path(), token=token)

    c1, c2 = st.columns(2)
    with c1:
        affiliation = _select(
            "Orient Affiliation",
            filter_options(records, CLAIMS_DATASET.category_field),
            key="records_affiliation",
        )
    with c2:
        verdict = _select(
            "Verdict",
            filter_options(records, CLAIMS_DATASET.verdict_field),
            key="records_verdict",
        )

    filtered = filter_records(
        records,
        {
            CLAIMS_DATASET.category_field: affiliation,
            CLAIMS_DATASET.verdict_field: verdict,
        },
    )

    st.caption(f"{len(filtered):,} of {len(records):,} records")
    if not filtered:
        st.info("No data available")
        return

    st.dataframe(records_frame(filtered, CLAIMS_DATASET.columns), width="stretch", hide_index=True)
