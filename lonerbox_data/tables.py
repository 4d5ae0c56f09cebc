"""Summary lists -> DataFrames with the column headings the pages show."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from .aggregate import ClaimCount, GroupSummary, TimeBucket, VerdictSummary
from .loader import Record


def groups_frame(groups: Sequence[GroupSummary], category_heading: str = "Orient Affiliation") -> pd.DataFrame:
    return pd.DataFrame(
        [(g.category, g.militia_count, g.civilian_count, g.total) for g in groups],
        columns=[category_heading, "Militia", "Civilian", "Total"],
    )


def claims_frame(claims: Sequence[ClaimCount], category_heading: str = "Orient Affiliation") -> pd.DataFrame:
    return pd.DataFrame([(c.claim, c.count) for c in claims], columns=[category_heading, "Count"])


def verdicts_frame(verdicts: Sequence[VerdictSummary]) -> pd.DataFrame:
    return pd.DataFrame([(v.verdict, v.count) for v in verdicts], columns=["Verdict", "Count"])


def timeline_frame(buckets: Sequence[TimeBucket], category_heading: str = "Orient claim") -> pd.DataFrame:
    rows = [(b.date, claim, n) for b in buckets for claim, n in b.counts.items()]
    return pd.DataFrame(rows, columns=["Date", category_heading, "Deaths"])


def records_frame(records: Sequence[Record], columns: Sequence[str]) -> pd.DataFrame:
    df = pd.DataFrame(list(records))
    for c in columns:
        if c not in df.columns:
            df[c] = ""
    return df[list(columns)]
