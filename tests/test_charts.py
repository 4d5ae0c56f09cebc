"""
Tests for lonerbox_data/charts.py and lonerbox_data/tables.py
"""

from datetime import date

import plotly.graph_objects as go
import pytest

from lonerbox_data.aggregate import ClaimCount, GroupSummary, TimeBucket, VerdictSummary
from lonerbox_data.charts import bar_figure, pie_figure, timeline_figure
from lonerbox_data.config import BAR_BOX, DEFAULT_CATEGORIES, PIE_BOX, SPLIT_COLORS
from lonerbox_data.layout import (
    bar_layout,
    inside_labels,
    outside_labels,
    pie_radius,
    pie_slices,
    timeline_layout,
)
from lonerbox_data.tables import (
    claims_frame,
    groups_frame,
    records_frame,
    timeline_frame,
    verdicts_frame,
)


# ── pie_figure ────────────────────────────────────────────────────────────────

class TestPieFigure:
    def test_outside_labels_get_leader_lines(self):
        radius = pie_radius(PIE_BOX)
        slices = pie_slices([("Fatah", 2), ("Hamas", 3), ("PIJ", 1)])
        fig = pie_figure(slices, outside_labels(slices, radius), radius, DEFAULT_CATEGORIES.colors, PIE_BOX)

        assert isinstance(fig, go.Figure)
        # one filled wedge + one leader line per slice
        filled = [t for t in fig.data if t.fill == "toself"]
        assert len(filled) == 3
        assert len(fig.data) == 6
        assert [t.fillcolor for t in filled] == ["yellow", "green", "black"]
        texts = [a.text for a in fig.layout.annotations]
        assert "<b>Hamas: 50.0% (3)</b>" in texts
        assert fig.layout.annotations[0].xanchor == "left"

    def test_label_y_is_flipped(self):
        radius = 100
        slices = pie_slices([("Militia", 1), ("Civilian", 1)])
        labels = outside_labels(slices, radius)
        fig = pie_figure(slices, labels, radius, SPLIT_COLORS)
        assert fig.layout.annotations[0].y == pytest.approx(-labels[0].y)

    def test_inside_labels_no_leader_lines(self):
        radius = 200
        slices = pie_slices([("Militia", 5), ("Civilian", 2)])
        fig = pie_figure(slices, inside_labels(slices, radius), radius, SPLIT_COLORS)
        assert len(fig.data) == 2
        assert {a.xanchor for a in fig.layout.annotations} == {"center"}
        assert fig.layout.width == PIE_BOX.width


# ── bar_figure / timeline_figure ──────────────────────────────────────────────

class TestBarFigures:
    def test_bar_figure_uses_layout(self):
        layout = bar_layout([("Hamas", 37), ("Fatah", 4)], DEFAULT_CATEGORIES.color_for)
        fig = bar_figure(layout, title="Deaths")
        bar = fig.data[0]
        assert list(bar.y) == [37, 4]
        assert list(bar.marker.color) == ["green", "yellow"]
        assert list(fig.layout.xaxis.ticktext) == ["Hamas", "Fatah"]
        assert tuple(fig.layout.yaxis.range) == (0, 40)
        assert fig.layout.title.text == "Deaths"
        assert fig.layout.width == BAR_BOX.width

    def test_timeline_one_trace_per_claim(self):
        buckets = [
            TimeBucket(date(2008, 12, 27), {"Hamas": 1}),
            TimeBucket(date(2009, 1, 1), {"Hamas": 2, "PIJ": 1}),
        ]
        fig = timeline_figure(timeline_layout(buckets))
        assert [t.name for t in fig.data] == ["Hamas", "PIJ"]
        assert list(fig.data[0].y) == [1, 2]
        assert fig.layout.barmode == "overlay"
        assert "Deaths: 2" in fig.data[0].hovertext[1]
        assert list(fig.layout.xaxis.ticktext) == ["Jan 2009"]

    def test_timeline_empty(self):
        fig = timeline_figure(timeline_layout([]))
        assert len(fig.data) == 0


# ── tables ────────────────────────────────────────────────────────────────────

class TestTables:
    def test_groups_frame(self):
        df = groups_frame([GroupSummary("Hamas", 2, 1, 3)])
        assert list(df.columns) == ["Orient Affiliation", "Militia", "Civilian", "Total"]
        assert df.iloc[0].tolist() == ["Hamas", 2, 1, 3]

    def test_claims_and_verdicts_frames(self):
        assert claims_frame([ClaimCount("Fatah", 4)]).iloc[0].tolist() == ["Fatah", 4]
        df = verdicts_frame([VerdictSummary("Combatant", 2)])
        assert list(df.columns) == ["Verdict", "Count"]

    def test_timeline_frame_long_form(self):
        df = timeline_frame([TimeBucket(date(2009, 1, 1), {"Hamas": 2, "PIJ": 1})])
        assert len(df) == 2
        assert list(df["Deaths"]) == [2, 1]

    def test_records_frame_fills_missing_columns(self):
        df = records_frame([{"Name": "A"}], ["Name", "Verdict"])
        assert list(df.columns) == ["Name", "Verdict"]
        assert df.iloc[0]["Verdict"] == ""

    def test_records_frame_empty(self):
        df = records_frame([], ["Name", "Verdict"])
        assert list(df.columns) == ["Name", "Verdict"]
        assert df.empty
