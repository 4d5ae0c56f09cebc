"""
Plotly figures drawn from layout geometry.

The layout engine works in SVG pixel space (y down). Figures here use the
same x coordinates and flip y so the picture matches what the layout
computed; value axes are labelled with the layout's own ticks.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

import plotly.graph_objects as go

from .config import BAR_BOX, PIE_BOX, TIMELINE_BOX, ChartBox
from .layout import BarLayout, PieLabel, PieSlice, TimelineLayout, slice_outline

TEMPLATE = "plotly_dark"
LEADER_COLOR = "lightblue"

_XANCHOR = {"start": "left", "end": "right", "middle": "center"}


def _base_layout(fig: go.Figure, box: ChartBox, title: Optional[str]) -> go.Figure:
    fig.update_layout(
        template=TEMPLATE,
        title=title,
        width=box.width,
        height=box.height + (40 if title else 0),
        margin=dict(l=10, r=10, t=40 if title else 10, b=10),
    )
    return fig


def pie_figure(
    slices: Sequence[PieSlice],
    labels: Sequence[PieLabel],
    radius: float,
    colors: Mapping[str, str],
    box: ChartBox = PIE_BOX,
    title: Optional[str] = None,
    font_size: int = 14,
) -> go.Figure:
    fig = go.Figure()

    for s in slices:
        pts = slice_outline(s, radius)
        fig.add_trace(
            go.Scatter(
                x=[p[0] for p in pts],
                y=[-p[1] for p in pts],
                mode="lines",
                fill="toself",
                fillcolor=colors.get(s.category, "grey"),
                line=dict(color="rgba(0,0,0,0.4)", width=1),
                name=s.category,
                hoverinfo="text",
                hovertext=s.label,
                showlegend=False,
            )
        )

    for lab in labels:
        if lab.polyline:
            fig.add_trace(
                go.Scatter(
                    x=[p[0] for p in lab.polyline],
                    y=[-p[1] for p in lab.polyline],
                    mode="lines",
                    line=dict(color=LEADER_COLOR, width=1),
                    hoverinfo="skip",
                    showlegend=False,
                )
            )
        fig.add_annotation(
            x=lab.x,
            y=-lab.y,
            text=f"<b>{lab.slice.label}</b>",
            showarrow=False,
            xanchor=_XANCHOR.get(lab.text_anchor, "center"),
            font=dict(size=font_size, color="black" if lab.text_anchor == "middle" else None),
        )

    half_w = box.width / 2
    half_h = box.height / 2
    fig.update_xaxes(visible=False, range=[-half_w, half_w])
    fig.update_yaxes(visible=False, range=[-half_h, half_h], scaleanchor="x", scaleratio=1)
    return _base_layout(fig, box, title)


def bar_figure(layout: BarLayout, box: ChartBox = BAR_BOX, title: Optional[str] = None) -> go.Figure:
    bars = layout.bars
    fig = go.Figure(
        go.Bar(
            x=[b.x + b.width / 2 for b in bars],
            y=[b.value for b in bars],
            width=[b.width for b in bars],
            marker_color=[b.color for b in bars],
            hovertext=[f"{b.category}: {b.value}" for b in bars],
            hoverinfo="text",
        )
    )
    fig.update_xaxes(
        range=[0, box.width],
        tickvals=[b.x + b.width / 2 for b in bars],
        ticktext=[b.category for b in bars],
        tickangle=-45,
    )
    fig.update_yaxes(range=list(layout.y_scale.domain), tickvals=layout.y_scale.ticks())
    return _base_layout(fig, box, title)


def timeline_figure(layout: TimelineLayout, box: ChartBox = TIMELINE_BOX, title: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    for category, color in layout.legend:
        mine = [b for b in layout.bars if b.category == category]
        fig.add_trace(
            go.Bar(
                x=[b.x + b.width / 2 for b in mine],
                y=[b.count for b in mine],
                width=[b.width for b in mine],
                marker_color=color,
                name=category,
                hovertext=[b.tooltip for b in mine],
                hoverinfo="text",
            )
        )
    # bars already carry their x offsets
    fig.update_layout(barmode="overlay")
    fig.update_xaxes(
        range=[0, box.width],
        tickvals=[x for x, _ in layout.ticks],
        ticktext=[t for _, t in layout.ticks],
    )
    fig.update_yaxes(range=list(layout.y_scale.domain), tickvals=layout.y_scale.ticks())
    return _base_layout(fig, box, title)
