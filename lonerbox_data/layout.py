"""
Chart layout: summaries -> geometry.

Angles follow the d3 convention (0 at 12 o'clock, increasing clockwise)
and y grows downwards, as in SVG. The plotly builders in `charts.py` flip
y when drawing.

Nothing here touches the summaries it is given.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .aggregate import TimeBucket
from .config import (
    BAND_PADDING,
    BAR_BOX,
    CATEGORY10,
    LABEL_ARC_FACTOR,
    LABEL_RADIUS_FACTOR,
    LABEL_SPACING,
    SUB_BAR_DIVISOR,
    TIMELINE_BOX,
    ChartBox,
)

TAU = 2 * math.pi
Point = Tuple[float, float]
ColorFn = Callable[[str], str]

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


# -----------------------------
# Pie
# -----------------------------
@dataclass(frozen=True)
class PieSlice:
    index: int
    category: str
    value: float
    start_angle: float
    end_angle: float
    percent: float
    label: str

    @property
    def mid_angle(self) -> float:
        return self.start_angle + (self.end_angle - self.start_angle) / 2


@dataclass(frozen=True)
class PieLabel:
    """Where a slice's text goes, and the leader line that points to it."""

    slice: PieSlice
    x: float
    y: float
    text_anchor: str
    polyline: Tuple[Point, ...] = ()


def format_slice_label(category: str, value: float, total: float) -> str:
    percent = value / total * 100 if total else 0.0
    shown = int(value) if float(value).is_integer() else value
    return f"{category}: {percent:.1f}% ({shown})"


def pie_slices(items: Sequence[Tuple[str, float]]) -> List[PieSlice]:
    """Contiguous slices in input order, starting at angle 0."""
    if not items:
        return []
    values = np.array([max(float(v), 0.0) for _, v in items])
    total = float(values.sum())
    spans = values / total * TAU if total > 0 else np.zeros_like(values)
    ends = np.cumsum(spans)
    starts = ends - spans

    slices = []
    for i, (category, value) in enumerate(items):
        percent = round(float(value) / total * 100, 1) if total else 0.0
        slices.append(
            PieSlice(
                index=i,
                category=category,
                value=value,
                start_angle=float(starts[i]),
                end_angle=float(ends[i]),
                percent=percent,
                label=format_slice_label(category, value, total),
            )
        )
    return slices


def polar(angle: float, radius: float) -> Point:
    return (math.sin(angle) * radius, -math.cos(angle) * radius)


def arc_centroid(s: PieSlice, inner: float, outer: float) -> Point:
    return polar(s.mid_angle, (inner + outer) / 2)


def slice_outline(s: PieSlice, radius: float, segments_per_turn: int = 180) -> List[Point]:
    """Closed polygon (center, arc, center) approximating the wedge."""
    span = s.end_angle - s.start_angle
    steps = max(1, int(math.ceil(span / TAU * segments_per_turn)))
    angles = np.linspace(s.start_angle, s.end_angle, steps + 1)
    return [(0.0, 0.0)] + [polar(float(a), radius) for a in angles] + [(0.0, 0.0)]


def inside_labels(slices: Sequence[PieSlice], radius: float) -> List[PieLabel]:
    return [PieLabel(s, *arc_centroid(s, 0, radius), text_anchor="middle") for s in slices]


def initial_label_positions(
    slices: Sequence[PieSlice],
    radius: float,
    spacing: float = LABEL_SPACING,
) -> List[Point]:
    n = len(slices)
    positions = []
    for i, s in enumerate(slices):
        _, y = polar(s.mid_angle, radius * LABEL_ARC_FACTOR)
        side = 1 if s.mid_angle < math.pi else -1
        x = radius * LABEL_RADIUS_FACTOR * side
        y += i * spacing - n * spacing / 2
        positions.append((x, y))
    return positions


def resolve_overlaps(ys: Sequence[float], spacing: float = LABEL_SPACING) -> List[float]:
    """One top-to-bottom pass: push each y to at least `spacing` below the previous.

    Labels are not re-sorted by angle.
    """
    out = list(ys)
    for i in range(1, len(out)):
        if out[i] - out[i - 1] < spacing:
            out[i] = out[i - 1] + spacing
    return out


def outside_labels(
    slices: Sequence[PieSlice],
    radius: float,
    spacing: float = LABEL_SPACING,
) -> List[PieLabel]:
    initial = initial_label_positions(slices, radius, spacing)
    ys = resolve_overlaps([y for _, y in initial], spacing)

    labels = []
    for s, (x, _), y in zip(slices, initial, ys):
        right = s.mid_angle < math.pi
        polyline = (
            arc_centroid(s, 0, radius),
            arc_centroid(s, radius * LABEL_ARC_FACTOR, radius * LABEL_ARC_FACTOR),
            (x, y),
        )
        labels.append(PieLabel(s, x, y, "start" if right else "end", polyline))
    return labels


def pie_radius(box: ChartBox) -> float:
    return min(box.plot_width, box.plot_height) / 2


# -----------------------------
# Scales
# -----------------------------
def tick_increment(start: float, stop: float, count: int) -> float:
    """d3's tickIncrement: positive step, or negative inverse step below 1."""
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * math.pow(10, power)
    return -math.pow(10, -power) / factor


class LinearScale:
    def __init__(self, domain: Tuple[float, float], range_: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    def nice(self, count: int = 10) -> "LinearScale":
        start, stop = self.domain
        if not stop > start:
            return LinearScale(self.domain, self.range)
        prestep = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step
        return LinearScale((start, stop), self.range)

    def ticks(self, count: int = 10) -> List[float]:
        start, stop = self.domain
        if not stop > start:
            return [start]
        step = tick_increment(start, stop, count)
        if step > 0:
            lo, hi = math.ceil(start / step), math.floor(stop / step)
            return [i * step for i in range(lo, hi + 1)]
        inv = -step
        lo, hi = math.ceil(start * inv), math.floor(stop * inv)
        return [i / inv for i in range(lo, hi + 1)]


class BandScale:
    """d3.scaleBand with equal inner/outer padding and centered alignment."""

    def __init__(
        self,
        domain: Iterable[str],
        range_: Tuple[float, float],
        padding: float = BAND_PADDING,
        align: float = 0.5,
    ):
        self.domain = list(dict.fromkeys(domain))
        start, stop = float(range_[0]), float(range_[1])
        n = len(self.domain)
        self.step = (stop - start) / max(1, n - padding + padding * 2)
        start += (stop - start - self.step * (n - padding)) * align
        self.bandwidth = self.step * (1 - padding)
        self._positions = {key: start + self.step * i for i, key in enumerate(self.domain)}

    def __call__(self, key: str) -> Optional[float]:
        return self._positions.get(key)


class TimeScale:
    def __init__(self, domain: Tuple[date, date], range_: Tuple[float, float]):
        self.domain = domain
        self._linear = LinearScale((domain[0].toordinal(), domain[1].toordinal()), range_)

    def __call__(self, day: date) -> float:
        return self._linear(day.toordinal())

    def month_ticks(self, fmt: str = "%b %Y") -> List[Tuple[float, str]]:
        """First day of every month inside the domain."""
        first, last = self.domain
        year, month = first.year, first.month
        if first.day != 1:
            year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        ticks = []
        while date(year, month, 1) <= last:
            d = date(year, month, 1)
            ticks.append((self(d), d.strftime(fmt)))
            year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        return ticks


def ordinal_colors(domain: Iterable[str], palette: Sequence[str] = CATEGORY10) -> Dict[str, str]:
    return {key: palette[i % len(palette)] for i, key in enumerate(dict.fromkeys(domain))}


# -----------------------------
# Bars
# -----------------------------
@dataclass(frozen=True)
class Bar:
    category: str
    value: float
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass
class BarLayout:
    bars: List[Bar]
    x_scale: BandScale
    y_scale: LinearScale


def value_scale(max_value: float, box: ChartBox) -> LinearScale:
    bottom = box.height - box.margin.bottom
    return LinearScale((0, max_value), (bottom, box.margin.top)).nice()


def bar_layout(
    items: Sequence[Tuple[str, float]],
    colors: ColorFn | Mapping[str, str],
    box: ChartBox = BAR_BOX,
    padding: float = BAND_PADDING,
    fallback: str = "grey",
) -> BarLayout:
    x = BandScale([c for c, _ in items], (box.margin.left, box.width - box.margin.right), padding)
    y = value_scale(max((v for _, v in items), default=0), box)
    color_fn = colors if callable(colors) else (lambda c: colors.get(c, fallback))

    bars = []
    for category, value in items:
        top = y(value)
        bars.append(
            Bar(
                category=category,
                value=value,
                x=x(category),
                y=top,
                width=x.bandwidth,
                height=y(0) - top,
                color=color_fn(category),
            )
        )
    return BarLayout(bars, x, y)


# -----------------------------
# Grouped time-series bars
# -----------------------------
@dataclass(frozen=True)
class GroupedBar:
    day: date
    category: str
    count: int
    x: float
    y: float
    width: float
    height: float
    color: str
    tooltip: str


@dataclass
class TimelineLayout:
    bars: List[GroupedBar]
    y_scale: LinearScale
    x_scale: Optional[TimeScale] = None
    bar_width: float = 0.0
    ticks: List[Tuple[float, str]] = field(default_factory=list)
    legend: List[Tuple[str, str]] = field(default_factory=list)


def bar_tooltip(day: date, category: str, count: int) -> str:
    return f"Date: {day.strftime('%b %d, %Y')}<br>Claim: {category}<br>Deaths: {count}"


def timeline_layout(
    buckets: Sequence[TimeBucket],
    box: ChartBox = TIMELINE_BOX,
    divisor: int = SUB_BAR_DIVISOR,
    colors: Optional[Mapping[str, str]] = None,
) -> TimelineLayout:
    """Side-by-side sub-bars per date, each group centered on its date."""
    peak = max((c for b in buckets for c in b.counts.values()), default=0)
    y = value_scale(peak, box)
    if not buckets:
        return TimelineLayout(bars=[], y_scale=y)

    ordered = sorted(buckets, key=lambda b: b.date)
    x = TimeScale((ordered[0].date, ordered[-1].date), (box.margin.left, box.width - box.margin.right))
    if colors is None:
        colors = ordinal_colors(c for b in ordered for c in b.counts)

    bar_width = box.plot_width / len(ordered) / divisor
    bars = []
    for bucket in ordered:
        center = x(bucket.date)
        group_width = bar_width * len(bucket.counts)
        for i, (category, count) in enumerate(bucket.counts.items()):
            top = y(count)
            bars.append(
                GroupedBar(
                    day=bucket.date,
                    category=category,
                    count=count,
                    x=center + i * bar_width - group_width / 2,
                    y=top,
                    width=bar_width,
                    height=y(0) - top,
                    color=colors.get(category, "grey"),
                    tooltip=bar_tooltip(bucket.date, category, count),
                )
            )

    legend = [(c, colors[c]) for c in dict.fromkeys(b.category for b in bars) if c in colors]
    return TimelineLayout(
        bars=bars,
        y_scale=y,
        x_scale=x,
        bar_width=bar_width,
        ticks=x.month_ticks(),
        legend=legend,
    )
