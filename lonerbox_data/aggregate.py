"""
Aggregator: records -> summary structures.

All functions here are pure: they read the record list and build new
summary objects. A record whose relevant field is blank contributes to no
summary; a date that does not parse as DD/MM/YYYY only keeps the record
out of the time bins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .config import DATE_FORMAT, DEFAULT_CATEGORIES, CategoryConfig, Dataset
from .loader import Record

logger = logging.getLogger(__name__)

SORT_MILITIA = "militia"
SORT_LABEL = "label"


# -----------------------------
# Summary types
# -----------------------------
@dataclass
class GroupSummary:
    category: str
    militia_count: int = 0
    civilian_count: int = 0
    total: int = 0

    def add(self, civilian: bool) -> None:
        if civilian:
            self.civilian_count += 1
        else:
            self.militia_count += 1
        self.total += 1


@dataclass(frozen=True)
class ClaimCount:
    claim: str
    count: int


@dataclass(frozen=True)
class VerdictSummary:
    verdict: str
    count: int


@dataclass
class TimeBucket:
    date: date
    counts: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AggregationConfig:
    category_field: str
    verdict_field: str = "Verdict"
    date_field: str = "Date of death"
    categories: CategoryConfig = DEFAULT_CATEGORIES
    date_format: str = DATE_FORMAT
    exclude_labels: Tuple[str, ...] = ()
    sort_by: Optional[str] = None

    @classmethod
    def for_dataset(cls, dataset: Dataset, **kwargs) -> "AggregationConfig":
        return cls(
            category_field=dataset.category_field,
            verdict_field=dataset.verdict_field,
            date_field=dataset.date_field,
            **kwargs,
        )


@dataclass
class Summary:
    record_count: int
    known_groups: List[GroupSummary]
    open_groups: List[GroupSummary]
    claim_counts: List[ClaimCount]
    verdicts: List[VerdictSummary]
    time_buckets: List[TimeBucket]
    militia_total: int
    civilian_total: int


# -----------------------------
# Helpers
# -----------------------------
def _field(record: Mapping[str, str], name: str) -> str:
    value = record.get(name)
    if not isinstance(value, str):
        return ""
    return value.strip()


def is_civilian(value: str, markers: Sequence[str]) -> bool:
    return any(m in value for m in markers)


def match_label(value: str, labels: Sequence[str]) -> Optional[str]:
    """First label (in table order) that occurs inside value."""
    for label in labels:
        if label in value:
            return label
    return None


def parse_death_date(s: Optional[str], fmt: str = DATE_FORMAT) -> Optional[date]:
    if not s:
        return None
    try:
        return datetime.strptime(s.strip(), fmt).date()
    except ValueError:
        return None


def sort_groups(groups: List[GroupSummary], sort_by: Optional[str]) -> List[GroupSummary]:
    if sort_by is None:
        return list(groups)
    if sort_by == SORT_MILITIA:
        return sorted(groups, key=lambda g: g.militia_count)
    if sort_by == SORT_LABEL:
        return sorted(groups, key=lambda g: g.category.casefold())
    raise ValueError(f"sort_by must be one of {[SORT_MILITIA, SORT_LABEL]}; got {sort_by!r}")


# -----------------------------
# Grouping
# -----------------------------
def group_known_categories(
    records: Iterable[Record],
    category_field: str,
    categories: CategoryConfig = DEFAULT_CATEGORIES,
    *,
    exclude: Iterable[str] = (),
    sort_by: Optional[str] = None,
) -> List[GroupSummary]:
    """Militia/civilian counts per known label, matched by substring.

    Every label gets an entry, zero counts included. Values that mention
    no known label are left out of this summary.
    """
    labels = categories.labels
    markers = categories.civilian_markers
    summary: Dict[str, GroupSummary] = {label: GroupSummary(label) for label in labels}

    for record in records:
        value = _field(record, category_field)
        if not value:
            continue
        label = match_label(value, labels)
        if label is None:
            continue
        summary[label].add(is_civilian(value, markers))

    excluded = set(exclude)
    groups = [g for g in summary.values() if g.category not in excluded]
    return sort_groups(groups, sort_by)


def group_raw_categories(
    records: Iterable[Record],
    category_field: str,
    categories: CategoryConfig = DEFAULT_CATEGORIES,
    *,
    sort_by: Optional[str] = None,
) -> List[GroupSummary]:
    """Militia/civilian counts keyed by the exact (trimmed) value."""
    markers = categories.civilian_markers
    summary: Dict[str, GroupSummary] = {}
    for record in records:
        value = _field(record, category_field)
        if not value:
            continue
        if value not in summary:
            summary[value] = GroupSummary(value)
        summary[value].add(is_civilian(value, markers))
    return sort_groups(list(summary.values()), sort_by)


def count_claims(records: Iterable[Record], category_field: str) -> List[ClaimCount]:
    counts: Dict[str, int] = {}
    for record in records:
        value = _field(record, category_field)
        if value:
            counts[value] = counts.get(value, 0) + 1
    return [ClaimCount(k, v) for k, v in sorted(counts.items(), key=lambda kv: kv[0].casefold())]


def tally_verdicts(records: Iterable[Record], verdict_field: str = "Verdict") -> List[VerdictSummary]:
    counts: Dict[str, int] = {}
    for record in records:
        verdict = _field(record, verdict_field)
        if verdict:
            counts[verdict] = counts.get(verdict, 0) + 1
    return [VerdictSummary(k, v) for k, v in counts.items()]


def split_totals(groups: Iterable[GroupSummary]) -> Tuple[int, int]:
    militia = civilian = 0
    for g in groups:
        militia += g.militia_count
        civilian += g.civilian_count
    return militia, civilian


def bin_by_date(
    records: Iterable[Record],
    category_field: str,
    date_field: str = "Date of death",
    fmt: str = DATE_FORMAT,
) -> List[TimeBucket]:
    """Deaths per (date, category), one bucket per date, oldest first."""
    buckets: Dict[date, TimeBucket] = {}
    skipped = 0
    for record in records:
        day = parse_death_date(record.get(date_field), fmt)
        if day is None:
            skipped += 1
            continue
        claim = record.get(category_field) or ""
        if not claim.strip():
            continue
        bucket = buckets.setdefault(day, TimeBucket(day))
        bucket.counts[claim] = bucket.counts.get(claim, 0) + 1

    if skipped:
        logger.debug("Time bins: %d records without a usable date", skipped)
    return [buckets[d] for d in sorted(buckets)]


# -----------------------------
# Filtering
# -----------------------------
def filter_records(records: Sequence[Record], filters: Mapping[str, str]) -> List[Record]:
    """Records whose fields equal every active filter value ("" = All)."""
    active = {k: v for k, v in filters.items() if v}
    if not active:
        return list(records)
    return [r for r in records if all(r.get(k) == v for k, v in active.items())]


def filter_options(records: Iterable[Record], field_name: str) -> List[str]:
    seen: Dict[str, None] = {}
    for record in records:
        value = record.get(field_name)
        if isinstance(value, str) and value and value not in seen:
            seen[value] = None
    return list(seen)


# -----------------------------
# Pipeline
# -----------------------------
def aggregate(records: Sequence[Record], config: AggregationConfig) -> Summary:
    known = group_known_categories(
        records,
        config.category_field,
        config.categories,
        exclude=config.exclude_labels,
        sort_by=config.sort_by,
    )
    open_groups = group_raw_categories(records, config.category_field, config.categories)
    militia, civilian = split_totals(known)

    summary = Summary(
        record_count=len(records),
        known_groups=known,
        open_groups=open_groups,
        claim_counts=count_claims(records, config.category_field),
        verdicts=tally_verdicts(records, config.verdict_field),
        time_buckets=bin_by_date(records, config.category_field, config.date_field, config.date_format),
        militia_total=militia,
        civilian_total=civilian,
    )
    logger.debug(
        "Aggregated %d records: %d known groups, %d raw groups, %d verdicts, %d dates",
        summary.record_count,
        len(known),
        len(open_groups),
        len(summary.verdicts),
        len(summary.time_buckets),
    )
    return summary
