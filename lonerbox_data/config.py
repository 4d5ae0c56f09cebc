# lonerbox_data/config.py
#
# Datasets, the category table and chart constants shared by every page.

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# -----------------------------
# Paths / environment
# -----------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]  # repo root
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_LOG_LEVEL = "INFO"


def data_location() -> str:
    """Directory (or base URL) the CSV files are read from."""
    override = os.environ.get("LONERBOX_DATA_DIR", "").strip()
    if override:
        return override
    return str(DEFAULT_DATA_DIR)


def resolve_data_path(filename: str, base: Optional[str] = None) -> str:
    base = base if base is not None else data_location()
    if "://" in base:
        return base.rstrip("/") + "/" + filename
    return str(Path(base).expanduser() / filename)


# -----------------------------
# Datasets
# -----------------------------
@dataclass(frozen=True)
class Dataset:
    name: str
    filename: str
    columns: Tuple[str, ...]
    category_field: str
    verdict_field: str = "Verdict"
    date_field: str = "Date of death"

    def path(self, base: Optional[str] = None) -> str:
        return resolve_data_path(self.filename, base)


CLAIMS_DATASET = Dataset(
    name="claims",
    filename="lonerbox_palestinian_police_data.csv",
    columns=(
        "Name",
        "Arabic Name",
        "Date of death",
        "Orient Affiliation",
        "Orient additional info",
        "Al-Qassam profile",
        "Additional Info",
        "Verdict",
    ),
    category_field="Orient Affiliation",
)

TIMELINE_DATASET = Dataset(
    name="timeline",
    filename="cast_lead_lonerbox_data.csv",
    columns=(
        "Date",
        "Name",
        "Date of death",
        "Orient claim",
        "Orient note",
        "al-Qassam entry",
        "Verdict",
        "Additional notes",
    ),
    category_field="Orient claim",
)

DATE_FORMAT = "%d/%m/%Y"


# -----------------------------
# Category table
# -----------------------------
@dataclass(frozen=True)
class Category:
    label: str
    color: str
    is_civilian_synonym: bool = False


# A value containing any of these is counted as civilian.
CIVILIAN_KEYWORDS: Tuple[str, ...] = ("Civilian",)

FALLBACK_COLOR = "grey"

# d3.schemeCategory10, used for open-ended category sets
CATEGORY10: Tuple[str, ...] = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
)


@dataclass(frozen=True)
class CategoryConfig:
    """Ordered known-category table.

    Order matters: when a value mentions more than one label, the label
    listed first wins.
    """

    categories: Tuple[Category, ...]
    civilian_keywords: Tuple[str, ...] = CIVILIAN_KEYWORDS
    fallback_color: str = FALLBACK_COLOR

    @property
    def labels(self) -> List[str]:
        return [c.label for c in self.categories]

    @property
    def civilian_markers(self) -> Tuple[str, ...]:
        synonyms = tuple(c.label for c in self.categories if c.is_civilian_synonym)
        return tuple(self.civilian_keywords) + synonyms

    @property
    def colors(self) -> Dict[str, str]:
        return {c.label: c.color for c in self.categories}

    def color_for(self, label: str) -> str:
        return self.colors.get(label, self.fallback_color)


DEFAULT_CATEGORIES = CategoryConfig(
    categories=(
        Category("Army of Islam", "white"),
        Category("Fatah", "yellow"),
        Category("Hamas", "green"),
        Category("PIJ", "black"),
        Category("PRC", "black"),
        Category("Unaffiliated", "grey", is_civilian_synonym=True),
        Category("Warrior", "red"),
    )
)

SPLIT_COLORS: Dict[str, str] = {"Militia": "blue", "Civilian": "orange"}


# -----------------------------
# Chart constants
# -----------------------------
@dataclass(frozen=True)
class Margin:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class ChartBox:
    width: float
    height: float
    margin: Margin = field(default_factory=lambda: Margin(0, 0, 0, 0))

    @property
    def plot_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def plot_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom


PIE_BOX = ChartBox(800, 400, Margin(top=50, right=150, bottom=50, left=50))
PIE_BOX_PLAIN = ChartBox(800, 400)
BAR_BOX = ChartBox(800, 400, Margin(top=20, right=30, bottom=40, left=40))
TIMELINE_BOX = ChartBox(2000, 500, Margin(top=20, right=30, bottom=50, left=50))

LABEL_SPACING = 20.0
LABEL_RADIUS_FACTOR = 1.1
LABEL_ARC_FACTOR = 0.8
BAND_PADDING = 0.1
SUB_BAR_DIVISOR = 4
