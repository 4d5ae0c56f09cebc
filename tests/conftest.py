"""
Pytest fixtures for Lonerbox Data tests.

Provides small in-memory record lists for both dataset shapes and writes
them as CSV files into tmp_path for loader / app tests.
"""

import csv
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lonerbox_data.config import CLAIMS_DATASET, TIMELINE_DATASET


def _claim(name, affiliation, verdict, died="01/01/2009"):
    row = {c: "" for c in CLAIMS_DATASET.columns}
    row.update({"Name": name, "Orient Affiliation": affiliation, "Verdict": verdict, "Date of death": died})
    return row


def _entry(name, claim, verdict, died):
    row = {c: "" for c in TIMELINE_DATASET.columns}
    row.update({"Name": name, "Orient claim": claim, "Verdict": verdict, "Date of death": died})
    return row


CLAIM_ROWS = [
    _claim("A", "Hamas", "Combatant"),
    _claim("B", "Hamas (Civilian)", "Civilian"),
    _claim("C", "Fatah Member", "Combatant"),
    _claim("D", "Fatah", ""),
    _claim("E", "PIJ", "Combatant"),
    _claim("F", "Unaffiliated", "Civilian"),
    _claim("G", "", ""),
    _claim("H", "Police", "Unknown"),
    _claim("I", "  Hamas  ", "Combatant"),
]

TIMELINE_ROWS = [
    _entry("A", "Hamas", "Combatant", "01/01/2009"),
    _entry("B", "Hamas", "Combatant", "01/01/2009"),
    _entry("C", "PIJ", "Civilian", "01/01/2009"),
    _entry("D", "Hamas", "Combatant", "27/12/2008"),
    _entry("E", "Hamas", "Combatant", "31/13/2024"),
    _entry("F", "Fatah", "", ""),
]


def write_csv(path: Path, columns, rows) -> Path:
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(columns))
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def claim_records():
    return [dict(r) for r in CLAIM_ROWS]


@pytest.fixture
def timeline_records():
    return [dict(r) for r in TIMELINE_ROWS]


@pytest.fixture
def claims_csv(tmp_path):
    return write_csv(tmp_path / CLAIMS_DATASET.filename, CLAIMS_DATASET.columns, CLAIM_ROWS)


@pytest.fixture
def timeline_csv(tmp_path):
    return write_csv(tmp_path / TIMELINE_DATASET.filename, TIMELINE_DATASET.columns, TIMELINE_ROWS)


@pytest.fixture
def data_dir(tmp_path, claims_csv, timeline_csv, monkeypatch):
    """tmp_path holding both CSV files, exported as LONERBOX_DATA_DIR."""
    monkeypatch.setenv("LONERBOX_DATA_DIR", str(tmp_path))
    return tmp_path
