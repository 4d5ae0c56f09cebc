"""
Tests for lonerbox_data/loader.py and the data-path configuration.
"""

import logging

import pandas as pd
import pytest

from lonerbox_data.config import CLAIMS_DATASET, TIMELINE_DATASET, data_location, resolve_data_path
from lonerbox_data.loader import LoadToken, RecordLoadError, load_records, read_records
from lonerbox_data.logs import PACKAGE_LOGGER, configure_logging


# ── read_records ──────────────────────────────────────────────────────────────

class TestReadRecords:
    def test_header_keyed_strings_in_order(self, claims_csv):
        records = read_records(str(claims_csv))
        assert len(records) == 9
        assert list(records[0]) == list(CLAIMS_DATASET.columns)
        assert [r["Name"] for r in records] == list("ABCDEFGHI")
        assert all(isinstance(v, str) for r in records for v in r.values())

    def test_whitespace_and_blanks_kept_raw(self, claims_csv):
        records = read_records(str(claims_csv))
        assert records[8]["Orient Affiliation"] == "  Hamas  "
        assert records[6]["Orient Affiliation"] == ""

    def test_numeric_looking_values_stay_strings(self, tmp_path):
        path = tmp_path / "n.csv"
        path.write_text("Name,Verdict\n007,NA\n", encoding="utf-8")
        assert read_records(str(path)) == [{"Name": "007", "Verdict": "NA"}]

    def test_short_rows_padded_with_blank(self, tmp_path):
        path = tmp_path / "short.csv"
        path.write_text("Name,Orient claim,Verdict\nA,Hamas\nB,PIJ,Combatant\n", encoding="utf-8")
        records = read_records(str(path))
        assert records[0] == {"Name": "A", "Orient claim": "Hamas", "Verdict": ""}
        assert records[1]["Verdict"] == "Combatant"

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "blank.csv"
        path.write_text("Name,Verdict\nA,Civilian\n\n\nB,Combatant\n", encoding="utf-8")
        assert [r["Name"] for r in read_records(str(path))] == ["A", "B"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        assert read_records(str(path)) == []

    def test_header_only(self, tmp_path):
        path = tmp_path / "header.csv"
        path.write_text("Name,Verdict\n", encoding="utf-8")
        assert read_records(str(path)) == []

    def test_long_rows_keep_leading_cells(self, tmp_path):
        path = tmp_path / "long.csv"
        path.write_text("Name,Verdict\nA,Combatant,extra\nB,Civilian\n", encoding="utf-8")
        with pytest.warns(pd.errors.ParserWarning):
            records = read_records(str(path))
        assert records == [
            {"Name": "A", "Verdict": "Combatant"},
            {"Name": "B", "Verdict": "Civilian"},
        ]

    def test_undecodable_bytes_replaced(self, tmp_path):
        path = tmp_path / "bad_bytes.csv"
        path.write_bytes(b"Name,Orient Affiliation,Verdict\nA,Hamas,Combatant\nB,Fat\xffah,Civilian\n")
        records = load_records(str(path))
        assert [r["Name"] for r in records] == ["A", "B"]
        assert records[1]["Orient Affiliation"] == "Fat\ufffdah"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(RecordLoadError) as exc:
            read_records(str(tmp_path / "nope.csv"))
        assert isinstance(exc.value.__cause__, OSError)


# ── load_records ──────────────────────────────────────────────────────────────

class TestLoadRecords:
    def test_missing_file_logged_and_empty(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="lonerbox_data.loader"):
            assert load_records(str(tmp_path / "nope.csv")) == []
        assert "Error loading CSV file" in caplog.text

    def test_live_token(self, timeline_csv):
        token = LoadToken("timeline")
        assert len(load_records(str(timeline_csv), token=token)) == 6

    def test_cancelled_token_discards(self, timeline_csv, caplog):
        token = LoadToken("timeline")
        token.cancel()
        with caplog.at_level(logging.DEBUG, logger="lonerbox_data.loader"):
            assert load_records(str(timeline_csv), token=token) == []
        assert "Discarding 6 records" in caplog.text

    def test_token_repr(self):
        token = LoadToken("home")
        assert repr(token) == "LoadToken('home', live)"
        token.cancel()
        assert token.cancelled
        assert repr(token) == "LoadToken('home', cancelled)"


# ── config paths ──────────────────────────────────────────────────────────────

class TestDataPaths:
    def test_env_override(self, data_dir):
        assert data_location() == str(data_dir)
        assert CLAIMS_DATASET.path() == str(data_dir / CLAIMS_DATASET.filename)
        assert len(load_records(TIMELINE_DATASET.path())) == 6

    def test_default_is_repo_data_dir(self, monkeypatch):
        monkeypatch.delenv("LONERBOX_DATA_DIR", raising=False)
        assert data_location().endswith("data")

    def test_url_base(self):
        assert resolve_data_path("x.csv", "https://example.org/static/") == "https://example.org/static/x.csv"


# ── logging ───────────────────────────────────────────────────────────────────

class TestConfigureLogging:
    def test_single_handler_across_calls(self):
        logger = configure_logging("DEBUG")
        configure_logging("WARNING")
        named = [h for h in logger.handlers if h.get_name() == "lonerbox_console"]
        assert len(named) == 1
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert configure_logging("LOUD").level == logging.INFO

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("LONERBOX_LOG_LEVEL", "error")
        assert configure_logging().level == logging.ERROR
