"""
Tests for lonerbox_data/scripts/export_summaries.py
"""

import pandas as pd

from lonerbox_data.scripts.export_summaries import export_summaries, main


class TestExportSummaries:
    def test_writes_csvs(self, claims_csv, timeline_csv, tmp_path):
        out = tmp_path / "out"
        written = export_summaries(str(claims_csv), str(timeline_csv), str(out))

        assert set(written) == {"known_groups", "open_groups", "claim_counts", "verdicts", "timeline"}
        assert all(p.exists() for p in written.values())

        known = pd.read_csv(written["known_groups"])
        assert list(known["Orient Affiliation"]) == sorted(known["Orient Affiliation"], key=str.casefold)
        assert known.set_index("Orient Affiliation").loc["Hamas", "Total"] == 3

        verdicts = pd.read_csv(written["verdicts"])
        assert dict(zip(verdicts["Verdict"], verdicts["Count"])) == {"Combatant": 4, "Civilian": 1}

        timeline = pd.read_csv(written["timeline"])
        assert timeline["Deaths"].sum() == 4

    def test_png_output(self, claims_csv, timeline_csv, tmp_path):
        written = export_summaries(str(claims_csv), str(timeline_csv), str(tmp_path / "png"), png=True)
        assert written["known_groups_png"].stat().st_size > 0
        assert written["timeline_png"].stat().st_size > 0

    def test_missing_inputs_give_empty_tables(self, tmp_path, capsys):
        written = export_summaries(str(tmp_path / "a.csv"), str(tmp_path / "b.csv"), str(tmp_path / "o"))
        assert pd.read_csv(written["verdicts"]).empty
        assert "Claims records: 0" in capsys.readouterr().out

    def test_main_cli(self, claims_csv, timeline_csv, tmp_path, capsys):
        main([
            "--claims", str(claims_csv),
            "--timeline", str(timeline_csv),
            "--out", str(tmp_path / "cli"),
            "--log-level", "WARNING",
        ])
        assert (tmp_path / "cli" / "claim_counts.csv").exists()
        assert "Timeline records: 6" in capsys.readouterr().out
