"""Tests for the command-line interface."""

import json
import sys
from pathlib import Path

import pytest

from incremental_insights.cli.main import main


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["incremental-insights", *args])
    main()


class TestAnalyzeCommand:
    def test_table_output(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(monkeypatch, "analyze", "--input", str(export_csv_path))
        out = capsys.readouterr().out
        assert out.startswith("Campaigns: 4\nQualifying: 2\nTotal Opportunity: $13,505.00\n")
        assert "Spring Launch" in out

    def test_flags_override_defaults(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(
            monkeypatch,
            "analyze",
            "--input", str(export_csv_path),
            "--score-threshold", "80",
            "--partner", "Acme Media",
        )
        out = capsys.readouterr().out
        assert "Campaigns: 3\nQualifying: 2\nTotal Opportunity: $15,505.00" in out

    def test_json_output(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(monkeypatch, "analyze", "--input", str(export_csv_path), "--json", "--explain")
        data = json.loads(capsys.readouterr().out)
        assert data["totals"] == {"total_opportunity": 13505.0, "qualifying_count": 2}
        assert [r["index"] for r in data["records"]] == [0, 3, 1, 2]
        assert "raw" not in data["records"][0]
        assert all(r["passed"] for r in data["filter_results"])

    def test_group_by_and_output_file(self, monkeypatch, capsys, export_csv_path: Path, tmp_path: Path) -> None:
        out_path = tmp_path / "summary.txt"
        _run(
            monkeypatch,
            "analyze",
            "--input", str(export_csv_path),
            "--group-by", "partner",
            "--output", str(out_path),
        )
        assert "Analyzed: 2 qualifying of 4" in capsys.readouterr().out
        text = out_path.read_text(encoding="utf-8")
        assert text.splitlines()[4].startswith("Partner")
        assert "Beta Digital" in text

    def test_settings_yaml(self, monkeypatch, capsys, export_csv_path: Path, tmp_path: Path) -> None:
        settings = tmp_path / "settings.yaml"
        settings.write_text(
            "thresholds:\n  score_threshold: 80\nfilters:\n  kpi_types: [CPA]\n",
            encoding="utf-8",
        )
        _run(monkeypatch, "analyze", "--input", str(export_csv_path), "--settings", str(settings))
        out = capsys.readouterr().out
        assert "Campaigns: 2\nQualifying: 2" in out

    def test_default_kpi_types(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(monkeypatch, "analyze", "--input", str(export_csv_path), "--default-kpi-types")
        assert "Campaigns: 3\nQualifying: 1" in capsys.readouterr().out

    def test_out_of_range_threshold_exits(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, "analyze", "--input", str(export_csv_path), "--pacing-threshold", "150")
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert err.startswith("Invalid settings:")
        assert "pacing_threshold" in err

    def test_invalid_settings_file_exits(self, monkeypatch, capsys, export_csv_path: Path, tmp_path: Path) -> None:
        settings = tmp_path / "settings.yaml"
        settings.write_text("sort:\n  key: score\n  direction: sideways\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, "report", "--input", str(export_csv_path), "--target", "Acme Media",
                 "--settings", str(settings))
        assert exc.value.code == 1
        assert "Invalid settings:" in capsys.readouterr().err

    def test_empty_file_exits(self, monkeypatch, capsys, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, "analyze", "--input", str(path))
        assert exc.value.code == 1
        assert "appears to be empty" in capsys.readouterr().err

    def test_unsupported_file_exits(self, monkeypatch, capsys, tmp_path: Path) -> None:
        path = tmp_path / "export.txt"
        path.write_text("Partner\nP1\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, "analyze", "--input", str(path))
        assert exc.value.code == 1
        assert "Error parsing file" in capsys.readouterr().err


class TestOtherCommands:
    def test_fields(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(monkeypatch, "fields", "--input", str(export_csv_path))
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 12
        score_line = next(line for line in lines if line.split()[0] == "score")
        assert score_line.endswith("Avg. Campaign Decision Power Score")

    def test_pivot_collapsed(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(monkeypatch, "pivot", "--input", str(export_csv_path), "--collapse")
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("Acme Media (3)  avg score 110")

    def test_pivot_expanded(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(monkeypatch, "pivot", "--input", str(export_csv_path))
        lines = capsys.readouterr().out.splitlines()
        # 2 partners, 3 advertisers, 4 campaigns
        assert len(lines) == 9
        assert lines[1].startswith("  Northwind (2)")
        assert lines[2].startswith("    Spring Launch  score 120")

    def test_targets(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(monkeypatch, "targets", "--input", str(export_csv_path), "--scope", "advertiser")
        assert capsys.readouterr().out.splitlines() == ["Contoso", "Fabrikam", "Northwind"]

    def test_report(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(
            monkeypatch,
            "report",
            "--input", str(export_csv_path),
            "--target", "Acme Media",
            "--style", "executive",
        )
        out = capsys.readouterr().out
        assert out.startswith("Subject: Executive Summary: Incremental Growth Opportunity - Acme Media")
        assert "**$12,505.00**" in out

    def test_report_no_opportunities(self, monkeypatch, capsys, export_csv_path: Path) -> None:
        _run(
            monkeypatch,
            "report",
            "--input", str(export_csv_path),
            "--scope", "campaign",
            "--target", "Always On",
        )
        assert capsys.readouterr().out.startswith(
            "No qualifying incremental opportunities found for 'Always On'"
        )
