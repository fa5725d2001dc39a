"""
Tests for cli.py - command line interface.
"""

import io
import json
from unittest.mock import patch

import pytest
from rich.console import Console

from hitzkale.cli import ExplorerREPL, display_order, main, render_state
from hitzkale.core.controller import QueryController
from hitzkale.core.models import QueryStatus
from hitzkale.utils.config_manager import Config
from hitzkale.utils.metrics_tracker import Metrics


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestCLIBasics:
    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert "hitzkale 0.1.0" in capsys.readouterr().out

    def test_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        assert "suffix" in capsys.readouterr().out

    def test_no_args(self, capsys):
        assert main([]) == 1


class TestSearchCommand:
    def test_json_base_search(self, capsys):
        assert main(["search", "etxe", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["status"] == "results"
        assert payload["kind"] == "base"
        assert [r["suffix"] for r in payload["results"]] == ["kide", "ko", "koandre", "ratu"]
        assert payload["selected"] == payload["results"][0]["id"]

    def test_json_suffix_search_with_select(self, capsys):
        assert main(["search", "*keria", "--json", "--select", "2"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["kind"] == "suffix"
        assert payload["selected"] == payload["results"][1]["id"]

    def test_select_out_of_range(self):
        assert main(["search", "etxe", "--select", "99"]) == 2

    def test_unrecognized_suffix(self, capsys):
        assert main(["search", "*zale", "--json"]) == 1
        payload = json.loads(capsys.readouterr().out)
        assert payload["status"] == "failed"
        assert "kide" in payload["error"]

    def test_rich_output(self, capsys):
        assert main(["search", "zori"]) == 0
        out = capsys.readouterr().out
        assert "ontasun" in out
        assert "felicidad" in out

    def test_no_results_exit_code(self):
        assert main(["search", "zzz"]) == 1

    def test_config_file_changes_whitelist(self, tmp_path, capsys):
        cfg = tmp_path / "c.json"
        cfg.write_text(json.dumps({"suffixes": ["gile"]}), encoding="utf8")
        assert main(["--config", str(cfg), "search", "*gile", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert [r["full_form"] for r in payload["results"]] == ["langile"]

    def test_broken_data_file(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("[{\"id\": 1}]", encoding="utf8")
        cfg = tmp_path / "c.json"
        cfg.write_text(json.dumps({"data_files": [str(bad)]}), encoding="utf8")
        assert main(["--config", str(cfg), "search", "etxe"]) == 1


class TestImportCommand:
    def test_import_csv(self, tmp_path):
        data = tmp_path / "words.json"
        data.write_text("[]", encoding="utf-8")
        csv_path = tmp_path / "rows.csv"
        csv_path.write_text("basque,spanish\nlankide,colega\n", encoding="utf-8")
        assert main(["import-csv", str(csv_path), "--data", str(data)]) == 0
        assert json.loads(data.read_text(encoding="utf-8"))[0]["word"] == "lankide"

    def test_import_failure(self, tmp_path):
        assert main(["import-csv", str(tmp_path / "none.csv"), "--data", str(tmp_path / "w.json")]) == 1

    def test_import_bad_encoding_reports_error(self, tmp_path, capsys):
        csv_path = tmp_path / "rows.csv"
        csv_path.write_bytes("basque,spanish\nlankide,compañero\n".encode("latin-1"))
        assert main(["import-csv", str(csv_path), "--data", str(tmp_path / "w.json")]) == 1
        assert "Import failed" in capsys.readouterr().out


class TestREPL:
    @pytest.fixture
    def repl(self, bundled_store):
        controller = QueryController(bundled_store, latency=0)
        return ExplorerREPL(controller, Config(), Metrics(), out=make_console())

    def test_search_and_select(self, repl):
        repl.handle_line("etxe")
        state = repl.controller.state
        assert state.status is QueryStatus.RESULTS
        repl.handle_line("/select 3")
        assert repl.controller.state.selected == state.results[2]
        assert repl.metrics.count("match_time") == 1

    def test_select_follows_grouped_order(self, repl):
        repl.handle_line("*kide")
        order = display_order(repl.controller.state)
        repl.handle_line("/select 2")
        assert repl.controller.state.selected == order[1]

    def test_bad_select(self, repl):
        repl.handle_line("/select 1")
        repl.handle_line("etxe")
        repl.handle_line("/select x")
        assert "usage" in repl.out.file.getvalue()

    def test_clear_and_blank(self, repl):
        repl.handle_line("etxe")
        repl.handle_line("/clear")
        assert repl.controller.state.status is QueryStatus.IDLE
        repl.handle_line("etxe")
        repl.handle_line("   ")
        assert repl.controller.state.status is QueryStatus.IDLE

    def test_commands(self, repl):
        repl.handle_line("/suffixes")
        repl.handle_line("/stats")
        repl.handle_line("/config")
        repl.handle_line("/config nope 1")
        repl.handle_line("/bogus")
        out = repl.out.file.getvalue()
        assert "kide, tegi, kor, tasun, keria" in out
        assert "No such option" in out
        assert "Unknown command" in out

    def test_run_loop(self, repl):
        with patch("hitzkale.cli.Prompt.ask", side_effect=["lan", "/select 2", "/quit"]):
            repl.run()
        assert repl.running is False
        assert repl.controller.state.selected.full_form == "langile"

    def test_run_loop_eof(self, repl):
        with patch("hitzkale.cli.Prompt.ask", side_effect=EOFError):
            repl.run()
        assert repl.running is False


def test_render_failed_state(controller):
    out = make_console()
    render_state(controller.submit_query("*"), out)
    assert "suffix is required" in out.file.getvalue()


def test_render_limit_spans_letter_groups(bundled_controller):
    state = bundled_controller.submit_query("*kide")
    order = display_order(state)
    assert len(order) > 3
    out = make_console()
    render_state(state, out, limit=3)
    text = out.file.getvalue()
    assert f"... {len(order) - 3} more" in text
    shown = order[:3]
    for r in shown:
        assert r.full_form in text
    for r in order[3:]:
        if r.full_form == "kide" or any(r.full_form in s.full_form for s in shown):
            continue
        assert r.full_form not in text
