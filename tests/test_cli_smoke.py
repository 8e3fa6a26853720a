import argparse
import json
import logging
import os

import wealthplan.__main__ as cli
from tests.helpers import clone_plan, write_plan
from wealthplan.__main__ import main


def test_validate_mode_exits_zero():
    code = main(["sample_plan.json", "--validate"])
    assert code == 0


def test_invalid_plan_returns_one(tmp_path, sample_plan_dict):
    data = clone_plan(sample_plan_dict)
    data["retirement"]["retirement_age"] = 40
    path = write_plan(tmp_path, data)

    code = main([str(path), "--validate"])
    assert code == 1


def test_missing_plan_file_returns_two(tmp_path):
    missing = tmp_path / "nope.json"
    code = main([str(missing), "--validate"])
    assert code == 2


def test_schema_error_returns_two(tmp_path, sample_plan_dict, capsys):
    data = clone_plan(sample_plan_dict)
    del data["retirement"]
    path = write_plan(tmp_path, data)

    code = main([str(path)])
    assert code == 2
    assert "plan.retirement: missing required field" in capsys.readouterr().err


def test_summary_mode_writes_output(tmp_path, sample_plan_dict, capsys):
    plan_path = write_plan(tmp_path, sample_plan_dict)
    output_path = tmp_path / "out.html"
    code = main([str(plan_path), "--summary", "-o", str(output_path)])

    assert code == 0
    assert output_path.exists()
    text = output_path.read_text(encoding="utf-8")
    assert "Wealth Plan" in text

    out = capsys.readouterr().out
    assert "Corpus at retirement (60):" in out
    assert "Readiness:" in out
    assert "Risk profile: Moderate" in out
    assert f"Wrote report to {output_path}" in out


def test_server_mode_rejects_non_positive_watch_interval(tmp_path, sample_plan_dict):
    plan_path = write_plan(tmp_path, sample_plan_dict)
    code = main([str(plan_path), "--server", "--watch-interval", "0"])
    assert code == 2


def test_server_mode_rejects_validate_flag(tmp_path, sample_plan_dict):
    plan_path = write_plan(tmp_path, sample_plan_dict)
    code = main([str(plan_path), "--server", "--validate"])
    assert code == 2


def test_server_mode_generates_initial_report(tmp_path, sample_plan_dict, monkeypatch):
    plan_path = write_plan(tmp_path, sample_plan_dict)
    output_path = tmp_path / "served.html"

    def _interrupt_serve_forever(self):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli.ThreadingHTTPServer, "serve_forever", _interrupt_serve_forever)
    code = main([str(plan_path), "--server", "-o", str(output_path), "--port", "0", "--watch-interval", "0.01"])

    assert code == 0
    assert output_path.exists()
    assert "Wealth Plan" in output_path.read_text(encoding="utf-8")


def test_verbose_flag_is_accepted():
    code = main(["sample_plan.json", "--validate", "--verbose"])
    assert code == 0


def test_summary_for_zero_retirement_years_plan_with_early_depletion(tmp_path, sample_plan_dict, capsys):
    data = clone_plan(sample_plan_dict)
    data["retirement"].update(
        {
            "current_age": 30,
            "retirement_age": 40,
            "life_expectancy": 40,
            "current_savings": 100_000,
            "lump_sums": [{"age": 35, "amount": 200_000}],
        }
    )
    plan_path = write_plan(tmp_path, data)
    output_path = tmp_path / "out.html"

    assert main([str(plan_path), "--validate"]) == 0
    assert main([str(plan_path), "-o", str(output_path), "--summary"]) == 0
    assert "Coverage: 100.0%" in capsys.readouterr().out


def _touch_later(path):
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))


def _watcher_args(plan_path, output_path) -> argparse.Namespace:
    return argparse.Namespace(plan=str(plan_path), output=str(output_path), summary=False, watch_interval=0.01)


def test_plan_watcher_regenerates_only_after_a_change(tmp_path, sample_plan_dict):
    plan_path = write_plan(tmp_path, sample_plan_dict)
    output_path = tmp_path / "watched.html"
    watcher = cli.PlanWatcher(_watcher_args(plan_path, output_path))

    assert watcher.poll() is False
    assert not output_path.exists()

    data = clone_plan(sample_plan_dict)
    data["profile"]["name"] = "Renamed Household"
    plan_path.write_text(json.dumps(data), encoding="utf-8")
    _touch_later(plan_path)

    assert watcher.poll() is True
    assert watcher.regenerations == 1
    assert "Renamed Household" in output_path.read_text(encoding="utf-8")
    assert watcher.poll() is False


def test_plan_watcher_keeps_report_when_update_is_invalid(tmp_path, sample_plan_dict, caplog):
    plan_path = write_plan(tmp_path, sample_plan_dict)
    output_path = tmp_path / "watched.html"
    output_path.write_text("previous", encoding="utf-8")
    watcher = cli.PlanWatcher(_watcher_args(plan_path, output_path))

    data = clone_plan(sample_plan_dict)
    data["retirement"]["retirement_age"] = 40
    plan_path.write_text(json.dumps(data), encoding="utf-8")
    _touch_later(plan_path)

    with caplog.at_level(logging.INFO, logger="wealthplan.__main__"):
        assert watcher.poll() is False

    assert output_path.read_text(encoding="utf-8") == "previous"
    assert "retirement.retirement_age: must be >= current_age" in caplog.text
    assert "keeping previous report" in caplog.text


def test_plan_watcher_logs_unreadable_update(tmp_path, sample_plan_dict, caplog):
    plan_path = write_plan(tmp_path, sample_plan_dict)
    output_path = tmp_path / "watched.html"
    watcher = cli.PlanWatcher(_watcher_args(plan_path, output_path))

    plan_path.write_text("{not json", encoding="utf-8")
    _touch_later(plan_path)

    with caplog.at_level(logging.ERROR, logger="wealthplan.__main__"):
        assert watcher.poll() is False

    assert "cannot load updated plan" in caplog.text
    assert watcher.regenerations == 0
