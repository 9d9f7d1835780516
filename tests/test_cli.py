"""Tests for the command-line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from spacetime import cli
from spacetime.store import JsonTimesStore

runner = CliRunner()


def test_cli_help() -> None:
    result = runner.invoke(cli.app, ["--help"])
    assert result.exit_code == 0
    assert "report" in result.output
    assert "web" in result.output


def test_report_command(tmp_path: Path) -> None:
    store_path = tmp_path / "times.json"
    JsonTimesStore(store_path).save({"alpha": {"2024-01-02": 90.0}})

    result = runner.invoke(
        cli.app,
        [
            "report",
            "--store",
            str(store_path),
            "--start",
            "2024-01-01",
            "--end",
            "2024-01-31",
            "--granularity",
            "monthly",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "00:01:30" in result.output
    assert "Monthly breakdown:" in result.output


def test_report_rejects_bad_date(tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app, ["report", "--store", str(tmp_path / "t.json"), "--start", "yesterday"]
    )
    assert result.exit_code == 2


def test_web_builds_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(cli, "run_dashboard", lambda **kwargs: calls.append(kwargs))

    result = runner.invoke(
        cli.app,
        [
            "web",
            "--no-open-browser",
            "--idle-minutes",
            "5",
            "--workspace",
            f"alpha={tmp_path}",
            "--store",
            str(tmp_path / "t.json"),
        ],
    )

    assert result.exit_code == 0, result.output
    (kwargs,) = calls
    assert kwargs["open_browser"] is False
    assert kwargs["store_path"] == tmp_path / "t.json"
    assert kwargs["settings"].idle_threshold_seconds == 300.0
    assert kwargs["settings"].workspaces == {"alpha": tmp_path}


def test_web_rejects_bad_workspace(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "run_dashboard", lambda **kwargs: None)
    result = runner.invoke(cli.app, ["web", "--workspace", "alpha="])
    assert result.exit_code == 2


def test_report_on_unreadable_store(tmp_path: Path) -> None:
    unreadable = tmp_path / "times.json"
    unreadable.mkdir()
    result = runner.invoke(cli.app, ["report", "--store", str(unreadable)])
    assert result.exit_code == 1
