"""Tests for settings and option parsing."""

from datetime import timedelta
from pathlib import Path

import pytest

from spacetime.config import (
    DEFAULT_IDLE_THRESHOLD_SECONDS,
    TrackerSettings,
    parse_workspace_option,
    resolve_idle_threshold,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (600, 600.0),
        (0.5, 0.5),
        (0, 900.0),
        (-60, 900.0),
        (None, 900.0),
        ("600", 900.0),
        (float("nan"), 900.0),
        (float("inf"), 900.0),
        (True, 900.0),
    ],
)
def test_resolve_idle_threshold(value: object, expected: float) -> None:
    assert resolve_idle_threshold(value) == expected


def test_default_settings() -> None:
    settings = TrackerSettings()
    assert settings.idle_threshold_seconds == DEFAULT_IDLE_THRESHOLD_SECONDS
    assert settings.workspaces == {}


def test_from_options_converts_minutes() -> None:
    settings = TrackerSettings.from_options(idle_minutes=5, workspaces={"a": "/tmp/a"})
    assert settings.idle_threshold == timedelta(minutes=5)
    assert settings.workspaces == {"a": Path("/tmp/a")}


@pytest.mark.parametrize("minutes", [0, -1, None])
def test_from_options_falls_back_to_default(minutes: float | None) -> None:
    settings = TrackerSettings.from_options(idle_minutes=minutes)
    assert settings.idle_threshold_seconds == 900.0


def test_non_positive_timedelta_is_ignored() -> None:
    settings = TrackerSettings(idle_threshold=timedelta(0))
    assert settings.idle_threshold_seconds == 900.0


class TestWorkspaceOption:
    def test_name_and_path(self) -> None:
        assert parse_workspace_option("web=/src/web") == ("web", Path("/src/web"))

    def test_bare_path_uses_folder_name(self, tmp_path: Path) -> None:
        folder = tmp_path / "my-project"
        assert parse_workspace_option(str(folder)) == ("my-project", folder)

    @pytest.mark.parametrize("value", ["=/src", "web=", " = "])
    def test_incomplete_pair_is_rejected(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_workspace_option(value)
