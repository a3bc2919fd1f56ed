"""Tests for the typer command line interface."""

import json

import pytest
from typer.testing import CliRunner

from matchpulse import __version__
from matchpulse.cli import app

runner = CliRunner()

HOME = "home"
AWAY = "away"


@pytest.fixture
def events_file(tmp_path, monkeypatch):
    # Keep config discovery away from any matchpulse.yaml in the working tree
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "events.json"
    path.write_text(
        json.dumps(
            [
                {"id": "1", "type": "goal", "teamId": HOME, "playerId": "p1", "minute": 10,
                 "data": {"playerName": "Alex"}},
                {"id": "2", "type": "shot", "teamId": HOME, "minute": 12,
                 "data": {"onTarget": True}},
                {"id": "3", "type": "yellow_card", "teamId": AWAY, "minute": 20},
                {"id": "4", "type": "var_review", "teamId": AWAY, "minute": 21},
            ]
        )
    )
    return path


class TestCli:
    """Tests for the CLI commands."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_stats(self, events_file):
        result = runner.invoke(app, ["stats", str(events_file), "-H", HOME, "-A", AWAY])
        assert result.exit_code == 0, result.stdout
        assert "Team Statistics" in result.stdout
        assert "Momentum" in result.stdout
        assert "var_review" in result.stdout

    def test_stats_invalid_range(self, events_file):
        result = runner.invoke(
            app, ["stats", str(events_file), "-H", HOME, "-A", AWAY, "--range", "overtime"]
        )
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["stats", str(tmp_path / "nope.json"), "-H", HOME, "-A", AWAY])
        assert result.exit_code != 0

    def test_unsupported_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "events.txt"
        path.write_text("goal")
        result = runner.invoke(app, ["momentum", str(path), "-H", HOME])
        assert result.exit_code == 1
        assert "Error loading events" in result.stdout

    def test_players(self, events_file):
        result = runner.invoke(app, ["players", str(events_file), "--top", "1"])
        assert result.exit_code == 0, result.stdout
        assert "Player Performance" in result.stdout

    def test_momentum(self, events_file):
        result = runner.invoke(app, ["momentum", str(events_file), "-H", HOME])
        assert result.exit_code == 0
        # 10 + 2 + 1 clamps to 10
        assert "+10" in result.stdout
        assert "Home Team Dominating" in result.stdout

    def test_export_json(self, events_file, tmp_path):
        output = tmp_path / "report.json"
        result = runner.invoke(
            app, ["export", str(events_file), "-o", str(output), "-H", HOME, "-A", AWAY]
        )
        assert result.exit_code == 0, result.stdout
        report = json.loads(output.read_text())
        assert report["match"]["score"] == "1 - 0"
        assert report["match"]["current_minute"] == 21
        assert "_metadata" in report

    def test_export_bad_format(self, events_file, tmp_path):
        result = runner.invoke(
            app,
            ["export", str(events_file), "-o", str(tmp_path / "r.out"), "-H", HOME, "-A", AWAY],
        )
        assert result.exit_code == 1
        assert "Export failed" in result.stdout

    def test_replay_json(self, events_file):
        result = runner.invoke(
            app, ["replay", str(events_file), "-H", HOME, "-A", AWAY, "--json"]
        )
        assert result.exit_code == 0, result.stdout
        assert '"event_count": 4' in result.stdout
        assert '"home_score": 1' in result.stdout

    def test_replay_table(self, events_file):
        result = runner.invoke(app, ["replay", str(events_file), "-H", HOME, "-A", AWAY])
        assert result.exit_code == 0, result.stdout
        assert "1 - 0" in result.stdout

    def test_config_command(self, tmp_path):
        path = tmp_path / "matchpulse.yaml"
        result = runner.invoke(app, ["config", str(path)])
        assert result.exit_code == 0
        assert path.exists()

        again = runner.invoke(app, ["config", str(path)])
        assert again.exit_code == 1
        assert runner.invoke(app, ["config", str(path), "--force"]).exit_code == 0

    def test_config_option(self, events_file, tmp_path):
        config_path = tmp_path / "custom.json"
        config_path.write_text(json.dumps({"export": {"include_metadata": False}}))
        output = tmp_path / "report.json"
        result = runner.invoke(
            app,
            ["--config", str(config_path), "export", str(events_file), "-o", str(output),
             "-H", HOME, "-A", AWAY],
        )
        assert result.exit_code == 0, result.stdout
        assert "_metadata" not in json.loads(output.read_text())

    def test_players_default_top_from_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        events_path = tmp_path / "players.json"
        events_path.write_text(
            json.dumps(
                [
                    {"type": "goal", "teamId": HOME, "playerId": "p1", "minute": 10,
                     "data": {"playerName": "Alex"}},
                    {"type": "pass", "teamId": AWAY, "playerId": "p2", "minute": 11,
                     "data": {"playerName": "Blake"}},
                ]
            )
        )
        config_path = tmp_path / "custom.json"
        config_path.write_text(json.dumps({"statistics": {"top_performers": 1}}))

        result = runner.invoke(app, ["--config", str(config_path), "players", str(events_path)])
        assert result.exit_code == 0, result.stdout
        assert "Alex" in result.stdout
        assert "Blake" not in result.stdout

        everyone = runner.invoke(
            app, ["--config", str(config_path), "players", str(events_path), "--top", "0"]
        )
        assert "Blake" in everyone.stdout

    def test_export_without_extension_uses_default_format(self, events_file, tmp_path):
        config_path = tmp_path / "custom.json"
        config_path.write_text(json.dumps({"export": {"default_format": "csv"}}))
        output = tmp_path / "report"
        result = runner.invoke(
            app,
            ["--config", str(config_path), "export", str(events_file), "-o", str(output),
             "-H", HOME, "-A", AWAY],
        )
        assert result.exit_code == 0, result.stdout
        assert output.read_text().startswith("statistic")
        assert (tmp_path / "report_players").exists()

    def test_replay_uses_live_config(self, events_file, tmp_path):
        config_path = tmp_path / "custom.json"
        config_path.write_text(json.dumps({"live": {"default_time_range": "second_half"}}))
        result = runner.invoke(
            app,
            ["--config", str(config_path), "replay", str(events_file), "-H", HOME, "-A", AWAY,
             "--json"],
        )
        assert result.exit_code == 0, result.stdout
        assert '"time_range": "second_half"' in result.stdout
        assert '"event_count": 4' in result.stdout
