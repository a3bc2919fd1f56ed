"""Tests for the FastAPI web API."""

from fastapi.testclient import TestClient

from matchpulse.api import app
from matchpulse.core.config import MatchPulseConfig, set_config

client = TestClient(app)

HOME = "home-fc"
AWAY = "away-united"

EVENTS = [
    {"id": "e1", "type": "goal", "teamId": HOME, "playerId": "p1", "minute": 10,
     "data": {"playerName": "Alex"}},
    {"id": "e2", "type": "shot", "teamId": HOME, "playerId": "p1", "minute": 12,
     "data": {"onTarget": True}},
    {"id": "e3", "type": "yellow_card", "teamId": AWAY, "playerId": "p7", "minute": 20},
    {"id": "e4", "type": "pass", "teamId": AWAY, "playerId": "p8", "minute": 50},
]


def match_body(**overrides):
    body = {"events": EVENTS, "home_team_id": HOME, "away_team_id": AWAY, "current_minute": 60}
    body.update(overrides)
    return body


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_ok(self):
        """Health endpoint returns OK status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert isinstance(data["version"], str)

    def test_about_lists_event_types(self):
        data = client.get("/about").json()
        assert "goal" in data["event_types"]
        assert data["time_ranges"] == ["all", "first_half", "second_half"]


class TestStatisticsEndpoint:
    """Tests for POST /api/statistics."""

    def test_statistics(self):
        response = client.post("/api/statistics", json=match_body())
        assert response.status_code == 200
        data = response.json()
        assert data["event_count"] == 4
        assert data["home"]["goals"] == 1
        assert data["home"]["shots_on_target"] == 1
        assert data["away"]["yellow_cards"] == 1
        assert data["away"]["pass_accuracy"] == 70.0

    def test_time_range(self):
        data = client.post("/api/statistics", json=match_body(time_range="second_half")).json()
        assert data["time_range"] == "second_half"
        assert data["event_count"] == 1
        assert data["home"]["goals"] == 0
        assert data["away"]["passes"] == 1

    def test_invalid_time_range(self):
        response = client.post("/api/statistics", json=match_body(time_range="extra_time"))
        assert response.status_code == 400
        assert "Invalid time range" in response.json()["detail"]

    def test_invalid_event(self):
        """An event without a team id is a 400 naming its position."""
        events = EVENTS + [{"type": "goal", "minute": 3}]
        response = client.post("/api/statistics", json=match_body(events=events))
        assert response.status_code == 400
        assert "position 4" in response.json()["detail"]

    def test_negative_minute_rejected(self):
        response = client.post("/api/statistics", json=match_body(current_minute=-1))
        assert response.status_code == 422

    def test_missing_fields(self):
        response = client.post("/api/statistics", json={"events": []})
        assert response.status_code == 422

    def test_no_cache_headers(self):
        response = client.post("/api/statistics", json=match_body())
        assert "no-store" in response.headers["cache-control"]

    def test_out_of_range_timestamp(self):
        """An epoch timestamp too large for a datetime is dropped, not a 500."""
        events = [{**EVENTS[0], "timestamp": 1e20}]
        response = client.post("/api/statistics", json=match_body(events=events))
        assert response.status_code == 200
        assert response.json()["home"]["goals"] == 1


class TestPlayersEndpoint:
    """Tests for POST /api/players."""

    def test_players_in_first_appearance_order(self):
        """top=0 returns every player in first-appearance order."""
        data = client.post("/api/players?top=0", json=match_body()).json()
        assert [p["player_id"] for p in data["players"]] == ["p1", "p7", "p8"]
        assert data["players"][0]["player_name"] == "Alex"
        assert data["players"][0]["goals"] == 1
        assert data["players"][0]["minutes_played"] == 60

    def test_top(self):
        data = client.post("/api/players?top=1", json=match_body()).json()
        assert [p["player_id"] for p in data["players"]] == ["p1"]

    def test_default_top_is_ranked(self):
        """Without top, players are ranked and cut at statistics.top_performers."""
        data = client.post("/api/players", json=match_body()).json()
        # ratings: p1 0.41, p8 0.07, p7 0.06
        assert [p["player_id"] for p in data["players"]] == ["p1", "p8", "p7"]

    def test_default_top_from_config(self):
        config = MatchPulseConfig()
        config.statistics.top_performers = 2
        set_config(config)
        data = client.post("/api/players", json=match_body()).json()
        assert [p["player_id"] for p in data["players"]] == ["p1", "p8"]


class TestMomentumEndpoint:
    """Tests for POST /api/momentum."""

    def test_momentum(self):
        response = client.post("/api/momentum", json={"events": EVENTS, "home_team_id": HOME})
        assert response.status_code == 200
        # 10 + 2 + 1 + 0 = 13 -> 10
        assert response.json() == {
            "momentum": 10,
            "variant": "success",
            "text": "Home Team Dominating",
        }

    def test_empty(self):
        data = client.post("/api/momentum", json={"events": [], "home_team_id": HOME}).json()
        assert data["momentum"] == 0


class TestReportEndpoint:
    """Tests for POST /api/report."""

    def test_report(self):
        data = client.post("/api/report", json=match_body()).json()
        assert data["match"]["score"] == "1 - 0"
        assert data["momentum"]["value"] == 10
        assert data["players"][0]["rating"] > 0


class TestLiveEndpoints:
    """Tests for the /api/live session endpoints."""

    def create(self, match_id="m-1"):
        return client.post(
            "/api/live/sessions",
            json={"match_id": match_id, "home_team_id": HOME, "away_team_id": AWAY},
        )

    def test_create_and_list(self):
        response = self.create()
        assert response.status_code == 201
        assert response.json()["active"] is True

        data = client.get("/api/live/sessions").json()
        assert data["total"] == 1
        assert data["sessions"][0]["match_id"] == "m-1"

    def test_duplicate_session(self):
        self.create()
        assert self.create().status_code == 409

    def test_invalid_match_id(self):
        assert self.create("bad!id").status_code == 400

    def test_events_and_snapshot(self):
        self.create()
        response = client.post("/api/live/sessions/m-1/events", json={"events": EVENTS})
        assert response.status_code == 200
        assert response.json()["received"] == 4
        assert response.json()["rejected"] == 0

        client.post("/api/live/sessions/m-1/state", json={"current_minute": 55, "home_score": 1})

        snapshot = client.get("/api/live/sessions/m-1").json()
        assert snapshot["event_count"] == 4
        assert snapshot["state"]["current_minute"] == 55
        assert snapshot["statistics"]["home"]["goals"] == 1
        assert snapshot["players"][0]["minutes_played"] == 55

        first_half = client.get("/api/live/sessions/m-1?time_range=first_half").json()
        assert first_half["statistics"]["away"]["passes"] == 0

    def test_events_for_other_match_rejected(self):
        self.create()
        events = [{"type": "goal", "teamId": HOME, "minute": 3, "matchId": "other"}]
        data = client.post("/api/live/sessions/m-1/events", json={"events": events}).json()
        assert data["rejected"] == 1
        assert data["event_count"] == 0

    def test_snapshot_invalid_range(self):
        self.create()
        response = client.get("/api/live/sessions/m-1?time_range=overtime")
        assert response.status_code == 400

    def test_missing_session(self):
        assert client.get("/api/live/sessions/nope").status_code == 404
        assert client.post("/api/live/sessions/nope/events", json={"events": []}).status_code == 404
        assert client.delete("/api/live/sessions/nope").status_code == 404

    def test_end_session(self):
        self.create()
        client.post("/api/live/sessions/m-1/events", json={"events": EVENTS[:1]})
        response = client.delete("/api/live/sessions/m-1")
        assert response.status_code == 200
        assert response.json()["events_received"] == 1
        assert client.get("/api/live/sessions/m-1").status_code == 404

    def test_sessions_use_live_config(self):
        """A loaded live config reaches sessions created through the API."""
        config = MatchPulseConfig()
        config.live.event_history_limit = 1
        config.live.warn_on_duplicate_ids = False
        set_config(config)

        self.create()
        client.post("/api/live/sessions/m-1/events", json={"events": EVENTS[:1]})
        client.post("/api/live/sessions/m-1/events", json={"events": EVENTS[:1]})

        stats = client.get("/api/live/sessions/m-1/stats").json()
        assert stats["events_received"] == 2
        assert stats["events_retained"] == 1
        assert stats["duplicate_events"] == 1


class TestDiagnosticsEndpoint:
    """Tests for /api/diagnostics."""

    def test_unknown_types_reported(self):
        events = EVENTS + [{"type": "var_review", "teamId": HOME, "minute": 70}]
        client.post("/api/statistics", json=match_body(events=events))

        data = client.get("/api/diagnostics").json()
        assert data["unrecognized_types"] == {"var_review": 1}
        assert data["unrecognized_total"] == 1

    def test_reset(self):
        client.post(
            "/api/statistics",
            json=match_body(events=[{"type": "var_review", "teamId": HOME, "minute": 1}]),
        )
        assert client.post("/api/diagnostics/reset").json() == {"status": "reset"}
        assert client.get("/api/diagnostics").json()["unrecognized_total"] == 0
