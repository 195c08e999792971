"""
HTTP API tests over an in-memory league
"""

import pytest
from fastapi.testclient import TestClient

from app.server import app, get_db
from ranking.exceptions import InvalidInputError, ScoringError


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_db] = lambda: fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestReadEndpoints:

    def test_status(self, client):
        response = client.get("/api/status")
        assert response.status_code == 200
        assert response.json()["achievements"] == 20

    def test_leaderboard(self, client):
        data = client.get("/api/seasons/s1/leaderboard").json()
        assert data["players"] == 2
        assert [row["player_id"] for row in data["leaderboard"]] == ["p1", "p2"]
        assert data["leaderboard"][0]["total_points"] == 17
        assert data["leaderboard"][0]["rank"] == 1

    def test_empty_season(self, client):
        data = client.get("/api/seasons/s9/leaderboard").json()
        assert data["leaderboard"] == []

    def test_summary(self, client):
        data = client.get("/api/seasons/s1/summary").json()
        assert data["mvp"]["player_id"] == "p1"
        assert data["best_round"]["value"] == "71 (-1)"
        assert data["total_rounds"] == 3

    def test_handicap(self, client):
        data = client.get("/api/players/p1/handicap").json()
        assert data["handicap"] == 2.0
        assert data["display"] == "+2.0"
        assert data["category"] == "Low Handicap"
        assert data["rounds_used"] == 3

    def test_handicap_missing_profile(self, client):
        response = client.get("/api/players/ghost/handicap")
        assert response.status_code == 404

    def test_achievement_progress(self, client, fake_db):
        fake_db.earned["p1"] = {"first_score"}
        data = client.get("/api/players/p1/achievements/progress", params={"season_id": "s1"}).json()
        progress = data["progress"]
        assert "first_score" not in progress
        assert progress["games_5"]["current"] == 3
        assert progress["points_50"]["current"] == 17
        assert progress["perfect_attendance"] == {"current": 3, "target": 3, "label": "Games played"}
        assert progress["season_champion"]["current"] == 1

    def test_achievement_progress_without_season(self, client):
        progress = client.get("/api/players/p1/achievements/progress").json()["progress"]
        assert progress["points_50"]["current"] == 0
        assert progress["season_champion"]["current"] == 0


class TestPreview:

    def test_preview(self, client):
        data = client.post("/api/games/g1/preview", json={"raw_score": 74}).json()
        assert data["points"] == 6
        assert data["bonus_points"] == 1
        assert data["total_points"] == 7
        assert data["display"] == "+2"

    def test_unknown_game(self, client):
        response = client.post("/api/games/nope/preview", json={"raw_score": 80})
        assert response.status_code == 404

    def test_invalid_body(self, client):
        response = client.post("/api/games/g1/preview", json={"raw_score": 0})
        assert response.status_code == 422


class TestAdminEndpoints:

    def test_recalculate_handicaps(self, client, fake_db):
        data = client.post("/api/admin/recalculate/handicaps").json()
        assert data["success_count"] == 2
        assert data["failed_count"] == 0
        assert fake_db.handicaps == {"p1": 2.0, "p2": 8.0}

    def test_recalculate_bonus_points(self, client):
        data = client.post("/api/admin/recalculate/bonus-points/g1").json()
        assert data["result"]["success_count"] == 2
        assert data["changes"] == [{"score_id": "sc1", "raw_score": 74, "old_bonus": 0, "new_bonus": 1}]


class TestErrorMapping:

    def test_invalid_input_is_422(self, client, fake_db):
        async def broken(**kwargs):
            raise InvalidInputError("season scores unreadable")

        fake_db.fetch_round_scores = broken
        response = client.get("/api/seasons/s1/leaderboard")
        assert response.status_code == 422
        assert response.json()["detail"] == "season scores unreadable"

    def test_other_scoring_error_is_400(self, client, fake_db):
        async def broken(**kwargs):
            raise ScoringError("bad data")

        fake_db.fetch_round_scores = broken
        assert client.get("/api/seasons/s1/leaderboard").status_code == 400
