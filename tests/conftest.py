"""
Pytest configuration and fixtures for golf league tests
"""

import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ranking.calculator import rank, player_rank
from ranking.models import Course, Game, PlayerProfile, RoundScore


BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def _make_score(
    score_id,
    player_id,
    raw_score,
    game_id="g1",
    points=0,
    bonus_points=0,
    day=0,
    season_id="s1",
    course_par=72,
    player_name=None,
):
    return RoundScore(
        id=score_id,
        player_id=player_id,
        game_id=game_id,
        raw_score=raw_score,
        points=points,
        bonus_points=bonus_points,
        submitted_at=BASE_TIME + timedelta(days=day),
        season_id=season_id,
        course_par=course_par,
        player_name=player_name or player_id,
    )


class FakeDB:
    """In-memory stand-in for SupabaseDB"""

    def __init__(self, scores=(), profiles=(), games=(), join_times=None, earned=None):
        self.scores = {s.id: s for s in scores}
        self.profiles = {p.id: p for p in profiles}
        self.games = {g.id: g for g in games}
        self.join_times = dict(join_times or {})
        self.earned = dict(earned or {})
        self.handicaps = {}
        self.point_updates = []
        self.fail_players = set()

    async def fetch_round_scores(self, game_id=None, season_id=None, player_id=None):
        if player_id in self.fail_players:
            raise ConnectionError("connection reset")
        if game_id is not None:
            found = [s for s in self.scores.values() if s.game_id == game_id]
        elif season_id is not None:
            found = [s for s in self.scores.values() if s.season_id == season_id]
        else:
            found = [s for s in self.scores.values() if s.player_id == player_id]
        return sorted(found, key=lambda s: s.submitted_at)

    async def persist_score_points(self, score_id, points, bonus_points):
        self.point_updates.append((score_id, points, bonus_points))
        self.scores[score_id] = self.scores[score_id].with_points(points, bonus_points)

    async def fetch_game(self, game_id):
        return self.games.get(game_id)

    async def fetch_season_game_ids(self, season_id):
        return [g.id for g in self.games.values() if g.season_id == season_id]

    async def fetch_season_leaderboard_rows(self, season_id):
        scores = await self.fetch_round_scores(season_id=season_id)
        return [
            {"player_id": r.player_id, "games_played": r.games_played}
            for r in rank(season_id, scores)
        ]

    async def fetch_season_join_times(self, season_id):
        return dict(self.join_times)

    async def fetch_player_season_rank(self, player_id, season_id):
        scores = await self.fetch_round_scores(season_id=season_id)
        return player_rank(rank(season_id, scores, self.join_times), player_id)

    async def fetch_profiles(self):
        return list(self.profiles.values())

    async def fetch_profile(self, player_id):
        return self.profiles.get(player_id)

    async def persist_computed_handicap(self, player_id, value):
        self.handicaps[player_id] = value

    async def fetch_earned_achievement_keys(self, player_id):
        return set(self.earned.get(player_id, ()))


@pytest.fixture
def make_score():
    """Factory for RoundScore records (day = days after the season opener)"""
    return _make_score


@pytest.fixture
def pines_game():
    return Game(id="g1", name="Opening Round", season_id="s1", course=Course(id="c1", name="Pines", par=72))


@pytest.fixture
def fake_db(pines_game):
    """League with two profiled players and one season game"""
    scores = [
        _make_score("sc1", "p1", 74, points=5, day=0, player_name="alice"),
        _make_score("sc2", "p1", 71, game_id="g2", points=6, bonus_points=1, day=7, player_name="alice"),
        _make_score("sc3", "p1", 77, game_id="g3", points=5, day=14, player_name="alice"),
        _make_score("sc4", "p2", 80, points=4, bonus_points=0, day=0, player_name="bob"),
    ]
    profiles = [
        PlayerProfile(id="p1", username="alice"),
        PlayerProfile(id="p2", username="bob"),
    ]
    games = [
        pines_game,
        Game(id="g2", season_id="s1", course=Course(name="Pines", par=72)),
        Game(id="g3", season_id="s1", course=Course(name="Pines", par=72)),
    ]
    return FakeDB(scores=scores, profiles=profiles, games=games)
