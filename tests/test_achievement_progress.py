"""
Achievement catalog and progress tracker tests
"""

import pytest

from app.achievements import (
    ACHIEVEMENT_CATALOG,
    ProgressRule,
    get_definition,
    trackable_definitions,
)
from app.achievement_progress import AchievementProgress, best_streak, progress


HIDDEN_KEYS = {"perfect_score", "consistent_scorer", "comeback_king", "early_bird"}


class TestCatalog:

    def test_twenty_unique_badges(self):
        keys = [d.key for d in ACHIEVEMENT_CATALOG]
        assert len(keys) == 20
        assert len(set(keys)) == 20

    def test_hidden_badges(self):
        hidden = {d.key for d in ACHIEVEMENT_CATALOG if d.is_hidden}
        assert hidden == HIDDEN_KEYS
        assert len(trackable_definitions()) == 16

    def test_lookup(self):
        definition = get_definition("games_25")
        assert definition.rule == ProgressRule.GAMES_PLAYED
        assert definition.target == 25
        assert get_definition("hole_in_one") is None

    def test_empty_catalog(self):
        assert trackable_definitions([]) == []


class TestBestStreak:

    def test_streak_follows_submission_order(self, make_score):
        scores = [
            make_score("d", "p1", 78, bonus_points=1, day=3),
            make_score("a", "p1", 78, bonus_points=1, day=0),
            make_score("c", "p1", 85, bonus_points=0, day=2),
            make_score("b", "p1", 78, bonus_points=1, day=1),
        ]
        assert best_streak(scores) == 2

    def test_no_bonus(self, make_score):
        assert best_streak([make_score("a", "p1", 90)]) == 0
        assert best_streak([]) == 0


class TestProgress:
    """Progress per trackable badge"""

    def _season_scores(self, make_score, count, player_id="p1"):
        return [
            make_score(f"{player_id}-{i}", player_id, 80, game_id=f"g{i}", points=4, day=i)
            for i in range(count)
        ]

    def test_attendance_uses_busiest_player(self, make_score):
        season = self._season_scores(make_score, 9)
        leaderboard = [{"player_id": "x", "games_played": 12}, {"player_id": "p1", "games_played": 9}]
        result = progress("p1", "s1", season, season, leaderboard, 2)
        assert result["perfect_attendance"] == AchievementProgress(9, 12, "Games played")
        assert not result["perfect_attendance"].is_complete

    def test_hidden_and_earned_omitted(self, make_score):
        season = self._season_scores(make_score, 3)
        result = progress("p1", "s1", season, season, [], 1, earned_keys={"first_score", "games_5"})
        assert not HIDDEN_KEYS & set(result)
        assert "first_score" not in result
        assert "games_5" not in result
        assert len(result) == 14

    def test_games_played_milestones(self, make_score):
        all_scores = self._season_scores(make_score, 12)
        result = progress("p1", None, all_scores, [], [], None)
        assert result["first_score"].current == 12
        assert result["first_score"].is_complete
        assert result["games_10"] == AchievementProgress(12, 10, "Games played")
        assert result["games_25"].current == 12
        assert not result["games_25"].is_complete

    def test_season_points_and_wins(self, make_score):
        season = [
            make_score("a", "p1", 78, points=5, bonus_points=1, day=0),
            make_score("b", "p1", 82, game_id="g2", points=4, day=1),
            make_score("c", "p1", 77, game_id="g3", points=5, bonus_points=1, day=2),
        ]
        older = [make_score("z", "p1", 75, game_id="g0", points=5, bonus_points=1, day=-30, season_id="s0")]
        result = progress("p1", "s1", older + season, season, [], 3)
        assert result["points_50"].current == 16
        assert result["domination"].current == 2
        assert result["first_win"].current == 3
        assert result["hot_streak_3"].current == 2

    def test_rank_badges(self, make_score):
        season = self._season_scores(make_score, 2)
        result = progress("p1", "s1", season, season, [], 2)
        assert result["season_champion"].current == 0
        assert result["season_runner_up"].current == 1
        assert result["season_top_three"].current == 1
        assert result["season_top_three"].target == 1

    @pytest.mark.parametrize("season_rank", [None, 0, -1])
    def test_missing_rank_counts_as_unranked(self, make_score, season_rank):
        season = self._season_scores(make_score, 2)
        result = progress("p1", "s1", season, season, [], season_rank)
        assert result["season_champion"].current == 0
        assert result["season_top_three"].current == 0

    def test_no_season_zeroes_season_figures(self, make_score):
        season = self._season_scores(make_score, 4)
        leaderboard = [{"player_id": "p1", "games_played": 4}]
        result = progress("p1", None, season, season, leaderboard, 1)
        assert result["points_50"].current == 0
        assert result["domination"].current == 0
        assert result["perfect_attendance"] == AchievementProgress(0, 0, "Games played")
        assert result["season_champion"].current == 0
        assert result["games_5"].current == 4

    def test_pure(self, make_score):
        season = self._season_scores(make_score, 5)
        snapshot = list(season)
        first = progress("p1", "s1", season, season, [{"games_played": 5}], 1)
        second = progress("p1", "s1", season, season, [{"games_played": 5}], 1)
        assert first == second
        assert season == snapshot

    def test_explicit_catalog(self, make_score):
        season = self._season_scores(make_score, 3)
        assert progress("p1", "s1", season, season, [], 1, catalog=[]) == {}

        only_games = [get_definition("games_5")]
        assert set(progress("p1", "s1", season, season, [], 1, catalog=only_games)) == {"games_5"}
