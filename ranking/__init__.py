"""
Golf league scoring engine

Round scoring, handicaps and season leaderboards over in-memory data
"""
from .calculator import (
    LeaderboardRow,
    rank,
    player_rank,
    max_games_played,
)
from .exceptions import (
    ScoringError,
    InvalidInputError,
    MissingReferenceDataError,
    MissingProfileError,
)
from .handicap import (
    HandicapResult,
    HandicapPolicy,
    calculate_handicap,
    compute_handicap,
    format_handicap,
    handicap_category,
    MAX_HANDICAP_ROUNDS,
)
from .models import Course, Game, GameStatus, PlayerProfile, RoundScore, Season
from .scoring import (
    ScoreEvaluation,
    ScorePreview,
    StrokeBandPolicy,
    PlacementPolicy,
    ParRelativePolicy,
    evaluate,
    evaluate_game,
    bonus_assignments,
    preview_score,
    format_score_display,
    get_policy,
    BONUS_POINTS,
)

__all__ = [
    "LeaderboardRow",
    "rank",
    "player_rank",
    "max_games_played",
    "ScoringError",
    "InvalidInputError",
    "MissingReferenceDataError",
    "MissingProfileError",
    "HandicapResult",
    "HandicapPolicy",
    "calculate_handicap",
    "compute_handicap",
    "format_handicap",
    "handicap_category",
    "MAX_HANDICAP_ROUNDS",
    "Course",
    "Game",
    "GameStatus",
    "PlayerProfile",
    "RoundScore",
    "Season",
    "ScoreEvaluation",
    "ScorePreview",
    "StrokeBandPolicy",
    "PlacementPolicy",
    "ParRelativePolicy",
    "evaluate",
    "evaluate_game",
    "bonus_assignments",
    "preview_score",
    "format_score_display",
    "get_policy",
    "BONUS_POINTS",
]
