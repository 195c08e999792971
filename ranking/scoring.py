"""
Round scoring

- Base points from an injected scoring policy
- Bonus point for the lowest raw score of the game (ties share it)
- Whole-game recomputation for the bonus recalculation workflow
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from loguru import logger

from .exceptions import InvalidInputError
from .models import RoundScore


# =====================================================
# Constants
# =====================================================

# Bonus awarded to every score tied for the lowest raw score of a game
BONUS_POINTS = 1

# (minimum raw score, points), checked top-down
STROKE_BANDS: Tuple[Tuple[int, int], ...] = (
    (100, 0),
    (96, 1),
    (90, 2),
    (85, 3),
    (80, 4),
    (75, 5),
)
STROKE_BANDS_FLOOR_POINTS = 6  # below 75

# Placement -> points for the rank-based policy
PLACEMENT_POINTS = {
    1: 10,
    2: 8,
    3: 6,
    4: 5,
    5: 4,
    6: 3,
    7: 2,
    8: 1,
}

# Strokes over par -> points for the par-relative policy
PAR_RELATIVE_POINTS = {
    0: 6,   # par or better
    5: 5,
    10: 4,
    15: 3,
    20: 2,
    28: 1,
}

ScoringPolicy = Callable[[int, Optional[int], Sequence[int]], int]


# =====================================================
# Data classes
# =====================================================

@dataclass(frozen=True)
class ScoreEvaluation:
    """Points awarded to one round"""
    points: int
    bonus_points: int

    @property
    def total_points(self) -> int:
        return self.points + self.bonus_points


@dataclass(frozen=True)
class ScorePreview:
    """What a submission would earn if entered now"""
    raw_score: int
    over_par: Optional[int]
    points: int
    bonus_points: int
    total_points: int


# =====================================================
# Scoring policies
# =====================================================

class StrokeBandPolicy:
    """Absolute stroke bands (the club's standing table)"""

    def __init__(self, bands: Sequence[Tuple[int, int]] = STROKE_BANDS,
                 floor_points: int = STROKE_BANDS_FLOOR_POINTS):
        self.bands = sorted(bands, key=lambda b: b[0], reverse=True)
        self.floor_points = floor_points

    def __call__(self, raw_score: int, game_par: Optional[int], all_scores: Sequence[int]) -> int:
        for minimum, points in self.bands:
            if raw_score >= minimum:
                return points
        return self.floor_points


class PlacementPolicy:
    """
    Points by finishing position within the game.

    Tied scores share the better placement (two players on 72 are both 1st,
    the next score is 3rd). Positions past the table earn `default_points`.
    """

    def __init__(self, table: Optional[Dict[int, int]] = None, default_points: int = 0):
        self.table = dict(table or PLACEMENT_POINTS)
        self.default_points = default_points

    def placement(self, raw_score: int, all_scores: Sequence[int]) -> int:
        return 1 + sum(1 for s in all_scores if s < raw_score)

    def __call__(self, raw_score: int, game_par: Optional[int], all_scores: Sequence[int]) -> int:
        return self.table.get(self.placement(raw_score, all_scores), self.default_points)


class ParRelativePolicy:
    """Points by strokes over par; needs the course par"""

    def __init__(self, table: Optional[Dict[int, int]] = None):
        self.table = sorted((table or PAR_RELATIVE_POINTS).items())

    def __call__(self, raw_score: int, game_par: Optional[int], all_scores: Sequence[int]) -> int:
        if game_par is None:
            raise InvalidInputError("par-relative scoring needs the course par")
        over_par = raw_score - game_par
        for limit, points in self.table:
            if over_par <= limit:
                return points
        return 0


SCORING_POLICIES = {
    "stroke_bands": StrokeBandPolicy,
    "placement": PlacementPolicy,
    "par_relative": ParRelativePolicy,
}


def get_policy(name: str) -> ScoringPolicy:
    """Build a policy from its configured name"""
    try:
        return SCORING_POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown scoring policy '{name}' (choose from {', '.join(SCORING_POLICIES)})"
        )


DEFAULT_POLICY: ScoringPolicy = StrokeBandPolicy()


# =====================================================
# Evaluation
# =====================================================

def _checked_points(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"scoring policy returned non-integer points: {value!r}")
    if value < 0:
        raise InvalidInputError(f"scoring policy returned negative points: {value}")
    return value


def evaluate(
    raw_score: int,
    game_par: Optional[int],
    all_scores_in_game: Sequence[int],
    policy: Optional[ScoringPolicy] = None,
) -> ScoreEvaluation:
    """
    Points and bonus for one submitted score.

    Args:
        raw_score: strokes for the round
        game_par: par of the course, if known
        all_scores_in_game: every raw score submitted for the game
        policy: scoring policy, defaults to the stroke bands

    Raises:
        InvalidInputError: no scores to compare against
    """
    if not all_scores_in_game:
        raise InvalidInputError("cannot evaluate a score against an empty game")

    policy = policy or DEFAULT_POLICY
    points = _checked_points(policy(raw_score, game_par, all_scores_in_game))
    bonus = BONUS_POINTS if raw_score <= min(all_scores_in_game) else 0

    return ScoreEvaluation(points=points, bonus_points=bonus)


def evaluate_game(
    round_scores: Sequence[RoundScore],
    game_par: Optional[int] = None,
    policy: Optional[ScoringPolicy] = None,
) -> Dict[str, ScoreEvaluation]:
    """Recompute points and bonus for every score of one game"""
    if not round_scores:
        raise InvalidInputError("cannot evaluate a game with no scores")

    raw_scores = [s.raw_score for s in round_scores]
    results = {}
    for score in round_scores:
        par = game_par if game_par is not None else score.course_par
        results[score.id] = evaluate(score.raw_score, par, raw_scores, policy)

    logger.debug(f"Evaluated {len(results)} scores, lowest {min(raw_scores)}")
    return results


def bonus_assignments(round_scores: Sequence[RoundScore]) -> Dict[str, bool]:
    """Which scores of a game should hold the bonus"""
    if not round_scores:
        return {}
    lowest = min(s.raw_score for s in round_scores)
    return {s.id: s.raw_score == lowest for s in round_scores}


def preview_score(
    raw_score: int,
    game_par: Optional[int],
    existing_scores: Sequence[int],
    policy: Optional[ScoringPolicy] = None,
) -> ScorePreview:
    """
    Score a submission against the scores already entered.

    The bonus is shown when the new score would tie or beat the current
    lowest; the first score of a game always shows it.
    """
    competing: List[int] = list(existing_scores) + [raw_score]
    result = evaluate(raw_score, game_par, competing, policy)

    return ScorePreview(
        raw_score=raw_score,
        over_par=raw_score - game_par if game_par is not None else None,
        points=result.points,
        bonus_points=result.bonus_points,
        total_points=result.total_points,
    )


def format_score_display(raw_score: int, course_par: int) -> str:
    """Score relative to par: E, +3, -2"""
    over_par = raw_score - course_par
    if over_par == 0:
        return "E"
    if over_par > 0:
        return f"+{over_par}"
    return str(over_par)
