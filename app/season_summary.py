"""
Season summary awards

End-of-season highlights computed from a season's round scores:
MVP, most improved, most consistent and best single round.
"""
import math
from collections import defaultdict
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Sequence, Union

from ranking.models import RoundScore
from ranking.scoring import format_score_display


MIN_ROUNDS_IMPROVED = 4
MIN_ROUNDS_CONSISTENT = 3


@dataclass(frozen=True)
class PlayerAward:
    player_id: str
    username: str
    value: Union[int, str]


@dataclass(frozen=True)
class SeasonSummary:
    mvp: Optional[PlayerAward]
    most_improved: Optional[PlayerAward]
    most_consistent: Optional[PlayerAward]
    best_round: Optional[PlayerAward]
    total_rounds: int
    total_players: int

    def to_dict(self):
        return asdict(self)


def summarize_season(
    season_scores: Sequence[RoundScore],
    game_count: Optional[int] = None,
) -> SeasonSummary:
    """
    Args:
        season_scores: every round score of the season
        game_count: number of games scheduled, defaults to distinct games scored
    """
    if not season_scores:
        return SeasonSummary(None, None, None, None, 0, 0)

    ordered = sorted(season_scores, key=lambda s: s.submitted_at)

    # player_id -> scores in submission order (dict keeps first-appearance order)
    by_player: Dict[str, List[RoundScore]] = defaultdict(list)
    names: Dict[str, str] = {}
    for score in ordered:
        by_player[score.player_id].append(score)
        names.setdefault(score.player_id, score.player_name or "Unknown")

    # MVP: most total points
    mvp = None
    max_points = -1
    for pid, scores in by_player.items():
        points = sum(s.total_points for s in scores)
        if points > max_points:
            max_points = points
            mvp = PlayerAward(pid, names[pid], points)

    # Most improved: biggest drop from first-half to second-half average
    most_improved = None
    biggest_drop = -math.inf
    for pid, scores in by_player.items():
        raw = [s.raw_score for s in scores]
        if len(raw) < MIN_ROUNDS_IMPROVED:
            continue
        mid = len(raw) // 2
        drop = sum(raw[:mid]) / mid - sum(raw[mid:]) / (len(raw) - mid)
        if drop > biggest_drop:
            biggest_drop = drop
            most_improved = PlayerAward(pid, names[pid], f"{drop:.1f} strokes")

    # Most consistent: lowest standard deviation
    most_consistent = None
    lowest_std = math.inf
    for pid, scores in by_player.items():
        raw = [s.raw_score for s in scores]
        if len(raw) < MIN_ROUNDS_CONSISTENT:
            continue
        mean = sum(raw) / len(raw)
        std_dev = math.sqrt(sum((x - mean) ** 2 for x in raw) / len(raw))
        if std_dev < lowest_std:
            lowest_std = std_dev
            most_consistent = PlayerAward(pid, names[pid], f"{std_dev:.1f} std dev")

    # Best single round relative to par (rounds without par skipped)
    best_round = None
    best_relative = math.inf
    for pid, scores in by_player.items():
        for s in scores:
            if s.differential is None:
                continue
            if s.differential < best_relative:
                best_relative = s.differential
                label = format_score_display(s.raw_score, s.course_par)
                best_round = PlayerAward(pid, names[pid], f"{s.raw_score} ({label})")

    total_rounds = game_count if game_count is not None else len({s.game_id for s in season_scores})

    return SeasonSummary(
        mvp=mvp,
        most_improved=most_improved,
        most_consistent=most_consistent,
        best_round=best_round,
        total_rounds=total_rounds,
        total_players=len(by_player),
    )
