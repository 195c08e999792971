"""
Achievement progress tracker

Progress toward every unearned, trackable badge for one player, computed
from already-fetched data:
- all-time scores (games played, wins, best bonus streak)
- season scores (season points, season wins, attendance)
- season leaderboard (attendance target) and the player's season rank

Hidden badges never appear in the result. Without a season every
season-scoped figure is zero.
"""
from dataclasses import dataclass, asdict
from typing import Collection, Dict, List, Optional, Sequence
from loguru import logger

from ranking.calculator import max_games_played
from ranking.models import RoundScore
from .achievements import (
    ACHIEVEMENT_CATALOG,
    AchievementDefinition,
    ProgressRule,
)


@dataclass(frozen=True)
class AchievementProgress:
    """Progress toward one badge"""
    current: int
    target: int
    label: str

    @property
    def is_complete(self) -> bool:
        return self.target > 0 and self.current >= self.target

    def to_dict(self):
        return asdict(self)


def best_streak(scores: Sequence[RoundScore]) -> int:
    """Longest run of consecutive bonus-earning rounds, oldest first"""
    ordered = sorted(scores, key=lambda s: s.submitted_at)
    current = best = 0
    for score in ordered:
        if score.has_bonus:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


@dataclass
class _PlayerFigures:
    games_played: int
    wins: int
    best_streak: int
    season_points: int
    season_wins: int
    season_games: int
    season_max_games: int
    season_rank: Optional[int]


def _collect_figures(
    season_id: Optional[str],
    all_scores: Sequence[RoundScore],
    season_scores: Sequence[RoundScore],
    season_leaderboard: Sequence,
    season_rank: Optional[int],
) -> _PlayerFigures:
    if not season_id:
        season_scores, season_leaderboard, season_rank = [], [], None
    if season_rank is not None and season_rank < 1:
        season_rank = None

    return _PlayerFigures(
        games_played=len(all_scores),
        wins=sum(1 for s in all_scores if s.has_bonus),
        best_streak=best_streak(all_scores),
        season_points=sum(s.total_points for s in season_scores),
        season_wins=sum(1 for s in season_scores if s.has_bonus),
        season_games=len(season_scores),
        season_max_games=max_games_played(season_leaderboard),
        season_rank=season_rank,
    )


def _progress_for(definition: AchievementDefinition, f: _PlayerFigures) -> AchievementProgress:
    rule = definition.rule
    target = definition.target

    if rule == ProgressRule.GAMES_PLAYED:
        current = f.games_played
    elif rule == ProgressRule.ALL_TIME_WINS:
        current = f.wins
    elif rule == ProgressRule.SEASON_POINTS:
        current = f.season_points
    elif rule == ProgressRule.BEST_STREAK:
        current = f.best_streak
    elif rule == ProgressRule.SEASON_WINS:
        current = f.season_wins
    elif rule == ProgressRule.SEASON_ATTENDANCE:
        current = f.season_games
        target = f.season_max_games
    elif rule == ProgressRule.SEASON_RANK:
        limit = definition.rank_limit or 1
        current = 1 if f.season_rank is not None and f.season_rank <= limit else 0
    else:
        raise ValueError(f"No progress rule for {definition.key} ({rule})")

    return AchievementProgress(current=current, target=target, label=definition.label)


def progress(
    player_id: str,
    season_id: Optional[str],
    all_scores: Sequence[RoundScore],
    season_scores: Sequence[RoundScore],
    season_leaderboard: Sequence,
    season_rank: Optional[int],
    earned_keys: Collection[str] = (),
    catalog: Optional[List[AchievementDefinition]] = None,
) -> Dict[str, AchievementProgress]:
    """
    Progress toward each unearned, trackable badge.

    Args:
        player_id: player being tracked
        season_id: current season, or None
        all_scores: every score the player has submitted
        season_scores: the player's scores in the season
        season_leaderboard: season rows exposing games_played
        season_rank: player's current season rank, None if unranked
        earned_keys: badges already earned (left out of the result)
        catalog: definitions to track, defaults to the club catalog

    Returns:
        {achievement key: AchievementProgress}
    """
    figures = _collect_figures(season_id, all_scores, season_scores, season_leaderboard, season_rank)
    earned = set(earned_keys)

    result: Dict[str, AchievementProgress] = {}
    for definition in ACHIEVEMENT_CATALOG if catalog is None else catalog:
        if definition.is_hidden or definition.key in earned:
            continue
        result[definition.key] = _progress_for(definition, figures)

    logger.debug(
        f"Achievement progress for {player_id} (season {season_id}): "
        f"{len(result)} tracked, {len(earned)} earned"
    )
    return result
