"""
Season leaderboard calculation

- Per-player aggregation of a season's round scores
- Ordering: total points (desc) > average score (asc) > season join time > player ID
- Standard competition ranking: tied (points, average) share a rank, the next rank skips
- Always rebuilt from the full score set; nothing is cached
"""
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from loguru import logger

from .models import RoundScore


# =====================================================
# Data classes
# =====================================================

@dataclass
class LeaderboardRow:
    """One player's season standing"""
    rank: int
    player_id: str
    display_name: str
    games_played: int
    total_points: int
    avg_score: float
    season_id: Optional[str] = None

    @property
    def rank_key(self) -> Tuple[int, float]:
        """Pair that decides shared ranks"""
        return (self.total_points, self.avg_score)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class _PlayerTotals:
    player_id: str
    display_name: str
    games_played: int = 0
    total_points: int = 0
    stroke_total: int = 0

    @property
    def avg_score(self) -> float:
        return self.stroke_total / self.games_played


# =====================================================
# Ranking
# =====================================================

def _aggregate(season_id: Optional[str], round_scores: Sequence[RoundScore],
               display_names: Mapping[str, str]) -> Dict[str, _PlayerTotals]:
    totals: Dict[str, _PlayerTotals] = {}
    skipped = 0

    for score in round_scores:
        if season_id and score.season_id and score.season_id != season_id:
            skipped += 1
            continue

        entry = totals.get(score.player_id)
        if entry is None:
            name = display_names.get(score.player_id) or score.player_name or score.player_id
            entry = totals[score.player_id] = _PlayerTotals(score.player_id, name)

        entry.games_played += 1
        entry.total_points += score.total_points
        entry.stroke_total += score.raw_score

    if skipped:
        logger.debug(f"Season {season_id}: ignored {skipped} scores from other seasons")
    return totals


def rank(
    season_id: Optional[str],
    round_scores: Sequence[RoundScore],
    join_times: Optional[Mapping[str, datetime]] = None,
    display_names: Optional[Mapping[str, str]] = None,
) -> List[LeaderboardRow]:
    """
    Build the season leaderboard.

    Args:
        season_id: season being ranked; scores tagged with another season are ignored
        round_scores: every round score of the season
        join_times: optional season join time per player, earliest ranks first on a full tie
        display_names: optional player_id -> name overrides

    Returns:
        Rows in leaderboard order; empty when there are no scores
    """
    join_times = join_times or {}
    totals = _aggregate(season_id, round_scores, display_names or {})

    def order_key(t: _PlayerTotals):
        joined = join_times.get(t.player_id)
        return (
            -t.total_points,
            t.avg_score,
            joined is None,
            joined or datetime.min,
            t.player_id,
        )

    ordered = sorted(totals.values(), key=order_key)

    rows: List[LeaderboardRow] = []
    for position, t in enumerate(ordered, 1):
        row = LeaderboardRow(
            rank=position,
            player_id=t.player_id,
            display_name=t.display_name,
            games_played=t.games_played,
            total_points=t.total_points,
            avg_score=t.avg_score,
            season_id=season_id,
        )
        # Shared rank for an identical (points, average) pair
        if rows and rows[-1].rank_key == row.rank_key:
            row.rank = rows[-1].rank
        rows.append(row)

    logger.debug(f"Season {season_id}: ranked {len(rows)} players from {len(round_scores)} scores")
    return rows


def player_rank(rows: Sequence[LeaderboardRow], player_id: str) -> Optional[int]:
    """Rank of a player, None when they have no scores in the season"""
    for row in rows:
        if row.player_id == player_id:
            return row.rank
    return None


def max_games_played(rows: Sequence) -> int:
    """Most games played by anyone on the leaderboard (0 when empty); accepts rows or view dicts"""
    counts = (r.get("games_played") if isinstance(r, Mapping) else getattr(r, "games_played", 0) for r in rows)
    return max((c or 0 for c in counts), default=0)


def print_leaderboard(rows: Sequence[LeaderboardRow], title: str = "", top_n: int = 20):
    """Leaderboard summary for the console"""
    print(f"\n{'='*60}")
    print(f" {title}")
    print(f"{'='*60}")
    print(f"{'Rank':>4} {'Player':<20} {'Games':>5} {'Points':>7} {'Avg':>7}")
    print(f"{'-'*60}")

    for r in rows[:top_n]:
        name = r.display_name
        if len(name) > 18:
            name = name[:18] + ".."
        print(f"{r.rank:>4} {name:<20} {r.games_played:>5} {r.total_points:>7} {r.avg_score:>7.1f}")
