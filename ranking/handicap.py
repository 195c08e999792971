"""
Handicap calculation

Simplified USGA approach without course rating/slope:
- Differential = raw score - course par
- Average of the best (lowest) differentials, at most MAX_HANDICAP_ROUNDS
- Rounds without a course par are excluded, never counted as zero
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from loguru import logger

from .exceptions import MissingReferenceDataError
from .models import RoundScore


MAX_HANDICAP_ROUNDS = 8

# (upper bound, label), checked in order
HANDICAP_CATEGORIES = (
    (0, "Scratch or Better"),
    (5, "Low Handicap"),
    (10, "Mid Handicap"),
    (20, "Average Handicap"),
)


@dataclass
class HandicapResult:
    """Handicap with the rounds that produced it"""
    player_id: str
    handicap: Optional[float]
    differentials_used: List[int] = field(default_factory=list)
    eligible_rounds: int = 0
    excluded_score_ids: List[str] = field(default_factory=list)

    @property
    def rounds_used(self) -> int:
        return len(self.differentials_used)


@dataclass(frozen=True)
class HandicapPolicy:
    """
    Federation adjustments applied on top of the raw index.

    The defaults leave the index untouched; USGA play would use
    multiplier=0.96, decimals=1.
    """
    multiplier: float = 1.0
    decimals: Optional[int] = None

    def apply(self, index: Optional[float]) -> Optional[float]:
        if index is None:
            return None
        value = index * self.multiplier
        if self.decimals is not None:
            value = round(value, self.decimals)
        return value


def calculate_handicap(
    player_id: str,
    score_history: Sequence[RoundScore],
    max_rounds: int = MAX_HANDICAP_ROUNDS,
) -> HandicapResult:
    """
    Handicap index from a player's full history.

    Args:
        player_id: player the history belongs to
        score_history: all of the player's rounds (not modified)
        max_rounds: cap on the number of best differentials averaged

    Returns:
        HandicapResult; handicap is None when no round has a usable par
    """
    if max_rounds < 1:
        raise ValueError("max_rounds must be at least 1")

    differentials: List[int] = []
    excluded: List[str] = []

    for score in score_history:
        diff = score.differential
        if diff is None:
            excluded.append(score.id)
            logger.warning(str(MissingReferenceDataError(score.id)) + " - excluded from handicap")
            continue
        differentials.append(diff)

    best = sorted(differentials)[:max_rounds]
    handicap = sum(best) / len(best) if best else None

    if excluded:
        logger.info(f"Player {player_id}: {len(excluded)} rounds without par excluded")

    return HandicapResult(
        player_id=player_id,
        handicap=handicap,
        differentials_used=best,
        eligible_rounds=len(differentials),
        excluded_score_ids=excluded,
    )


def compute_handicap(
    player_id: str,
    score_history: Sequence[RoundScore],
    max_rounds: int = MAX_HANDICAP_ROUNDS,
) -> Optional[float]:
    """Handicap index only; None when there is nothing to compute from"""
    return calculate_handicap(player_id, score_history, max_rounds).handicap


def format_handicap(handicap: Optional[float]) -> str:
    """Handicap for display: N/A, +4.2, -1.0"""
    if handicap is None:
        return "N/A"
    sign = "+" if handicap > 0 else ""
    return f"{sign}{handicap:.1f}"


def handicap_category(handicap: Optional[float]) -> str:
    """Skill band for a handicap"""
    if handicap is None:
        return "Unrated"
    for upper, label in HANDICAP_CATEGORIES:
        if handicap <= upper:
            return label
    return "High Handicap"
