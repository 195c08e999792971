"""
Recalculation batch runner

Administrator-triggered bulk passes over stored data:
- handicap recomputation for every profile
- bonus point recomputation for one or more games

Items run strictly one after another. A failing item is logged and recorded,
the batch carries on with the next one.
"""
import inspect
from dataclasses import dataclass, field, asdict, replace
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Sequence, Tuple, Union
from loguru import logger

from ranking.exceptions import MissingProfileError
from ranking.handicap import HandicapPolicy, HandicapResult, calculate_handicap, MAX_HANDICAP_ROUNDS
from ranking.scoring import BONUS_POINTS, bonus_assignments


# =====================================================
# Data classes
# =====================================================

@dataclass
class BatchResult:
    """Outcome of a batch run"""
    total: int = 0
    success_count: int = 0
    failed_count: int = 0
    errors: List[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def attempted(self) -> int:
        return self.success_count + self.failed_count

    def to_dict(self):
        data = asdict(self)
        data["attempted"] = self.attempted
        return data


@dataclass(frozen=True)
class BonusChange:
    """A score whose bonus changed during recalculation"""
    score_id: str
    raw_score: int
    old_bonus: int
    new_bonus: int

    def to_dict(self):
        return asdict(self)


ProgressCallback = Callable[[int, int, BatchResult], None]
Operation = Callable[[Any], Union[Any, Awaitable[Any]]]


# =====================================================
# Runner
# =====================================================

async def run_batch(
    items: Iterable[Any],
    operation: Operation,
    describe: Optional[Callable[[Any], str]] = None,
    on_progress: Optional[ProgressCallback] = None,
    should_continue: Optional[Callable[[], bool]] = None,
) -> BatchResult:
    """
    Apply an operation to each item in order.

    Args:
        items: work items
        operation: sync or async callable taking one item
        describe: label for an item in error messages (default str(item))
        on_progress: called with (done, total, result) after every item
        should_continue: checked before each item; False stops the batch

    Returns:
        BatchResult; errors read "<item label>: <message>"
    """
    items = list(items)
    describe = describe or str
    result = BatchResult(total=len(items))

    for item in items:
        if should_continue is not None and not should_continue():
            result.cancelled = True
            logger.warning(f"Batch cancelled after {result.attempted}/{result.total} items")
            break

        try:
            outcome = operation(item)
            if inspect.isawaitable(outcome):
                await outcome
            result.success_count += 1
        except Exception as e:
            label = describe(item)
            result.failed_count += 1
            result.errors.append(f"{label}: {e}")
            logger.error(f"Batch item failed ({label}): {e}")

        if on_progress is not None:
            on_progress(result.attempted, result.total, result)

    logger.info(
        f"Batch finished: {result.success_count}/{result.total} succeeded, "
        f"{result.failed_count} failed"
    )
    return result


# =====================================================
# Handicaps
# =====================================================

async def recalculate_handicap(
    db,
    player_id: str,
    max_rounds: int = MAX_HANDICAP_ROUNDS,
    policy: Optional[HandicapPolicy] = None,
) -> HandicapResult:
    """
    Recompute and store one player's handicap.

    Raises:
        MissingProfileError: the player has no profile
    """
    profile = await db.fetch_profile(player_id)
    if profile is None:
        raise MissingProfileError(player_id)

    history = await db.fetch_round_scores(player_id=player_id)
    result = calculate_handicap(player_id, history, max_rounds)
    value = (policy or HandicapPolicy()).apply(result.handicap)

    await db.persist_computed_handicap(player_id, value)
    logger.debug(f"Handicap for {profile.username}: {value} ({result.rounds_used} rounds)")
    return replace(result, handicap=value)


async def recalculate_all_handicaps(
    db,
    config=None,
    on_progress: Optional[ProgressCallback] = None,
    should_continue: Optional[Callable[[], bool]] = None,
) -> BatchResult:
    """
    Recompute handicaps for every profile.

    Args:
        db: data access adapter
        config: ScoringConfig-like settings (max rounds, multiplier, decimals)
    """
    max_rounds = getattr(config, "handicap_max_rounds", MAX_HANDICAP_ROUNDS)
    policy = HandicapPolicy(
        multiplier=getattr(config, "handicap_multiplier", 1.0),
        decimals=getattr(config, "handicap_decimals", None),
    )

    profiles = await db.fetch_profiles()
    logger.info(f"Recalculating handicaps for {len(profiles)} players")

    return await run_batch(
        profiles,
        lambda p: recalculate_handicap(db, p.id, max_rounds, policy),
        describe=lambda p: p.username or p.id,
        on_progress=on_progress,
        should_continue=should_continue,
    )


# =====================================================
# Bonus points
# =====================================================

async def recalculate_game_bonus_points(
    db,
    game_id: str,
    on_progress: Optional[ProgressCallback] = None,
    should_continue: Optional[Callable[[], bool]] = None,
) -> Tuple[BatchResult, List[BonusChange]]:
    """
    Reassign the bonus of one game to the lowest score(s).

    Only scores whose bonus actually changes are written back.

    Returns:
        (batch result over the game's scores, changes made)
    """
    scores = await db.fetch_round_scores(game_id=game_id)
    assignments = bonus_assignments(scores)
    changes: List[BonusChange] = []

    async def apply(score):
        new_bonus = BONUS_POINTS if assignments[score.id] else 0
        if new_bonus == score.bonus_points:
            return
        await db.persist_score_points(score.id, score.points, new_bonus)
        changes.append(BonusChange(score.id, score.raw_score, score.bonus_points, new_bonus))

    result = await run_batch(
        scores,
        apply,
        describe=lambda s: f"score {s.id}",
        on_progress=on_progress,
        should_continue=should_continue,
    )

    logger.info(f"Game {game_id}: {len(changes)} bonus changes across {len(scores)} scores")
    return result, changes


async def recalculate_all_bonus_points(
    db,
    game_ids: Sequence[str],
    on_progress: Optional[ProgressCallback] = None,
    should_continue: Optional[Callable[[], bool]] = None,
) -> BatchResult:
    """Bonus recalculation over several games, one game per item"""

    async def apply(game_id):
        inner, _ = await recalculate_game_bonus_points(db, game_id)
        if inner.failed_count:
            raise RuntimeError("; ".join(inner.errors))

    return await run_batch(
        game_ids,
        apply,
        describe=lambda g: f"game {g}",
        on_progress=on_progress,
        should_continue=should_continue,
    )
