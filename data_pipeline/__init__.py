"""
Recalculation pipeline package

Bulk handicap and bonus point recomputation run by administrators
"""

from .recalculation import (
    BatchResult,
    BonusChange,
    run_batch,
    recalculate_handicap,
    recalculate_all_handicaps,
    recalculate_game_bonus_points,
    recalculate_all_bonus_points,
)

__all__ = [
    # Runner
    "BatchResult",
    "run_batch",
    # Handicaps
    "recalculate_handicap",
    "recalculate_all_handicaps",
    # Bonus points
    "BonusChange",
    "recalculate_game_bonus_points",
    "recalculate_all_bonus_points",
]
