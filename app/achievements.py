"""
Achievement catalog

Static definitions of every club badge. Trackable badges carry a progress
rule and a fixed target; hidden badges unlock through other means and never
report progress.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class ProgressRule(str, Enum):
    """How progress toward a badge is measured"""
    GAMES_PLAYED = "games_played"            # all-time scores submitted
    ALL_TIME_WINS = "all_time_wins"          # all-time bonus-earning scores
    SEASON_POINTS = "season_points"          # points + bonus in the season
    BEST_STREAK = "best_streak"              # longest bonus run, all-time
    SEASON_WINS = "season_wins"              # bonus-earning scores in the season
    SEASON_ATTENDANCE = "season_attendance"  # season games vs the most anyone played
    SEASON_RANK = "season_rank"              # current season rank <= target rank
    HIDDEN = "hidden"


class Category(str, Enum):
    MILESTONE = "milestone"
    PERFORMANCE = "performance"
    CONSISTENCY = "consistency"
    SPECIAL = "special"


class Tier(str, Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


@dataclass(frozen=True)
class AchievementDefinition:
    """Catalog entry"""
    key: str
    name: str
    description: str
    category: Category
    tier: Tier
    rule: ProgressRule
    target: int = 0
    label: str = ""
    rank_limit: Optional[int] = None  # SEASON_RANK only

    @property
    def is_hidden(self) -> bool:
        return self.rule == ProgressRule.HIDDEN


def _games(key, name, count, tier):
    return AchievementDefinition(
        key, name, f"Play {count} games", Category.MILESTONE, tier,
        ProgressRule.GAMES_PLAYED, count, "Games played",
    )


def _points(key, name, points, tier):
    return AchievementDefinition(
        key, name, f"Earn {points} total points in a season", Category.MILESTONE, tier,
        ProgressRule.SEASON_POINTS, points, "Season points",
    )


def _rank(key, name, description, limit, tier):
    return AchievementDefinition(
        key, name, description, Category.SPECIAL, tier,
        ProgressRule.SEASON_RANK, 1, "Current rank", rank_limit=limit,
    )


def _hidden(key, name, description, category, tier):
    return AchievementDefinition(key, name, description, category, tier, ProgressRule.HIDDEN)


ACHIEVEMENT_CATALOG: List[AchievementDefinition] = [
    # Milestones
    AchievementDefinition(
        "first_score", "First Steps", "Submit your first score", Category.MILESTONE, Tier.BRONZE,
        ProgressRule.GAMES_PLAYED, 1, "Scores submitted",
    ),
    AchievementDefinition(
        "first_win", "First Victory", "Earn your first bonus point", Category.MILESTONE, Tier.BRONZE,
        ProgressRule.ALL_TIME_WINS, 1, "Wins",
    ),
    _games("games_5", "Getting Started", 5, Tier.BRONZE),
    _games("games_10", "Regular Player", 10, Tier.SILVER),
    _games("games_25", "Dedicated Golfer", 25, Tier.GOLD),
    _games("games_50", "Golf Veteran", 50, Tier.PLATINUM),
    _points("points_50", "Half Century", 50, Tier.BRONZE),
    _points("points_100", "Century Club", 100, Tier.SILVER),
    _points("points_200", "Double Century", 200, Tier.GOLD),

    # Performance
    AchievementDefinition(
        "hot_streak_3", "Hot Streak", "Win bonus points in 3 consecutive games",
        Category.PERFORMANCE, Tier.SILVER, ProgressRule.BEST_STREAK, 3, "Best streak",
    ),
    AchievementDefinition(
        "hot_streak_5", "On Fire", "Win bonus points in 5 consecutive games",
        Category.PERFORMANCE, Tier.GOLD, ProgressRule.BEST_STREAK, 5, "Best streak",
    ),
    _hidden("perfect_score", "Eagle Eye", "Score under par", Category.PERFORMANCE, Tier.GOLD),
    AchievementDefinition(
        "domination", "Dominator", "Win 5+ bonus points in a season",
        Category.PERFORMANCE, Tier.GOLD, ProgressRule.SEASON_WINS, 5, "Season wins",
    ),

    # Consistency
    AchievementDefinition(
        "perfect_attendance", "Perfect Attendance", "Play all rounds in a season",
        Category.CONSISTENCY, Tier.SILVER, ProgressRule.SEASON_ATTENDANCE, 0, "Games played",
    ),
    _hidden(
        "consistent_scorer", "Mr. Reliable", "Play 5+ games with less than 5 strokes variance",
        Category.CONSISTENCY, Tier.SILVER,
    ),

    # Special
    _rank("season_champion", "Season Champion", "Finish 1st in a season", 1, Tier.PLATINUM),
    _rank("season_runner_up", "Runner Up", "Finish 2nd in a season", 2, Tier.GOLD),
    _rank("season_top_three", "Podium Finish", "Finish in top 3 of a season", 3, Tier.SILVER),
    _hidden(
        "comeback_king", "Comeback King", "Climb 5+ positions in final 3 games",
        Category.SPECIAL, Tier.GOLD,
    ),
    _hidden(
        "early_bird", "Early Bird", "Submit score within 24 hours of game date",
        Category.SPECIAL, Tier.BRONZE,
    ),
]

_BY_KEY: Dict[str, AchievementDefinition] = {d.key: d for d in ACHIEVEMENT_CATALOG}


def get_definition(key: str) -> Optional[AchievementDefinition]:
    return _BY_KEY.get(key)


def trackable_definitions(catalog: Optional[List[AchievementDefinition]] = None) -> List[AchievementDefinition]:
    """Definitions that report progress"""
    return [d for d in (ACHIEVEMENT_CATALOG if catalog is None else catalog) if not d.is_hidden]
