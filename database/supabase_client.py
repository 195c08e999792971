"""
Supabase database client

Data access for the golf league: round scores with their game/course
metadata, profiles, season participation and earned achievements.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Set
from pydantic import TypeAdapter
from supabase import create_client, Client
from loguru import logger

from app.config import supabase_config
from ranking.calculator import rank, player_rank
from ranking.models import Course, Game, PlayerProfile, RoundScore


# Scores with the game, course and player name needed for par maths
SCORE_COLUMNS = """
    id,
    player_id,
    game_id,
    raw_score,
    points,
    bonus_points,
    submitted_at,
    profiles!player_id ( username ),
    games:game_id (
        id,
        season_id,
        game_date,
        courses:course_id ( par )
    )
"""

PROFILE_COLUMNS = "id, username, handicap, bio, profile_image_url"


# Singleton client
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Supabase client instance (singleton)"""
    global _supabase_client
    if _supabase_client is None:
        if not supabase_config.supabase_url or not supabase_config.supabase_key:
            raise ValueError("Set the SUPABASE_URL and SUPABASE_KEY environment variables")
        _supabase_client = create_client(
            supabase_config.supabase_url,
            supabase_config.supabase_key
        )
    return _supabase_client


def _nested(row: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Embedded relation as a dict (PostgREST may return a list or null)"""
    value = row.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    return value or {}


_DATETIME = TypeAdapter(datetime)


def _parse_datetime(value: str) -> datetime:
    """PostgREST timestamptz (any fraction length, Z or offset)"""
    return _DATETIME.validate_python(value)


def row_to_round_score(row: Dict[str, Any]) -> RoundScore:
    """scores row (with embedded game/course/profile) -> RoundScore"""
    game = _nested(row, "games")
    course = _nested(game, "courses")
    profile = _nested(row, "profiles")

    return RoundScore(
        id=str(row["id"]),
        player_id=str(row["player_id"]),
        game_id=str(row["game_id"]),
        raw_score=row["raw_score"],
        points=row.get("points") or 0,
        bonus_points=row.get("bonus_points") or 0,
        submitted_at=row["submitted_at"],
        season_id=game.get("season_id"),
        course_par=course.get("par"),
        game_date=game.get("game_date"),
        player_name=profile.get("username"),
    )


def row_to_profile(row: Dict[str, Any]) -> PlayerProfile:
    return PlayerProfile(
        id=str(row["id"]),
        username=row.get("username") or "",
        handicap=row.get("handicap"),
        bio=row.get("bio"),
        profile_image_url=row.get("profile_image_url"),
        raw_data=row,
    )


class SupabaseDB:
    """Supabase database client"""

    def __init__(self, client: Optional[Client] = None):
        self.client: Client = client or get_supabase_client()

    # ==================== Scores ====================

    async def fetch_round_scores(
        self,
        game_id: Optional[str] = None,
        season_id: Optional[str] = None,
        player_id: Optional[str] = None,
    ) -> List[RoundScore]:
        """
        Round scores for exactly one scope: a game, a season or a player.

        Raises:
            ValueError: zero or several scopes given
        """
        scopes = [s for s in (game_id, season_id, player_id) if s is not None]
        if len(scopes) != 1:
            raise ValueError("fetch_round_scores needs exactly one of game_id, season_id, player_id")

        try:
            query = self.client.table("scores").select(SCORE_COLUMNS)
            if game_id is not None:
                query = query.eq("game_id", game_id)
            elif player_id is not None:
                query = query.eq("player_id", player_id)
            else:
                game_ids = await self.fetch_season_game_ids(season_id)
                if not game_ids:
                    return []
                query = query.in_("game_id", game_ids)

            result = query.order("submitted_at").execute()
            return [row_to_round_score(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Score fetch error (game={game_id}, season={season_id}, player={player_id}): {e}")
            raise

    async def persist_score_points(self, score_id: str, points: int, bonus_points: int) -> None:
        """Store recalculated points for one score"""
        try:
            self.client.table("scores").update({
                "points": points,
                "bonus_points": bonus_points,
                "total_points": points + bonus_points,
            }).eq("id", score_id).execute()
        except Exception as e:
            logger.error(f"Score update error ({score_id}): {e}")
            raise

    # ==================== Games / seasons ====================

    async def fetch_game(self, game_id: str) -> Optional[Game]:
        try:
            result = self.client.table("games").select(
                "id, name, season_id, game_date, status, courses:course_id ( id, name, par, location )"
            ).eq("id", game_id).execute()
        except Exception as e:
            logger.error(f"Game fetch error ({game_id}): {e}")
            raise

        if not result.data:
            return None
        row = result.data[0]
        course = _nested(row, "courses")
        return Game(
            id=str(row["id"]),
            name=row.get("name"),
            season_id=row.get("season_id"),
            game_date=row.get("game_date"),
            status=row.get("status") or "active",
            course=Course(**course) if course.get("name") else None,
        )

    async def fetch_season_game_ids(self, season_id: str) -> List[str]:
        try:
            result = self.client.table("games").select("id").eq("season_id", season_id).execute()
            return [str(row["id"]) for row in result.data or []]
        except Exception as e:
            logger.error(f"Season game fetch error ({season_id}): {e}")
            raise

    async def fetch_season_leaderboard_rows(self, season_id: str) -> List[Dict[str, Any]]:
        """Rows of the season_leaderboard view (player_id, games_played, ...)"""
        try:
            result = self.client.table("season_leaderboard").select("*").eq(
                "season_id", season_id
            ).execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Season leaderboard fetch error ({season_id}): {e}")
            raise

    async def fetch_season_join_times(self, season_id: str) -> Dict[str, datetime]:
        try:
            result = self.client.table("season_participants").select(
                "player_id, joined_at"
            ).eq("season_id", season_id).execute()
        except Exception as e:
            logger.error(f"Season participants fetch error ({season_id}): {e}")
            raise

        return {
            str(row["player_id"]): _parse_datetime(row["joined_at"])
            for row in result.data or []
            if row.get("joined_at")
        }

    async def fetch_player_season_rank(self, player_id: str, season_id: str) -> Optional[int]:
        """Current season rank, recomputed from the season's scores"""
        scores = await self.fetch_round_scores(season_id=season_id)
        join_times = await self.fetch_season_join_times(season_id)
        return player_rank(rank(season_id, scores, join_times), player_id)

    # ==================== Profiles ====================

    async def fetch_profiles(self) -> List[PlayerProfile]:
        try:
            result = self.client.table("profiles").select(PROFILE_COLUMNS).order("username").execute()
            return [row_to_profile(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Profile list fetch error: {e}")
            raise

    async def fetch_profile(self, player_id: str) -> Optional[PlayerProfile]:
        try:
            result = self.client.table("profiles").select(PROFILE_COLUMNS).eq("id", player_id).execute()
        except Exception as e:
            logger.error(f"Profile fetch error ({player_id}): {e}")
            raise

        if not result.data:
            return None
        return row_to_profile(result.data[0])

    async def persist_computed_handicap(self, player_id: str, value: Optional[float]) -> None:
        try:
            self.client.table("profiles").update({"handicap": value}).eq("id", player_id).execute()
        except Exception as e:
            logger.error(f"Handicap update error ({player_id}): {e}")
            raise

    # ==================== Achievements ====================

    async def fetch_earned_achievement_keys(self, player_id: str) -> Set[str]:
        try:
            result = self.client.table("user_achievements").select(
                "achievements:achievement_id ( key )"
            ).eq("user_id", player_id).execute()
        except Exception as e:
            logger.error(f"Achievement fetch error ({player_id}): {e}")
            raise

        keys = set()
        for row in result.data or []:
            key = _nested(row, "achievements").get("key")
            if key:
                keys.add(key)
        return keys
