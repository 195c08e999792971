"""
Golf League - FastAPI server
Leaderboards, handicaps, achievement progress and admin recalculation

Data source: Supabase
"""
from dataclasses import asdict
from functools import lru_cache
from typing import Optional

from fastapi import FastAPI, Query, HTTPException, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from loguru import logger

from app.achievement_progress import progress
from app.achievements import ACHIEVEMENT_CATALOG
from app.config import scoring_config
from app.season_summary import summarize_season
from data_pipeline.recalculation import recalculate_all_handicaps, recalculate_game_bonus_points
from database.supabase_client import SupabaseDB
from ranking.calculator import rank
from ranking.exceptions import ScoringError, InvalidInputError, MissingProfileError
from ranking.handicap import HandicapPolicy, calculate_handicap, format_handicap, handicap_category
from ranking.scoring import get_policy, preview_score, format_score_display


# FastAPI app
app = FastAPI(
    title="Golf League",
    description="Scoring, rankings and achievements for a club golf league",
    version="1.0.0"
)


@lru_cache()
def get_db() -> SupabaseDB:
    """Shared data access client (overridden in tests)"""
    return SupabaseDB()


class PreviewRequest(BaseModel):
    raw_score: int = Field(..., gt=0, description="Strokes for the round")


@app.exception_handler(ScoringError)
async def scoring_error_handler(request: Request, exc: ScoringError):
    if isinstance(exc, InvalidInputError):
        status_code = 422
    elif isinstance(exc, MissingProfileError):
        status_code = 404
    else:
        status_code = 400
    logger.warning(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": exc.user_message})


# ==================== API Endpoints ====================

@app.get("/api/status")
async def api_status():
    """Service settings"""
    return {
        "status": "ok",
        "scoring_policy": scoring_config.scoring_policy,
        "handicap_max_rounds": scoring_config.handicap_max_rounds,
        "achievements": len(ACHIEVEMENT_CATALOG),
    }


@app.get("/api/seasons/{season_id}/leaderboard")
async def api_season_leaderboard(season_id: str, db: SupabaseDB = Depends(get_db)):
    """Season leaderboard, rebuilt from the season's scores"""
    scores = await db.fetch_round_scores(season_id=season_id)
    join_times = await db.fetch_season_join_times(season_id)
    rows = rank(season_id, scores, join_times)

    return {
        "season_id": season_id,
        "players": len(rows),
        "leaderboard": [r.to_dict() for r in rows],
    }


@app.get("/api/seasons/{season_id}/summary")
async def api_season_summary(season_id: str, db: SupabaseDB = Depends(get_db)):
    """End-of-season awards"""
    game_ids = await db.fetch_season_game_ids(season_id)
    scores = await db.fetch_round_scores(season_id=season_id)
    return summarize_season(scores, game_count=len(game_ids)).to_dict()


@app.get("/api/players/{player_id}/handicap")
async def api_player_handicap(player_id: str, db: SupabaseDB = Depends(get_db)):
    """Handicap computed from the player's full history"""
    profile = await db.fetch_profile(player_id)
    if profile is None:
        raise MissingProfileError(player_id)

    history = await db.fetch_round_scores(player_id=player_id)
    result = calculate_handicap(player_id, history, scoring_config.handicap_max_rounds)
    policy = HandicapPolicy(scoring_config.handicap_multiplier, scoring_config.handicap_decimals)
    handicap = policy.apply(result.handicap)

    return {
        "player_id": player_id,
        "username": profile.username,
        "handicap": handicap,
        "display": format_handicap(handicap),
        "category": handicap_category(handicap),
        "rounds_used": result.rounds_used,
        "eligible_rounds": result.eligible_rounds,
        "excluded_score_ids": result.excluded_score_ids,
    }


@app.get("/api/players/{player_id}/achievements/progress")
async def api_achievement_progress(
    player_id: str,
    season_id: Optional[str] = Query(None, description="Current season"),
    db: SupabaseDB = Depends(get_db),
):
    """Progress toward every unearned, trackable badge"""
    all_scores = await db.fetch_round_scores(player_id=player_id)
    earned = await db.fetch_earned_achievement_keys(player_id)

    season_scores, leaderboard, season_rank = [], [], None
    if season_id:
        season_scores = [s for s in all_scores if s.season_id == season_id]
        leaderboard = await db.fetch_season_leaderboard_rows(season_id)
        season_rank = await db.fetch_player_season_rank(player_id, season_id)

    result = progress(
        player_id, season_id, all_scores, season_scores, leaderboard, season_rank, earned
    )
    return {
        "player_id": player_id,
        "season_id": season_id,
        "progress": {key: p.to_dict() for key, p in result.items()},
    }


@app.post("/api/games/{game_id}/preview")
async def api_preview_score(game_id: str, body: PreviewRequest, db: SupabaseDB = Depends(get_db)):
    """What a submission would earn if entered now"""
    game = await db.fetch_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")

    existing = [s.raw_score for s in await db.fetch_round_scores(game_id=game_id)]
    policy = get_policy(scoring_config.scoring_policy)
    preview = preview_score(body.raw_score, game.par, existing, policy)

    data = asdict(preview)
    data["display"] = format_score_display(body.raw_score, game.par) if game.par else None
    return data


# ==================== Admin ====================

@app.post("/api/admin/recalculate/handicaps")
async def api_recalculate_handicaps(db: SupabaseDB = Depends(get_db)):
    """Recompute every player's handicap"""
    result = await recalculate_all_handicaps(db, scoring_config)
    return result.to_dict()


@app.post("/api/admin/recalculate/bonus-points/{game_id}")
async def api_recalculate_bonus_points(game_id: str, db: SupabaseDB = Depends(get_db)):
    """Reassign a game's bonus to its lowest score(s)"""
    result, changes = await recalculate_game_bonus_points(db, game_id)
    return {
        "game_id": game_id,
        "result": result.to_dict(),
        "changes": [c.to_dict() for c in changes],
    }
