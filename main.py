"""
Golf league administration CLI
"""
import asyncio
import sys
from pathlib import Path
from loguru import logger

from app.config import logging_config, scoring_config
from database.supabase_client import SupabaseDB
from data_pipeline.recalculation import recalculate_all_handicaps, recalculate_all_bonus_points
from ranking.calculator import rank, print_leaderboard


def setup_logging():
    """stderr + rotating file sinks"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=logging_config.log_level
    )
    logger.add(
        str(Path(logging_config.log_dir) / "golf_league_{time:YYYY-MM-DD}.log"),
        rotation=logging_config.log_rotation,
        retention=logging_config.log_retention,
        level="DEBUG"
    )


def _print_progress(done: int, total: int, result) -> None:
    print(f"  [{done}/{total}] ok={result.success_count} failed={result.failed_count}")


def _print_batch(title: str, result) -> None:
    print(f"\n=== {title} ===")
    print(f"  Succeeded: {result.success_count}/{result.total}")
    print(f"  Failed:    {result.failed_count}")
    if result.cancelled:
        print("  Cancelled before the last item")
    for error in result.errors:
        print(f"  - {error}")


async def show_leaderboard(db: SupabaseDB, season_id: str, top_n: int) -> None:
    scores = await db.fetch_round_scores(season_id=season_id)
    join_times = await db.fetch_season_join_times(season_id)
    rows = rank(season_id, scores, join_times)
    print_leaderboard(rows, title=f"Season {season_id}", top_n=top_n)


async def run_command(args) -> int:
    """Run a data command against Supabase"""
    try:
        db = SupabaseDB()
    except Exception as e:
        logger.error(f"Initialisation error: {e}")
        return 1

    if args.command == "leaderboard":
        await show_leaderboard(db, args.season_id, args.top)
        return 0

    if args.command == "recalc-handicaps":
        result = await recalculate_all_handicaps(db, scoring_config, on_progress=_print_progress)
        _print_batch("Handicap recalculation", result)
    else:
        result = await recalculate_all_bonus_points(db, args.game_ids, on_progress=_print_progress)
        _print_batch("Bonus point recalculation", result)

    return 1 if result.failed_count else 0


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Golf league scoring and recalculation")
    sub = parser.add_subparsers(dest="command", required=True)

    lb = sub.add_parser("leaderboard", help="Print a season leaderboard")
    lb.add_argument("season_id", help="Season ID")
    lb.add_argument("--top", type=int, default=20, help="Rows to print")

    sub.add_parser("recalc-handicaps", help="Recompute every player's handicap")

    bonus = sub.add_parser("recalc-bonus", help="Reassign bonus points for games")
    bonus.add_argument("game_ids", nargs="+", help="Game IDs")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("app.server:app", host=args.host, port=args.port, log_level="info")
        return 0

    return asyncio.run(run_command(args))


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
