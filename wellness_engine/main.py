"""Command-line entry point for the wellness engine"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from wellness_engine.config import validate_config, LOG_LEVEL
from wellness_engine.db.connection import db
from wellness_engine.exceptions import WellnessEngineError
from wellness_engine.gamification.streak_system import format_streak_display
from wellness_engine.observability import init_sentry, shutdown_sentry
from wellness_engine.services import init_container

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wellness-engine",
        description="Recompute meditation and workout streaks",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    recompute = subparsers.add_parser("recompute", help="Recompute and store streaks for users")
    recompute.add_argument("user_ids", nargs="+", help="User IDs to recompute")

    return parser


async def recompute(user_ids: List[str]) -> int:
    """Recompute streaks for each user; returns the number of failures"""
    container = init_container(db)
    failures = 0

    for user_id in user_ids:
        try:
            streaks = await container.streak_service.update_user_streaks(user_id)
            milestones = await container.streak_service.check_milestones(user_id, streaks=streaks)
        except WellnessEngineError as e:
            logger.error(f"Failed to recompute streaks for {user_id}: {e.message}")
            failures += 1
            continue

        logger.info(f"Streaks for {user_id}:\n{format_streak_display(streaks)}")
        if milestones:
            logger.info(f"Milestones for {user_id}: {', '.join(milestones)}")

    return failures


async def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    )

    try:
        logger.info("Validating configuration...")
        validate_config()
        init_sentry()

        logger.info("Initializing database connection pool...")
        await db.init_pool()

        if args.command == "recompute":
            failures = await recompute(args.user_ids)
            return 1 if failures else 0
        return 2

    except WellnessEngineError as e:
        error = e.to_dict()
        logger.error(f"Fatal error: {error['message']} (request_id={error['request_id']})")
        print(error["user_message"], file=sys.stderr)
        return 1
    finally:
        await db.close_pool()
        shutdown_sentry()
        logger.info("Shutdown complete")


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
