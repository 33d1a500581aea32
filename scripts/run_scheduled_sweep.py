"""Cron entry point that sends scheduled notifications which are due."""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import process_scheduled_notifications
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the sweep."""

    parser = argparse.ArgumentParser(
        description="Send every scheduled notification whose delivery time has passed.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of notifications to process (default: SWEEP_BATCH_SIZE)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every processed notification.",
    )
    return parser.parse_args()


def main() -> None:
    """Run one sweep and report the counters."""

    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_database()

    session = SessionLocal()
    try:
        result = process_scheduled_notifications(session, limit=args.limit)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not read scheduled notifications: {exc}") from exc
    finally:
        session.close()

    print(
        "Scheduled sweep finished:\n"
        f"  Processed: {result.processed}\n"
        f"  Sent: {result.sent}\n"
        f"  Failed: {result.failed}"
    )


if __name__ == "__main__":
    main()
