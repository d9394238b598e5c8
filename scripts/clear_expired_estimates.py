"""Clear shop opening/closing estimates whose time has elapsed.

Meant to be run periodically (for example from cron every few minutes).
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from marketplace.application.use_cases.shops import clear_expired_estimates
from marketplace.infrastructure.database import SessionLocal, initialize_database
from marketplace.utils import ensure_utc


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="Clear expired opening/closing estimates of marketplace shops.",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Reference time in ISO 8601 format (default: current UTC time)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log each step of the run.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_database()

    session = SessionLocal()
    try:
        cleared = clear_expired_estimates(session, now=ensure_utc(args.now))
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not clear estimates: {exc}") from exc
    finally:
        session.close()
    print(f"Cleared {cleared} expired estimate(s).")


if __name__ == "__main__":
    main()
