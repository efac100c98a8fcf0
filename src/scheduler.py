"""Retention sweep runner for the pushnotify domain.

Submits PurgeExpiredNotifications on a fixed cadence (daily by default).

Usage:
    python src/scheduler.py                      # Sweep every 24 hours
    python src/scheduler.py --once               # Sweep once and exit
    python src/scheduler.py --interval-hours 6   # Custom cadence
"""

import argparse
import time
from datetime import UTC, datetime

import structlog

logger = structlog.get_logger(__name__)


def _get_domain():
    from pushnotify.domain import pushnotify

    pushnotify.init()
    return pushnotify


def sweep_once(domain) -> int:
    from pushnotify.notification.retention import PurgeExpiredNotifications

    with domain.domain_context():
        deleted = domain.process(
            PurgeExpiredNotifications(as_of=datetime.now(UTC)),
            asynchronous=False,
        )
    logger.info("Retention sweep finished", deleted=deleted)
    return deleted


def run(domain, interval_hours: float):
    while True:
        try:
            sweep_once(domain)
        except Exception:
            logger.exception("Retention sweep failed")
        time.sleep(interval_hours * 3600)


def main():
    parser = argparse.ArgumentParser(description="Pushnotify retention sweep runner")
    parser.add_argument("--once", action="store_true", help="Run a single sweep and exit")
    parser.add_argument(
        "--interval-hours",
        type=float,
        default=24.0,
        help="Hours between sweeps (default: 24)",
    )
    args = parser.parse_args()

    domain = _get_domain()
    if args.once:
        sweep_once(domain)
        return

    run(domain, args.interval_hours)


if __name__ == "__main__":
    main()
