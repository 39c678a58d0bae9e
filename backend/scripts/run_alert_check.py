#!/usr/bin/env python3
"""Run one Kp alert cycle immediately, outside the Celery schedule.

Run from backend directory:
    python scripts/run_alert_check.py
    python scripts/run_alert_check.py --policy batch_digest
"""

import argparse
import asyncio
import json
import sys

sys.path.insert(0, ".")

from app.core.config import get_settings
from app.core.logging import level_for, setup_logging
from app.solar_alerts.application.exceptions import ConfigurationError
from app.solar_alerts.infrastructure.db.session import dispose_engine
from app.solar_alerts.infrastructure.tasks.bootstrap import run_alert_cycle


async def main(policy: str | None) -> int:
    settings = get_settings()
    setup_logging(level=level_for(settings.debug))

    try:
        report = await run_alert_cycle(settings, policy_name=policy)
    except ConfigurationError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1
    finally:
        await dispose_engine()

    print(json.dumps(report.model_dump(mode="json"), indent=2))
    return 0 if not report.aborted else 2


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--policy",
        choices=["cooldown", "batch_digest"],
        default=None,
        help="Override the configured notification policy",
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.policy)))
