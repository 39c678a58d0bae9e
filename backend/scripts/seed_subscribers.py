#!/usr/bin/env python3
"""Seed the database with a few subscribers for local testing.

Run from backend directory:
    python scripts/seed_subscribers.py

This script is idempotent - safe to run multiple times.
"""

import asyncio
import sys

sys.path.insert(0, ".")

from sqlalchemy import select

from app.solar_alerts.domain.entities.subscriber import AlertFrequency, AlertSettings
from app.solar_alerts.infrastructure.db.models import SubscriberModel
from app.solar_alerts.infrastructure.db.session import dispose_engine, get_async_session_local
from app.solar_alerts.infrastructure.repositories.sql_subscriber_repository import (
    SqlSubscriberRepository,
)

SUBSCRIBERS = [
    {
        "id": "seed-storm-watcher",
        "email": "storm.watcher@example.com",
        "settings": AlertSettings(kp_threshold=5, email_alerts=True),
    },
    {
        "id": "seed-high-latitude",
        "email": "tromso@example.com",
        "settings": AlertSettings(
            kp_threshold=3,
            email_alerts=True,
            alert_frequency=AlertFrequency.IMMEDIATELY,
            locations=("Tromsø",),
        ),
    },
    {
        "id": "seed-severe-only",
        "email": "severe.only@example.com",
        "settings": AlertSettings(kp_threshold=7, email_alerts=True),
    },
    {
        # No contact address: exercises the NO_CONTACT skip
        "id": "seed-no-email",
        "email": None,
        "settings": AlertSettings(kp_threshold=4, email_alerts=True),
    },
]


async def seed() -> None:
    """Create missing seed subscribers."""
    print("\n" + "=" * 50)
    print("Solar Dash Alerts - Subscriber Seeding")
    print("=" * 50)

    created = 0
    session_factory = get_async_session_local()
    async with session_factory() as session:
        repo = SqlSubscriberRepository(session)
        for entry in SUBSCRIBERS:
            if await repo.get_by_id(entry["id"]) is not None:
                print(f"  ⏭️  {entry['id']} already exists")
                continue
            await repo.save_settings(entry["id"], entry["settings"], contact_address=entry["email"])
            print(f"  ✅ {entry['id']} (threshold {entry['settings'].kp_threshold:g})")
            created += 1

        await session.commit()

        result = await session.execute(select(SubscriberModel))
        print(f"\n📊 Subscribers created: {created}")
        print(f"📊 Total subscribers in database: {len(result.scalars().all())}")

    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(seed())
