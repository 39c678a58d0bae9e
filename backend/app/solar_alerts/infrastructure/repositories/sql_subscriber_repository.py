"""SQLAlchemy implementations of the subscriber directory and state writer.

Provides async database operations for Subscriber entities using
SQLAlchemy 2.0 async patterns with asyncpg driver.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.solar_alerts.application.exceptions import SubscriberNotFoundError
from app.solar_alerts.domain.entities.subscriber import (
    DEFAULT_KP_THRESHOLD,
    AlertSettings,
    Subscriber,
)
from app.solar_alerts.domain.repositories.subscriber_repository import (
    NotificationStateWriter,
    SubscriberRepository,
)
from app.solar_alerts.domain.value_objects.kp_reading import KP_MAX
from app.solar_alerts.infrastructure.db.models import SubscriberModel


class SqlSubscriberRepository(SubscriberRepository):
    """SQLAlchemy-based implementation of the SubscriberRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with a database session.

        Args:
            session: An async SQLAlchemy session.
        """
        self._session = session

    async def list_alerting(
        self, max_threshold: Optional[float] = None
    ) -> List[Subscriber]:
        """Retrieve all subscribers with email alerts enabled.

        Thresholds are compared the way the domain reads them: NULL counts
        as the default and values above the Kp scale are clamped to its top.
        """
        stmt = select(SubscriberModel).where(SubscriberModel.email_alerts.is_(True))
        if max_threshold is not None:
            effective_threshold = func.least(
                func.coalesce(SubscriberModel.kp_threshold, DEFAULT_KP_THRESHOLD),
                KP_MAX,
            )
            stmt = stmt.where(effective_threshold <= max_threshold)
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def get_by_id(self, subscriber_id: str) -> Optional[Subscriber]:
        """Retrieve a subscriber by directory id."""
        model = await self._session.get(SubscriberModel, subscriber_id)
        return self._to_entity(model) if model else None

    async def save_settings(
        self,
        subscriber_id: str,
        settings: AlertSettings,
        contact_address: Optional[str] = None,
    ) -> Subscriber:
        """Create or update a subscriber's alert settings.

        Leaves last_notified_at untouched for existing records.
        """
        model = await self._session.get(SubscriberModel, subscriber_id)
        if model is None:
            model = SubscriberModel(id=subscriber_id, last_notified_at=None)
            self._session.add(model)

        if contact_address is not None:
            model.email = contact_address.strip().lower()
        model.email_alerts = settings.email_alerts
        model.kp_threshold = settings.kp_threshold
        model.push_notifications = settings.push_notifications
        model.alert_frequency = settings.alert_frequency
        model.locations = list(settings.locations)

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: SubscriberModel) -> Subscriber:
        """Convert a SubscriberModel to a Subscriber domain entity."""
        return Subscriber(
            id=model.id,
            contact_address=model.email,
            alert_settings=AlertSettings(
                kp_threshold=(
                    float(model.kp_threshold)
                    if model.kp_threshold is not None
                    else DEFAULT_KP_THRESHOLD
                ),
                email_alerts=bool(model.email_alerts),
                push_notifications=bool(model.push_notifications),
                alert_frequency=model.alert_frequency,
                locations=tuple(model.locations or ()),
            ),
            last_notified_at=model.last_notified_at,
        )


class SqlNotificationStateWriter(NotificationStateWriter):
    """Writes last-notified timestamps, one short transaction per subscriber.

    Each write opens its own session so concurrent dispatches never share
    an AsyncSession.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def set_last_notified_at(self, subscriber_id: str, at: datetime) -> None:
        """Update only the notification timestamp of one subscriber.

        Raises:
            SubscriberNotFoundError: If no row matched.
        """
        stmt = (
            update(SubscriberModel)
            .where(SubscriberModel.id == subscriber_id)
            .values(last_notified_at=at)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                await session.rollback()
                raise SubscriberNotFoundError(subscriber_id)
            await session.commit()
