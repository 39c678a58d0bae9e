"""SQLAlchemy implementation of the mail outbox."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.solar_alerts.domain.entities.outbox_message import OutboxMessage
from app.solar_alerts.domain.repositories.outbox_repository import MailOutbox
from app.solar_alerts.infrastructure.db.models import OutboxMailModel


class SqlMailOutbox(MailOutbox):
    """Stores queued alert emails in the ``mail`` table in one transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def enqueue_batch(self, messages: List[OutboxMessage]) -> List[OutboxMessage]:
        if not messages:
            return []

        models = [self._to_model(m) for m in messages]
        async with self._session_factory() as session:
            session.add_all(models)
            await session.commit()
        return [self._to_entity(m) for m in models]

    def _to_model(self, entity: OutboxMessage) -> OutboxMailModel:
        return OutboxMailModel(
            to=entity.to,
            subject=entity.subject,
            text=entity.text,
            html=entity.html,
            subscriber_id=entity.subscriber_id,
            created_at=entity.created_at,
        )

    def _to_entity(self, model: OutboxMailModel) -> OutboxMessage:
        return OutboxMessage(
            id=model.id,
            to=model.to,
            subject=model.subject,
            text=model.text,
            html=model.html,
            subscriber_id=model.subscriber_id,
            created_at=model.created_at,
        )
