"""Abstract repository interface for the mail outbox."""

from abc import ABC, abstractmethod
from typing import List

from ..entities.outbox_message import OutboxMessage


class MailOutbox(ABC):
    """Mailbox-pattern collection drained by a separate delivery pipeline."""

    @abstractmethod
    async def enqueue_batch(self, messages: List[OutboxMessage]) -> List[OutboxMessage]:
        """Queue all messages in a single write.

        Either every message is stored or none is.

        Returns:
            The stored messages with ids populated.
        """
        pass
