"""Email sender interface used to dispatch alert notifications."""

from abc import ABC, abstractmethod


class EmailSender(ABC):
    """Abstract base class for email delivery backends."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the name of this backend."""
        ...

    @abstractmethod
    async def send(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> bool:
        """Deliver one email.

        Returns:
            True if the provider accepted the message, False otherwise.
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""
        return None
