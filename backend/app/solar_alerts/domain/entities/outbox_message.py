"""Outbox message entity for the queued (batch-digest) delivery path."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class OutboxMessage:
    """A rendered email waiting for the external delivery pipeline.

    Attributes:
        id: Database identifier (None for unsaved entities).
        to: Recipient address.
        subject: Email subject line.
        text: Plain-text body.
        html: HTML body.
        subscriber_id: Directory id of the recipient, for tracing.
        created_at: When the message was queued.
    """

    id: Optional[int]
    to: str
    subject: str
    text: str
    html: str
    subscriber_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
