# Ports for external integrations (KpDataSource, EmailSender)

from .email_sender import EmailSender
from .kp_source import KpDataSource

__all__ = [
    "EmailSender",
    "KpDataSource",
]
