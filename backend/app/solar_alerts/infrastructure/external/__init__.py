# External clients - NOAA SWPC, Postmark, SMTP

from .console_sender import ConsoleEmailSender
from .noaa_kp_client import NoaaKpClient, parse_kp_payload
from .postmark_sender import PostmarkEmailSender
from .sender_factory import create_email_sender
from .smtp_sender import SmtpEmailSender

__all__ = [
    "ConsoleEmailSender",
    "NoaaKpClient",
    "PostmarkEmailSender",
    "SmtpEmailSender",
    "create_email_sender",
    "parse_kp_payload",
]
