"""SQLAlchemy ORM models mapping to domain entities.

These models represent the database schema and handle persistence concerns.
They should be converted to/from domain entities via repository mappers.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import DeclarativeBase

# Import domain enums for SQLAlchemy Enum columns
from app.solar_alerts.domain.entities.subscriber import AlertFrequency


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class SubscriberModel(Base):
    """ORM model for subscribers table (one row per user profile)."""

    __tablename__ = "subscribers"

    id = Column(String(128), primary_key=True)
    email = Column(String(255), nullable=True)
    email_alerts = Column(Boolean, nullable=False, default=False)
    kp_threshold = Column(Numeric(3, 1), nullable=True, default=5)
    push_notifications = Column(Boolean, nullable=False, default=False)
    alert_frequency = Column(
        SQLEnum(AlertFrequency), nullable=False, default=AlertFrequency.IMMEDIATELY
    )
    locations = Column(JSON, nullable=False, default=list)
    last_notified_at = Column(DateTime(timezone=True), nullable=True)

    # Index for the scheduled alert query
    __table_args__ = (
        Index("ix_subscribers_alerts_threshold", "email_alerts", "kp_threshold"),
    )

    def __repr__(self) -> str:
        return f"<SubscriberModel(id='{self.id}', email_alerts={self.email_alerts})>"


class OutboxMailModel(Base):
    """ORM model for the mail outbox drained by the delivery pipeline."""

    __tablename__ = "mail"

    id = Column(Integer, primary_key=True, autoincrement=True)
    to = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    text = Column(Text, nullable=False)
    html = Column(Text, nullable=False)
    subscriber_id = Column(String(128), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    delivered_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<OutboxMailModel(id={self.id}, to='{self.to}')>"
