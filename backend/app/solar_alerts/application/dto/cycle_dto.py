"""Summary of one alert evaluation cycle."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from app.solar_alerts.domain.services.notification_policy import DecisionReason


class CycleReport(BaseModel):
    """What happened during one evaluate_cycle() run.

    Returned by the scheduled task so results show up in the Celery
    result backend and in logs.
    """

    policy: str
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    kp_value: Optional[float] = None
    aborted: bool = False
    abort_reason: Optional[str] = None
    subscribers_checked: int = 0
    decisions: dict[str, int] = Field(
        default_factory=lambda: {reason.value: 0 for reason in DecisionReason}
    )
    dispatched: int = 0
    queued: int = 0
    failed: int = 0
    state_writes: int = 0
    errors: list[str] = Field(default_factory=list)

    def count(self, reason: DecisionReason) -> None:
        self.decisions[reason.value] = self.decisions.get(reason.value, 0) + 1

    def abort(self, reason: str) -> "CycleReport":
        self.aborted = True
        self.abort_reason = reason
        return self
