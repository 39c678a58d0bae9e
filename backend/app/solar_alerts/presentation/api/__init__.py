# FastAPI routers - health, kp, alert settings
from app.solar_alerts.presentation.api import alert_settings, health, kp

__all__ = ["alert_settings", "health", "kp"]
