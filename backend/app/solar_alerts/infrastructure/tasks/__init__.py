# Scheduled jobs - Celery app, alert tasks and engine wiring
