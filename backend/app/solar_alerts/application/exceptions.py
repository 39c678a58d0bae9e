"""Application-layer exceptions for use case error handling.

Cycle-level failures (Kp feed, subscriber directory) abort an alert cycle
without side effects; dispatch failures are isolated to one subscriber;
configuration errors are fatal at startup. Settings errors are mapped to
HTTP responses by the presentation layer.
"""


class ApplicationError(Exception):
    """Base class for all application-layer exceptions."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class KpFetchError(ApplicationError):
    """Raised when the current Kp reading cannot be obtained or parsed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Failed to fetch Kp index: {reason}",
            code="KP_FETCH_FAILED"
        )
        self.reason = reason


class DirectoryError(ApplicationError):
    """Raised when the subscriber directory cannot be queried."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Subscriber directory unavailable: {reason}",
            code="DIRECTORY_UNAVAILABLE"
        )
        self.reason = reason


class DispatchError(ApplicationError):
    """Raised when a notification for one subscriber could not be delivered."""

    def __init__(self, subscriber_id: str, reason: str) -> None:
        super().__init__(
            message=f"Dispatch to subscriber {subscriber_id} failed: {reason}",
            code="DISPATCH_FAILED"
        )
        self.subscriber_id = subscriber_id
        self.reason = reason


class ConfigurationError(ApplicationError):
    """Raised at startup when required settings or credentials are missing."""

    def __init__(self, setting: str, detail: str) -> None:
        super().__init__(
            message=f"Invalid configuration for '{setting}': {detail}",
            code="CONFIGURATION_ERROR"
        )
        self.setting = setting


class SubscriberNotFoundError(ApplicationError):
    """Raised when a requested subscriber does not exist."""

    def __init__(self, subscriber_id: str) -> None:
        super().__init__(
            message=f"Subscriber '{subscriber_id}' not found",
            code="SUBSCRIBER_NOT_FOUND"
        )
        self.subscriber_id = subscriber_id


class SettingsNotWritableError(ApplicationError):
    """Raised when an anonymous viewer tries to change alert settings."""

    def __init__(self) -> None:
        super().__init__(
            message="User must be logged in to update alert settings",
            code="SETTINGS_NOT_WRITABLE"
        )
