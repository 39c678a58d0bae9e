"""EmailAddress value object for subscriber contact addresses."""

import re
from dataclasses import dataclass
from typing import Optional, Self

_EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)


@dataclass(frozen=True)
class EmailAddress:
    """Immutable value object representing a validated email address.

    Attributes:
        value: The validated email address string.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate email format after initialization."""
        if not _EMAIL_PATTERN.match(self.value):
            raise ValueError(f"Invalid email address: {self.value}")

    @classmethod
    def try_parse(cls, raw: Optional[str]) -> Optional[Self]:
        """Return an EmailAddress for a usable address, None otherwise.

        Surrounding whitespace is stripped; blank or malformed input yields None.
        """
        if not raw:
            return None
        candidate = raw.strip()
        if not _EMAIL_PATTERN.match(candidate):
            return None
        return cls(candidate)

    def __str__(self) -> str:
        return self.value
