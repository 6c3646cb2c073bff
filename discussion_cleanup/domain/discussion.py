"""Domain entities for GitHub discussions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from discussion_cleanup.domain.errors import InvalidFormatError


class CleanupMode(str, Enum):
    """Policy deciding whether a discussion's age is considered."""

    EXPIRATION = "expiration"
    IMMEDIATE = "immediate"

    @classmethod
    def parse(cls, value: str) -> "CleanupMode":
        try:
            return cls(value)
        except ValueError:
            raise InvalidFormatError(
                f"Invalid cleanup-mode: {value} (expected 'expiration' or 'immediate')"
            ) from None


@dataclass(frozen=True)
class DiscussionCategory:
    """Immutable discussion category entity."""

    id: str
    name: str


@dataclass(frozen=True)
class Discussion:
    """Immutable discussion entity."""

    id: str
    title: str
    created_at: datetime
    url: str
