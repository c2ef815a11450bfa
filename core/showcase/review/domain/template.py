"""Preset rejection reasons."""

from typing import Callable
from enum import Enum

from dataclasses import dataclass


@dataclass(frozen=True)
class RejectionTemplate:
    """A preset reason for rejecting a submission outright."""

    class Location(Enum):
        """Where the templated message is delivered."""

        PUBLIC = 'public'
        """The public log surface; cleanup is left to staff."""
        THREAD = 'thread'
        """The submission's private feedback thread."""
        NONE = 'none'
        """Nowhere; the rejection is silent."""

    key: str
    label: str
    generate: Callable[[str, str], str]
    """Produces the message from (mention, submission name)."""
    location: Location = Location.THREAD
    allow_from_error: bool = False
    """Whether the reason applies to submissions that failed validation."""

    def execute(self, user: str, name: str) -> str:
        """Render the message for a submission author and submission."""
        return self.generate(user, name)
