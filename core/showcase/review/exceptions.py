"""Exceptions raised during submission review."""

from typing import TypeVar, Optional

EventType = TypeVar('EventType')


class InvalidEvent(ValueError):
    """Raised when an invalid event is encountered."""

    def __init__(self, event: EventType, message: str = '') -> None:
        """Use the :class:`.Event` to build an error message."""
        self.event = event
        self.message = message
        name = getattr(event, 'event_type', type(event).__name__)
        r = f"Invalid {name}: {message}"
        super(InvalidEvent, self).__init__(r)


class InvalidStateTransition(InvalidEvent):
    """The operation is not permitted in the current submission state."""

    def __init__(self, event: EventType, state: str,
                 message: str = '') -> None:
        """Record the offending state and the requested operation."""
        self.state = state
        self.operation = getattr(event, 'NAME', type(event).__name__)
        if not message:
            message = f"cannot {self.operation} a submission in state {state}"
        super(InvalidStateTransition, self).__init__(event, message)


class ConflictingVote(InvalidEvent):
    """The voter already holds the opposing vote."""


class MissingDraft(InvalidEvent):
    """A rejection was attempted without a drafted rejection message."""


class PermissionDenied(InvalidEvent):
    """The acting agent does not hold the role required by the operation."""


class ExternalOperationFailed(RuntimeError):
    """A persistence or presentation call failed mid-sequence."""

    def __init__(self, step: str, message: str = '') -> None:
        self.step = step
        super(ExternalOperationFailed, self).__init__(
            f"Failed to {step}: {message}" if message else f"Failed to {step}"
        )


class TemplateNotFound(LookupError):
    """No rejection template is registered for the requested key."""

    def __init__(self, key: Optional[str]) -> None:
        self.key = key
        super(TemplateNotFound, self).__init__(
            f"No rejection template for key {key!r}"
        )

    def __str__(self) -> str:
        return self.args[0]


class NoSuchSubmission(Exception):
    """An operation was performed on/for a submission that does not exist."""


class Unreachable(AssertionError):
    """An internal invariant was violated; this is a defect."""
