"""Reusable validators for events."""

from typing import Optional

from .base import Event
from ..submission import Submission, Surface
from ..vote import Vote
from ...exceptions import InvalidEvent, InvalidStateTransition, \
    MissingDraft, PermissionDenied


def must_be_in(event: Event, submission: Submission, *states: str) -> None:
    """
    Verify that the submission is in one of ``states``.

    Parameters
    ----------
    event : :class:`.Event`
    submission : :class:`.domain.submission.Submission`
    states : str
        Any of the state constants on :class:`.Submission`.

    Raises
    ------
    :class:`.InvalidStateTransition`
        Raised if the submission is in any other state.

    """
    if submission.state not in states:
        raise InvalidStateTransition(event, submission.state)


def must_not_be_completed(event: Event, submission: Submission) -> None:
    """Accepted and denied submissions are absorbing."""
    if submission.is_completed:
        raise InvalidStateTransition(event, submission.state)


def must_not_be_raw(event: Event, submission: Submission) -> None:
    """The submission must have made it through intake."""
    if submission.is_raw:
        raise InvalidStateTransition(event, submission.state)


def must_have_draft(event: Event, submission: Submission) -> None:
    """A rejection message must be drafted before anyone can reject."""
    if submission.current_draft is None:
        raise MissingDraft(event, "A draft rejection message is required.")


def must_be_staff(event: Event, role: Optional[Vote.Role]) -> None:
    """Only staff can pause, unpause or force-reject."""
    if role is not Vote.Role.STAFF:
        raise PermissionDenied(event, "Only staff can do this.")


def must_have_review_surfaces(event: Event,
                              review_thread: Optional[Surface],
                              origin_message: Optional[Surface]) -> None:
    """Voting happens on the origin post; discussion in the review thread."""
    if review_thread is None or origin_message is None:
        raise InvalidEvent(event, "A review thread and an origin post are"
                                  " required before voting can start.")
