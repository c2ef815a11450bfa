"""
Read/write contract for the submission datastore.

The review engine does not care how submissions are stored; it only needs
the operations on :class:`Persistence`. Each operation must be atomic with
respect to a single submission. Failures must be raised as (subclasses of)
:class:`PersistenceError`, never swallowed.
"""

from typing import List

from ..domain.draft import Draft
from ..domain.submission import Submission
from ..domain.vote import Vote


class PersistenceError(RuntimeError):
    """Base for datastore exceptions."""


class NoSuchSubmission(PersistenceError):
    """A request was made for a submission that does not exist."""


class Unavailable(PersistenceError):
    """The datastore is not available; the request may be retried."""


class Persistence:
    """Base class for datastore adapters."""

    def create_submission(self, submission: Submission) -> str:
        """Store a new submission, and return the ID assigned to it."""
        raise NotImplementedError('Must be implemented by subclass')

    def load_submission(self, submission_id: str) -> Submission:
        """
        Load the complete submission aggregate.

        This includes links, votes and drafts.

        Raises
        ------
        :class:`NoSuchSubmission`
            If there is no submission with ``submission_id``.
        :class:`Unavailable`
            If the datastore cannot be reached.

        """
        raise NotImplementedError('Must be implemented by subclass')

    def load_submissions_by_author(self, author_id: str) -> List[Submission]:
        raise NotImplementedError('Must be implemented by subclass')

    def save_submission(self, submission: Submission) -> None:
        """Write the submission's details and state."""
        raise NotImplementedError('Must be implemented by subclass')

    def append_vote(self, submission_id: str, vote: Vote) -> None:
        raise NotImplementedError('Must be implemented by subclass')

    def remove_vote(self, submission_id: str, vote: Vote) -> None:
        raise NotImplementedError('Must be implemented by subclass')

    def append_draft(self, submission_id: str, draft: Draft) -> None:
        raise NotImplementedError('Must be implemented by subclass')

    def mark_deleted(self, submission_id: str) -> None:
        """Flag a submission as deleted, whatever its state."""
        raise NotImplementedError('Must be implemented by subclass')
