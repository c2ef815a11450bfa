"""Outcomes of review operations."""

from typing import Optional

from dataclasses import dataclass

from .domain.submission import Submission


@dataclass
class VoteResult:
    """
    The outcome of an :class:`.core.ActionExecutor` operation.

    Exactly one of :attr:`outcome` and :attr:`error` is set. Failed
    operations carry the typed exception that caused them, so that callers
    can tell a client mistake (e.g. :class:`.ConflictingVote`) apart from a
    broken collaborator (:class:`.ExternalOperationFailed`); :attr:`reason`
    is suitable for showing to the person who triggered the operation.
    """

    VOTE_ADD = 'vote-add'
    VOTE_REMOVE = 'vote-remove'
    NO_OP = 'no-op'
    ACCEPT = 'accept'
    REJECT = 'reject'
    PAUSE = 'pause'
    UNPAUSE = 'unpause'
    SUCCESS = 'success'
    CLEANUP_NOT_RUN = 'cleanup-not-run'
    """Force-rejected, but the review surfaces were left for staff."""
    CLEANUP = 'cleanup'
    REVALIDATE = 'revalidate'
    DRAFT_ADD = 'draft-add'
    EDIT = 'edit'
    INTAKE = 'intake'

    outcome: Optional[str] = None
    error: Optional[Exception] = None
    submission: Optional[Submission] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def reason(self) -> str:
        """Display string for a failed operation."""
        if self.error is None:
            return ''
        return str(self.error)

    @classmethod
    def success(cls, outcome: str,
                submission: Optional[Submission] = None) -> 'VoteResult':
        return cls(outcome=outcome, submission=submission)

    @classmethod
    def failure(cls, error: Exception,
                submission: Optional[Submission] = None) -> 'VoteResult':
        return cls(error=error, submission=submission)
