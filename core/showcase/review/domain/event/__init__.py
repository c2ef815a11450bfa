"""
Commands/events that change the state of a submission.

Every change to a :class:`.domain.submission.Submission` is expressed as an
instance of one of the classes in this module. Callers never change a
submission directly; instead they create an event and call
:meth:`.Event.apply`, which validates the event against the current state of
the submission and then projects it onto a copy. If validation fails, an
:class:`.InvalidEvent` (or one of its subclasses) is raised and the original
submission is untouched.

Writing new events/commands
===========================

Events/commands are implemented as classes that inherit from :class:`.Event`.
It should:

- Be a dataclass, decorated with :func:`.util.dataclass`.
- Define (using :func:`dataclasses.field`) associated data.
- Implement ``validate(self, submission: Submission) -> None``, raising
  :class:`.InvalidEvent` if the event cannot be applied. Reusable checks
  live in :mod:`.validators`.
- Implement ``project(self, submission: Submission) -> Submission`` that
  mutates and returns the passed submission. The projection *must not*
  generate side-effects; chat and persistence calls are made by
  :class:`.core.ActionExecutor`.

State transitions
=================

The legal transitions are listed in :attr:`.Submission.TRANSITIONS`. Each
event that changes state checks the current state in ``validate`` (raising
:class:`.InvalidStateTransition`), and calls :meth:`.Submission.transition`
in ``project``.
"""

from typing import Optional, List

from dataclasses import field

from ..agent import System
from ..draft import Draft
from ..submission import Submission, SubmissionLinks, Surface
from ..template import RejectionTemplate
from ..vote import Vote, VoteLedger
from ...exceptions import InvalidEvent, InvalidStateTransition, \
    ConflictingVote
from .base import Event
from .util import dataclass
from . import validators


# Intake.


@dataclass()
class CreateSubmission(Event):
    """Creation of a new :class:`.domain.submission.Submission`."""

    NAME = "create"
    NAMED = "submission created"

    name: str = field(default_factory=str)
    author_id: str = field(default_factory=str)
    description: str = field(default_factory=str)
    tech: str = field(default_factory=str)
    source: str = field(default_factory=str)
    other: str = field(default_factory=str)

    def validate(self, *args, **kwargs) -> None:
        """A submission needs a name and an author."""
        if not self.name or not self.name.strip():
            raise InvalidEvent(self, "Submission name must not be empty.")
        if not self.author_id:
            raise InvalidEvent(self, "Submission must have an author.")

    def project(self, submission: None = None) -> Submission:
        """Create a new ``RAW`` submission."""
        return Submission(name=self.name.strip(),
                          author_id=self.author_id,
                          description=self.description,
                          tech=self.tech,
                          links=SubmissionLinks(source=self.source,
                                                other=self.other),
                          created=self.created)


@dataclass()
class CompleteIntake(Event):
    """
    Record the result of validating a ``RAW`` submission.

    A submission that passed validation goes straight to ``PROCESSING``, and
    must arrive with its review thread and origin post. Submissions with
    non-critical problems go to ``WARNING``, and submissions with critical
    problems to ``ERROR``; both keep a list of the problems found.
    """

    NAME = "complete intake of"
    NAMED = "intake completed"

    state: str = field(default=Submission.PROCESSING)
    review_thread: Optional[Surface] = None
    origin_message: Optional[Surface] = None
    warnings: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super(CompleteIntake, self).__post_init__()
        if isinstance(self.review_thread, dict):
            self.review_thread = Surface(**self.review_thread)
        if isinstance(self.origin_message, dict):
            self.origin_message = Surface(**self.origin_message)

    def validate(self, submission: Submission) -> None:
        validators.must_be_in(self, submission, Submission.RAW)
        if submission.submission_id is None:
            raise InvalidEvent(self, "Submission has not been assigned an ID")
        if self.state not in Submission.TRANSITIONS[Submission.RAW]:
            raise InvalidEvent(self, f"Intake cannot result in {self.state}")
        if self.state == Submission.PROCESSING:
            validators.must_have_review_surfaces(self, self.review_thread,
                                                 self.origin_message)

    def project(self, submission: Submission) -> Submission:
        submission.review_thread = self.review_thread
        submission.origin_message = self.origin_message
        submission.warnings = list(self.warnings)
        submission.transition(self.state)
        return submission


@dataclass()
class Revalidate(Event):
    """
    Move a submission out of ``ERROR`` or ``WARNING``, into ``PROCESSING``.

    Submissions that failed validation at intake may not have a review
    thread and origin post yet; if so, they must be provided here.
    """

    NAME = "revalidate"
    NAMED = "submission revalidated"

    review_thread: Optional[Surface] = None
    origin_message: Optional[Surface] = None

    def validate(self, submission: Submission) -> None:
        validators.must_be_in(self, submission,
                              Submission.ERROR, Submission.WARNING)
        validators.must_have_review_surfaces(
            self,
            self.review_thread or submission.review_thread,
            self.origin_message or submission.origin_message
        )

    def project(self, submission: Submission) -> Submission:
        if self.review_thread is not None:
            submission.review_thread = self.review_thread
        if self.origin_message is not None:
            submission.origin_message = self.origin_message
        submission.warnings = []
        submission.transition(Submission.PROCESSING)
        return submission


# Votes.


@dataclass()
class AddVote(Event):
    """
    Add an UP or DOWN vote to a submission.

    If the voter already holds a vote of the same type, the vote is removed
    instead; :attr:`outcome` tells which happened after the event is applied.
    """

    NAME = "vote on"
    NAMED = "vote added"

    vote: Optional[Vote] = None
    outcome: Optional[str] = None
    """:attr:`.VoteLedger.ADDED` or :attr:`.VoteLedger.REMOVED`."""

    def __post_init__(self) -> None:
        super(AddVote, self).__post_init__()
        if isinstance(self.vote, dict):
            self.vote = Vote(**self.vote)

    def validate(self, submission: Submission) -> None:
        """
        Votes are only accepted on ``PROCESSING`` submissions.

        A voter may not hold an UP and a DOWN vote at once, and a new DOWN
        vote requires a drafted rejection message.
        """
        if self.vote is None or not self.vote.is_directional:
            raise InvalidEvent(self, "Only UP and DOWN votes can be added.")
        validators.must_be_in(self, submission, Submission.PROCESSING)
        if submission.votes.conflicts_with(self.vote) is not None:
            raise ConflictingVote(self, "You cannot add an upvote and a"
                                        " downvote.")
        held = submission.votes.find(self.vote.voter_id, self.vote.vote_type)
        if self.vote.vote_type is Vote.Type.DOWN and held is None:
            validators.must_have_draft(self, submission)

    def project(self, submission: Submission) -> Submission:
        assert self.vote is not None
        self.vote.submission_id = submission.submission_id
        self.outcome = submission.votes.add(self.vote)
        return submission


@dataclass()
class RemoveVote(Event):
    """Remove a vote, if the voter holds it; otherwise this is a no-op."""

    NAME = "remove a vote from"
    NAMED = "vote removed"

    voter_id: str = field(default_factory=str)
    vote_type: Vote.Type = field(default=Vote.Type.UP)
    removed: Optional[Vote] = None

    def __post_init__(self) -> None:
        super(RemoveVote, self).__post_init__()
        self.voter_id = str(self.voter_id)
        self.vote_type = Vote.Type(self.vote_type)

    def validate(self, submission: Submission) -> None:
        if self.vote_type is Vote.Type.PAUSE:
            raise InvalidEvent(self, "Pause votes are removed by unpausing.")
        # Counts are frozen while paused.
        validators.must_be_in(self, submission, Submission.PROCESSING)

    def project(self, submission: Submission) -> Submission:
        self.removed = submission.votes.remove(self.voter_id, self.vote_type)
        return submission


@dataclass()
class Pause(Event):
    """Staff suspend voting on a submission."""

    NAME = "pause"
    NAMED = "submission paused"

    vote: Optional[Vote] = None

    def __post_init__(self) -> None:
        super(Pause, self).__post_init__()
        if isinstance(self.vote, dict):
            self.vote = Vote(**self.vote)

    def validate(self, submission: Submission) -> None:
        if self.vote is None or self.vote.vote_type is not Vote.Type.PAUSE:
            raise InvalidEvent(self, "A pause vote is required.")
        validators.must_be_staff(self, self.vote.role)
        validators.must_be_in(self, submission, Submission.PROCESSING)

    def project(self, submission: Submission) -> Submission:
        assert self.vote is not None
        self.vote.submission_id = submission.submission_id
        if submission.votes.find(self.vote.voter_id, Vote.Type.PAUSE) is None:
            submission.votes.add(self.vote)
        submission.transition(Submission.PAUSED)
        return submission


@dataclass()
class Unpause(Event):
    """Staff resume voting on a paused submission."""

    NAME = "unpause"
    NAMED = "submission unpaused"

    vote: Optional[Vote] = None
    removed: List[Vote] = field(default_factory=list)
    """Pause votes cleared by this event."""

    def __post_init__(self) -> None:
        super(Unpause, self).__post_init__()
        if isinstance(self.vote, dict):
            self.vote = Vote(**self.vote)

    def validate(self, submission: Submission) -> None:
        if self.vote is None or self.vote.vote_type is not Vote.Type.PAUSE:
            raise InvalidEvent(self, "A pause vote is required.")
        validators.must_be_staff(self, self.vote.role)
        validators.must_be_in(self, submission, Submission.PAUSED)

    def project(self, submission: Submission) -> Submission:
        self.removed = submission.votes.pauses
        submission.votes = VoteLedger(
            votes=[v for v in submission.votes if v.is_directional]
        )
        submission.transition(Submission.PROCESSING)
        return submission


# Terminal decisions.


@dataclass()
class Accept(Event):
    """The vote threshold for approval was met."""

    NAME = "accept"
    NAMED = "submission accepted"

    def validate(self, submission: Submission) -> None:
        validators.must_be_in(self, submission, Submission.PROCESSING)

    def project(self, submission: Submission) -> Submission:
        submission.transition(Submission.ACCEPTED)
        return submission


@dataclass()
class Reject(Event):
    """The vote threshold for rejection was met."""

    NAME = "reject"
    NAMED = "submission rejected"

    def validate(self, submission: Submission) -> None:
        validators.must_be_in(self, submission, Submission.PROCESSING)
        validators.must_have_draft(self, submission)

    def project(self, submission: Submission) -> Submission:
        submission.transition(Submission.DENIED)
        return submission


@dataclass()
class ForceReject(Event):
    """
    Reject a submission with a preset reason, bypassing the vote.

    Only staff may do this, except for the system itself (e.g. when an author
    leaves the community). Submissions in ``ERROR`` can only be rejected with
    templates that allow it.
    """

    NAME = "force-reject"
    NAMED = "submission force-rejected"

    template: Optional[RejectionTemplate] = None
    role: Optional[Vote.Role] = None
    """Role of the creator at the time of the rejection."""

    def validate(self, submission: Submission) -> None:
        if self.template is None:
            raise InvalidEvent(self, "A rejection template is required.")
        if not isinstance(self.creator, System):
            validators.must_be_staff(self, self.role)
        states = [Submission.PROCESSING, Submission.PAUSED,
                  Submission.WARNING]
        if self.template.allow_from_error:
            states.append(Submission.ERROR)
        validators.must_be_in(self, submission, *states)

    def project(self, submission: Submission) -> Submission:
        submission.transition(Submission.DENIED)
        return submission


@dataclass()
class Cleanup(Event):
    """
    Close out a submission by hand, e.g. after a public force-rejection.

    A submission that is not completed yet is moved to :attr:`state`; one
    that is already accepted or denied keeps its state, so that staff can
    clean up the surfaces that a rejection left behind.
    """

    NAME = "clean up"
    NAMED = "submission cleaned up"

    state: str = field(default=Submission.DENIED)
    role: Optional[Vote.Role] = None
    """Role of the creator at the time of the cleanup."""

    def validate(self, submission: Submission) -> None:
        if self.state not in (Submission.ACCEPTED, Submission.DENIED):
            raise InvalidEvent(self, "Submissions can only be cleaned up as"
                                     " accepted or denied.")
        if not isinstance(self.creator, System):
            validators.must_be_staff(self, self.role)
        validators.must_not_be_raw(self, submission)
        if not submission.is_completed \
                and not submission.can_transition_to(self.state):
            raise InvalidStateTransition(self, submission.state)

    def project(self, submission: Submission) -> Submission:
        if not submission.is_completed:
            submission.transition(self.state)
        return submission


# Content.


@dataclass()
class EditSubmission(Event):
    """
    Change one of the details that the author submitted.

    The author can only be changed while the submission is in ``ERROR``,
    which is where a submission with an unknown author ends up.
    """

    NAME = "edit"
    NAMED = "submission edited"

    FIELDS = ('name', 'author_id', 'description', 'tech', 'source', 'other')
    LINKS = ('source', 'other')

    field_name: str = field(default_factory=str)
    value: str = field(default_factory=str)
    previous: Optional[str] = None

    def validate(self, submission: Submission) -> None:
        if self.field_name not in self.FIELDS:
            raise InvalidEvent(self, f"Cannot edit {self.field_name!r}.")
        validators.must_not_be_raw(self, submission)
        validators.must_not_be_completed(self, submission)
        if self.field_name == 'author_id':
            validators.must_be_in(self, submission, Submission.ERROR)
        if self.field_name in ('name', 'author_id') \
                and not self.value.strip():
            raise InvalidEvent(self, f"The {self.field_name} must not be"
                                     f" empty.")

    def project(self, submission: Submission) -> Submission:
        target = submission.links if self.field_name in self.LINKS \
            else submission
        value = self.value
        if self.field_name in ('name', 'author_id'):
            value = value.strip()
        self.previous = getattr(target, self.field_name)
        setattr(target, self.field_name, value)
        return submission


# Supporting data.


@dataclass()
class AddDraft(Event):
    """A reviewer drafts the rejection message for a submission."""

    NAME = "add a draft to"
    NAMED = "draft added"

    content: str = field(default_factory=str)
    draft: Optional[Draft] = None

    def validate(self, submission: Submission) -> None:
        validators.must_not_be_raw(self, submission)
        validators.must_not_be_completed(self, submission)
        if not self.content or not self.content.strip():
            raise InvalidEvent(self, "Draft must not be empty.")

    def project(self, submission: Submission) -> Submission:
        assert self.created is not None
        self.draft = Draft(author_id=self.creator.native_id,
                           content=self.content, created=self.created)
        submission.drafts.append(self.draft)
        return submission


@dataclass()
class SetFeedbackSurface(Event):
    """Record the thread in which the author receives feedback."""

    NAME = "set the feedback thread of"
    NAMED = "feedback thread set"

    surface: Optional[Surface] = None

    def __post_init__(self) -> None:
        super(SetFeedbackSurface, self).__post_init__()
        if isinstance(self.surface, dict):
            self.surface = Surface(**self.surface)

    def validate(self, submission: Submission) -> None:
        validators.must_not_be_raw(self, submission)
        validators.must_not_be_completed(self, submission)
        if self.surface is None:
            raise InvalidEvent(self, "No feedback thread given.")

    def project(self, submission: Submission) -> Submission:
        submission.feedback_thread = self.surface
        return submission


__all__ = ('Event', 'CreateSubmission', 'CompleteIntake', 'Revalidate',
           'AddVote', 'RemoveVote', 'Pause', 'Unpause', 'Accept', 'Reject',
           'ForceReject', 'Cleanup', 'EditSubmission', 'AddDraft',
           'SetFeedbackSurface')
