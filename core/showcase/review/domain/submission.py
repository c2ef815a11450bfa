"""Data structures for submissions."""

from typing import Optional, List
from datetime import datetime

from dataclasses import dataclass, field
from dateutil.parser import parse as parse_date

from ..exceptions import Unreachable
from .draft import Draft
from .vote import VoteLedger
from .util import list_coerce


@dataclass
class SubmissionLinks:
    """Where the submitted project lives."""

    source: str = field(default_factory=str)
    other: str = field(default_factory=str)


@dataclass
class Surface:
    """
    Reference to something on the chat platform.

    This is a handle only (review thread, feedback thread, or the original
    submission post); the presentation service knows how to resolve it.
    """

    surface_id: str
    name: str = field(default_factory=str)

    def __post_init__(self) -> None:
        self.surface_id = str(self.surface_id)


@dataclass
class Submission:
    """
    Represents a community project submission.

    The fields that are guaranteed to be present depend on :attr:`state`:

    - ``RAW`` submissions come straight from intake; they have no ID yet, and
      no review thread, origin post, votes or drafts.
    - ``ERROR`` and ``WARNING`` submissions have an ID but failed (or only
      partially passed) validation. They cannot be voted on until they are
      revalidated.
    - ``PROCESSING`` and ``PAUSED`` submissions are validated, and always have
      a review thread and an origin post.
    - ``ACCEPTED`` and ``DENIED`` are terminal.
    """

    RAW = 'RAW'
    ERROR = 'ERROR'
    WARNING = 'WARNING'
    PROCESSING = 'PROCESSING'
    PAUSED = 'PAUSED'
    ACCEPTED = 'ACCEPTED'
    DENIED = 'DENIED'

    STATES = (RAW, ERROR, WARNING, PROCESSING, PAUSED, ACCEPTED, DENIED)

    TRANSITIONS = {
        RAW: frozenset([ERROR, WARNING, PROCESSING]),
        ERROR: frozenset([PROCESSING, DENIED]),
        WARNING: frozenset([PROCESSING, DENIED]),
        PROCESSING: frozenset([PAUSED, ACCEPTED, DENIED]),
        PAUSED: frozenset([PROCESSING, DENIED]),
        ACCEPTED: frozenset(),
        DENIED: frozenset(),
    }
    """Legal state transitions; terminal states are absorbing."""

    name: str
    author_id: str
    description: str = field(default_factory=str)
    tech: str = field(default_factory=str)
    links: SubmissionLinks = field(default_factory=SubmissionLinks)
    state: str = field(default=RAW)
    submission_id: Optional[str] = field(default=None)
    created: Optional[datetime] = field(default=None)
    updated: Optional[datetime] = field(default=None)

    review_thread: Optional[Surface] = field(default=None)
    """Private thread in which reviewers discuss the submission."""

    feedback_thread: Optional[Surface] = field(default=None)
    """Thread in which feedback is given to the author."""

    origin_message: Optional[Surface] = field(default=None)
    """The post reviewers vote on."""

    votes: VoteLedger = field(default_factory=VoteLedger)
    drafts: List[Draft] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)
    """Validation problems found at intake; cleared on revalidation."""

    deleted: bool = field(default=False)

    @property
    def is_raw(self) -> bool:
        return self.state == self.RAW

    @property
    def is_pending(self) -> bool:
        """Failed or partially passed validation."""
        return self.state in (self.ERROR, self.WARNING)

    @property
    def is_validated(self) -> bool:
        """Ready for (or suspended from) voting."""
        return self.state in (self.PROCESSING, self.PAUSED)

    @property
    def is_paused(self) -> bool:
        return self.state == self.PAUSED

    @property
    def is_completed(self) -> bool:
        """Accepted or denied; no further changes are permitted."""
        return self.state in (self.ACCEPTED, self.DENIED)

    @property
    def current_draft(self) -> Optional[Draft]:
        """The most recently created draft, if there is one."""
        if not self.drafts:
            return None
        return max(self.drafts, key=lambda draft: draft.created)

    def can_transition_to(self, state: str) -> bool:
        return state in self.TRANSITIONS[self.state]

    def transition(self, state: str) -> None:
        """
        Move to a new state.

        Callers are expected to have validated the transition already, so an
        illegal transition here means something is broken.
        """
        if not self.can_transition_to(state):
            raise Unreachable(f'Illegal transition {self.state} -> {state}'
                              f' for submission {self.submission_id}')
        self.state = state

    def assign_id(self, submission_id: str) -> None:
        """Set the submission ID; this can only happen once."""
        if self.submission_id is not None:
            raise ValueError(f'Submission already has ID'
                             f' {self.submission_id}')
        self.submission_id = str(submission_id)

    def __post_init__(self) -> None:
        """Coerce raw data, and check that the state's guarantees hold."""
        self.author_id = str(self.author_id)
        if self.submission_id is not None:
            self.submission_id = str(self.submission_id)
        if type(self.links) is dict:
            self.links = SubmissionLinks(**self.links)
        if type(self.created) is str:
            self.created = parse_date(self.created)
        if type(self.updated) is str:
            self.updated = parse_date(self.updated)
        for attr in ('review_thread', 'feedback_thread', 'origin_message'):
            value = getattr(self, attr)
            if type(value) is dict:
                setattr(self, attr, Surface(**value))
        if type(self.votes) is dict:
            self.votes = VoteLedger(**self.votes)
        elif type(self.votes) is list:
            self.votes = VoteLedger(votes=self.votes)
        self.drafts = list_coerce(Draft, self.drafts)
        self._check_state()

    def _check_state(self) -> None:
        if self.state not in self.STATES:
            raise ValueError(f'Unknown submission state: {self.state}')
        if self.is_raw:
            if self.review_thread or self.feedback_thread \
                    or self.origin_message:
                raise ValueError('A RAW submission cannot reference review'
                                 ' or feedback surfaces')
            if len(self.votes) or self.drafts:
                raise ValueError('A RAW submission cannot have votes or'
                                 ' drafts')
            return
        if self.submission_id is None:
            raise ValueError(f'A {self.state} submission must have an ID')
        if self.is_validated and (self.review_thread is None
                                  or self.origin_message is None):
            raise ValueError(f'A {self.state} submission must have a review'
                             f' thread and an origin post')
