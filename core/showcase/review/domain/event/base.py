"""The :class:`.Event` base that every review command extends."""

import copy
from datetime import datetime
from typing import Optional

from dataclasses import field

from arxiv.base import logging
from arxiv.base.globals import get_application_config

from ..agent import Agent, agent_factory
from ..submission import Submission
from ..util import get_tzaware_utc_now
from .util import dataclass, event_id_for

logger = logging.getLogger(__name__)


@dataclass()
class Event:
    """
    A single change to a :class:`.domain.submission.Submission`.

    Nothing in the review engine edits a submission in place. It builds an
    event and calls :meth:`apply`, which checks the event against the current
    submission and returns the changed copy. Subclasses add their own fields
    and implement two methods:

    - ``validate(submission)`` raises :class:`.InvalidEvent` (or a subclass)
      when the submission is in no condition to accept the change.
    - ``project(submission)`` makes the change and returns the submission.
      Projection is pure; talking to the datastore or the chat platform is
      left to :class:`.core.ActionExecutor`.

    ``NAME`` is the verb used in messages ("cannot *vote on* a paused
    submission"); ``NAMED`` is its past tense, used in the action log.
    """

    NAME = 'base event'
    NAMED = 'base event'

    creator: Agent
    """Who asked for the change; not necessarily the submission's author."""

    created: Optional[datetime] = field(default=None)
    """Set when the event is applied."""

    submission_id: Optional[str] = field(default=None)
    """Empty until applied, and for :class:`.CreateSubmission` until saved."""

    before: Optional[Submission] = None
    """Snapshot of the submission as the event found it."""

    after: Optional[Submission] = None
    """The submission as the event left it."""

    event_type: str = field(default_factory=str)
    event_version: str = field(default_factory=str)

    def __post_init__(self) -> None:
        """Restore nested objects when built from decoded data."""
        self.event_type = type(self).__name__
        self.event_version = self.get_event_version()
        if isinstance(self.creator, dict):
            self.creator = agent_factory(**self.creator)
        for attr in ('before', 'after'):
            value = getattr(self, attr)
            if isinstance(value, dict):
                setattr(self, attr, Submission(**value))

    @staticmethod
    def get_event_version() -> str:
        """Version of the review engine that produced the event."""
        return str(get_application_config().get('CORE_VERSION', '0.0.0'))

    @property
    def event_id(self) -> str:
        """Identifier derived from the creator, the type and the time."""
        if self.created is None:
            raise RuntimeError('Event not yet applied')
        return event_id_for(self.created, self.event_type, self.creator)

    def apply(self, submission: Optional[Submission] = None) -> Submission:
        """
        Validate the event against ``submission`` and project it onto a copy.

        ``submission`` itself is left untouched, so a caller that fails later
        in an operation still has the state from before the event.
        """
        if self.created is None:
            self.created = get_tzaware_utc_now()
        if submission is not None and self.submission_id is None:
            self.submission_id = submission.submission_id
        self.before = copy.deepcopy(submission)
        self.validate(submission)    # type: ignore
        logger.debug('Apply %s (%s) to submission %s', self.event_type,
                     self.event_id, self.submission_id)
        # Only creation events are applied without a submission.
        working = copy.deepcopy(submission) if submission is not None \
            else None
        self.after = self.project(working)    # type: ignore
        assert self.after is not None
        self.after.updated = self.created
        return self.after

    def validate(self, submission: Submission) -> None:
        """Raise :class:`.InvalidEvent` if the event may not be applied."""
        raise NotImplementedError('Must be implemented by subclass')

    def project(self, submission: Submission) -> Submission:
        """Make the change and return the submission."""
        raise NotImplementedError('Must be implemented by subclass')
