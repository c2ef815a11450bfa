"""Helpers for testing the review engine without a database or chat."""

import copy
import threading
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from unittest import mock

from pytz import UTC

from ..domain.agent import Member
from ..domain.draft import Draft
from ..domain.submission import Submission, Surface
from ..domain.vote import Vote, VoteLedger
from ..services.persistence import Persistence, NoSuchSubmission
from ..services.presentation import Presentation, Ack

STAFF_ROLE = 'role-staff'
VETERAN_ROLE = 'role-veteran'


class InMemoryPersistence(Persistence):
    """
    Keeps submissions in a dict.

    Like a real datastore, :meth:`save_submission` writes details and state
    only; votes and drafts are written by their own methods. Everything that
    goes in or out is copied.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_id = 1
        self.submissions: Dict[str, Submission] = {}

    def _get(self, submission_id: str) -> Submission:
        if str(submission_id) not in self.submissions:
            raise NoSuchSubmission(f'No submission {submission_id}')
        return self.submissions[str(submission_id)]

    def put(self, submission: Submission) -> str:
        """Store a submission as-is, e.g. to set up a test."""
        with self._lock:
            self.submissions[submission.submission_id] = \
                copy.deepcopy(submission)
        return submission.submission_id

    def next_id(self) -> str:
        with self._lock:
            submission_id = str(self._next_id)
            self._next_id += 1
        return submission_id

    def create_submission(self, submission: Submission) -> str:
        submission_id = self.next_id()
        stored = copy.deepcopy(submission)
        stored.submission_id = submission_id
        with self._lock:
            self.submissions[submission_id] = stored
        return submission_id

    def load_submission(self, submission_id: str) -> Submission:
        with self._lock:
            return copy.deepcopy(self._get(submission_id))

    def load_submissions_by_author(self, author_id: str) -> List[Submission]:
        with self._lock:
            return [copy.deepcopy(submission)
                    for submission in self.submissions.values()
                    if submission.author_id == str(author_id)]

    def save_submission(self, submission: Submission) -> None:
        with self._lock:
            stored = self._get(submission.submission_id)
            updated = copy.deepcopy(submission)
            updated.votes = stored.votes
            updated.drafts = stored.drafts
            self.submissions[submission.submission_id] = updated

    def append_vote(self, submission_id: str, vote: Vote) -> None:
        with self._lock:
            self._get(submission_id).votes.votes.append(copy.deepcopy(vote))

    def remove_vote(self, submission_id: str, vote: Vote) -> None:
        with self._lock:
            self._get(submission_id).votes.remove(vote.voter_id,
                                                  vote.vote_type)

    def append_draft(self, submission_id: str, draft: Draft) -> None:
        with self._lock:
            self._get(submission_id).drafts.append(copy.deepcopy(draft))

    def mark_deleted(self, submission_id: str) -> None:
        with self._lock:
            self._get(submission_id).deleted = True


def member_roles(mapping: Dict[str, List[str]]):
    """Role lookup for :class:`.RoleResolver`, backed by a dict."""
    return lambda member_id: mapping.get(member_id, [])


def make_submission(submission_id: str = '1',
                    state: str = Submission.PROCESSING,
                    author_id: str = 'author',
                    votes: Optional[List[Vote]] = None,
                    drafts: Optional[List[Draft]] = None,
                    name: str = 'The Best Project',
                    **extra) -> Submission:
    """A submission with the surfaces that its state requires."""
    if state in (Submission.PROCESSING, Submission.PAUSED):
        extra.setdefault('review_thread', Surface('review-' + submission_id))
        extra.setdefault('origin_message', Surface('post-' + submission_id))
    return Submission(
        submission_id=submission_id,
        name=name,
        author_id=author_id,
        description='It does things.',
        tech='Python',
        state=state,
        created=datetime.now(UTC) - timedelta(days=1),
        votes=VoteLedger(votes=votes or []),
        drafts=drafts or [],
        **extra
    )


def make_draft(content: str = 'Please add a license.',
               author_id: str = 'staff-1') -> Draft:
    return Draft(author_id=author_id, content=content)


def staff_vote(voter_id: str, vote_type: Vote.Type = Vote.Type.UP) -> Vote:
    return Vote(voter_id=voter_id, role=Vote.Role.STAFF, vote_type=vote_type)


def veteran_vote(voter_id: str, vote_type: Vote.Type = Vote.Type.UP) -> Vote:
    return Vote(voter_id=voter_id, role=Vote.Role.VETERAN,
                vote_type=vote_type)


def presentation_double(participants: Optional[List[Member]] = None) \
        -> mock.MagicMock:
    """A :class:`.Presentation` that succeeds at everything."""
    presentation = mock.MagicMock(spec=Presentation)
    presentation.create_feedback_surface.side_effect = \
        lambda name: Surface('feedback', name)
    presentation.deliver_message.side_effect = \
        lambda surface, content, mentions=(): Ack(surface=surface,
                                                   message_id='m1')
    presentation.list_participants.return_value = participants or []
    presentation.mention.side_effect = lambda member_id: f'<@{member_id}>'
    return presentation
