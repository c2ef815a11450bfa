"""
Cache-plus-persistence façade for submission aggregates.

The unit of caching and of locking is one submission. The cache only ever
holds states that were read from, or successfully written to, the
datastore, and it holds them as serialized snapshots so that every caller
gets its own copy; nobody can observe another operation's half-applied
changes.
"""

import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

from retry.api import retry_call

from arxiv.base import logging
from arxiv.base.globals import get_application_config

from .domain.draft import Draft
from .domain.submission import Submission
from .domain.vote import Vote
from .exceptions import NoSuchSubmission, ExternalOperationFailed
from .gate import ConcurrencyGate
from .services.persistence import Persistence, Unavailable, \
    PersistenceError, NoSuchSubmission as NoSuchRecord
from .serializer import dumps, loads

logger = logging.getLogger(__name__)

T = TypeVar('T')


class SubmissionStore:
    """
    Loads and writes submissions through a :class:`.Persistence` adapter.

    Reads are retried while the datastore is :class:`.Unavailable`; writes
    are never retried. Every write requires the caller to hold the
    :class:`.ConcurrencyGate` for the submission.
    """

    def __init__(self, persistence: Persistence,
                 gate: Optional[ConcurrencyGate] = None,
                 retries: Optional[int] = None,
                 delay: Optional[float] = None) -> None:
        config = get_application_config()
        if retries is None:
            retries = int(config.get('STORE_LOAD_RETRIES', 3))
        if delay is None:
            delay = float(config.get('STORE_LOAD_RETRY_DELAY', 1))
        self.persistence = persistence
        self.gate = gate if gate is not None else ConcurrencyGate()
        self.retries = retries
        self.delay = delay
        self._cache: Dict[str, str] = {}
        self._cache_lock = threading.Lock()

    def _read(self, func: Callable[..., T], *args: Any) -> T:
        return retry_call(func, fargs=args, exceptions=Unavailable,
                          tries=self.retries, delay=self.delay)

    def load(self, submission_id: str) -> Submission:
        """
        Get the complete submission aggregate.

        Raises
        ------
        :class:`.NoSuchSubmission`
            If the datastore has no such submission.
        :class:`.ExternalOperationFailed`
            If the datastore could not be read, after retrying.

        """
        key = str(submission_id)
        with self._cache_lock:
            snapshot = self._cache.get(key)
        if snapshot is not None:
            logger.debug('Loaded submission %s from cache', key)
            return loads(snapshot)

        try:
            submission = self._read(self.persistence.load_submission, key)
        except NoSuchRecord as e:
            raise NoSuchSubmission(f'No submission with id {key}') from e
        except PersistenceError as e:
            raise ExternalOperationFailed('load submission', str(e)) from e
        # Reads outside the gate may be stale by the time they return.
        if self.gate.held_by_me(key):
            self.update_cache(submission)
        logger.debug('Loaded submission %s: %s', key, dumps(submission))
        return submission

    def find_by_author(self, author_id: str) -> List[Submission]:
        """Get all of the submissions by an author, bypassing the cache."""
        try:
            return self._read(self.persistence.load_submissions_by_author,
                              str(author_id))
        except PersistenceError as e:
            raise ExternalOperationFailed('load submissions', str(e)) from e

    @contextmanager
    def checkout(self, submission_id: str) -> Iterator[Submission]:
        """Hold the gate for a submission, and load it."""
        with self.gate.hold(submission_id):
            yield self.load(submission_id)

    def create(self, submission: Submission) -> Submission:
        """Store a new submission, and assign the ID that it was given."""
        submission_id = self.persistence.create_submission(submission)
        submission.assign_id(submission_id)
        self.update_cache(submission)
        logger.debug('Created submission %s', submission.submission_id)
        return submission

    def save(self, submission: Submission) -> None:
        """Write a submission's details and state."""
        self.gate.assert_held(submission.submission_id)
        self.persistence.save_submission(submission)
        self.update_cache(submission)
        logger.debug('Saved submission %s: %s', submission.submission_id,
                     dumps(submission))

    def append_vote(self, submission_id: str, vote: Vote) -> None:
        self.gate.assert_held(submission_id)
        self.evict(submission_id)
        self.persistence.append_vote(str(submission_id), vote)

    def remove_vote(self, submission_id: str, vote: Vote) -> None:
        self.gate.assert_held(submission_id)
        self.evict(submission_id)
        self.persistence.remove_vote(str(submission_id), vote)

    def append_draft(self, submission_id: str, draft: Draft) -> None:
        self.gate.assert_held(submission_id)
        self.evict(submission_id)
        self.persistence.append_draft(str(submission_id), draft)

    def mark_deleted(self, submission_id: str) -> None:
        """
        Flag a submission as deleted.

        This is an administrative path that bypasses the state machine, so it
        works on completed submissions too.
        """
        with self.gate.hold(submission_id):
            self.persistence.mark_deleted(str(submission_id))
            self.evict(submission_id)
        logger.info('Marked submission %s as deleted', submission_id)

    def update_cache(self, submission: Submission) -> None:
        if submission.submission_id is None:
            return
        snapshot = dumps(submission)
        with self._cache_lock:
            self._cache[submission.submission_id] = snapshot

    def evict(self, submission_id: str) -> None:
        with self._cache_lock:
            self._cache.pop(str(submission_id), None)

    def is_cached(self, submission_id: str) -> bool:
        with self._cache_lock:
            return str(submission_id) in self._cache
