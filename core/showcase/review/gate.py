"""
Serializes mutations of a single submission.

Every operation that changes a submission (votes, pauses, accept, reject,
force-reject) must hold the gate for that submission's ID from before its
state is validated until its changes (and any compensation) are persisted.
Operations on different submissions do not block each other.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator

from arxiv.base import logging

from .exceptions import Unreachable

logger = logging.getLogger(__name__)


class ConcurrencyGate:
    """A registry of per-submission locks."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}
        self._users: Dict[str, int] = {}
        """Number of threads holding or waiting for each lock."""
        self._owners: Dict[str, int] = {}

    @contextmanager
    def hold(self, submission_id: str) -> Iterator[None]:
        """
        Hold the gate for ``submission_id`` for the duration of the block.

        Raises
        ------
        :class:`.Unreachable`
            If the calling thread already holds the gate for this submission;
            the lock is not re-entrant, so this would deadlock.

        """
        key = str(submission_id)
        me = threading.get_ident()
        with self._guard:
            if self._owners.get(key) == me:
                raise Unreachable(f'Gate for submission {key} re-entered')
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] = self._users.get(key, 0) + 1

        lock.acquire()
        with self._guard:
            self._owners[key] = me
        logger.debug('Holding gate for submission %s', key)
        try:
            yield
        finally:
            with self._guard:
                del self._owners[key]
                self._users[key] -= 1
                if self._users[key] == 0:
                    del self._users[key]
                    del self._locks[key]
            lock.release()
            logger.debug('Released gate for submission %s', key)

    def is_held(self, submission_id: str) -> bool:
        """Check whether any thread holds the gate for ``submission_id``."""
        with self._guard:
            return str(submission_id) in self._owners

    def held_by_me(self, submission_id: str) -> bool:
        with self._guard:
            return self._owners.get(str(submission_id)) \
                == threading.get_ident()

    def assert_held(self, submission_id: str) -> None:
        """
        Make sure that the calling thread holds the gate.

        Raises
        ------
        :class:`.Unreachable`
            If it does not; mutating a submission outside of the gate is a
            defect.

        """
        if not self.held_by_me(submission_id):
            raise Unreachable(f'Gate for submission {submission_id} is not'
                              f' held by this thread')
