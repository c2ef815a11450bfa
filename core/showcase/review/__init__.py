"""
Submission lifecycle and weighted-voting engine for the project showcase.

Community members submit projects; staff and veterans vote on them in a
private review thread; enough votes of one kind accept or reject the
submission. This package implements that process, leaving the chat platform
and the datastore to adapters (see :mod:`.services`).

Overview
========

Submissions and votes are defined in :mod:`.domain`. Every change to a
submission is expressed as a command/event (:mod:`.domain.event`), which
validates the change against the submission's state and projects it onto a
copy. The legal states and transitions are listed on
:class:`.domain.submission.Submission`.

:class:`.core.ActionExecutor` runs operations end to end: it holds the
:class:`.gate.ConcurrencyGate` for the submission, loads it through the
:class:`.store.SubmissionStore`, applies the events, and calls the datastore
and chat platform, undoing the vote if a required step fails.

.. code-block:: python

   from showcase.review import ActionExecutor, SubmissionStore, Member

   executor = ActionExecutor(SubmissionStore(my_persistence),
                             my_presentation, my_role_resolver)
   result = executor.handle_vote('42', Member('1234'), 'upvote')
   if result.failed:
       reply(result.reason)

"""

from flask import Flask

from . import config
from .core import ActionExecutor
from .domain import Agent, Member, System, Submission, Surface, Vote, \
    VoteThresholds, RejectionTemplate
from .gate import ConcurrencyGate
from .result import VoteResult
from .store import SubmissionStore
from .templates import RejectionTemplateRouter, TEMPLATES


def init_app(app: Flask) -> None:
    """Set default configuration parameters for an application instance."""
    for key in ('LOGLEVEL', 'CORE_VERSION', 'STAFF_ROLE_ID',
                'VETERANS_ROLE_ID', 'STAFF_VOTING_THRESHOLD',
                'VETERANS_VOTING_THRESHOLD', 'STAFF_REJECTION_THRESHOLD',
                'VETERANS_REJECTION_THRESHOLD', 'STORE_LOAD_RETRIES',
                'STORE_LOAD_RETRY_DELAY'):
        app.config.setdefault(key, getattr(config, key))
