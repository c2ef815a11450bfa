"""Core data structures for submission review."""

from .agent import Agent, Member, System, agent_factory
from .draft import Draft
from .submission import Submission, SubmissionLinks, Surface
from .template import RejectionTemplate
from .threshold import VoteThresholds, approves, rejects, tips
from .vote import Vote, VoteLedger
from .event import Event
