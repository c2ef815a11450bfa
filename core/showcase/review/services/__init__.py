"""Contracts for the collaborators that the review engine depends on."""

from .persistence import Persistence
from .presentation import Presentation, Ack
from .roles import RoleResolver
