"""
Decide whether a vote tips a submission into acceptance or rejection.

These are pure functions: they are given the number of active votes of one
type held under one role, *including* the vote being added, and compare it
to the threshold configured for that role and direction. They are only ever
consulted when a vote is added.
"""

from typing import Mapping, Optional, Any

from dataclasses import dataclass

from arxiv.base.globals import get_application_config

from .vote import Vote


@dataclass(frozen=True)
class VoteThresholds:
    """Per-role vote counts needed to approve or reject a submission."""

    staff_approve: int
    veteran_approve: int
    staff_reject: int
    veteran_reject: int

    def __post_init__(self) -> None:
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ValueError(f'Threshold {name} must be a positive'
                                 f' integer, got {value!r}')

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]] = None) \
            -> 'VoteThresholds':
        """Load thresholds from the application config."""
        if config is None:
            config = get_application_config()
        staff = int(config.get('STAFF_VOTING_THRESHOLD', 2))
        veterans = int(config.get('VETERANS_VOTING_THRESHOLD', 3))
        return cls(
            staff_approve=staff,
            veteran_approve=veterans,
            staff_reject=int(config.get('STAFF_REJECTION_THRESHOLD', staff)),
            veteran_reject=int(config.get('VETERANS_REJECTION_THRESHOLD',
                                          veterans)),
        )

    def for_vote(self, vote_type: Vote.Type, role: Vote.Role) -> int:
        """Get the threshold for a vote direction and role."""
        if vote_type is Vote.Type.UP:
            if role is Vote.Role.STAFF:
                return self.staff_approve
            return self.veteran_approve
        if vote_type is Vote.Type.DOWN:
            if role is Vote.Role.STAFF:
                return self.staff_reject
            return self.veteran_reject
        raise ValueError(f'{vote_type} votes have no threshold')


def tips(thresholds: VoteThresholds, vote_type: Vote.Type, role: Vote.Role,
         count: int) -> bool:
    """Check whether ``count`` votes meet the threshold."""
    return count >= thresholds.for_vote(vote_type, role)


def approves(thresholds: VoteThresholds, role: Vote.Role, count: int) -> bool:
    """An added upvote, bringing its role to ``count``, accepts."""
    return tips(thresholds, Vote.Type.UP, role, count)


def rejects(thresholds: VoteThresholds, role: Vote.Role, count: int) -> bool:
    """An added downvote, bringing its role to ``count``, rejects."""
    return tips(thresholds, Vote.Type.DOWN, role, count)
