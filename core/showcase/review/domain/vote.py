"""Votes and the per-submission vote ledger."""

from typing import Optional, List, Iterator, Set
from enum import Enum

from dataclasses import dataclass, field

from ..exceptions import ConflictingVote
from .util import list_coerce


@dataclass
class Vote:
    """A single vote cast by a community member on a submission."""

    class Type(Enum):
        """Kinds of vote that can be held on a submission."""

        UP = 'UP'
        DOWN = 'DOWN'
        PAUSE = 'PAUSE'
        """Suspends voting; tracked apart from UP/DOWN."""

    class Role(Enum):
        """The role a vote was cast under."""

        STAFF = 'STAFF'
        VETERAN = 'VETERAN'

    voter_id: str
    role: Role
    vote_type: Type
    submission_id: Optional[str] = field(default=None)

    def __post_init__(self) -> None:
        """Make sure that enums are enums."""
        self.voter_id = str(self.voter_id)
        self.role = self.Role(self.role)
        self.vote_type = self.Type(self.vote_type)

    @property
    def is_directional(self) -> bool:
        """UP and DOWN votes count toward acceptance or rejection."""
        return self.vote_type in (Vote.Type.UP, Vote.Type.DOWN)

    @property
    def opposite(self) -> Optional['Vote.Type']:
        """The vote type this vote may not be held alongside."""
        if self.vote_type is Vote.Type.UP:
            return Vote.Type.DOWN
        if self.vote_type is Vote.Type.DOWN:
            return Vote.Type.UP
        return None


@dataclass
class VoteLedger:
    """
    The set of active votes on a single submission.

    There is at most one active vote per (voter, type). Adding a vote that is
    already held removes it instead (toggle), and a voter may not hold an UP
    and a DOWN vote at the same time. PAUSE votes are kept in the same ledger
    but are not subject to the UP/DOWN conflict rule.
    """

    ADDED = 'added'
    REMOVED = 'removed'

    votes: List[Vote] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.votes = list_coerce(Vote, self.votes)

    def __iter__(self) -> Iterator[Vote]:
        return iter(self.votes)

    def __len__(self) -> int:
        return len(self.votes)

    def find(self, voter_id: str, vote_type: Vote.Type) -> Optional[Vote]:
        """Get the active vote of ``vote_type`` held by a voter, if any."""
        for vote in self.votes:
            if vote.voter_id == str(voter_id) and vote.vote_type is vote_type:
                return vote
        return None

    def conflicts_with(self, vote: Vote) -> Optional[Vote]:
        """Get the held vote that prevents ``vote`` from being added."""
        if vote.opposite is None:
            return None
        return self.find(vote.voter_id, vote.opposite)

    def add(self, vote: Vote) -> str:
        """
        Add a vote to the ledger.

        Returns
        -------
        str
            :attr:`ADDED` if the vote was recorded, or :attr:`REMOVED` if the
            voter already held a vote of the same type (which is removed).

        Raises
        ------
        :class:`.ConflictingVote`
            If the voter holds the opposing UP/DOWN vote.

        """
        conflict = self.conflicts_with(vote)
        if conflict is not None:
            raise ConflictingVote(vote, "You cannot add an upvote and a"
                                        " downvote.")
        if self.find(vote.voter_id, vote.vote_type) is not None:
            self.remove(vote.voter_id, vote.vote_type)
            return VoteLedger.REMOVED
        self.votes.append(vote)
        return VoteLedger.ADDED

    def remove(self, voter_id: str, vote_type: Vote.Type) -> Optional[Vote]:
        """Remove a vote, if it is held; returns the removed vote."""
        existing = self.find(voter_id, vote_type)
        if existing is None:
            return None
        self.votes = [v for v in self.votes if v is not existing]
        return existing

    def count_for(self, vote_type: Vote.Type, role: Vote.Role) -> int:
        """Number of active votes of ``vote_type`` cast under ``role``."""
        return len([v for v in self.votes
                    if v.vote_type is vote_type and v.role is role])

    def of_type(self, vote_type: Vote.Type) -> List[Vote]:
        return [v for v in self.votes if v.vote_type is vote_type]

    @property
    def pauses(self) -> List[Vote]:
        return self.of_type(Vote.Type.PAUSE)

    @property
    def voters(self) -> Set[str]:
        """IDs of everyone holding an UP or DOWN vote."""
        return set([v.voter_id for v in self.votes if v.is_directional])

    def situation(self) -> dict:
        """Per-role UP/DOWN counts, as shown in audit logs."""
        return {
            role.value: {
                vote_type.value: self.count_for(vote_type, role)
                for vote_type in (Vote.Type.UP, Vote.Type.DOWN)
            } for role in Vote.Role
        }
