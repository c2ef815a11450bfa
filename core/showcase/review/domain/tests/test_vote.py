"""Tests for :class:`.VoteLedger`."""

from unittest import TestCase

from ..vote import Vote, VoteLedger
from ...exceptions import ConflictingVote


def vote(voter_id: str, vote_type: Vote.Type,
         role: Vote.Role = Vote.Role.STAFF) -> Vote:
    return Vote(voter_id=voter_id, role=role, vote_type=vote_type)


class TestAddVote(TestCase):
    """Test :meth:`.VoteLedger.add`."""

    def setUp(self):
        """Start with an empty ledger."""
        self.ledger = VoteLedger()

    def test_add_vote(self):
        """A new vote is recorded."""
        outcome = self.ledger.add(vote('1', Vote.Type.UP))
        self.assertEqual(outcome, VoteLedger.ADDED)
        self.assertEqual(len(self.ledger), 1)
        self.assertIsNotNone(self.ledger.find('1', Vote.Type.UP))

    def test_add_same_vote_twice(self):
        """Adding a vote that is already held removes it."""
        self.ledger.add(vote('1', Vote.Type.UP))
        outcome = self.ledger.add(vote('1', Vote.Type.UP))
        self.assertEqual(outcome, VoteLedger.REMOVED)
        self.assertEqual(len(self.ledger), 0)

    def test_add_opposing_vote(self):
        """A voter cannot hold an UP and a DOWN vote at once."""
        self.ledger.add(vote('1', Vote.Type.UP))
        with self.assertRaises(ConflictingVote):
            self.ledger.add(vote('1', Vote.Type.DOWN))
        self.assertEqual(len(self.ledger), 1)
        self.assertIsNone(self.ledger.find('1', Vote.Type.DOWN))

    def test_opposing_votes_by_different_voters(self):
        """The conflict rule applies per voter."""
        self.ledger.add(vote('1', Vote.Type.UP))
        self.assertEqual(self.ledger.add(vote('2', Vote.Type.DOWN)),
                         VoteLedger.ADDED)

    def test_pause_does_not_conflict(self):
        """Pause votes are not subject to the UP/DOWN rule."""
        self.ledger.add(vote('1', Vote.Type.UP))
        self.assertEqual(self.ledger.add(vote('1', Vote.Type.PAUSE)),
                         VoteLedger.ADDED)
        self.assertEqual(len(self.ledger.pauses), 1)
        self.assertEqual(self.ledger.voters, {'1'})

    def test_voter_ids_are_strings(self):
        """Numeric voter IDs are coerced."""
        self.ledger.add(Vote(voter_id=1234, role='STAFF', vote_type='UP'))
        self.assertIsNotNone(self.ledger.find('1234', Vote.Type.UP))


class TestRemoveVote(TestCase):
    """Test :meth:`.VoteLedger.remove`."""

    def test_remove_missing_vote(self):
        """Removing a vote that is not held is not an error."""
        ledger = VoteLedger()
        self.assertIsNone(ledger.remove('1', Vote.Type.UP))

    def test_remove_held_vote(self):
        """Only the matching vote is removed."""
        ledger = VoteLedger(votes=[vote('1', Vote.Type.UP),
                                   vote('1', Vote.Type.PAUSE),
                                   vote('2', Vote.Type.UP)])
        removed = ledger.remove('1', Vote.Type.UP)
        self.assertEqual(removed.voter_id, '1')
        self.assertEqual(len(ledger), 2)
        self.assertIsNotNone(ledger.find('1', Vote.Type.PAUSE))


class TestCounts(TestCase):
    """Test counting votes by type and role."""

    def setUp(self):
        """Votes from both roles."""
        self.ledger = VoteLedger(votes=[
            vote('1', Vote.Type.UP),
            vote('2', Vote.Type.UP, Vote.Role.VETERAN),
            vote('3', Vote.Type.UP, Vote.Role.VETERAN),
            vote('4', Vote.Type.DOWN, Vote.Role.VETERAN),
        ])

    def test_count_for(self):
        """Counts are per type and role."""
        self.assertEqual(self.ledger.count_for(Vote.Type.UP,
                                               Vote.Role.STAFF), 1)
        self.assertEqual(self.ledger.count_for(Vote.Type.UP,
                                               Vote.Role.VETERAN), 2)
        self.assertEqual(self.ledger.count_for(Vote.Type.DOWN,
                                               Vote.Role.STAFF), 0)

    def test_situation(self):
        """The situation summarizes UP/DOWN votes per role."""
        self.assertDictEqual(self.ledger.situation(), {
            'STAFF': {'UP': 1, 'DOWN': 0},
            'VETERAN': {'UP': 2, 'DOWN': 1},
        })

    def test_coerce_from_dicts(self):
        """Votes can be loaded from plain data."""
        ledger = VoteLedger(votes=[
            {'voter_id': '1', 'role': 'VETERAN', 'vote_type': 'DOWN'}
        ])
        self.assertEqual(ledger.count_for(Vote.Type.DOWN,
                                          Vote.Role.VETERAN), 1)
