"""Tests for :mod:`.domain.threshold`."""

from unittest import TestCase

from ..threshold import VoteThresholds, approves, rejects, tips
from ..vote import Vote


class TestVoteThresholds(TestCase):
    """Test :class:`.VoteThresholds`."""

    def test_from_config(self):
        """Rejection thresholds default to the voting thresholds."""
        thresholds = VoteThresholds.from_config({
            'STAFF_VOTING_THRESHOLD': '2',
            'VETERANS_VOTING_THRESHOLD': '3',
        })
        self.assertEqual(thresholds.staff_approve, 2)
        self.assertEqual(thresholds.veteran_approve, 3)
        self.assertEqual(thresholds.staff_reject, 2)
        self.assertEqual(thresholds.veteran_reject, 3)

    def test_separate_rejection_thresholds(self):
        """Approval and rejection are configured independently."""
        thresholds = VoteThresholds.from_config({
            'STAFF_VOTING_THRESHOLD': 2,
            'VETERANS_VOTING_THRESHOLD': 3,
            'STAFF_REJECTION_THRESHOLD': 1,
            'VETERANS_REJECTION_THRESHOLD': 5,
        })
        self.assertEqual(thresholds.for_vote(Vote.Type.DOWN,
                                             Vote.Role.STAFF), 1)
        self.assertEqual(thresholds.for_vote(Vote.Type.DOWN,
                                             Vote.Role.VETERAN), 5)

    def test_thresholds_must_be_positive(self):
        """A threshold of zero would accept everything."""
        with self.assertRaises(ValueError):
            VoteThresholds(0, 3, 2, 3)

    def test_pause_has_no_threshold(self):
        """Pause votes never tip anything."""
        thresholds = VoteThresholds(2, 3, 2, 3)
        with self.assertRaises(ValueError):
            thresholds.for_vote(Vote.Type.PAUSE, Vote.Role.STAFF)


class TestTips(TestCase):
    """Test :func:`.tips`, :func:`.approves` and :func:`.rejects`."""

    def setUp(self):
        """Thresholds: staff 2, veterans 3."""
        self.thresholds = VoteThresholds(2, 3, 2, 3)

    def test_count_below_threshold(self):
        """One vote short does not tip."""
        self.assertFalse(approves(self.thresholds, Vote.Role.STAFF, 1))
        self.assertFalse(approves(self.thresholds, Vote.Role.VETERAN, 2))
        self.assertFalse(rejects(self.thresholds, Vote.Role.VETERAN, 2))

    def test_count_at_threshold(self):
        """Reaching the threshold tips."""
        self.assertTrue(approves(self.thresholds, Vote.Role.STAFF, 2))
        self.assertTrue(approves(self.thresholds, Vote.Role.VETERAN, 3))
        self.assertTrue(rejects(self.thresholds, Vote.Role.STAFF, 2))

    def test_count_above_threshold(self):
        """Anything over the threshold also tips."""
        self.assertTrue(tips(self.thresholds, Vote.Type.DOWN,
                             Vote.Role.VETERAN, 4))
