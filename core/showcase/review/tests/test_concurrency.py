"""Concurrent operations on the same submission do not lose updates."""

import threading
import time
from unittest import TestCase

from ..core import ActionExecutor
from ..domain import Member, Submission, Vote, VoteThresholds
from ..result import VoteResult
from ..services.roles import RoleResolver
from ..store import SubmissionStore
from .util import InMemoryPersistence, make_submission, make_draft, \
    presentation_double, member_roles, VETERAN_ROLE, STAFF_ROLE


def slow_render(submission):
    """Widen the window between reading and writing a submission."""
    time.sleep(0.005)
    return submission


class TestConcurrentVotes(TestCase):
    """Votes arriving at the same time are applied one after another."""

    def setUp(self):
        """Thresholds high enough that nothing tips."""
        self.persistence = InMemoryPersistence()
        self.persistence.put(make_submission('1', drafts=[make_draft()]))
        self.persistence.put(make_submission('2'))
        self.presentation = presentation_double()
        self.presentation.render_submission.side_effect = slow_render
        self.voters = [f'vet-{i}' for i in range(10)]
        roles = {voter: [VETERAN_ROLE] for voter in self.voters}
        roles['staff-1'] = [STAFF_ROLE]
        self.executor = ActionExecutor(
            SubmissionStore(self.persistence, retries=1, delay=0),
            self.presentation,
            RoleResolver(member_roles(roles), STAFF_ROLE, VETERAN_ROLE),
            VoteThresholds(50, 50, 50, 50)
        )

    def run_all(self, *calls):
        results = []
        barrier = threading.Barrier(len(calls))

        def run(call):
            barrier.wait()
            results.append(call())

        threads = [threading.Thread(target=run, args=(call,))
                   for call in calls]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return results

    def test_up_and_down(self):
        """An upvote and a downvote by different voters both count."""
        results = self.run_all(
            lambda: self.executor.handle_vote('1', Member('vet-0'), 'upvote'),
            lambda: self.executor.handle_vote('1', Member('vet-1'),
                                              'downvote'),
        )
        self.assertTrue(all([result.ok for result in results]))
        votes = self.persistence.submissions['1'].votes
        self.assertIsNotNone(votes.find('vet-0', Vote.Type.UP))
        self.assertIsNotNone(votes.find('vet-1', Vote.Type.DOWN))

    def test_many_voters(self):
        """No vote is lost."""
        results = self.run_all(*[
            (lambda voter: lambda: self.executor.handle_vote(
                '1', Member(voter), 'upvote'
            ))(voter) for voter in self.voters
        ])
        self.assertEqual([result.outcome for result in results],
                         [VoteResult.VOTE_ADD] * len(self.voters))
        self.assertEqual(len(self.persistence.submissions['1'].votes),
                         len(self.voters))

    def test_pause_races_vote(self):
        """Either the vote lands before the pause, or it is refused."""
        results = self.run_all(
            lambda: self.executor.handle_vote('1', Member('staff-1'),
                                              'pause'),
            lambda: self.executor.handle_vote('1', Member('vet-0'), 'upvote'),
        )
        pause, vote = results if results[0].outcome == VoteResult.PAUSE \
            else reversed(results)
        self.assertEqual(pause.outcome, VoteResult.PAUSE)
        stored = self.persistence.submissions['1']
        self.assertEqual(stored.state, Submission.PAUSED)
        if vote.ok:
            self.assertIsNotNone(stored.votes.find('vet-0', Vote.Type.UP))
        else:
            self.assertIsNone(stored.votes.find('vet-0', Vote.Type.UP))

    def test_different_submissions(self):
        """Votes on different submissions do not interfere."""
        self.run_all(
            lambda: self.executor.handle_vote('1', Member('vet-0'), 'upvote'),
            lambda: self.executor.handle_vote('2', Member('vet-0'), 'upvote'),
        )
        self.assertEqual(len(self.persistence.submissions['1'].votes), 1)
        self.assertEqual(len(self.persistence.submissions['2'].votes), 1)
