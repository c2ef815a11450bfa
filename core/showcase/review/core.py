"""
Carries out review operations on submissions.

:class:`ActionExecutor` is the entry point for everything that changes a
submission: intake, edits, votes, pauses and drafts, the accept/reject
decisions that votes can trigger, and the manual cleanup that staff run when
a rejection leaves the review surfaces behind. It sequences the calls to the
datastore (through :class:`.SubmissionStore`) and to the chat platform
(through :class:`.Presentation`), and undoes the vote when a required step
fails.

Operations come in two flavors:

- The entry points (:meth:`ActionExecutor.handle_vote`,
  :meth:`ActionExecutor.reject_with_template`, etc) take a submission ID,
  hold the :class:`.ConcurrencyGate` for that submission, load it, and
  delegate.
- The lower-level operations (:meth:`ActionExecutor.upvote`,
  :meth:`ActionExecutor.accept`, etc) take a loaded submission, and require
  that the caller already hold the gate for it.

Every operation returns a :class:`.VoteResult`. The only exception that
escapes is :class:`.Unreachable`, which means that something is broken.
"""

from functools import wraps
from typing import Any, Callable, Iterable, List, Optional

from arxiv.base import logging

from .domain.agent import Agent, Member, System
from .domain.submission import Submission, Surface
from .domain.template import RejectionTemplate
from .domain.threshold import VoteThresholds, approves, rejects
from .domain.vote import Vote, VoteLedger
from .domain.event import CreateSubmission, CompleteIntake, Revalidate, \
    AddVote, RemoveVote, Pause, Unpause, Accept, Reject, ForceReject, \
    Cleanup, EditSubmission, AddDraft, SetFeedbackSurface
from .exceptions import InvalidEvent, PermissionDenied, \
    ExternalOperationFailed, TemplateNotFound, NoSuchSubmission, Unreachable
from .result import VoteResult
from .services.presentation import Presentation
from .services.roles import RoleResolver
from .store import SubmissionStore
from .templates import RejectionTemplateRouter, AUTHOR_LEFT

logger = logging.getLogger(__name__)

UPVOTE = 'upvote'
DOWNVOTE = 'downvote'
PAUSE = 'pause'
ACTIONS = {UPVOTE: Vote.Type.UP, DOWNVOTE: Vote.Type.DOWN,
           PAUSE: Vote.Type.PAUSE}


def reports_defects(func: Callable) -> Callable:
    """Log :class:`.Unreachable` at critical level on its way out."""
    @wraps(func)
    def inner(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Unreachable as e:
            logger.critical('Invariant violated in %s: %s', func.__name__, e)
            raise
    return inner


class ActionExecutor:
    """
    Performs review operations, and their side-effects.

    Parameters
    ----------
    store : :class:`.SubmissionStore`
    presentation : :class:`.Presentation`
    roles : :class:`.RoleResolver`
    thresholds : :class:`.VoteThresholds`
        Loaded from the application config if not given.
    templates : :class:`.RejectionTemplateRouter`
        Defaults to the built-in rejection templates.

    """

    def __init__(self, store: SubmissionStore, presentation: Presentation,
                 roles: RoleResolver,
                 thresholds: Optional[VoteThresholds] = None,
                 templates: Optional[RejectionTemplateRouter] = None) -> None:
        self.store = store
        self.presentation = presentation
        self.roles = roles
        self.thresholds = thresholds or VoteThresholds.from_config()
        self.templates = templates or RejectionTemplateRouter()
        self.system = System(__name__)

    # Helpers for calling collaborators.

    def _attempt(self, step: str, func: Callable, *args: Any,
                 **kwargs: Any) -> Any:
        """Call a collaborator in a step that the operation cannot skip."""
        try:
            return func(*args, **kwargs)
        except Unreachable:
            raise
        except Exception as e:
            logger.error('Failed to %s: %s', step, e)
            raise ExternalOperationFailed(step, str(e)) from e

    def _best_effort(self, submission: Submission, step: str,
                     func: Callable, *args: Any, **kwargs: Any) -> None:
        """Call a collaborator; a failure is reported, but not fatal."""
        try:
            func(*args, **kwargs)
        except Unreachable:
            raise
        except Exception as e:
            logger.error('Failed to %s for submission %s: %s', step,
                         submission.submission_id, e)
            try:
                self.presentation.report_warning(
                    submission, f'Failed to {step}: {e}'
                )
            except Exception as report_error:
                logger.error('Could not report failure to %s: %s', step,
                             report_error)

    def _refresh(self, submission: Submission) -> None:
        view = self.presentation.render_submission(submission)
        self.presentation.update_presentation(view)

    def _log_action(self, submission: Submission, actor: Agent,
                    action: str) -> None:
        detail = ', '.join([
            f'{role} {counts["UP"]} up/{counts["DOWN"]} down'
            for role, counts in submission.votes.situation().items()
        ])
        self._best_effort(submission, 'write the audit log',
                          self.presentation.log_action, submission, actor,
                          action, detail)

    def _cleanup(self, submission: Submission) -> None:
        """Archive the review thread and remove the post that was voted on."""
        if submission.review_thread is not None:
            self._best_effort(submission, 'archive the review thread',
                              self.presentation.archive_surface,
                              submission.review_thread)
        if submission.origin_message is not None:
            self._best_effort(submission, 'delete the submission post',
                              self.presentation.delete_origin_post,
                              submission.origin_message)

    def _revert_vote(self, submission: Submission, vote: Vote) -> None:
        """Remove a vote that was persisted by an operation that failed."""
        try:
            self.store.remove_vote(submission.submission_id, vote)
        except Unreachable:
            raise
        except Exception as e:
            logger.error('Could not revert vote by %s on submission %s: %s',
                         vote.voter_id, submission.submission_id, e)
            self.store.evict(submission.submission_id)
            self._best_effort(submission, 'report a vote that could not be'
                                          ' reverted',
                              self.presentation.report_warning, submission,
                              f'The vote by {vote.voter_id} could not be'
                              f' reverted; please check the submission.')
        else:
            logger.debug('Reverted vote by %s on submission %s',
                         vote.voter_id, submission.submission_id)

    def _ensure_feedback_surface(self, actor: Agent,
                                 submission: Submission) -> Submission:
        """Create the feedback thread if there isn't one, and record it."""
        if submission.feedback_thread is not None:
            return submission
        surface = self._attempt('create the feedback thread',
                                self.presentation.create_feedback_surface,
                                submission.name)
        event = SetFeedbackSurface(creator=actor, surface=surface)
        after = event.apply(submission)
        self._attempt('save the feedback thread', self.store.save, after)
        return after

    def _deliver(self, surface: Surface, content: str,
                 mentions: Iterable[str] = ()) -> None:
        ack = self._attempt('deliver message',
                            self.presentation.deliver_message, surface,
                            content, mentions=list(mentions))
        if ack is None or not ack.delivered:
            raise ExternalOperationFailed('deliver message',
                                          'delivery was not acknowledged')

    def _compose(self, template: RejectionTemplate,
                 submission: Submission) -> str:
        mention = self._attempt('mention the author',
                                self.presentation.mention,
                                submission.author_id)
        return template.execute(mention, submission.name)

    def _reviewers(self, submission: Submission) -> List[str]:
        """Members in the review thread and past voters, without bots."""
        participants = self._attempt('list reviewers',
                                     self.presentation.list_participants,
                                     submission.review_thread)
        reviewers = set([member.native_id for member in participants
                         if not member.bot])
        return sorted(reviewers | submission.votes.voters)

    def _role_of(self, agent: Agent) -> Optional[Vote.Role]:
        return self._attempt('resolve member role', self.roles.resolve_role,
                             agent.native_id)

    # Votes.

    @reports_defects
    def handle_vote(self, submission_id: str, voter: Member,
                    action: str) -> VoteResult:
        """
        Handle a vote button press (or reaction) on a submission.

        Parameters
        ----------
        submission_id : str
        voter : :class:`.Member`
        action : str
            One of ``upvote``, ``downvote`` or ``pause``. Pausing a paused
            submission unpauses it.

        Returns
        -------
        :class:`.VoteResult`

        """
        if action not in ACTIONS:
            return VoteResult.failure(InvalidEvent(
                AddVote(creator=voter), f'Unknown vote action {action!r}'
            ))
        try:
            role = self._role_of(voter)
            if role is None:
                return VoteResult.failure(PermissionDenied(
                    AddVote(creator=voter),
                    'Member does not have voting privileges'
                ))
            vote = Vote(voter_id=voter.native_id, role=role,
                        vote_type=ACTIONS[action],
                        submission_id=submission_id)
            with self.store.checkout(submission_id) as submission:
                if action == UPVOTE:
                    return self.upvote(vote, submission, voter)
                if action == DOWNVOTE:
                    return self.downvote(vote, submission, voter)
                if submission.is_paused:
                    return self.unpause(vote, submission, voter)
                return self.pause(vote, submission, voter)
        except (NoSuchSubmission, ExternalOperationFailed) as e:
            return VoteResult.failure(e)

    @reports_defects
    def upvote(self, vote: Vote, submission: Submission,
               voter: Optional[Agent] = None) -> VoteResult:
        """Add (or toggle off) an upvote; accepts if this tips it."""
        if vote.vote_type is not Vote.Type.UP:
            return VoteResult.failure(
                InvalidEvent(vote, 'Expected an upvote'), submission
            )
        return self._cast(vote, submission, voter)

    @reports_defects
    def downvote(self, vote: Vote, submission: Submission,
                 voter: Optional[Agent] = None) -> VoteResult:
        """
        Add (or toggle off) a downvote; rejects if this tips it.

        A new downvote requires a drafted rejection message; without one, the
        vote is refused with :class:`.MissingDraft`.
        """
        if vote.vote_type is not Vote.Type.DOWN:
            return VoteResult.failure(
                InvalidEvent(vote, 'Expected a downvote'), submission
            )
        return self._cast(vote, submission, voter)

    def _cast(self, vote: Vote, submission: Submission,
              voter: Optional[Agent]) -> VoteResult:
        self.store.gate.assert_held(submission.submission_id)
        if voter is None:
            voter = Member(vote.voter_id)
        held = submission.votes.find(vote.voter_id, vote.vote_type)
        event = AddVote(creator=voter, vote=vote)
        try:
            after = event.apply(submission)
        except InvalidEvent as e:
            logger.debug('Vote refused on submission %s: %s',
                         submission.submission_id, e)
            return VoteResult.failure(e, submission)

        if event.outcome == VoteLedger.REMOVED:
            if held is None:
                raise Unreachable(f'Removed a vote by {vote.voter_id}'
                                  f' that was not held')
            try:
                self._attempt('remove vote', self.store.remove_vote,
                              submission.submission_id, held)
            except ExternalOperationFailed as e:
                return VoteResult.failure(e, submission)
            self._best_effort(after, 'update the submission view',
                              self._refresh, after)
            return VoteResult.success(VoteResult.VOTE_REMOVE, after)

        # Only consulted on the add path.
        count = after.votes.count_for(vote.vote_type, vote.role)
        if vote.vote_type is Vote.Type.UP \
                and approves(self.thresholds, vote.role, count):
            return self.accept(vote, submission, voter)
        if vote.vote_type is Vote.Type.DOWN \
                and rejects(self.thresholds, vote.role, count):
            return self.reject(vote, submission, voter)

        try:
            self._attempt('persist vote', self.store.append_vote,
                          submission.submission_id, vote)
        except ExternalOperationFailed as e:
            return VoteResult.failure(e, submission)
        try:
            self._attempt('update the submission view', self._refresh, after)
        except ExternalOperationFailed as e:
            self._revert_vote(submission, vote)
            return VoteResult.failure(e, submission)
        return VoteResult.success(VoteResult.VOTE_ADD, after)

    @reports_defects
    def remove_vote(self, voter: Member, submission_id: str,
                    vote_type: Vote.Type) -> VoteResult:
        """Remove a vote, if it is held. This never accepts or rejects."""
        try:
            with self.store.checkout(submission_id) as submission:
                event = RemoveVote(creator=voter, voter_id=voter.native_id,
                                   vote_type=vote_type)
                try:
                    after = event.apply(submission)
                except InvalidEvent as e:
                    return VoteResult.failure(e, submission)
                if event.removed is None:
                    return VoteResult.success(VoteResult.NO_OP, submission)
                try:
                    self._attempt('remove vote', self.store.remove_vote,
                                  submission_id, event.removed)
                except ExternalOperationFailed as e:
                    return VoteResult.failure(e, submission)
                self._best_effort(after, 'update the submission view',
                                  self._refresh, after)
                return VoteResult.success(VoteResult.VOTE_REMOVE, after)
        except (NoSuchSubmission, ExternalOperationFailed) as e:
            return VoteResult.failure(e)

    # Decisions.

    @reports_defects
    def accept(self, vote: Vote, submission: Submission,
               voter: Optional[Agent] = None) -> VoteResult:
        """
        Accept a submission with the vote that tipped it.

        The vote is persisted, the review surfaces are cleaned up, and the
        submission is published. If publishing fails, the vote is removed
        again so that it can be retried. Cleanup is best effort.
        """
        self.store.gate.assert_held(submission.submission_id)
        if voter is None:
            voter = Member(vote.voter_id)
        add = AddVote(creator=voter, vote=vote)
        accept = Accept(creator=voter)
        try:
            with_vote = add.apply(submission)
            if add.outcome != VoteLedger.ADDED:
                raise InvalidEvent(accept, 'The vote is already held.')
            accepted = accept.apply(with_vote)
        except InvalidEvent as e:
            return VoteResult.failure(e, submission)

        try:
            self._attempt('persist vote', self.store.append_vote,
                          submission.submission_id, vote)
        except ExternalOperationFailed as e:
            return VoteResult.failure(e, submission)

        self._cleanup(with_vote)

        try:
            view = self._attempt('render submission',
                                 self.presentation.render_submission,
                                 accepted)
            self._attempt('publish submission',
                          self.presentation.publish_announcement, view)
        except ExternalOperationFailed as e:
            self._revert_vote(submission, vote)
            return VoteResult.failure(e, submission)

        self._log_action(accepted, voter, Accept.NAMED)
        try:
            self._attempt('save submission', self.store.save, accepted)
        except ExternalOperationFailed as e:
            self._best_effort(with_vote, 'report the failed save',
                              self.presentation.report_warning, with_vote,
                              'Submission was published but could not be'
                              ' marked as accepted.')
            return VoteResult.failure(e, with_vote)
        logger.info('Accepted submission %s', submission.submission_id)
        return VoteResult.success(VoteResult.ACCEPT, accepted)

    @reports_defects
    def reject(self, vote: Vote, submission: Submission,
               voter: Optional[Agent] = None) -> VoteResult:
        """
        Reject a submission with the vote that tipped it.

        The current draft is delivered to the author in the feedback thread,
        after all reviewers are notified there. Nothing is denied until the
        delivery is acknowledged; a failure before that point removes the
        vote again.
        """
        self.store.gate.assert_held(submission.submission_id)
        if voter is None:
            voter = Member(vote.voter_id)
        add = AddVote(creator=voter, vote=vote)
        reject = Reject(creator=voter)
        try:
            reject.validate(submission)
            with_vote = add.apply(submission)
            if add.outcome != VoteLedger.ADDED:
                raise InvalidEvent(reject, 'The vote is already held.')
        except InvalidEvent as e:
            return VoteResult.failure(e, submission)
        draft = with_vote.current_draft
        if draft is None:
            raise Unreachable(f'No draft on submission'
                              f' {submission.submission_id}')

        try:
            self._attempt('persist vote', self.store.append_vote,
                          submission.submission_id, vote)
        except ExternalOperationFailed as e:
            return VoteResult.failure(e, submission)

        current = with_vote
        try:
            self._attempt('update the submission view', self._refresh,
                          with_vote)
            reviewers = self._reviewers(with_vote)
            current = self._ensure_feedback_surface(voter, with_vote)
            if current.feedback_thread is None:
                raise Unreachable('Feedback thread was not recorded')
            self._deliver(current.feedback_thread,
                          'This submission has been rejected by vote.'
                          ' Reviewers have been notified.',
                          mentions=reviewers)
            self._deliver(current.feedback_thread, draft.content,
                          mentions=[current.author_id])
        except ExternalOperationFailed as e:
            self._revert_vote(submission, vote)
            return VoteResult.failure(e, submission)

        self._cleanup(current)
        denied = reject.apply(current)
        try:
            self._attempt('save submission', self.store.save, denied)
        except ExternalOperationFailed as e:
            self._best_effort(current, 'report the failed save',
                              self.presentation.report_warning, current,
                              'Feedback was sent but the submission could not'
                              ' be marked as denied.')
            return VoteResult.failure(e, current)
        self._log_action(denied, voter, Reject.NAMED)
        logger.info('Rejected submission %s', submission.submission_id)
        return VoteResult.success(VoteResult.REJECT, denied)

    # Pause.

    @reports_defects
    def pause(self, vote: Vote, submission: Submission,
              voter: Optional[Agent] = None) -> VoteResult:
        """Suspend voting on a submission. Staff only."""
        self.store.gate.assert_held(submission.submission_id)
        if voter is None:
            voter = Member(vote.voter_id)
        event = Pause(creator=voter, vote=vote)
        try:
            paused = event.apply(submission)
        except InvalidEvent as e:
            return VoteResult.failure(e, submission)
        try:
            self._attempt('persist pause vote', self.store.append_vote,
                          submission.submission_id, vote)
            self._attempt('save submission', self.store.save, paused)
            self._attempt('update the submission view', self._refresh, paused)
        except ExternalOperationFailed as e:
            return VoteResult.failure(e, submission)
        self._log_action(paused, voter, Pause.NAMED)
        logger.info('Paused submission %s', submission.submission_id)
        return VoteResult.success(VoteResult.PAUSE, paused)

    @reports_defects
    def unpause(self, vote: Vote, submission: Submission,
                voter: Optional[Agent] = None) -> VoteResult:
        """Resume voting on a paused submission. Staff only."""
        self.store.gate.assert_held(submission.submission_id)
        if voter is None:
            voter = Member(vote.voter_id)
        event = Unpause(creator=voter, vote=vote)
        try:
            unpaused = event.apply(submission)
        except InvalidEvent as e:
            return VoteResult.failure(e, submission)
        try:
            for removed in event.removed:
                self._attempt('remove pause vote', self.store.remove_vote,
                              submission.submission_id, removed)
            self._attempt('save submission', self.store.save, unpaused)
            self._attempt('update the submission view', self._refresh,
                          unpaused)
        except ExternalOperationFailed as e:
            return VoteResult.failure(e, submission)
        self._log_action(unpaused, voter, Unpause.NAMED)
        logger.info('Unpaused submission %s', submission.submission_id)
        return VoteResult.success(VoteResult.UNPAUSE, unpaused)

    # Force-reject.

    @reports_defects
    def reject_with_template(self, actor: Member, submission_id: str,
                             key: str) -> VoteResult:
        """Force-reject a submission with the template registered as ``key``."""
        try:
            template = self.templates.get(key)
        except TemplateNotFound as e:
            return VoteResult.failure(e)
        try:
            role = self._role_of(actor)
            with self.store.checkout(submission_id) as submission:
                return self.force_reject(actor, submission, template, role)
        except (NoSuchSubmission, ExternalOperationFailed) as e:
            return VoteResult.failure(e)

    @reports_defects
    def force_reject(self, actor: Agent, submission: Submission,
                     template: RejectionTemplate,
                     role: Optional[Vote.Role] = None) -> VoteResult:
        """
        Reject a submission with a preset reason, regardless of votes.

        Where the message goes depends on ``template.location``:

        - ``public``: the public log. The review thread and the submission
          post are left alone, for staff to clean up; the outcome is
          ``cleanup-not-run``.
        - ``thread``: the feedback thread, which is created if necessary;
          then the review surfaces are cleaned up.
        - ``none``: nowhere; the review surfaces are cleaned up.

        If the message cannot be delivered, the submission is not denied.
        """
        self.store.gate.assert_held(submission.submission_id)
        event = ForceReject(creator=actor, template=template, role=role)
        try:
            event.validate(submission)
        except InvalidEvent as e:
            return VoteResult.failure(e, submission)

        Location = RejectionTemplate.Location
        current = submission
        outcome = VoteResult.SUCCESS
        try:
            if template.location is Location.PUBLIC:
                content = self._compose(template, submission)
                self._attempt('post to the public log',
                              self.presentation.post_public_log, content)
                outcome = VoteResult.CLEANUP_NOT_RUN
            elif template.location is Location.THREAD:
                current = self._ensure_feedback_surface(actor, submission)
                if current.feedback_thread is None:
                    raise Unreachable('Feedback thread was not recorded')
                content = self._compose(template, submission)
                self._deliver(current.feedback_thread, content,
                              mentions=[submission.author_id])
        except ExternalOperationFailed as e:
            return VoteResult.failure(e, current)

        if outcome != VoteResult.CLEANUP_NOT_RUN:
            self._cleanup(current)
        denied = event.apply(current)
        try:
            self._attempt('save submission', self.store.save, denied)
        except ExternalOperationFailed as e:
            return VoteResult.failure(e, current)
        self._log_action(denied, actor, f'{ForceReject.NAMED}'
                                        f' ({template.label})')
        logger.info('Force-rejected submission %s: %s',
                    submission.submission_id, template.key)
        return VoteResult.success(outcome, denied)

    @reports_defects
    def handle_author_departure(self, author_id: str) -> List[VoteResult]:
        """Silently reject everything still under review by an author."""
        try:
            template = self.templates.get(AUTHOR_LEFT)
        except TemplateNotFound as e:
            return [VoteResult.failure(e)]
        try:
            submissions = self.store.find_by_author(author_id)
        except ExternalOperationFailed as e:
            return [VoteResult.failure(e)]
        results = []
        for candidate in submissions:
            if candidate.is_raw or candidate.is_completed:
                continue
            try:
                with self.store.checkout(candidate.submission_id) as current:
                    if current.is_raw or current.is_completed:
                        continue
                    results.append(self.force_reject(self.system, current,
                                                     template))
            except (NoSuchSubmission, ExternalOperationFailed) as e:
                results.append(VoteResult.failure(e))
        return results

    @reports_defects
    def cleanup(self, actor: Member, submission_id: str,
                state: str = Submission.DENIED) -> VoteResult:
        """
        Close out a submission by hand. Staff only.

        A submission that is still open is moved to ``state`` (accepted or
        denied). Either way, the review thread is archived and the submission
        post removed; this is what ``cleanup-not-run`` asks staff to do.
        """
        try:
            role = self._role_of(actor)
            with self.store.checkout(submission_id) as submission:
                event = Cleanup(creator=actor, state=state, role=role)
                try:
                    after = event.apply(submission)
                except InvalidEvent as e:
                    return VoteResult.failure(e, submission)
                if after.state != submission.state:
                    self._attempt('save submission', self.store.save, after)
                self._cleanup(after)
                self._log_action(after, actor, Cleanup.NAMED)
                logger.info('Cleaned up submission %s as %s', submission_id,
                            after.state)
                return VoteResult.success(VoteResult.CLEANUP, after)
        except (NoSuchSubmission, ExternalOperationFailed) as e:
            return VoteResult.failure(e)

    # Intake, edits, drafts and revalidation.

    @reports_defects
    def intake(self, creator: Agent, name: str, author_id: str,
               description: str = '', tech: str = '', source: str = '',
               other: str = '') -> VoteResult:
        """Store a new, unvalidated submission."""
        event = CreateSubmission(creator=creator, name=name,
                                 author_id=author_id, description=description,
                                 tech=tech, source=source, other=other)
        try:
            submission = event.apply()
            self._attempt('create submission', self.store.create, submission)
        except (InvalidEvent, ExternalOperationFailed) as e:
            return VoteResult.failure(e)
        logger.info('Created submission %s', submission.submission_id)
        return VoteResult.success(VoteResult.INTAKE, submission)

    @reports_defects
    def complete_intake(self, submission_id: str, state: str,
                        review_thread: Optional[Surface] = None,
                        origin_message: Optional[Surface] = None,
                        warnings: Iterable[str] = ()) -> VoteResult:
        """Record the result of validating a new submission."""
        event = CompleteIntake(creator=self.system, state=state,
                               review_thread=review_thread,
                               origin_message=origin_message,
                               warnings=list(warnings))
        try:
            with self.store.checkout(submission_id) as submission:
                try:
                    after = event.apply(submission)
                except InvalidEvent as e:
                    return VoteResult.failure(e, submission)
                self._attempt('save submission', self.store.save, after)
                if after.warnings:
                    self._best_effort(after, 'report validation problems',
                                      self.presentation.report_warning,
                                      after, '; '.join(after.warnings))
                return VoteResult.success(VoteResult.SUCCESS, after)
        except (NoSuchSubmission, ExternalOperationFailed) as e:
            return VoteResult.failure(e)

    @reports_defects
    def revalidate(self, actor: Agent, submission_id: str,
                   review_thread: Optional[Surface] = None,
                   origin_message: Optional[Surface] = None) -> VoteResult:
        """Move a submission that failed validation into voting."""
        event = Revalidate(creator=actor, review_thread=review_thread,
                           origin_message=origin_message)
        try:
            with self.store.checkout(submission_id) as submission:
                try:
                    after = event.apply(submission)
                except InvalidEvent as e:
                    return VoteResult.failure(e, submission)
                self._attempt('save submission', self.store.save, after)
                self._best_effort(after, 'update the submission view',
                                  self._refresh, after)
                self._log_action(after, actor, Revalidate.NAMED)
                return VoteResult.success(VoteResult.REVALIDATE, after)
        except (NoSuchSubmission, ExternalOperationFailed) as e:
            return VoteResult.failure(e)

    @reports_defects
    def edit(self, actor: Agent, submission_id: str, field_name: str,
             value: str) -> VoteResult:
        """
        Change one detail of a submission that is not completed.

        ``field_name`` is one of :attr:`.EditSubmission.FIELDS`. Pending
        submissions are not revalidated here; see :meth:`revalidate`.
        """
        event = EditSubmission(creator=actor, field_name=field_name,
                               value=value)
        try:
            with self.store.checkout(submission_id) as submission:
                try:
                    after = event.apply(submission)
                except InvalidEvent as e:
                    return VoteResult.failure(e, submission)
                self._attempt('save submission', self.store.save, after)
                if after.is_validated:
                    self._best_effort(after, 'update the submission view',
                                      self._refresh, after)
                self._log_action(after, actor,
                                 f'{EditSubmission.NAMED} ({field_name})')
                return VoteResult.success(VoteResult.EDIT, after)
        except (NoSuchSubmission, ExternalOperationFailed) as e:
            return VoteResult.failure(e)

    @reports_defects
    def add_draft(self, author: Agent, submission_id: str,
                  content: str) -> VoteResult:
        """Stage a rejection message for a submission."""
        event = AddDraft(creator=author, content=content)
        try:
            with self.store.checkout(submission_id) as submission:
                try:
                    after = event.apply(submission)
                except InvalidEvent as e:
                    return VoteResult.failure(e, submission)
                self._attempt('persist draft', self.store.append_draft,
                              submission_id, event.draft)
                return VoteResult.success(VoteResult.DRAFT_ADD, after)
        except (NoSuchSubmission, ExternalOperationFailed) as e:
            return VoteResult.failure(e)
