"""
Contract for the chat platform on which submissions are reviewed.

Every method here is a (fallible) network call. Implementations should raise
on failure; the review engine decides whether a failure is fatal to the
operation in progress.
"""

from typing import Any, Iterable, List

from dataclasses import dataclass, field

from ..domain.agent import Agent, Member
from ..domain.submission import Submission, Surface


@dataclass
class Ack:
    """Acknowledgement that a message was delivered."""

    surface: Surface
    message_id: str = field(default_factory=str)
    delivered: bool = field(default=True)


class Presentation:
    """Base class for chat platform adapters."""

    def render_submission(self, submission: Submission) -> Any:
        """Build the view (e.g. an embed) that represents a submission."""
        raise NotImplementedError('Must be implemented by subclass')

    def update_presentation(self, view: Any) -> None:
        """Replace the view of a submission wherever it is displayed."""
        raise NotImplementedError('Must be implemented by subclass')

    def create_feedback_surface(self, name: str) -> Surface:
        """Open a private thread with the given name."""
        raise NotImplementedError('Must be implemented by subclass')

    def deliver_message(self, surface: Surface, content: str,
                        mentions: Iterable[str] = ()) -> Ack:
        """Post ``content`` to ``surface``, mentioning the given members."""
        raise NotImplementedError('Must be implemented by subclass')

    def archive_surface(self, handle: Surface) -> None:
        raise NotImplementedError('Must be implemented by subclass')

    def delete_origin_post(self, handle: Surface) -> None:
        raise NotImplementedError('Must be implemented by subclass')

    def list_participants(self, handle: Surface) -> List[Member]:
        """Get the members taking part in a thread."""
        raise NotImplementedError('Must be implemented by subclass')

    def publish_announcement(self, view: Any) -> None:
        """Show an accepted submission in the public showcase."""
        raise NotImplementedError('Must be implemented by subclass')

    def mention(self, member_id: str) -> str:
        """Get the text that mentions a member in a message."""
        raise NotImplementedError('Must be implemented by subclass')

    def post_public_log(self, content: str) -> None:
        raise NotImplementedError('Must be implemented by subclass')

    def log_action(self, submission: Submission, actor: Agent, action: str,
                   detail: str = '') -> None:
        """Record a moderation action on the private log surface."""
        raise NotImplementedError('Must be implemented by subclass')

    def report_warning(self, submission: Submission, message: str) -> None:
        """Tell staff about a problem that needs manual attention."""
        raise NotImplementedError('Must be implemented by subclass')
