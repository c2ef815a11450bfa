"""Resolve the voting role of a community member."""

from typing import Callable, Iterable, Optional

from arxiv.base.globals import get_application_config

from ..domain.vote import Vote


class RoleResolver:
    """
    Map community roles to voting roles.

    Parameters
    ----------
    member_roles : callable
        Given a member ID, returns the IDs of the roles that the member
        currently holds.
    staff_role_id : str
    veteran_role_id : str
        Default to ``STAFF_ROLE_ID`` and ``VETERANS_ROLE_ID`` in the
        application config.

    """

    def __init__(self, member_roles: Callable[[str], Iterable[str]],
                 staff_role_id: Optional[str] = None,
                 veteran_role_id: Optional[str] = None) -> None:
        config = get_application_config()
        if staff_role_id is None:
            staff_role_id = config.get('STAFF_ROLE_ID', '')
        if veteran_role_id is None:
            veteran_role_id = config.get('VETERANS_ROLE_ID', '')
        self.member_roles = member_roles
        self.staff_role_id = str(staff_role_id)
        self.veteran_role_id = str(veteran_role_id)

    def resolve_role(self, voter_id: str) -> Optional[Vote.Role]:
        """Staff takes priority over veteran; ``None`` if neither applies."""
        roles = set([str(role) for role in self.member_roles(str(voter_id))])
        if self.staff_role_id and self.staff_role_id in roles:
            return Vote.Role.STAFF
        if self.veteran_role_id and self.veteran_role_id in roles:
            return Vote.Role.VETERAN
        return None
