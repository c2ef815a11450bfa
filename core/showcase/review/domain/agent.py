"""Data structures for agents."""

import hashlib
from typing import Any, Union

from dataclasses import dataclass, field

__all__ = ('Agent', 'Member', 'System', 'agent_factory')


@dataclass
class Agent:
    """
    Someone or something that acts on submissions.

    Every event records its creator as an agent. Two agents are the same if
    they have the same type and native ID.
    """

    native_id: str
    """Type-specific identifier for the agent, e.g. a community member ID."""

    def __post_init__(self) -> None:
        """Set derivative fields."""
        self.native_id = str(self.native_id)
        self.agent_type = self.__class__.get_agent_type()
        self.agent_identifier = self.get_agent_identifier()

    @classmethod
    def get_agent_type(cls) -> str:
        """Name used to tag serialized agents."""
        return cls.__name__

    def get_agent_identifier(self) -> str:
        """Stable hash of the agent type and native ID."""
        h = hashlib.new('sha1')
        h.update(b'%s:%s' % (self.agent_type.encode('utf-8'),
                             str(self.native_id).encode('utf-8')))
        return h.hexdigest()

    def __eq__(self, other: Any) -> bool:
        """Agents are equal if their identifiers are."""
        if not isinstance(other, self.__class__):
            return False
        return self.agent_identifier == other.agent_identifier

    def __hash__(self) -> int:
        return hash(self.agent_identifier)


@dataclass(eq=False)
class Member(Agent):
    """A (human or bot) member of the community."""

    username: str = field(default_factory=str)
    bot: bool = field(default=False)

    agent_type: str = field(default_factory=str)
    agent_identifier: str = field(default_factory=str)

    def __post_init__(self) -> None:
        """Set derivative fields."""
        super(Member, self).__post_init__()
        if not self.username:
            self.username = self.native_id


@dataclass(eq=False)
class System(Agent):
    """The review application (this application)."""

    agent_type: str = field(default_factory=str)
    agent_identifier: str = field(default_factory=str)
    username: str = field(default_factory=str)

    def __post_init__(self) -> None:
        """Set derivative fields."""
        super(System, self).__post_init__()
        self.username = self.native_id


_agent_types = {
    Member.get_agent_type(): Member,
    System.get_agent_type(): System,
}


def agent_factory(**data: Union[Agent, dict]) -> Agent:
    """Rebuild an agent from its serialized fields."""
    agent_type = data.pop('agent_type')
    native_id = data.pop('native_id')
    if not agent_type or not native_id:
        raise ValueError(f'Incomplete agent: {agent_type!r}, {native_id!r}')
    if agent_type not in _agent_types:
        raise ValueError(f'Unknown agent type: {agent_type}')
    klass = _agent_types[agent_type]
    data = {k: v for k, v in data.items() if k in klass.__dataclass_fields__
            and k not in ('agent_identifier',)}
    return klass(native_id, **data)
