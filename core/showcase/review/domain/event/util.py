"""Helpers for review event classes."""

import hashlib
from datetime import datetime
from typing import Any

from dataclasses import dataclass as base_dataclass

from ..agent import Agent


def event_id_for(created: datetime, event_type: str, creator: Agent) -> str:
    """Derive the identifier of an event from when, what and who."""
    h = hashlib.new('sha1')
    h.update(b'%s:%s:%s' % (created.isoformat().encode('utf-8'),
                            event_type.encode('utf-8'),
                            creator.agent_identifier.encode('utf-8')))
    return h.hexdigest()


def event_hash(instance: Any) -> int:
    """Use event ID as object hash; unapplied events hash by identity."""
    if instance.created is None:
        return id(instance)
    return hash(instance.event_id)


def event_eq(instance: Any, other: Any) -> bool:
    """Two events are the same if they were applied as the same event."""
    if not hasattr(type(other), 'event_id'):
        return NotImplemented
    if instance.created is None or other.created is None:
        return instance is other
    return bool(instance.event_id == other.event_id)


def dataclass(**kwargs) -> type:
    """Like :func:`dataclasses.dataclass`, with equality by event ID."""
    def inner(cls):
        new_cls = base_dataclass(**kwargs)(cls)
        setattr(new_cls, '__hash__', event_hash)
        setattr(new_cls, '__eq__', event_eq)
        return new_cls
    return inner
