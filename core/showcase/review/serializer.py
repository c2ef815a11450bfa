"""
JSON serialization for submission review.

Domain objects are written as their dataclass fields plus a ``__type__`` tag,
so that :func:`loads` can restore them. Enums are written as their values;
the dataclasses coerce them back on construction. Only the fields named in
``TIMESTAMPS`` are read back as dates; any other string stays a string,
even if it looks like a date.
"""

import json
from enum import Enum
from typing import Any, Callable, Dict, Tuple

from dataclasses import asdict

from dateutil.parser import parse as parse_date

from arxiv.util.serialize import ISO8601JSONEncoder, ISO8601JSONDecoder

from .domain import Submission, Agent, Vote, Draft, agent_factory

# Order matters: the first matching class wins.
ENCODED: Tuple[Tuple[type, str], ...] = (
    (Submission, 'submission'),
    (Agent, 'agent'),
    (Vote, 'vote'),
    (Draft, 'draft'),
)

DECODERS: Dict[str, Callable[..., Any]] = {
    'submission': Submission,
    'agent': agent_factory,
    'vote': Vote,
    'draft': Draft,
}

TIMESTAMPS = frozenset(['created', 'updated'])


class ReviewJSONEncoder(ISO8601JSONEncoder):
    """Encodes domain objects in this package for serialization."""

    def default(self, obj: object) -> Any:
        """Tag domain objects with their type; fall back to the base."""
        for klass, tag in ENCODED:
            if isinstance(obj, klass):
                data = asdict(obj)
                data['__type__'] = tag
                return data
        if isinstance(obj, Enum):
            return obj.value
        return super(ReviewJSONEncoder, self).default(obj)


class ReviewJSONDecoder(ISO8601JSONDecoder):
    """Decode :class:`.Submission` and other domain objects from JSON data."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Pass :func:`object_hook` to the base constructor."""
        kwargs['object_hook'] = kwargs.get('object_hook', self.object_hook)
        super(ReviewJSONDecoder, self).__init__(*args, **kwargs)

    def object_hook(self, obj: dict, **extra: Any) -> Any:
        """Decode domain objects in this package."""
        for key in TIMESTAMPS & obj.keys():
            if isinstance(obj[key], str):
                obj[key] = parse_date(obj[key])
        decoder = DECODERS.get(obj.get('__type__'))
        if decoder is None:
            return obj
        obj.pop('__type__')
        return decoder(**obj)


def dumps(obj: Any) -> str:
    """Generate JSON from a Python object."""
    return json.dumps(obj, cls=ReviewJSONEncoder)


def loads(data: str) -> Any:
    """Load a Python object from JSON."""
    return json.loads(data, cls=ReviewJSONDecoder)
