"""Drafted rejection feedback."""

import uuid
from datetime import datetime

from dataclasses import dataclass, field
from dateutil.parser import parse as parse_date

from .util import get_tzaware_utc_now


@dataclass
class Draft:
    """A rejection-feedback message staged by a reviewer."""

    author_id: str
    content: str
    created: datetime = field(default_factory=get_tzaware_utc_now)
    draft_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        self.author_id = str(self.author_id)
        if type(self.created) is str:
            self.created = parse_date(self.created)
