"""Change log schemas."""

from enum import Enum

from pydantic import BaseModel


class ChangeType(str, Enum):
    """Kind of entity a change entry refers to."""

    PAGE = "page"


class ChangeEntry(BaseModel):
    """A single added/modified/removed entry."""

    type: ChangeType = ChangeType.PAGE
    url: str


class ChangeLog(BaseModel):
    """Persisted form of the changes produced by a merge."""

    added: list[ChangeEntry] = []
    modified: list[ChangeEntry] = []
    removed: list[ChangeEntry] = []
