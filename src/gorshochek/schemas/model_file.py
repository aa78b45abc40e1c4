"""Persisted model file schema.

Layout of ``model.json`` in the cache directory:

    {
        "pages": [{"url": "/", ...}, ...],
        "changes": {"added": [...], "modified": [...], "removed": [...]}
    }

The declarative input model is a bare JSON array of pages; both forms are
accepted when loading.
"""

from pydantic import BaseModel, Field

from .changes import ChangeLog
from .page import PageRecord


class ModelDocument(BaseModel):
    """A persisted model: ordered pages plus the last change log."""

    pages: list[PageRecord] = []
    changes: ChangeLog = Field(default_factory=ChangeLog)
