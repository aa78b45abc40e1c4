"""Schema definitions for gorshochek."""

from .changes import ChangeEntry, ChangeLog, ChangeType
from .model_file import ModelDocument
from .page import PageRecord, validate_page

__all__ = [
    "ChangeEntry",
    "ChangeLog",
    "ChangeType",
    "ModelDocument",
    "PageRecord",
    "validate_page",
]
