"""Page model and merge logic."""

from .changes import Changes
from .equality import deep_equal
from .model import Model

__all__ = ["Changes", "Model", "deep_equal"]
