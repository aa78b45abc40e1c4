"""Static documentation site builder."""

from .model import Changes, Model

__version__ = "0.1.0"

__all__ = ["Changes", "Model", "__version__"]
