"""Pipeline infrastructure for running tasks over the model."""

from .builder import Builder
from .pipeline import Pipeline

__all__ = ["Builder", "Pipeline"]
