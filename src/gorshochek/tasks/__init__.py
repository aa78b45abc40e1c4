"""Tasks applied to the model by the pipeline."""

from .core import MergeModels, NormalizeModel, Publish, SaveModel
from .docs import LoadSourcesFromLocal, LoadSourcesFromRemote, TransformMdToHtml
from .override import OverrideDocs
from .page import CreateBreadcrumbs, CreateHeaderMeta, CreateHeaderTitle, CreateSearchMeta
from .sitemap import CreateSitemapXml
from .task import PageTask, Task

__all__ = [
    "Task",
    "PageTask",
    "MergeModels",
    "NormalizeModel",
    "SaveModel",
    "Publish",
    "LoadSourcesFromLocal",
    "LoadSourcesFromRemote",
    "TransformMdToHtml",
    "OverrideDocs",
    "CreateHeaderTitle",
    "CreateHeaderMeta",
    "CreateBreadcrumbs",
    "CreateSearchMeta",
    "CreateSitemapXml",
]
