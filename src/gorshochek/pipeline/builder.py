"""Site builder wiring the default task chain.

Loads the previous build, merges the declarative model into it and runs
every task needed to produce a publishable site.
"""

import logging

from gorshochek.clients import SourceClient
from gorshochek.config import BuildConfig
from gorshochek.model import Model
from gorshochek.tasks import (
    CreateBreadcrumbs,
    CreateHeaderMeta,
    CreateHeaderTitle,
    CreateSearchMeta,
    CreateSitemapXml,
    LoadSourcesFromLocal,
    LoadSourcesFromRemote,
    MergeModels,
    NormalizeModel,
    OverrideDocs,
    Publish,
    SaveModel,
    TransformMdToHtml,
)

from .pipeline import Pipeline

logger = logging.getLogger(__name__)


class Builder:
    """End-to-end site builder.

    Task order:
    1. merge models, normalize
    2. load sources (local, then remote)
    3. markdown -> html, link override
    4. header title/meta, breadcrumbs, search meta
    5. sitemap (when a host is configured)
    6. save model, publish

    Attributes:
        config: Build configuration
        client: SourceClient used for remote sources
    """

    def __init__(self, config: BuildConfig, client: SourceClient | None = None):
        self.config = config
        self.client = client or SourceClient(config.source.model_dump())

    def tasks(self) -> list:
        config = self.config
        cache_dir = config.cache_dir
        concurrency = config.concurrency

        tasks = [
            MergeModels(config.model_path, cache_dir),
            NormalizeModel(),
            LoadSourcesFromLocal(
                cache_dir, config.model_path.parent, concurrency=concurrency
            ),
            LoadSourcesFromRemote(cache_dir, self.client, concurrency=concurrency),
            TransformMdToHtml(cache_dir, concurrency=concurrency),
            OverrideDocs(cache_dir, concurrency=concurrency),
            CreateHeaderTitle(concurrency=concurrency),
            CreateHeaderMeta(concurrency=concurrency),
            CreateBreadcrumbs(concurrency=concurrency),
            CreateSearchMeta(concurrency=concurrency),
        ]
        if config.host:
            tasks.append(CreateSitemapXml(cache_dir, config.host))
        else:
            logger.debug("No host configured, skipping sitemap")
        tasks.extend([
            SaveModel(cache_dir),
            Publish(cache_dir, config.data_dir, config.publish_exclude),
        ])
        return tasks

    def build(self) -> Model:
        """Run the full build.

        Returns:
            The built model
        """
        with self.client:
            pipeline = Pipeline(Model(), self.tasks())
            return pipeline.run()
