"""Page tasks: header, breadcrumbs and search metadata."""

import logging

from gorshochek.model import Model

from .filters import join_tags, page_title
from .task import PageTask

logger = logging.getLogger(__name__)


def get_parent_urls(page: dict) -> list[str]:
    """Return the chain of urls from the site root down to the page.

    Examples:
        >>> get_parent_urls({"url": "/docs/intro/"})
        ['/', '/docs', '/docs/intro']
        >>> get_parent_urls({"url": "/"})
        ['/']
    """
    parts = [part for part in page["url"].split("/") if part]
    urls = ["/"]
    for index in range(1, len(parts) + 1):
        urls.append("/" + "/".join(parts[:index]))
    return urls


def normalize_url(url: str) -> str:
    """Strip trailing slashes so "/a/" and "/a" name the same page."""
    return "/" + url.strip("/")


def url_title_map(pages: list[dict]) -> dict[str, str]:
    """Map each (normalized) page url to its title."""
    return {normalize_url(page["url"]): page_title(page) for page in pages}


class CreateHeaderTitle(PageTask):
    """Set ``page.header.title`` from the page title."""

    name = "create header title"

    def process_page(self, model: Model, page: dict) -> None:
        page.setdefault("header", {})["title"] = page.get("title", "")


class CreateHeaderMeta(PageTask):
    """Set open graph and keyword meta fields on ``page.header.meta``."""

    name = "create header meta"

    def process_page(self, model: Model, page: dict) -> None:
        title = page.get("title", "")
        keywords = join_tags(page.get("tags"))
        page.setdefault("header", {})["meta"] = {
            "ogUrl": page["url"],
            "ogType": "article",
            "description": title,
            "ogDescription": title,
            "keywords": keywords,
            "ogKeywords": keywords,
        }


class _TitledPageTask(PageTask):
    """PageTask that needs the url -> title map of the whole model."""

    def run(self, model: Model) -> Model:
        self.titles = url_title_map(model.get_pages())
        return super().run(model)

    def crumbs(self, page: dict) -> list[dict]:
        return [
            {"url": url, "title": self.titles[url]}
            for url in get_parent_urls(page)
            if url in self.titles
        ]


class CreateBreadcrumbs(_TitledPageTask):
    """Set ``page.breadcrumbs`` to the parent pages that exist in the model."""

    name = "create breadcrumbs"

    def process_page(self, model: Model, page: dict) -> None:
        page["breadcrumbs"] = self.crumbs(page)


class CreateSearchMeta(_TitledPageTask):
    """Set ``page.meta`` with breadcrumbs and fields for the search service."""

    name = "create search meta"

    def process_page(self, model: Model, page: dict) -> None:
        page["meta"] = {
            "breadcrumbs": self.crumbs(page),
            "fields": {"type": "doc", "keywords": list(page.get("tags") or [])},
        }
