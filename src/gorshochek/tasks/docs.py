"""Docs tasks: loading page sources and converting markdown to HTML."""

import logging
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import markdown
from jinja2 import Environment, FileSystemLoader

from gorshochek.clients import SourceClient
from gorshochek.exceptions import SourceError
from gorshochek.model import Model
from gorshochek.storage import page_directory, read_cache_file, write_cache_file

from .filters import FILTERS
from .task import DEFAULT_CONCURRENCY, PageTask

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "resources" / "templates"
DEFAULT_MD_EXTENSIONS = ["fenced_code", "tables", "toc"]
SOURCE_SUFFIXES = {".md", ".html"}


def is_remote_source(source_url: str | None) -> bool:
    return bool(source_url) and urlparse(source_url).scheme in ("http", "https")


def is_local_source(source_url: str | None) -> bool:
    return bool(source_url) and urlparse(source_url).scheme in ("", "file")


def source_suffix(source_url: str) -> str:
    """Return the content suffix for a source, defaulting to markdown.

    Examples:
        >>> source_suffix("https://example.com/docs/page.html?raw=1")
        '.html'
        >>> source_suffix("docs/README")
        '.md'
    """
    suffix = PurePosixPath(urlparse(source_url).path).suffix.lower()
    return suffix if suffix in SOURCE_SUFFIXES else ".md"


def content_file_for(page: dict, suffix: str) -> str:
    """Return the cache-relative content file path for a page."""
    return (PurePosixPath(page_directory(page["url"])) / f"index{suffix}").as_posix()


class LoadSourcesFromLocal(PageTask):
    """Copy local page sources into the cache.

    Pages whose ``sourceUrl`` is a local path (relative to ``base_dir``) get
    the file copied to ``<cache>/<page url>/index.<ext>`` and ``contentFile``
    pointed at it.

    Attributes:
        cache_dir: Cache directory
        base_dir: Directory relative local sources are resolved against
    """

    name = "load sources from local"

    def __init__(
        self, cache_dir: Path, base_dir: Path, concurrency: int = DEFAULT_CONCURRENCY
    ):
        super().__init__(concurrency)
        self.cache_dir = cache_dir
        self.base_dir = base_dir

    def matches(self, page: dict) -> bool:
        return is_local_source(page.get("sourceUrl"))

    def process_page(self, model: Model, page: dict) -> None:
        source_url = page["sourceUrl"]
        source_path = self.base_dir / urlparse(source_url).path
        if not source_path.is_file():
            raise SourceError(f"Source file not found: {source_path}")

        content_file = content_file_for(page, source_suffix(source_url))
        write_cache_file(
            self.cache_dir, content_file, source_path.read_text(encoding="utf-8")
        )
        page["contentFile"] = content_file
        logger.debug(f"Loaded {source_path} for page {page['url']}")


class LoadSourcesFromRemote(PageTask):
    """Fetch http(s) page sources into the cache.

    Attributes:
        cache_dir: Cache directory
        client: SourceClient used for the requests
    """

    name = "load sources from remote"

    def __init__(
        self,
        cache_dir: Path,
        client: SourceClient,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        super().__init__(concurrency)
        self.cache_dir = cache_dir
        self.client = client

    def matches(self, page: dict) -> bool:
        return is_remote_source(page.get("sourceUrl"))

    def process_page(self, model: Model, page: dict) -> None:
        source_url = page["sourceUrl"]
        text = self.client.fetch(source_url)
        content_file = content_file_for(page, source_suffix(source_url))
        write_cache_file(self.cache_dir, content_file, text)
        page["contentFile"] = content_file
        logger.debug(f"Fetched {source_url} for page {page['url']}")


class TransformMdToHtml(PageTask):
    """Transform markdown page sources into HTML.

    For every page whose ``contentFile`` ends with ``.md``:
    1. Reads the markdown from the cache
    2. Converts it with Python-Markdown
    3. Renders the result through the Jinja2 content template
    4. Passes it through ``process_html`` if given
    5. Writes ``index.html`` next to the source and updates ``contentFile``

    Attributes:
        cache_dir: Cache directory
        extensions: Python-Markdown extensions
        template_name: Name of the Jinja2 content template
        process_html: Optional hook ``(page, html) -> html``
    """

    name = "transform md to html"

    def __init__(
        self,
        cache_dir: Path,
        concurrency: int = DEFAULT_CONCURRENCY,
        extensions: list[str] | None = None,
        template_name: str = "content.html.j2",
        templates_dir: Path | None = None,
        process_html: Callable[[dict, str], str] | None = None,
    ):
        super().__init__(concurrency)
        self.cache_dir = cache_dir
        self.extensions = list(extensions or DEFAULT_MD_EXTENSIONS)
        self.template_name = template_name
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.process_html = process_html

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
        )
        for name, func in FILTERS.items():
            self._env.filters[name] = func

    def matches(self, page: dict) -> bool:
        content_file = page.get("contentFile")
        return bool(content_file) and content_file.endswith(".md")

    def transform(self, page: dict, md: str) -> str:
        """Convert markdown to HTML and render it into the content template."""
        body = markdown.markdown(md, extensions=self.extensions)
        template = self._env.get_template(self.template_name)
        return template.render(page=page, content=body)

    def process_page(self, model: Model, page: dict) -> None:
        source_file = page["contentFile"]
        html_file = (PurePosixPath(source_file).parent / "index.html").as_posix()

        md = read_cache_file(self.cache_dir, source_file)
        html = self.transform(page, md)
        if self.process_html is not None:
            html = self.process_html(page, html)

        write_cache_file(self.cache_dir, html_file, html)
        page["contentFile"] = html_file
