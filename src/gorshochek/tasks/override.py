"""Link override task.

Documentation sources link to each other by their source location (a
relative path to another markdown file, or a GitHub URL). Once the pages are
published under site URLs those links have to point at the site instead.
OverrideDocs rewrites them in the generated HTML.
"""

import logging
from pathlib import Path
from urllib.parse import ParseResult, urljoin, urlparse

import lxml.html

from gorshochek.clients import SourceClient
from gorshochek.model import Model
from gorshochek.storage import read_cache_file, write_cache_file

from .task import DEFAULT_CONCURRENCY, PageTask

logger = logging.getLogger(__name__)

HTTP_SCHEMES = ("http", "https")
GITHUB_HOSTS = ("github.com", "www.github.com")
INDEX_FILE_NAMES = ("README.md", "index.md")


def is_absolute_http_url(url: ParseResult) -> bool:
    return url.scheme in HTTP_SCHEMES and bool(url.netloc)


def has_unsupported_protocol(url: ParseResult) -> bool:
    return bool(url.scheme) and url.scheme not in HTTP_SCHEMES


def is_anchor(url: ParseResult) -> bool:
    return (
        not url.scheme and not url.netloc and not url.path and bool(url.fragment)
    )


def is_github_url(url: ParseResult) -> bool:
    return url.netloc in GITHUB_HOSTS


def is_github_directory_url(url: ParseResult) -> bool:
    return is_github_url(url) and "/tree/" in url.path


def is_native_website_url(url: ParseResult, existing_urls) -> bool:
    """Return True if ``url`` already points at a page of this site."""
    if url.scheme or url.netloc:
        return False
    path = url.path.rstrip("/") or "/"
    return path in existing_urls


def strip_index_file(source_url: str) -> str | None:
    """Return ``source_url`` without a trailing README.md/index.md, if any.

    Examples:
        >>> strip_index_file("/sourceUrl2/README.md")
        '/sourceUrl2'
        >>> strip_index_file("/sourceUrl1") is None
        True
    """
    for name in INDEX_FILE_NAMES:
        suffix = "/" + name
        if source_url.endswith(suffix):
            return source_url[: -len(suffix)]
    return None


def github_directory_readme(source_url: str) -> str | None:
    """Return the README blob url behind a GitHub directory url, if it is one.

    Examples:
        >>> github_directory_readme("https://github.com/o/r/tree/master/docs/")
        'https://github.com/o/r/blob/master/docs/README.md'
        >>> github_directory_readme("https://github.com/o/r/blob/master/a.md") is None
        True
    """
    if not is_github_directory_url(urlparse(source_url)):
        return None
    return source_url.rstrip("/").replace("/tree/", "/blob/", 1) + "/README.md"


def source_base(source_url: str) -> str:
    """Return the url relative links of a source resolve against.

    A GitHub directory source is read from its README, so its links
    resolve next to that file.

    Examples:
        >>> source_base("https://github.com/o/r/tree/master/docs")
        'https://github.com/o/r/blob/master/docs/README.md'
        >>> source_base("docs/intro.md")
        'docs/intro.md'
    """
    return github_directory_readme(source_url) or source_url


def create_source_urls_map(pages: list[dict]) -> dict[str, str]:
    """Map source urls of published pages to their site urls.

    A source ending in ``/README.md`` or ``/index.md`` is also registered
    under its directory url, and a GitHub directory source under its README
    blob url. The first page claiming a source wins.
    """
    source_urls: dict[str, str] = {}
    for page in pages:
        source_url = page.get("sourceUrl")
        if not source_url or not page.get("published"):
            continue
        source_urls.setdefault(source_url, page["url"])
        for alternate in (strip_index_file(source_url), github_directory_readme(source_url)):
            if alternate:
                source_urls.setdefault(alternate, page["url"])
    return source_urls


def create_page_urls(pages: list[dict]) -> list[str]:
    return [page["url"] for page in pages]


def find_replacement(variants: list[str], source_urls_map: dict, existing_urls) -> str | None:
    """Find the site url for the first matching variant of a link.

    Source urls are tried before site urls.
    """
    for variant in variants:
        if variant in source_urls_map:
            return source_urls_map[variant]
    for variant in variants:
        if variant in existing_urls:
            return variant
    return None


def link_variants(url: ParseResult, source_url: str | None) -> list[str]:
    """Candidate spellings of a link target, without fragment or query."""
    if is_absolute_http_url(url):
        target = url._replace(fragment="", query="").geturl()
    elif source_url:
        target = urljoin(source_base(source_url), url.path)
    else:
        target = url.path

    variants = [target]
    stripped = target.rstrip("/")
    if stripped and stripped != target:
        variants.append(stripped)
    # GitHub serves directories under /tree/ and files under /blob/
    if is_github_directory_url(urlparse(stripped)):
        variants.append(stripped.replace("/tree/", "/blob/", 1))
    return variants


class OverrideDocs(PageTask):
    """Rewrite links and image sources in generated page HTML.

    - ``<a href>`` pointing at another page's source is replaced by that
      page's site url, keeping the fragment.
    - Relative ``<img src>`` of remote pages is made absolute against the
      raw source location so images keep loading from where they live.
    - Anchors, non-http protocols and unknown urls are left untouched.
    """

    name = "override docs"

    def __init__(self, cache_dir: Path, concurrency: int = DEFAULT_CONCURRENCY):
        super().__init__(concurrency)
        self.cache_dir = cache_dir

    def matches(self, page: dict) -> bool:
        content_file = page.get("contentFile")
        return bool(content_file) and content_file.endswith(".html")

    def run(self, model: Model) -> Model:
        pages = model.get_pages()
        self.source_urls_map = create_source_urls_map(pages)
        self.existing_urls = set(create_page_urls(pages))
        return super().run(model)

    def override_link(self, href: str, source_url: str | None) -> str:
        url = urlparse(href)
        if is_anchor(url) or has_unsupported_protocol(url):
            return href
        if is_native_website_url(url, self.existing_urls):
            return href

        replacement = find_replacement(
            link_variants(url, source_url), self.source_urls_map, self.existing_urls
        )
        if replacement is None:
            return href
        return f"{replacement}#{url.fragment}" if url.fragment else replacement

    def override_image(self, src: str, source_url: str | None) -> str:
        url = urlparse(src)
        if url.scheme or url.netloc or src.startswith("/"):
            return src
        if not source_url or not is_absolute_http_url(urlparse(source_url)):
            return src
        return urljoin(SourceClient.raw_url(source_url), src)

    def override_html(self, page: dict, html: str) -> str:
        if not html.strip():
            return html

        source_url = page.get("sourceUrl")
        container = lxml.html.fragment_fromstring(html, create_parent="div")

        for link in container.iter("a"):
            href = link.get("href")
            if href:
                link.set("href", self.override_link(href, source_url))

        for image in container.iter("img"):
            src = image.get("src")
            if src:
                image.set("src", self.override_image(src, source_url))

        return (container.text or "") + "".join(
            lxml.html.tostring(child, encoding="unicode") for child in container
        )

    def process_page(self, model: Model, page: dict) -> None:
        content_file = page["contentFile"]
        html = read_cache_file(self.cache_dir, content_file)
        write_cache_file(self.cache_dir, content_file, self.override_html(page, html))
