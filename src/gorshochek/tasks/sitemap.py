"""Sitemap task: builds sitemap.xml from the published pages."""

import logging
from pathlib import Path

from lxml import etree

from gorshochek.model import Model

from .task import Task

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_FILE_NAME = "sitemap.xml"
CHANGEFREQ_VALUES = {"always", "hourly", "daily", "weekly", "monthly", "yearly", "never"}


def parse_priority(value) -> float | None:
    """Return ``value`` as a sitemap priority, or None if it is not one.

    Examples:
        >>> parse_priority("0.8")
        0.8
        >>> parse_priority(7) is None
        True
    """
    if isinstance(value, bool):
        return None
    try:
        priority = float(value)
    except (TypeError, ValueError):
        return None
    if not 0.0 <= priority <= 1.0:
        return None
    return priority


class CreateSitemapXml(Task):
    """Write a sitemaps.org ``urlset`` for every published page.

    Per-page ``search`` fields override the defaults, e.g.
    ``{"url": "/", "search": {"changefreq": "daily", "priority": 1.0}}``.

    Attributes:
        cache_dir: Directory the sitemap is written to
        host: Base URL prepended to page urls
        changefreq: Default change frequency
        priority: Default priority (0.0 - 1.0)
    """

    name = "create sitemap xml"

    def __init__(
        self,
        cache_dir: Path,
        host: str,
        changefreq: str = "weekly",
        priority: float = 0.5,
    ):
        if changefreq not in CHANGEFREQ_VALUES:
            raise ValueError(f"Invalid changefreq: {changefreq}")
        if parse_priority(priority) is None:
            raise ValueError(f"Invalid priority: {priority!r} (expected 0.0 - 1.0)")
        self.cache_dir = cache_dir
        self.host = host.rstrip("/")
        self.changefreq = changefreq
        self.priority = float(priority)

    def build(self, pages: list[dict]) -> etree._Element:
        """Build the urlset element for the given pages."""
        root = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})

        for page in pages:
            if not page.get("published", True):
                continue

            search = page.get("search") or {}
            changefreq = search.get("changefreq", self.changefreq)
            if not isinstance(changefreq, str) or changefreq not in CHANGEFREQ_VALUES:
                logger.warning(
                    f"Ignoring invalid changefreq {changefreq!r} for page {page['url']}"
                )
                changefreq = self.changefreq
            priority = self.priority
            if "priority" in search:
                priority = parse_priority(search["priority"])
                if priority is None:
                    logger.warning(
                        f"Ignoring invalid priority {search['priority']!r} for page {page['url']}"
                    )
                    priority = self.priority

            url = etree.SubElement(root, f"{{{SITEMAP_NS}}}url")
            etree.SubElement(url, f"{{{SITEMAP_NS}}}loc").text = self.host + page["url"]
            etree.SubElement(url, f"{{{SITEMAP_NS}}}changefreq").text = changefreq
            etree.SubElement(url, f"{{{SITEMAP_NS}}}priority").text = f"{priority:.1f}"

        return root

    def run(self, model: Model) -> Model:
        root = self.build(model.get_pages())

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        sitemap_path = self.cache_dir / SITEMAP_FILE_NAME
        sitemap_path.write_bytes(
            etree.tostring(
                root,
                xml_declaration=True,
                encoding="UTF-8",
                pretty_print=True,
            )
        )
        logger.info(f"Wrote sitemap with {len(root)} urls to {sitemap_path}")
        return model
