"""In-memory model of the documentation site.

The model owns the ordered list of pages for one pipeline run together with
the changes found when the pages were merged with the previous run. Pages are
plain dicts; tasks mutate them in place.
"""

import logging
from collections.abc import Mapping

from gorshochek.exceptions import DuplicateUrlError, ModelError

from .changes import Changes
from .equality import deep_equal

logger = logging.getLogger(__name__)

DEFAULT_VIEW = "index"


class Model:
    """Ordered page collection plus its change log.

    Attributes:
        changes: Changes found by the last merge, or pushed by tasks
    """

    def __init__(self):
        self._pages: list[dict] = []
        self.changes = Changes()

    def __repr__(self) -> str:
        return f"Model(pages={len(self._pages)}, {self.changes!r})"

    def get_pages(self) -> list[dict]:
        return self._pages

    def set_pages(self, pages: list[dict]) -> "Model":
        self._pages = pages
        return self

    def get_page(self, url: str) -> dict | None:
        for page in self._pages:
            if page.get("url") == url:
                return page
        return None

    def get_changes(self):
        return self.changes.get_changes()

    def has_changes(self) -> bool:
        return self.changes.has_changes()

    def push_change_to_added_group(self, url: str) -> None:
        self.changes.push_change_to_added_group(url)

    def push_change_to_modified_group(self, url: str) -> None:
        self.changes.push_change_to_modified_group(url)

    def push_change_to_removed_group(self, url: str) -> None:
        self.changes.push_change_to_removed_group(url)

    def merge(self, old_pages: list[dict], new_pages: list[dict]) -> "Model":
        """Merge the pages of the previous run with the current declaration.

        Pages present in both lists keep their position from ``old_pages``;
        the old record is kept when both are deep-equal, otherwise the new
        record replaces it. Pages only in ``old_pages`` are dropped. Pages only
        in ``new_pages`` are appended in ``new_pages`` order.

        Nothing is committed unless both lists are valid.

        Args:
            old_pages: Pages of the previously persisted model
            new_pages: Pages of the new declarative model

        Returns:
            This model, for chaining

        Raises:
            ModelError: If either argument is not a list of pages with urls
            DuplicateUrlError: If a url appears twice in the same list
        """
        old_index = self._index_pages(old_pages, "old")
        new_index = self._index_pages(new_pages, "new")

        pages: list[dict] = []
        modified: list[str] = []
        removed: list[str] = []

        for url, old_page in old_index.items():
            new_page = new_index.get(url)
            if new_page is None:
                removed.append(url)
            elif deep_equal(old_page, new_page):
                pages.append(old_page)
            else:
                modified.append(url)
                pages.append(new_page)

        added = [url for url in new_index if url not in old_index]
        pages.extend(new_index[url] for url in added)

        self._pages = pages
        self.changes.extend(added=added, modified=modified, removed=removed)

        logger.info(
            f"Merged model: {len(added)} added, {len(modified)} modified, "
            f"{len(removed)} removed, {len(pages)} pages total"
        )
        return self

    def normalize(self) -> "Model":
        """Fill defaults for optional page fields that are absent.

        Explicit values, including ``published: False``, are left alone.

        Raises:
            ModelError: If a page is not a dict
        """
        for position, page in enumerate(self._pages):
            if not isinstance(page, dict):
                raise ModelError(f"page #{position} is not a dict")
        for page in self._pages:
            page.setdefault("aliases", [])
            page.setdefault("view", DEFAULT_VIEW)
            page.setdefault("published", True)
        return self

    @staticmethod
    def _index_pages(pages, label: str) -> dict[str, dict]:
        """Index pages by url, preserving their order."""
        if not isinstance(pages, list):
            raise ModelError(
                f"{label} pages must be a list, got {type(pages).__name__}"
            )

        index: dict[str, dict] = {}
        for position, page in enumerate(pages):
            if not isinstance(page, Mapping):
                raise ModelError(f"{label} page #{position} is not a mapping")
            url = page.get("url")
            if not isinstance(url, str) or not url:
                raise ModelError(f"{label} page #{position} has no url")
            if url in index:
                raise DuplicateUrlError(url, f"Duplicate url in {label} pages: {url}")
            index[url] = page
        return index
