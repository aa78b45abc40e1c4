"""Base classes for pipeline tasks.

Tasks transform the model between pipeline stages. There are two types:

- Task: Operates on the model as a whole (e.g., MergeModels, SaveModel)
- PageTask: Applies the same transformation to every matching page,
  processing up to ``concurrency`` pages at a time (e.g., TransformMdToHtml)
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from gorshochek.exceptions import PageTaskError
from gorshochek.model import Model

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 20


class Task(ABC):
    """Abstract base class for model-level tasks.

    Tasks are callables taking the model and returning it, so they can be
    chained by a Pipeline.
    """

    name: str = "task"

    def __call__(self, model: Model) -> Model:
        return self.run(model)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    @abstractmethod
    def run(self, model: Model) -> Model:
        """Transform the model.

        Args:
            model: The model to transform in place

        Returns:
            The same model
        """
        pass


class PageTask(Task):
    """Abstract base class for tasks that transform pages one by one.

    Each page is handled in isolation: ``process_page`` may only write to the
    page it is given and to that page's own files. Pages are processed
    concurrently in no particular order. The first failure cancels pages that
    have not started yet and is raised as a PageTaskError naming the page.

    Attributes:
        concurrency: Maximum number of pages processed at the same time
    """

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.concurrency = concurrency

    def matches(self, page: dict) -> bool:
        """Return True if the page should be processed by this task."""
        return True

    @abstractmethod
    def process_page(self, model: Model, page: dict) -> None:
        """Transform a single page in place.

        Args:
            model: The model the page belongs to (read only)
            page: The page to transform
        """
        pass

    def run(self, model: Model) -> Model:
        pages = [page for page in model.get_pages() if self.matches(page)]
        logger.debug(f"{self.name}: processing {len(pages)} pages")

        if self.concurrency == 1 or len(pages) <= 1:
            for page in pages:
                self._process_or_raise(model, page)
            return model

        with ThreadPoolExecutor(
            max_workers=self.concurrency, thread_name_prefix="gorshochek-page"
        ) as executor:
            futures = {
                executor.submit(self._process_or_raise, model, page): page
                for page in pages
            }
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    executor.shutdown(wait=False, cancel_futures=True)
                    raise error

        return model

    def _process_or_raise(self, model: Model, page: dict) -> None:
        url = page.get("url", "<unknown>")
        try:
            self.process_page(model, page)
        except Exception as e:
            logger.error(f"Error in {self.name} for page {url}: {e}")
            raise PageTaskError(url, self.name, str(e)) from e
