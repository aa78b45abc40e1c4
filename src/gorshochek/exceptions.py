"""Custom exceptions for the build pipeline."""


class GorshochekError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigError(GorshochekError):
    """Raised when the build configuration is missing or invalid."""

    pass


class ModelError(GorshochekError):
    """Raised when pages handed to the model are malformed."""

    pass


class DuplicateUrlError(ModelError):
    """Raised when one page list contains the same url twice."""

    def __init__(self, url: str, message: str | None = None):
        self.url = url
        super().__init__(message or f"Duplicate page url: {url}")


class PageTaskError(GorshochekError):
    """Raised when a task fails to process a single page.

    Attributes:
        url: Url of the page that failed
        task: Name of the task that was running
    """

    def __init__(self, url: str, task: str, message: str):
        self.url = url
        self.task = task
        super().__init__(f"{task} failed for page {url}: {message}")


class SourceError(GorshochekError):
    """Raised when a page source cannot be loaded."""

    pass
