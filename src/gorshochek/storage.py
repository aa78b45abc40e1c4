"""Reading and writing the content cache and persisted model files."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from gorshochek.exceptions import ModelError
from gorshochek.model import Model
from gorshochek.schemas import ModelDocument, validate_page

logger = logging.getLogger(__name__)

MODEL_FILE_NAME = "model.json"
DECLARATION_FILE_NAME = "declaration.json"


def read_cache_file(cache_dir: Path, relative_path: str) -> str:
    """Read a text file from the cache directory."""
    return (cache_dir / relative_path).read_text(encoding="utf-8")


def write_cache_file(cache_dir: Path, relative_path: str, content: str) -> Path:
    """Write a text file into the cache directory, creating parent dirs.

    Returns:
        Absolute path of the written file
    """
    path = cache_dir / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote cache file {path}")
    return path


def page_directory(url: str) -> str:
    """Return the cache-relative directory that holds a page's files.

    Examples:
        >>> page_directory("/")
        '.'
        >>> page_directory("/docs/intro/")
        'docs/intro'
    """
    return url.strip("/") or "."


def load_pages(path: Path, missing_ok: bool = False) -> list[dict]:
    """Load and validate the pages of a model file.

    Accepts both a bare JSON array of pages and a persisted model document
    with a ``pages`` key.

    Args:
        path: Path to the model file
        missing_ok: Return an empty list instead of failing when the file
            does not exist

    Returns:
        List of page dicts in file order

    Raises:
        ModelError: If the file is missing, not JSON, or pages are invalid
    """
    if not path.exists():
        if missing_ok:
            logger.debug(f"No model file at {path}, starting empty")
            return []
        raise ModelError(f"Model file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ModelError(f"Model file is not valid JSON: {path}: {e}") from e

    if isinstance(data, dict):
        try:
            ModelDocument.model_validate(data)
        except ValidationError as e:
            raise ModelError(f"Invalid model file {path}: {e}") from e
        raw_pages = data.get("pages", [])
    elif isinstance(data, list):
        raw_pages = data
    else:
        raise ModelError(f"Model file must hold a list of pages: {path}")

    pages = []
    for page in raw_pages:
        if not isinstance(page, dict):
            raise ModelError(f"Invalid page in {path}: {page!r}")
        try:
            pages.append(validate_page(page))
        except ValidationError as e:
            raise ModelError(f"Invalid page in {path}: {e}") from e
    return pages


def save_model(model: Model, path: Path) -> Path:
    """Write the model's pages and changes to ``path`` as JSON."""
    document = {
        "pages": model.get_pages(),
        "changes": model.changes.to_change_log().model_dump(mode="json"),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Saved model with {len(model.get_pages())} pages to {path}")
    return path


def save_pages(pages: list[dict], path: Path) -> Path:
    """Write ``pages`` to ``path`` as a bare JSON array."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(pages, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug(f"Saved {len(pages)} pages to {path}")
    return path
