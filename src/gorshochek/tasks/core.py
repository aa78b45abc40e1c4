"""Core tasks: merging, normalizing, saving and publishing the model."""

import fnmatch
import logging
import shutil
from pathlib import Path

from gorshochek.model import Model
from gorshochek.storage import (
    DECLARATION_FILE_NAME,
    MODEL_FILE_NAME,
    load_pages,
    save_model,
    save_pages,
)

from .task import Task

logger = logging.getLogger(__name__)


class MergeModels(Task):
    """Merge the declarative model file with the one declared last time.

    The previous declaration is read from ``declaration.json`` in the cache
    directory and may be absent on a first build. Comparing declarations
    rather than the built model keeps fields filled in by later tasks from
    showing up as modifications. After a successful merge the new
    declaration becomes the baseline of the next one.

    Attributes:
        model_path: Path to the declarative model (JSON array of pages)
        cache_dir: Cache directory holding the declaration baseline
    """

    name = "merge models"

    def __init__(self, model_path: Path, cache_dir: Path):
        self.model_path = model_path
        self.cache_dir = cache_dir

    def run(self, model: Model) -> Model:
        baseline = self.cache_dir / DECLARATION_FILE_NAME
        old_pages = load_pages(baseline, missing_ok=True)
        new_pages = load_pages(self.model_path)
        logger.info(
            f"Merging {len(new_pages)} declared pages into {len(old_pages)} cached pages"
        )
        model = model.merge(old_pages, new_pages)
        save_pages(new_pages, baseline)
        return model


class NormalizeModel(Task):
    """Fill default values for optional page fields."""

    name = "normalize model"

    def run(self, model: Model) -> Model:
        return model.normalize()


class SaveModel(Task):
    """Persist pages and changes to ``model.json`` in the cache directory."""

    name = "save model"

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir

    def run(self, model: Model) -> Model:
        save_model(model, self.cache_dir / MODEL_FILE_NAME)
        return model


class Publish(Task):
    """Copy the built cache tree into the data directory.

    Files matching any of the exclude globs (by file name or by path relative
    to the cache directory) are skipped, as are files whose size and
    modification time already match the copy in the destination.

    Attributes:
        cache_dir: Source directory
        data_dir: Destination directory
        exclude: Glob patterns of files not to publish
    """

    name = "publish"

    def __init__(self, cache_dir: Path, data_dir: Path, exclude: list[str] | None = None):
        self.cache_dir = cache_dir
        self.data_dir = data_dir
        self.exclude = list(exclude or [])

    def is_excluded(self, relative_path: Path) -> bool:
        posix = relative_path.as_posix()
        return any(
            fnmatch.fnmatch(relative_path.name, pattern) or fnmatch.fnmatch(posix, pattern)
            for pattern in self.exclude
        )

    def run(self, model: Model) -> Model:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        copied = skipped = 0

        for src in sorted(self.cache_dir.rglob("*")):
            if not src.is_file():
                continue
            relative_path = src.relative_to(self.cache_dir)
            if self.is_excluded(relative_path):
                continue

            dst = self.data_dir / relative_path
            if self._is_up_to_date(src, dst):
                skipped += 1
                continue

            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
            copied += 1
            logger.debug(f"Published {relative_path}")

        logger.info(
            f"Published {copied} files to {self.data_dir} ({skipped} unchanged)"
        )
        return model

    @staticmethod
    def _is_up_to_date(src: Path, dst: Path) -> bool:
        if not dst.exists():
            return False
        src_stat = src.stat()
        dst_stat = dst.stat()
        return (
            src_stat.st_size == dst_stat.st_size
            and int(src_stat.st_mtime) == int(dst_stat.st_mtime)
        )
