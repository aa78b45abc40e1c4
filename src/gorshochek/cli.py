"""Command-line interface for gorshochek."""

import argparse
import logging
import sys
from pathlib import Path

from gorshochek.config import DEFAULT_CACHE_DIR, BuildConfig, load_config, make_config
from gorshochek.model import Model
from gorshochek.pipeline import Builder, Pipeline
from gorshochek.storage import MODEL_FILE_NAME, load_pages
from gorshochek.tasks import CreateSitemapXml, MergeModels, NormalizeModel, SaveModel


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def resolve_config(args: argparse.Namespace) -> BuildConfig:
    """Build the configuration from an optional file plus CLI overrides."""
    overrides = {
        "model_path": args.model,
        "cache_dir": args.cache_dir,
        "data_dir": getattr(args, "data_dir", None),
        "concurrency": getattr(args, "concurrency", None),
        "host": getattr(args, "host", None),
    }
    if args.config is not None:
        return load_config(args.config, **overrides)
    return make_config({k: v for k, v in overrides.items() if v is not None})


def log_changes(logger: logging.Logger, model: Model) -> None:
    changes = model.get_changes()
    for group in ("added", "modified", "removed"):
        entries = changes[group]
        logger.info(f"  {group.capitalize()}: {len(entries)}")
        for entry in entries:
            logger.debug(f"    - {entry['url']}")


def build(args: argparse.Namespace) -> int:
    """Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = resolve_config(args)
        model = Builder(config).build()

        logger.info(f"Built site: {len(model.get_pages())} pages")
        log_changes(logger, model)
        logger.info(f"  Output: {config.data_dir}")
        return 0

    except Exception as e:
        logger.error(f"Build failed: {e}")
        return 1


def merge(args: argparse.Namespace) -> int:
    """Execute the merge command.

    Merges the declarative model into the cached one, normalizes it and
    saves the result without running any content tasks.
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = resolve_config(args)
        pipeline = Pipeline(
            Model(),
            [
                MergeModels(config.model_path, config.cache_dir),
                NormalizeModel(),
                SaveModel(config.cache_dir),
            ],
        )
        model = pipeline.run()

        logger.info(f"Merged model: {len(model.get_pages())} pages")
        log_changes(logger, model)
        return 0

    except Exception as e:
        logger.error(f"Merge failed: {e}")
        return 1


def sitemap(args: argparse.Namespace) -> int:
    """Execute the sitemap command against the cached model."""
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    cache_dir = args.cache_dir
    model_file = cache_dir / MODEL_FILE_NAME
    if not model_file.exists():
        logger.error(f"Model file not found: {model_file}")
        return 1

    try:
        model = Model().set_pages(load_pages(model_file))
        CreateSitemapXml(cache_dir, args.host)(model)
        return 0

    except Exception as e:
        logger.error(f"Failed to create sitemap: {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="gorshochek",
        description="Build static documentation sites from a page model",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    build_parser = subparsers.add_parser(
        "build",
        help="Build and publish the site",
        description="Merge the page model with the previous build, transform page content and publish the site.",
    )
    build_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON build configuration",
    )
    build_parser.add_argument(
        "--model",
        type=Path,
        default=None,
        help="Path to the declarative model file (overrides config)",
    )
    build_parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help=f"Cache directory (default: {DEFAULT_CACHE_DIR})",
    )
    build_parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Publish destination directory",
    )
    build_parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Number of pages processed at the same time",
    )
    build_parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Site base URL; enables sitemap generation",
    )
    build_parser.set_defaults(func=build)

    merge_parser = subparsers.add_parser(
        "merge",
        help="Merge the page model into the cached model",
        description="Merge the declarative page model with the cached model, report added, modified and removed pages, and save the result.",
    )
    merge_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON build configuration",
    )
    merge_parser.add_argument(
        "--model",
        type=Path,
        default=None,
        help="Path to the declarative model file (overrides config)",
    )
    merge_parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help=f"Cache directory (default: {DEFAULT_CACHE_DIR})",
    )
    merge_parser.set_defaults(func=merge)

    sitemap_parser = subparsers.add_parser(
        "sitemap",
        help="Write sitemap.xml for the cached model",
        description="Generate a sitemap.xml from the published pages of the cached model.",
    )
    sitemap_parser.add_argument(
        "--cache-dir",
        type=Path,
        default=DEFAULT_CACHE_DIR,
        help=f"Cache directory (default: {DEFAULT_CACHE_DIR})",
    )
    sitemap_parser.add_argument(
        "--host",
        type=str,
        required=True,
        help="Site base URL",
    )
    sitemap_parser.set_defaults(func=sitemap)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
