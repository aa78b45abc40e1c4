"""Pytest fixtures for gorshochek tests."""

import json

import pytest


@pytest.fixture
def cache_dir(tmp_path):
    """Create a temporary cache directory."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def old_pages():
    """Pages of a previous build."""
    return [
        {"url": "/url1", "a": "a1", "b": 1, "c": {"c1": "c11", "c2": "c21"}},
        {"url": "/url2", "a": "a2", "b": 2, "c": {"c1": "c12", "c2": "c22"}},
        {"url": "/url3", "a": "a3", "b": 3, "c": {"c1": "c13", "c2": "c23"}},
    ]


@pytest.fixture
def new_pages():
    """Pages of the current declaration: url1 same, url3 changed, url4 new."""
    return [
        {"url": "/url1", "a": "a1", "b": 1, "c": {"c1": "c11", "c2": "c21"}},
        {"url": "/url3", "a": "b3", "b": 3, "c": {"c1": "c13", "c2": "d23"}},
        {"url": "/url4", "a": "b4", "b": 4, "c": {"c1": "c14", "c2": "d24"}},
    ]


@pytest.fixture
def site_pages():
    """A small documentation site declaration."""
    return [
        {"url": "/", "title": "Home", "tags": ["index1", "index2"], "sourceUrl": "docs/README.md"},
        {"url": "/docs", "title": "Docs", "sourceUrl": "docs/guide/README.md"},
        {"url": "/docs/intro", "title": "Intro", "sourceUrl": "docs/guide/intro.md"},
    ]


@pytest.fixture
def site_dir(tmp_path, site_pages):
    """Write the site declaration and its markdown sources to disk."""
    root = tmp_path / "site"
    (root / "docs" / "guide").mkdir(parents=True)
    (root / "docs" / "README.md").write_text(
        "# Home\n\nSee the [guide](guide/README.md).\n"
    )
    (root / "docs" / "guide" / "README.md").write_text(
        "# Docs\n\nStart with the [intro](intro.md#setup).\n"
    )
    (root / "docs" / "guide" / "intro.md").write_text(
        "# Intro\n\n## Setup\n\nBack [home](../README.md).\n"
    )
    (root / "model.json").write_text(json.dumps(site_pages, indent=2))
    return root


@pytest.fixture
def model_file(tmp_path, new_pages):
    """Write a declarative model file holding ``new_pages``."""
    path = tmp_path / "model.json"
    path.write_text(json.dumps(new_pages))
    return path
