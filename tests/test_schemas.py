"""Tests for schema definitions."""

import pytest
from pydantic import ValidationError

from gorshochek.schemas import (
    ChangeEntry,
    ChangeLog,
    ChangeType,
    ModelDocument,
    PageRecord,
    validate_page,
)


class TestPageRecord:
    """Tests for PageRecord."""

    def test_minimal_page(self):
        """A page only needs a url."""
        page = PageRecord.model_validate({"url": "/url1"})

        assert page.url == "/url1"
        assert page.aliases is None
        assert page.published is None

    def test_aliased_fields(self):
        """camelCase fields map onto snake_case attributes."""
        page = PageRecord.model_validate(
            {"url": "/", "contentFile": "index.md", "sourceUrl": "docs/README.md"}
        )

        assert page.content_file == "index.md"
        assert page.source_url == "docs/README.md"

    def test_extra_fields_allowed(self):
        """Unknown fields are accepted."""
        page = PageRecord.model_validate({"url": "/", "custom": {"x": 1}})

        assert page.model_extra == {"custom": {"x": 1}}

    def test_url_required(self):
        """A page without url is rejected."""
        with pytest.raises(ValidationError):
            PageRecord.model_validate({"title": "No url"})

    def test_empty_url_rejected(self):
        """An empty url is rejected."""
        with pytest.raises(ValidationError):
            PageRecord.model_validate({"url": ""})

    def test_tags_must_be_list(self):
        """tags must be a list of strings."""
        with pytest.raises(ValidationError):
            PageRecord.model_validate({"url": "/", "tags": "one"})


class TestValidatePage:
    """Tests for validate_page."""

    def test_returns_values_as_given(self):
        """validate_page returns the page unchanged."""
        data = {"url": "/", "published": False, "custom": [1, 2]}

        assert validate_page(data) == data

    def test_returns_copy(self):
        """validate_page returns a new dict."""
        data = {"url": "/"}

        assert validate_page(data) is not data

    def test_does_not_add_defaults(self):
        """validate_page does not fill optional fields."""
        assert validate_page({"url": "/"}) == {"url": "/"}


class TestChangeSchemas:
    """Tests for change log schemas."""

    def test_change_type_value(self):
        """ChangeType.PAGE serializes as 'page'."""
        assert ChangeType.PAGE.value == "page"
        assert ChangeType("page") is ChangeType.PAGE

    def test_change_entry_defaults_to_page(self):
        """ChangeEntry defaults to the page type."""
        entry = ChangeEntry(url="/url1")

        assert entry.model_dump(mode="json") == {"type": "page", "url": "/url1"}

    def test_unknown_change_type_rejected(self):
        """Unknown change types are rejected."""
        with pytest.raises(ValidationError):
            ChangeEntry(type="block", url="/url1")

    def test_change_log_defaults(self):
        """ChangeLog groups default to empty lists."""
        log = ChangeLog()

        assert log.added == [] and log.modified == [] and log.removed == []


class TestModelDocument:
    """Tests for ModelDocument."""

    def test_defaults(self):
        """An empty document has no pages and no changes."""
        document = ModelDocument()

        assert document.pages == []
        assert document.changes == ChangeLog()

    def test_validate(self):
        """A persisted document validates."""
        document = ModelDocument.model_validate({
            "pages": [{"url": "/"}],
            "changes": {"added": [{"type": "page", "url": "/"}]},
        })

        assert document.pages[0].url == "/"
        assert document.changes.added[0].url == "/"
