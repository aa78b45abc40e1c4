"""Tests for the Changes accumulator."""

import pytest

from gorshochek.model import Changes
from gorshochek.schemas import ChangeType


class TestChanges:
    """Tests for Changes."""

    def test_empty(self):
        """A new Changes has no entries."""
        changes = Changes()

        assert changes.has_changes() is False
        assert changes.added == ()
        assert changes.modified == ()
        assert changes.removed == ()

    def test_entry_shape(self):
        """Entries carry the page type and url."""
        assert Changes.entry("/url1") == {"type": "page", "url": "/url1"}
        assert Changes.entry("/url1")["type"] == ChangeType.PAGE

    def test_push_keeps_order(self):
        """Entries keep the order they were pushed in."""
        changes = Changes()
        changes.push_change_to_added_group("/b")
        changes.push_change_to_added_group("/a")

        assert [e["url"] for e in changes.added] == ["/b", "/a"]

    def test_groups_are_independent(self):
        """Pushing to one group leaves the others empty."""
        changes = Changes()
        changes.push_change_to_removed_group("/url1")

        assert changes.added == ()
        assert changes.modified == ()
        assert changes.removed == ({"type": "page", "url": "/url1"},)
        assert changes.has_changes() is True

    def test_extend(self):
        """extend appends batches to every group."""
        changes = Changes()
        changes.extend(added=["/a"], modified=["/m"], removed=["/r"])

        assert [e["url"] for e in changes.added] == ["/a"]
        assert [e["url"] for e in changes.modified] == ["/m"]
        assert [e["url"] for e in changes.removed] == ["/r"]

    def test_get_changes_is_read_only(self):
        """The view returned by get_changes cannot be mutated."""
        changes = Changes()
        changes.push_change_to_added_group("/url1")
        view = changes.get_changes()

        with pytest.raises(TypeError):
            view["added"] = []
        with pytest.raises(AttributeError):
            view["added"].append({"type": "page", "url": "/url2"})

        assert len(changes.added) == 1

    def test_view_is_a_snapshot(self):
        """Later pushes do not show up in an earlier view."""
        changes = Changes()
        view = changes.get_changes()
        changes.push_change_to_added_group("/url1")

        assert view["added"] == ()

    def test_to_change_log(self):
        """Changes convert to the persisted schema."""
        changes = Changes()
        changes.push_change_to_modified_group("/url3")

        log = changes.to_change_log()

        assert log.model_dump(mode="json") == {
            "added": [],
            "modified": [{"type": "page", "url": "/url3"}],
            "removed": [],
        }

    def test_repr(self):
        """repr shows group sizes."""
        changes = Changes()
        changes.push_change_to_added_group("/url1")

        assert repr(changes) == "Changes(added=1, modified=0, removed=0)"
