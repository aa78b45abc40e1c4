"""Tests for deep_equal."""

from gorshochek.model import deep_equal


class TestDeepEqual:
    """Tests for structural equality."""

    def test_equal_scalars(self):
        """Equal scalars compare equal."""
        assert deep_equal("a", "a")
        assert deep_equal(1, 1)
        assert deep_equal(None, None)

    def test_different_scalars(self):
        """Different scalars compare unequal."""
        assert not deep_equal("a", "b")
        assert not deep_equal(1, 2)

    def test_mapping_key_order_ignored(self):
        """Mappings with the same items in different order are equal."""
        assert deep_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_nested_mappings(self):
        """Nested mappings are compared recursively."""
        a = {"url": "/url1", "c": {"c1": "c11", "c2": {"deep": [1, 2]}}}
        b = {"url": "/url1", "c": {"c2": {"deep": [1, 2]}, "c1": "c11"}}

        assert deep_equal(a, b)

    def test_nested_mapping_difference(self):
        """A difference deep inside is detected."""
        a = {"c": {"c1": "c13", "c2": "c23"}}
        b = {"c": {"c1": "c13", "c2": "d23"}}

        assert not deep_equal(a, b)

    def test_missing_key(self):
        """Mappings with different keys are unequal."""
        assert not deep_equal({"a": 1}, {"a": 1, "b": 2})
        assert not deep_equal({"a": 1, "b": 2}, {"a": 1, "c": 2})

    def test_sequence_order_matters(self):
        """Sequences with reordered items are unequal."""
        assert deep_equal(["a", "b"], ["a", "b"])
        assert not deep_equal(["a", "b"], ["b", "a"])

    def test_list_and_tuple(self):
        """Lists and tuples with equal items compare equal."""
        assert deep_equal(["a", "b"], ("a", "b"))

    def test_sequence_length(self):
        """Sequences of different length are unequal."""
        assert not deep_equal([1], [1, 1])

    def test_string_is_not_sequence(self):
        """Strings are not compared item by item against lists."""
        assert not deep_equal("ab", ["a", "b"])

    def test_mapping_vs_sequence(self):
        """A mapping never equals a sequence."""
        assert not deep_equal({}, [])

    def test_bool_is_not_int(self):
        """True does not equal 1."""
        assert not deep_equal(True, 1)
        assert not deep_equal({"published": 0}, {"published": False})

    def test_int_and_float(self):
        """Numerically equal ints and floats are equal."""
        assert deep_equal(1, 1.0)

    def test_equal_copies_not_identical(self):
        """Distinct but equal objects compare equal."""
        assert deep_equal({"tags": ["x"]}, {"tags": ["x"]})
