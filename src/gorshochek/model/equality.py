"""Structural equality for page records."""

from collections.abc import Mapping, Sequence


def deep_equal(a, b) -> bool:
    """Compare two values by structure rather than identity.

    Mappings are equal when they have the same keys and equal values (key
    order is ignored). Sequences are equal when they have the same length and
    equal items in the same order. Strings and bytes are compared as scalars.
    Booleans only equal booleans, so ``True`` and ``1`` differ.

    Examples:
        >>> deep_equal({"c": {"c1": "x", "c2": "y"}}, {"c": {"c2": "y", "c1": "x"}})
        True
        >>> deep_equal({"tags": ["a", "b"]}, {"tags": ["b", "a"]})
        False
    """
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not deep_equal(value, b[key]):
                return False
        return True

    if _is_sequence(a) and _is_sequence(b):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if _is_sequence(a) or _is_sequence(b) or isinstance(a, Mapping) or isinstance(b, Mapping):
        return False

    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b

    return a == b


def _is_sequence(value) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
