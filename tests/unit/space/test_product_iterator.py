"""Tests for ProductIterator traversal order and cursor behavior."""

import itertools

import pytest

from mergespace.space import LazyChoiceSet, ListChoiceSet, ProductSpace


def test_traversal_order_last_dimension_fastest():
    """A 2x3 space is visited in lexicographic order."""
    space = ProductSpace([ListChoiceSet(["a", "b"]), ListChoiceSet([1, 2, 3])])

    assert list(space.traverse()) == [
        ("a", 1), ("a", 2), ("a", 3),
        ("b", 1), ("b", 2), ("b", 3),
    ]


def test_traversal_matches_itertools_product():
    """Every point is visited exactly once, in product order."""
    dims = [["x", "y", "z"], [0, 1], ["p", "q", "r", "s"]]
    space = ProductSpace([ListChoiceSet(d) for d in dims])

    visited = list(space)

    assert visited == list(itertools.product(*dims))
    assert len(visited) == space.size()
    assert len(set(visited)) == space.size()


def test_single_dimension_traversal():
    """A one-dimensional space yields 1-tuples in order."""
    space = ProductSpace([ListChoiceSet([7, 8, 9])])

    assert list(space) == [(7,), (8,), (9,)]


def test_has_next_does_not_consume():
    """has_next() can be asked repeatedly without advancing."""
    space = ProductSpace([ListChoiceSet([1, 2])])
    cursor = space.traverse()

    assert cursor.has_next()
    assert cursor.has_next()
    assert next(cursor) == (1,)
    assert cursor.has_next()
    assert next(cursor) == (2,)
    assert not cursor.has_next()
    assert not cursor.has_next()


def test_next_after_exhaustion_raises():
    """next() on an exhausted cursor raises StopIteration."""
    space = ProductSpace([ListChoiceSet([1])])
    cursor = space.traverse()

    next(cursor)

    with pytest.raises(StopIteration):
        next(cursor)
    assert next(cursor, None) is None


def test_empty_space_cursor():
    """Cursors over empty spaces are exhausted from the start."""
    for space in (ProductSpace(), ProductSpace([ListChoiceSet([])])):
        cursor = space.traverse()
        assert not cursor.has_next()
        assert next(cursor, None) is None


def test_zero_dimension_in_the_middle():
    """An empty dimension after non-empty ones yields nothing."""
    space = ProductSpace([
        ListChoiceSet([1, 2]),
        ListChoiceSet([]),
    ])

    assert list(space) == []


def test_traversals_are_independent():
    """Two cursors over the same space do not share position."""
    space = ProductSpace([ListChoiceSet([1, 2]), ListChoiceSet(["a", "b"])])
    first = space.traverse()
    second = space.traverse()

    next(first)
    next(first)

    assert next(second) == (1, "a")
    assert next(first) == (2, "a")


def test_traversal_repeatable():
    """A fresh traversal replays the same sequence."""
    space = ProductSpace([ListChoiceSet("ab"), ListChoiceSet("cd")])

    assert list(space) == list(space)


def test_lazy_dimensions_generate_once():
    """Lazy dimensions are generated once even though they restart."""
    calls = []

    def generate():
        calls.append(1)
        return [0, 1, 2]

    space = ProductSpace([ListChoiceSet("ab"), LazyChoiceSet(generate)])

    assert len(list(space)) == 6
    assert calls == [1]


def test_iteration_protocol():
    """The cursor is its own iterator."""
    space = ProductSpace([ListChoiceSet([1])])
    cursor = space.traverse()

    assert iter(cursor) is cursor
