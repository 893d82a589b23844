"""Chains of choice sets and the product space they span."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar

from mergespace.space.choice import SizedChoiceSet
from mergespace.space.iterator import ProductIterator

T = TypeVar("T")


class ChainNode(Generic[T]):
    """One dimension of a ProductSpace, linked to its neighbours."""

    def __init__(self, choices: SizedChoiceSet[T]):
        """Initialize ChainNode.

        Args:
            choices: Candidates for this dimension
        """
        self.choices = choices
        self.previous: ChainNode[T] | None = None
        self.next: ChainNode[T] | None = None

    def connect(self, node: ChainNode[T]) -> ChainNode[T]:
        """Make node the successor of this one.

        Returns:
            The connected node, so connections can be chained
        """
        self.next = node
        node.previous = self
        return node

    def size(self) -> int:
        return self.choices.size()

    def __repr__(self) -> str:
        return f"ChainNode({self.choices!r})"


class ProductSpace(Generic[T]):
    """Cartesian product of an ordered chain of choice sets.

    Dimensions are ordered as connected. A point of the space is a
    tuple holding one candidate per dimension; traverse() visits
    them as a mixed-radix counter whose last dimension turns
    fastest.

    Sizes are Python ints, so the product is exact however large
    it gets.
    """

    def __init__(self, choice_sets: Sequence[SizedChoiceSet[T]] = ()):
        """Initialize ProductSpace.

        Args:
            choice_sets: Dimensions to connect, in order
        """
        self.head: ChainNode[T] | None = None
        self.tail: ChainNode[T] | None = None
        self._dimensions = 0
        for choices in choice_sets:
            self.connect(choices)

    def connect(self, choices: SizedChoiceSet[T]) -> ChainNode[T]:
        """Append a dimension at the end of the chain.

        Args:
            choices: Candidates for the new dimension

        Returns:
            The node wrapping choices
        """
        node = ChainNode(choices)
        if self.tail is None:
            self.head = node
        else:
            self.tail.connect(node)
        self.tail = node
        self._dimensions += 1
        return node

    def nodes(self) -> Iterator[ChainNode[T]]:
        """Iterate over the chain from first to last dimension."""
        node = self.head
        while node is not None:
            yield node
            node = node.next

    @property
    def dimensions(self) -> int:
        """Number of connected dimensions."""
        return self._dimensions

    def size(self) -> int:
        """Number of points in the space.

        Returns:
            0 for an empty chain or when any dimension is empty,
            otherwise the product of all dimension sizes
        """
        if self.head is None:
            return 0

        total = 1
        for node in self.nodes():
            node_size = node.size()
            if node_size == 0:
                return 0
            total *= node_size
        return total

    def traverse(self) -> ProductIterator[T]:
        """Return a new cursor positioned before the first point."""
        return ProductIterator(self)

    def __iter__(self) -> ProductIterator[T]:
        return self.traverse()

    def index_of(self, combination: Sequence[T]) -> int | None:
        """Rank of a point in traversal order.

        Looks each value up in its own dimension, so the cost is
        the sum of the dimension sizes rather than their product.

        Args:
            combination: One value per dimension, in chain order

        Returns:
            Zero-based rank, or None if combination is not a point
            of this space
        """
        if self.head is None or len(combination) != self._dimensions:
            return None

        rank = 0
        for node, value in zip(self.nodes(), combination):
            digit = node.choices.index_of(value)
            if digit is None:
                return None
            rank = rank * node.size() + digit
        return rank

    def combination_at(self, index: int) -> tuple[T, ...]:
        """Point at a given rank in traversal order.

        Args:
            index: Zero-based rank

        Returns:
            Tuple with one value per dimension

        Raises:
            IndexError: If index is outside [0, size())
        """
        size = self.size()
        if index < 0 or index >= size:
            raise IndexError(f"Index {index} out of range for size {size}")

        nodes = list(self.nodes())
        digits = []
        for node in reversed(nodes):
            index, digit = divmod(index, node.size())
            digits.append(digit)
        digits.reverse()

        values = []
        for node, digit in zip(nodes, digits):
            for position, value in enumerate(node.choices.produce()):
                if position == digit:
                    values.append(value)
                    break
        return tuple(values)

    def __repr__(self) -> str:
        return f"ProductSpace(dimensions={self._dimensions})"
