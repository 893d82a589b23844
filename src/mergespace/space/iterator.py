"""ProductIterator - mixed-radix traversal of a ProductSpace."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from mergespace.space.chain import ChainNode, ProductSpace

T = TypeVar("T")


class _Wheel(Generic[T]):
    """One odometer digit: a restartable cursor over a node's choices."""

    def __init__(self, node: ChainNode[T]):
        self.node = node
        self.current: T | None = None
        self._values: Iterator[T] | None = None

    def restart(self) -> bool:
        """Rewind to the first candidate.

        Returns:
            False if the dimension has no candidates
        """
        self._values = self.node.choices.produce()
        return self.advance()

    def advance(self) -> bool:
        """Move to the next candidate.

        Returns:
            False if the candidates are exhausted
        """
        try:
            self.current = next(self._values)
        except StopIteration:
            return False
        return True


class ProductIterator(Generic[T]):
    """Odometer cursor over every point of a ProductSpace.

    The first point has every dimension at its first candidate.
    Each step advances the last dimension; when it runs out it
    restarts and carries into the one before it. A carry out of
    the first dimension ends the traversal.

    The cursor is private to one traversal. Calling next() after
    exhaustion raises StopIteration like any Python iterator;
    has_next() tells whether another point exists without
    consuming it.
    """

    def __init__(self, space: ProductSpace[T]):
        """Initialize ProductIterator.

        Args:
            space: Space to traverse
        """
        self._wheels = [_Wheel(node) for node in space.nodes()]
        self._started = False
        self._exhausted = not self._wheels
        self._pending: tuple[T, ...] | None = None

    def _reading(self) -> tuple[T, ...]:
        return tuple(wheel.current for wheel in self._wheels)

    def _turn(self) -> tuple[T, ...] | None:
        """Compute the next point, or None when exhausted."""
        if not self._started:
            self._started = True
            for wheel in self._wheels:
                if not wheel.restart():
                    return None
            return self._reading()

        for wheel in reversed(self._wheels):
            if wheel.advance():
                return self._reading()
            # Carry: this digit rolls over to its first candidate
            wheel.restart()
        return None

    def has_next(self) -> bool:
        """Whether another point remains to be returned."""
        if self._pending is None and not self._exhausted:
            self._pending = self._turn()
            if self._pending is None:
                self._exhausted = True
        return self._pending is not None

    def __next__(self) -> tuple[T, ...]:
        if not self.has_next():
            raise StopIteration
        combination, self._pending = self._pending, None
        return combination

    def __iter__(self) -> ProductIterator[T]:
        return self
