"""SizedChoiceSet - one dimension of a resolution space."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class SizedChoiceSet(ABC, Generic[T]):
    """Ordered, finite, restartable collection of candidates.

    Every call to produce() starts a new pass over the same values
    in the same order, so an index into that order identifies one
    specific choice.
    """

    @abstractmethod
    def size(self) -> int:
        """Return the number of candidates produce() yields."""
        raise NotImplementedError

    @abstractmethod
    def produce(self) -> Iterator[T]:
        """Return a fresh iterator over the candidates."""
        raise NotImplementedError

    def __iter__(self) -> Iterator[T]:
        return self.produce()

    def index_of(self, value: T) -> int | None:
        """Position of the first candidate equal to value.

        Args:
            value: Candidate to look up

        Returns:
            Zero-based index in produce() order, or None if absent
        """
        for index, candidate in enumerate(self.produce()):
            if candidate == value:
                return index
        return None


class ListChoiceSet(SizedChoiceSet[T]):
    """Choice set over values that are already materialized."""

    def __init__(self, values: Iterable[T]):
        """Initialize ListChoiceSet.

        Args:
            values: Candidates, in the order they will be produced
        """
        self.values = tuple(values)

    def size(self) -> int:
        return len(self.values)

    def produce(self) -> Iterator[T]:
        return iter(self.values)

    def index_of(self, value: T) -> int | None:
        try:
            return self.values.index(value)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return f"ListChoiceSet({list(self.values)!r})"


class LazyChoiceSet(SizedChoiceSet[T]):
    """Choice set whose candidates are generated on first use.

    The generator runs at most once; its output is cached so that
    repeated passes agree with each other and with size().
    """

    def __init__(self, generator: Callable[[], Iterable[T]]):
        """Initialize LazyChoiceSet.

        Args:
            generator: Callable returning the candidates
        """
        self.generator = generator
        self._cache: tuple[T, ...] | None = None

    def _values(self) -> tuple[T, ...]:
        if self._cache is None:
            self._cache = tuple(self.generator())
        return self._cache

    def size(self) -> int:
        """Return the number of candidates (triggers generation)."""
        return len(self._values())

    def produce(self) -> Iterator[T]:
        return iter(self._values())

    @property
    def generated(self) -> bool:
        """Whether the generator has already run."""
        return self._cache is not None
