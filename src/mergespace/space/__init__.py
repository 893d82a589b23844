"""Combinatorial resolution spaces."""

from mergespace.space.chain import ChainNode, ProductSpace
from mergespace.space.choice import LazyChoiceSet, ListChoiceSet, SizedChoiceSet
from mergespace.space.iterator import ProductIterator

__all__ = [
    "SizedChoiceSet",
    "ListChoiceSet",
    "LazyChoiceSet",
    "ChainNode",
    "ProductSpace",
    "ProductIterator",
]
