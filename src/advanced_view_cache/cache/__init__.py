"""Reference cache backend that consumes computed cache descriptors."""

from .backend import InMemoryTaggedCache

__all__ = [
    "InMemoryTaggedCache",
]
