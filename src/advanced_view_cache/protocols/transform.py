"""Protocol definition for cache tag token transforms."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenTransform(Protocol):
    """Substitutes placeholders inside a templated cache tag.

    Supplied by the host environment, for example to turn
    ``"node:{{ raw_arguments.nid }}"`` into ``"node:42"`` for the current
    request. Plain functions of type ``(str) -> str`` satisfy it.
    """

    def __call__(self, tag: str) -> str:
        """Return ``tag`` with any placeholders replaced.

        Parameters:
            tag: A configured or contributed cache tag.

        Returns:
            The substituted tag.
        """
        ...
