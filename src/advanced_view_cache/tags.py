"""Set algebra for cache tags and cache contexts.

All operations return ``frozenset`` values. Iteration order of the result
is unspecified.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Literal, TypeAlias

from advanced_view_cache.exceptions import TokenSubstitutionError
from advanced_view_cache.protocols.transform import TokenTransform

logger = logging.getLogger(__name__)

OnTransformError: TypeAlias = Literal["keep", "raise"]


def union_all(sets: Iterable[Iterable[str]]) -> frozenset[str]:
    """Union any number of tag or context collections."""
    result: set[str] = set()
    for values in sets:
        result.update(values)
    return frozenset(result)


def merge(
    contributed: Iterable[Iterable[str]],
    extra: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> frozenset[str]:
    """Union every contributed set with ``extra``, then remove ``exclude``.

    Exclusion always wins: a value present in both ``extra`` and
    ``exclude`` is absent from the result.

    Parameters:
        contributed: Tag or context sets contributed by independent sources.
        extra: Values configured to be added unconditionally.
        exclude: Values configured to be removed after the union.

    Returns:
        The merged, deduplicated set.
    """
    return union_all([*contributed, extra]) - frozenset(exclude)


def substitute(
    tags: Iterable[str],
    transform: TokenTransform | None,
    on_error: OnTransformError = "keep",
) -> frozenset[str]:
    """Apply a token transform to every tag.

    A transform that raises, or returns something other than a string,
    leaves that tag unsubstituted. With ``on_error="raise"`` the failure
    is raised as :class:`TokenSubstitutionError` instead. Tags that
    substitute to an empty string are dropped.
    """
    if transform is None:
        return frozenset(tags)

    result: set[str] = set()
    for tag in tags:
        try:
            value = transform(tag)
            if not isinstance(value, str):
                msg = f"transform returned {type(value).__name__}, expected str"
                raise TypeError(msg)
        except Exception as exc:
            if on_error == "raise":
                raise TokenSubstitutionError(tag) from exc
            logger.warning(
                "Token substitution failed for cache tag %r; keeping it unsubstituted",
                tag,
                exc_info=True,
            )
            value = tag
        value = value.strip()
        if value:
            result.add(value)
        else:
            logger.debug("Cache tag %r substituted to an empty string; dropped", tag)
    return frozenset(result)
