"""Lifetime resolution for the results and output cache slots.

A lifetime is ``-1`` (permanent), ``0`` (never cache) or a positive number
of seconds. Expiry is expressed as a cutoff timestamp counted backwards
from ``now``: cached data is valid only if it was created after the cutoff.
"""

from __future__ import annotations

from advanced_view_cache.models.lifetime import (
    PERMANENT,
    PRESET_LIFESPANS,
    LifetimeSpec,
)
from advanced_view_cache.models.policy import CUSTOM_OPTION

_INTERVAL_UNITS: tuple[tuple[int, str, str], ...] = (
    (31536000, "1 year", "{n} years"),
    (2592000, "1 month", "{n} months"),
    (604800, "1 week", "{n} weeks"),
    (86400, "1 day", "{n} days"),
    (3600, "1 hour", "{n} hours"),
    (60, "1 min", "{n} min"),
    (1, "1 sec", "{n} sec"),
)


def resolve(spec: LifetimeSpec) -> int:
    """Return the effective lifetime in seconds (``-1`` means permanent)."""
    return spec.seconds


def expiry_cutoff(spec: LifetimeSpec, now: int) -> int | None:
    """Return the timestamp at or before which cached data is stale.

    Parameters:
        spec: The lifetime to apply.
        now: Current timestamp in seconds, supplied by the caller.

    Returns:
        ``now - lifetime`` for finite lifetimes, or ``None`` for a
        permanent lifetime. A lifetime of 0 yields ``now`` itself.
    """
    lifetime = resolve(spec)
    if lifetime >= 0:
        return now - lifetime
    return None


def max_age(spec: LifetimeSpec) -> int:
    """Return the max-age for a lifetime, or ``PERMANENT``."""
    lifetime = resolve(spec)
    if lifetime >= 0:
        return lifetime
    return PERMANENT


def is_fresh(created: int, cutoff: int | None) -> bool:
    """Check whether data created at ``created`` is still valid for ``cutoff``."""
    return cutoff is None or created > cutoff


def format_interval(seconds: int, granularity: int = 2) -> str:
    """Format a number of seconds as a short human-readable interval.

    ``granularity`` limits how many adjacent units are shown, so
    ``format_interval(90061)`` is ``"1 day 1 hour"``. Non-positive input
    renders as ``"0 sec"``.
    """
    parts: list[str] = []
    remaining = seconds
    for unit, singular, plural in _INTERVAL_UNITS:
        if remaining >= unit:
            count = remaining // unit
            parts.append(singular if count == 1 else plural.format(n=count))
            remaining %= unit
            granularity -= 1
        elif parts:
            granularity -= 1
        if granularity <= 0:
            break
    return " ".join(parts) if parts else "0 sec"


def lifespan_options() -> dict[int | str, str]:
    """Return the selectable lifetime options with their labels."""
    options: dict[int | str, str] = {PERMANENT: "Always cache", 0: "Never cache"}
    for seconds in PRESET_LIFESPANS:
        options[seconds] = format_interval(seconds)
    options[CUSTOM_OPTION] = "Custom"
    return options
