"""Normalization of submitted cache settings into a ``PolicyConfig``.

Runs once when a view's cache settings are saved. Tags and contexts are
entered one per line; a leading ``-`` marks an entry to exclude::

    vact:node_list:article
    - node_list

Lifetimes arrive as a selector per slot (a preset number of seconds or
``"custom"``) plus an optional custom number of seconds.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from advanced_view_cache.exceptions import PolicyConfigError
from advanced_view_cache.lifetime import format_interval, resolve
from advanced_view_cache.models.lifetime import PERMANENT, PRESET_CATALOG, LifetimeSpec
from advanced_view_cache.models.policy import CUSTOM_OPTION, LifetimeSlot, PolicyConfig
from advanced_view_cache.models.validation import PolicyValidationError

_LINE_BREAK = re.compile(r"\r\n|[\r\n]+")

EXCLUDE_PREFIX = "-"


def parse_entries(text: str | None) -> tuple[frozenset[str], frozenset[str]]:
    """Split multi-line input into included and excluded entries.

    Lines are trimmed and blank lines dropped. A line starting with ``-``
    is an exclusion; the prefix and any whitespace after it are removed.

    Returns:
        A ``(include, exclude)`` pair.
    """
    include: set[str] = set()
    exclude: set[str] = set()
    for line in _LINE_BREAK.split(text or ""):
        entry = line.strip()
        if not entry:
            continue
        if entry.startswith(EXCLUDE_PREFIX):
            excluded = entry.lstrip(EXCLUDE_PREFIX + " \t")
            if excluded:
                exclude.add(excluded)
        else:
            include.add(entry)
    return frozenset(include), frozenset(exclude)


def render_entries(include: frozenset[str] | set[str], exclude: frozenset[str] | set[str]) -> str:
    """Render entries back into the multi-line form accepted by ``parse_entries``."""
    lines = sorted(include) + [f"{EXCLUDE_PREFIX} {entry}" for entry in sorted(exclude)]
    return "\n".join(lines)


def _parse_number(value: Any) -> int | None:
    """Return ``value`` as an int if it is numeric, else None.

    Accepts ints, finite floats and numeric strings; floats are truncated.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if math.isfinite(number) else None
    return None


def _parse_lifetime(
    form: Mapping[str, Any],
    slot: LifetimeSlot,
    errors: list[PolicyValidationError],
) -> LifetimeSpec | None:
    selector_field = f"{slot}_lifespan"
    custom_field = f"{slot}_lifespan_custom"
    selected = form.get(selector_field, PERMANENT)
    if selected is None or selected == "":
        selected = PERMANENT

    if selected == CUSTOM_OPTION:
        seconds = _parse_number(form.get(custom_field))
        if seconds is None:
            errors.append(
                PolicyValidationError(
                    field=custom_field, message="Custom time values must be numeric."
                )
            )
            return None
        if seconds < PERMANENT:
            errors.append(
                PolicyValidationError(
                    field=custom_field,
                    message="Custom time values must be -1 or a non-negative number.",
                )
            )
            return None
        return LifetimeSpec.custom(seconds)

    seconds = _parse_number(selected)
    if seconds is None or seconds not in PRESET_CATALOG:
        errors.append(
            PolicyValidationError(
                field=selector_field, message=f"{selected!r} is not a valid lifespan option."
            )
        )
        return None
    return LifetimeSpec.preset(seconds)


def validate_lifetimes(
    results: LifetimeSpec, output: LifetimeSpec
) -> list[PolicyValidationError]:
    """Check that the output cache cannot outlive the results it renders."""
    results_seconds = resolve(results)
    output_seconds = resolve(output)
    if results_seconds >= 0 and output_seconds >= 0 and output_seconds > results_seconds:
        return [
            PolicyValidationError(
                field="output_lifespan",
                message="Output lifespan must not be greater than results lifespan.",
            )
        ]
    return []


def normalize(
    raw_tags_text: str | None,
    raw_contexts_text: str | None,
    raw_lifetime_form: Mapping[str, Any] | None = None,
) -> tuple[PolicyConfig, list[PolicyValidationError]]:
    """Normalize submitted cache settings.

    Parameters:
        raw_tags_text: Cache tags, one per line, ``-`` prefixed to exclude.
        raw_contexts_text: Cache contexts, one per line, ``-`` prefixed to exclude.
        raw_lifetime_form: Mapping with ``results_lifespan``,
            ``results_lifespan_custom``, ``output_lifespan`` and
            ``output_lifespan_custom``.

    Returns:
        The normalized config and a list of validation errors. When the list
        is non-empty the settings must not be saved; rejected lifetime slots
        fall back to permanent in the returned config.
    """
    form = raw_lifetime_form or {}
    errors: list[PolicyValidationError] = []

    cache_tags, cache_tags_exclude = parse_entries(raw_tags_text)
    cache_contexts, cache_contexts_exclude = parse_entries(raw_contexts_text)

    results = _parse_lifetime(form, "results", errors)
    output = _parse_lifetime(form, "output", errors)
    if results is not None and output is not None:
        errors.extend(validate_lifetimes(results, output))

    config = PolicyConfig(
        cache_tags=cache_tags,
        cache_tags_exclude=cache_tags_exclude,
        cache_contexts=cache_contexts,
        cache_contexts_exclude=cache_contexts_exclude,
        results_lifetime=results if results is not None else LifetimeSpec.permanent(),
        output_lifetime=output if output is not None else LifetimeSpec.permanent(),
    )
    return config, errors


def normalize_or_raise(
    raw_tags_text: str | None,
    raw_contexts_text: str | None,
    raw_lifetime_form: Mapping[str, Any] | None = None,
) -> PolicyConfig:
    """Like :func:`normalize`, but raise ``PolicyConfigError`` on any error."""
    config, errors = normalize(raw_tags_text, raw_contexts_text, raw_lifetime_form)
    if errors:
        raise PolicyConfigError(errors)
    return config


def summary_title(config: PolicyConfig) -> str:
    """Summarize a policy in one line, e.g. ``"2 tags | 1 contexts | 1 hour/5 min"``."""
    parts: list[str] = []
    num_tags = len(config.cache_tags) + len(config.cache_tags_exclude)
    if num_tags:
        parts.append(f"{num_tags} tags")
    num_contexts = len(config.cache_contexts) + len(config.cache_contexts_exclude)
    if num_contexts:
        parts.append(f"{num_contexts} contexts")

    results = resolve(config.results_lifetime)
    output = resolve(config.output_lifetime)
    if results >= 0 or output >= 0:
        parts.append(f"{_short_interval(results)}/{_short_interval(output)}")
    return " | ".join(parts) or "Always cache"


def _short_interval(seconds: int) -> str:
    if seconds == PERMANENT:
        return "permanent"
    return format_interval(seconds, granularity=1)
