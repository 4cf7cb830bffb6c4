"""Helpers for building cache tag token transforms.

Token substitution itself belongs to the host environment; these helpers
only make it easy to assemble a ``TokenTransform`` from known values and to
list the placeholders a view offers.
"""

from __future__ import annotations

from collections.abc import Mapping

from advanced_view_cache.protocols.transform import TokenTransform

CURRENT_USER_TOKEN = "[current-user:uid]"


class ReplacementTransform:
    """Replaces literal placeholders with fixed values.

    Parameters:
        replacements: Mapping of placeholder to replacement, e.g.
            ``{"{{ raw_arguments.nid }}": "42"}``.
    """

    __slots__ = ("_replacements",)

    def __init__(self, replacements: Mapping[str, str]) -> None:
        # Longest placeholders first so one never clobbers a longer one it prefixes.
        self._replacements = tuple(
            sorted(replacements.items(), key=lambda kv: len(kv[0]), reverse=True)
        )

    def __call__(self, tag: str) -> str:
        for placeholder, value in self._replacements:
            if placeholder in tag:
                tag = tag.replace(placeholder, str(value))
        return tag

    def __repr__(self) -> str:
        return f"ReplacementTransform(placeholders={len(self._replacements)})"


class _ChainedTransform:
    __slots__ = ("_transforms",)

    def __init__(self, transforms: tuple[TokenTransform, ...]) -> None:
        self._transforms = transforms

    def __call__(self, tag: str) -> str:
        for transform in self._transforms:
            tag = transform(tag)
        return tag


def chain(*transforms: TokenTransform) -> TokenTransform:
    """Compose transforms, applying them left to right."""
    return _ChainedTransform(transforms)


def argument_replacements(
    arguments: Mapping[str, str],
    raw_arguments: Mapping[str, str] | None = None,
    current_user_id: int | str | None = None,
) -> dict[str, str]:
    """Build the placeholder mapping for a view execution.

    Parameters:
        arguments: Argument id to processed argument title.
        raw_arguments: Argument id to raw argument input.
        current_user_id: The current user's id, if known.
    """
    replacements = {f"{{{{ arguments.{arg} }}}}": str(value) for arg, value in arguments.items()}
    for arg, value in (raw_arguments or {}).items():
        replacements[f"{{{{ raw_arguments.{arg} }}}}"] = str(value)
    if current_user_id is not None:
        replacements[CURRENT_USER_TOKEN] = str(current_user_id)
    return replacements


def available_tokens(argument_labels: Mapping[str, str]) -> dict[str, dict[str, str]]:
    """List the replacement tokens available to a view's cache tags.

    Parameters:
        argument_labels: Argument id to human-readable argument label.

    Returns:
        Token group name mapped to ``{token: description}``.
    """
    tokens: dict[str, dict[str, str]] = {
        "current-user": {CURRENT_USER_TOKEN: "Current User: The current user id."},
    }
    if argument_labels:
        tokens["Arguments"] = {}
        for arg, label in argument_labels.items():
            tokens["Arguments"][f"{{{{ arguments.{arg} }}}}"] = f"{label} title"
            tokens["Arguments"][f"{{{{ raw_arguments.{arg} }}}}"] = f"{label} input"
    return tokens
