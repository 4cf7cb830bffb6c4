"""Custom exceptions for advanced-view-cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from advanced_view_cache.models.validation import PolicyValidationError

__all__ = [
    "AdvancedViewCacheError",
    "PolicyConfigError",
    "TokenSubstitutionError",
]


class AdvancedViewCacheError(Exception):
    """Base exception for all advanced-view-cache errors."""


class PolicyConfigError(AdvancedViewCacheError):
    """Submitted cache settings failed validation and must not be saved."""

    def __init__(self, errors: list[PolicyValidationError]) -> None:
        self.errors = list(errors)
        detail = "; ".join(str(e) for e in self.errors) or "invalid cache settings"
        super().__init__(detail)


class TokenSubstitutionError(AdvancedViewCacheError):
    """Raised when a tag token transform fails and the policy is ``"raise"``."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Token substitution failed for cache tag {tag!r}")
        self.tag = tag
