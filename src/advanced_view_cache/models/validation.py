"""Validation error records returned by configuration normalization."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PolicyValidationError(BaseModel):
    """A single problem found while normalizing submitted cache settings.

    ``field`` names the offending form element, for example
    ``"results_lifespan_custom"`` or ``"output_lifespan"``.
    """

    field: str
    message: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"
