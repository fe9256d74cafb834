"""
Parse-mode configuration for the weighted sequence reader.

A :class:`ParseOptions` value is passed to every read call, so two parses
never influence each other through shared state.
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_STRICT = True
DEFAULT_GAP = False
DEFAULT_TOLERANCE = 0.0


class ParseOptions(BaseModel):
    """Pydantic model for the reader's parse modes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strict: bool = Field(
        default=DEFAULT_STRICT,
        description="Reject any position whose probabilities do not sum to 1 within tolerance.",
    )
    gap: bool = Field(
        default=DEFAULT_GAP,
        description="Use the last character of the alphabet as the sequence gap.",
    )
    tolerance: float = Field(
        default=DEFAULT_TOLERANCE,
        ge=0.0,
        description="Allowed deviation of each position's total mass from 1.",
    )

    def with_changes(self, **changes) -> "ParseOptions":
        """Return a validated copy with the given fields replaced."""
        return type(self).model_validate({**self.model_dump(), **changes})

    def as_strict(self) -> "ParseOptions":
        return self.with_changes(strict=True)

    def as_lenient(self) -> "ParseOptions":
        return self.with_changes(strict=False)

    def with_gap(self) -> "ParseOptions":
        return self.with_changes(gap=True)

    def without_gap(self) -> "ParseOptions":
        return self.with_changes(gap=False)

    def with_tolerance(self, tolerance: float) -> "ParseOptions":
        return self.with_changes(tolerance=tolerance)
