"""
Error types shared by the analytics engine and the API layer.
"""
import math
from typing import Iterable, Optional


class ValidationError(ValueError):
    """A caller-supplied parameter is outside its documented range."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def validate_range(
    value: float,
    field: str,
    minimum: float,
    maximum: Optional[float] = None,
    message: Optional[str] = None,
) -> None:
    """Raise ValidationError unless value is finite and minimum <= value <= maximum."""
    out_of_range = (
        not math.isfinite(value)
        or value < minimum
        or (maximum is not None and value > maximum)
    )
    if out_of_range:
        if message is None:
            if maximum is None:
                message = f"{field} must be at least {minimum}"
            else:
                message = f"{field} must be between {minimum} and {maximum}"
        raise ValidationError(message, field=field)


def validate_choice(value: str, field: str, choices: Iterable[str]) -> None:
    """Raise ValidationError unless value is one of choices."""
    choices = tuple(choices)
    if value not in choices:
        raise ValidationError(
            f"{field} must be one of: {', '.join(choices)}",
            field=field,
        )
