"""Runtime input validation for the constellation pipeline.

Only the basic shape of GPS input is checked: a path must be a sequence of
numeric (latitude, longitude) pairs or a numpy array of shape (N, 2).
Coordinates are not range-checked and no geographic sanity checks are made.

Usage:
    validate_path([[38.5, -120.2], [40.7, -120.95]])
    validate_tolerance(0.0002)
"""

import math
from numbers import Real
from typing import Any, Callable, List, Sequence, Union

import numpy as np

from .exceptions import ConfigurationError, InvalidPathError

__all__ = [
    "validate_point",
    "validate_path",
    "validate_non_negative",
    "validate_tolerance",
    "validate_positive",
    "validate_in_range",
    "ValidationContext",
]


def _is_number(value: Any) -> bool:
    # bool is a Real subclass but never a coordinate
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_point(point: Any, index: int = None) -> None:
    """
    Validate a single (lat, lng) point.

    Args:
        point: Candidate point
        index: Position of the point within its path, for error messages

    Raises:
        InvalidPathError: If the point is not a pair of finite numbers
    """
    if isinstance(point, np.ndarray):
        if point.ndim != 1:
            raise InvalidPathError("Point must be a [lat, lng] pair", index=index)
    elif isinstance(point, (str, bytes)) or not isinstance(point, Sequence):
        raise InvalidPathError("Point must be a [lat, lng] pair", index=index)

    if len(point) != 2:
        raise InvalidPathError(
            f"Point must have exactly 2 coordinates, got {len(point)}", index=index
        )

    for value in point:
        if not _is_number(value):
            raise InvalidPathError(
                f"Coordinate must be numeric, got {type(value).__name__}", index=index
            )
        if not math.isfinite(value):
            raise InvalidPathError(f"Coordinate must be finite, got {value}", index=index)


def validate_path(path: Any) -> None:
    """
    Validate that a path is a sequence of (lat, lng) pairs.

    Args:
        path: Candidate path

    Raises:
        InvalidPathError: If the path or any of its points is malformed
    """
    if isinstance(path, np.ndarray):
        if path.ndim != 2 or path.shape[1] != 2:
            raise InvalidPathError(f"Path array must have shape (N, 2), got {path.shape}")
    elif isinstance(path, (str, bytes)) or not isinstance(path, Sequence):
        raise InvalidPathError(
            f"Path must be a sequence of points, got {type(path).__name__}"
        )

    for index, point in enumerate(path):
        validate_point(point, index=index)


def validate_non_negative(value: Union[int, float], name: str = "value") -> None:
    """
    Validate that a number is zero or positive.

    Args:
        value: Number to check
        name: Name of the value for error message

    Raises:
        ConfigurationError: If value is negative, NaN or not a number
    """
    if not _is_number(value) or math.isnan(value):
        raise ConfigurationError(f"{name} must be a number, got {value!r}", config_key=name)
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value}", config_key=name)


def validate_tolerance(tolerance: Union[int, float]) -> None:
    """
    Validate a simplification tolerance.

    Args:
        tolerance: Maximum perpendicular deviation in degrees

    Raises:
        ConfigurationError: If the tolerance is negative or not a number
    """
    validate_non_negative(tolerance, "tolerance")


def validate_positive(value: Union[int, float], name: str = "value") -> None:
    """
    Validate that a number is positive.

    Args:
        value: Number to check
        name: Name of the value for error message

    Raises:
        ConfigurationError: If value is not positive
    """
    if not _is_number(value) or not value > 0:
        raise ConfigurationError(f"{name} must be positive, got {value}", config_key=name)


def validate_in_range(
    value: Union[int, float],
    min_val: Union[int, float],
    max_val: Union[int, float],
    name: str = "value",
) -> None:
    """
    Validate that a number is within a range.

    Args:
        value: Number to check
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
        name: Name of the value for error message

    Raises:
        ConfigurationError: If value is out of range
    """
    if not (min_val <= value <= max_val):
        raise ConfigurationError(
            f"{name} must be in range [{min_val}, {max_val}], got {value}",
            config_key=name,
        )


class ValidationContext:
    """Context manager for validation error collection.

    Collects multiple validation errors and raises them together.

    Example:
        with ValidationContext("Loading galaxy settings") as ctx:
            ctx.validate(width, lambda v: validate_positive(v, "width"), "width")
            ctx.validate(padding, lambda v: validate_in_range(v, 0, 500), "padding")
    """

    def __init__(self, operation: str):
        """Initialize validation context.

        Args:
            operation: Description of the operation being validated
        """
        self.operation = operation
        self.errors: List[str] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Raise ConfigurationError if any errors were collected."""
        if exc_type is None and self.errors:
            error_msg = f"{self.operation} failed:\n" + "\n".join(
                f"  - {err}" for err in self.errors
            )
            raise ConfigurationError(error_msg)
        return False

    def validate(self, value: Any, validator: Callable[[Any], None], name: str) -> None:
        """
        Run a validator and collect any errors.

        Args:
            value: Value to validate
            validator: Validation function to call
            name: Name for error messages
        """
        try:
            validator(value)
        except (ConfigurationError, InvalidPathError) as e:
            self.errors.append(f"{name}: {e}")
