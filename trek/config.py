"""Runtime configuration for the galaxy layout.

Defaults come from trek.constants and can be overridden through environment
variables:

    TREK_GALAXY_WIDTH    Width of the virtual galaxy canvas
    TREK_GALAXY_HEIGHT   Height of the virtual galaxy canvas
    TREK_GALAXY_PADDING  Gap kept between constellations and to the edge
    TREK_ITEM_WIDTH      Nominal constellation width
    TREK_ITEM_HEIGHT     Nominal constellation height
    TREK_SEED            Integer seed for reproducible layouts

Settings are validated up front so that a bad value fails with a clear
message instead of surfacing as odd placements later.
"""

import math
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from .constants import (
    GALAXY_WIDTH,
    GALAXY_HEIGHT,
    GALAXY_PADDING,
    CONSTELLATION_ITEM_WIDTH,
    CONSTELLATION_ITEM_HEIGHT,
)
from .exceptions import ConfigurationError
from .logger import logger
from .placement import VirtualCanvas

__all__ = [
    "GalaxySettings",
    "ConfigValidator",
    "load_settings",
    "validate_settings",
]

ENV_PREFIX = "TREK_"


@dataclass(frozen=True)
class GalaxySettings:
    """Dimensions and seed used to lay out the galaxy."""

    galaxy_width: float = GALAXY_WIDTH
    galaxy_height: float = GALAXY_HEIGHT
    padding: float = GALAXY_PADDING
    item_width: float = CONSTELLATION_ITEM_WIDTH
    item_height: float = CONSTELLATION_ITEM_HEIGHT
    seed: Optional[int] = None

    @property
    def canvas(self) -> VirtualCanvas:
        return VirtualCanvas(self.galaxy_width, self.galaxy_height, self.padding)


def _read_number(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Expected a number, got {raw!r}", config_key=ENV_PREFIX + name
        ) from e


def _read_seed(environ: Mapping[str, str]) -> Optional[int]:
    raw = environ.get(ENV_PREFIX + "SEED")
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Expected an integer, got {raw!r}", config_key=ENV_PREFIX + "SEED"
        ) from e


def load_settings(environ: Optional[Mapping[str, str]] = None) -> GalaxySettings:
    """
    Build settings from environment variables, falling back to defaults.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Raises:
        ConfigurationError: If a variable cannot be parsed or the resulting
            settings are invalid
    """
    if environ is None:
        environ = os.environ

    settings = GalaxySettings(
        galaxy_width=_read_number(environ, "GALAXY_WIDTH", GALAXY_WIDTH),
        galaxy_height=_read_number(environ, "GALAXY_HEIGHT", GALAXY_HEIGHT),
        padding=_read_number(environ, "GALAXY_PADDING", GALAXY_PADDING),
        item_width=_read_number(environ, "ITEM_WIDTH", CONSTELLATION_ITEM_WIDTH),
        item_height=_read_number(environ, "ITEM_HEIGHT", CONSTELLATION_ITEM_HEIGHT),
        seed=_read_seed(environ),
    )
    validate_settings(settings)
    return settings


class ConfigValidator:
    """Validates galaxy settings, collecting errors and warnings."""

    def __init__(self) -> None:
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_all(self, settings: GalaxySettings) -> Tuple[bool, List[str], List[str]]:
        """
        Run all validation checks.

        Returns:
            Tuple of (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []

        self._validate_dimensions(settings)
        if not self.errors:
            self._validate_fit(settings)
            self._validate_capacity(settings)

        return len(self.errors) == 0, self.errors, self.warnings

    def _validate_dimensions(self, settings: GalaxySettings) -> None:
        for name in ("galaxy_width", "galaxy_height", "item_width", "item_height"):
            value = getattr(settings, name)
            if not math.isfinite(value) or value <= 0:
                self.errors.append(f"{name} must be positive, got {value}")

        if not math.isfinite(settings.padding) or settings.padding < 0:
            self.errors.append(f"padding must be >= 0, got {settings.padding}")

    def _validate_fit(self, settings: GalaxySettings) -> None:
        """Items must fit inside the padded canvas."""
        if settings.item_width + 2 * settings.padding > settings.galaxy_width:
            self.errors.append(
                f"item_width {settings.item_width} plus padding does not fit "
                f"galaxy_width {settings.galaxy_width}"
            )
        if settings.item_height + 2 * settings.padding > settings.galaxy_height:
            self.errors.append(
                f"item_height {settings.item_height} plus padding does not fit "
                f"galaxy_height {settings.galaxy_height}"
            )

    def _validate_capacity(self, settings: GalaxySettings) -> None:
        """Warn when not even two items can be separated."""
        span_x = settings.galaxy_width - settings.item_width - 2 * settings.padding
        span_y = settings.galaxy_height - settings.item_height - 2 * settings.padding
        separation = math.hypot(settings.item_width, settings.item_height) + settings.padding
        if math.hypot(span_x, span_y) < separation:
            self.warnings.append(
                "Galaxy is too small to separate any two constellations, "
                "every placement after the first will overlap"
            )


def validate_settings(settings: GalaxySettings, fail_on_warnings: bool = False) -> None:
    """
    Validate settings and raise if they are unusable.

    Args:
        settings: Settings to check
        fail_on_warnings: If True, treat warnings as errors

    Raises:
        ConfigurationError: If validation fails
    """
    validator = ConfigValidator()
    is_valid, errors, warnings = validator.validate_all(settings)

    for warning in warnings:
        logger.warning(warning)

    if not is_valid or (fail_on_warnings and warnings):
        error_msg = "Configuration validation failed:\n"
        if errors:
            error_msg += "\nErrors:\n" + "\n".join(f"  • {err}" for err in errors)
        if fail_on_warnings and warnings:
            error_msg += "\nWarnings (treated as errors):\n" + "\n".join(
                f"  • {warn}" for warn in warnings
            )
        raise ConfigurationError(error_msg)
