"""Planner configuration from YAML files.

Every tuning constant of the planner lives in ``PlannerSettings``. The
defaults reproduce the stock game behavior; a YAML file only needs the
values it changes, under a ``planner:`` section.

Typical usage example:
    from milehigh.core.config import ConfigLoader, PlannerSettings

    config = ConfigLoader.load("config/planner.yaml")
    settings = PlannerSettings.from_config(config)
    planner = Planner(settings=settings)
"""

import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Nested configuration data with dot-notation access.

    Examples:
        >>> config = ConfigLoader({"planner": {"landing_distance": 8}})
        >>> config.get("planner.landing_distance")
        8
        >>> config.get("planner.curve", default=0.2)
        0.2
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
        """
        self._data = data or {}

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Raises:
            ConfigError: If the file is missing, unreadable or not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value using dot notation, or ``default`` when absent."""
        value: Any = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value


@dataclass
class PlannerSettings:
    """Tuning constants of the planner.

    Attributes:
        prediction_time: Ticks aircraft are projected ahead for collision checks.
        box_scale: Collision box side as a multiple of the collision radius.
        landing_distance: Touchdown distance from the runway (exclusive).
        landing_alignment_deg: Largest heading deviation accepted at touchdown.
        approach_curve_t: Curve parameter of the approach waypoint.
        anchor_heading_deg: Heading offset at the landing anchor.
        control_point_time: Time units used to place inner curve control points.
        avoidance_turn_deg: Size of the evasive break turn.
        avoidance_time: Time units flown along the evasive heading.
        circle_point_count: Points on a holding circle.
        circle_lap_ticks: Ticks per holding lap, sets the circle radius.
        circle_advance_distance: Distance at which a circle point counts as reached.
        holding_enabled: Hold non-eligible aircraft on circles while another
            aircraft is cleared to land.
    """

    prediction_time: float = 2.0
    box_scale: float = 3.0
    landing_distance: float = 5.0
    landing_alignment_deg: float = 87.0
    approach_curve_t: float = 0.2
    anchor_heading_deg: float = 30.0
    control_point_time: float = 3.0
    avoidance_turn_deg: float = 90.0
    avoidance_time: float = 1.0
    circle_point_count: int = 32
    circle_lap_ticks: float = 50.0
    circle_advance_distance: float = 10.0
    holding_enabled: bool = False

    @classmethod
    def from_config(cls, config: ConfigLoader, section: str = "planner") -> "PlannerSettings":
        """Build settings from a configuration section.

        Missing keys keep their defaults, unknown keys are ignored.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        values = config.get(section, default={}) or {}
        if not isinstance(values, dict):
            raise ConfigError(f"Configuration key is not a section: {section}")

        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in values:
                continue
            kwargs[f.name] = cls._coerce(f.name, f.type, values[f.name])

        unknown = sorted(set(values) - {f.name for f in fields(cls)})
        if unknown:
            logger.warning("Ignoring unknown planner settings: %s", ", ".join(unknown))

        return cls(**kwargs)

    @staticmethod
    def _coerce(name: str, kind: Any, value: Any) -> Any:
        if kind in (bool, "bool"):
            if not isinstance(value, bool):
                raise ConfigError(f"Planner setting '{name}' must be a boolean, got {value!r}")
            return value

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"Planner setting '{name}' must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ConfigError(f"Planner setting '{name}' must be finite, got {value!r}")

        if kind in (int, "int"):
            if value != int(value) or value <= 0:
                raise ConfigError(f"Planner setting '{name}' must be a positive integer")
            return int(value)
        return float(value)
