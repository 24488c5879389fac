"""Configuration loading for the arm and the tracking front end.

Example YAML::

    arm:
      base_height: 4
      lower_arm_length: 12
      upper_arm_length: 10
    tracking:
      scale: 1.5
      smoothing: 0.1
      speed: 0.8
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .geometry import ArmGeometry, GeometryConfigError
from .kinematics import ArmKinematics
from .tracking import DEFAULT_SCALE, DEFAULT_SMOOTHING, DEFAULT_SPEED, TargetSmoother, check_scale

logger = logging.getLogger(__name__)

ARM_KEYS = {
    "base_height", "lower_arm_length", "upper_arm_length",
    "baseHeight", "lowerArmLength", "upperArmLength",
}
TRACKING_KEYS = {"scale", "smoothing", "speed"}


class ConfigError(ValueError):
    """Raised for unreadable or malformed configuration."""


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML configuration file.

    An empty file yields an empty config.

    Raises:
        ConfigError: If the file is missing, not valid YAML, or not a mapping
    """
    path = Path(path)
    try:
        with path.open() as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
    logger.info("Loaded config from %s", path)
    return data


def _section(config: Optional[Mapping[str, Any]], name: str, known: set) -> Mapping[str, Any]:
    section = (config or {}).get(name) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{name}' section must be a mapping")
    unknown = set(section) - known
    if unknown:
        logger.warning("Ignoring unknown %s keys: %s", name, ", ".join(sorted(unknown)))
    return section


def build_kinematics(config: Optional[Mapping[str, Any]] = None) -> ArmKinematics:
    """
    Build the solver from the ``arm`` section.

    Raises:
        ConfigError: If the section is malformed or a value is not numeric
        GeometryConfigError: If the lengths are not physical
    """
    section = _section(config, "arm", ARM_KEYS)
    try:
        return ArmKinematics.from_config(section)
    except GeometryConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid arm geometry: {exc}") from exc


def build_geometry(config: Optional[Mapping[str, Any]] = None) -> ArmGeometry:
    return build_kinematics(config).geometry


def tracking_scale(config: Optional[Mapping[str, Any]] = None) -> float:
    """
    Read the landmark-to-world scale from the ``tracking`` section.

    Raises:
        ConfigError: If the scale is not a finite positive number
    """
    section = _section(config, "tracking", TRACKING_KEYS)
    try:
        return check_scale(section.get("scale", DEFAULT_SCALE))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid tracking scale: {exc}") from exc


def build_smoother(config: Optional[Mapping[str, Any]] = None, **kwargs) -> TargetSmoother:
    """
    Build a TargetSmoother from the ``tracking`` section.

    Extra keyword arguments (e.g. ``initial``) are passed through.

    Raises:
        ConfigError: If smoothing or speed are invalid
    """
    section = _section(config, "tracking", TRACKING_KEYS)
    try:
        return TargetSmoother(
            smoothing=float(section.get("smoothing", DEFAULT_SMOOTHING)),
            speed=float(section.get("speed", DEFAULT_SPEED)),
            **kwargs,
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid tracking settings: {exc}") from exc
