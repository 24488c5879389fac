"""Hand landmark to arm target conversion and target smoothing.

Landmarks arrive in the normalized image space of a hand-tracking model:
x runs 0 (left) to 1 (right), y runs 0 (top) to 1 (bottom), and z is
depth with negative values closer to the camera.
"""

import logging
from enum import IntEnum
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .kinematics import TargetLike, TargetPosition, as_target

logger = logging.getLogger(__name__)

WORLD_SPAN = 20.0
WORLD_X_RANGE = (-15.0, 15.0)
WORLD_Y_RANGE = (2.0, 25.0)
WORLD_Z_RANGE = (-5.0, 20.0)
DEPTH_OFFSET = 10.0

DEFAULT_SCALE = 1.5
DEFAULT_SMOOTHING = 0.1
DEFAULT_SPEED = 0.8
DEFAULT_START = (10.0, 10.0, 0.0)


class HandLandmark(IntEnum):
    """Indices of the 21 hand landmarks."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


def _coords(landmark: Any) -> Tuple[float, float, float]:
    if hasattr(landmark, "x"):
        return float(landmark.x), float(landmark.y), float(landmark.z)
    if isinstance(landmark, dict):
        return float(landmark["x"]), float(landmark["y"]), float(landmark["z"])
    x, y, z = landmark
    return float(x), float(y), float(z)


def landmark_position(
    landmarks: Optional[Sequence[Any]],
    index: int = HandLandmark.INDEX_FINGER_TIP,
) -> Optional[Tuple[float, float, float]]:
    """
    Extract one landmark's normalized position.

    Args:
        landmarks: Landmarks of a single hand. Items may expose x/y/z
            attributes, be dicts with x/y/z keys, or be 3-sequences.
        index: Landmark index (default: index finger tip)

    Returns:
        (x, y, z) normalized position, or None if the landmark is missing
    """
    if not landmarks or len(landmarks) <= index:
        return None
    return _coords(landmarks[index])


def check_scale(scale: float) -> float:
    """Return scale as a float, rejecting non-finite or non-positive values."""
    scale = float(scale)
    if not np.isfinite(scale) or scale <= 0:
        raise ValueError(f"scale must be a positive finite number, got {scale}")
    return scale


def map_to_world(normalized: Sequence[float], scale: float = DEFAULT_SCALE) -> TargetPosition:
    """
    Map a normalized landmark position into the arm's world frame.

    X is mirrored so the arm follows the hand as in a mirror, y is flipped
    so up is positive, and depth is pushed out in front of the base. Each
    axis is then clamped to a box around the arm.

    Args:
        normalized: (x, y, z) from ``landmark_position``
        scale: World units per normalized unit, divided by 20

    Returns:
        Clamped world-space target

    Raises:
        ValueError: If scale is not a finite positive number
    """
    check_scale(scale)
    nx, ny, nz = normalized
    x = (0.5 - nx) * WORLD_SPAN * scale
    y = (1 - ny) * WORLD_SPAN * scale
    z = -nz * WORLD_SPAN * scale + DEPTH_OFFSET

    return TargetPosition(
        x=float(np.clip(x, *WORLD_X_RANGE)),
        y=float(np.clip(y, *WORLD_Y_RANGE)),
        z=float(np.clip(z, *WORLD_Z_RANGE)),
    )


class TargetSmoother:
    """Exponential smoothing of a per-frame target.

    ``update`` records the latest reading, ``step`` moves the smoothed
    target a fraction ``smoothing * speed`` of the way toward it. Owned by
    a single caller; not thread-safe.
    """

    def __init__(
        self,
        initial: TargetLike = DEFAULT_START,
        smoothing: float = DEFAULT_SMOOTHING,
        speed: float = DEFAULT_SPEED,
    ):
        start = as_target(initial).as_array()
        self._target = start.copy()
        self._smoothed = start.copy()
        # None falls back to the defaults
        self.smoothing = DEFAULT_SMOOTHING
        self.speed = DEFAULT_SPEED
        self.configure(smoothing, speed)

    @property
    def factor(self) -> float:
        return self.smoothing * self.speed

    def configure(self, smoothing: Optional[float] = None, speed: Optional[float] = None):
        """
        Change smoothing and/or speed.

        Raises:
            ValueError: If smoothing * speed falls outside [0, 1]
        """
        smoothing = self.smoothing if smoothing is None else float(smoothing)
        speed = self.speed if speed is None else float(speed)
        if not 0.0 <= smoothing * speed <= 1.0:
            raise ValueError(f"smoothing * speed must be in [0, 1], got {smoothing} * {speed}")
        self.smoothing = smoothing
        self.speed = speed

    @property
    def target(self) -> TargetPosition:
        return TargetPosition(*self._target)

    @property
    def current(self) -> TargetPosition:
        return TargetPosition(*self._smoothed)

    def update(self, target: TargetLike):
        """Record the latest raw target."""
        self._target = as_target(target).as_array()

    def step(self) -> TargetPosition:
        """Advance one frame and return the smoothed target."""
        self._smoothed = self._smoothed + (self._target - self._smoothed) * self.factor
        return self.current

    def reset(self, position: TargetLike):
        """Jump both raw and smoothed targets to ``position``."""
        self._target = as_target(position).as_array()
        self._smoothed = self._target.copy()
        logger.debug("Smoother reset to %s", self.current)
