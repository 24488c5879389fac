"""Forward and inverse kinematics for 3-DOF arm."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence, Union

import numpy as np

from .geometry import (
    ArmGeometry,
    DEFAULT_BASE_HEIGHT,
    DEFAULT_LOWER_ARM_LENGTH,
    DEFAULT_UPPER_ARM_LENGTH,
)

logger = logging.getLogger(__name__)

# Safety margins keeping the law-of-cosines triangle non-degenerate
MAX_REACH_MARGIN = 0.001  # relative, far side
MIN_REACH_MARGIN = 0.01   # absolute, near side


@dataclass(frozen=True)
class TargetPosition:
    """End-effector position in the world frame (y up from the ground)."""

    x: float
    y: float
    z: float

    def __post_init__(self):
        for name in ("x", "y", "z"):
            value = float(getattr(self, name))
            if not np.isfinite(value):
                raise ValueError(f"Target {name} must be finite, got {value}")
            object.__setattr__(self, name, value)

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> "TargetPosition":
        values = tuple(values)
        if len(values) != 3:
            raise ValueError(f"Expected 3 coordinates (x, y, z), got {len(values)}")
        return cls(*values)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class JointAngles:
    """Joint angles in radians. ``base`` is never wrapped."""

    base: float
    shoulder: float
    elbow: float

    def __post_init__(self):
        for name in ("base", "shoulder", "elbow"):
            value = float(getattr(self, name))
            if not np.isfinite(value):
                raise ValueError(f"Joint angle {name} must be finite, got {value}")
            object.__setattr__(self, name, value)

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> "JointAngles":
        values = tuple(values)
        if len(values) != 3:
            raise ValueError(f"Expected 3 joint angles (base, shoulder, elbow), got {len(values)}")
        return cls(*values)

    def as_array(self) -> np.ndarray:
        return np.array([self.base, self.shoulder, self.elbow])


class ReachStatus(Enum):
    """How the requested distance related to the usable workspace."""
    WITHIN = "within"
    CLAMPED_FAR = "clamped_far"
    CLAMPED_NEAR = "clamped_near"


@dataclass(frozen=True)
class SolveResult:
    """
    Joint angles plus clamping diagnostics.

    Attributes:
        angles: Solved joint angles
        reach_distance: Shoulder-to-target distance actually solved for
        is_at_limit: True iff the unclamped distance exceeded max reach
            (over-reach only; see ``status`` for the near side)
        status: Three-way clamping status
    """

    angles: JointAngles
    reach_distance: float
    is_at_limit: bool
    status: ReachStatus

    @property
    def base(self) -> float:
        return self.angles.base

    @property
    def shoulder(self) -> float:
        return self.angles.shoulder

    @property
    def elbow(self) -> float:
        return self.angles.elbow


TargetLike = Union[TargetPosition, Sequence[float]]
AnglesLike = Union[JointAngles, Sequence[float]]


def as_target(target: TargetLike) -> TargetPosition:
    if isinstance(target, TargetPosition):
        return target
    return TargetPosition.from_sequence(target)


def as_angles(angles: AnglesLike) -> JointAngles:
    if isinstance(angles, JointAngles):
        return angles
    return JointAngles.from_sequence(angles)


class ArmKinematics:
    """3-DOF arm kinematics: base yaw, shoulder pitch, elbow pitch.

    Shoulder is measured from straight up; elbow is the deviation from
    fully extended (0 = straight arm, pi = fully folded). A single elbow
    configuration is always selected.
    """

    def __init__(self, geometry: Optional[ArmGeometry] = None):
        """
        Initialize with arm geometry.

        Args:
            geometry: Arm dimensions (default: 4 / 12 / 10 units)
        """
        self.geometry = geometry if geometry is not None else ArmGeometry()

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, float]] = None) -> "ArmKinematics":
        """
        Build from a geometry mapping.

        Accepts both ``baseHeight`` and ``base_height`` style keys; missing
        keys fall back to the defaults.

        Raises:
            GeometryConfigError: If a length is not a positive number
        """
        config = config or {}

        def pick(camel: str, snake: str, default: float) -> float:
            if snake in config:
                return float(config[snake])
            if camel in config:
                return float(config[camel])
            return default

        geometry = ArmGeometry(
            base_height=pick("baseHeight", "base_height", DEFAULT_BASE_HEIGHT),
            lower_arm_length=pick("lowerArmLength", "lower_arm_length", DEFAULT_LOWER_ARM_LENGTH),
            upper_arm_length=pick("upperArmLength", "upper_arm_length", DEFAULT_UPPER_ARM_LENGTH),
        )
        return cls(geometry)

    def solve(self, target: TargetLike) -> SolveResult:
        """
        Compute inverse kinematics.

        Out-of-workspace targets are clamped to the nearest solvable
        distance rather than rejected.

        Args:
            target: World position (TargetPosition or (x, y, z))

        Returns:
            SolveResult with joint angles in radians
        """
        target = as_target(target)
        geom = self.geometry
        l1, l2 = geom.lower_arm_length, geom.upper_arm_length

        # Base yaw points the arm plane at the target; atan2(0, 0) == 0
        base = np.arctan2(target.x, target.z)

        horizontal, vertical, planar = geom.shoulder_distance(target.x, target.y, target.z)

        far_limit = geom.max_reach * (1 - MAX_REACH_MARGIN)
        near_limit = geom.min_reach + MIN_REACH_MARGIN
        reach = planar
        if reach > far_limit:
            reach = far_limit
        if reach < near_limit:
            reach = near_limit

        is_at_limit = planar > far_limit
        if is_at_limit:
            status = ReachStatus.CLAMPED_FAR
        elif planar < near_limit:
            status = ReachStatus.CLAMPED_NEAR
        else:
            status = ReachStatus.WITHIN
        if status is not ReachStatus.WITHIN:
            logger.debug("Clamped reach %.4f -> %.4f (%s)", planar, reach, status.value)

        # Elbow angle using law of cosines, clamped to handle numerical errors
        cos_internal = (reach**2 - l1**2 - l2**2) / (-2 * l1 * l2)
        cos_internal = np.clip(cos_internal, -1.0, 1.0)
        elbow = np.pi - np.arccos(cos_internal)

        # Shoulder: target elevation plus the triangle angle at the shoulder
        target_angle = np.arctan2(vertical, horizontal)
        cos_offset = (l1**2 + reach**2 - l2**2) / (2 * l1 * reach)
        shoulder_offset = np.arccos(np.clip(cos_offset, -1.0, 1.0))
        shoulder = np.pi / 2 - (target_angle + shoulder_offset)

        return SolveResult(
            angles=JointAngles(float(base), float(shoulder), float(elbow)),
            reach_distance=float(reach),
            is_at_limit=bool(is_at_limit),
            status=status,
        )

    def solve_many(self, targets: Iterable[TargetLike]) -> List[SolveResult]:
        """Solve each target independently."""
        return [self.solve(target) for target in targets]

    def forward(self, angles: AnglesLike) -> TargetPosition:
        """
        Compute forward kinematics.

        Args:
            angles: JointAngles or (base, shoulder, elbow) in radians

        Returns:
            End-effector TargetPosition
        """
        angles = as_angles(angles)
        geom = self.geometry

        lower_x = geom.lower_arm_length * np.sin(angles.shoulder)
        lower_y = geom.lower_arm_length * np.cos(angles.shoulder)

        # Upper arm bends away from the lower arm by the elbow deviation
        upper_angle = angles.shoulder + angles.elbow
        upper_x = geom.upper_arm_length * np.sin(upper_angle)
        upper_y = geom.upper_arm_length * np.cos(upper_angle)

        planar_x = lower_x + upper_x
        planar_y = lower_y + upper_y + geom.base_height

        return TargetPosition(
            x=float(planar_x * np.sin(angles.base)),
            y=float(planar_y),
            z=float(planar_x * np.cos(angles.base)),
        )

    def is_reachable(self, target: TargetLike) -> bool:
        """Check whether target lies inside the workspace shell (no clamping)."""
        target = as_target(target)
        _, _, planar = self.geometry.shoulder_distance(target.x, target.y, target.z)
        return self.geometry.min_reach <= planar <= self.geometry.max_reach
