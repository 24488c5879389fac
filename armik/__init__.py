"""Analytical kinematics for a 3-DOF (yaw, pitch, pitch) arm."""

from .geometry import ArmGeometry, GeometryConfigError
from .kinematics import ArmKinematics, JointAngles, ReachStatus, SolveResult, TargetPosition
from .tracking import HandLandmark, TargetSmoother, landmark_position, map_to_world

__all__ = [
    "ArmGeometry",
    "GeometryConfigError",
    "ArmKinematics",
    "JointAngles",
    "ReachStatus",
    "SolveResult",
    "TargetPosition",
    "HandLandmark",
    "TargetSmoother",
    "landmark_position",
    "map_to_world",
]
