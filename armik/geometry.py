"""Physical geometry of the 3-DOF arm."""

from dataclasses import dataclass, field

import numpy as np

DEFAULT_BASE_HEIGHT = 4.0
DEFAULT_LOWER_ARM_LENGTH = 12.0
DEFAULT_UPPER_ARM_LENGTH = 10.0


class GeometryConfigError(ValueError):
    """Raised when arm lengths cannot describe a physical arm."""


@dataclass(frozen=True)
class ArmGeometry:
    """Immutable arm dimensions and the workspace shell they imply.

    The shoulder pivot sits on top of the base, ``base_height`` above the
    ground. The lower arm runs shoulder to elbow, the upper arm elbow to
    end effector.

    Attributes:
        base_height: Height of the shoulder pivot above the ground
        lower_arm_length: Shoulder to elbow length
        upper_arm_length: Elbow to end-effector length
        max_reach: Fully extended distance from the shoulder pivot
        min_reach: Fully folded distance from the shoulder pivot
    """

    base_height: float = DEFAULT_BASE_HEIGHT
    lower_arm_length: float = DEFAULT_LOWER_ARM_LENGTH
    upper_arm_length: float = DEFAULT_UPPER_ARM_LENGTH
    max_reach: float = field(init=False)
    min_reach: float = field(init=False)

    def __post_init__(self):
        if not np.isfinite(self.base_height):
            raise GeometryConfigError(f"base_height must be finite, got {self.base_height}")
        for name in ("lower_arm_length", "upper_arm_length"):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0:
                raise GeometryConfigError(f"{name} must be a positive length, got {value}")

        # frozen dataclass: derived fields are set once, here
        object.__setattr__(self, "max_reach", self.lower_arm_length + self.upper_arm_length)
        object.__setattr__(self, "min_reach", abs(self.lower_arm_length - self.upper_arm_length))

    def shoulder_distance(self, x: float, y: float, z: float):
        """
        Split a world point into the shoulder-plane coordinates.

        Args:
            x, y, z: World position, y measured from the ground

        Returns:
            (horizontal, vertical, planar) distances from the shoulder pivot
        """
        horizontal = float(np.hypot(x, z))
        vertical = y - self.base_height
        planar = float(np.hypot(horizontal, vertical))
        return horizontal, vertical, planar
