"""Interchangeable 3D rotation representations.

Provides six interconvertible rotation types sharing the
:class:`RotationBase` interface:

- :class:`Quaternion` -- unit quaternion (scalar-first ``[w, x, y, z]``)
- :class:`RotationMatrix` -- active 3x3 rotation matrix (SO(3))
- :class:`AngleAxis` -- rotation angle about a unit axis
- :class:`RotationVector` -- axis scaled by angle
- :class:`EulerAnglesZyx` -- yaw-pitch-roll (Z-Y'-X'') angles
- :class:`EulerAnglesXyz` -- roll-pitch-yaw (X-Y'-Z'') angles

Any type converts to any other through ``Target.from_rotation(source)``;
conversions are served by a closed registry that routes through
``Quaternion`` unless a direct formula is registered.

Also re-exports the elementary rotation functions :func:`Rx`, :func:`Ry`,
:func:`Rz`.
"""

from .rotation_matrices import (
    Rx,
    Ry,
    Rz,
)

from .base import RotationBase, compose, equivalent_to, invert
from .quaternion import Quaternion
from .rotation_matrix import RotationMatrix
from .angle_axis import AngleAxis
from .rotation_vector import RotationVector
from .euler_angles_zyx import EulerAnglesYpr, EulerAnglesZyx
from .euler_angles_xyz import EulerAnglesRpy, EulerAnglesXyz
from .conversions import GIMBAL_LOCK_TOLERANCE
from ._registry import convert, supported_conversions
from ._tolerance import get_rotation_epsilon

__all__ = [
    # Elementary rotations
    "Rx",
    "Ry",
    "Rz",
    # Interface
    "RotationBase",
    "compose",
    "invert",
    "equivalent_to",
    "convert",
    "supported_conversions",
    "get_rotation_epsilon",
    "GIMBAL_LOCK_TOLERANCE",
    # Rotation representations
    "Quaternion",
    "RotationMatrix",
    "AngleAxis",
    "RotationVector",
    "EulerAnglesZyx",
    "EulerAnglesYpr",
    "EulerAnglesXyz",
    "EulerAnglesRpy",
]
