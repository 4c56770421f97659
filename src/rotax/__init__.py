"""
rotax is a library of interchangeable 3D rotation representations implemented in JAX.
"""

from .config import set_dtype, get_dtype

from .rotations import (
    Rx,
    Ry,
    Rz,
    RotationBase,
    compose,
    invert,
    equivalent_to,
    convert,
    supported_conversions,
    get_rotation_epsilon,
    GIMBAL_LOCK_TOLERANCE,
    Quaternion,
    RotationMatrix,
    AngleAxis,
    RotationVector,
    EulerAnglesZyx,
    EulerAnglesYpr,
    EulerAnglesXyz,
    EulerAnglesRpy,
)

from .utils import (
    floating_point_modulo,
    wrap_pos_neg_pi,
    wrap_zero_two_pi,
)

__version__ = "0.1.0"
