"""Device orientation classification from tilt sensor readings.

Maps the ``beta``/``gamma`` tilt angles (radians) reported by the device
motion sensor to the rotation the editor applies to the photo: ``0`` for
portrait, ``90``/``-90`` for landscape held left or right.
"""

from __future__ import annotations

from pydantic import BaseModel

# Near-flat device: treat as portrait
_FLAT_GAMMA = 0.04
_FLAT_BETA = 0.24

# Upright device, gamma outside the landscape band: portrait
_UPRIGHT_BETA = 0.5
_LANDSCAPE_GAMMA_MIN = 1.0
_LANDSCAPE_GAMMA_MAX = 2.3


class DeviceOrientation(BaseModel, frozen=True):
    """Tilt angles from the orientation sensor.

    Attributes:
        beta: Front-to-back tilt.
        gamma: Left-to-right tilt.
    """

    beta: float
    gamma: float


def classify_orientation(orientation: DeviceOrientation | None) -> int:
    """Return the photo rotation in degrees for a sensor reading.

    Args:
        orientation: Latest sensor reading, or None before the first one.

    Returns:
        0, 90 or -90.
    """
    if orientation is None:
        return 0

    abs_gamma = abs(orientation.gamma)
    abs_beta = abs(orientation.beta)

    if abs_gamma <= _FLAT_GAMMA and abs_beta <= _FLAT_BETA:
        return 0
    if (
        abs_gamma <= _LANDSCAPE_GAMMA_MIN or abs_gamma >= _LANDSCAPE_GAMMA_MAX
    ) and abs_beta >= _UPRIGHT_BETA:
        return 0
    return -90 if orientation.gamma < 0 else 90
