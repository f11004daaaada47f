"""Geometry module for faceblur.

Pure functions and value types for placing face-blur overlays over a photo
that has been contain-fitted into a viewport.

Key Components:
    - Primitives: Dimensions, Point, Rectangle, ClampedRectangle, OverlayPlacement
    - Validators: Non-positive dimension rejection and bounds clamping
    - Transforms: Contain-fit and image <-> view coordinate mapping

Example:
    from faceblur.geometry import Dimensions, Rectangle, clamp_to_image, project_to_view

    image = Dimensions(width=1000, height=500)
    view = Dimensions(width=300, height=300)

    face = clamp_to_image(Rectangle(x=100, y=50, width=200, height=100), image)
    placement = project_to_view(image, view, face)
    placement.offset_left, placement.offset_top  # (30.0, 90.0)
"""

from faceblur.geometry.primitives import (
    BoxLike,
    CamelModel,
    ClampedRectangle,
    Dimensions,
    OverlayPlacement,
    Point,
    Rectangle,
)
from faceblur.geometry.transforms import (
    FitResult,
    fit_dimensions,
    project_to_view,
    view_point_to_image,
    view_rect_to_image,
)
from faceblur.geometry.validators import (
    BORDER_LIMIT,
    InvalidGeometryError,
    clamp_to_image,
    require_positive,
)

__all__ = [
    "BORDER_LIMIT",
    "BoxLike",
    "CamelModel",
    "ClampedRectangle",
    "Dimensions",
    "FitResult",
    "InvalidGeometryError",
    "OverlayPlacement",
    "Point",
    "Rectangle",
    "clamp_to_image",
    "fit_dimensions",
    "project_to_view",
    "require_positive",
    "view_point_to_image",
    "view_rect_to_image",
]
