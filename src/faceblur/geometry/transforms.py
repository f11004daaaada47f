"""Coordinate transforms between original-image space and view space.

The view layer shows the photo with a "contain" fit: scaled down (or up)
until it fits entirely inside the viewport, aspect ratio preserved, and
centered, leaving letterbox or pillarbox margins on one axis.

Forward (image -> view), per axis:

    view = coord / original_side * scaled_side + (view_side - scaled_side) / 2

Extents scale by ``scaled_side / original_side`` with no offset.
``project_to_view`` is the only implementation of the forward transform;
hit testing goes through it so that overlays and taps never disagree.
"""

from __future__ import annotations

from typing import NamedTuple

from faceblur.geometry.primitives import (
    BoxLike,
    Dimensions,
    OverlayPlacement,
    Point,
    Rectangle,
)
from faceblur.geometry.validators import require_positive

__all__ = [
    "FitResult",
    "fit_dimensions",
    "project_to_view",
    "view_point_to_image",
    "view_rect_to_image",
]


class FitResult(NamedTuple):
    """Size of the image once contain-fitted into a viewport."""

    scaled_width: float
    scaled_height: float


def fit_dimensions(original: Dimensions, view: Dimensions) -> FitResult:
    """Contain-fit an image into a viewport.

    Computes the height the image would have if it spanned the full view
    width and the width it would have if it spanned the full view height,
    then caps each by the viewport side. Exactly one candidate is limiting,
    so the result never exceeds the viewport and keeps the image's aspect
    ratio.

    Args:
        original: Pixel dimensions of the source image.
        view: Rendered dimensions of the viewport.

    Returns:
        FitResult with the scaled width and height in view space.

    Raises:
        InvalidGeometryError: If either argument has a non-positive side.

    Example:
        >>> fit_dimensions(Dimensions(width=1000, height=500), Dimensions(width=300, height=300))
        FitResult(scaled_width=300.0, scaled_height=150.0)
    """
    require_positive(original, "original")
    require_positive(view, "view")

    scaled_height = view.width * original.height / original.width
    scaled_width = view.height * original.width / original.height

    return FitResult(
        scaled_width=min(view.width, scaled_width),
        scaled_height=min(view.height, scaled_height),
    )


def _centering_offsets(view: Dimensions, fit: FitResult) -> tuple[float, float]:
    return (
        (view.width - fit.scaled_width) / 2,
        (view.height - fit.scaled_height) / 2,
    )


def project_to_view(
    original: Dimensions,
    view: Dimensions,
    rectangle: BoxLike,
) -> OverlayPlacement:
    """Project a rectangle from original-image space into view space.

    Args:
        original: Pixel dimensions of the source image.
        view: Rendered dimensions of the viewport.
        rectangle: Face rectangle in original-image space.

    Returns:
        OverlayPlacement positioned over the fitted, centered image.

    Raises:
        InvalidGeometryError: If either dimensions argument is degenerate.
    """
    fit = fit_dimensions(original, view)
    offset_x, offset_y = _centering_offsets(view, fit)

    return OverlayPlacement(
        offset_top=(rectangle.y / original.height) * fit.scaled_height + offset_y,
        offset_left=(rectangle.x / original.width) * fit.scaled_width + offset_x,
        height=(rectangle.height / original.height) * fit.scaled_height,
        width=(rectangle.width / original.width) * fit.scaled_width,
        scaled_width=fit.scaled_width,
        scaled_height=fit.scaled_height,
    )


def view_point_to_image(
    original: Dimensions,
    view: Dimensions,
    point: Point,
) -> Point:
    """Map a view-space point (e.g. a tap) back into original-image space.

    Exact inverse of the forward transform used by ``project_to_view``.
    Points in the letterbox margins map to coordinates outside the image.
    """
    fit = fit_dimensions(original, view)
    offset_x, offset_y = _centering_offsets(view, fit)

    return Point(
        x=(point.x - offset_x) / fit.scaled_width * original.width,
        y=(point.y - offset_y) / fit.scaled_height * original.height,
    )


def view_rect_to_image(
    original: Dimensions,
    view: Dimensions,
    rectangle: Rectangle | OverlayPlacement,
) -> Rectangle:
    """Map a view-space rectangle back into original-image space.

    Used when the user draws a blur region by hand on the displayed image.
    Also accepts the ``OverlayPlacement`` returned by ``project_to_view``,
    recovering the rectangle it was projected from.
    """
    if isinstance(rectangle, OverlayPlacement):
        left, top = rectangle.offset_left, rectangle.offset_top
    else:
        left, top = rectangle.x, rectangle.y
    origin = view_point_to_image(original, view, Point(x=left, y=top))
    fit = fit_dimensions(original, view)

    return Rectangle(
        x=origin.x,
        y=origin.y,
        width=rectangle.width / fit.scaled_width * original.width,
        height=rectangle.height / fit.scaled_height * original.height,
    )
