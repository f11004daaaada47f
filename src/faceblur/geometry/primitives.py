"""Geometry primitives for faceblur.

Immutable Pydantic models for sizes, points and rectangles. The same types
are used in both coordinate spaces the library deals with:

    - Original-image space: pixels of the unscaled source photo.
    - View space: pixels of the viewport after contain-fit and centering.

All coordinates follow the convention where (0, 0) is the top-left corner.
Field names are snake_case in Python and serialize to the camelCase keys
the UI layer consumes (``borderLeft``, ``offsetTop``, ...).
"""

from __future__ import annotations

from typing import Protocol, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_payload(self) -> dict[str, object]:
        """Dump to the camelCase dict shape used by the UI layer."""
        return self.model_dump(by_alias=True)


class BoxLike(Protocol):
    """Anything exposing x/y/width/height, e.g. a Rectangle or a FaceRecord."""

    @property
    def x(self) -> float: ...

    @property
    def y(self) -> float: ...

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...


class Dimensions(CamelModel):
    """Width and height of an image or a viewport.

    Both sides must be strictly positive; the fit math divides by them.

    Attributes:
        width: Horizontal extent.
        height: Vertical extent.
    """

    width: float = Field(..., gt=0, description="Width in pixels")
    height: float = Field(..., gt=0, description="Height in pixels")

    @property
    def aspect_ratio(self) -> float:
        """Return width/height aspect ratio."""
        return self.width / self.height

    def to_tuple(self) -> tuple[float, float]:
        """Convert to (width, height) tuple."""
        return (self.width, self.height)

    @classmethod
    def from_tuple(cls, size: tuple[float, float]) -> Self:
        """Create Dimensions from (width, height) tuple."""
        return cls(width=size[0], height=size[1])


class Point(CamelModel):
    """A 2D point, e.g. a tap location in view space.

    Points may lie outside the image (a tap in the letterbox margin), so
    coordinates are not constrained.
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to (x, y) tuple."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, coord: tuple[float, float]) -> Self:
        """Create Point from (x, y) tuple."""
        return cls(x=coord[0], y=coord[1])


class _Box(CamelModel):
    """Shared x/y/width/height fields and edge helpers."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Return the X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Return the Y coordinate of the bottom edge."""
        return self.y + self.height

    @property
    def center(self) -> Point:
        """Return the geometric center."""
        return Point(x=self.x + self.width / 2, y=self.y + self.height / 2)

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to show (zero or negative extent)."""
        return self.width <= 0 or self.height <= 0

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)


class Rectangle(_Box):
    """A face rectangle as supplied by a detector.

    The origin is not guaranteed to lie within any bounds (detectors report
    faces cut by the photo edge with negative origins); only the extent is
    required to be non-negative.

    Attributes:
        x: Left edge X coordinate.
        y: Top edge Y coordinate.
        width: Horizontal extent (>= 0).
        height: Vertical extent (>= 0).
    """

    width: float = Field(..., ge=0, description="Width in pixels")
    height: float = Field(..., ge=0, description="Height in pixels")

    @classmethod
    def from_tuple(cls, bbox: tuple[float, float, float, float]) -> Self:
        """Create Rectangle from (x, y, width, height) tuple."""
        return cls(x=bbox[0], y=bbox[1], width=bbox[2], height=bbox[3])


class ClampedRectangle(_Box):
    """A rectangle adjusted to image bounds, plus margin hints.

    Produced only by :func:`faceblur.geometry.validators.clamp_to_image`.
    Width and height are left unconstrained: pathological input can clamp
    to a negative extent, which consumers treat as an empty crop.

    Attributes:
        border_left: Context margin to show left of the crop (<= 200).
        border_right: Context margin to show right of the crop (<= 200).
    """

    border_left: float
    border_right: float


class OverlayPlacement(CamelModel):
    """A face rectangle projected into view space for the current viewport.

    Derived and ephemeral: recomputed on every layout change.

    Attributes:
        offset_top: Top edge in view space.
        offset_left: Left edge in view space.
        width: Overlay width in view space.
        height: Overlay height in view space.
        scaled_width: Width of the fitted image inside the viewport.
        scaled_height: Height of the fitted image inside the viewport.
    """

    offset_top: float
    offset_left: float
    width: float
    height: float
    scaled_width: float
    scaled_height: float

    @property
    def right(self) -> float:
        return self.offset_left + self.width

    @property
    def bottom(self) -> float:
        return self.offset_top + self.height

    @property
    def center(self) -> Point:
        return Point(
            x=self.offset_left + self.width / 2,
            y=self.offset_top + self.height / 2,
        )

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains_point(self, point: Point) -> bool:
        """Check if a point is inside the overlay (inclusive of all edges)."""
        return (
            self.offset_left <= point.x <= self.right
            and self.offset_top <= point.y <= self.bottom
        )
