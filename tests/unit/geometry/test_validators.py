"""Unit tests for geometry validators.

Tests clamp_to_image including:
- In-bounds rectangles passing through unchanged
- Edge overflow on each side
- Regression pins for the legacy y-vs-width and border_right policies
- Degenerate results and idempotence
- require_positive / InvalidGeometryError
"""

from __future__ import annotations

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from faceblur.geometry import (
    BORDER_LIMIT,
    ClampedRectangle,
    Dimensions,
    InvalidGeometryError,
    Rectangle,
    clamp_to_image,
    require_positive,
)


class TestClampToImage:
    """Tests for clamp_to_image."""

    @pytest.fixture
    def bounds(self) -> Dimensions:
        return Dimensions(width=100, height=100)

    def test_negative_x_moves_to_zero(self, bounds: Dimensions) -> None:
        clamped = clamp_to_image(Rectangle(x=-10, y=0, width=50, height=50), bounds)
        assert clamped.x == 0
        assert clamped.y == 0
        assert clamped.width == 50  # not shrunk by the 10px that were cut off
        assert clamped.height == 50

    def test_in_bounds_rectangle_unchanged(self, bounds: Dimensions) -> None:
        rect = Rectangle(x=10, y=20, width=30, height=40)
        clamped = clamp_to_image(rect, bounds)
        assert clamped.to_tuple() == rect.to_tuple()

    def test_right_overflow_shrinks_width(self, bounds: Dimensions) -> None:
        clamped = clamp_to_image(Rectangle(x=80, y=0, width=50, height=10), bounds)
        assert clamped.width == 20
        assert clamped.right == 100

    def test_bottom_overflow_shrinks_height(self, bounds: Dimensions) -> None:
        clamped = clamp_to_image(Rectangle(x=0, y=70, width=10, height=50), bounds)
        assert clamped.height == 30
        assert clamped.bottom == 100

    def test_exact_fit_is_kept(self, bounds: Dimensions) -> None:
        clamped = clamp_to_image(Rectangle(x=0, y=0, width=100, height=100), bounds)
        assert clamped.to_tuple() == (0, 0, 100, 100)

    def test_start_beyond_right_edge_is_empty(self, bounds: Dimensions) -> None:
        clamped = clamp_to_image(Rectangle(x=150, y=0, width=20, height=20), bounds)
        assert clamped.width == -50
        assert clamped.is_empty

    def test_never_raises_on_far_out_of_bounds(self, bounds: Dimensions) -> None:
        clamped = clamp_to_image(
            Rectangle(x=1e6, y=1e6, width=1e6, height=1e6), bounds
        )
        assert isinstance(clamped, ClampedRectangle)
        assert clamped.is_empty

    def test_border_left_is_x(self, bounds: Dimensions) -> None:
        clamped = clamp_to_image(Rectangle(x=30, y=0, width=10, height=10), bounds)
        assert clamped.border_left == 30

    def test_borders_capped(self) -> None:
        bounds = Dimensions(width=2000, height=2000)
        clamped = clamp_to_image(
            Rectangle(x=500, y=0, width=600, height=100), bounds
        )
        assert clamped.border_left == BORDER_LIMIT
        assert clamped.border_right == BORDER_LIMIT


class TestClampLegacyPolicy:
    """Regression pins for the literal legacy clamp policy.

    These document behavior that looks unintended but is kept as-is until
    the product owner decides otherwise.
    """

    def test_y_compared_against_width_not_height(self) -> None:
        """y beyond the height but within the width is kept."""
        bounds = Dimensions(width=1000, height=500)
        clamped = clamp_to_image(Rectangle(x=0, y=700, width=10, height=10), bounds)
        assert clamped.y == 700
        assert clamped.height == -200  # 500 - 700

    def test_y_beyond_width_resets_to_zero(self) -> None:
        bounds = Dimensions(width=500, height=1000)
        clamped = clamp_to_image(Rectangle(x=0, y=600, width=10, height=10), bounds)
        assert clamped.y == 0
        assert clamped.height == 10  # height check still uses the original y

    def test_negative_y_is_kept(self) -> None:
        bounds = Dimensions(width=100, height=100)
        clamped = clamp_to_image(Rectangle(x=0, y=-15, width=10, height=10), bounds)
        assert clamped.y == -15

    def test_border_right_is_width_minus_y(self) -> None:
        """640-wide crop at y=400 gets a 200 margin, at y=500 a 140 margin."""
        bounds = Dimensions(width=2000, height=2000)
        high = clamp_to_image(Rectangle(x=10, y=400, width=640, height=50), bounds)
        low = clamp_to_image(Rectangle(x=10, y=500, width=640, height=50), bounds)
        assert high.border_right == 200
        assert low.border_right == 140

    def test_border_right_can_be_negative(self) -> None:
        bounds = Dimensions(width=1000, height=1000)
        clamped = clamp_to_image(Rectangle(x=0, y=300, width=100, height=50), bounds)
        assert clamped.border_right == -200


class TestClampIdempotence:
    """clamp(clamp(r)) == clamp(r) wherever the policy allows it."""

    @given(
        x=st.floats(min_value=-500, max_value=1500),
        y=st.floats(min_value=-500, max_value=1500),
        width=st.floats(min_value=0, max_value=1500),
        height=st.floats(min_value=0, max_value=1500),
        bw=st.floats(min_value=1, max_value=1000),
        bh=st.floats(min_value=1, max_value=1000),
    )
    @settings(max_examples=300, deadline=None)
    def test_clamp_is_idempotent(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        bw: float,
        bh: float,
    ) -> None:
        # A negative x keeps the full width; wider-than-image widths then
        # shrink on the second pass.
        assume(x >= 0 or width <= bw)
        bounds = Dimensions(width=bw, height=bh)

        once = clamp_to_image(Rectangle(x=x, y=y, width=width, height=height), bounds)
        twice = clamp_to_image(once, bounds)

        assert twice == once

    def test_negative_x_with_oversized_width_shrinks_again(self) -> None:
        bounds = Dimensions(width=100, height=100)
        once = clamp_to_image(Rectangle(x=-10, y=0, width=105, height=10), bounds)
        twice = clamp_to_image(once, bounds)
        assert once.width == 105
        assert twice.width == 100


class TestRequirePositive:
    """Tests for require_positive and InvalidGeometryError."""

    def test_returns_valid_dimensions(self) -> None:
        dims = Dimensions(width=10, height=20)
        assert require_positive(dims) is dims

    def test_rejects_zero(self) -> None:
        dims = Dimensions.model_construct(width=0, height=20)
        with pytest.raises(InvalidGeometryError) as exc_info:
            require_positive(dims, "view")
        assert exc_info.value.dimensions is dims
        assert exc_info.value.name == "view"
        assert "0x20" in str(exc_info.value)

    def test_error_is_value_error(self) -> None:
        dims = Dimensions.model_construct(width=-1, height=-1)
        with pytest.raises(ValueError):
            require_positive(dims)
