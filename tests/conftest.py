"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from pathlib import Path

import pytest
from PIL import Image

from faceblur.config import Settings
from faceblur.core.cropper import CroppedAsset
from faceblur.core.exceptions import CropError
from faceblur.geometry import ClampedRectangle
from faceblur.utils.logging import clear_correlation_context, configure_logging


class FakeCropper:
    """In-memory ImageCropper that records calls and can fail on demand.

    Attributes:
        calls: (uri, region, quality, image_format) per crop, in call order.
        fail_on: Call indices (0-based) that raise instead of returning.
        max_in_flight: Highest number of crops observed running at once.
    """

    def __init__(
        self,
        *,
        fail_on: set[int] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.calls: list[tuple[str, ClampedRectangle, int, str]] = []
        self.fail_on = fail_on or set()
        self.error = error
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def crop(
        self,
        uri: str,
        region: ClampedRectangle,
        *,
        quality: int,
        image_format: str,
    ) -> CroppedAsset:
        index = len(self.calls)
        self.calls.append((uri, region, quality, image_format))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if index in self.fail_on:
                raise self.error or CropError("simulated failure", uri, region=region)
            return CroppedAsset(
                uri=f"mem://face-{index}.jpg",
                width=round(region.width),
                height=round(region.height),
            )
        finally:
            self.in_flight -= 1


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def fake_cropper() -> FakeCropper:
    """A cropper that always succeeds."""
    return FakeCropper()


@pytest.fixture
def cropper_factory() -> type[FakeCropper]:
    """The FakeCropper class, for tests that need failures or delays."""
    return FakeCropper


@pytest.fixture
def photo_path(tmp_path: Path) -> Path:
    """Write a 400x300 RGB photo with a distinct color per quadrant."""
    image = Image.new("RGB", (400, 300), color=(200, 200, 200))
    image.paste((255, 0, 0), (0, 0, 200, 150))
    image.paste((0, 0, 255), (200, 150, 400, 300))
    path = tmp_path / "photo.png"
    image.save(path)
    return path
