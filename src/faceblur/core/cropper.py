"""Crop-and-encode primitive for detected faces.

The crop pipeline treats cropping as an opaque async capability: give it a
source uri and a clamped region, get back a new image asset (uri plus
dimensions) or an error. ``ImageCropper`` is that contract;
``PillowCropper`` is the local-file implementation used by the CLI and the
integration tests.

Resource Behavior:
    Each call opens the source image in a ``with`` block and closes it
    before returning, so no decoder or pixel buffer outlives a single crop.
    The blocking Pillow work runs in a worker thread via
    ``asyncio.to_thread``; the caller still awaits one crop at a time.
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse

from PIL import Image

from faceblur.config import settings
from faceblur.core.exceptions import CropError
from faceblur.geometry import CamelModel, ClampedRectangle
from faceblur.utils.keys import create_uuid

logger = logging.getLogger(__name__)

_EXTENSIONS = {"JPEG": "jpg", "PNG": "png", "WEBP": "webp"}


class CroppedAsset(CamelModel):
    """A cropped face image produced by the crop primitive.

    ``width``/``height`` are the encoded asset's own pixel size, which can
    differ slightly from the clamped region after rounding.
    """

    uri: str
    width: int
    height: int


class ImageCropper(Protocol):
    """Protocol for the external crop/encode primitive.

    Implementations must raise (any exception, preferably ``CropError``)
    on failure rather than returning a partial asset.
    """

    async def crop(
        self,
        uri: str,
        region: ClampedRectangle,
        *,
        quality: int,
        image_format: str,
    ) -> CroppedAsset:
        """Crop ``region`` out of the image at ``uri`` and encode it.

        Args:
            uri: Source image, a filesystem path or ``file://`` uri.
            region: Clamped rectangle in original-image pixels.
            quality: Encoder quality 1-100 (ignored by lossless formats).
            image_format: Pillow format name ("JPEG", "PNG", "WEBP").

        Returns:
            CroppedAsset for the newly written image.
        """
        ...


def uri_to_path(uri: str) -> Path:
    """Resolve a plain path or ``file://`` uri to a local path.

    Raises:
        CropError: For non-file schemes.
    """
    parsed = urlparse(uri)
    if parsed.scheme in ("", "file"):
        return Path(unquote(parsed.path) if parsed.scheme else uri)
    # Single-letter scheme is a Windows drive, not a uri
    if len(parsed.scheme) == 1:
        return Path(uri)
    raise CropError(f"Unsupported uri scheme: {parsed.scheme!r}", uri)


def crop_box(region: ClampedRectangle) -> tuple[int, int, int, int]:
    """Round a clamped region to a Pillow (left, top, right, bottom) box."""
    left = round(region.x)
    top = round(region.y)
    return (left, top, round(region.x + region.width), round(region.y + region.height))


class PillowCropper:
    """Crops local image files with Pillow and writes the result to disk.

    Example:
        >>> cropper = PillowCropper(output_dir=Path("/tmp/faces"))
        >>> asset = await cropper.crop(
        ...     "photo.jpg", region, quality=80, image_format="JPEG"
        ... )
    """

    __slots__ = ("_output_dir",)

    def __init__(self, output_dir: Path | None = None) -> None:
        """Initialize the cropper.

        Args:
            output_dir: Directory for cropped assets. Defaults to
                ``settings.CROP_OUTPUT_DIR``, then to a fresh temp directory.
                Relative paths are resolved against the current directory
                here, once.
        """
        output_dir = output_dir or settings.CROP_OUTPUT_DIR
        self._output_dir = output_dir.resolve() if output_dir is not None else None

    @property
    def output_dir(self) -> Path:
        if self._output_dir is None:
            self._output_dir = Path(tempfile.mkdtemp(prefix="faceblur-"))
        return self._output_dir

    async def crop(
        self,
        uri: str,
        region: ClampedRectangle,
        *,
        quality: int,
        image_format: str,
    ) -> CroppedAsset:
        if region.is_empty:
            raise CropError("Crop region is empty", uri, region=region)
        if image_format not in _EXTENSIONS:
            raise CropError(f"Unsupported image format: {image_format!r}", uri)

        source = uri_to_path(uri)
        return await asyncio.to_thread(
            self._crop_sync, uri, source, region, quality, image_format
        )

    def _crop_sync(
        self,
        uri: str,
        source: Path,
        region: ClampedRectangle,
        quality: int,
        image_format: str,
    ) -> CroppedAsset:
        box = crop_box(region)
        if box[2] <= box[0] or box[3] <= box[1]:
            raise CropError("Crop region rounds to zero pixels", uri, region=region)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / (
            f"{source.stem}-face-{create_uuid()}.{_EXTENSIONS[image_format]}"
        )

        try:
            with Image.open(source) as image:
                cropped = image.crop(box)
                # JPEG has no alpha or palette modes
                if image_format == "JPEG" and cropped.mode != "RGB":
                    cropped = cropped.convert("RGB")
                cropped.save(target, format=image_format, quality=quality)
                width, height = cropped.size
        except (OSError, ValueError) as e:
            raise CropError(f"Crop failed: {e}", uri, region=region) from e

        logger.debug("Cropped %s box=%s -> %s", uri, box, target)

        asset_uri = target.as_uri() if uri.startswith("file:") else str(target)
        return CroppedAsset(uri=asset_uri, width=width, height=height)
