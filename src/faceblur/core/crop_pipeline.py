"""Sequential crop pipeline for detected faces.

Turns the detector output for one photo into FaceRecords: each face
rectangle is clamped to the photo, given default UI state and cropped into
its own image asset.

Resource Policy:
    Faces are cropped strictly one after another. Each crop is awaited to
    completion (success or failure) before the next one starts, so at most
    one decoder and one pixel buffer are alive per pipeline run. There is
    no fan-out with ``asyncio.gather`` or task groups here.

Failure Policy:
    - Absent or malformed detector data yields no faces, not an error.
    - A face whose crop fails is logged and left out of the result; the
      remaining faces are still cropped. The result therefore has at most
      as many entries as there were rectangles, in input order.
    - Cancellation of the surrounding task is not intercepted.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ConfigDict, Field, ValidationError

from faceblur.config import settings
from faceblur.core.cropper import CroppedAsset, ImageCropper
from faceblur.geometry import (
    CamelModel,
    ClampedRectangle,
    Dimensions,
    Rectangle,
    clamp_to_image,
)
from faceblur.utils.logging import correlation_context, get_logger

logger = get_logger(__name__)


class SourceImage(CamelModel):
    """A photo opened for editing.

    Attributes:
        uri: Location of the full-size image.
        width: Pixel width of the full-size image.
        height: Pixel height of the full-size image.
        face_data: Detector output, a JSON array of ``{x, y, width, height}``.
    """

    uri: str
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    face_data: str | None = None

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(width=self.width, height=self.height)


class FaceRecord(CamelModel):
    """One detected face: its clamped region, UI state and cropped asset.

    Created by the pipeline with both flags off, then mutated in place by
    the edit session as the user selects or hides the blur.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    x: float
    y: float
    width: float
    height: float
    border_left: float
    border_right: float
    is_selected: bool = False
    is_hidden: bool = False
    uri: str
    asset_width: int
    asset_height: int

    @classmethod
    def from_crop(cls, region: ClampedRectangle, asset: CroppedAsset) -> FaceRecord:
        return cls(
            x=region.x,
            y=region.y,
            width=region.width,
            height=region.height,
            border_left=region.border_left,
            border_right=region.border_right,
            uri=asset.uri,
            asset_width=asset.width,
            asset_height=asset.height,
        )

    @property
    def region(self) -> ClampedRectangle:
        """The clamped rectangle in original-image space."""
        return ClampedRectangle(
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            border_left=self.border_left,
            border_right=self.border_right,
        )

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_payload(self) -> dict[str, object]:
        """Flat dict for the UI layer.

        ``width``/``height`` are the cropped asset's own dimensions, which
        take precedence over the clamped region's.
        """
        return {
            "x": self.x,
            "y": self.y,
            "width": self.asset_width,
            "height": self.asset_height,
            "borderLeft": self.border_left,
            "borderRight": self.border_right,
            "isSelected": self.is_selected,
            "isHidden": self.is_hidden,
            "uri": self.uri,
        }


def parse_face_data(face_data: str | bytes | list[Any] | None) -> list[Rectangle]:
    """Parse detector output into rectangles.

    Args:
        face_data: JSON text (or bytes) holding an array of rectangles, an
            already decoded list, or None.

    Returns:
        Rectangles in detector order. Empty for absent or malformed data;
        entries that are not valid rectangles are dropped.
    """
    if face_data is None:
        return []

    if isinstance(face_data, (str, bytes)):
        if not face_data.strip():
            return []
        try:
            entries = json.loads(face_data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Unparseable face data, treating as no faces", error=str(e))
            return []
    else:
        entries = face_data

    if not isinstance(entries, list):
        logger.warning(
            "Face data is not an array, treating as no faces",
            type=type(entries).__name__,
        )
        return []

    rectangles: list[Rectangle] = []
    for index, entry in enumerate(entries):
        try:
            rectangles.append(Rectangle.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                "Skipping invalid face rectangle",
                index=index,
                errors=e.error_count(),
            )
    return rectangles


async def crop_faces(
    source: SourceImage,
    cropper: ImageCropper,
    *,
    quality: int | None = None,
    image_format: str | None = None,
) -> list[FaceRecord]:
    """Clamp and crop every detected face of ``source``, one at a time.

    Args:
        source: The photo and its detector output.
        cropper: Crop/encode primitive.
        quality: Encoder quality; defaults to ``settings.CROP_JPEG_QUALITY``.
        image_format: Output format; defaults to ``settings.CROP_FORMAT``.

    Returns:
        FaceRecords for the faces that cropped successfully, in input order.
    """
    rectangles = parse_face_data(source.face_data)
    if not rectangles:
        return []

    quality = settings.CROP_JPEG_QUALITY if quality is None else quality
    image_format = image_format or settings.CROP_FORMAT
    bounds = source.dimensions

    faces: list[FaceRecord] = []
    for index, rectangle in enumerate(rectangles):
        region = clamp_to_image(rectangle, bounds)
        with correlation_context(image_uri=source.uri, face_index=index):
            try:
                asset = await cropper.crop(
                    source.uri,
                    region,
                    quality=quality,
                    image_format=image_format,
                )
            except Exception as e:  # noqa: BLE001 - one face must not abort the batch
                logger.warning(
                    "Face crop failed, skipping",
                    error=str(e),
                    error_type=type(e).__name__,
                    region=region.to_tuple(),
                )
                continue
        faces.append(FaceRecord.from_crop(region, asset))

    logger.info(
        "Cropped faces",
        image_uri=source.uri,
        detected=len(rectangles),
        cropped=len(faces),
    )
    return faces


class CropPipeline:
    """Crop pipeline bound to a cropper and an encode policy.

    Example:
        >>> pipeline = CropPipeline(PillowCropper())
        >>> faces = await pipeline.run(
        ...     SourceImage(uri="photo.jpg", width=4032, height=3024, face_data=data)
        ... )
    """

    __slots__ = ("_cropper", "_image_format", "_quality")

    def __init__(
        self,
        cropper: ImageCropper,
        *,
        quality: int | None = None,
        image_format: str | None = None,
    ) -> None:
        self._cropper = cropper
        self._quality = quality
        self._image_format = image_format

    async def run(self, source: SourceImage) -> list[FaceRecord]:
        return await crop_faces(
            source,
            self._cropper,
            quality=self._quality,
            image_format=self._image_format,
        )
