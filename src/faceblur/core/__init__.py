"""Core algorithms for faceblur.

This package contains the stateful and I/O-facing parts of the library:
the sequential crop pipeline, the crop primitive, tap dispatch and the
per-photo edit session.

Public API:
    - CropPipeline / crop_faces: Clamp and crop detected faces, one at a time.
    - FaceRecord / SourceImage: Pipeline input and output models.
    - ImageCropper / PillowCropper / CroppedAsset: Crop/encode primitive.
    - hit_test / HitResult: Resolve a tap to a face overlay.
    - EditSession: Owns one photo's faces and UI state.
"""

from faceblur.core.crop_pipeline import (
    CropPipeline,
    FaceRecord,
    SourceImage,
    crop_faces,
    parse_face_data,
)
from faceblur.core.cropper import CroppedAsset, ImageCropper, PillowCropper
from faceblur.core.exceptions import CropError, FaceBlurError
from faceblur.core.hit_test import HitResult, hit_test
from faceblur.core.session import EditSession

__all__ = [
    "CropError",
    "CropPipeline",
    "CroppedAsset",
    "EditSession",
    "FaceBlurError",
    "FaceRecord",
    "HitResult",
    "ImageCropper",
    "PillowCropper",
    "SourceImage",
    "crop_faces",
    "hit_test",
    "parse_face_data",
]
