"""Custom exceptions for the crop pipeline.

These exceptions carry the source uri and the region being cropped so a
single failed face can be logged with enough context to reproduce it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from faceblur.geometry import ClampedRectangle


class FaceBlurError(Exception):
    """Base exception for all faceblur errors."""

    def __init__(self, message: str, uri: str | None = None) -> None:
        """Initialize with optional source uri context.

        Args:
            message: Human-readable error description.
            uri: Source image the operation was working on.
        """
        self.uri = uri
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with uri context if available."""
        if self.uri:
            return f"{self.message} (uri: {self.uri})"
        return self.message


class CropError(FaceBlurError):
    """Raised when the crop/encode primitive fails for one face.

    This error is raised when:
    - The clamped region is empty (zero or negative extent)
    - The source image cannot be opened or decoded
    - Encoding or writing the cropped asset fails
    """

    def __init__(
        self,
        message: str,
        uri: str | None = None,
        *,
        region: ClampedRectangle | None = None,
    ) -> None:
        self.region = region
        super().__init__(message, uri)

    def _format_message(self) -> str:
        parts = [self.message]
        if self.uri:
            parts.append(f"uri={self.uri}")
        if self.region is not None:
            parts.append(f"region={self.region.to_tuple()}")

        if len(parts) == 1:
            return parts[0]
        return f"{parts[0]} ({', '.join(parts[1:])})"
