"""Edit session for one photo.

The session owns the photo's FaceRecords for as long as the photo stays in
the working set. UI toggles (select a blur to edit, hide or reveal a blur)
mutate the records in place; re-processing the photo replaces them.
"""

from __future__ import annotations

import logging

from faceblur.core.crop_pipeline import CropPipeline, FaceRecord, SourceImage
from faceblur.core.cropper import ImageCropper
from faceblur.core.hit_test import HitResult, hit_test
from faceblur.geometry import Dimensions, OverlayPlacement, Point, project_to_view
from faceblur.utils.keys import create_uuid
from faceblur.utils.logging import correlation_context

logger = logging.getLogger(__name__)


class EditSession:
    """FaceRecords of one photo plus the current tap state."""

    def __init__(
        self,
        source: SourceImage,
        faces: list[FaceRecord],
        *,
        session_id: str | None = None,
    ) -> None:
        self.source = source
        self.faces = faces
        self.session_id = session_id or create_uuid()
        self.modify_state = HitResult.miss()

    @classmethod
    async def open(
        cls,
        source: SourceImage,
        cropper: ImageCropper,
        *,
        session_id: str | None = None,
    ) -> EditSession:
        """Crop the photo's detected faces and start a session over them."""
        session_id = session_id or create_uuid()
        with correlation_context(session_id=session_id, image_uri=source.uri):
            faces = await CropPipeline(cropper).run(source)
        return cls(source, faces, session_id=session_id)

    async def reprocess(self, cropper: ImageCropper) -> None:
        """Discard the current faces and crop them again from the source."""
        with correlation_context(
            session_id=self.session_id, image_uri=self.source.uri
        ):
            self.faces = await CropPipeline(cropper).run(self.source)
        self.modify_state = HitResult.miss()

    @property
    def original(self) -> Dimensions:
        return self.source.dimensions

    @property
    def selected_index(self) -> int | None:
        for index, face in enumerate(self.faces):
            if face.is_selected:
                return index
        return None

    def select(self, index: int) -> FaceRecord:
        """Mark one face as being edited; at most one is selected at a time.

        Raises:
            IndexError: If ``index`` is negative or out of range.
        """
        if index < 0:
            raise IndexError(f"face index must be non-negative, got {index}")
        target = self.faces[index]
        for face in self.faces:
            face.is_selected = face is target
        self.modify_state = HitResult.hit(index)
        return target

    def clear_selection(self) -> None:
        for face in self.faces:
            face.is_selected = False
        self.modify_state = HitResult.miss()

    def toggle_hidden(self, index: int) -> bool:
        """Flip visibility of one blur and return the new hidden flag."""
        face = self.faces[index]
        face.is_hidden = not face.is_hidden
        logger.debug("Face %d hidden=%s", index, face.is_hidden)
        return face.is_hidden

    def visible_faces(self) -> list[FaceRecord]:
        return [f for f in self.faces if not f.is_hidden and not f.is_empty]

    def placements(self, view: Dimensions) -> list[tuple[int, OverlayPlacement]]:
        """Project every non-empty face into ``view`` for overlay layout.

        Returns:
            (face index, placement) pairs in face order.
        """
        return [
            (index, project_to_view(self.original, view, face.region))
            for index, face in enumerate(self.faces)
            if not face.is_empty
        ]

    def handle_tap(self, tap: Point, view: Dimensions) -> HitResult:
        """Select the face under ``tap``, or clear the selection on a miss."""
        result = hit_test(tap, self.faces, view, self.original)
        if result.is_modifying and result.modify_index is not None:
            self.select(result.modify_index)
        else:
            self.clear_selection()
        return result
