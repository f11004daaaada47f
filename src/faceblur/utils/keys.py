"""Identity keys for gallery re-render memoization.

The gallery swiper re-renders a page only when its key changes. A page's
key combines the image file name with two flags: whether blur overlays are
shown on it and whether one of them is being edited.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from faceblur.core.hit_test import HitResult


class GalleryImage(Protocol):
    """Anything with an ``id`` and a file ``name`` (path or basename)."""

    id: str
    name: str | None


def file_name_parts(path: str | None) -> list[str]:
    """Split the basename of ``path`` on dots.

    >>> file_name_parts("DCIM/Camera/IMG_0042.jpg")
    ['IMG_0042', 'jpg']
    """
    if not path:
        return []
    return path.rsplit("/", 1)[-1].split(".")


def create_ref_key(
    image: GalleryImage,
    active_id: str | None,
    blur_faces: bool,
    modify_state: HitResult,
) -> str:
    """Build the memoization key for one gallery page.

    Args:
        image: The page's image.
        active_id: Id of the image currently in front.
        blur_faces: Whether blur overlays are switched on.
        modify_state: Result of the last tap on the active image.

    Returns:
        ``"<name parts>#<show faces>#<has active blur>"``, e.g.
        ``"IMG_0042,jpg#1#0"``.
    """
    show_faces = 1 if blur_faces and active_id == image.id else 0
    has_active_blur = (
        1
        if show_faces
        and modify_state.is_modifying
        and modify_state.modify_index is not None
        and modify_state.modify_index >= 0
        else 0
    )
    name = ",".join(file_name_parts(image.name))
    return f"{name}#{show_faces}#{has_active_blur}"


def create_uuid() -> str:
    """Return a random (version 4) UUID string."""
    return str(uuid.uuid4())
