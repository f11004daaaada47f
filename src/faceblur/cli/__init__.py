"""CLI module for faceblur.

Provides developer commands for cropping faces from local photos and for
inspecting overlay placement and tap dispatch.
"""

from __future__ import annotations

from faceblur.cli.main import app

__all__ = ["app"]
