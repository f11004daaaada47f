"""faceblur: face-blur overlay geometry and crop pipeline."""

__version__ = "0.1.0"
