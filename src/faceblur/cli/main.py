"""faceblur CLI.

Developer commands for exercising the library on local files: crop the
faces of a photo, and inspect overlay placement and tap dispatch for a
given viewport.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from PIL import Image

from faceblur import __version__
from faceblur.core.crop_pipeline import CropPipeline, SourceImage, parse_face_data
from faceblur.core.cropper import PillowCropper
from faceblur.core.hit_test import hit_test
from faceblur.geometry import (
    Dimensions,
    Point,
    clamp_to_image,
    project_to_view,
)
from faceblur.utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="faceblur",
    help="faceblur: face-blur overlay geometry and crop pipeline",
    add_completion=False,
)


# =============================================================================
# Argument parsing helpers
# =============================================================================


def parse_size(value: str) -> Dimensions:
    """Parse ``"WIDTHxHEIGHT"`` into Dimensions."""
    try:
        width, height = (float(part) for part in value.lower().split("x"))
        return Dimensions(width=width, height=height)
    except ValueError as e:
        raise typer.BadParameter(f"expected WIDTHxHEIGHT, got {value!r}") from e


def parse_point(value: str) -> Point:
    """Parse ``"X,Y"`` into a Point."""
    try:
        x, y = (float(part) for part in value.split(","))
    except ValueError as e:
        raise typer.BadParameter(f"expected X,Y, got {value!r}") from e
    return Point(x=x, y=y)


def _read_faces(faces: str | None, faces_file: Path | None) -> str | None:
    if faces_file is not None:
        return faces_file.read_text(encoding="utf-8")
    return faces


def _configure_logging(verbose: int) -> None:
    if verbose >= 1:
        configure_logging(level="DEBUG")
    else:
        configure_logging(level="WARNING")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show version information."""
    if json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"faceblur {__version__}")


@app.command()
def crop(
    image_path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to the photo",
        ),
    ],
    faces: Annotated[
        str | None,
        typer.Option("--faces", "-f", help="Detector output as a JSON array"),
    ] = None,
    faces_file: Annotated[
        Path | None,
        typer.Option("--faces-file", exists=True, help="File holding detector JSON"),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory for cropped faces"),
    ] = None,
    verbose: Annotated[
        int, typer.Option("--verbose", "-v", count=True, help="Increase verbosity")
    ] = 0,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Crop every detected face of a photo into its own image."""
    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        with Image.open(image_path) as image:
            width, height = image.size
    except OSError as e:
        typer.echo(f"Error: cannot read image: {e}", err=True)
        raise typer.Exit(1) from None

    source = SourceImage(
        uri=str(image_path),
        width=width,
        height=height,
        face_data=_read_faces(faces, faces_file),
    )
    logger.info("Cropping faces", image=str(image_path), width=width, height=height)

    pipeline = CropPipeline(PillowCropper(output_dir=output_dir))
    records = asyncio.run(pipeline.run(source))

    if json_output:
        typer.echo(json.dumps([r.to_payload() for r in records], indent=2))
    else:
        typer.echo(f"Cropped {len(records)} face(s)")
        for index, record in enumerate(records):
            typer.echo(
                f"  [{index}] {record.asset_width}x{record.asset_height} -> {record.uri}"
            )


@app.command()
def project(
    image_size: Annotated[str, typer.Option("--image", help="Image size WxH")],
    view_size: Annotated[str, typer.Option("--view", help="Viewport size WxH")],
    faces: Annotated[str, typer.Option("--faces", "-f", help="Detector JSON array")],
) -> None:
    """Print where each face's blur overlay lands in the viewport."""
    original = parse_size(image_size)
    view = parse_size(view_size)

    placements = [
        project_to_view(original, view, clamp_to_image(rect, original)).to_payload()
        for rect in parse_face_data(faces)
    ]
    typer.echo(json.dumps(placements, indent=2))


@app.command()
def hit(
    image_size: Annotated[str, typer.Option("--image", help="Image size WxH")],
    view_size: Annotated[str, typer.Option("--view", help="Viewport size WxH")],
    faces: Annotated[str, typer.Option("--faces", "-f", help="Detector JSON array")],
    tap: Annotated[str, typer.Option("--tap", help="Tap location X,Y in view space")],
) -> None:
    """Resolve a tap to the face overlay it lands on."""
    original = parse_size(image_size)
    view = parse_size(view_size)
    regions = [clamp_to_image(rect, original) for rect in parse_face_data(faces)]

    result = hit_test(parse_point(tap), regions, view, original)
    typer.echo(json.dumps(result.to_payload()))


if __name__ == "__main__":
    app()
