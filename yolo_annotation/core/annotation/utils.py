"""
Pure utility functions for annotation logic.

Coordinate conversion between pixel rectangles and normalized label
records, plus the text form of one label line. These functions have no
side effects and can be tested in isolation.
"""

import math
from typing import Optional

from .state import NormalizedBox, PixelBox, Point

DEFAULT_MIN_BOX_SIZE = 5
DEFAULT_FLOAT_PRECISION = 6

# decimals kept before truncating, absorbs float noise from the division
_TRUNCATE_DECIMALS = 2


def _check_dimensions(image_width: float, image_height: float) -> None:
    if image_width <= 0 or image_height <= 0:
        raise ValueError(
            f"Image dimensions must be positive, got {image_width}x{image_height}"
        )


def _truncate(value: float) -> int:
    return int(round(value, _TRUNCATE_DECIMALS))


def to_normalized(
    box: PixelBox, class_id: int, image_width: float, image_height: float
) -> NormalizedBox:
    """
    Convert a pixel rectangle to a normalized record.

    Values are not clamped: a box that spills outside the image produces
    fractions outside [0, 1].

    Args:
        box: Rectangle in pixel units
        class_id: Class of the box
        image_width: Image width in pixels
        image_height: Image height in pixels

    Returns:
        Normalized record

    Raises:
        ValueError: If an image dimension is not positive
    """
    _check_dimensions(image_width, image_height)
    width = float(image_width)
    height = float(image_height)
    return NormalizedBox(
        class_id=int(class_id),
        cx=(box.x + box.width / 2.0) / width,
        cy=(box.y + box.height / 2.0) / height,
        w=box.width / width,
        h=box.height / height,
    )


def to_pixel(
    record: NormalizedBox, image_width: float, image_height: float
) -> PixelBox:
    """
    Convert a normalized record back to a pixel rectangle.

    Each coordinate is rounded to 2 decimals, then truncated toward zero,
    so float noise from the division does not cost a pixel: 9.999999
    becomes 10 and 9.994 becomes 9. A round trip through ``to_normalized``
    is off by at most one pixel.

    Args:
        record: Normalized record
        image_width: Image width in pixels
        image_height: Image height in pixels

    Returns:
        Rectangle in pixel units

    Raises:
        ValueError: If an image dimension is not positive
        OverflowError: If a coordinate is too large to be a pixel position
    """
    _check_dimensions(image_width, image_height)
    return PixelBox(
        x=_truncate((record.cx - record.w / 2.0) * image_width),
        y=_truncate((record.cy - record.h / 2.0) * image_height),
        width=_truncate(record.w * image_width),
        height=_truncate(record.h * image_height),
    )


def rect_from_corners(p0: Point, p1: Point) -> PixelBox:
    """Build the rectangle spanned by two opposite drag corners."""
    x0, x1 = sorted((int(p0[0]), int(p1[0])))
    y0, y1 = sorted((int(p0[1]), int(p1[1])))
    return PixelBox(x=x0, y=y0, width=x1 - x0, height=y1 - y0)


def is_large_enough(box: PixelBox, min_size: int = DEFAULT_MIN_BOX_SIZE) -> bool:
    """Whether a drawn box passes the accidental-click filter."""
    return box.width > min_size and box.height > min_size


def format_label_line(
    record: NormalizedBox, precision: int = DEFAULT_FLOAT_PRECISION
) -> str:
    """Render one record as a label file line (without newline)."""
    values = " ".join(
        f"{value:.{precision}f}" for value in (record.cx, record.cy, record.w, record.h)
    )
    return f"{record.class_id} {values}"


def parse_label_line(line: str) -> Optional[NormalizedBox]:
    """
    Parse one label file line.

    Returns:
        The record, or None if the line has the wrong number of fields,
        a field of the wrong type or a value that is nan or infinite
    """
    fields = line.split()
    if len(fields) != 5:
        return None
    try:
        class_id = int(fields[0])
        cx, cy, w, h = (float(value) for value in fields[1:])
    except ValueError:
        return None
    if not all(math.isfinite(value) for value in (cx, cy, w, h)):
        return None
    return NormalizedBox(class_id=class_id, cx=cx, cy=cy, w=w, h=h)
