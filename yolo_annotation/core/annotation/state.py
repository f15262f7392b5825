"""
State management for annotation sessions.

Contains data classes representing the boxes, the drag gesture and the
cursor of an annotation session.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
import numpy as np


Point = Tuple[int, int]


@dataclass(frozen=True)
class PixelBox:
    """Rectangle in pixel units, anchored at its top-left corner."""

    x: int
    y: int
    width: int
    height: int

    @property
    def top_left(self) -> Point:
        return (self.x, self.y)

    @property
    def bottom_right(self) -> Point:
        return (self.x + self.width, self.y + self.height)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class NormalizedBox:
    """One label file record: class id plus center/size as image fractions."""

    class_id: int
    cx: float
    cy: float
    w: float
    h: float

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "class_id": self.class_id,
            "cx": self.cx,
            "cy": self.cy,
            "w": self.w,
            "h": self.h,
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        return cls(
            class_id=int(data["class_id"]),
            cx=float(data["cx"]),
            cy=float(data["cy"]),
            w=float(data["w"]),
            h=float(data["h"]),
        )


@dataclass(frozen=True)
class Box:
    """A pixel rectangle tagged with the class it annotates."""

    rect: PixelBox
    class_id: int

    def to_dict(self):
        return {"rect": self.rect.to_dict(), "class_id": self.class_id}


@dataclass(frozen=True)
class DrawState:
    """
    State of the box drawing gesture.

    Idle when ``start`` is None, otherwise Dragging from ``start`` to
    ``current``. Never persisted.
    """

    start: Optional[Point] = None
    current: Optional[Point] = None

    @property
    def is_dragging(self) -> bool:
        return self.start is not None

    @classmethod
    def idle(cls) -> "DrawState":
        return cls()

    @classmethod
    def dragging(cls, start: Point, current: Point) -> "DrawState":
        return cls(start=start, current=current)


@dataclass
class RenderedBox:
    """Box resolved for display."""

    rect: PixelBox
    class_id: int
    class_name: str


@dataclass
class RenderPayload:
    """Everything a display adapter needs to draw one frame."""

    image: np.ndarray
    image_path: Path
    image_number: int
    image_count: int
    boxes: List[RenderedBox]
    class_id: int
    class_name: str
    drag_rect: Optional[PixelBox] = None


@dataclass
class AnnotationState:
    """
    Complete state of an annotation session.

    Holds the cursor into the image catalog and the class registry, the
    BoxSet of the active image and the drag gesture. Only the BoxSet of
    ``image_index`` is ever materialized.
    """

    image_index: int = 0
    class_id: int = 0
    image_path: Optional[Path] = None
    image_shape: Optional[Tuple[int, ...]] = None
    boxes: List[Box] = field(default_factory=list)
    draw: DrawState = field(default_factory=DrawState.idle)
    processed_count: int = 0

    @property
    def image_size(self) -> Optional[Tuple[int, int]]:
        """(width, height) of the active image, if any."""
        if self.image_shape is None:
            return None
        height, width = self.image_shape[:2]
        return (width, height)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "image_index": self.image_index,
            "class_id": self.class_id,
            "image_path": str(self.image_path) if self.image_path else None,
            "image_shape": self.image_shape,
            "boxes": [box.to_dict() for box in self.boxes],
            "is_dragging": self.draw.is_dragging,
            "processed_count": self.processed_count,
        }
