"""
Annotation storage.

Reads and writes the per-image label file. The label file sits next to
the image, with the same stem and the label extension:

    images/
        0001.jpg
        0001.txt    - one ``class cx cy w h`` line per box
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import AnnotationWriteFailure
from .state import Box, NormalizedBox
from .utils import (
    DEFAULT_FLOAT_PRECISION,
    format_label_line,
    parse_label_line,
    to_normalized,
    to_pixel,
)

logger = logging.getLogger(__name__)

DEFAULT_LABEL_EXTENSION = ".txt"


class AnnotationStore:
    """
    Storage service for normalized label files.

    Writes always overwrite the whole file, so the file on disk mirrors the
    BoxSet that was saved last.
    """

    def __init__(
        self,
        label_extension: str = DEFAULT_LABEL_EXTENSION,
        float_precision: int = DEFAULT_FLOAT_PRECISION,
    ):
        if not label_extension.startswith("."):
            label_extension = "." + label_extension
        self.label_extension = label_extension
        self.float_precision = float_precision

    def label_path_for(self, image_path: Path) -> Path:
        """Label file path derived from an image path."""
        return Path(image_path).with_suffix(self.label_extension)

    def save(
        self,
        image_path: Path,
        boxes: Sequence[Box],
        image_width: int,
        image_height: int,
    ) -> Path:
        """
        Overwrite the label file of an image.

        An empty BoxSet produces an empty file.

        Args:
            image_path: Image the boxes belong to
            boxes: Boxes in creation order
            image_width: Image width in pixels
            image_height: Image height in pixels

        Returns:
            Path to the written label file

        Raises:
            AnnotationWriteFailure: If the file cannot be written
        """
        label_path = self.label_path_for(image_path)
        lines = [
            format_label_line(
                to_normalized(box.rect, box.class_id, image_width, image_height),
                self.float_precision,
            )
            + "\n"
            for box in boxes
        ]
        try:
            with open(label_path, "w", encoding="utf-8") as f:
                f.writelines(lines)
        except OSError as e:
            raise AnnotationWriteFailure(label_path, e.strerror) from e

        logger.debug(f"Saved {len(lines)} boxes to {label_path}")
        return label_path

    def scan(self, image_path: Path) -> Iterator[Tuple[int, Optional[NormalizedBox]]]:
        """
        Walk the non-blank lines of an image's label file.

        Yields:
            ``(lineno, record)`` pairs, one-based line numbers, ``record``
            is None for a malformed line. Nothing for a missing file.

        Raises:
            OSError: If the file exists but cannot be read
            UnicodeDecodeError: If the file is not UTF-8
        """
        label_path = self.label_path_for(image_path)
        if not label_path.exists():
            return

        with open(label_path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                yield lineno, parse_label_line(line)

    def read_records(self, image_path: Path) -> List[NormalizedBox]:
        """
        Read the raw records of an image's label file.

        A missing file means the image has no annotations yet. Malformed
        lines are skipped.
        """
        records = []
        for lineno, record in self.scan(image_path):
            if record is None:
                logger.debug(
                    f"Skipping malformed line {lineno} in {self.label_path_for(image_path)}"
                )
                continue
            records.append(record)
        return records

    def load(self, image_path: Path, image_width: int, image_height: int) -> List[Box]:
        """
        Load the boxes of an image in pixel units.

        Records too large to map to pixel positions are skipped like
        malformed lines.

        Args:
            image_path: Image whose label file is read
            image_width: Image width in pixels
            image_height: Image height in pixels

        Returns:
            Boxes in file order, empty if there is no label file
        """
        boxes = []
        for record in self.read_records(image_path):
            try:
                rect = to_pixel(record, image_width, image_height)
            except OverflowError:
                logger.debug(f"Skipping out of range record {record} for {image_path}")
                continue
            boxes.append(Box(rect=rect, class_id=record.class_id))
        return boxes
