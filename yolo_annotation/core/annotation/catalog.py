"""
Image catalog: the ordered set of images an annotation session walks.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Iterable, Iterator, List

import cv2
import numpy as np

from .errors import DirectoryUnreadable, EmptyCatalog, ImageDecodeFailure

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp")


class ImageCatalog(Sequence):
    """
    Sorted, immutable list of image paths.

    The order is the lexicographic order of the path strings and defines
    navigation order.
    """

    def __init__(self, paths: Iterable[Path]):
        self._paths: List[Path] = sorted(
            {Path(p) for p in paths}, key=lambda p: str(p)
        )

    @classmethod
    def discover(
        cls,
        directory: Path,
        extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS,
    ) -> "ImageCatalog":
        """
        List the images directly under a directory.

        Args:
            directory: Directory to scan, not recursively
            extensions: Allowed extensions, compared case-insensitively

        Returns:
            Catalog with at least one image

        Raises:
            DirectoryUnreadable: If the directory cannot be listed
            EmptyCatalog: If no file has an allowed extension
        """
        directory = Path(directory)
        allowed = {ext.lower() for ext in extensions}
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise DirectoryUnreadable(directory, e.strerror) from e

        paths = [
            entry
            for entry in entries
            if entry.suffix.lower() in allowed and entry.is_file()
        ]
        if not paths:
            raise EmptyCatalog(directory)

        catalog = cls(paths)
        logger.info(f"Found {len(catalog)} images in {directory}")
        return catalog

    def __len__(self) -> int:
        return len(self._paths)

    def __getitem__(self, index):
        return self._paths[index]

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __repr__(self) -> str:
        return f"ImageCatalog({len(self)} images)"


def read_image(image_path: Path) -> np.ndarray:
    """
    Decode an image file.

    Raises:
        ImageDecodeFailure: If OpenCV cannot decode the file
    """
    image = cv2.imread(str(image_path))
    if image is None:
        raise ImageDecodeFailure(image_path)
    return image
