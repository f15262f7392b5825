"""
Class registry: the ordered class names a session can assign.
"""

import logging
from pathlib import Path
from typing import Iterable, List

from .errors import ClassFileUnreadable, EmptyClassList

logger = logging.getLogger(__name__)


class ClassRegistry:
    """Immutable ordered list of class names. Line order assigns the ids."""

    def __init__(self, names: Iterable[str]):
        self._names: List[str] = list(names)
        if not self._names:
            raise ValueError("ClassRegistry needs at least one class")

    @classmethod
    def load(cls, classes_file: Path) -> "ClassRegistry":
        """
        Read one class name per non-empty line.

        Raises:
            ClassFileUnreadable: If the file cannot be read
            EmptyClassList: If the file holds no names
        """
        classes_file = Path(classes_file)
        try:
            text = classes_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ClassFileUnreadable(classes_file, str(e)) from e

        names = [line for line in text.splitlines() if line.strip()]
        if not names:
            raise EmptyClassList(classes_file)

        logger.info(f"Loaded {len(names)} classes")
        return cls(names)

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def advance(self, current_id: int) -> int:
        """Id of the class after ``current_id``, wrapping to the first."""
        return (current_id + 1) % len(self._names)

    def name_of(self, class_id: int) -> str:
        # ids from foreign label files may not match this registry
        if 0 <= class_id < len(self._names):
            return self._names[class_id]
        return str(class_id)
