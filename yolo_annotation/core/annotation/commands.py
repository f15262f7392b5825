"""
Commands accepted by an annotation session.

Input adapters translate raw pointer and key events into these values and
hand them to ``AnnotationSession.handle``. The session never sees the
input source itself.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class CommandType(Enum):
    """Types of commands an input adapter can emit."""

    # Discrete commands
    EXIT = "exit"
    NEXT_IMAGE = "next_image"
    PREVIOUS_IMAGE = "previous_image"
    ADVANCE_CLASS = "advance_class"
    DELETE_LAST_BOX = "delete_last_box"
    JUMP_TO_IMAGE = "jump_to_image"

    # Pointer commands
    BEGIN_DRAG = "begin_drag"
    UPDATE_DRAG = "update_drag"
    END_DRAG = "end_drag"


POINTER_COMMANDS = frozenset(
    {CommandType.BEGIN_DRAG, CommandType.UPDATE_DRAG, CommandType.END_DRAG}
)


@dataclass(frozen=True)
class Command:
    """Command sent to the session."""

    command_type: CommandType
    point: Optional[Tuple[int, int]] = None
    index: Optional[int] = None

    def __post_init__(self):
        if self.command_type in POINTER_COMMANDS and self.point is None:
            raise ValueError(f"{self.command_type.value} needs a point")
        if self.command_type == CommandType.JUMP_TO_IMAGE and self.index is None:
            raise ValueError("jump_to_image needs an index")

    @classmethod
    def begin_drag(cls, x: int, y: int) -> "Command":
        return cls(CommandType.BEGIN_DRAG, point=(int(x), int(y)))

    @classmethod
    def update_drag(cls, x: int, y: int) -> "Command":
        return cls(CommandType.UPDATE_DRAG, point=(int(x), int(y)))

    @classmethod
    def end_drag(cls, x: int, y: int) -> "Command":
        return cls(CommandType.END_DRAG, point=(int(x), int(y)))

    @classmethod
    def jump_to(cls, index: int) -> "Command":
        """Jump to a one-based image index."""
        return cls(CommandType.JUMP_TO_IMAGE, index=int(index))

    @classmethod
    def simple(cls, command_type: CommandType) -> "Command":
        return cls(command_type)
