"""
Core annotation module - UI-agnostic annotation logic.

This module provides the base abstractions for interactive box annotation
that can be used with any UI framework (OpenCV, Tkinter, Web, etc).
"""

from .session import AnnotationSession
from .events import AnnotationEvent, EventType, EventEmitter
from .commands import Command, CommandType
from .state import (
    AnnotationState,
    Box,
    DrawState,
    NormalizedBox,
    PixelBox,
    RenderedBox,
    RenderPayload,
)
from .catalog import ImageCatalog, read_image
from .classes import ClassRegistry
from .store import AnnotationStore
from .errors import (
    AnnotationError,
    AnnotationWriteFailure,
    ClassFileUnreadable,
    DirectoryUnreadable,
    EmptyCatalog,
    EmptyClassList,
    ImageDecodeFailure,
    IndexOutOfRange,
    StartupError,
)

__all__ = [
    "AnnotationSession",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "Command",
    "CommandType",
    "AnnotationState",
    "Box",
    "DrawState",
    "NormalizedBox",
    "PixelBox",
    "RenderedBox",
    "RenderPayload",
    "ImageCatalog",
    "read_image",
    "ClassRegistry",
    "AnnotationStore",
    "AnnotationError",
    "AnnotationWriteFailure",
    "ClassFileUnreadable",
    "DirectoryUnreadable",
    "EmptyCatalog",
    "EmptyClassList",
    "ImageDecodeFailure",
    "IndexOutOfRange",
    "StartupError",
]
