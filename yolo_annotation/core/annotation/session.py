"""
Annotation session management.

Core logic for managing an interactive box annotation session.
UI-agnostic - can be used with any interface (GUI, Web, CLI).
"""

import logging
from gettext import gettext as _
from typing import Callable, Dict, Optional
from pathlib import Path
import numpy as np

from .catalog import ImageCatalog, read_image
from .classes import ClassRegistry
from .commands import Command, CommandType
from .errors import AnnotationError, AnnotationWriteFailure, ImageDecodeFailure, IndexOutOfRange
from .events import EventEmitter, AnnotationEvent, EventType
from .state import AnnotationState, Box, DrawState, Point, RenderedBox, RenderPayload
from .store import AnnotationStore
from .utils import DEFAULT_MIN_BOX_SIZE, is_large_enough, rect_from_corners

logger = logging.getLogger(__name__)


class AnnotationSession:
    """
    Manages the state and logic of an annotation session.

    This class handles:
    - The box drawing state machine (Idle -> Dragging -> Idle)
    - Navigation over the image catalog
    - Save/load coordination with the annotation store
    - Event emission for UI updates

    Every mutation of the BoxSet is written to disk before the call
    returns, and moving to another image flushes the outgoing BoxSet
    before the incoming one is loaded.

    The session is UI-agnostic - it consumes ``Command`` values and emits
    events that UI components can listen to, rather than directly
    manipulating UI elements.
    """

    def __init__(
        self,
        catalog: ImageCatalog,
        classes: ClassRegistry,
        store: Optional[AnnotationStore] = None,
        image_loader: Callable[[Path], np.ndarray] = read_image,
        min_box_size: int = DEFAULT_MIN_BOX_SIZE,
    ):
        """
        Initialize annotation session.

        Args:
            catalog: Images to annotate, in navigation order
            classes: Class names that boxes can be assigned to
            store: Label file storage (default: ``.txt`` next to each image)
            image_loader: Decodes an image path into an array, raising
                ImageDecodeFailure when it cannot
            min_box_size: Boxes must be strictly wider and taller than this
        """
        if len(catalog) == 0:
            raise ValueError("Catalog is empty")

        self.catalog = catalog
        self.classes = classes
        self.store = store if store is not None else AnnotationStore()
        self.image_loader = image_loader
        self.min_box_size = min_box_size

        # Current state
        self.state = AnnotationState()

        # Current image
        self._image: Optional[np.ndarray] = None

        # Event emitter for UI notifications
        self.events = EventEmitter()

        self._handlers: Dict[CommandType, Callable[[Command], object]] = {
            CommandType.NEXT_IMAGE: lambda command: self.next_image(),
            CommandType.PREVIOUS_IMAGE: lambda command: self.previous_image(),
            CommandType.ADVANCE_CLASS: lambda command: self.advance_class(),
            CommandType.DELETE_LAST_BOX: lambda command: self.delete_last(),
            CommandType.JUMP_TO_IMAGE: lambda command: self.jump_to(command.index),
            CommandType.BEGIN_DRAG: lambda command: self.begin_drag(command.point),
            CommandType.UPDATE_DRAG: lambda command: self.update_drag(command.point),
            CommandType.END_DRAG: lambda command: self.end_drag(command.point),
        }

    @property
    def image(self) -> Optional[np.ndarray]:
        return self._image

    @property
    def processed_count(self) -> int:
        return self.state.processed_count

    def start(self) -> bool:
        """
        Load the first image of the catalog.

        Returns:
            True if the image could be loaded
        """
        loaded = self._load_image_at(self.state.image_index)
        self.events.emit(
            AnnotationEvent(
                EventType.SESSION_STARTED,
                {"num_images": len(self.catalog), "num_classes": len(self.classes)},
            )
        )
        return loaded

    def handle(self, command: Command) -> bool:
        """
        Apply one command coming from an input adapter.

        Recoverable errors are reported and absorbed, the session stays
        usable after any single failed command.

        Returns:
            False if the command asks to exit, True otherwise
        """
        if command.command_type == CommandType.EXIT:
            return False

        handler = self._handlers[command.command_type]
        try:
            handler(command)
        except AnnotationError as e:
            logger.error(str(e))
            self.events.emit(
                AnnotationEvent(
                    EventType.COMMAND_FAILED,
                    {"command": command.command_type.value, "error": str(e)},
                )
            )
        return True

    # Drawing

    def begin_drag(self, point: Point) -> bool:
        """
        Start drawing a box at ``point``.

        Returns:
            True if the drag started, False if ignored (no image loaded or
            a drag already in progress)
        """
        if self._image is None:
            logger.debug("Ignoring drag start, no image loaded")
            return False
        if self.state.draw.is_dragging:
            logger.debug("Ignoring drag start, already dragging")
            return False

        self.state.draw = DrawState.dragging(point, point)
        self._request_render()
        return True

    def update_drag(self, point: Point) -> bool:
        """Move the live corner of the box being drawn. Never persists."""
        if not self.state.draw.is_dragging:
            return False

        self.state.draw = DrawState.dragging(self.state.draw.start, point)
        self._request_render()
        return True

    def end_drag(self, point: Point) -> Optional[Box]:
        """
        Finish drawing and commit the box if it is large enough.

        A committed box is appended to the BoxSet with the current class
        and the BoxSet is saved immediately.

        Returns:
            The committed box, or None if nothing was committed
        """
        if not self.state.draw.is_dragging:
            return None

        rect = rect_from_corners(self.state.draw.start, point)
        self.state.draw = DrawState.idle()

        if not is_large_enough(rect, self.min_box_size):
            logger.debug(f"Discarding {rect.width}x{rect.height} box")
            self.events.emit(
                AnnotationEvent(EventType.BOX_DISCARDED, {"rect": rect.to_dict()})
            )
            self._request_render()
            return None

        box = Box(rect=rect, class_id=self.state.class_id)
        self.state.boxes.append(box)
        self.events.emit(
            AnnotationEvent(
                EventType.BOX_ADDED,
                {"box": box.to_dict(), "num_boxes": len(self.state.boxes)},
            )
        )
        self._persist()
        self._request_render()
        return box

    def delete_last(self) -> Optional[Box]:
        """
        Remove the most recently created box and save.

        Returns:
            The removed box, or None if the BoxSet was empty
        """
        if not self.state.boxes:
            return None

        box = self.state.boxes.pop()
        self.events.emit(
            AnnotationEvent(
                EventType.BOX_REMOVED,
                {"box": box.to_dict(), "num_boxes": len(self.state.boxes)},
            )
        )
        self._persist()
        self._request_render()
        return box

    def advance_class(self) -> int:
        """Select the next class. The choice itself is not saved."""
        self.state.class_id = self.classes.advance(self.state.class_id)
        self.events.emit(
            AnnotationEvent(
                EventType.CLASS_CHANGED,
                {
                    "class_id": self.state.class_id,
                    "class_name": self.classes.name_of(self.state.class_id),
                },
            )
        )
        self._request_render()
        return self.state.class_id

    # Navigation

    def next_image(self) -> bool:
        """Move to the next image. No-op on the last image."""
        if self.state.image_index >= len(self.catalog) - 1:
            return False
        return self._switch_to(self.state.image_index + 1)

    def previous_image(self) -> bool:
        """Move to the previous image. No-op on the first image."""
        if self.state.image_index <= 0:
            return False
        return self._switch_to(self.state.image_index - 1)

    def jump_to(self, index: int) -> bool:
        """
        Move to an image by its one-based position in the catalog.

        Raises:
            IndexOutOfRange: If ``index`` is not between 1 and the catalog size
        """
        if not 1 <= index <= len(self.catalog):
            raise IndexOutOfRange(index, len(self.catalog))

        switched = self._switch_to(index - 1)
        if switched:
            logger.info(
                _("Jumped to image {index} of {total}").format(
                    index=index, total=len(self.catalog)
                )
            )
        return switched

    def get_render_payload(self) -> Optional[RenderPayload]:
        """
        Get data needed for display.

        Returns:
            Render payload, or None if no image is loaded
        """
        if self._image is None:
            return None

        draw = self.state.draw
        drag_rect = rect_from_corners(draw.start, draw.current) if draw.is_dragging else None

        return RenderPayload(
            image=self._image,
            image_path=self.state.image_path,
            image_number=self.state.image_index + 1,
            image_count=len(self.catalog),
            boxes=[
                RenderedBox(
                    rect=box.rect,
                    class_id=box.class_id,
                    class_name=self.classes.name_of(box.class_id),
                )
                for box in self.state.boxes
            ],
            class_id=self.state.class_id,
            class_name=self.classes.name_of(self.state.class_id),
            drag_rect=drag_rect,
        )

    def _switch_to(self, index: int) -> bool:
        """Flush the outgoing BoxSet, then load the image at ``index``."""
        self._persist()
        return self._load_image_at(index)

    def _load_image_at(self, index: int) -> bool:
        """
        Load an image and its boxes.

        On failure the previous image, BoxSet and cursor are kept.
        """
        image_path = self.catalog[index]
        try:
            image = self.image_loader(image_path)
            height, width = image.shape[:2]
            boxes = self.store.load(image_path, width, height)
        except ImageDecodeFailure as e:
            self._report_load_failure(image_path, str(e))
            return False
        except (OSError, UnicodeDecodeError) as e:
            self._report_load_failure(
                image_path,
                _("Could not read annotations for {path}: {error}").format(
                    path=image_path, error=e
                ),
            )
            return False

        self._image = image
        self.state.image_index = index
        self.state.image_path = image_path
        self.state.image_shape = image.shape
        self.state.boxes = boxes
        self.state.draw = DrawState.idle()

        logger.debug(f"Loaded {image_path} with {len(boxes)} boxes")
        self.events.emit(
            AnnotationEvent(
                EventType.IMAGE_LOADED,
                {
                    "path": image_path,
                    "index": index,
                    "image_shape": image.shape,
                    "num_boxes": len(boxes),
                },
            )
        )
        self._request_render()
        return True

    def _report_load_failure(self, image_path: Path, message: str):
        logger.error(message)
        self.events.emit(
            AnnotationEvent(
                EventType.IMAGE_LOAD_FAILED, {"path": image_path, "error": message}
            )
        )

    def _persist(self) -> bool:
        """Save the current BoxSet. Returns True on a successful write."""
        if self._image is None:
            return False

        width, height = self.state.image_size
        try:
            label_path = self.store.save(
                self.state.image_path, self.state.boxes, width, height
            )
        except AnnotationWriteFailure as e:
            logger.error(str(e))
            self.events.emit(
                AnnotationEvent(
                    EventType.SAVE_FAILED,
                    {"path": e.label_path, "error": str(e)},
                )
            )
            return False

        self.state.processed_count += 1
        logger.info(
            _("Processed {count}/{total} images").format(
                count=self.state.processed_count, total=len(self.catalog)
            )
        )
        self.events.emit(
            AnnotationEvent(
                EventType.ANNOTATIONS_SAVED,
                {
                    "path": label_path,
                    "num_boxes": len(self.state.boxes),
                    "processed_count": self.state.processed_count,
                },
            )
        )
        return True

    def _request_render(self):
        payload = self.get_render_payload()
        if payload is not None:
            self.events.emit(
                AnnotationEvent(EventType.RENDER_REQUESTED, {"payload": payload})
            )
