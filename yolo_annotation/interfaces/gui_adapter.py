"""
GUI adapter for annotation session.

Bridges the AnnotationSession with an OpenCV HighGUI window.
"""

import logging
from gettext import gettext as _
from typing import Callable, Dict, Optional, Tuple
import numpy as np
import cv2

from ..core.annotation import (
    AnnotationEvent,
    AnnotationSession,
    Command,
    CommandType,
    EventType,
    RenderPayload,
)

logger = logging.getLogger(__name__)

ESC_KEY = 27

DEFAULT_KEY_BINDINGS: Dict[str, CommandType] = {
    "n": CommandType.NEXT_IMAGE,
    "p": CommandType.PREVIOUS_IMAGE,
    "c": CommandType.ADVANCE_CLASS,
    "d": CommandType.DELETE_LAST_BOX,
    "j": CommandType.JUMP_TO_IMAGE,
}

DRAG_COLOR = (0, 255, 0)
BANNER_COLOR = (0, 255, 0)


def class_color(class_id: int, colormap: str = "tab10") -> Tuple[int, int, int]:
    """
    BGR colour for a class id.

    Args:
        class_id: Class index
        colormap: Matplotlib colormap name

    Returns:
        BGR tuple usable by OpenCV drawing functions
    """
    import matplotlib.pyplot as plt

    cmap = plt.get_cmap(colormap)
    n_colors = getattr(cmap, "N", 256)
    r, g, b = np.array(cmap((class_id % n_colors) / max(n_colors - 1, 1))[:3]) * 255
    return (int(b), int(g), int(r))


def draw_payload(
    payload: RenderPayload,
    line_thickness: int = 2,
    font_scale: float = 0.5,
    banner_font_scale: float = 0.75,
    colormap: str = "tab10",
) -> np.ndarray:
    """
    Draw one frame for display.

    Args:
        payload: Render payload from the session
        line_thickness: Box outline thickness
        font_scale: Scale of the box labels
        banner_font_scale: Scale of the class/position banner
        colormap: Matplotlib colormap used for class colours

    Returns:
        BGR image with boxes, labels and the banner drawn
    """
    vis = payload.image.copy()

    for box in payload.boxes:
        color = class_color(box.class_id, colormap)
        cv2.rectangle(vis, box.rect.top_left, box.rect.bottom_right, color, line_thickness)
        cv2.putText(
            vis,
            box.class_name,
            (box.rect.x, box.rect.y - 5),
            cv2.FONT_HERSHEY_SIMPLEX,
            font_scale,
            color,
            line_thickness,
        )

    if payload.drag_rect is not None:
        cv2.rectangle(
            vis,
            payload.drag_rect.top_left,
            payload.drag_rect.bottom_right,
            DRAG_COLOR,
            line_thickness,
        )

    banner = _("Current Class: {name}").format(name=payload.class_name)
    cv2.putText(
        vis,
        banner,
        (10, 30),
        cv2.FONT_HERSHEY_SIMPLEX,
        banner_font_scale,
        BANNER_COLOR,
        2,
    )
    position = f"{payload.image_number}/{payload.image_count}"
    cv2.putText(
        vis,
        position,
        (10, 60),
        cv2.FONT_HERSHEY_SIMPLEX,
        banner_font_scale,
        BANNER_COLOR,
        2,
    )
    return vis


class OpenCVAnnotationAdapter:
    """
    Adapter connecting AnnotationSession to an OpenCV window.

    Provides the layer that:
    - Translates mouse and key events into session commands
    - Re-draws the window when the session requests a render
    - Runs the key polling loop
    """

    def __init__(
        self,
        session: AnnotationSession,
        window_name: str = "YOLO Annotator",
        key_bindings: Optional[Dict[str, CommandType]] = None,
        prompt: Callable[[str], str] = input,
        line_thickness: int = 2,
        font_scale: float = 0.5,
        banner_font_scale: float = 0.75,
        colormap: str = "tab10",
    ):
        """
        Initialize adapter.

        Args:
            session: Core annotation session
            window_name: Title of the OpenCV window
            key_bindings: Lowercase key to command mapping, both cases bind
            prompt: Reads the target index for jumps
            line_thickness: Box outline thickness
            font_scale: Scale of the box labels
            banner_font_scale: Scale of the class/position banner
            colormap: Matplotlib colormap used for class colours
        """
        self.session = session
        self.window_name = window_name
        self.prompt = prompt
        self.line_thickness = line_thickness
        self.font_scale = font_scale
        self.banner_font_scale = banner_font_scale
        self.colormap = colormap

        if key_bindings is None:
            key_bindings = DEFAULT_KEY_BINDINGS
        self._key_bindings: Dict[int, CommandType] = {ESC_KEY: CommandType.EXIT}
        for key, command_type in key_bindings.items():
            self._key_bindings[ord(key.lower())] = command_type
            self._key_bindings[ord(key.upper())] = command_type

        self._window_open = False

        # Subscribe to session events
        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        self.session.events.on(EventType.RENDER_REQUESTED, self._on_render_requested)

    def _on_render_requested(self, event: AnnotationEvent):
        """Handle render request."""
        if self._window_open:
            self.show(event.data["payload"])

    def show(self, payload: RenderPayload):
        cv2.imshow(self.window_name, self.get_visualization(payload))

    def get_visualization(self, payload: Optional[RenderPayload] = None) -> Optional[np.ndarray]:
        """
        Get visualization for display.

        Returns:
            BGR visualization image, or None if no image is loaded
        """
        if payload is None:
            payload = self.session.get_render_payload()
        if payload is None:
            return None
        return draw_payload(
            payload,
            line_thickness=self.line_thickness,
            font_scale=self.font_scale,
            banner_font_scale=self.banner_font_scale,
            colormap=self.colormap,
        )

    # Input translation

    def command_for_mouse(self, event: int, x: int, y: int) -> Optional[Command]:
        """Translate an OpenCV mouse event into a command."""
        if event == cv2.EVENT_LBUTTONDOWN:
            return Command.begin_drag(x, y)
        if event == cv2.EVENT_MOUSEMOVE:
            if not self.session.state.draw.is_dragging:
                return None
            return Command.update_drag(x, y)
        if event == cv2.EVENT_LBUTTONUP:
            return Command.end_drag(x, y)
        return None

    def command_for_key(self, key: int) -> Optional[Command]:
        """
        Translate a key code into a command.

        Jumps ask for the target index through ``prompt``. Non-numeric
        answers are reported and produce no command.
        """
        command_type = self._key_bindings.get(key & 0xFF)
        if command_type is None:
            return None
        if command_type != CommandType.JUMP_TO_IMAGE:
            return Command.simple(command_type)

        answer = self.prompt(
            _("Enter image index (1 to {total}): ").format(total=len(self.session.catalog))
        )
        try:
            return Command.jump_to(int(answer.strip()))
        except ValueError:
            logger.error(_("Invalid index: {answer!r}").format(answer=answer))
            return None

    def on_mouse(self, event, x, y, flags, param=None):
        """OpenCV mouse callback."""
        command = self.command_for_mouse(event, x, y)
        if command is not None:
            self.session.handle(command)

    def on_key(self, key: int) -> bool:
        """
        Handle one key press.

        Returns:
            False when the session should stop
        """
        command = self.command_for_key(key)
        if command is None:
            return True
        return self.session.handle(command)

    def _window_closed(self) -> bool:
        return cv2.getWindowProperty(self.window_name, cv2.WND_PROP_VISIBLE) < 1

    def run(self):
        """Open the window and process input until exit."""
        cv2.namedWindow(self.window_name, cv2.WINDOW_NORMAL)
        cv2.setMouseCallback(self.window_name, self.on_mouse)
        self._window_open = True
        try:
            self.session.start()
            while True:
                key = cv2.waitKey(1)
                if key != -1 and not self.on_key(key):
                    break
                if self._window_closed():
                    logger.debug("Window closed")
                    break
        finally:
            self._window_open = False
            cv2.destroyAllWindows()
