"""
Tests for the OpenCV adapter.

No window is opened: events are fed straight into the adapter callbacks
and frames are rendered off-screen.
"""

import pytest
import numpy as np
import cv2
from unittest.mock import Mock


@pytest.fixture
def adapter(session):
    from yolo_annotation.interfaces import OpenCVAnnotationAdapter

    return OpenCVAnnotationAdapter(session, prompt=Mock(return_value="3"))


class TestInputTranslation:
    def test_mouse_commands(self, adapter):
        from yolo_annotation.core.annotation import CommandType

        down = adapter.command_for_mouse(cv2.EVENT_LBUTTONDOWN, 10, 20)
        assert down.command_type == CommandType.BEGIN_DRAG
        assert down.point == (10, 20)

        up = adapter.command_for_mouse(cv2.EVENT_LBUTTONUP, 30, 40)
        assert up.command_type == CommandType.END_DRAG

        assert adapter.command_for_mouse(cv2.EVENT_RBUTTONDOWN, 1, 1) is None

    def test_mouse_move_only_while_dragging(self, adapter):
        from yolo_annotation.core.annotation import CommandType

        assert adapter.command_for_mouse(cv2.EVENT_MOUSEMOVE, 5, 5) is None

        adapter.on_mouse(cv2.EVENT_LBUTTONDOWN, 10, 10, 0)
        move = adapter.command_for_mouse(cv2.EVENT_MOUSEMOVE, 5, 5)
        assert move.command_type == CommandType.UPDATE_DRAG

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("n", "next_image"),
            ("N", "next_image"),
            ("p", "previous_image"),
            ("P", "previous_image"),
            ("c", "advance_class"),
            ("C", "advance_class"),
            ("d", "delete_last_box"),
            ("D", "delete_last_box"),
        ],
    )
    def test_key_commands(self, adapter, key, expected):
        assert adapter.command_for_key(ord(key)).command_type.value == expected

    def test_escape_exits(self, adapter):
        from yolo_annotation.core.annotation import CommandType

        assert adapter.command_for_key(27).command_type == CommandType.EXIT
        assert not adapter.on_key(27)

    def test_unbound_key(self, adapter):
        assert adapter.command_for_key(ord("x")) is None
        assert adapter.on_key(ord("x"))

    def test_key_code_with_modifier_bits(self, adapter):
        from yolo_annotation.core.annotation import CommandType

        command = adapter.command_for_key(0x100000 | ord("n"))
        assert command.command_type == CommandType.NEXT_IMAGE

    def test_jump_prompts_for_index(self, adapter):
        command = adapter.command_for_key(ord("j"))

        assert command.index == 3
        adapter.prompt.assert_called_once()
        assert "1 to 3" in adapter.prompt.call_args[0][0]

    def test_jump_with_invalid_answer(self, session):
        from yolo_annotation.interfaces import OpenCVAnnotationAdapter

        adapter = OpenCVAnnotationAdapter(session, prompt=Mock(return_value="three"))

        assert adapter.command_for_key(ord("J")) is None
        assert adapter.on_key(ord("J"))
        assert session.state.image_index == 0

    def test_custom_key_bindings(self, session):
        from yolo_annotation.core.annotation import CommandType
        from yolo_annotation.interfaces import OpenCVAnnotationAdapter

        adapter = OpenCVAnnotationAdapter(
            session, key_bindings={"f": CommandType.NEXT_IMAGE}
        )

        assert adapter.command_for_key(ord("F")).command_type == CommandType.NEXT_IMAGE
        assert adapter.command_for_key(ord("n")) is None


class TestRendering:
    def test_draw_payload_does_not_modify_image(self, session):
        from yolo_annotation.interfaces import draw_payload

        session.begin_drag((10, 40))
        session.end_drag((60, 90))
        session.begin_drag((100, 40))
        session.update_drag((150, 90))
        payload = session.get_render_payload()

        vis = draw_payload(payload)

        assert vis.shape == payload.image.shape
        assert not np.any(payload.image)
        # box outline, drag outline and banner text are drawn
        assert np.any(vis[40, 10:60])
        assert np.any(vis[40, 100:150])
        assert np.any(vis[:40, :])

    def test_get_visualization_without_image(self, catalog, classes, blank_loader):
        from yolo_annotation.core.annotation import AnnotationSession
        from yolo_annotation.interfaces import OpenCVAnnotationAdapter

        session = AnnotationSession(catalog, classes, image_loader=blank_loader)
        adapter = OpenCVAnnotationAdapter(session)

        assert adapter.get_visualization() is None

    def test_class_colors_differ(self):
        from yolo_annotation.interfaces.gui_adapter import class_color

        colors = {class_color(i) for i in range(5)}

        assert len(colors) == 5
        for color in colors:
            assert all(0 <= channel <= 255 for channel in color)

    def test_render_requests_ignored_while_window_closed(self, adapter, session, monkeypatch):
        imshow = Mock()
        monkeypatch.setattr(cv2, "imshow", imshow)

        session.advance_class()
        imshow.assert_not_called()

        adapter._window_open = True
        session.advance_class()
        imshow.assert_called_once()
        assert imshow.call_args[0][0] == adapter.window_name
