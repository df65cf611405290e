from datetime import datetime

import numpy as np
import pytest

from camera_viewer.entities.common import Rect
from camera_viewer.entities.control import ControlDescription, ControlRange
from camera_viewer.entities.events import EventKind, WindowEvent
from camera_viewer.entities.exposure import ExposureMode, ExposureModeKind
from camera_viewer.entities.frame import CaptureFormat, Frame
from camera_viewer.entities.geometry import GeometryState


class TestFrame:
    def test_frame_creation(self):
        frame = Frame(
            pixels=np.zeros((720, 1280, 3), dtype=np.uint8),
            frame_number=3,
            timestamp=datetime.now(),
        )

        assert frame.width == 1280
        assert frame.height == 720
        assert frame.size == (1280, 720)
        assert frame.frame_number == 3

    def test_pixels_are_read_only(self):
        source = np.zeros((2, 2, 3), dtype=np.uint8)
        frame = Frame(pixels=source)

        with pytest.raises(ValueError):
            frame.pixels[0, 0, 0] = 255

        source[0, 0, 0] = 1
        assert frame.pixels[0, 0, 0] == 1

    @pytest.mark.parametrize(
        "pixels",
        [
            np.zeros((4, 4), dtype=np.uint8),
            np.zeros((4, 4, 4), dtype=np.uint8),
            np.zeros((4, 4, 3), dtype=np.float32),
        ],
    )
    def test_frame_validation(self, pixels):
        with pytest.raises(ValueError):
            Frame(pixels=pixels)

    def test_negative_frame_number_rejected(self):
        with pytest.raises(ValueError):
            Frame(pixels=np.zeros((1, 1, 3), dtype=np.uint8), frame_number=-1)


class TestCaptureFormat:
    def test_defaults_request_highest_resolution(self):
        fmt = CaptureFormat()

        assert fmt.highest_resolution is True

    def test_explicit_resolution_required(self):
        with pytest.raises(ValueError):
            CaptureFormat(highest_resolution=False, width=640)

        fmt = CaptureFormat(highest_resolution=False, width=640, height=480)
        assert (fmt.width, fmt.height) == (640, 480)


class TestControlRange:
    def test_clamp(self):
        control_range = ControlRange(minimum=-10, maximum=10, default=0)

        assert control_range.clamp(-50) == -10
        assert control_range.clamp(50) == 10
        assert control_range.clamp(3) == 3
        assert control_range.step == 1

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError, match="exceeds maximum"):
            ControlRange(minimum=5, maximum=1, default=3)

    def test_description_is_frozen(self):
        description = ControlDescription(
            range=ControlRange(minimum=0, maximum=1, default=0), value=1
        )

        with pytest.raises(Exception):
            description.value = 0


class TestExposureMode:
    def test_manual(self):
        mode = ExposureMode.manual(current=42)

        assert mode.kind == ExposureModeKind.MANUAL
        assert mode.fullbright is False
        assert mode.current == 42
        assert mode.tag == ""
        assert not mode.is_auto

    def test_auto(self):
        mode = ExposureMode.auto()

        assert mode.is_auto
        assert mode.tag == "AUTO"

    def test_fullbright_tag(self):
        assert ExposureMode.manual(current=1, fullbright=True).tag == "FULLBRIGHT"

    def test_equality_by_value(self):
        assert ExposureMode.manual(current=1) == ExposureMode.manual(current=1)
        assert ExposureMode.manual(current=1) != ExposureMode.manual(current=2)


class TestWindowEvent:
    def test_constructors(self):
        assert WindowEvent.quit().kind == EventKind.QUIT

        resize = WindowEvent.resize(800, 600)
        assert (resize.width, resize.height) == (800, 600)

        key = WindowEvent.key_down("G")
        assert key.kind == EventKind.KEY_DOWN
        assert key.key == "g"


class TestGeometry:
    def test_aspect_from_native_size(self):
        state = GeometryState(native_width=1280, native_height=720)

        assert state.aspect == pytest.approx(16 / 9)

    def test_rect_size(self):
        assert Rect(width=3, height=2).size == (3, 2)
        assert Rect(width=3, height=2).x == 0
