from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from camera_viewer.entities.common import BlitMode, ControlId, Rect
from camera_viewer.entities.control import ControlDescription, ControlRange
from camera_viewer.entities.events import WindowEvent
from camera_viewer.entities.frame import Frame
from camera_viewer.frameworks.exceptions import (
    CaptureError,
    ControlWriteError,
    FrameCaptureError,
    FrameDecodeError,
)
from camera_viewer.usecases.interfaces.capture import CaptureDevice
from camera_viewer.usecases.interfaces.presentation import ViewerWindow


def uniform_pixels(width: int, height: int, value: int) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.uint8)


class FakeCaptureDevice(CaptureDevice):
    """In-memory camera; raw frames are already RGB arrays.

    ``render`` receives the device itself so frames can depend on the
    control values last written.
    """

    def __init__(
        self,
        controls: Optional[Dict[ControlId, ControlDescription]] = None,
        render: Optional[Callable[["FakeCaptureDevice"], Optional[np.ndarray]]] = None,
        resolution: Tuple[int, int] = (64, 32),
    ):
        self.controls = dict(controls or {})
        self.values = {cid: desc.value for cid, desc in self.controls.items()}
        self.writes: List[Tuple[ControlId, int]] = []
        self.failing_writes = False
        self.write_errors: Dict[ControlId, Exception] = {}
        self.refuse_frame_rate = False
        self.failing_reads = 0
        self.render = render or (lambda device: uniform_pixels(*resolution, 128))
        self._resolution = resolution
        self.stream_open = False
        self.closed = False
        self.requested_fps: Optional[int] = None

    @property
    def resolution(self) -> Tuple[int, int]:
        return self._resolution

    def set_frame_rate(self, fps: int) -> None:
        if self.refuse_frame_rate:
            raise CaptureError(f"simulated refusal of {fps} fps")
        self.requested_fps = fps

    def open_stream(self) -> None:
        self.stream_open = True

    def next_frame(self) -> np.ndarray:
        if self.failing_reads > 0:
            self.failing_reads -= 1
            raise FrameCaptureError("simulated read failure")
        return self.render(self)

    def decode(self, raw_frame) -> Frame:
        if raw_frame is None:
            raise FrameDecodeError("empty frame")
        return Frame(pixels=raw_frame)

    def query_control(self, control_id: ControlId) -> Optional[ControlDescription]:
        return self.controls.get(control_id)

    def write_control(self, control_id: ControlId, value: int) -> None:
        self.writes.append((control_id, value))
        if control_id in self.write_errors:
            raise self.write_errors[control_id]
        if self.failing_writes:
            raise ControlWriteError(control_id.value, value, "simulated failure")
        self.values[control_id] = value

    def close(self) -> None:
        self.closed = True


class FakeWindow(ViewerWindow):
    def __init__(self, width: int = 64, height: int = 32):
        self.width = width
        self.height = height
        self.pending: List[WindowEvent] = []
        self.blits: List[Tuple[Frame, Rect, BlitMode]] = []
        self.titles: List[str] = []
        self.resizes: List[Tuple[int, int]] = []
        self.closed = False

    def push(self, *events: WindowEvent) -> None:
        self.pending.extend(events)

    def resize(self, width: int, height: int) -> None:
        self.resizes.append((width, height))
        self.width = width
        self.height = height

    def poll_events(self) -> List[WindowEvent]:
        events, self.pending = self.pending, []
        return events

    def get_drawable_rect(self) -> Rect:
        return Rect(width=self.width, height=self.height)

    def blit(self, frame: Frame, rect: Rect, mode: BlitMode) -> None:
        self.blits.append((frame, rect, mode))

    def set_title(self, title: str) -> None:
        self.titles.append(title)

    def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, step: float = 0.1):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        self.now += self.step
        return self.now


def describe(minimum: int, maximum: int, default: int, value: int = None):
    return ControlDescription(
        range=ControlRange(minimum=minimum, maximum=maximum, default=default, step=1),
        value=default if value is None else value,
    )


