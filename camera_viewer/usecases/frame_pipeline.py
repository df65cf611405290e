import time
from dataclasses import dataclass
from typing import Callable, Optional

import cv2

from ..entities.common import Command
from ..entities.events import EventKind
from ..entities.exposure import ExposureMode
from ..entities.frame import CaptureFormat, Frame
from ..entities.geometry import GeometryState
from ..frameworks.exceptions import (
    CameraNotFoundError,
    CameraOpenError,
    CaptureError,
    FrameCaptureError,
    FrameDecodeError,
)
from ..frameworks.logging_config import get_logger
from .commands import command_for_key
from .display_geometry import DisplayGeometryManager, blit_mode_for, is_same_size
from .exposure_control import ExposureFeedbackController
from .interfaces.capture import CaptureDevice, CaptureSource
from .interfaces.presentation import ViewerWindow
from .rolling_average import RollingAverager

logger = get_logger(__name__)


@dataclass
class LoopState:
    mode: ExposureMode
    geometry: GeometryState
    averager: RollingAverager
    mirrored: bool = False
    title_delay: int = 0
    last_frame_start: float = 0.0
    fps: float = 0.0
    is_same_size: bool = False


def open_first_camera(
    source: CaptureSource, requested_format: CaptureFormat, requested_fps: int
) -> CaptureDevice:
    """Open the first camera that accepts ``requested_format``.

    Raises:
        CameraNotFoundError: when no index opens.
    """
    indices = source.enumerate()
    device = None
    for index in indices:
        try:
            device = source.open(index, requested_format)
        except CameraOpenError as e:
            logger.debug(str(e))
            continue
        logger.info(f"Using camera {index}")
        break

    if device is None:
        raise CameraNotFoundError(len(indices))

    try:
        device.set_frame_rate(requested_fps)
    except CaptureError as e:
        logger.warning(f"error setting framerate to {requested_fps}: {e}")

    return device


def format_title(
    width: int, height: int, fps: float, mode: ExposureMode, gamma: int, exact: bool
) -> str:
    tag = f"[{mode.tag}] " if mode.tag else ""
    title = f"{width}x{height}, {fps:.1f} fps, {tag}{gamma} gamma"
    if exact:
        title = "[EXACT SIZE] " + title
    return title


class FramePipeline:
    """Single-threaded capture -> control -> display loop."""

    def __init__(
        self,
        device: CaptureDevice,
        window: ViewerWindow,
        exposure: ExposureFeedbackController,
        geometry: DisplayGeometryManager,
        mirrored: bool = False,
        title_refresh_frames: int = 10,
        fps_average_window: int = 5,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.device = device
        self.window = window
        self.exposure = exposure
        self.geometry = geometry
        self.mirrored = mirrored
        self.title_refresh_frames = title_refresh_frames
        self.fps_average_window = fps_average_window
        self.clock = clock
        self._stream_open = False

    def create_state(self) -> LoopState:
        return LoopState(
            mode=self.exposure.initial_mode(),
            geometry=self.geometry.create_state(),
            averager=RollingAverager(self.fps_average_window),
            mirrored=self.mirrored,
            last_frame_start=self.clock(),
        )

    def start(self) -> LoopState:
        if not self._stream_open:
            self.device.open_stream()
            self._stream_open = True
        return self.create_state()

    def run(self, max_iterations: Optional[int] = None) -> LoopState:
        state = self.start()
        iterations = 0
        try:
            while max_iterations is None or iterations < max_iterations:
                if not self.run_iteration(state):
                    logger.info("Quit requested")
                    break
                iterations += 1
        finally:
            self.shutdown()
        return state

    def shutdown(self) -> None:
        try:
            self.exposure.reset_controls()
        finally:
            try:
                self.device.close()
            finally:
                self.window.close()

    def handle_events(self, state: LoopState) -> bool:
        """Drain window events.

        Returns:
            False when the user asked to quit.
        """
        for event in self.window.poll_events():
            if event.kind == EventKind.QUIT:
                return False
            if event.kind == EventKind.RESIZE:
                state.geometry.resize_pending = True
            elif event.kind == EventKind.KEY_DOWN:
                command = command_for_key(event.key)
                if command is not None:
                    self.dispatch(command, state)
                state.title_delay = 0
        return True

    def dispatch(self, command: Command, state: LoopState) -> None:
        if command == Command.RESET_WINDOW_SIZE:
            self.geometry.reset_to_native()
        elif command == Command.TOGGLE_MIRROR:
            state.mirrored = not state.mirrored
        else:
            state.mode = self.exposure.apply(command, state.mode)

    def capture(self, state: LoopState) -> Optional[Frame]:
        try:
            raw_frame = self.device.next_frame()
        except FrameCaptureError as e:
            logger.warning(f"error getting a frame: {e}")
            return None

        try:
            frame = self.device.decode(raw_frame)
        except FrameDecodeError as e:
            logger.warning(f"error decoding the frame: {e}")
            return None

        if state.mirrored:
            frame = Frame(
                pixels=cv2.flip(frame.pixels, 1),
                frame_number=frame.frame_number,
                timestamp=frame.timestamp,
            )
        return frame

    def present(self, frame: Frame, state: LoopState) -> None:
        rect = self.window.get_drawable_rect()
        state.is_same_size = is_same_size(frame, rect)
        self.window.blit(frame, rect, blit_mode_for(frame, rect))

    def update_timing(self, state: LoopState, frame_start: float) -> None:
        frametime = (frame_start - state.last_frame_start) * 1000.0
        state.last_frame_start = frame_start

        average = state.averager.add(frametime)
        state.fps = 1000.0 / average if average > 0 else 0.0

    def refresh_title(self, state: LoopState) -> None:
        state.title_delay -= 1
        if state.title_delay > 0:
            return

        rect = self.window.get_drawable_rect()
        title = format_title(
            rect.width,
            rect.height,
            state.fps,
            state.mode,
            self.exposure.gamma.current(),
            state.is_same_size,
        )
        try:
            self.window.set_title(title)
        except RuntimeError as e:
            logger.warning(f"error updating title: {e}")

        state.title_delay = self.title_refresh_frames

    def run_iteration(self, state: LoopState) -> bool:
        frame_start = self.clock()

        if not self.handle_events(state):
            return False

        self.geometry.settle(state.geometry)

        frame = self.capture(state)
        if frame is None:
            return True

        if state.mode.is_auto:
            self.exposure.evaluate_frame(frame)

        self.present(frame, state)

        self.update_timing(state, frame_start)
        self.refresh_title(state)
        return True
