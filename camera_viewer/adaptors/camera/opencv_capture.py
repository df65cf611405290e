from datetime import datetime
from typing import List, Optional, Tuple

import cv2
import numpy as np

from ...entities.common import ControlId
from ...entities.control import ControlDescription
from ...entities.frame import CaptureFormat, Frame
from ...frameworks.exceptions import (
    CameraOpenError,
    CaptureError,
    FrameCaptureError,
    FrameDecodeError,
)
from ...frameworks.logging_config import get_logger
from ...usecases.interfaces.capture import CaptureDevice, CaptureSource
from .v4l2_controls import V4L2ControlBackend

logger = get_logger(__name__)

# Drivers clamp an oversized request down to their largest supported mode.
OVERSIZED_DIMENSION = 10000


def decode_raw_frame(raw_frame: Optional[np.ndarray], frame_number: int = 0) -> Frame:
    """Convert an OpenCV frame (BGR, BGRA, YUYV or grayscale) to an RGB Frame."""
    if raw_frame is None or raw_frame.size == 0:
        raise FrameDecodeError("empty frame")
    if raw_frame.dtype != np.uint8:
        raise FrameDecodeError(f"unsupported sample type {raw_frame.dtype}")

    try:
        if raw_frame.ndim == 2:
            rgb = cv2.cvtColor(raw_frame, cv2.COLOR_GRAY2RGB)
        elif raw_frame.ndim == 3 and raw_frame.shape[2] == 1:
            rgb = cv2.cvtColor(raw_frame[:, :, 0], cv2.COLOR_GRAY2RGB)
        elif raw_frame.ndim == 3 and raw_frame.shape[2] == 2:
            rgb = cv2.cvtColor(raw_frame, cv2.COLOR_YUV2RGB_YUY2)
        elif raw_frame.ndim == 3 and raw_frame.shape[2] == 3:
            rgb = cv2.cvtColor(raw_frame, cv2.COLOR_BGR2RGB)
        elif raw_frame.ndim == 3 and raw_frame.shape[2] == 4:
            rgb = cv2.cvtColor(raw_frame, cv2.COLOR_BGRA2RGB)
        else:
            raise FrameDecodeError(f"unexpected frame shape {raw_frame.shape}")
    except cv2.error as e:
        raise FrameDecodeError(f"color conversion failed: {e}")

    return Frame(pixels=rgb, frame_number=frame_number, timestamp=datetime.now())


class OpenCVCaptureDevice(CaptureDevice):
    def __init__(
        self,
        capture: cv2.VideoCapture,
        index: int,
        controls: V4L2ControlBackend,
    ):
        self.capture = capture
        self.index = index
        self.controls = controls
        self.frame_count = 0
        self._resolution = (
            int(capture.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )

    @property
    def resolution(self) -> Tuple[int, int]:
        return self._resolution

    def set_frame_rate(self, fps: int) -> None:
        if not self.capture.set(cv2.CAP_PROP_FPS, float(fps)):
            raise CaptureError(f"camera {self.index} refused {fps} fps")
        logger.info(
            f"Camera {self.index} frame rate: {self.capture.get(cv2.CAP_PROP_FPS)}"
        )

    def open_stream(self) -> None:
        if not self.capture.isOpened():
            raise FrameCaptureError(f"camera {self.index} is not open")
        width, height = self._resolution
        logger.info(f"Streaming camera {self.index} at {width}x{height}")

    def next_frame(self) -> np.ndarray:
        ok, frame = self.capture.read()
        if not ok or frame is None:
            raise FrameCaptureError(f"read failed on camera {self.index}")
        self.frame_count += 1
        return frame

    def decode(self, raw_frame: np.ndarray) -> Frame:
        return decode_raw_frame(raw_frame, self.frame_count)

    def query_control(self, control_id: ControlId) -> Optional[ControlDescription]:
        return self.controls.describe(control_id)

    def write_control(self, control_id: ControlId, value: int) -> None:
        self.controls.write(control_id, value)

    def close(self) -> None:
        self.capture.release()
        logger.info(f"Released camera {self.index} after {self.frame_count} frames")


class OpenCVCaptureSource(CaptureSource):
    def __init__(
        self,
        max_devices: int = 10,
        backend: str = "any",
        control_tool: str = "v4l2-ctl",
        device_path_template: str = "/dev/video{index}",
    ):
        self.max_devices = max_devices
        self.backend = backend
        self.control_tool = control_tool
        self.device_path_template = device_path_template

    def _api_preference(self) -> int:
        api = getattr(cv2, f"CAP_{self.backend.upper()}", None)
        if api is None:
            logger.warning(f"Unknown OpenCV backend '{self.backend}', using CAP_ANY")
            return cv2.CAP_ANY
        return api

    def enumerate(self) -> List[int]:
        return list(range(self.max_devices))

    def open(self, index: int, requested_format: CaptureFormat) -> OpenCVCaptureDevice:
        capture = cv2.VideoCapture(index, self._api_preference())
        if not capture.isOpened():
            capture.release()
            raise CameraOpenError(index, "device did not open")

        if requested_format.highest_resolution:
            width = height = OVERSIZED_DIMENSION
        else:
            width, height = requested_format.width, requested_format.height
        capture.set(cv2.CAP_PROP_FRAME_WIDTH, float(width))
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, float(height))

        ok, _ = capture.read()
        if not ok:
            capture.release()
            raise CameraOpenError(index, "no frame delivered")

        controls = V4L2ControlBackend(
            self.device_path_template.format(index=index), tool=self.control_tool
        )
        return OpenCVCaptureDevice(capture, index, controls)
