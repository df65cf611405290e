from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import numpy as np

from ...entities.common import ControlId
from ...entities.control import ControlDescription
from ...entities.frame import CaptureFormat, Frame


class CaptureDevice(ABC):
    """An opened camera that yields raw frames and exposes hardware controls."""

    @property
    @abstractmethod
    def resolution(self) -> Tuple[int, int]:
        """Native (width, height) of the negotiated capture format."""

    @abstractmethod
    def set_frame_rate(self, fps: int) -> None:
        """Request a frame rate. Raises CaptureError when refused."""

    @abstractmethod
    def open_stream(self) -> None:
        pass

    @abstractmethod
    def next_frame(self) -> np.ndarray:
        """Block until the next raw frame. Raises FrameCaptureError."""

    @abstractmethod
    def decode(self, raw_frame: np.ndarray) -> Frame:
        """Convert a raw frame into RGB. Raises FrameDecodeError."""

    @abstractmethod
    def query_control(self, control_id: ControlId) -> Optional[ControlDescription]:
        """
        Describe an integer control.

        Returns:
            The control description, or None if the device lacks the control.
        """

    @abstractmethod
    def write_control(self, control_id: ControlId, value: int) -> None:
        """Write a control value. Raises ControlWriteError."""

    @abstractmethod
    def close(self) -> None:
        pass


class CaptureSource(ABC):
    @abstractmethod
    def enumerate(self) -> List[int]:
        """Return the device indices worth probing, in order."""

    @abstractmethod
    def open(self, index: int, requested_format: CaptureFormat) -> CaptureDevice:
        """Open a device. Raises CameraOpenError."""
