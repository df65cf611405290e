from typing import Tuple

from ..entities.common import BlitMode, Rect
from ..entities.frame import Frame
from ..entities.geometry import GeometryState
from ..frameworks.logging_config import get_logger
from .interfaces.presentation import ViewerWindow

logger = get_logger(__name__)


def closest_aspect_size(width: int, height: int, aspect: float) -> Tuple[int, int]:
    """Largest size with ``aspect`` that fits inside ``width`` x ``height``."""
    height_scaled = height * aspect

    if height_scaled > width:
        return width, int(width / aspect)
    return int(height_scaled), height


def is_same_size(frame: Frame, rect: Rect) -> bool:
    return frame.width == rect.width and frame.height == rect.height


def blit_mode_for(frame: Frame, rect: Rect) -> BlitMode:
    return BlitMode.EXACT if is_same_size(frame, rect) else BlitMode.SCALED


class DisplayGeometryManager:
    def __init__(self, window: ViewerWindow, native_size: Tuple[int, int]):
        self.window = window
        self.native_width, self.native_height = native_size

    def create_state(self) -> GeometryState:
        return GeometryState(
            native_width=self.native_width, native_height=self.native_height
        )

    def set_closest_aspect(self, state: GeometryState) -> bool:
        """Snap the window to the camera aspect ratio.

        Returns:
            False once the window already has the right shape.
        """
        rect = self.window.get_drawable_rect()
        new_width, new_height = closest_aspect_size(
            rect.width, rect.height, state.aspect
        )

        if new_width == rect.width and new_height == rect.height:
            return False

        self.window.resize(new_width, new_height)
        return True

    def settle(self, state: GeometryState) -> None:
        if state.resize_pending and not self.set_closest_aspect(state):
            state.resize_pending = False

    def reset_to_native(self) -> None:
        logger.debug(
            f"Resetting window to {self.native_width}x{self.native_height}"
        )
        self.window.resize(self.native_width, self.native_height)
