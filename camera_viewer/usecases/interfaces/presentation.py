from abc import ABC, abstractmethod
from typing import List

from ...entities.common import BlitMode, Rect
from ...entities.events import WindowEvent
from ...entities.frame import Frame


class ViewerWindow(ABC):
    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        pass

    @abstractmethod
    def poll_events(self) -> List[WindowEvent]:
        """Drain every pending event without blocking."""

    @abstractmethod
    def get_drawable_rect(self) -> Rect:
        pass

    @abstractmethod
    def blit(self, frame: Frame, rect: Rect, mode: BlitMode) -> None:
        pass

    @abstractmethod
    def set_title(self, title: str) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass
