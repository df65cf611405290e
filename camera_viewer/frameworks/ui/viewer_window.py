import sys
from collections import deque
from typing import Deque, List, Optional

import numpy as np
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPainter
from PySide6.QtWidgets import QApplication, QWidget

from ...entities.common import BlitMode, Rect
from ...entities.events import WindowEvent
from ...entities.frame import Frame
from ...frameworks.exceptions import WindowCreationError
from ...frameworks.logging_config import get_logger
from ...usecases.interfaces.presentation import ViewerWindow

logger = get_logger(__name__)

KEY_NAMES = {
    Qt.Key_Space: "space",
    Qt.Key_Up: "up",
    Qt.Key_Down: "down",
    Qt.Key_Left: "left",
    Qt.Key_Right: "right",
    Qt.Key_Escape: "escape",
}


def key_name(key: int, text: str) -> Optional[str]:
    if key in KEY_NAMES:
        return KEY_NAMES[key]
    if text and text.isprintable():
        return text.lower()
    return None


class CanvasWidget(QWidget):
    """Top-level widget that paints the last blitted image and queues events."""

    def __init__(self, events: Deque[WindowEvent]):
        super().__init__()
        self.events = events
        self.image: Optional[QImage] = None
        self.setAttribute(Qt.WA_OpaquePaintEvent)

    def paintEvent(self, event):
        if self.image is None:
            return
        painter = QPainter(self)
        painter.drawImage(0, 0, self.image)
        painter.end()

    def resizeEvent(self, event):
        size = event.size()
        self.events.append(WindowEvent.resize(size.width(), size.height()))
        super().resizeEvent(event)

    def keyPressEvent(self, event):
        name = key_name(event.key(), event.text())
        if name is not None:
            self.events.append(WindowEvent.key_down(name))

    def closeEvent(self, event):
        # the loop owns teardown; keep the widget alive until it exits
        self.events.append(WindowEvent.quit())
        event.ignore()


class QtViewerWindow(ViewerWindow):
    def __init__(
        self,
        title: str,
        width: int,
        height: int,
        resizable: bool = True,
        always_on_top: bool = True,
    ):
        try:
            self.app = QApplication.instance() or QApplication(sys.argv)
        except RuntimeError as e:
            raise WindowCreationError(f"Could not start Qt: {e}")

        self.events: Deque[WindowEvent] = deque()
        self.widget = CanvasWidget(self.events)
        self.widget.setWindowTitle(title)

        if always_on_top:
            self.widget.setWindowFlag(Qt.WindowStaysOnTopHint, True)

        if resizable:
            self.widget.resize(width, height)
        else:
            self.widget.setFixedSize(width, height)

        self.widget.show()
        self.app.processEvents()
        logger.info(f"Created {width}x{height} window '{title}'")

    def resize(self, width: int, height: int) -> None:
        self.widget.resize(width, height)

    def poll_events(self) -> List[WindowEvent]:
        self.app.processEvents()
        events = list(self.events)
        self.events.clear()
        return events

    def get_drawable_rect(self) -> Rect:
        return Rect(width=self.widget.width(), height=self.widget.height())

    def blit(self, frame: Frame, rect: Rect, mode: BlitMode) -> None:
        data = np.ascontiguousarray(frame.pixels).tobytes()
        image = QImage(
            data,
            frame.width,
            frame.height,
            3 * frame.width,
            QImage.Format_RGB888,
        )

        if mode == BlitMode.EXACT:
            image = image.copy()
        else:
            image = image.scaled(
                rect.width, rect.height, Qt.IgnoreAspectRatio, Qt.FastTransformation
            )

        self.widget.image = image
        self.widget.repaint()

    def set_title(self, title: str) -> None:
        self.widget.setWindowTitle(title)

    def close(self) -> None:
        self.widget.hide()
        self.widget.deleteLater()
        self.app.processEvents()
