from .capture import CaptureDevice, CaptureSource
from .presentation import ViewerWindow

__all__ = [
    "CaptureDevice",
    "CaptureSource",
    "ViewerWindow",
]
