from .common import BlitMode, Command, ControlId, Rect
from .control import ControlDescription, ControlRange
from .events import EventKind, WindowEvent
from .exposure import ExposureMode, ExposureModeKind
from .frame import CaptureFormat, Frame
from .geometry import GeometryState

__all__ = [
    "BlitMode",
    "Command",
    "ControlId",
    "Rect",
    "ControlRange",
    "ControlDescription",
    "EventKind",
    "WindowEvent",
    "ExposureMode",
    "ExposureModeKind",
    "CaptureFormat",
    "Frame",
    "GeometryState",
]
