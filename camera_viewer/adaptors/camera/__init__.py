from .opencv_capture import OpenCVCaptureDevice, OpenCVCaptureSource, decode_raw_frame
from .v4l2_controls import V4L2ControlBackend, parse_control_listing

__all__ = [
    "OpenCVCaptureDevice",
    "OpenCVCaptureSource",
    "decode_raw_frame",
    "V4L2ControlBackend",
    "parse_control_listing",
]
