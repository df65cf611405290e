class CameraViewerError(Exception):
    pass


class CameraNotFoundError(CameraViewerError):
    def __init__(self, scanned: int):
        self.scanned = scanned
        super().__init__(f"Could not find a camera (scanned {scanned} indices)")


class CameraOpenError(CameraViewerError):
    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Camera {index} could not be opened: {reason}")


class WindowCreationError(CameraViewerError):
    pass


class CaptureError(CameraViewerError):
    pass


class FrameCaptureError(CaptureError):
    pass


class FrameDecodeError(CaptureError):
    pass


class ControlError(CameraViewerError):
    pass


class ControlQueryError(ControlError):
    pass


class ControlWriteError(ControlError):
    def __init__(self, control: str, value: int, reason: str):
        self.control = control
        self.value = value
        super().__init__(f"Failed to set {control} to {value}: {reason}")


class ConfigurationError(CameraViewerError):
    pass
