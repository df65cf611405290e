from typing import Optional

from ..entities.common import ControlId
from ..entities.control import ControlRange
from ..frameworks.exceptions import ControlQueryError, ControlWriteError
from ..frameworks.logging_config import get_logger
from .interfaces.capture import CaptureDevice

logger = get_logger(__name__)


class HardwareControl:
    """Cached proxy for one integer device control.

    Writes are clamped to the device range and skipped when the value is
    unchanged. A failed write is logged and the cached value is kept.
    """

    def __init__(self, control_id: ControlId, control_range: ControlRange, value: int):
        self.control_id = control_id
        self.range = control_range
        self._current = control_range.clamp(value)

    @classmethod
    def from_device(
        cls, device: CaptureDevice, control_id: ControlId
    ) -> "HardwareControl":
        try:
            description = device.query_control(control_id)
        except ControlQueryError as e:
            logger.warning(f"Could not query {control_id.value}: {e}")
            description = None

        if description is None:
            logger.info(f"Camera has no {control_id.value} control")
            return AbsentHardwareControl(control_id)

        r = description.range
        logger.info(
            f"{control_id.value}: value={description.value} "
            f"range=[{r.minimum}, {r.maximum}] step={r.step} default={r.default}"
        )
        return cls(control_id, r, description.value)

    @property
    def is_present(self) -> bool:
        return True

    def current(self) -> int:
        return self._current

    def clamp(self, value: int) -> int:
        return self.range.clamp(value)

    def set(self, device: CaptureDevice, value: int) -> None:
        value = self.clamp(value)
        if value == self._current:
            return

        self._current = value

        try:
            device.write_control(self.control_id, value)
        except ControlWriteError as e:
            logger.warning(f"error setting control: {e}")

    def reset(self, device: CaptureDevice) -> None:
        self.set(device, self.range.default)

    def set_max(self, device: CaptureDevice) -> None:
        self.set(device, self.range.maximum)


class AbsentHardwareControl(HardwareControl):
    """Stand-in for a control the camera does not expose; every call is a no-op."""

    def __init__(self, control_id: ControlId):
        self.control_id = control_id
        self.range: Optional[ControlRange] = None
        self._current = 0

    @property
    def is_present(self) -> bool:
        return False

    def clamp(self, value: int) -> int:
        return value

    def set(self, device: CaptureDevice, value: int) -> None:
        pass

    def reset(self, device: CaptureDevice) -> None:
        pass

    def set_max(self, device: CaptureDevice) -> None:
        pass
