import re
import subprocess
from typing import Dict, Optional

from ...entities.common import ControlId
from ...entities.control import ControlDescription, ControlRange
from ...frameworks.exceptions import ControlQueryError, ControlWriteError
from ...frameworks.logging_config import get_logger

logger = get_logger(__name__)

# e.g. "  gamma 0x00980910 (int)    : min=72 max=500 step=1 default=100 value=100"
CONTROL_LINE = re.compile(
    r"^\s*(?P<name>\w+)\s+0x[0-9a-fA-F]+\s+\((?P<type>\w+)\)\s*:\s*(?P<fields>.*)$"
)
FIELD = re.compile(r"(\w+)=(-?\d+)")


def parse_control_listing(output: str) -> Dict[str, Dict[str, object]]:
    """Parse ``v4l2-ctl --list-ctrls`` output into ``{name: {type, fields...}}``."""
    controls = {}
    for line in output.splitlines():
        match = CONTROL_LINE.match(line)
        if not match:
            continue
        entry = {"type": match.group("type")}
        entry.update({k: int(v) for k, v in FIELD.findall(match.group("fields"))})
        controls[match.group("name")] = entry
    return controls


class V4L2ControlBackend:
    """Reads and writes camera controls through the ``v4l2-ctl`` tool."""

    def __init__(self, device_path: str, tool: str = "v4l2-ctl", timeout: float = 2.0):
        self.device_path = device_path
        self.tool = tool
        self.timeout = timeout
        self._cache: Optional[Dict[str, Dict[str, object]]] = None

    def _list_controls(self) -> Dict[str, Dict[str, object]]:
        if self._cache is not None:
            return self._cache

        try:
            result = subprocess.run(
                [self.tool, "-d", self.device_path, "--list-ctrls"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except FileNotFoundError:
            logger.warning(f"{self.tool} not found; hardware controls unavailable")
            self._cache = {}
            return self._cache
        except (
            OSError,
            subprocess.CalledProcessError,
            subprocess.TimeoutExpired,
        ) as e:
            raise ControlQueryError(
                f"Listing controls on {self.device_path} failed: {e}"
            )

        self._cache = parse_control_listing(result.stdout)
        return self._cache

    def describe(self, control_id: ControlId) -> Optional[ControlDescription]:
        entry = self._list_controls().get(control_id.value)
        if entry is None:
            return None

        if entry["type"] != "int":
            logger.warning(
                f"{control_id.value} on {self.device_path} is {entry['type']}, "
                "not an integer range"
            )
            return None

        try:
            control_range = ControlRange(
                minimum=entry["min"],
                maximum=entry["max"],
                default=entry["default"],
                step=entry.get("step", 1) or 1,
            )
            return ControlDescription(range=control_range, value=entry["value"])
        except (KeyError, ValueError) as e:
            raise ControlQueryError(
                f"Malformed {control_id.value} description on {self.device_path}: {e}"
            )

    def write(self, control_id: ControlId, value: int) -> None:
        try:
            subprocess.run(
                [
                    self.tool,
                    "-d",
                    self.device_path,
                    f"--set-ctrl={control_id.value}={value}",
                ],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except (
            OSError,
            subprocess.CalledProcessError,
            subprocess.TimeoutExpired,
        ) as e:
            raise ControlWriteError(control_id.value, value, str(e))
