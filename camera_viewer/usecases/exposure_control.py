import numpy as np

from ..entities.common import Command
from ..entities.exposure import ExposureMode, ExposureModeKind
from ..entities.frame import Frame
from ..frameworks.logging_config import get_logger
from .hardware_control import HardwareControl
from .interfaces.capture import CaptureDevice

logger = get_logger(__name__)

GAMMA_STEP = 1

LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)

# CIE L* constants
LSTAR_EPSILON = 0.008856
LSTAR_KAPPA = 903.3


def _build_srgb_to_linear_table() -> np.ndarray:
    values = np.arange(256, dtype=np.float64) / 255.0
    return np.where(
        values < 0.04045,
        values / 12.92,
        ((values + 0.055) / 1.055) ** 2.4,
    )


SRGB_TO_LINEAR = _build_srgb_to_linear_table()


def relative_luminance(pixels: np.ndarray) -> float:
    """Mean linear-light luminance Y (0..1) of an HxWx3 uint8 RGB image."""
    if pixels.size == 0:
        return 0.0
    linear = SRGB_TO_LINEAR[pixels]
    return float((linear @ LUMINANCE_WEIGHTS).mean())


def lightness_from_luminance(luminance: float) -> float:
    if luminance <= LSTAR_EPSILON:
        return luminance * LSTAR_KAPPA
    return float(np.cbrt(luminance)) * 116.0 - 16.0


def perceptual_lightness(frame: Frame) -> float:
    return lightness_from_luminance(relative_luminance(frame.pixels))


class ExposureFeedbackController:
    """Drives the gamma and brightness controls for both exposure modes.

    Mode transitions are pure with respect to the mode value: each command
    returns the next ``ExposureMode`` and the caller stores it.
    """

    def __init__(
        self,
        device: CaptureDevice,
        gamma: HardwareControl,
        brightness: HardwareControl,
        target_lightness: float = 15.0,
        lightness_range: float = 10.0,
    ):
        self.device = device
        self.gamma = gamma
        self.brightness = brightness
        self.target_lightness = target_lightness
        self.lightness_range = lightness_range

    def initial_mode(self) -> ExposureMode:
        return ExposureMode.manual(current=self.gamma.current())

    def reset_controls(self) -> None:
        try:
            self.gamma.reset(self.device)
        finally:
            self.brightness.reset(self.device)

    def apply(self, command: Command, mode: ExposureMode) -> ExposureMode:
        if command == Command.TOGGLE_EXPOSURE_MODE:
            return self.toggle_mode(mode)
        if command == Command.TOGGLE_FULLBRIGHT:
            return self.toggle_fullbright(mode)
        if command == Command.GAMMA_UP:
            return self.step_gamma(mode, GAMMA_STEP)
        if command == Command.GAMMA_DOWN:
            return self.step_gamma(mode, -GAMMA_STEP)
        return mode

    def toggle_mode(self, mode: ExposureMode) -> ExposureMode:
        self.reset_controls()

        if mode.kind == ExposureModeKind.MANUAL:
            new_mode = ExposureMode.auto()
        elif mode.kind == ExposureModeKind.AUTO:
            new_mode = ExposureMode.manual(current=self.gamma.current())
        else:
            raise ValueError(f"Unknown exposure mode: {mode.kind}")

        logger.info(f"Exposure mode: {mode.kind.value} -> {new_mode.kind.value}")
        return new_mode

    def toggle_fullbright(self, mode: ExposureMode) -> ExposureMode:
        if mode.kind != ExposureModeKind.MANUAL:
            return mode

        fullbright = not mode.fullbright
        if fullbright:
            self.gamma.set_max(self.device)
            self.brightness.set_max(self.device)
        else:
            self.gamma.set(self.device, mode.current)
            self.brightness.reset(self.device)

        return ExposureMode.manual(current=mode.current, fullbright=fullbright)

    def step_gamma(self, mode: ExposureMode, delta: int) -> ExposureMode:
        if mode.kind != ExposureModeKind.MANUAL:
            return mode

        self.gamma.set(self.device, mode.current + delta)
        return ExposureMode.manual(
            current=self.gamma.current(), fullbright=mode.fullbright
        )

    def evaluate_frame(self, frame: Frame) -> float:
        """Nudge gamma one unit toward the target lightness band.

        Returns:
            The measured perceptual lightness of ``frame``.
        """
        lightness = perceptual_lightness(frame)
        diff = self.target_lightness - lightness

        if abs(diff) > self.lightness_range:
            current = self.gamma.current()
            if diff < 0:
                self.gamma.set(self.device, current - GAMMA_STEP)
            else:
                self.gamma.set(self.device, current + GAMMA_STEP)
            logger.debug(
                f"L*={lightness:.2f} outside {self.target_lightness}"
                f"+/-{self.lightness_range}, gamma {current} -> {self.gamma.current()}"
            )

        return lightness
