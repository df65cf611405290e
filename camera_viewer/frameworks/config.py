from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError


class CameraConfig(BaseModel):
    max_devices: int = Field(default=10, ge=1)
    backend: str = Field(default="any")
    requested_fps: int = Field(default=10, gt=0)
    highest_resolution: bool = Field(default=True)
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    control_tool: str = Field(default="v4l2-ctl")
    device_path_template: str = Field(default="/dev/video{index}")


class WindowConfig(BaseModel):
    title: str = Field(default="cam")
    resizable: bool = Field(default=True)
    always_on_top: bool = Field(default=True)
    mirrored: bool = Field(default=False)
    title_refresh_frames: int = Field(default=10, ge=1)
    fps_average_window: int = Field(default=5, ge=1)


class ExposureConfig(BaseModel):
    target_lightness: float = Field(default=15.0, ge=0, le=100)
    lightness_range: float = Field(default=10.0, ge=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format_type: str = Field(default="detailed")
    console_output: bool = Field(default=True)
    file_output: bool = Field(default=True)
    use_colors: bool = Field(default=True)


class AppConfig(BaseModel):
    app_name: str = Field(default="Camera Viewer")
    debug: bool = Field(default=False)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    exposure: ExposureConfig = Field(default_factory=ExposureConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping"
            )

        try:
            return cls(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {e}")

    @classmethod
    def from_yaml_or_default(cls, config_path: str = "config.yaml") -> "AppConfig":
        try:
            return cls.from_yaml(config_path)
        except FileNotFoundError:
            return cls()
