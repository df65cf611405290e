from enum import Enum

from pydantic import BaseModel, Field


class ControlId(str, Enum):
    GAMMA = "gamma"
    BRIGHTNESS = "brightness"


class BlitMode(str, Enum):
    EXACT = "exact"
    SCALED = "scaled"


class Command(str, Enum):
    RESET_WINDOW_SIZE = "reset_window_size"
    TOGGLE_MIRROR = "toggle_mirror"
    TOGGLE_EXPOSURE_MODE = "toggle_exposure_mode"
    TOGGLE_FULLBRIGHT = "toggle_fullbright"
    GAMMA_UP = "gamma_up"
    GAMMA_DOWN = "gamma_down"


class Rect(BaseModel):
    x: int = Field(default=0, description="Left edge")
    y: int = Field(default=0, description="Top edge")
    width: int = Field(..., ge=0, description="Width in pixels")
    height: int = Field(..., ge=0, description="Height in pixels")

    @property
    def size(self) -> tuple:
        return (self.width, self.height)

    class Config:
        frozen = True
