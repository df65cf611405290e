from datetime import datetime
from typing import Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator


class Frame(BaseModel):
    pixels: np.ndarray = Field(..., description="HxWx3 uint8 RGB pixels")
    frame_number: int = Field(default=0, ge=0, description="Capture sequence number")
    timestamp: datetime = Field(
        default_factory=datetime.now, description="Frame capture timestamp"
    )

    class Config:
        arbitrary_types_allowed = True
        frozen = True

    @field_validator("pixels")
    @classmethod
    def validate_pixels(cls, v):
        if not isinstance(v, np.ndarray):
            raise ValueError("Frame pixels must be a numpy array")
        if v.ndim != 3 or v.shape[2] != 3:
            raise ValueError(f"Frame pixels must be HxWx3, got shape {v.shape}")
        if v.dtype != np.uint8:
            raise ValueError(f"Frame pixels must be uint8, got {v.dtype}")

        view = v.view()
        view.flags.writeable = False
        return view

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple:
        return (self.width, self.height)


class CaptureFormat(BaseModel):
    highest_resolution: bool = Field(
        default=True, description="Ask the device for its largest frame size"
    )
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_resolution(self):
        if not self.highest_resolution and (self.width is None or self.height is None):
            raise ValueError("width and height are required without highest_resolution")
        return self

    class Config:
        frozen = True
