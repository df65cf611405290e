from enum import Enum

from pydantic import BaseModel, Field


class ExposureModeKind(str, Enum):
    MANUAL = "manual"
    AUTO = "auto"


class ExposureMode(BaseModel):
    """Manual or automatic exposure.

    ``fullbright`` and ``current`` are only meaningful for ``MANUAL``; in that
    mode ``current`` mirrors the gamma value chosen by the user.
    """

    kind: ExposureModeKind = Field(..., description="Active exposure mode")
    fullbright: bool = Field(default=False, description="Manual full-bright flag")
    current: int = Field(default=0, description="Manual gamma value")

    class Config:
        frozen = True

    @classmethod
    def manual(cls, current: int, fullbright: bool = False) -> "ExposureMode":
        return cls(kind=ExposureModeKind.MANUAL, fullbright=fullbright, current=current)

    @classmethod
    def auto(cls) -> "ExposureMode":
        return cls(kind=ExposureModeKind.AUTO)

    @property
    def is_auto(self) -> bool:
        return self.kind == ExposureModeKind.AUTO

    @property
    def tag(self) -> str:
        if self.kind == ExposureModeKind.AUTO:
            return "AUTO"
        if self.fullbright:
            return "FULLBRIGHT"
        return ""
