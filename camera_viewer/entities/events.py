from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EventKind(str, Enum):
    QUIT = "quit"
    RESIZE = "resize"
    KEY_DOWN = "key_down"


class WindowEvent(BaseModel):
    kind: EventKind = Field(..., description="Event type")
    width: Optional[int] = Field(default=None, ge=0, description="New window width")
    height: Optional[int] = Field(default=None, ge=0, description="New window height")
    key: Optional[str] = Field(default=None, description="Lower-case key name")

    class Config:
        frozen = True

    @classmethod
    def quit(cls) -> "WindowEvent":
        return cls(kind=EventKind.QUIT)

    @classmethod
    def resize(cls, width: int, height: int) -> "WindowEvent":
        return cls(kind=EventKind.RESIZE, width=width, height=height)

    @classmethod
    def key_down(cls, key: str) -> "WindowEvent":
        return cls(kind=EventKind.KEY_DOWN, key=key.lower())
