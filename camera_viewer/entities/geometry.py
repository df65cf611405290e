from pydantic import BaseModel, Field


class GeometryState(BaseModel):
    native_width: int = Field(..., gt=0, description="Camera frame width")
    native_height: int = Field(..., gt=0, description="Camera frame height")
    resize_pending: bool = Field(default=False, description="Unsettled resize seen")

    @property
    def aspect(self) -> float:
        return self.native_width / self.native_height
