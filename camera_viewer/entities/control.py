from pydantic import BaseModel, Field, model_validator


class ControlRange(BaseModel):
    minimum: int = Field(..., description="Lowest value the device accepts")
    maximum: int = Field(..., description="Highest value the device accepts")
    default: int = Field(..., description="Device default value")
    step: int = Field(default=1, ge=1, description="Increment between valid values")

    @model_validator(mode="after")
    def check_bounds(self):
        if self.minimum > self.maximum:
            raise ValueError(
                f"Control minimum {self.minimum} exceeds maximum {self.maximum}"
            )
        return self

    def clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))

    class Config:
        frozen = True


class ControlDescription(BaseModel):
    range: ControlRange = Field(..., description="Bounds reported by the device")
    value: int = Field(..., description="Value reported at query time")

    class Config:
        frozen = True
