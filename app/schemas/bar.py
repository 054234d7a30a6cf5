# app/schemas/bar.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

MAX_COUNT = 2**31 - 1


class BarOut(BaseModel):
    id: int
    name: str
    current_count: int
    capacity: int
    address: str
    latitude: str
    longitude: str

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class BarOccupancyOut(BarOut):
    occupancy_percent: float
    status: str


class CountUpdate(BaseModel):
    # strict: 12.5, "12" and true are all rejected.
    # Upper bound is what a 32-bit INTEGER column can hold.
    count: int = Field(ge=0, le=MAX_COUNT, strict=True)


class RefreshPolicyOut(BaseModel):
    poll_interval_ms: int
    stale_after_ms: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
