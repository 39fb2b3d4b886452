"""
Flight plan model: everything needed to create one flight row and its
passenger links.
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel, Field, model_validator


class FlightPlan(BaseModel):
    """
    A generated flight, validated before it is written.

    Origin and destination must differ and arrival must follow departure.
    """

    flightno: str = Field(..., max_length=64, description="Flight number, '<model>-<5 digits>'")
    departure: datetime = Field(..., description="Scheduled departure time")
    arrival: datetime = Field(..., description="Scheduled arrival time")
    origin_id: int = Field(..., description="Departure airport ID")
    destination_id: int = Field(..., description="Arrival airport ID")
    plane_id: int = Field(..., description="Operating plane ID")
    passenger_ids: List[int] = Field(default_factory=list, description="Passengers to connect")

    @model_validator(mode="after")
    def check_route_and_schedule(self) -> "FlightPlan":
        if self.origin_id == self.destination_id:
            raise ValueError("origin and destination airports must differ")
        if self.arrival <= self.departure:
            raise ValueError("arrival must be after departure")
        return self
