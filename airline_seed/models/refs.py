"""
Lightweight references to persisted rows, threaded from stage to stage.

Only the columns later stages need are carried: airport codes for collision
checks, plane model and capacity for flight generation.
"""

from pydantic import BaseModel, Field, ConfigDict


class AirportRef(BaseModel):
    """Identity and code of a persisted airport."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    airport_id: int
    iata: str = Field(..., description="Airport code; 3 letters when generated here")


class PlaneRef(BaseModel):
    """Identity, model and seating capacity of a persisted plane."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    plane_id: int
    model: str = Field(..., max_length=50, description="Catalog model name")
    capacity: int = Field(..., ge=0, description="Number of seats")
