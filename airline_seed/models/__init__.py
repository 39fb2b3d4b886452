"""
Airline seed Pydantic models package.

Value objects passed between the seeding stages and returned to callers.
"""

from .refs import (
    AirportRef,
    PlaneRef,
)

from .flight import FlightPlan

from .report import (
    ENTITIES,
    SeedTargets,
    SeedReport,
)

__all__ = [
    "AirportRef",
    "PlaneRef",
    "FlightPlan",
    "ENTITIES",
    "SeedTargets",
    "SeedReport",
]
