"""
Targets and results of a seeding run.
"""

from typing import Dict
from pydantic import BaseModel, Field

ENTITIES = ("airports", "planes", "passengers", "flights")


class SeedTargets(BaseModel):
    """Minimum row counts the pipeline should reach."""

    airports: int = Field(..., ge=0)
    planes: int = Field(..., ge=0)
    passengers: int = Field(..., ge=0)
    flights: int = Field(..., ge=0)


class SeedReport(BaseModel):
    """Row counts before and after a run."""

    before: Dict[str, int]
    after: Dict[str, int]
    elapsed_seconds: float = Field(..., ge=0)

    @property
    def created(self) -> Dict[str, int]:
        """Rows created by this run per entity."""
        return {
            entity: self.after.get(entity, 0) - self.before.get(entity, 0)
            for entity in ENTITIES
        }
