"""
Plane provisioning: make sure at least M planes exist, cycling through a
fixed model catalog.
"""

import logging
from typing import List, Optional

from faker import Faker
from rich.console import Console

from ..database.models import Plane
from ..database.repository import SeedRepository
from ..models.refs import PlaneRef

logger = logging.getLogger(__name__)

PLANE_MODELS = ["A320", "A321", "B737", "B777", "A330", "Embraer E195", "A350", "B787"]

MIN_CAPACITY = 80
MAX_CAPACITY = 400


class PlaneProvisioner:
    """Create only the missing planes; models round-robin over PLANE_MODELS."""

    def __init__(
        self,
        repository: SeedRepository,
        fake: Faker,
        console: Optional[Console] = None,
        models: Optional[List[str]] = None,
    ):
        self.repository = repository
        self.fake = fake
        self.console = console or Console(quiet=True)
        self.models = models or PLANE_MODELS

    def model_for(self, index: int) -> str:
        """Catalog model for the plane at overall position ``index``."""
        return self.models[index % len(self.models)]

    async def provision(self, target: int) -> List[PlaneRef]:
        """
        Ensure at least ``target`` planes are persisted.

        Returns:
            Every known plane (existing and newly created)
        """
        rows = await self.repository.find_many(Plane, Plane.plane_id, Plane.model, Plane.capacity)
        planes = [PlaneRef.model_validate(row) for row in rows]
        existing = len(planes)

        to_create = max(0, target - existing)
        for i in range(to_create):
            model = self.model_for(existing + i)
            capacity = self.fake.random_int(min=MIN_CAPACITY, max=MAX_CAPACITY)
            created = await self.repository.create(Plane, model=model, capacity=capacity)
            planes.append(PlaneRef(plane_id=created.plane_id, model=model, capacity=capacity))

        logger.info(f"Planes: {to_create} created, {len(planes)} total")
        self.console.print(f"Total planes now: {len(planes)}")
        return planes
