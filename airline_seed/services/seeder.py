"""
Seeding pipeline: airports, planes, passengers, then flights.

Each stage receives the previous stages' results as arguments; nothing is
kept in module state. A failure in any stage aborts the run, and rows
committed before the failure stay in place.
"""

import logging
import time
from typing import Dict, Optional

from faker import Faker
from rich.console import Console

from ..database.repository import SeedRepository
from ..models.report import ENTITIES, SeedReport, SeedTargets
from ..utils.config import SeedConfig
from .airport_provisioner import AirportProvisioner
from .flight_generator import FlightGenerator
from .passenger_inserter import PassengerBatchInserter
from .plane_provisioner import PlaneProvisioner

logger = logging.getLogger(__name__)


def build_faker(seed_value: Optional[int] = None) -> Faker:
    """Create the fake data generator, seeded when a seed value is given."""
    fake = Faker()
    if seed_value is not None:
        fake.seed_instance(seed_value)
    return fake


class Seeder:
    """Runs the four seeding stages in order against one repository."""

    def __init__(
        self,
        repository: SeedRepository,
        fake: Faker,
        passenger_batch_size: int = 2000,
        flight_batch_size: int = 50,
        console: Optional[Console] = None,
    ):
        self.repository = repository
        self.console = console or Console(quiet=True)
        self.airports = AirportProvisioner(repository, fake, console=self.console)
        self.planes = PlaneProvisioner(repository, fake, console=self.console)
        self.passengers = PassengerBatchInserter(
            repository, fake, batch_size=passenger_batch_size, console=self.console
        )
        self.flights = FlightGenerator(
            repository, fake, batch_size=flight_batch_size, console=self.console
        )

    @classmethod
    def from_config(
        cls,
        repository: SeedRepository,
        config: SeedConfig,
        console: Optional[Console] = None,
    ) -> "Seeder":
        return cls(
            repository,
            build_faker(config.seed_value),
            passenger_batch_size=config.passenger_batch_size,
            flight_batch_size=config.flight_batch_size,
            console=console,
        )

    async def _entity_counts(self) -> Dict[str, int]:
        counts = await self.repository.table_counts()
        return {entity: counts[entity] for entity in ENTITIES}

    async def run(self, targets: SeedTargets) -> SeedReport:
        """Fill every entity up to its target and report what changed."""
        started = time.perf_counter()
        before = await self._entity_counts()
        logger.info(f"Seeding towards {targets.model_dump()} from {before}")

        airports = await self.airports.provision(targets.airports)
        planes = await self.planes.provision(targets.planes)
        passenger_ids = await self.passengers.insert(targets.passengers)
        await self.flights.generate(targets.flights, airports, planes, passenger_ids)

        after = await self._entity_counts()
        report = SeedReport(
            before=before,
            after=after,
            elapsed_seconds=time.perf_counter() - started,
        )
        logger.info(f"Seeding finished in {report.elapsed_seconds:.2f}s, created {report.created}")
        return report
