"""
Flight generation.

Each flight connects two distinct airports, one plane and a random subset of
passengers. Flights are planned first and then written in batches: the
creates of one batch run concurrently, and the next batch starts only once
the whole batch has settled. If one create fails, its siblings are cancelled
and the error aborts the run.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from faker import Faker
from rich.console import Console

from ..database.models import Flight
from ..database.repository import SeedRepository
from ..errors import SeedingError
from ..models.flight import FlightPlan
from ..models.refs import AirportRef, PlaneRef
from .sampling import batch_ranges, sample, sample_other, sample_unique

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50

MIN_PASSENGERS = 10
MAX_PASSENGERS = 200
MIN_DURATION_HOURS = 1
MAX_DURATION_HOURS = 12
SCHEDULE_HORIZON = timedelta(days=365)


class FlightGenerator:
    """Fill the flight deficit with concurrently created batches."""

    def __init__(
        self,
        repository: SeedRepository,
        fake: Faker,
        batch_size: int = DEFAULT_BATCH_SIZE,
        console: Optional[Console] = None,
        max_destination_attempts: int = 100,
    ):
        self.repository = repository
        self.fake = fake
        self.batch_size = batch_size
        self.console = console or Console(quiet=True)
        self.max_destination_attempts = max_destination_attempts

    def plan_flight(
        self,
        airports: Sequence[AirportRef],
        planes: Sequence[PlaneRef],
        passenger_ids: Sequence[int],
        now: Optional[datetime] = None,
    ) -> FlightPlan:
        """Draw one random flight from the given pools."""
        rng = self.fake.random
        now = now or datetime.now()

        origin = sample(airports, rng)
        destination = sample_other(airports, origin, rng, self.max_destination_attempts)
        plane = sample(planes, rng)

        departure = now + timedelta(seconds=rng.uniform(1, SCHEDULE_HORIZON.total_seconds()))
        arrival = departure + timedelta(
            hours=self.fake.random_int(min=MIN_DURATION_HOURS, max=MAX_DURATION_HOURS)
        )

        # Planes seeded elsewhere may seat fewer than MIN_PASSENGERS
        upper = min(MAX_PASSENGERS, plane.capacity)
        passenger_count = self.fake.random_int(min=min(MIN_PASSENGERS, upper), max=upper)

        return FlightPlan(
            flightno=f"{plane.model}-{self.fake.numerify('#####')}",
            departure=departure,
            arrival=arrival,
            origin_id=origin.airport_id,
            destination_id=destination.airport_id,
            plane_id=plane.plane_id,
            passenger_ids=sample_unique(passenger_ids, passenger_count, rng),
        )

    @staticmethod
    def check_pools(
        airports: Sequence[AirportRef],
        planes: Sequence[PlaneRef],
        passenger_ids: Sequence[int],
    ) -> None:
        """
        Raises:
            SeedingError: If the pools cannot produce a valid flight
        """
        if len({airport.airport_id for airport in airports}) < 2:
            raise SeedingError("at least two airports are required to generate flights")
        if not planes:
            raise SeedingError("at least one plane is required to generate flights")
        if not passenger_ids:
            raise SeedingError("at least one passenger is required to generate flights")

    async def _dispatch(self, plans: List[FlightPlan]) -> List[int]:
        tasks = [asyncio.create_task(self.repository.create_flight(plan)) for plan in plans]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def generate(
        self,
        target: int,
        airports: Sequence[AirportRef],
        planes: Sequence[PlaneRef],
        passenger_ids: Sequence[int],
    ) -> int:
        """
        Ensure at least ``target`` flights are persisted.

        Returns:
            Number of flights created by this call
        """
        existing = await self.repository.count(Flight)
        to_create = max(0, target - existing)
        if not to_create:
            logger.info(f"Flights: 0 created, {existing} total")
            self.console.print(f"Total flights now: {existing}")
            return 0

        self.check_pools(airports, planes, passenger_ids)
        self.console.print(f"Creating {to_create} flights and attaching passengers...")

        for start, end in batch_ranges(to_create, self.batch_size):
            now = datetime.now()
            plans = [
                self.plan_flight(airports, planes, passenger_ids, now)
                for _ in range(start, end)
            ]
            await self._dispatch(plans)
            logger.debug(f"Created flight batch {start + 1}-{end}")
            self.console.print(f"  created flights {start + 1} - {end}")

        total = await self.repository.count(Flight)
        logger.info(f"Flights: {to_create} created, {total} total")
        self.console.print(f"Total flights now: {total}")
        return to_create
