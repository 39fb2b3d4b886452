"""
Passenger batch insertion.

Passengers are written with bulk inserts of a fixed batch size. Emails embed
a global index (existing count at start plus offset), which keeps them unique
across repeated runs. Bulk inserts return no ids, so the full id pool is
re-fetched once every batch has committed.
"""

import logging
import re
from typing import Dict, List, Optional

from faker import Faker
from rich.console import Console

from ..database.models import Passenger
from ..database.repository import SeedRepository
from .sampling import batch_ranges

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 2000

_NON_EMAIL_CHARS = re.compile(r"[^a-z0-9]+")


def build_email(firstname: str, lastname: str, index: int) -> str:
    """``firstname.lastname.<index>@example.com``, lowercased."""
    first = _NON_EMAIL_CHARS.sub("", firstname.lower()) or "passenger"
    last = _NON_EMAIL_CHARS.sub("", lastname.lower()) or "passenger"
    return f"{first}.{last}.{index}@example.com"


class PassengerBatchInserter:
    """Fill the passenger deficit in bulk batches."""

    def __init__(
        self,
        repository: SeedRepository,
        fake: Faker,
        batch_size: int = DEFAULT_BATCH_SIZE,
        console: Optional[Console] = None,
    ):
        self.repository = repository
        self.fake = fake
        self.batch_size = batch_size
        self.console = console or Console(quiet=True)

    def build_passenger(self, index: int) -> Dict[str, str]:
        firstname = self.fake.first_name()
        lastname = self.fake.last_name()
        return {
            "firstname": firstname,
            "lastname": lastname,
            "email": build_email(firstname, lastname, index),
        }

    async def insert(self, target: int) -> List[int]:
        """
        Ensure at least ``target`` passengers are persisted.

        A failing batch aborts the run; batches committed before it stay.

        Returns:
            Ids of every persisted passenger
        """
        existing = await self.repository.count(Passenger)
        to_create = max(0, target - existing)

        if to_create:
            self.console.print(f"Creating {to_create} passengers in batches of {self.batch_size}...")

        for start, end in batch_ranges(to_create, self.batch_size):
            batch = [self.build_passenger(existing + i) for i in range(start, end)]
            await self.repository.create_many(Passenger, batch)
            logger.debug(f"Inserted passenger batch {start + 1}-{end}")
            self.console.print(f"  inserted passengers {start + 1} - {end}")

        rows = await self.repository.find_many(Passenger, Passenger.passenger_id)
        passenger_ids = [row.passenger_id for row in rows]

        logger.info(f"Passengers: {to_create} created, {len(passenger_ids)} total")
        self.console.print(f"Total passengers now: {len(passenger_ids)}")
        return passenger_ids
