"""
Airport provisioning: make sure at least N airports exist, each with a
globally unique 3-letter code.
"""

import logging
import string
from typing import Dict, List, Optional, Set

from faker import Faker
from rich.console import Console

from ..database.models import Airport
from ..database.repository import SeedRepository
from ..errors import SeedingError
from ..models.refs import AirportRef

logger = logging.getLogger(__name__)

AIRPORT_SUFFIXES = [
    "International Airport",
    "Regional Airport",
    "Municipal Airport",
    "Airport",
    "Airfield",
]


class AirportProvisioner:
    """Create only the missing airports, one at a time, with unique codes."""

    def __init__(
        self,
        repository: SeedRepository,
        fake: Faker,
        console: Optional[Console] = None,
        max_code_attempts: int = 1000,
    ):
        self.repository = repository
        self.fake = fake
        self.console = console or Console(quiet=True)
        self.max_code_attempts = max_code_attempts

    def generate_candidate(self) -> Dict[str, str]:
        """Generate a name/city/code triple; the code is not yet checked."""
        city = self.fake.city()
        return {
            "name": f"{city} {self.fake.random_element(AIRPORT_SUFFIXES)}",
            "city": city,
            "iata": self.fake.lexify(text="???", letters=string.ascii_uppercase),
        }

    async def _unique_candidate(self, known_codes: Set[str]) -> Dict[str, str]:
        for _ in range(self.max_code_attempts):
            candidate = self.generate_candidate()
            code = candidate["iata"]
            if code in known_codes:
                continue
            if await self.repository.find_unique(Airport, iata=code) is not None:
                logger.debug(f"Airport code {code} already persisted, regenerating")
                continue
            return candidate
        raise SeedingError(f"no unused airport code found after {self.max_code_attempts} attempts")

    async def provision(self, target: int) -> List[AirportRef]:
        """
        Ensure at least ``target`` airports are persisted.

        Returns:
            Every known airport (existing and newly created)
        """
        rows = await self.repository.find_many(Airport, Airport.airport_id, Airport.iata)
        airports = [AirportRef.model_validate(row) for row in rows]
        known_codes = {airport.iata for airport in airports}

        to_create = max(0, target - len(airports))
        for _ in range(to_create):
            candidate = await self._unique_candidate(known_codes)
            created = await self.repository.create(Airport, **candidate)
            known_codes.add(created.iata)
            airports.append(AirportRef(airport_id=created.airport_id, iata=created.iata))

        logger.info(f"Airports: {to_create} created, {len(airports)} total")
        self.console.print(f"Total airports now: {len(airports)}")
        return airports
