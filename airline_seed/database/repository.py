"""
Persistence gateway used by the seeding stages.

Wraps the async engine behind the handful of operations the pipeline needs:
count, find_many, find_unique, create, create_many and create_flight. Each
call runs in its own session and commits on success, so concurrent calls on
the same event loop never share a session. Database errors are not caught
here; they propagate to the caller and abort the run.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, insert, select

from .config import DatabaseConfig
from .models import Airport, Flight, Passenger, Plane, flight_passenger
from ..models.flight import FlightPlan

logger = logging.getLogger(__name__)


class SeedRepository:
    """Async create/count/find operations over the airline schema."""

    def __init__(self, db_config: DatabaseConfig):
        self.db_config = db_config

    async def count(self, model) -> int:
        """Count rows of a mapped class or table."""
        async with self.db_config.get_session_context() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    async def find_many(self, model, /, *columns, **filters) -> List[Any]:
        """
        Fetch every row matching the equality filters.

        With columns given, rows are returned as lightweight Row tuples
        carrying only those columns; otherwise mapped instances are returned.
        """
        stmt = select(*columns) if columns else select(model)
        if filters:
            stmt = stmt.filter_by(**filters)

        async with self.db_config.get_session_context() as session:
            result = await session.execute(stmt)
            if columns:
                return list(result.all())
            return list(result.scalars().all())

    async def find_unique(self, model, /, **unique_key) -> Optional[Any]:
        """Look up one row by a unique key, e.g. ``find_unique(Airport, iata='LAX')``."""
        async with self.db_config.get_session_context() as session:
            result = await session.execute(select(model).filter_by(**unique_key))
            return result.scalar_one_or_none()

    async def create(self, model, /, **values) -> Any:
        """Insert one row and return it with its generated identity."""
        instance = model(**values)
        async with self.db_config.get_session_context() as session:
            session.add(instance)
            await session.flush()
        logger.debug(f"Created {instance!r}")
        return instance

    async def create_many(self, model, rows: Sequence[Dict[str, Any]]) -> None:
        """Bulk insert rows; generated identities are not returned."""
        if not rows:
            return
        async with self.db_config.get_session_context() as session:
            await session.execute(insert(model), list(rows))

    async def create_flight(self, plan: FlightPlan) -> int:
        """
        Insert a flight and connect it to its passengers.

        The flight row and its association rows are committed together.

        Returns:
            The generated flight id
        """
        flight = Flight(
            flightno=plan.flightno,
            departure=plan.departure,
            arrival=plan.arrival,
            from_airport=plan.origin_id,
            to_airport=plan.destination_id,
            plane_id=plan.plane_id,
        )
        async with self.db_config.get_session_context() as session:
            session.add(flight)
            await session.flush()
            if plan.passenger_ids:
                await session.execute(
                    insert(flight_passenger),
                    [
                        {"flight_id": flight.flight_id, "passenger_id": passenger_id}
                        for passenger_id in plan.passenger_ids
                    ],
                )
        return flight.flight_id

    async def table_counts(self) -> Dict[str, int]:
        """Row counts for every seeded table, keyed by entity name."""
        return {
            "airports": await self.count(Airport),
            "planes": await self.count(Plane),
            "passengers": await self.count(Passenger),
            "flights": await self.count(Flight),
            "flight_passengers": await self.count(flight_passenger),
        }
