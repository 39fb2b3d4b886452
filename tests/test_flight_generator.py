"""
Test suite for flight planning and concurrent batch creation.
"""

import asyncio
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from airline_seed.database.models import Flight, flight_passenger
from airline_seed.errors import SeedingError
from airline_seed.models.refs import AirportRef, PlaneRef
from airline_seed.services.flight_generator import FlightGenerator


AIRPORTS = [AirportRef(airport_id=i, iata=code) for i, code in enumerate(["LAX", "JFK", "ORD", "SEA", "MIA"], start=1)]
PLANES = [
    PlaneRef(plane_id=1, model="A320", capacity=180),
    PlaneRef(plane_id=2, model="Embraer E195", capacity=90),
    PlaneRef(plane_id=3, model="B777", capacity=400),
]
PASSENGER_IDS = list(range(1, 501))
NOW = datetime(2026, 10, 18, 12, 0)


def mock_repository(existing_flights=0):
    repository = MagicMock()
    repository.count = AsyncMock(return_value=existing_flights)
    repository.create_flight = AsyncMock(side_effect=lambda plan: 1)
    return repository


class TestPlanFlight:
    """Test cases for single flight plans."""

    def test_plan_invariants(self, fake):
        generator = FlightGenerator(mock_repository(), fake)
        planes = {plane.plane_id: plane for plane in PLANES}

        for _ in range(200):
            plan = generator.plan_flight(AIRPORTS, PLANES, PASSENGER_IDS, now=NOW)
            plane = planes[plan.plane_id]

            assert plan.origin_id != plan.destination_id
            assert {plan.origin_id, plan.destination_id} <= {a.airport_id for a in AIRPORTS}
            assert NOW < plan.departure <= NOW + timedelta(days=365)
            assert timedelta(hours=1) <= plan.arrival - plan.departure <= timedelta(hours=12)
            assert (plan.arrival - plan.departure) % timedelta(hours=1) == timedelta(0)
            assert 10 <= len(plan.passenger_ids) <= min(200, plane.capacity)
            assert len(set(plan.passenger_ids)) == len(plan.passenger_ids)
            assert set(plan.passenger_ids) <= set(PASSENGER_IDS)

    def test_flight_number_format(self, fake):
        generator = FlightGenerator(mock_repository(), fake)

        plan = generator.plan_flight(AIRPORTS, PLANES, PASSENGER_IDS, now=NOW)
        model, _, digits = plan.flightno.rpartition("-")

        assert model in {plane.model for plane in PLANES}
        assert len(digits) == 5 and digits.isdigit()

    def test_passenger_count_capped_by_pool(self, fake):
        generator = FlightGenerator(mock_repository(), fake)

        plan = generator.plan_flight(AIRPORTS, PLANES, [1, 2, 3], now=NOW)

        assert sorted(plan.passenger_ids) == [1, 2, 3]

    def test_small_plane_never_overbooked(self, fake):
        generator = FlightGenerator(mock_repository(), fake)
        tiny = [PlaneRef(plane_id=9, model="Cessna", capacity=6)]

        for _ in range(20):
            plan = generator.plan_flight(AIRPORTS, tiny, PASSENGER_IDS, now=NOW)
            assert len(plan.passenger_ids) == 6

    def test_two_airports_always_alternate(self, fake):
        generator = FlightGenerator(mock_repository(), fake)
        pair = AIRPORTS[:2]

        for _ in range(50):
            plan = generator.plan_flight(pair, PLANES, PASSENGER_IDS, now=NOW)
            assert {plan.origin_id, plan.destination_id} == {1, 2}


class TestCheckPools:
    """Test cases for generation preconditions."""

    def test_single_airport_rejected(self):
        with pytest.raises(SeedingError, match="two airports"):
            FlightGenerator.check_pools(AIRPORTS[:1], PLANES, PASSENGER_IDS)

    def test_no_planes_rejected(self):
        with pytest.raises(SeedingError, match="plane"):
            FlightGenerator.check_pools(AIRPORTS, [], PASSENGER_IDS)

    def test_no_passengers_rejected(self):
        with pytest.raises(SeedingError, match="passenger"):
            FlightGenerator.check_pools(AIRPORTS, PLANES, [])


class TestGenerate:
    """Test cases for batched generation against a mocked repository."""

    @pytest.mark.asyncio
    async def test_only_fills_deficit(self, fake):
        repository = mock_repository(existing_flights=7)
        generator = FlightGenerator(repository, fake, batch_size=4)

        created = await generator.generate(10, AIRPORTS, PLANES, PASSENGER_IDS)

        assert created == 3
        assert repository.create_flight.await_count == 3

    @pytest.mark.asyncio
    async def test_target_met_skips_pool_checks(self, fake):
        repository = mock_repository(existing_flights=10)
        generator = FlightGenerator(repository, fake)

        created = await generator.generate(10, [], [], [])

        assert created == 0
        repository.create_flight.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_batches_run_sequentially(self, fake):
        """No create of a later batch starts before the previous batch settled."""
        repository = mock_repository()
        in_flight = 0
        peak = 0

        async def slow_create(plan):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return 1

        repository.create_flight = AsyncMock(side_effect=slow_create)
        generator = FlightGenerator(repository, fake, batch_size=5)

        created = await generator.generate(12, AIRPORTS, PLANES, PASSENGER_IDS)

        assert created == 12
        assert peak == 5

    @pytest.mark.asyncio
    async def test_failure_cancels_siblings_and_propagates(self, fake):
        repository = mock_repository()
        finished = []

        async def create(plan):
            if plan is failing_plan[0]:
                raise RuntimeError("insert failed")
            await asyncio.sleep(1)
            finished.append(plan)
            return 1

        failing_plan = []
        original_plan_flight = FlightGenerator.plan_flight

        def plan_flight(self, *args, **kwargs):
            plan = original_plan_flight(self, *args, **kwargs)
            if not failing_plan:
                failing_plan.append(plan)
            return plan

        repository.create_flight = AsyncMock(side_effect=create)
        generator = FlightGenerator(repository, fake, batch_size=5)
        generator.plan_flight = plan_flight.__get__(generator)

        with pytest.raises(RuntimeError, match="insert failed"):
            await generator.generate(10, AIRPORTS, PLANES, PASSENGER_IDS)

        assert finished == []
        assert repository.create_flight.await_count == 5


class TestGenerateDatabase:
    """Test cases for generation against a real database."""

    @pytest.mark.asyncio
    async def test_flights_persisted_with_links(self, repository, fake):
        from airline_seed.services.airport_provisioner import AirportProvisioner
        from airline_seed.services.passenger_inserter import PassengerBatchInserter
        from airline_seed.services.plane_provisioner import PlaneProvisioner

        airports = await AirportProvisioner(repository, fake).provision(4)
        planes = await PlaneProvisioner(repository, fake).provision(2)
        passenger_ids = await PassengerBatchInserter(repository, fake).insert(40)

        created = await FlightGenerator(repository, fake, batch_size=3).generate(
            7, airports, planes, passenger_ids
        )

        assert created == 7
        assert await repository.count(Flight) == 7
        flights = await repository.find_many(Flight)
        for flight in flights:
            links = await repository.find_many(
                flight_passenger, flight_passenger.c.passenger_id, flight_id=flight.flight_id
            )
            assert 10 <= len(links) <= 40
            assert flight.from_airport != flight.to_airport
            assert flight.arrival > flight.departure
