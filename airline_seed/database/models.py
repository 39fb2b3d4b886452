"""
SQLAlchemy database models for the airline seeder.

This module maps the schema that the seeder populates:
- Airport: Airports identified by a unique 3-letter IATA-style code
- Plane: Aircraft with a model name and seating capacity
- Passenger: Passengers identified by a unique email address
- Flight: Flights between two airports operated by one plane
- flight_passenger: Many-to-many association between flights and passengers

The schema itself is owned elsewhere; create_all_tables exists for local
development databases and tests.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import relationship

# Create the declarative base for all models
Base = declarative_base()


flight_passenger = Table(
    'flight_passenger',
    Base.metadata,
    Column('flight_id', Integer, ForeignKey('flight.flight_id', ondelete='CASCADE'), primary_key=True),
    Column('passenger_id', Integer, ForeignKey('passenger.passenger_id', ondelete='CASCADE'), primary_key=True),
)


class Airport(Base):
    """
    Airport model representing airport information.

    Codes are unique across all airports; rows are created once and never
    mutated or deleted by the seeder.
    """
    __tablename__ = 'airport'

    airport_id = Column(Integer, primary_key=True, autoincrement=True)
    iata = Column(String(3), unique=True, nullable=False, index=True)  # e.g. 'LAX'
    name = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)

    departing_flights = relationship(
        "Flight",
        foreign_keys="Flight.from_airport",
        back_populates="departure_airport",
        lazy="select"
    )
    arriving_flights = relationship(
        "Flight",
        foreign_keys="Flight.to_airport",
        back_populates="arrival_airport",
        lazy="select"
    )

    def __repr__(self):
        return f"<Airport(id={self.airport_id}, iata='{self.iata}', name='{self.name}')>"


class Plane(Base):
    """Plane model: a catalog model name and its seating capacity."""
    __tablename__ = 'plane'

    plane_id = Column(Integer, primary_key=True, autoincrement=True)
    model = Column(String(50), nullable=False, index=True)
    capacity = Column(Integer, nullable=False)

    flights = relationship("Flight", back_populates="plane", lazy="select")

    def __repr__(self):
        return f"<Plane(id={self.plane_id}, model='{self.model}', capacity={self.capacity})>"


class Passenger(Base):
    """
    Passenger model representing passenger information.

    The email address is unique across all passengers.
    """
    __tablename__ = 'passenger'

    passenger_id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)

    flights = relationship(
        "Flight",
        secondary=flight_passenger,
        back_populates="passengers",
        lazy="select"
    )

    def __repr__(self):
        return f"<Passenger(id={self.passenger_id}, email='{self.email}')>"


class Flight(Base):
    """
    Flight model representing scheduled flights.

    References exactly one origin airport, one destination airport and one
    plane, and carries a set of passengers through flight_passenger.
    """
    __tablename__ = 'flight'

    flight_id = Column(Integer, primary_key=True, autoincrement=True)
    flightno = Column(String(64), nullable=False, index=True)  # e.g. 'A320-04711'
    departure = Column(DateTime, nullable=False, index=True)
    arrival = Column(DateTime, nullable=False, index=True)
    from_airport = Column(Integer, ForeignKey('airport.airport_id'), nullable=False, index=True)
    to_airport = Column(Integer, ForeignKey('airport.airport_id'), nullable=False, index=True)
    plane_id = Column(Integer, ForeignKey('plane.plane_id'), nullable=False, index=True)

    departure_airport = relationship(
        "Airport",
        foreign_keys=[from_airport],
        back_populates="departing_flights",
        lazy="select"
    )
    arrival_airport = relationship(
        "Airport",
        foreign_keys=[to_airport],
        back_populates="arriving_flights",
        lazy="select"
    )
    plane = relationship("Plane", back_populates="flights", lazy="select")
    passengers = relationship(
        "Passenger",
        secondary=flight_passenger,
        back_populates="flights",
        lazy="select"
    )

    def __repr__(self):
        return f"<Flight(id={self.flight_id}, flightno='{self.flightno}', from={self.from_airport}, to={self.to_airport})>"


Index('idx_flight_route_date', Flight.from_airport, Flight.to_airport, Flight.departure)
Index('idx_passenger_name', Passenger.firstname, Passenger.lastname)


def create_all_tables(connection):
    """
    Create all database tables on the given synchronous connection.

    Intended for AsyncConnection.run_sync, e.g.
    ``await conn.run_sync(create_all_tables)``.
    """
    Base.metadata.create_all(bind=connection)


def drop_all_tables(connection):
    """Drop all database tables on the given synchronous connection."""
    Base.metadata.drop_all(bind=connection)
