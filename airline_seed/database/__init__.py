"""
Database package for the airline seeder.

This package provides the SQLAlchemy models, async database configuration and
the repository the seeding stages write through.
"""

from .models import (
    Base,
    Airport,
    Plane,
    Passenger,
    Flight,
    flight_passenger,
    create_all_tables,
    drop_all_tables
)

from .config import DatabaseConfig

from .repository import SeedRepository

__all__ = [
    # Models
    'Base',
    'Airport',
    'Plane',
    'Passenger',
    'Flight',
    'flight_passenger',
    'create_all_tables',
    'drop_all_tables',

    # Configuration
    'DatabaseConfig',

    # Persistence
    'SeedRepository',
]
