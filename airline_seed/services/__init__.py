"""
Seeding services for the airline seeder.

One service per pipeline stage plus the Seeder that runs them in order.
"""

from .airport_provisioner import AirportProvisioner
from .plane_provisioner import PlaneProvisioner, PLANE_MODELS
from .passenger_inserter import PassengerBatchInserter, build_email
from .flight_generator import FlightGenerator
from .seeder import Seeder, build_faker

__all__ = [
    'AirportProvisioner',
    'PlaneProvisioner',
    'PLANE_MODELS',
    'PassengerBatchInserter',
    'build_email',
    'FlightGenerator',
    'Seeder',
    'build_faker',
]
