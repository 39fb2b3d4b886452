"""
Airline seed: synthetic data for the airline schema.

Fills an airline database (airports, planes, passengers, flights and the
flight/passenger association) with plausible fake records:
1. Airports with globally unique 3-letter codes
2. Planes cycling through a fixed model catalog
3. Passengers inserted in bulk batches with unique emails
4. Flights wired to existing airports, planes and passengers

Every stage only fills the deficit up to its target count, so re-running the
seeder against a populated database creates nothing new.
"""

__version__ = "0.1.0"
