"""
Exceptions raised by the seeding pipeline.

Persistence failures are not wrapped: SQLAlchemy errors propagate as-is and
abort the run.
"""


class SeedingError(Exception):
    """Raised when the current data pools cannot produce consistent records."""
