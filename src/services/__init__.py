"""Business logic services used by handlers.

Services are imported lazily by handlers (through services.registry) so
that SQLAlchemy and boto3 clients are only built on first use.
"""

# Do NOT import services here - use lazy loading in handlers instead
