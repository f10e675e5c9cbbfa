"""Domain initialization and configuration."""

from protean.domain import Domain

from agrigo.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root: products, orders and marketplace users share one
# store, so they live in a single domain.
agrigo = Domain(name="agrigo")
