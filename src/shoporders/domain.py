"""Domain initialization and configuration.

Shop Orders keeps a standing cart order per shop, validates and prices order
lines against the product-variant catalogue, and places carts as confirmed
orders.
"""

from protean.domain import Domain

from shoporders.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
shoporders = Domain(name="shoporders")
