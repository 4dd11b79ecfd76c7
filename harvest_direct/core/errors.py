"""
Service errors.

Every error carries the HTTP status it maps to; the application turns them
into ``{"detail": message}`` responses.
"""


class HarvestDirectError(Exception):
    """Base class for errors raised by the cart and inventory core"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(HarvestDirectError):
    """Malformed or out-of-range input"""

    status_code = 400


class InsufficientStock(InvalidRequest):
    """Requested quantity exceeds the product's current stock"""

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {product_id}. "
            f"Requested: {requested}, available: {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class NotFound(HarvestDirectError):
    """Referenced product does not exist in the catalog"""

    status_code = 404


class StorageUnavailable(HarvestDirectError):
    """Cart storage backend cannot be reached"""

    status_code = 503


# Common messages
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_INVALID_QUANTITY = "Quantity must be a positive integer"
ERROR_NEGATIVE_STOCK = "Stock quantity cannot be negative"
ERROR_NEGATIVE_THRESHOLD = "Threshold cannot be negative"
