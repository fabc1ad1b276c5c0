"""Item domain exceptions."""

from lenddesk.core.exceptions import ConflictError, NotFoundError, ValidationError


class ItemNotFoundError(NotFoundError):
    """Raised when an item cannot be found."""

    error_type = "item_not_found"

    def __init__(self, message: str = "Item not found"):
        super().__init__(message)


class QuantityError(ValidationError):
    """Raised when stock quantities break the catalog rules."""

    error_type = "invalid_quantity"

    def __init__(self, message: str = "Quantities must be >= 0"):
        super().__init__(message)


class ItemAlreadyInWishlistError(ConflictError):
    error_type = "already_in_wishlist"

    def __init__(self, message: str = "Item already in wishlist"):
        super().__init__(message)
