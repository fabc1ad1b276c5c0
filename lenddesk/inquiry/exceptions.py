"""Inquiry domain exceptions."""

from lenddesk.core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)


class InquiryNotFoundError(NotFoundError):
    """Raised when an inquiry is absent, or not visible to the caller."""

    error_type = "inquiry_not_found"

    def __init__(self, message: str = "Inquiry not found"):
        super().__init__(message)


class DuplicatePendingInquiryError(ConflictError):
    """Raised when the user already has a pending inquiry for the item."""

    error_type = "duplicate_pending_inquiry"

    def __init__(
        self, message: str = "You already have a pending inquiry for this item"
    ):
        super().__init__(message)


class InquiryAlreadyRepliedError(InvalidStateError):
    """Raised when replying to an inquiry that is no longer pending."""

    error_type = "inquiry_already_replied"

    def __init__(self, message: str = "This inquiry has already been replied to"):
        super().__init__(message)


class InquiryValidationError(ValidationError):
    error_type = "inquiry_validation_error"
