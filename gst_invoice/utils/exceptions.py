"""
Custom Exceptions Module.

All errors raised by the invoice generator derive from InvoiceError, so
callers can catch everything package-specific in one clause while still
distinguishing data, rendering and storage failures.

Exception Hierarchy:
    InvoiceError (base)
    ├── InvoiceDataError
    │   ├── ItemValidationError
    │   ├── ItemNotFoundError
    │   └── InvoiceLoadError
    ├── RenderError
    │   ├── SurfaceUnavailableError
    │   ├── CaptureError
    │   └── DocumentWriteError
    └── StorageError
        ├── UploadError
        └── ListError
"""


class InvoiceError(Exception):
    """
    Base exception for all invoice generator errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# DATA ERRORS
# =============================================================================

class InvoiceDataError(InvoiceError):
    """Base exception for invoice data errors."""
    pass


class ItemValidationError(InvoiceDataError):
    """
    Raised when a line item is rejected before being added.

    Example:
        >>> raise ItemValidationError("item_name", "", "Item name is required")
    """

    def __init__(self, field: str, value, reason: str = None):
        message = f"Invalid line item field '{field}'"
        details = {"field": field, "value": value, "reason": reason}
        super().__init__(message, details)


class ItemNotFoundError(InvoiceDataError):
    """Raised when a line item id is not part of the invoice."""

    def __init__(self, item_id: str):
        message = f"Line item not found: {item_id}"
        details = {"item_id": item_id}
        super().__init__(message, details)


class InvoiceLoadError(InvoiceDataError):
    """Raised when an invoice definition file cannot be read or parsed."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Could not load invoice definition: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# RENDER ERRORS
# =============================================================================

class RenderError(InvoiceError):
    """Base exception for document rendering errors."""
    pass


class SurfaceUnavailableError(RenderError):
    """Raised when visual-capture mode is asked to capture without a surface."""

    def __init__(self, reason: str = None):
        message = "Visual surface is not available for capture"
        details = {"reason": reason}
        super().__init__(message, details)


class CaptureError(RenderError):
    """Raised when rasterizing a visual surface fails."""

    def __init__(self, surface: str, reason: str = None):
        message = f"Failed to capture visual surface: {surface}"
        details = {"surface": surface, "reason": reason}
        super().__init__(message, details)


class DocumentWriteError(RenderError):
    """Raised when a rendered document cannot be written to disk."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to write document: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# STORAGE ERRORS
# =============================================================================

class StorageError(InvoiceError):
    """Base exception for remote storage errors."""
    pass


class UploadError(StorageError):
    """Raised by a blob store when a put fails."""

    def __init__(self, pathname: str, reason: str = None):
        message = f"Upload failed: {pathname}"
        details = {"pathname": pathname, "reason": reason}
        super().__init__(message, details)


class ListError(StorageError):
    """Raised by a blob store when listing fails."""

    def __init__(self, reason: str = None):
        message = "Failed to list invoices"
        details = {"reason": reason}
        super().__init__(message, details)


__all__ = [
    'InvoiceError',
    'InvoiceDataError',
    'ItemValidationError',
    'ItemNotFoundError',
    'InvoiceLoadError',
    'RenderError',
    'SurfaceUnavailableError',
    'CaptureError',
    'DocumentWriteError',
    'StorageError',
    'UploadError',
    'ListError',
]
