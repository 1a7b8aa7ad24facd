"""Custom exceptions for the Atelier API.

Defines specific exception types for better error handling and reporting.
"""

from typing import Any, Dict, Optional


class AtelierException(Exception):
    """Base exception for Atelier errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_response(self) -> Dict[str, Any]:
        """Error envelope returned to API clients."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class CatalogNotFoundError(AtelierException):
    """Raised when the catalog file cannot be found."""

    def __init__(self, catalog_path: str):
        message = f"Catalog not found at '{catalog_path}'. Please load a catalog first."
        super().__init__(
            message=message,
            status_code=503,
            details={"catalog_path": catalog_path},
        )


class CatalogLoadError(AtelierException):
    """Raised when the catalog file exists but cannot be parsed."""

    def __init__(self, catalog_path: str, error: Exception):
        message = f"Failed to load catalog from '{catalog_path}': {error}"
        super().__init__(
            message=message,
            status_code=500,
            details={
                "catalog_path": catalog_path,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )


class ProductNotFoundError(AtelierException):
    """Raised when no public product matches an id or slug."""

    def __init__(self, id_or_slug: str):
        super().__init__(
            message=f"Product '{id_or_slug}' not found",
            status_code=404,
            details={"product": id_or_slug},
        )


class AuthenticationRequiredError(AtelierException):
    """Raised when an endpoint needs a signed-in shopper."""

    def __init__(self):
        super().__init__(
            message="Authentication required. Provide the X-User-ID header.",
            status_code=401,
        )


class PreferenceStoreError(AtelierException):
    """Raised when stored quiz answers cannot be read or written."""

    def __init__(self, store_path: str, error: Exception):
        message = f"Preference store at '{store_path}' is unavailable: {error}"
        super().__init__(
            message=message,
            status_code=503,
            details={
                "store_path": store_path,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )


class InvalidPreferencesError(AtelierException):
    """Raised when submitted quiz answers use unknown options."""

    def __init__(self, invalid: Dict[str, Any]):
        fields = ", ".join(sorted(invalid))
        super().__init__(
            message=f"Unknown quiz answer for: {fields}",
            status_code=422,
            details={"invalid": invalid},
        )
