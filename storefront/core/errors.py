"""
Error Definitions

Exception classes surfaced by the data-access layer.
"""

from typing import Any, Optional


class StorefrontError(Exception):
    """
    Base exception for the storefront package.

    Carries a human-readable message, a machine-friendly code and optional
    details so callers can report failures uniformly.
    """

    def __init__(
        self,
        message: str,
        code: str = "storefront_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary format

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "code": self.code,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class PersistenceError(StorefrontError):
    """
    Persistence Error

    Raised when the store rejects an operation: lost connectivity, constraint
    violation, malformed raw SQL or an update against a missing row. The
    store-level exception is kept in ``original`` and as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Persistence operation failed",
        code: str = "persistence_error",
        details: Optional[dict[str, Any]] = None,
        original: Optional[BaseException] = None,
    ):
        super().__init__(message=message, code=code, details=details)
        self.original = original
