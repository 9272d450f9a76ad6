"""
Custom exceptions for the transaction dashboard.
"""
from typing import Any, Dict, Optional


class DashboardError(Exception):
    """Base exception for all transaction dashboard errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FileProcessingError(DashboardError):
    """Raised when an upload batch cannot be processed."""
    pass


class ParsingError(DashboardError):
    """Raised when a CSV file cannot be split into transaction rows."""
    pass


class ValidationError(DashboardError):
    """Raised when filter parameters are inconsistent."""
    pass


class ConfigurationError(DashboardError):
    """Raised when configuration is invalid."""
    pass


class DataNotFoundError(DashboardError):
    """Raised when an uploaded file does not exist."""
    pass
