"""
Custom exceptions for labeltracks.
"""

from typing import Optional


class LabelTracksError(Exception):
    """Base exception for labeltracks."""
    pass


class ConfigurationError(LabelTracksError):
    """Exception raised when configuration is missing or invalid."""
    pass


class APIError(LabelTracksError):
    """Exception raised when Discogs API calls fail."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AuthenticationError(APIError):
    """Exception raised when Discogs rejects the token (401/403)."""
    pass


class RateLimitError(APIError):
    """Exception raised when Discogs answers 429 Too Many Requests."""
    pass


class PayloadError(LabelTracksError):
    """Exception raised when an API payload lacks expected fields."""
    pass


class NetworkError(LabelTracksError, ConnectionError):
    """Exception raised when network operations fail."""
    pass
