"""
Core module for labeltracks.
Contains configuration, exceptions, logging setup, and validation.
"""

from .config import LabelTracksConfig, load_config
from .exceptions import (
    LabelTracksError,
    ConfigurationError,
    APIError,
    AuthenticationError,
    RateLimitError,
    PayloadError,
    NetworkError,
)
from .logger import setup_logging, get_logger
from .validation import validate_configuration, validate_and_raise

__all__ = [
    'LabelTracksConfig',
    'load_config',
    'setup_logging',
    'get_logger',
    'validate_configuration',
    'validate_and_raise',
    'LabelTracksError',
    'ConfigurationError',
    'APIError',
    'AuthenticationError',
    'RateLimitError',
    'PayloadError',
    'NetworkError',
]
