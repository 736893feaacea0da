"""
Utility modules for labeltracks.
"""

from .retry import RetryPolicy, call_with_rate_limit_retry
from .string_utils import classify_version, parse_position, extract_issue_number

__all__ = [
    'RetryPolicy',
    'call_with_rate_limit_retry',
    'classify_version',
    'parse_position',
    'extract_issue_number',
]
