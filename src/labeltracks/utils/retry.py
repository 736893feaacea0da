"""
Retry utilities for Discogs rate-limit responses.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from ..core.config import API_LIMITS
from ..core.exceptions import RateLimitError
from ..core.logger import get_logger

T = TypeVar('T')

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded sleep-and-retry policy for 429 responses.
    
    Attributes:
        max_attempts: Total calls allowed, including the first one
        backoff_seconds: Fixed wait before each retry
        sleep: Sleep function; tests pass a fake clock
    """
    max_attempts: int = API_LIMITS["MAX_ATTEMPTS"]
    backoff_seconds: float = API_LIMITS["RATE_LIMIT_BACKOFF"]
    sleep: Callable[[float], None] = time.sleep


def call_with_rate_limit_retry(
    func: Callable[[], T],
    policy: RetryPolicy,
    description: Optional[str] = None
) -> T:
    """
    Call func, sleeping and retrying while it raises RateLimitError.
    
    Args:
        func: Zero-argument callable performing one request
        policy: Retry policy to apply
        description: Label used in log messages (e.g. the request URL)
        
    Returns:
        Whatever func returns
        
    Raises:
        RateLimitError: If the last allowed attempt is still rate limited
    """
    attempt = 1
    while True:
        try:
            return func()
        except RateLimitError:
            if attempt >= policy.max_attempts:
                logger.error(
                    f"Rate limit exceeded for {description or 'request'} "
                    f"after {attempt} attempt(s). Giving up."
                )
                raise
            logger.warning(
                f"Rate limit exceeded for {description or 'request'}. "
                f"Waiting {policy.backoff_seconds:g} seconds before retrying "
                f"(attempt {attempt + 1}/{policy.max_attempts})..."
            )
            policy.sleep(policy.backoff_seconds)
            attempt += 1
