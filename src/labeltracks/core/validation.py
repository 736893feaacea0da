"""
Configuration validation utilities.
"""

import re
from typing import List, Tuple
from .config import DISCOGS_CONFIG, LOGGING_CONFIG, LabelTracksConfig
from .exceptions import ConfigurationError


def validate_configuration(config: LabelTracksConfig) -> Tuple[bool, List[str]]:
    """
    Validate a run configuration.
    
    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []
    
    if config.label_id < 1:
        errors.append("DISCOGS_LABEL_ID must be a positive integer")
    
    try:
        re.compile(config.title_pattern)
    except re.error as e:
        errors.append(f"TITLE_PATTERN is not a valid regular expression: {e}")
    
    if not config.base_url.startswith(("http://", "https://")):
        errors.append("DISCOGS_BASE_URL must be an http(s) URL")
    
    if not config.output_name.strip():
        errors.append("OUTPUT_NAME must not be blank")
    
    max_per_page = DISCOGS_CONFIG["MAX_PER_PAGE"]
    if not 1 <= config.per_page <= max_per_page:
        errors.append(f"PER_PAGE must be between 1 and {max_per_page}")
    
    if config.page_delay < 0:
        errors.append("PAGE_DELAY must be >= 0")
    
    if config.release_delay < 0:
        errors.append("RELEASE_DELAY must be >= 0")
    
    if config.max_attempts < 1:
        errors.append("max_attempts must be >= 1")
    
    if config.rate_limit_backoff < 0:
        errors.append("rate_limit_backoff must be >= 0")
    
    if config.timeout < 1:
        errors.append("timeout must be >= 1")
    
    if config.log_level not in LOGGING_CONFIG["VALID_LEVELS"]:
        errors.append(f"LOG_LEVEL must be one of: {', '.join(LOGGING_CONFIG['VALID_LEVELS'])}")
    
    is_valid = len(errors) == 0
    return is_valid, errors


def validate_and_raise(config: LabelTracksConfig):
    """
    Validate configuration and raise ConfigurationError if invalid.
    """
    is_valid, errors = validate_configuration(config)
    if not is_valid:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)
