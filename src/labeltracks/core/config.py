"""
Configuration for labeltracks.
Contains constants, defaults, and the run configuration loaded from the environment.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import ConfigurationError

# Project Information
PROJECT_NAME = "labeltracks"
PROJECT_VERSION = "1.0.0"
PROJECT_DESCRIPTION = "Export a Discogs label's numbered series as a flat per-track CSV"

# Discogs Configuration
DISCOGS_CONFIG = {
    "BASE_URL": "https://api.discogs.com",
    "USER_AGENT": f"{PROJECT_NAME}/{PROJECT_VERSION}",
    "MAX_PER_PAGE": 100,
    "TIMEOUT": 30,
    "RATE_LIMIT_HEADERS": (
        "X-Discogs-Ratelimit",
        "X-Discogs-Ratelimit-Used",
        "X-Discogs-Ratelimit-Remaining",
    ),
}

# Pipeline defaults
PIPELINE_DEFAULTS = {
    "OUTPUT_DIR": ".",
    "PER_PAGE": 100,
    "PAGE_DELAY": 0.5,  # seconds between listing pages
    "RELEASE_DELAY": 1.0,  # seconds after each release detail fetch
}

# API Limits
API_LIMITS = {
    "MAX_ATTEMPTS": 2,  # first call + one retry after a 429
    "RATE_LIMIT_BACKOFF": 60.0,
}

# Logging Configuration
LOGGING_CONFIG = {
    "LEVEL": "INFO",
    "FORMAT": "%(levelname)s - %(name)s - %(message)s",
    "DIAGNOSTIC_FORMAT": "%(asctime)s %(levelname)s - %(name)s:%(lineno)d - %(message)s",
    "VALID_LEVELS": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
}

# Output columns, in file order
CSV_COLUMNS = [
    "Issue",
    "Year",
    "Format",
    "Version",
    "Disc",
    "TrackNumber",
    "Title",
    "Artist",
    "DiscogsReleaseID",
]
RELEASE_TITLE_COLUMN = "ReleaseTitle"

# Environment variable names per config field
ENV_VARS = {
    "token": "DISCOGS_TOKEN",
    "base_url": "DISCOGS_BASE_URL",
    "user_agent": "DISCOGS_USER_AGENT",
    "label_id": "DISCOGS_LABEL_ID",
    "title_pattern": "TITLE_PATTERN",
    "output_name": "OUTPUT_NAME",
    "output_dir": "OUTPUT_DIR",
    "release_type": "RELEASE_TYPE",
    "release_role": "RELEASE_ROLE",
    "expand_versions": "EXPAND_VERSIONS",
    "include_release_title": "INCLUDE_RELEASE_TITLE",
    "per_page": "PER_PAGE",
    "page_delay": "PAGE_DELAY",
    "release_delay": "RELEASE_DELAY",
    "diagnostics": "DIAGNOSTICS",
    "log_level": "LOG_LEVEL",
}

REQUIRED_FIELDS = ["token", "base_url", "user_agent", "label_id", "title_pattern", "output_name"]

# Error Messages
ERROR_MESSAGES = {
    "MISSING_VALUE": "Missing required configuration value",
    "INVALID_NUMBER": "Invalid numeric configuration value",
    "INVALID_BOOL": "Invalid boolean configuration value",
    "AUTH_FAILED": "Discogs rejected the token; check DISCOGS_TOKEN",
    "RATE_LIMITED": "Discogs rate limit still exceeded after retrying",
    "NETWORK_ERROR": "Network error occurred.",
    "MALFORMED_PAYLOAD": "Discogs response is missing expected fields",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class LabelTracksConfig:
    """Everything one export run needs, passed explicitly to each stage."""
    token: str = field(repr=False)
    base_url: str
    user_agent: str
    label_id: int
    title_pattern: str
    output_name: str
    output_dir: str = PIPELINE_DEFAULTS["OUTPUT_DIR"]
    release_type: Optional[str] = None
    release_role: Optional[str] = None
    expand_versions: bool = False
    include_release_title: bool = False
    per_page: int = PIPELINE_DEFAULTS["PER_PAGE"]
    page_delay: float = PIPELINE_DEFAULTS["PAGE_DELAY"]
    release_delay: float = PIPELINE_DEFAULTS["RELEASE_DELAY"]
    max_attempts: int = API_LIMITS["MAX_ATTEMPTS"]
    rate_limit_backoff: float = API_LIMITS["RATE_LIMIT_BACKOFF"]
    timeout: int = DISCOGS_CONFIG["TIMEOUT"]
    diagnostics: bool = False
    log_level: str = LOGGING_CONFIG["LEVEL"]

    @property
    def output_path(self) -> Path:
        """Path of the CSV this run writes."""
        return Path(self.output_dir) / f"{self.output_name}.csv"

    @property
    def compiled_pattern(self) -> "re.Pattern[str]":
        return re.compile(self.title_pattern)


def parse_bool(name: str, value: str) -> bool:
    """Parse an environment-style boolean ("1", "true", "yes", "on" and their negatives)."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{ERROR_MESSAGES['INVALID_BOOL']}: {name}={value!r}")


_CONVERTERS = {
    "label_id": int,
    "per_page": int,
    "page_delay": float,
    "release_delay": float,
}
_BOOL_FIELDS = ("expand_versions", "include_release_title", "diagnostics")


def load_config(
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> LabelTracksConfig:
    """
    Build the run configuration from environment variables and CLI overrides.

    Args:
        env: Environment mapping (defaults to os.environ)
        overrides: Field values that take precedence over the environment;
            None values are ignored

    Returns:
        Populated LabelTracksConfig

    Raises:
        ConfigurationError: If a required value is missing or a value cannot be parsed.
            All problems are reported together.
    """
    env = os.environ if env is None else env
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

    values: Dict[str, Any] = {}
    errors: List[str] = []

    for name, env_name in ENV_VARS.items():
        if name in overrides:
            values[name] = overrides[name]
            continue

        raw = env.get(env_name)
        if raw is None or raw.strip() == "":
            if name in REQUIRED_FIELDS:
                errors.append(f"{ERROR_MESSAGES['MISSING_VALUE']}: {env_name}")
            continue

        raw = raw.strip()
        try:
            if name in _CONVERTERS:
                values[name] = _CONVERTERS[name](raw)
            elif name in _BOOL_FIELDS:
                values[name] = parse_bool(env_name, raw)
            else:
                values[name] = raw
        except ValueError as e:
            if name in _BOOL_FIELDS:
                errors.append(str(e))
            else:
                errors.append(f"{ERROR_MESSAGES['INVALID_NUMBER']}: {env_name}={raw!r}")

    if errors:
        raise ConfigurationError(
            "Configuration is incomplete:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    if "log_level" in values:
        values["log_level"] = str(values["log_level"]).upper()

    return LabelTracksConfig(**values)
