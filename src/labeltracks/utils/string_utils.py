"""
String parsing and normalization for release titles, formats and track positions.
"""

import re
from typing import Iterable, Optional, Tuple

# First matching description tag wins
VERSION_SUFFIXES = (
    ("Remastered", "Remaster"),
    ("Reissue", "Reissue"),
    ("Repress", "Repress"),
    ("Club Edition", "Club"),
    ("Promo", "Promo"),
)
DEFAULT_VERSION_SUFFIX = "Original"

DEFAULT_DISC = "1"
DEFAULT_TRACK = 0

_SIDE_POSITION = re.compile(r"^[A-Z](\d+)$")
_DISC_TRACK_POSITION = re.compile(r"^(\d+)-0*(\d+)$")
_DIGITS = re.compile(r"\d+")


def classify_version(format_name: str, descriptions: Iterable[str]) -> str:
    """
    Build the version label for a format, e.g. "CD-Remaster" or "Vinyl-Original".
    
    Args:
        format_name: Format name as listed by Discogs ("CD", "Vinyl", ...)
        descriptions: Format description tags
        
    Returns:
        "{format_name}-{suffix}"
    """
    tags = set(descriptions or ())
    suffix = DEFAULT_VERSION_SUFFIX
    for tag, candidate in VERSION_SUFFIXES:
        if tag in tags:
            suffix = candidate
            break
    return f"{format_name}-{suffix}"


def parse_position(position: Optional[str]) -> Tuple[str, int]:
    """
    Split a track position into (disc, track number).
    
    "A1" -> ("A", 1), "1-05" -> ("1", 5). Anything else, including
    "Video" and the empty string, falls back to ("1", 0).
    """
    position = position or ""

    match = _SIDE_POSITION.match(position)
    if match:
        return position[0], int(match.group(1))

    match = _DISC_TRACK_POSITION.match(position)
    if match:
        return match.group(1), int(match.group(2))

    return DEFAULT_DISC, DEFAULT_TRACK


def extract_issue_number(title: Optional[str]) -> int:
    """Return the first integer in a release title, or 0 when it has none."""
    match = _DIGITS.search(title or "")
    return int(match.group(0)) if match else 0
