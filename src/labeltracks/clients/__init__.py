"""
API clients for labeltracks.
"""

from .discogs import DiscogsClient, parse_release_detail, parse_release_summaries

__all__ = [
    'DiscogsClient',
    'parse_release_detail',
    'parse_release_summaries',
]
