"""
Data models for labeltracks.
"""

from .releases import ReleaseSummary, ReleaseFormat, Track, ReleaseDetail
from .rows import TrackRow, csv_header

__all__ = [
    'ReleaseSummary',
    'ReleaseFormat',
    'Track',
    'ReleaseDetail',
    'TrackRow',
    'csv_header',
]
