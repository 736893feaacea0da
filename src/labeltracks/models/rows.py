"""
Output row model.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import CSV_COLUMNS, RELEASE_TITLE_COLUMN


@dataclass
class TrackRow:
    """One CSV row: a single titled track of one release."""
    issue: int
    year: Optional[int]
    format: str
    version: str
    disc: str
    track_number: int
    title: str
    artist: Optional[str]
    discogs_release_id: int
    release_title: Optional[str] = None

    def sort_key(self) -> Tuple[int, str, str, str, int]:
        # Disc compares as text, so "10" sorts before "2"
        return (self.issue, self.format, self.version, self.disc, self.track_number)

    def to_record(self, include_release_title: bool = False) -> Dict[str, Any]:
        record = {
            "Issue": self.issue,
            "Year": self.year,
            "Format": self.format,
            "Version": self.version,
            "Disc": self.disc,
            "TrackNumber": self.track_number,
            "Title": self.title,
            "Artist": self.artist,
            "DiscogsReleaseID": self.discogs_release_id,
        }
        if include_release_title:
            record[RELEASE_TITLE_COLUMN] = self.release_title
        return record


def csv_header(include_release_title: bool = False) -> List[str]:
    """Column names in file order."""
    if include_release_title:
        return CSV_COLUMNS + [RELEASE_TITLE_COLUMN]
    return list(CSV_COLUMNS)
