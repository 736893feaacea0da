"""
Release and track models.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class ReleaseSummary:
    """One entry of a label (or master versions) listing."""
    id: int
    title: str
    year: Optional[int] = None
    type: Optional[str] = None  # "release" or "master" on label listings
    role: Optional[str] = None
    main_release: Optional[int] = None

    @property
    def is_master(self) -> bool:
        return self.type == "master"


@dataclass
class ReleaseFormat:
    """A physical format entry, e.g. CD with ("Album", "Remastered")."""
    name: str
    descriptions: Tuple[str, ...] = ()


@dataclass
class Track:
    """Tracklist entry from a release."""
    position: str
    title: Optional[str] = None
    artists: List[str] = field(default_factory=list)

    @property
    def first_artist(self) -> Optional[str]:
        return self.artists[0] if self.artists else None


@dataclass
class ReleaseDetail:
    """Full release record with formats and tracklist."""
    id: int
    title: str = ""
    year: Optional[int] = None
    formats: List[ReleaseFormat] = field(default_factory=list)
    tracklist: List[Track] = field(default_factory=list)

    @property
    def primary_format(self) -> ReleaseFormat:
        """First listed format; later entries are ignored for versioning."""
        if self.formats:
            return self.formats[0]
        return ReleaseFormat(name="")
