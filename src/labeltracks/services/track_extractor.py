"""
Track extraction: release details to flat per-track rows.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from ..clients.discogs import DiscogsClient
from ..core.config import ERROR_MESSAGES
from ..core.exceptions import AuthenticationError, LabelTracksError
from ..core.logger import get_logger
from ..models.releases import ReleaseDetail, ReleaseSummary
from ..models.rows import TrackRow
from ..utils.string_utils import classify_version, extract_issue_number, parse_position
from .catalog_service import fetch_master_versions

logger = get_logger(__name__)


def build_rows(
    summary: ReleaseSummary,
    detail: ReleaseDetail,
    issue: Optional[int] = None
) -> List[TrackRow]:
    """
    Turn one release detail into rows, one per titled track.

    Args:
        summary: Listing entry the detail was reached from
        detail: Full release record
        issue: Issue number; extracted from summary.title when omitted
    """
    if issue is None:
        issue = extract_issue_number(summary.title)

    release_format = detail.primary_format
    version = classify_version(release_format.name, release_format.descriptions)
    year = detail.year if detail.year is not None else summary.year

    rows = []
    for track in detail.tracklist:
        if not track.title:
            continue
        disc, track_number = parse_position(track.position)
        rows.append(TrackRow(
            issue=issue,
            year=year,
            format=release_format.name,
            version=version,
            disc=disc,
            track_number=track_number,
            title=track.title,
            artist=track.first_artist,
            discogs_release_id=detail.id,
            release_title=detail.title or summary.title,
        ))
    return rows


@dataclass
class ExtractionResult:
    """Rows gathered from all releases plus the ones that had to be skipped."""
    rows: List[TrackRow] = field(default_factory=list)
    skipped: List[Tuple[int, str]] = field(default_factory=list)
    releases_fetched: int = 0


class TrackExtractor:
    """Fetches release details for filtered releases and builds track rows."""

    def __init__(
        self,
        client: DiscogsClient,
        expand_versions: bool = False,
        per_page: int = 100,
        page_delay: float = 0.0,
        release_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.client = client
        self.expand_versions = expand_versions
        self.per_page = per_page
        self.page_delay = page_delay
        self.release_delay = release_delay
        self.sleep = sleep

    def _targets(self, summary: ReleaseSummary) -> List[ReleaseSummary]:
        """Listing entries whose details should be fetched for summary."""
        if self.expand_versions and summary.is_master:
            versions = fetch_master_versions(
                self.client,
                summary.id,
                self.per_page,
                page_delay=self.page_delay,
                sleep=self.sleep
            )
            logger.debug(f"Master {summary.id} '{summary.title}' has {len(versions)} versions")
            return versions
        if summary.is_master and summary.main_release:
            return [ReleaseSummary(id=summary.main_release, title=summary.title, year=summary.year)]
        return [summary]

    def extract(
        self,
        releases: List[ReleaseSummary],
        progress_callback: Optional[Callable[[ReleaseSummary], None]] = None
    ) -> ExtractionResult:
        """
        Fetch details for each release and collect rows.

        A release (or version) whose fetch fails is logged and skipped.
        Authentication failures abort the whole extraction.

        Args:
            releases: Filtered releases, in issue order
            progress_callback: Called once per release after it is processed
        """
        result = ExtractionResult()

        for summary in releases:
            issue = extract_issue_number(summary.title)
            try:
                targets = self._targets(summary)
            except AuthenticationError:
                raise
            except LabelTracksError as e:
                self._skip(result, summary, e)
                targets = []

            for target in targets:
                try:
                    result.rows.extend(self._extract_one(target, issue, result))
                except AuthenticationError:
                    raise
                except LabelTracksError as e:
                    self._skip(result, target, e)

            if progress_callback:
                progress_callback(summary)

        return result

    @staticmethod
    def _skip(result: ExtractionResult, summary: ReleaseSummary, error: Exception):
        logger.warning(f"Skipping release {summary.id} '{summary.title}': {error}")
        result.skipped.append((summary.id, str(error)))

    def _extract_one(self, target: ReleaseSummary, issue: int, result: ExtractionResult) -> List[TrackRow]:
        try:
            detail = self.client.get_release(target.id)
        finally:
            self.sleep(self.release_delay)
        result.releases_fetched += 1

        if not detail.tracklist:
            logger.warning(f"{ERROR_MESSAGES['MALFORMED_PAYLOAD']}: release {target.id} has no tracklist")

        rows = build_rows(target, detail, issue)
        logger.debug(f"Release {detail.id} '{detail.title}': {len(rows)} tracks")
        return rows
