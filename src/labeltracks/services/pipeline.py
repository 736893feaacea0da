"""
Export pipeline: label listing -> filter -> track extraction -> CSV.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..clients.discogs import DiscogsClient
from ..core.config import LabelTracksConfig
from ..core.logger import get_logger
from ..models.releases import ReleaseSummary
from .catalog_service import fetch_label_releases, filter_releases
from .csv_writer import write_rows
from .track_extractor import TrackExtractor

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Summary of one export run."""
    output_path: Path
    releases_listed: int = 0
    releases_matched: int = 0
    releases_fetched: int = 0
    rows_written: int = 0
    skipped: List[Tuple[int, str]] = field(default_factory=list)


class ExportPipeline:
    """Runs one label export with an explicit configuration."""

    def __init__(
        self,
        config: LabelTracksConfig,
        client: Optional[DiscogsClient] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.config = config
        self.sleep = sleep
        self.client = client or DiscogsClient(config, sleep=sleep)
        self.extractor = TrackExtractor(
            self.client,
            expand_versions=config.expand_versions,
            per_page=config.per_page,
            page_delay=config.page_delay,
            release_delay=config.release_delay,
            sleep=sleep
        )

    def list_releases(self) -> List[ReleaseSummary]:
        return fetch_label_releases(
            self.client,
            self.config.label_id,
            self.config.per_page,
            page_delay=self.config.page_delay,
            sleep=self.sleep
        )

    def select_releases(self, releases: List[ReleaseSummary]) -> List[ReleaseSummary]:
        selected = filter_releases(
            releases,
            self.config.compiled_pattern,
            release_type=self.config.release_type,
            role=self.config.release_role
        )
        logger.info(
            f"{len(selected)} of {len(releases)} releases match '{self.config.title_pattern}'"
        )
        return selected

    def run(
        self,
        on_selected: Optional[Callable[[List[ReleaseSummary]], None]] = None,
        on_release: Optional[Callable[[ReleaseSummary], None]] = None
    ) -> PipelineResult:
        """
        Execute the export and write the CSV.
        
        Args:
            on_selected: Called with the filtered releases before extraction starts
            on_release: Called after each filtered release is processed
            
        Returns:
            PipelineResult describing the run
        """
        releases = self.list_releases()
        selected = self.select_releases(releases)
        if on_selected:
            on_selected(selected)

        extraction = self.extractor.extract(selected, progress_callback=on_release)

        output_path = write_rows(
            extraction.rows,
            self.config.output_path,
            include_release_title=self.config.include_release_title
        )

        if extraction.skipped:
            logger.warning(f"Skipped {len(extraction.skipped)} release(s) after fetch failures")

        return PipelineResult(
            output_path=output_path,
            releases_listed=len(releases),
            releases_matched=len(selected),
            releases_fetched=extraction.releases_fetched,
            rows_written=len(extraction.rows),
            skipped=extraction.skipped,
        )


def run_pipeline(
    config: LabelTracksConfig,
    client: Optional[DiscogsClient] = None,
    sleep: Callable[[float], None] = time.sleep
) -> PipelineResult:
    """Run a complete export for config."""
    return ExportPipeline(config, client=client, sleep=sleep).run()
