"""
Core services for labeltracks.
"""

from .catalog_service import fetch_label_releases, fetch_master_versions, filter_releases
from .track_extractor import TrackExtractor, ExtractionResult, build_rows
from .csv_writer import write_rows, sort_rows
from .pipeline import ExportPipeline, PipelineResult, run_pipeline

__all__ = [
    'fetch_label_releases',
    'fetch_master_versions',
    'filter_releases',
    'TrackExtractor',
    'ExtractionResult',
    'build_rows',
    'write_rows',
    'sort_rows',
    'ExportPipeline',
    'PipelineResult',
    'run_pipeline',
]
