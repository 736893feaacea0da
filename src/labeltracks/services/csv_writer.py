"""
CSV output for extracted track rows.
"""

import csv
from pathlib import Path
from typing import Iterable, List, Union

from ..core.logger import get_logger
from ..models.rows import TrackRow, csv_header

logger = get_logger(__name__)


def sort_rows(rows: Iterable[TrackRow]) -> List[TrackRow]:
    """Order rows by issue, format, version, disc and track number."""
    return sorted(rows, key=TrackRow.sort_key)


def write_rows(
    rows: Iterable[TrackRow],
    path: Union[str, Path],
    include_release_title: bool = False
) -> Path:
    """
    Sort rows and write them as a UTF-8 CSV with a header row.
    
    The header is written even when there are no rows. Line endings are
    always "\\n" so identical input gives a byte-identical file.
    
    Args:
        rows: Track rows in any order
        path: Destination file; parent directories are created
        include_release_title: Append the ReleaseTitle column
        
    Returns:
        Path of the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ordered = sort_rows(rows)

    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=csv_header(include_release_title), lineterminator="\n")
        writer.writeheader()
        for row in ordered:
            writer.writerow(row.to_record(include_release_title))

    logger.info(f"Wrote {len(ordered)} rows to {path}")
    return path
