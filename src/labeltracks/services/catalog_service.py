"""
Catalog service: label listing pagination and title filtering.
"""

import re
import time
from typing import Any, Callable, Dict, List, Optional, Pattern, Union

from ..clients.discogs import DiscogsClient, parse_release_summaries
from ..core.config import ERROR_MESSAGES
from ..core.exceptions import PayloadError
from ..core.logger import get_logger
from ..models.releases import ReleaseSummary
from ..utils.string_utils import extract_issue_number

logger = get_logger(__name__)


def paginate(
    fetch_page: Callable[[int], Dict[str, Any]],
    listing_key: str,
    page_delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
    description: str = "listing"
) -> List[Dict[str, Any]]:
    """
    Request pages 1, 2, ... and concatenate their listing entries.

    Stops once the reported page reaches the reported page count, or when a
    page has no `listing_key` field or is not a JSON object at all. Other
    errors from fetch_page propagate.

    Args:
        fetch_page: Callable taking a 1-based page number and returning the payload
        listing_key: Payload field holding the entries ("releases", "versions")
        page_delay: Seconds to wait between successful page requests
        sleep: Sleep function
        description: Label used in log messages

    Returns:
        All entries in page order
    """
    entries: List[Dict[str, Any]] = []
    page = 1

    while True:
        try:
            data = fetch_page(page)
        except PayloadError as e:
            logger.warning(
                f"{e} (page {page} of {description}); treating it as the end of the listing"
            )
            break

        items = data.get(listing_key)
        if not isinstance(items, list):
            logger.warning(
                f"{ERROR_MESSAGES['MALFORMED_PAYLOAD']}: no '{listing_key}' on page {page} "
                f"of {description}; treating it as the end of the listing"
            )
            break
        entries.extend(items)

        pagination = data.get('pagination') or {}
        current_page = pagination.get('page', page)
        total_pages = pagination.get('pages', current_page)
        logger.debug(f"{description}: page {current_page}/{total_pages}, {len(items)} entries")

        if current_page >= total_pages:
            break

        page += 1
        sleep(page_delay)

    return entries


def fetch_label_releases(
    client: DiscogsClient,
    label_id: int,
    per_page: int,
    page_delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep
) -> List[ReleaseSummary]:
    """Fetch a label's complete release listing."""
    entries = paginate(
        lambda page: client.get_label_releases_page(label_id, page, per_page),
        'releases',
        page_delay=page_delay,
        sleep=sleep,
        description=f"label {label_id}"
    )
    releases = parse_release_summaries(entries)
    logger.info(f"Fetched {len(releases)} releases for label {label_id}")
    return releases


def fetch_master_versions(
    client: DiscogsClient,
    master_id: int,
    per_page: int,
    page_delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep
) -> List[ReleaseSummary]:
    """Fetch every version (physical edition) of a master release."""
    entries = paginate(
        lambda page: client.get_master_versions_page(master_id, page, per_page),
        'versions',
        page_delay=page_delay,
        sleep=sleep,
        description=f"master {master_id} versions"
    )
    return parse_release_summaries(entries)


def filter_releases(
    releases: List[ReleaseSummary],
    pattern: Union[str, Pattern[str]],
    release_type: Optional[str] = None,
    role: Optional[str] = None
) -> List[ReleaseSummary]:
    """
    Keep releases whose title matches pattern, ordered by issue number.

    Args:
        releases: Label listing
        pattern: Regular expression searched anywhere in the title
        release_type: If set, keep only entries with exactly this type
        role: If set, keep only entries with exactly this role

    Returns:
        Matching releases sorted ascending by the first integer in the title
        (0 when the title has none); ties keep listing order
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    matched = [
        release for release in releases
        if regex.search(release.title)
        and (release_type is None or release.type == release_type)
        and (role is None or release.role == role)
    ]
    matched.sort(key=lambda release: extract_issue_number(release.title))
    return matched
