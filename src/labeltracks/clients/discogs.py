"""
Discogs Client Module
A client for the Discogs label, master-versions and release endpoints.
"""

import time
from typing import Any, Callable, Dict, List, Optional

import requests

from ..core.config import DISCOGS_CONFIG, ERROR_MESSAGES, LabelTracksConfig
from ..core.exceptions import APIError, AuthenticationError, NetworkError, PayloadError, RateLimitError
from ..core.logger import get_logger
from ..models.releases import ReleaseDetail, ReleaseFormat, ReleaseSummary, Track
from ..utils.retry import RetryPolicy, call_with_rate_limit_retry

logger = get_logger(__name__)


class DiscogsClient:
    """Discogs REST client bound to one run configuration."""

    def __init__(
        self,
        config: LabelTracksConfig,
        session: Optional[requests.Session] = None,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.base_url = config.base_url.rstrip("/")
        self.user_agent = config.user_agent
        self.timeout = config.timeout
        self.diagnostics = config.diagnostics
        self.sleep = sleep
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=config.max_attempts,
            backoff_seconds=config.rate_limit_backoff,
            sleep=sleep
        )

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.user_agent,
            'Accept': 'application/json',
            'Authorization': f'Discogs token={config.token}',
        })

    def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Perform one GET and decode the JSON body.

        Raises:
            AuthenticationError: On 401/403
            RateLimitError: On 429
            APIError: On any other non-2xx status or a non-JSON body
            NetworkError: On connection failures and timeouts
        """
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{ERROR_MESSAGES['NETWORK_ERROR']} {url}: {e}") from e

        status = response.status_code
        if self.diagnostics:
            limits = {
                name: response.headers.get(name)
                for name in DISCOGS_CONFIG["RATE_LIMIT_HEADERS"]
                if response.headers.get(name) is not None
            }
            logger.debug(f"GET {url} params={params} -> {status} {limits}")

        if status in (401, 403):
            raise AuthenticationError(
                f"{ERROR_MESSAGES['AUTH_FAILED']} (HTTP {status} for {url})",
                status_code=status,
                url=url
            )
        if status == 429:
            raise RateLimitError(f"HTTP 429 Too Many Requests for {url}", status_code=status, url=url)

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise APIError(f"HTTP {status} for {url}: {e}", status_code=status, url=url) from e

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON from {url}: {e}", status_code=status, url=url) from e

        if not isinstance(data, dict):
            raise PayloadError(f"{ERROR_MESSAGES['MALFORMED_PAYLOAD']}: {url}")
        return data

    def _make_request(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET with the rate-limit retry policy applied."""
        params = params or {}
        return call_with_rate_limit_retry(lambda: self._get(url, params), self.retry_policy, url)

    def get_label_releases_page(self, label_id: int, page: int, per_page: int) -> Dict[str, Any]:
        """
        Fetch one page of a label's release listing.

        Returns:
            Raw payload with 'pagination' and 'releases' keys
        """
        url = f"{self.base_url}/labels/{label_id}/releases"
        return self._make_request(url, {'page': page, 'per_page': per_page})

    def get_master_versions_page(self, master_id: int, page: int, per_page: int) -> Dict[str, Any]:
        """
        Fetch one page of a master's versions.

        Returns:
            Raw payload with 'pagination' and 'versions' keys
        """
        url = f"{self.base_url}/masters/{master_id}/versions"
        return self._make_request(url, {'page': page, 'per_page': per_page})

    def get_release(self, release_id: int) -> ReleaseDetail:
        """
        Get detailed release information including formats and track listing.

        Args:
            release_id: Discogs release ID

        Returns:
            Parsed ReleaseDetail
        """
        url = f"{self.base_url}/releases/{release_id}"
        logger.debug(f"Fetching release details for Discogs ID: {release_id}")
        data = self._make_request(url)
        return parse_release_detail(data, release_id)


def _optional_int(value: Any) -> Optional[int]:
    # Discogs reports unknown years as 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _dict_entries(value: Any, what: str) -> List[Dict[str, Any]]:
    """List elements that are JSON objects; anything else is dropped with a warning."""
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(f"{ERROR_MESSAGES['MALFORMED_PAYLOAD']}: {what} is not a list: {value!r}")
        return []
    entries = []
    for entry in value:
        if isinstance(entry, dict):
            entries.append(entry)
        else:
            logger.warning(f"{ERROR_MESSAGES['MALFORMED_PAYLOAD']}: skipping {what} entry {entry!r}")
    return entries


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ''


def parse_release_summaries(entries: List[Dict[str, Any]]) -> List[ReleaseSummary]:
    """Parse label-listing or master-versions entries, skipping ones without a numeric id."""
    summaries = []
    for entry in _dict_entries(entries, "listing"):
        release_id = _optional_int(entry.get('id'))
        if release_id is None:
            logger.warning(f"Skipping listing entry without a valid id: {entry!r}")
            continue
        summaries.append(ReleaseSummary(
            id=release_id,
            title=_text(entry.get('title')),
            year=_optional_int(entry.get('year')),
            type=entry.get('type'),
            role=entry.get('role'),
            main_release=_optional_int(entry.get('main_release')),
        ))
    return summaries


def parse_release_detail(data: Dict[str, Any], release_id: int) -> ReleaseDetail:
    """
    Parse a /releases/{id} payload.

    Malformed formats, tracks and artists are dropped with a warning. A
    payload without a tracklist yields a detail with no tracks; the caller
    decides whether that warrants a warning.
    """
    formats = []
    for format_data in _dict_entries(data.get('formats'), f"release {release_id} format"):
        descriptions = format_data.get('descriptions')
        if not isinstance(descriptions, list):
            descriptions = []
        formats.append(ReleaseFormat(
            name=_text(format_data.get('name')),
            descriptions=tuple(d for d in descriptions if isinstance(d, str)),
        ))

    tracks = []
    for track_data in _dict_entries(data.get('tracklist'), f"release {release_id} track"):
        artists = [
            artist['name']
            for artist in _dict_entries(track_data.get('artists'), f"release {release_id} artist")
            if isinstance(artist.get('name'), str) and artist['name']
        ]
        title = track_data.get('title')
        tracks.append(Track(
            position=_text(track_data.get('position')),
            title=title if isinstance(title, str) else None,
            artists=artists,
        ))

    detail_id = _optional_int(data.get('id'))
    if detail_id is None:
        if data.get('id') is not None:
            logger.warning(f"{ERROR_MESSAGES['MALFORMED_PAYLOAD']}: release {release_id} has id {data.get('id')!r}")
        detail_id = release_id

    return ReleaseDetail(
        id=detail_id,
        title=_text(data.get('title')),
        year=_optional_int(data.get('year')),
        formats=formats,
        tracklist=tracks,
    )
