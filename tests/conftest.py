"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock
from typing import Generator

import requests

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from labeltracks.core.config import LabelTracksConfig


class FakeClock:
    """Records requested sleeps instead of sleeping."""

    def __init__(self):
        self.sleeps = []

    def __call__(self, seconds: float):
        self.sleeps.append(seconds)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def fake_sleep() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_config(temp_dir):
    """Factory for a complete LabelTracksConfig writing into temp_dir."""
    def _make(**overrides) -> LabelTracksConfig:
        values = dict(
            token="test-token",
            base_url="https://api.discogs.com",
            user_agent="Test/1.0",
            label_id=1,
            title_pattern=r"\d+",
            output_name="out",
            output_dir=str(temp_dir),
            page_delay=0.5,
            release_delay=1.0,
        )
        values.update(overrides)
        return LabelTracksConfig(**values)
    return _make


@pytest.fixture
def make_response():
    """Factory for mocked requests.Response objects."""
    def _make(status_code: int = 200, json_data=None, headers=None):
        response = Mock()
        response.status_code = status_code
        response.headers = headers or {}
        response.json.return_value = json_data if json_data is not None else {}
        if status_code >= 400:
            error = requests.exceptions.HTTPError(f"{status_code} Error")
            error.response = response
            response.raise_for_status.side_effect = error
        else:
            response.raise_for_status.return_value = None
        return response
    return _make


@pytest.fixture
def label_page():
    """Factory for one label listing page payload."""
    def _make(releases, page: int = 1, pages: int = 1):
        return {
            "pagination": {"page": page, "pages": pages, "per_page": 100, "items": len(releases)},
            "releases": releases,
        }
    return _make


@pytest.fixture
def release_payload():
    """Release detail with one remastered CD and two tracks, one untitled."""
    return {
        "id": 501,
        "title": "Now 9",
        "year": 1987,
        "formats": [
            {"name": "CD", "qty": "2", "descriptions": ["Compilation", "Remastered"]},
            {"name": "Vinyl", "descriptions": ["LP"]},
        ],
        "tracklist": [
            {"position": "1-01", "title": "Track A", "artists": [{"name": "Artist X"}, {"name": "Artist Y"}]},
            {"position": "", "title": "", "type_": "heading"},
        ],
    }
