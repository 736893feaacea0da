"""
labeltracks - export a Discogs label's numbered series as a per-track CSV.
"""

from .core.config import PROJECT_VERSION as __version__
