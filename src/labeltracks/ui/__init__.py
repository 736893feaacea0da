"""
User interface components for labeltracks.
"""

from .cli import LabelTracksCLI
from .display import DisplayManager

__all__ = [
    'LabelTracksCLI',
    'DisplayManager'
]
