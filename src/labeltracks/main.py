"""
labeltracks - Discogs label catalog exporter
Main entry point.
"""

import sys
from typing import List, Optional

from .core import get_logger
from .ui.cli import LabelTracksCLI

logger = get_logger("main")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    logger.debug("Starting labeltracks")
    try:
        return LabelTracksCLI().run(argv)
    except KeyboardInterrupt:
        logger.warning("Export interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception occurred")
        raise
    finally:
        logger.debug("labeltracks shutting down")


if __name__ == "__main__":
    sys.exit(main())
