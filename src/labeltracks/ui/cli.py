"""
labeltracks CLI Module
Command-line interface for exporting a label's numbered series to CSV.
"""

import argparse
from typing import Any, Dict, List, Optional

from ..core.config import ENV_VARS, PROJECT_DESCRIPTION, PROJECT_NAME, PROJECT_VERSION, load_config
from ..core.exceptions import ConfigurationError, LabelTracksError
from ..core.logger import get_logger, setup_logging
from ..core.validation import validate_and_raise
from ..services.pipeline import ExportPipeline
from .display import DisplayManager

logger = get_logger(__name__)


class LabelTracksCLI:
    """Main CLI class for labeltracks."""

    def __init__(self, display_manager: Optional[DisplayManager] = None, pipeline_factory=ExportPipeline):
        self.display_manager = display_manager or DisplayManager()
        self.pipeline_factory = pipeline_factory

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog=PROJECT_NAME,
            description=f"{PROJECT_NAME} v{PROJECT_VERSION} - {PROJECT_DESCRIPTION}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Every option falls back to its environment variable (shown in brackets).

Examples:
  %(prog)s --label-id 12345 --pattern "^Now That's What I Call Music" --output now
  DISCOGS_TOKEN=... %(prog)s --expand-versions --release-title-column
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'{PROJECT_NAME} {PROJECT_VERSION}'
        )
        parser.add_argument('--token', help=f"Discogs personal access token [{ENV_VARS['token']}]")
        parser.add_argument('--base-url', dest='base_url', help=f"Discogs API base URL [{ENV_VARS['base_url']}]")
        parser.add_argument('--user-agent', dest='user_agent', help=f"Client identification string [{ENV_VARS['user_agent']}]")
        parser.add_argument('--label-id', '-l', dest='label_id', type=int, help=f"Numeric Discogs label id [{ENV_VARS['label_id']}]")
        parser.add_argument('--pattern', '-p', dest='title_pattern', help=f"Regular expression release titles must match [{ENV_VARS['title_pattern']}]")
        parser.add_argument('--output', '-o', dest='output_name', help=f"Output filename stem, '.csv' is appended [{ENV_VARS['output_name']}]")
        parser.add_argument('--output-dir', dest='output_dir', help=f"Directory for the CSV [{ENV_VARS['output_dir']}]")
        parser.add_argument('--type', dest='release_type', help=f"Keep only listing entries of this type, e.g. 'master' [{ENV_VARS['release_type']}]")
        parser.add_argument('--role', dest='release_role', help=f"Keep only listing entries with this role [{ENV_VARS['release_role']}]")
        parser.add_argument(
            '--expand-versions',
            dest='expand_versions',
            action='store_const',
            const=True,
            help=f"Fetch every version of master entries [{ENV_VARS['expand_versions']}]"
        )
        parser.add_argument(
            '--release-title-column',
            dest='include_release_title',
            action='store_const',
            const=True,
            help=f"Add a ReleaseTitle column [{ENV_VARS['include_release_title']}]"
        )
        parser.add_argument('--per-page', dest='per_page', type=int, help=f"Listing page size, 1-100 [{ENV_VARS['per_page']}]")
        parser.add_argument('--page-delay', dest='page_delay', type=float, help=f"Seconds between listing pages [{ENV_VARS['page_delay']}]")
        parser.add_argument('--release-delay', dest='release_delay', type=float, help=f"Seconds after each release fetch [{ENV_VARS['release_delay']}]")
        parser.add_argument(
            '--diagnostics',
            action='store_const',
            const=True,
            help=f"Debug logging with request and rate-limit details [{ENV_VARS['diagnostics']}]"
        )
        parser.add_argument('--log-level', dest='log_level', help=f"Logging level [{ENV_VARS['log_level']}]")

        return parser

    @staticmethod
    def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
        return {name: getattr(args, name, None) for name in ENV_VARS}

    def run(self, argv: Optional[List[str]] = None, env=None) -> int:
        """
        Parse arguments, run the export and report the outcome.

        Returns:
            Process exit code
        """
        parser = self.create_parser()
        args = parser.parse_args(argv)

        try:
            config = load_config(env=env, overrides=self._overrides(args))
            validate_and_raise(config)
        except ConfigurationError as e:
            setup_logging()
            logger.error(str(e))
            self.display_manager.display_error(str(e))
            return 1

        setup_logging(config.log_level, diagnostics=config.diagnostics)
        logger.debug(f"Configuration: {config}")
        self.display_manager.display_run_header(config)

        try:
            pipeline = self.pipeline_factory(config)
            with self.display_manager.create_progress_bar() as progress:
                task_id = progress.add_task("Fetching label listing", total=None)

                def on_selected(selected):
                    self.display_manager.display_selected_releases(selected)
                    progress.update(task_id, description="Fetching releases", total=len(selected), completed=0)

                def on_release(summary):
                    progress.advance(task_id)

                result = pipeline.run(on_selected=on_selected, on_release=on_release)
        except LabelTracksError as e:
            logger.error(f"Export aborted: {e}")
            self.display_manager.display_error(f"Export aborted: {e}")
            return 1

        self.display_manager.display_summary(result)
        return 0
