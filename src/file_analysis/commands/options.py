"""
Common click options for the CLI commands.
"""

from pathlib import Path

import click
import platformdirs

from ..constants import STREAMING_CHUNK_SIZE
from ..models.actions import ActionType

DEFAULT_CONFIG_PATH = Path(platformdirs.user_config_dir("file-analysis")) / "config.yaml"

# Aliases for path types for click options
# Naming convention: {DIR,FILE}_{Read,Write}_{Exists,Create}
FILE_R_E = click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, resolve_path=True)

config_file = click.option(
    "--config-file",
    "config_files",
    metavar="PATH",
    type=FILE_R_E,
    multiple=True,
    help=f"Path to config file, may be given multiple times (default: {DEFAULT_CONFIG_PATH})",
)

algorithm = click.option(
    "--algorithm",
    "algorithms",
    type=click.Choice([t.value for t in ActionType]),
    multiple=True,
    help="Digest to calculate, may be given multiple times (default: from configuration)",
)

chunk_size = click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help=f"Size of the chunks content is streamed in (default: from configuration, {STREAMING_CHUNK_SIZE})",
)

progress = click.option(
    "--progress/--no-progress",
    default=None,
    help="Show progress bars while hashing (default: from configuration)",
)

output_json = click.option("--json", "output_json", is_flag=True, help="Output JSON for machine-readability.")


def config_paths(config_files: tuple[str, ...]) -> list[Path]:
    """Return the config files to load, falling back to the default config path."""
    return [Path(p) for p in config_files] if config_files else [DEFAULT_CONFIG_PATH]
