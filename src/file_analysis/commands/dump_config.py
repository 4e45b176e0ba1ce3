"""Command for dumping the configuration."""

import json
import logging

import click

from ..utils.config import read_and_merge_config_files
from .options import config_file, config_paths

log = logging.getLogger(__name__)


@click.command()
@config_file
def dump_config(config_files: tuple[str, ...]):
    """
    Dump the merged configuration as read from config files.
    """
    paths = config_paths(config_files)
    log.info(f"Configuration files to load: {json.dumps([str(p.absolute()) for p in paths], indent=2)}")

    try:
        config = read_and_merge_config_files(paths)
    except RuntimeError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(config, indent=2))

    log.info(
        "Note this only dumps the merged configuration as read from the files. "
        "It does not validate or process the configuration and ignores any environment variables."
    )
