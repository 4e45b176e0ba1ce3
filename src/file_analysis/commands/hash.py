"""Command for hashing files."""

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError

from ..exceptions import FileAnalysisError
from ..models.actions import ActionType
from ..models.config import AnalysisConfig
from ..utils.files import hash_file
from .options import FILE_R_E, algorithm, chunk_size, config_file, config_paths, output_json, progress

log = logging.getLogger(__name__)


def _load_config(config_files: tuple[str, ...]) -> AnalysisConfig:
    try:
        return AnalysisConfig.from_paths(config_paths(config_files))
    except (RuntimeError, ValidationError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


@click.command(name="hash")
@click.argument("files", nargs=-1, required=True, type=FILE_R_E)
@algorithm
@config_file
@chunk_size
@progress
@output_json
def hash_files(files, algorithms, config_files, chunk_size, progress, output_json):
    """
    Calculate digests of files.

    Each file is streamed chunk by chunk through one hash action per
    algorithm. Empty files have no digest.
    """
    config = _load_config(config_files)

    selected = [ActionType(a).value for a in dict.fromkeys(algorithms or config.hash.algorithms)]
    chunk_size = chunk_size or config.hash.chunk_size
    show_progress = config.progress if progress is None else progress

    log.info(f"Hashing {len(files)} file(s) with {', '.join(selected)}")

    results = {}
    for file in files:
        try:
            digests = hash_file(file, selected, chunk_size=chunk_size, progress=show_progress)
        except (FileAnalysisError, OSError) as e:
            raise click.ClickException(f"Failed to hash '{file}': {e}") from e
        results[file] = digests.model_dump(include=set(selected))

    if output_json:
        click.echo(json.dumps(results, indent=2))
        return

    for file, digests in results.items():
        for name in selected:
            digest = digests.get(name)
            click.echo(f"{digest if digest is not None else '-'}  {name}  {Path(file)}")
