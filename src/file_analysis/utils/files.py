"""Streaming local files through a file analysis."""

import logging
from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from tqdm.auto import tqdm

from ..analysis import FileAnalysis
from ..constants import STREAMING_CHUNK_SIZE, TQDM_DEFAULTS
from ..models.actions import ActionArgs, ActionType
from ..results import ActionResults

log = logging.getLogger(__name__)


def hash_file(
    file_path: str | PathLike,
    algorithms: Iterable[ActionType],
    chunk_size: int = STREAMING_CHUNK_SIZE,
    progress: bool = True,
) -> ActionResults:
    """
    Calculate digests of a file by streaming it through hash actions.

    :param file_path: path to the file
    :param algorithms: digests to calculate
    :param chunk_size: Chunk size in bytes
    :param progress: Print progress
    :return: results holding one digest per algorithm (unset for empty files)
    """
    file_path = Path(file_path)
    total_size = file_path.stat().st_size

    with FileAnalysis(str(file_path), [ActionArgs(type=algorithm) for algorithm in algorithms]) as analysis:
        # inspired by hashlib.file_digest
        buf = bytearray(chunk_size)
        view = memoryview(buf)
        with open(file_path, "rb") as f:
            if progress and (total_size > chunk_size):
                with tqdm(total=total_size, desc=f"Hashing {file_path.name}", **TQDM_DEFAULTS) as pbar:
                    while size := f.readinto(buf):
                        analysis.data_in(bytes(view[:size]))
                        pbar.update(size)
            else:
                while size := f.readinto(buf):
                    analysis.data_in(bytes(view[:size]))

        analysis.end_of_file()
        log.debug(f"Hashed {analysis.seen_bytes} bytes of {file_path}")
        return analysis.merged_results()
