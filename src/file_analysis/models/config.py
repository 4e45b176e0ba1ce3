from pathlib import Path
from typing import Annotated, Self

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from ..constants import STREAMING_CHUNK_SIZE
from ..utils.config import read_and_merge_config_files
from .actions import ActionType
from .base import StrictBaseModel, StrictBaseSettings


class HashOptions(StrictBaseModel):
    algorithms: list[ActionType] = [ActionType.MD5, ActionType.SHA1, ActionType.SHA256]
    """
    Digests computed for every analyzed file.
    """

    chunk_size: Annotated[int, Field(gt=0)] = STREAMING_CHUNK_SIZE
    """
    Size of the content chunks delivered to the actions in bytes.
    """

    @field_validator("algorithms")
    @classmethod
    def check_algorithms(cls, v):
        if not v:
            raise ValueError("At least one hash algorithm must be configured.")
        # drop duplicates, keep order
        return list(dict.fromkeys(v))


class AnalysisConfig(StrictBaseSettings):
    model_config = SettingsConfigDict(env_prefix="file_analysis_")

    hash: HashOptions = HashOptions()

    progress: bool = True
    """
    Whether to show a progress bar while streaming files.
    """

    @classmethod
    def from_path(cls, path: str | Path) -> Self:
        return cls.from_paths([Path(path)])

    @classmethod
    def from_paths(cls, paths: list[Path]) -> Self:
        configuration = read_and_merge_config_files(paths)
        return cls(**configuration)
