"""Configuration records describing actions attached to a file."""

from enum import StrEnum

from pydantic import ConfigDict

from .base import StrictBaseModel


class ActionType(StrEnum):
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"


class ActionArgs(StrictBaseModel):
    """
    Arguments an action is attached with.

    Records are immutable and hashable so they can key the attachments and
    results of a file.
    """

    model_config = ConfigDict(frozen=True)

    type: ActionType
    """
    Kind of action to instantiate.
    """

    tag: str | None = None
    """
    Optional label distinguishing otherwise identical attachments.
    """
