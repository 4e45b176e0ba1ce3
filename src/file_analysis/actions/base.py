"""Base interface for actions attached to a file's content stream."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from ..models.actions import ActionArgs
from ..results import ResultsContext

log = logging.getLogger(__name__)


class Notification(Enum):
    """Kinds of notifications a host delivers to its actions."""

    STREAM = "stream"
    GAP = "gap"
    END_OF_FILE = "end_of_file"


class Action(ABC):
    """
    A pluggable consumer of one file's content notifications.

    The host calls :meth:`deliver_stream`, :meth:`undelivered` and
    :meth:`end_of_file` strictly in stream order. Each callback returns
    whether the action wants to keep receiving that kind of notification.

    Supports context manager protocol for releasing owned resources.
    """

    def __init__(self, args: ActionArgs, info: ResultsContext):
        self._args = args
        self._info = info
        self._log = log.getChild(self.__class__.__name__)

    @property
    def args(self) -> ActionArgs:
        """Return the arguments the action was attached with."""
        return self._args

    @property
    def info(self) -> ResultsContext:
        """Return the hosting results context."""
        return self._info

    @abstractmethod
    def deliver_stream(self, data: bytes, length: int | None = None) -> bool:
        """
        Receive the next in-order chunk of file content.

        :param data: Content bytes
        :param length: Number of bytes of ``data`` to use (all if omitted)
        :returns: Whether further chunks are wanted
        """

    @abstractmethod
    def undelivered(self, offset: int, length: int) -> bool:
        """
        Receive notice of a content range that will never be delivered.

        :returns: Whether further gap notices are wanted
        """

    @abstractmethod
    def end_of_file(self) -> bool:
        """
        Receive notice that the content stream has ended.

        :returns: Whether further end-of-file notices are wanted
        """

    def wants(self, notification: Notification) -> bool:
        """Return whether the action currently wants the given notification kind."""
        return True

    def close(self) -> None:
        """Release resources owned by the action."""
        return None

    def __enter__(self) -> Action:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
