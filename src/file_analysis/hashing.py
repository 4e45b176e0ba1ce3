"""Incremental digest primitives used by hash actions."""

from __future__ import annotations

import hashlib
import logging
from abc import ABC, abstractmethod
from typing import Any

from .exceptions import ConfigurationError

log = logging.getLogger(__name__)


class HashState(ABC):
    """
    An incremental digest.

    A state must be initialized before it accepts data. Once it reports
    itself invalid it stays invalid until re-initialized.

    Usage:
        state = SHA256State()
        state.init()
        state.feed(data1)
        state.feed(data2)
        if state.is_valid():
            digest = state.get()
    """

    @property
    @abstractmethod
    def algorithm(self) -> str:
        """Return the name of the digest algorithm."""

    @abstractmethod
    def init(self) -> None:
        """(Re-)initialize the digest, discarding anything fed so far."""

    @abstractmethod
    def feed(self, data: bytes) -> bool:
        """
        Feed data into the digest.

        :param data: Bytes to incorporate
        :returns: False if the state is invalid and the data was not used
        """

    @abstractmethod
    def is_valid(self) -> bool:
        """Return whether the state can still produce a meaningful digest."""

    @abstractmethod
    def get(self) -> str:
        """Return the digest of everything fed so far as a hex string."""

    def release(self) -> None:
        """Drop any resources held by the state."""
        return None


class HashlibState(HashState):
    """
    Digest state backed by :mod:`hashlib`.

    The digest can be read exactly once: :meth:`get` finalizes the state and
    leaves it invalid.
    """

    def __init__(self, algorithm: str):
        algorithm = algorithm.lower()
        if algorithm not in hashlib.algorithms_available:
            raise ConfigurationError(f"Unsupported hash algorithm: {algorithm}")

        self._algorithm = algorithm
        self._hasher: Any = None
        self._valid = False
        self._bytes_fed = 0

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def init(self) -> None:
        self._hasher = hashlib.new(self._algorithm)
        self._valid = True
        self._bytes_fed = 0

    def feed(self, data: bytes) -> bool:
        if not self._valid:
            return False

        self._hasher.update(data)
        self._bytes_fed += len(data)
        return True

    def is_valid(self) -> bool:
        return self._valid

    def get(self) -> str:
        if not self._valid:
            raise RuntimeError(f"{self._algorithm} digest requested from an invalid hash state")

        digest = self._hasher.hexdigest()
        self._valid = False
        log.debug(f"Finalized {self._algorithm} digest over {self._bytes_fed} bytes")
        return digest

    def release(self) -> None:
        self._hasher = None
        self._valid = False

    @property
    def bytes_fed(self) -> int:
        """Return the number of bytes fed since the last init."""
        return self._bytes_fed

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(algorithm={self._algorithm!r}, valid={self._valid})"


class MD5State(HashlibState):
    def __init__(self):
        super().__init__("md5")


class SHA1State(HashlibState):
    def __init__(self):
        super().__init__("sha1")


class SHA256State(HashlibState):
    def __init__(self):
        super().__init__("sha256")
