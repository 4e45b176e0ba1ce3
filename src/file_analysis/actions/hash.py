"""Actions computing a digest over a file's content stream."""

from __future__ import annotations

from enum import Enum

from ..exceptions import ConfigurationError
from ..hashing import HashState, MD5State, SHA1State, SHA256State
from ..models.actions import ActionArgs
from ..results import ActionResults, ResultsContext, ResultsRecord
from .base import Action, Notification


class HashActionState(Enum):
    ACTIVE = "active"
    INVALIDATED = "invalidated"
    FINALIZED = "finalized"


# notification kinds an action still wants, by state
_INTEREST: dict[HashActionState, frozenset[Notification]] = {
    HashActionState.ACTIVE: frozenset({Notification.STREAM, Notification.END_OF_FILE}),
    HashActionState.INVALIDATED: frozenset({Notification.END_OF_FILE}),
    HashActionState.FINALIZED: frozenset(),
}


class HashAction(Action):
    """
    Feeds a file's content into a hash state and publishes the digest.

    The digest is written to a single field of the file's results record,
    at most once, when the stream ends. Nothing is published if no content
    was fed or if the hash state became invalid along the way.

    Gaps are not compensated for: the digest covers only the bytes that were
    actually delivered.

    Usage:
        action = HashAction(args, info, SHA256State(), "sha256")
        action.deliver_stream(data1)
        action.deliver_stream(data2)
        action.end_of_file()
        action.close()
    """

    def __init__(self, args: ActionArgs, info: ResultsContext, hash_state: HashState, field: str):
        """
        Bind a hash state to a results field.

        :param args: Arguments the action is attached with
        :param info: Results context owning the file's results record
        :param hash_state: Digest state, owned by the action from now on
        :param field: Name of the results field receiving the digest
        :raises ConfigurationError: If the results schema has no such field
        """
        super().__init__(args, info)

        result_field_idx = ResultsRecord.field_offset_in(ActionResults, field)
        if result_field_idx < 0:
            raise ConfigurationError(f"Missing ActionResults field: {field}")

        self._result_field_idx = result_field_idx
        self._hash: HashState | None = hash_state
        self._hash.init()
        self._fed = False
        self._state = HashActionState.ACTIVE

    @property
    def state(self) -> HashActionState:
        return self._state

    @property
    def fed(self) -> bool:
        """Return whether any non-empty chunk made it into the digest."""
        return self._fed

    @property
    def result_field_idx(self) -> int:
        return self._result_field_idx

    def wants(self, notification: Notification) -> bool:
        return notification in _INTEREST[self._state]

    def deliver_stream(self, data: bytes, length: int | None = None) -> bool:
        if self._state is not HashActionState.ACTIVE:
            return self.wants(Notification.STREAM)

        if not self._hash_valid():
            self._log.debug(f"Hash state for {self._args.type} became invalid, declining further content")
            self._state = HashActionState.INVALIDATED
            return self.wants(Notification.STREAM)

        if length is not None:
            data = data[:length]

        if not self._fed:
            self._fed = len(data) > 0

        self._hash.feed(data)
        return self.wants(Notification.STREAM)

    def undelivered(self, offset: int, length: int) -> bool:
        return self.wants(Notification.GAP)

    def end_of_file(self) -> bool:
        if self._state is not HashActionState.FINALIZED:
            self._finalize()
            self._state = HashActionState.FINALIZED
        return self.wants(Notification.END_OF_FILE)

    def _finalize(self) -> None:
        if not self._hash_valid() or not self._fed:
            self._log.debug(f"No {self._args.type} digest published (fed={self._fed})")
            return

        digest = self._hash.get()
        self._info.get_results(self._args).assign(self._result_field_idx, digest)
        self._log.debug(f"Published {self._args.type} digest {digest}")

    def _hash_valid(self) -> bool:
        return self._hash is not None and self._hash.is_valid()

    def close(self) -> None:
        """Release the owned hash state."""
        if self._hash is not None:
            self._hash.release()
            self._hash = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(args={self._args!r}, state={self._state.value}, fed={self._fed})"


class MD5Action(HashAction):
    def __init__(self, args: ActionArgs, info: ResultsContext):
        super().__init__(args, info, MD5State(), "md5")

    @classmethod
    def instantiate(cls, args: ActionArgs, info: ResultsContext) -> MD5Action:
        return cls(args, info)


class SHA1Action(HashAction):
    def __init__(self, args: ActionArgs, info: ResultsContext):
        super().__init__(args, info, SHA1State(), "sha1")

    @classmethod
    def instantiate(cls, args: ActionArgs, info: ResultsContext) -> SHA1Action:
        return cls(args, info)


class SHA256Action(HashAction):
    def __init__(self, args: ActionArgs, info: ResultsContext):
        super().__init__(args, info, SHA256State(), "sha256")

    @classmethod
    def instantiate(cls, args: ActionArgs, info: ResultsContext) -> SHA256Action:
        return cls(args, info)
