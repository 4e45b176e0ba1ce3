"""Per-file analysis context dispatching content notifications to actions."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .actions import Action, Notification, instantiate_action
from .exceptions import FileAnalysisError
from .models.actions import ActionArgs
from .results import ActionResults, ResultsRecord

log = logging.getLogger(__name__)


class _Attachment:
    """An attached action and the notification kinds it still wants."""

    def __init__(self, action: Action):
        self.action = action
        self.interest = {Notification.STREAM, Notification.GAP, Notification.END_OF_FILE}

    def deliver(self, notification: Notification, *args: Any) -> None:
        if notification not in self.interest:
            return

        if notification is Notification.STREAM:
            wanted = self.action.deliver_stream(*args)
        elif notification is Notification.GAP:
            wanted = self.action.undelivered(*args)
        else:
            wanted = self.action.end_of_file()

        if not wanted:
            self.interest.discard(notification)


class FileAnalysis:
    """
    Analysis state of one file.

    Holds the actions attached to the file and their results records, and
    delivers the file's content to them in stream order. Content must
    already be reassembled: chunks are passed on exactly as received.

    Usage:
        with FileAnalysis("file.bin") as analysis:
            analysis.add_action(ActionArgs(type=ActionType.SHA256))
            analysis.data_in(chunk1)
            analysis.data_in(chunk2)
            analysis.end_of_file()
            digests = analysis.merged_results()
    """

    def __init__(self, file_id: str, actions: Iterable[ActionArgs] = ()):
        """
        :param file_id: Identifier of the analyzed file, used in logs
        :param actions: Actions to attach right away
        :raises ConfigurationError: If one of the actions cannot be built
        """
        self._file_id = file_id
        self._attachments: dict[ActionArgs, _Attachment] = {}
        self._results: dict[ActionArgs, ResultsRecord] = {}
        self._seen_bytes = 0
        self._missing_bytes = 0
        self._eof = False
        self._log = log.getChild(type(self).__name__)

        try:
            for args in actions:
                self.add_action(args)
        except Exception:
            self.close()
            raise

    @property
    def file_id(self) -> str:
        return self._file_id

    @property
    def seen_bytes(self) -> int:
        """Return the number of content bytes delivered so far."""
        return self._seen_bytes

    @property
    def missing_bytes(self) -> int:
        """Return the number of content bytes reported as gaps."""
        return self._missing_bytes

    @property
    def finished(self) -> bool:
        return self._eof

    @property
    def actions(self) -> list[Action]:
        return [attachment.action for attachment in self._attachments.values()]

    def get_results(self, args: ActionArgs) -> ResultsRecord:
        """Return the results record for an action, creating it on first use."""
        record = self._results.get(args)
        if record is None:
            record = self._results[args] = ResultsRecord(ActionResults)
        return record

    def add_action(self, args: ActionArgs) -> bool:
        """
        Attach an action to the file.

        :param args: Arguments describing the action
        :returns: False if an action with the same arguments is already attached
        :raises ConfigurationError: If the action cannot be built
        """
        if args in self._attachments:
            self._log.debug(f"{self._file_id}: action {args} already attached")
            return False

        action = instantiate_action(args, self)
        self._attachments[args] = _Attachment(action)
        self._log.debug(f"{self._file_id}: attached {type(action).__name__}")
        return True

    def remove_action(self, args: ActionArgs) -> bool:
        """
        Detach an action and release it.

        :returns: False if no such action was attached
        """
        attachment = self._attachments.pop(args, None)
        if attachment is None:
            return False

        attachment.action.close()
        self._log.debug(f"{self._file_id}: removed {type(attachment.action).__name__}")
        return True

    def data_in(self, data: bytes) -> None:
        """Deliver the next in-order chunk of content."""
        self._check_open("data")
        self._seen_bytes += len(data)
        self._dispatch(Notification.STREAM, data, len(data))

    def gap(self, offset: int, length: int) -> None:
        """Report a content range that will never be delivered."""
        self._check_open("gap")
        self._missing_bytes += length
        self._log.debug(f"{self._file_id}: {length} bytes missing at offset {offset}")
        self._dispatch(Notification.GAP, offset, length)

    def end_of_file(self) -> None:
        """Signal the end of the content stream to all actions."""
        if self._eof:
            return
        self._eof = True
        self._dispatch(Notification.END_OF_FILE)
        self._log.debug(
            f"{self._file_id}: end of file after {self._seen_bytes} bytes ({self._missing_bytes} missing)"
        )

    def results(self) -> dict[ActionArgs, ActionResults]:
        """Return the published results, keyed by action arguments."""
        return {args: record.to_model() for args, record in self._results.items()}

    def merged_results(self) -> ActionResults:
        """Return all published fields combined into a single results instance."""
        merged: dict[str, Any] = {}
        for record in self._results.values():
            merged.update(record.assigned())
        return ActionResults.model_validate(merged)

    def close(self) -> None:
        """Release all attached actions."""
        attachments = list(self._attachments.values())
        self._attachments.clear()
        for attachment in attachments:
            try:
                attachment.action.close()
            except Exception as e:
                self._log.debug(f"Error releasing {type(attachment.action).__name__}: {e}")

    def _dispatch(self, notification: Notification, *args: Any) -> None:
        for attachment in list(self._attachments.values()):
            attachment.deliver(notification, *args)

    def _check_open(self, what: str) -> None:
        if self._eof:
            raise FileAnalysisError(f"{self._file_id}: received {what} after end of file")

    def __enter__(self) -> FileAnalysis:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FileAnalysis(file_id={self._file_id!r}, actions={len(self._attachments)}, eof={self._eof})"
