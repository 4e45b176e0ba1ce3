"""Schema-typed results records shared between actions and their host."""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel

from .models.base import StrictBaseModel

_UNSET = object()


class ActionResults(StrictBaseModel):
    """Values published by the actions attached to a file."""

    md5: str | None = None
    """
    Hex MD5 digest of the file content.
    """

    sha1: str | None = None
    """
    Hex SHA1 digest of the file content.
    """

    sha256: str | None = None
    """
    Hex SHA256 digest of the file content.
    """


class ResultsRecord:
    """
    Slot storage for one instance of a results schema.

    Fields are addressed by their index in the schema, which writers resolve
    once with :meth:`field_offset` and then reuse for every assignment.
    """

    def __init__(self, schema: type[BaseModel] = ActionResults):
        self._schema = schema
        self._field_names = list(schema.model_fields)
        self._values: list[Any] = [_UNSET] * len(self._field_names)

    @property
    def schema(self) -> type[BaseModel]:
        """Return the schema this record is typed by."""
        return self._schema

    @classmethod
    def field_offset_in(cls, schema: type[BaseModel], name: str) -> int:
        """
        Resolve a field name against a schema.

        :param schema: pydantic model describing the record layout
        :param name: Field name to look up
        :returns: Index of the field, -1 if the schema has no such field
        """
        try:
            return list(schema.model_fields).index(name)
        except ValueError:
            return -1

    def field_offset(self, name: str) -> int:
        """Resolve a field name against this record's schema (-1 if absent)."""
        return self.field_offset_in(self._schema, name)

    def field_name(self, idx: int) -> str:
        """Return the name of the field at the given index."""
        self._check_index(idx)
        return self._field_names[idx]

    def assign(self, idx: int, value: Any) -> None:
        """Assign a value to the field at the given index."""
        self._check_index(idx)
        self._values[idx] = value

    def get(self, idx: int, default: Any = None) -> Any:
        """Return the value at the given index, or default if it was never assigned."""
        self._check_index(idx)
        value = self._values[idx]
        return default if value is _UNSET else value

    def is_set(self, idx: int) -> bool:
        """Check if the field at the given index has been assigned."""
        self._check_index(idx)
        return self._values[idx] is not _UNSET

    def assigned(self) -> dict[str, Any]:
        """Return a mapping of all assigned field names to their values."""
        return {
            name: value for name, value in zip(self._field_names, self._values, strict=True) if value is not _UNSET
        }

    def to_model(self) -> BaseModel:
        """Build a validated schema instance from the assigned fields."""
        return self._schema.model_validate(self.assigned())

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < len(self._values):
            raise IndexError(f"Field index {idx} out of range for {self._schema.__name__}")

    def __len__(self) -> int:
        return len(self._field_names)

    def __repr__(self) -> str:
        return f"ResultsRecord({self._schema.__name__}, {self.assigned()!r})"


class ResultsContext(Protocol):
    """Hosting context that owns the results records of its actions."""

    def get_results(self, args: Any) -> ResultsRecord: ...
