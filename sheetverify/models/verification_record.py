from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

"""VerificationRecord model and collection operations.

A record names a cell and carries two payload slots, ``expected_value`` and
``expected_function``. The ``kind`` discriminant selects which slot is active.
Both slots stay populated in memory so that switching the kind back and forth
restores previously entered text; only the active slot is ever serialized
(see ``canonicalize``).

Collections are tuples addressed by index. Every operation returns a new
tuple and leaves its input untouched.
"""

__all__ = [
    "IndexOutOfRange",
    "VerificationCollection",
    "VerificationKind",
    "VerificationRecord",
    "append_record",
    "canonicalize",
    "edit_field",
    "normalize",
    "remove_at",
    "set_kind",
]


class IndexOutOfRange(IndexError):
    """Raised when an index does not address an existing record."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"index {index} out of range for {size} record(s)")
        self.index = index
        self.size = size


class VerificationKind(str, Enum):
    VALUE = "value"
    FUNCTION = "function"

    @classmethod
    def parse(cls, raw: str | VerificationKind) -> VerificationKind:
        if isinstance(raw, VerificationKind):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ValueError(f"unknown verification kind: {raw!r}") from None


@dataclass(frozen=True)
class VerificationRecord:
    cell_name: str = ""
    kind: VerificationKind = VerificationKind.VALUE
    expected_value: str = ""
    expected_function: str = ""

    @property
    def expected(self) -> str:
        """Text of the active payload slot."""
        if self.kind is VerificationKind.FUNCTION:
            return self.expected_function
        return self.expected_value

    def to_dict(self) -> dict[str, str]:
        """Full in-memory shape, including the inactive slot and the kind."""
        return {
            "cellName": self.cell_name,
            "verificationKind": self.kind.value,
            "expectedValue": self.expected_value,
            "expectedFunction": self.expected_function,
        }


VerificationCollection = tuple[VerificationRecord, ...]

# wire key -> attribute
_FIELDS = {
    "cellName": "cell_name",
    "expectedValue": "expected_value",
    "expectedFunction": "expected_function",
}
_KIND_KEYS = ("verificationKind", "verificationType")


def _text(raw: Any) -> str:
    # YAML types bare 10 / true as int / bool
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "true" if raw else "false"
    return str(raw)


def normalize(raw: Mapping[str, Any] | VerificationRecord) -> VerificationRecord:
    """Build a record from stored data, inferring a missing kind.

    The kind is inferred only when the stored data carries none: ``function``
    when ``expectedFunction`` is non-empty, else ``value``. A stored kind is
    kept even when the payload slots disagree with it.
    """
    if isinstance(raw, VerificationRecord):
        return raw

    stored_kind = next((raw[k] for k in _KIND_KEYS if raw.get(k)), None)
    expected_function = _text(raw.get("expectedFunction"))
    if stored_kind is not None:
        kind = VerificationKind.parse(stored_kind)
    elif expected_function:
        kind = VerificationKind.FUNCTION
    else:
        kind = VerificationKind.VALUE

    return VerificationRecord(
        cell_name=_text(raw.get("cellName")),
        kind=kind,
        expected_value=_text(raw.get("expectedValue")),
        expected_function=expected_function,
    )


def canonicalize(record: VerificationRecord) -> dict[str, str]:
    """Project a record to its persisted shape.

    Returns ``{cellName, expectedValue}`` or ``{cellName, expectedFunction}``;
    the inactive slot is dropped.
    """
    out = {"cellName": record.cell_name}
    if record.kind is VerificationKind.FUNCTION:
        out["expectedFunction"] = record.expected_function
    else:
        out["expectedValue"] = record.expected_value
    return out


def set_kind(record: VerificationRecord, kind: str | VerificationKind) -> VerificationRecord:
    """Switch the active slot without clearing the inactive one."""
    return replace(record, kind=VerificationKind.parse(kind))


def _check_index(collection: Sequence[VerificationRecord], index: int) -> None:
    # no negative wraparound
    if not 0 <= index < len(collection):
        raise IndexOutOfRange(index, len(collection))


def edit_field(
    collection: Sequence[VerificationRecord], index: int, field: str, value: str
) -> VerificationCollection:
    """Return a collection with one field of the record at ``index`` replaced.

    ``field`` is a wire key (``cellName``, ``expectedValue``,
    ``expectedFunction``, ``verificationKind``) or the matching attribute name.

    Raises:
        IndexOutOfRange: index does not address a record
        ValueError: unknown field name or kind
    """
    _check_index(collection, index)
    record = collection[index]
    if field in ("verificationKind", "kind"):
        updated = set_kind(record, value)
    else:
        attr = _FIELDS.get(field, field)
        if attr not in _FIELDS.values():
            raise ValueError(f"unknown field: {field}")
        updated = replace(record, **{attr: _text(value)})
    items = list(collection)
    items[index] = updated
    return tuple(items)


def append_record(collection: Sequence[VerificationRecord]) -> VerificationCollection:
    """Append an empty value-kind record."""
    return (*collection, VerificationRecord())


def remove_at(collection: Sequence[VerificationRecord], index: int) -> VerificationCollection:
    """Remove the record at ``index``; later records shift down by one."""
    _check_index(collection, index)
    return (*collection[:index], *collection[index + 1:])
