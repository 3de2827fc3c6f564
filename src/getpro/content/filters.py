"""
Field filters used while encoding objects into form bodies.

A filter is picked by the runtime kind of the pending value. The caller may
override any kind; the defaults expand arrays, reject nested mappings, drop
``None`` and stringify everything else.
"""
from typing import Any, Mapping, Optional, TYPE_CHECKING

from ..errors import NestedDataStructureError
from ..types import FieldFilter, FieldFilters, FieldPair, ValueKind

if TYPE_CHECKING:
    from .encoder import FieldQueue


def value_kind(value: Any) -> ValueKind:
    """Return the filter kind of a field value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return "other"


def stringify(value: Any) -> Any:
    """Render a scalar the way forms expect it. Bytes are kept as-is."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value)


def default_filter(pair: FieldPair, queue: "FieldQueue") -> Optional[FieldPair]:
    return FieldPair(key=str(pair.key), value=stringify(pair.value))


def default_object_filter(pair: FieldPair, queue: "FieldQueue") -> Optional[FieldPair]:
    raise NestedDataStructureError()


def default_array_filter(pair: FieldPair, queue: "FieldQueue") -> Optional[FieldPair]:
    # One pair per element, ahead of the fields still waiting in the queue.
    queue.push_front(FieldPair(key=pair.key, value=item) for item in pair.value)
    return None


def null_filter(pair: FieldPair, queue: "FieldQueue") -> Optional[FieldPair]:
    return None


DEFAULT_FILTERS: Mapping[str, FieldFilter] = {
    "array": default_array_filter,
    "object": default_object_filter,
    "null": null_filter,
}


def select_filter(kind: ValueKind, filters: Optional[FieldFilters] = None) -> FieldFilter:
    """Pick the caller's filter for ``kind``, falling back to the defaults."""
    if filters and kind in filters:
        return filters[kind]
    return DEFAULT_FILTERS.get(kind, default_filter)
