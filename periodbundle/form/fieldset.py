"""Field set abstraction.

The mapper never touches widgets. It reads and writes a host-supplied
mapping of field name to an object with get_data()/set_data(), which is
what most form libraries' bound fields already look like. Field and
FieldSet are a plain implementation for hosts (and tests) without one.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class FieldAccessor(Protocol):
    """A named, editable value bound to a form."""

    def get_data(self) -> Any:
        ...

    def set_data(self, value: Any) -> None:
        ...


class Field:
    """Minimal FieldAccessor holding a single value."""

    def __init__(self, name: str, data: Any = None):
        self.name = name
        self.data = data

    def get_data(self) -> Any:
        return self.data

    def set_data(self, value: Any) -> None:
        self.data = value

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.data!r})"


class FieldSet(Mapping[str, Field]):
    """
    Mapping of field name to Field.

    Examples:
        >>> fields = FieldSet.from_values(startDate=None, endDate=None)
        >>> fields["startDate"].set_data(datetime(2024, 1, 1))
        >>> fields.values_dict()
        {'startDate': datetime.datetime(2024, 1, 1, 0, 0), 'endDate': None}
    """

    def __init__(self, fields: Optional[Mapping[str, Field]] = None):
        self._fields: Dict[str, Field] = dict(fields or {})

    @classmethod
    def from_values(cls, values: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "FieldSet":
        """Build a FieldSet with one Field per key."""
        merged = dict(values or {})
        merged.update(kwargs)
        return cls({name: Field(name, data) for name, data in merged.items()})

    @classmethod
    def empty(cls, *names: str) -> "FieldSet":
        """Build a FieldSet of empty fields."""
        return cls({name: Field(name) for name in names})

    def __getitem__(self, name: str) -> Field:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def values_dict(self) -> Dict[str, Any]:
        """Current data of every field, keyed by name."""
        return {name: f.get_data() for name, f in self._fields.items()}


__all__ = [
    "FieldAccessor",
    "Field",
    "FieldSet",
]
