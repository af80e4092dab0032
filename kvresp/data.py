"""Value types held by the key-value store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union


@dataclass
class StringValue:
    """A plain string value."""

    val: str

    def __str__(self) -> str:
        return f"StringValue({self.val})"


@dataclass
class Hash:
    """A mapping of field names to string values."""

    fields: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return "".join(f"Hash({k}:{v})" for k, v in self.fields.items())

    def set_field(self, field: str, val: str) -> None:
        """Set ``field`` to ``val``."""
        self.fields[field] = val

    def get_field(self, field: str) -> str | None:
        """Return the value of ``field``, or None if it is absent."""
        return self.fields.get(field)


class List:
    """An ordered list of strings, appended at the back."""

    def __init__(self, vals: Iterable[str] = ()) -> None:
        self._items: list[str] = list(vals)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"List({self._items!r})"

    def push(self, val: str) -> List:
        """Append ``val`` and return the list itself."""
        self._items.append(val)
        return self

    def values(self) -> list[str]:
        """Return a copy of all elements from front to back."""
        return list(self._items)


class Set:
    """An unordered collection of distinct strings."""

    def __init__(self, members: Iterable[str] = ()) -> None:
        self._members: dict[str, None] = dict.fromkeys(members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, member: object) -> bool:
        return member in self._members

    def __str__(self) -> str:
        return f"Set({', '.join(self._members)})"

    def __repr__(self) -> str:
        return f"Set({list(self._members)!r})"

    def add_member(self, member: str) -> None:
        """Add ``member``; adding an existing member has no effect."""
        self._members[member] = None

    def members(self) -> list[str]:
        """Return all members."""
        return list(self._members)


Value = Union[StringValue, Hash, List, Set]