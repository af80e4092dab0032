"""The in-memory key-value store."""

from __future__ import annotations

import threading

from kvresp.data import Hash, List, Set, StringValue, Value


class WrongTypeError(TypeError):
    """Raised when a key holds a value of a different kind than the operation needs."""


class DB:
    """A thread-safe store mapping keys to string, hash, set and list values."""

    def __init__(self) -> None:
        self._store: dict[str, Value] = {}
        self._lock = threading.Lock()

    def set_string(self, key: str, val: str) -> None:
        """Store ``val`` as a string at ``key``, replacing whatever was there."""
        with self._lock:
            self._store[key] = StringValue(val)

    def get_string(self, key: str) -> str | None:
        """Return the string at ``key``, or None if absent or not a string."""
        with self._lock:
            value = self._store.get(key)
        return value.val if isinstance(value, StringValue) else None

    def hset_field(self, key: str, field: str, val: str) -> None:
        """Set ``field`` in the hash at ``key``, creating the hash if needed."""
        with self._lock:
            value = self._store.get(key)
            if value is None:
                value = self._store[key] = Hash()
            if not isinstance(value, Hash):
                raise WrongTypeError(f"key {key!r} does not hold a hash")
            value.set_field(field, val)

    def hget_field(self, key: str, field: str) -> str | None:
        """Return ``field`` of the hash at ``key``, or None if it cannot be found."""
        with self._lock:
            value = self._store.get(key)
            if not isinstance(value, Hash):
                return None
            return value.get_field(field)

    def sadd(self, key: str, member: str) -> None:
        """Add ``member`` to the set at ``key``, creating the set if needed."""
        with self._lock:
            value = self._store.get(key)
            if value is None:
                self._store[key] = Set([member])
                return
            if not isinstance(value, Set):
                raise WrongTypeError(f"key {key!r} does not hold a set")
            value.add_member(member)

    def smembers(self, key: str) -> list[str] | None:
        """Return the members of the set at ``key``, or None if absent or not a set."""
        with self._lock:
            value = self._store.get(key)
            if not isinstance(value, Set):
                return None
            return value.members()

    def lpush(self, key: str, val: str) -> list[str]:
        """Append ``val`` to the list at ``key`` and return all its values."""
        with self._lock:
            value = self._store.get(key)
            if value is None:
                value = self._store[key] = List()
            if not isinstance(value, List):
                raise WrongTypeError(f"key {key!r} does not hold a list")
            return value.push(val).values()

    def lget(self, key: str) -> list[str] | None:
        """Return the values of the list at ``key``, or None if absent or not a list."""
        with self._lock:
            value = self._store.get(key)
            if not isinstance(value, List):
                return None
            return value.values()


_instance: DB | None = None
_instance_lock = threading.Lock()


def get_db() -> DB:
    """Return the process-wide shared store."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = DB()
        return _instance