"""Project property store and the backup-preserving property bridge.

All writes go through ``set_property`` so that every overwritten value is kept
under ``scoverage.backup.<key>`` for a later restore pass.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional

from constants import Constants

logger = logging.getLogger(__name__)


class PropertyStore:
    """String-keyed mutable property map of a project."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other) -> bool:
        if isinstance(other, PropertyStore):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._data.get(key, default)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._data)

    def __repr__(self) -> str:
        return f"PropertyStore({self._data!r})"


@dataclass(frozen=True)
class PropertyEdit:
    """Record of one ``set_property`` call."""
    key: str
    new_value: Optional[str]
    previous_value: Optional[str]


def backup_key(key: str) -> str:
    """Name under which the pre-run value of ``key`` is stashed."""
    return Constants.BACKUP_PREFIX + key


def set_property(store: PropertyStore, key: str, new_value: Optional[str]) -> PropertyEdit:
    """Set ``key`` to ``new_value`` (or remove it when None), backing up the old value.

    If ``key`` exists its current value is copied to the backup key first;
    otherwise any stale backup key is removed. Replaying a write whose value is
    already in place keeps the existing backup, so the backup always holds the
    pre-run value.
    """
    previous = store.get(key)
    if key in store:
        replay = previous == new_value and backup_key(key) in store
        if not replay:
            store.put(backup_key(key), previous)
    else:
        store.remove(backup_key(key))

    if new_value is not None:
        store.put(key, new_value)
    else:
        store.remove(key)
    logger.debug("Property %s set to %r (previous %r)", key, new_value, previous)
    return PropertyEdit(key=key, new_value=new_value, previous_value=previous)


class PropertyBatch:
    """Property writes collected in memory and applied together.

    Nothing touches the store until ``commit`` is called, so a failure while
    the batch is being built leaves the store as it was. Setting a key twice
    keeps its first position and the last value, so it is written (and backed
    up) once.
    """

    def __init__(self):
        self._pending: Dict[str, Optional[str]] = {}

    def set(self, key: str, value: Optional[str]) -> "PropertyBatch":
        self._pending[key] = value
        return self

    def __len__(self) -> int:
        return len(self._pending)

    def keys(self) -> List[str]:
        return list(self._pending)

    def commit(self, store: PropertyStore) -> List[PropertyEdit]:
        """Apply every pending write in insertion order and clear the batch."""
        edits = [set_property(store, key, value) for key, value in self._pending.items()]
        self._pending = {}
        return edits
