"""
Immutable views of ambient context data and the providers that produce them
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from .context import get_context

RECORD_CONTEXT_PREFIX = "ctx_"


class ContextSnapshot(Mapping[str, str]):
    """
    Read-only string to string view of context data at one logging call

    The source mapping is copied, so changes made to the underlying store
    after the snapshot was taken are never observed. None values are
    dropped and everything else is rendered with ``str()``.
    """

    __slots__ = ("_data",)

    _EMPTY: Optional["ContextSnapshot"] = None

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Dict[str, str] = {
            str(k): v if isinstance(v, str) else str(v)
            for k, v in (data or {}).items()
            if v is not None
        }

    @classmethod
    def empty(cls) -> "ContextSnapshot":
        if cls._EMPTY is None:
            cls._EMPTY = cls()
        return cls._EMPTY

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ContextSnapshot({self._data!r})"


class ContextSnapshotProvider(ABC):
    """Source of context snapshots for filters"""

    @abstractmethod
    def current_snapshot(self) -> ContextSnapshot:
        """Return the context of the calling thread or task, never None"""
        pass


class ContextVarSnapshotProvider(ContextSnapshotProvider):
    """Reads the ambient context store in ``dynamic_logging.context``"""

    def current_snapshot(self) -> ContextSnapshot:
        data = get_context()
        if not data:
            return ContextSnapshot.empty()
        return ContextSnapshot(data)

    def __repr__(self) -> str:
        return "ContextVarSnapshotProvider()"


class CallableSnapshotProvider(ContextSnapshotProvider):
    """Wraps a function returning a mapping, such as another library's context getter"""

    def __init__(self, source: Callable[[], Optional[Mapping[str, Any]]], name: str = "custom"):
        self.source = source
        self.name = name

    def current_snapshot(self) -> ContextSnapshot:
        data = self.source()
        if not data:
            return ContextSnapshot.empty()
        return ContextSnapshot(data)

    def __repr__(self) -> str:
        return f"CallableSnapshotProvider(name={self.name!r})"


def snapshot_from_record(record: logging.LogRecord) -> Optional[ContextSnapshot]:
    """
    Collect ``ctx_`` prefixed attributes of a record into a snapshot

    Returns None when the record carries no context fields, so callers can
    fall back to the ambient context.
    """
    fields = {
        key[len(RECORD_CONTEXT_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(RECORD_CONTEXT_PREFIX)
    }
    if not fields:
        return None
    return ContextSnapshot(fields)


DEFAULT_PROVIDER = ContextVarSnapshotProvider()
