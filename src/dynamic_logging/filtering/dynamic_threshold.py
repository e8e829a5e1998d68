"""
Threshold filtering keyed on ambient context values
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from ..errors import ConfigurationError
from ..levels import DEFAULT_ORDERING, Level, LevelOrdering
from ..snapshot import (
    DEFAULT_PROVIDER,
    ContextSnapshot,
    ContextSnapshotProvider,
    snapshot_from_record,
)
from .base import LogFilter, Result
from .threshold_table import PairLike, ThresholdTable

LevelLike = Union[Level, int]


class DynamicThresholdFilter(LogFilter):
    """
    Compare the event level against a threshold chosen by a context value

    The value stored under ``key`` in the current context selects a level
    from the threshold table. Events at or above that level get
    ``on_match``, the rest get ``on_mismatch``. When the context has no
    value for ``key`` the filter abstains with NEUTRAL.

    Instances are immutable and safe to share between threads.
    """

    def __init__(
        self,
        key: str,
        table: Optional[ThresholdTable] = None,
        on_match: Optional[Result] = None,
        on_mismatch: Optional[Result] = None,
        ordering: Optional[LevelOrdering] = None,
        provider: Optional[ContextSnapshotProvider] = None,
    ):
        if key is None:
            raise ConfigurationError("key cannot be None")
        if not isinstance(key, str) or not key.strip():
            raise ConfigurationError("key cannot be empty")

        super().__init__(on_match, on_mismatch)
        self._key = key
        self._table = table if table is not None else ThresholdTable()
        self._ordering = ordering or DEFAULT_ORDERING
        self._provider = provider or DEFAULT_PROVIDER

    @classmethod
    def create_filter(
        cls,
        key: str,
        pairs: Iterable[PairLike] = (),
        default_threshold: Optional[Union[Level, str]] = None,
        on_match: Optional[Union[Result, str]] = None,
        on_mismatch: Optional[Union[Result, str]] = None,
        ordering: Optional[LevelOrdering] = None,
        provider: Optional[ContextSnapshotProvider] = None,
    ) -> "DynamicThresholdFilter":
        """
        Build a filter from raw configuration values

        Args:
            key: Name of the context entry to read
            pairs: ``(context value, level name)`` entries
            default_threshold: Level for values missing from pairs, ERROR if None
            on_match: Result when the level passes, NEUTRAL if None
            on_mismatch: Result when the level does not pass, DENY if None
            ordering: Level comparison, severity rank if None
            provider: Context source, the ambient context store if None

        Raises:
            ConfigurationError: on a missing key, unknown level or unknown result
        """
        if key is None or not str(key).strip():
            raise ConfigurationError("key cannot be empty")

        table = ThresholdTable.from_pairs(pairs, default_threshold)
        return cls(
            key,
            table,
            on_match=Result.to_result(on_match, Result.NEUTRAL),
            on_mismatch=Result.to_result(on_mismatch, Result.DENY),
            ordering=ordering,
            provider=provider,
        )

    @property
    def key(self) -> str:
        return self._key

    @property
    def table(self) -> ThresholdTable:
        return self._table

    @property
    def default_threshold(self) -> Level:
        return self._table.default_level

    @property
    def ordering(self) -> LevelOrdering:
        return self._ordering

    @property
    def provider(self) -> ContextSnapshotProvider:
        return self._provider

    def get_key(self) -> str:
        return self._key

    def get_threshold_table(self) -> ThresholdTable:
        return self._table

    def get_level_map(self) -> Dict[str, Level]:
        return dict(self._table.levels)

    def evaluate(self, level: Level, snapshot: ContextSnapshot) -> Result:
        """Decide for one event level against one context snapshot"""
        value = snapshot.get(self._key)
        if value is None:
            return Result.NEUTRAL

        threshold = self._table.lookup(value)
        if self._ordering.at_least_as_severe(level, threshold):
            return self.on_match
        return self.on_mismatch

    def current_snapshot(self) -> ContextSnapshot:
        return self._provider.current_snapshot() or ContextSnapshot.empty()

    def filter_record(self, record: logging.LogRecord) -> Result:
        """Decide on a record, preferring the context it carries"""
        snapshot = snapshot_from_record(record)
        if snapshot is None:
            snapshot = self.current_snapshot()
        return self.evaluate(_as_level(record.levelno), snapshot)

    def filter_call(
        self,
        level: LevelLike,
        msg: Any = None,
        *args: Any,
        marker: Optional[str] = None,
        exc_info: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> Result:
        """Decide before a record exists, from the arguments of a logging call"""
        return self.evaluate(_as_level(level), self.current_snapshot())

    def filter_level(self, level: LevelLike) -> Result:
        return self.evaluate(_as_level(level), self.current_snapshot())

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, DynamicThresholdFilter):
            return NotImplemented
        return self._key == other._key and self._table == other._table

    def __hash__(self) -> int:
        return hash((self._key, self._table))

    def __str__(self) -> str:
        text = f"key={self._key}, default={self.default_threshold}"
        if len(self._table):
            entries = ", ".join(
                f"{value}={level}" for value, level in self._table.levels.items()
            )
            text += f"{{{entries}}}"
        return text

    def __repr__(self) -> str:
        return f"<DynamicThresholdFilter {self}>"


def _as_level(level: LevelLike) -> Level:
    if isinstance(level, Level):
        return level
    return Level.from_levelno(level)
