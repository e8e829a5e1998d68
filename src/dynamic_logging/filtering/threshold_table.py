"""
Mapping from context values to the minimum level they require
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from ..errors import ConfigurationError
from ..levels import Level


@dataclass(frozen=True)
class KeyValuePair:
    """One configured ``value=LEVEL`` entry"""

    key: str
    value: str


PairLike = Union[KeyValuePair, Tuple[str, str]]


class ThresholdTable:
    """
    Immutable lookup of required level per context value

    Values missing from the table resolve to ``default_level``. Level names
    are resolved once, at construction, so lookups cannot fail.
    """

    __slots__ = ("_levels", "_default_level", "_hash")

    def __init__(
        self,
        levels: Optional[Mapping[str, Union[Level, str]]] = None,
        default_level: Optional[Union[Level, str]] = Level.ERROR,
    ):
        resolved = {key: Level.to_level(level) for key, level in (levels or {}).items()}
        self._levels: Mapping[str, Level] = MappingProxyType(resolved)
        self._default_level = Level.ERROR if default_level is None else Level.to_level(default_level)
        self._hash: Optional[int] = None

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[PairLike] = (),
        default_level: Optional[Union[Level, str]] = None,
    ) -> "ThresholdTable":
        """
        Build a table from ``(value, level_name)`` pairs

        Later duplicates replace earlier ones. Unknown level names raise
        ConfigurationError.
        """
        levels: Dict[str, Level] = {}
        for pair in pairs or ():
            key, level_name = _unpack(pair)
            if key is None:
                raise ConfigurationError(f"Threshold entry has no context value: {pair!r}")
            levels[key] = Level.to_level(level_name)

        if default_level is None:
            default = Level.ERROR
        else:
            default = Level.to_level(default_level)

        return cls(levels, default)

    @property
    def default_level(self) -> Level:
        return self._default_level

    @property
    def levels(self) -> Mapping[str, Level]:
        return self._levels

    def lookup(self, value: str) -> Level:
        """Level required for value, falling back to the default"""
        return self._levels.get(value, self._default_level)

    def __len__(self) -> int:
        return len(self._levels)

    def __contains__(self, value: object) -> bool:
        return value in self._levels

    def __iter__(self) -> Iterator[str]:
        return iter(self._levels)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ThresholdTable):
            return NotImplemented
        return (
            self._default_level == other._default_level
            and dict(self._levels) == dict(other._levels)
        )

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((self._default_level, frozenset(self._levels.items())))
        return self._hash

    def __str__(self) -> str:
        entries = ", ".join(f"{key}={level}" for key, level in self._levels.items())
        return f"default={self._default_level}{{{entries}}}"

    def __repr__(self) -> str:
        return f"ThresholdTable({dict(self._levels)!r}, default_level={self._default_level!r})"


def _unpack(pair: PairLike) -> Tuple[Optional[str], Optional[str]]:
    if isinstance(pair, KeyValuePair):
        return pair.key, pair.value
    try:
        key, value = pair
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid threshold entry: {pair!r}") from None
    return key, value
