"""
Severity levels and the ordering used to compare them
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, Optional

from .errors import ConfigurationError

_registry_lock = threading.Lock()

_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
    "NOTSET": "ALL",
}


@dataclass(frozen=True)
class Level:
    """
    Named severity rank, interned by name

    Ranks use the stdlib ``logging`` numbering, so a higher rank is more
    severe and ``record.levelno`` maps straight onto a level.
    """

    name: str
    rank: int

    _registry: ClassVar[Dict[str, "Level"]] = {}
    _by_rank: ClassVar[Dict[int, "Level"]] = {}

    # Populated after the class body
    ALL: ClassVar["Level"]
    TRACE: ClassVar["Level"]
    DEBUG: ClassVar["Level"]
    INFO: ClassVar["Level"]
    WARN: ClassVar["Level"]
    ERROR: ClassVar["Level"]
    FATAL: ClassVar["Level"]
    OFF: ClassVar["Level"]

    @classmethod
    def for_name(cls, name: str, rank: int) -> "Level":
        """Register a level, or return the one already registered under name"""
        if not isinstance(name, str):
            raise ConfigurationError(f"Level name must be a string: {name!r}")
        if not name.strip():
            raise ConfigurationError("Level name cannot be empty")

        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        with _registry_lock:
            existing = cls._registry.get(normalized)
            if existing is not None:
                if existing.rank != rank:
                    raise ConfigurationError(
                        f"Level {normalized} is already defined with rank {existing.rank}"
                    )
                return existing
            level = cls(normalized, rank)
            cls._registry[normalized] = level
            cls._by_rank.setdefault(rank, level)
            return level

    @classmethod
    def to_level(
        cls, name: Optional[str], default: Optional["Level"] = None
    ) -> "Level":
        """
        Resolve a level name, case-insensitively

        Returns ``default`` when name is None. Unknown names raise
        ConfigurationError unless a default was given.
        """
        if name is None:
            if default is None:
                raise ConfigurationError("Level name cannot be None")
            return default

        if isinstance(name, Level):
            return name
        if not isinstance(name, str):
            raise ConfigurationError(f"Unknown log level: {name!r}")

        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        level = cls._registry.get(normalized)
        if level is not None:
            return level
        if default is not None:
            return default
        raise ConfigurationError(f"Unknown log level: {name!r}")

    @classmethod
    def from_levelno(cls, levelno: int) -> "Level":
        """Map a stdlib level number onto a level; never fails"""
        level = cls._by_rank.get(levelno)
        if level is not None:
            return level
        return cls(logging.getLevelName(levelno), levelno)

    @classmethod
    def values(cls):
        """Registered levels, least severe first"""
        return sorted(list(cls._registry.values()), key=lambda level: level.rank)

    @property
    def levelno(self) -> int:
        return self.rank

    def is_more_specific_than(self, other: "Level") -> bool:
        """True if this level is at least as severe as other"""
        return self.rank >= other.rank

    def is_less_specific_than(self, other: "Level") -> bool:
        return self.rank <= other.rank

    def __str__(self) -> str:
        return self.name


Level.ALL = Level.for_name("ALL", logging.NOTSET)
Level.TRACE = Level.for_name("TRACE", 5)
Level.DEBUG = Level.for_name("DEBUG", logging.DEBUG)
Level.INFO = Level.for_name("INFO", logging.INFO)
Level.WARN = Level.for_name("WARN", logging.WARNING)
Level.ERROR = Level.for_name("ERROR", logging.ERROR)
Level.FATAL = Level.for_name("FATAL", logging.CRITICAL)
Level.OFF = Level.for_name("OFF", 2**31 - 1)


class LevelOrdering(ABC):
    """Total order over levels used by threshold filters"""

    @abstractmethod
    def at_least_as_severe(self, candidate: Level, threshold: Level) -> bool:
        """Return True if candidate passes threshold"""
        pass


class SeverityOrdering(LevelOrdering):
    """Orders levels by rank"""

    def at_least_as_severe(self, candidate: Level, threshold: Level) -> bool:
        return candidate.is_more_specific_than(threshold)

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return "SeverityOrdering()"


DEFAULT_ORDERING = SeverityOrdering()
