import os
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from .errors import ConfigurationError
from .filtering import DynamicThresholdFilter
from .levels import LevelOrdering
from .snapshot import ContextSnapshotProvider

ThresholdPair = Tuple[str, str]


def parse_thresholds(text: Optional[str]) -> List[ThresholdPair]:
    """Parse ``value=LEVEL`` entries separated by commas"""
    pairs: List[ThresholdPair] = []
    if not text:
        return pairs

    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        value, sep, level_name = entry.rpartition("=")
        if not sep or not value.strip() or not level_name.strip():
            raise ConfigurationError(f"Malformed threshold entry: {entry!r}")
        pairs.append((value.strip(), level_name.strip()))
    return pairs


def _parse_bool(value: Any) -> bool:
    """Parse a boolean that may arrive as a string from a config file"""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


@dataclass
class DynamicThresholdConfig:
    """Configuration for a context-keyed threshold filter"""

    key: Optional[str] = None
    thresholds: List[ThresholdPair] = field(default_factory=list)
    default_threshold: Optional[str] = None
    on_match: Optional[str] = None
    on_mismatch: Optional[str] = None
    log_level: str = "DEBUG"
    enabled: bool = True

    @classmethod
    def _parse_bool_env(cls, key: str, default: str = "false") -> bool:
        """Parse boolean from environment variable"""
        return os.getenv(key, default).lower() == "true"

    @classmethod
    def from_env(cls) -> "DynamicThresholdConfig":
        """Create configuration from environment variables"""
        return cls(
            key=os.getenv("DYNAMIC_LOG_KEY"),
            thresholds=parse_thresholds(os.getenv("DYNAMIC_LOG_THRESHOLDS")),
            default_threshold=os.getenv("DYNAMIC_LOG_DEFAULT_THRESHOLD"),
            on_match=os.getenv("DYNAMIC_LOG_ON_MATCH"),
            on_mismatch=os.getenv("DYNAMIC_LOG_ON_MISMATCH"),
            log_level=os.getenv("DYNAMIC_LOG_LEVEL", "DEBUG"),
            enabled=cls._parse_bool_env("DYNAMIC_LOG_ENABLED", "true"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DynamicThresholdConfig":
        """
        Create configuration from a mapping, e.g. a section of a YAML or JSON file

        ``pairs`` may be a mapping of value to level name, a list of
        ``[value, level]`` entries, or a list of ``{"key": ..., "value": ...}``
        objects.
        """
        raw_pairs = data.get("pairs") or {}
        if isinstance(raw_pairs, Mapping):
            thresholds = [(str(k), str(v)) for k, v in raw_pairs.items()]
        elif isinstance(raw_pairs, str):
            thresholds = parse_thresholds(raw_pairs)
        else:
            thresholds = []
            for entry in raw_pairs:
                if isinstance(entry, Mapping):
                    thresholds.append((entry.get("key"), entry.get("value")))
                else:
                    thresholds.append(tuple(entry))

        return cls(
            key=data.get("key"),
            thresholds=thresholds,
            default_threshold=data.get("default_threshold"),
            on_match=data.get("on_match"),
            on_mismatch=data.get("on_mismatch"),
            log_level=data.get("log_level", "DEBUG"),
            enabled=_parse_bool(data.get("enabled", True)),
        )

    def build_filter(
        self,
        provider: Optional[ContextSnapshotProvider] = None,
        ordering: Optional[LevelOrdering] = None,
    ) -> DynamicThresholdFilter:
        """Create the filter described by this configuration"""
        if not self.key:
            raise ConfigurationError("DynamicThresholdFilter requires a key")
        return DynamicThresholdFilter.create_filter(
            self.key,
            self.thresholds,
            default_threshold=self.default_threshold,
            on_match=self.on_match,
            on_mismatch=self.on_mismatch,
            ordering=ordering,
            provider=provider,
        )


_default_config: Optional[DynamicThresholdConfig] = None


def get_default_config() -> DynamicThresholdConfig:
    """Get the default configuration instance"""
    global _default_config
    if _default_config is None:
        _default_config = DynamicThresholdConfig.from_env()
    return _default_config


def set_default_config(config: DynamicThresholdConfig) -> None:
    """Set the default configuration instance"""
    global _default_config
    _default_config = config
