"""
Dynamic Logging

Log-level filtering driven by ambient context: the threshold an event must
reach is looked up from a request id, tenant id or similar context value.
"""

__version__ = "0.1.0"

from . import context
from .config import (
    DynamicThresholdConfig,
    get_default_config,
    parse_thresholds,
    set_default_config,
)
from .context import context_scope, get_context, request_context
from .errors import ConfigurationError
from .filtering import (
    DynamicThresholdFilter,
    KeyValuePair,
    LogFilter,
    LoggingFilterAdapter,
    Result,
    ThresholdTable,
)
from .formatter import StructuredFormatter
from .levels import DEFAULT_ORDERING, Level, LevelOrdering, SeverityOrdering
from .logger import get_filter, get_logger, log_with_context
from .snapshot import (
    CallableSnapshotProvider,
    ContextSnapshot,
    ContextSnapshotProvider,
    ContextVarSnapshotProvider,
    snapshot_from_record,
)

__all__ = [
    # Core filter
    "DynamicThresholdFilter",
    "ThresholdTable",
    "KeyValuePair",
    "LogFilter",
    "Result",
    "LoggingFilterAdapter",
    "ConfigurationError",
    # Levels
    "Level",
    "LevelOrdering",
    "SeverityOrdering",
    "DEFAULT_ORDERING",
    # Context
    "context",
    "context_scope",
    "get_context",
    "request_context",
    "ContextSnapshot",
    "ContextSnapshotProvider",
    "ContextVarSnapshotProvider",
    "CallableSnapshotProvider",
    "snapshot_from_record",
    # Configuration
    "DynamicThresholdConfig",
    "get_default_config",
    "set_default_config",
    "parse_thresholds",
    # Logger
    "StructuredFormatter",
    "get_filter",
    "get_logger",
    "log_with_context",
]
