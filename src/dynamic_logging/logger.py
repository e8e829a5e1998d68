import logging
import sys
from typing import Any, Dict, Optional, Tuple

from .config import DynamicThresholdConfig, get_default_config
from .context import get_context
from .filtering import DynamicThresholdFilter, LoggingFilterAdapter, Result
from .formatter import StructuredFormatter
from .levels import Level
from .snapshot import RECORD_CONTEXT_PREFIX, ContextSnapshot

# Filters built per configuration object, keyed by id and holding the config
_filters: Dict[int, Tuple[DynamicThresholdConfig, DynamicThresholdFilter]] = {}


def get_filter(
    config: Optional[DynamicThresholdConfig] = None,
) -> Optional[DynamicThresholdFilter]:
    """Get or build the filter for a configuration, None when filtering is off"""
    config = config or get_default_config()
    if not (config.enabled and config.key):
        return None

    cached = _filters.get(id(config))
    if cached is None or cached[0] is not config:
        cached = (config, config.build_filter())
        _filters[id(config)] = cached
    return cached[1]


def get_logger(name: str, config: Optional[DynamicThresholdConfig] = None) -> logging.Logger:
    """Create a logger whose records pass through the dynamic threshold filter"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        config = config or get_default_config()
        logger.setLevel(Level.to_level(config.log_level).levelno)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

        log_filter = get_filter(config)
        if log_filter is not None:
            logger.addFilter(LoggingFilterAdapter(log_filter))

        logger.propagate = True

    return logger


def _collect_context(extra: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ambient context with call-site extras, dropping None values"""
    context = {k: v for k, v in get_context().items() if v is not None}
    if extra:
        context.update({k: v for k, v in extra.items() if v is not None})
    return context


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    config: Optional[DynamicThresholdConfig] = None,
    **extra: Any,
) -> bool:
    """Log with ambient context attached; returns False if the filter denied it"""
    log_level = Level.to_level(level)
    context = _collect_context(extra)

    log_filter = get_filter(config)
    if log_filter is not None:
        if log_filter.evaluate(log_level, ContextSnapshot(context)) is Result.DENY:
            return False

    ctx_context = {f"{RECORD_CONTEXT_PREFIX}{k}": v for k, v in context.items()}
    logger.log(log_level.levelno, message, extra=ctx_context)
    return True
