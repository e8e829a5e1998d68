"""
Context-keyed log filtering
"""

from .adapter import LoggingFilterAdapter
from .base import LogFilter, Result
from .dynamic_threshold import DynamicThresholdFilter
from .threshold_table import KeyValuePair, ThresholdTable

__all__ = [
    "Result",
    "LogFilter",
    "KeyValuePair",
    "ThresholdTable",
    "DynamicThresholdFilter",
    "LoggingFilterAdapter",
]
