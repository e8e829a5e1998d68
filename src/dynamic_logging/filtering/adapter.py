"""
Bridge from filters to the standard library logging machinery
"""

import logging

from .base import LogFilter, Result


class LoggingFilterAdapter(logging.Filter):
    """
    Attach a LogFilter to a stdlib logger or handler

    Only DENY drops the record. ACCEPT and NEUTRAL both let it through,
    since the stdlib has no further filter to defer to.
    """

    def __init__(self, log_filter: LogFilter, name: str = ""):
        super().__init__(name)
        self.log_filter = log_filter

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        return self.log_filter.filter_record(record) is not Result.DENY
