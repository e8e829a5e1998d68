"""
Base classes for log filtering system
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

from ..errors import ConfigurationError


class Result(Enum):
    """Outcome of a single filter evaluation"""

    ACCEPT = "ACCEPT"
    NEUTRAL = "NEUTRAL"
    DENY = "DENY"

    @classmethod
    def to_result(
        cls, token: Optional[Union[str, "Result"]], default: "Result"
    ) -> "Result":
        """Parse a policy token such as ``"accept"``; None gives default"""
        if token is None:
            return default
        if isinstance(token, Result):
            return token
        if not isinstance(token, str):
            raise ConfigurationError(f"Unknown filter result: {token!r}")
        try:
            return cls[token.strip().upper()]
        except KeyError:
            raise ConfigurationError(f"Unknown filter result: {token!r}") from None

    def __str__(self) -> str:
        return self.value


class LogFilter(ABC):
    """Abstract base class for filters with a match/mismatch policy"""

    def __init__(
        self,
        on_match: Optional[Result] = None,
        on_mismatch: Optional[Result] = None,
    ):
        self.on_match = on_match if on_match is not None else Result.NEUTRAL
        self.on_mismatch = on_mismatch if on_mismatch is not None else Result.DENY

    @abstractmethod
    def filter_record(self, record: logging.LogRecord) -> Result:
        """Decide on an already created log record"""
        pass
