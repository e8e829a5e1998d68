"""
Exceptions raised while assembling filters
"""


class ConfigurationError(ValueError):
    """Raised when a filter cannot be built from the supplied configuration"""

    pass
