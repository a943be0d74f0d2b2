"""Module de configuration."""

from ansible_python_utils.config.loader import (
    ConfigFileLoader,
    ConfigLoader,
    FileConfigLoader,
)
from ansible_python_utils.config.run_options import RunOptionsLoader

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "ConfigFileLoader",
    "RunOptionsLoader",
]
