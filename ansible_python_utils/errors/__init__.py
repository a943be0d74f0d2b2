"""Module de gestion des erreurs."""

from ansible_python_utils.errors.base import ErrorHandler, ErrorHandlerChain
from ansible_python_utils.errors.exceptions import (ApplicationError,
                                                    ConfigurationError,
                                                    FileConfigurationError,
                                                    ProcessError,
                                                    ProcessLaunchError,
                                                    ProcessExitError)
from ansible_python_utils.errors.console_handler import ConsoleErrorHandler
from ansible_python_utils.errors.logger_handler import LoggerErrorHandler


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "FileConfigurationError",
    "ProcessError",
    "ProcessLaunchError",
    "ProcessExitError",
    "ErrorHandler",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
    "ErrorHandlerChain",
]
