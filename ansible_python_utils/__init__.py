"""
Ansible Python Utils - Configuration et exécution des programmes Ansible.

Modules disponibles:
- commands: Constructeurs fluent (AdHoc, Playbook) et exécuteur
  asynchrone (AsyncProcessRunner)
- errors: Exceptions (ConfigurationError, ProcessLaunchError,
  ProcessExitError) et handlers d'erreurs
- logging: Gestion des logs (Logger, FileLogger)
- config: Chargement de configuration (TOML, JSON, RunOptions)
"""

__version__ = "1.0.0"

from ansible_python_utils.logging import Logger, FileLogger
from ansible_python_utils.config import (
    ConfigLoader,
    FileConfigLoader,
    ConfigFileLoader,
    RunOptionsLoader,
)
from ansible_python_utils.errors import (
    ApplicationError,
    ConfigurationError,
    FileConfigurationError,
    ProcessError,
    ProcessLaunchError,
    ProcessExitError,
    ErrorHandler,
    ErrorHandlerChain,
    ConsoleErrorHandler,
    LoggerErrorHandler,
)
from ansible_python_utils.commands import (
    CommandConfig,
    AdHocConfig,
    PlaybookConfig,
    RunOptions,
    ProcessRunner,
    AsyncProcessRunner,
    AnsibleCommand,
    AdHoc,
    Playbook,
    CommandFormatter,
    PlainCommandFormatter,
    AnsiCommandFormatter,
)

__all__ = [
    # Logging
    "Logger",
    "FileLogger",
    # Config
    "ConfigLoader",
    "FileConfigLoader",
    "ConfigFileLoader",
    "RunOptionsLoader",
    # Errors - Exceptions
    "ApplicationError",
    "ConfigurationError",
    "FileConfigurationError",
    "ProcessError",
    "ProcessLaunchError",
    "ProcessExitError",
    # Errors - Handlers
    "ErrorHandler",
    "ErrorHandlerChain",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
    # Commands - Configurations
    "CommandConfig",
    "AdHocConfig",
    "PlaybookConfig",
    # Commands - Exécution
    "RunOptions",
    "ProcessRunner",
    "AsyncProcessRunner",
    # Commands - Constructeurs
    "AnsibleCommand",
    "AdHoc",
    "Playbook",
    # Commands - Formateurs
    "CommandFormatter",
    "PlainCommandFormatter",
    "AnsiCommandFormatter",
]
