"""
    LoggerErrorHandler
"""
from ansible_python_utils.errors.base import ErrorHandler
from ansible_python_utils.errors.exceptions import (ApplicationError,
                                                    ConfigurationError,
                                                    ProcessExitError)
from ansible_python_utils.logging.base import Logger


class LoggerErrorHandler(ErrorHandler):
    """Handler pour logger les erreurs.

    Enregistre les erreurs dans le fichier de log via le Logger
    injecté au constructeur.
    """

    def __init__(self,
                 logger: Logger,
                 base_error_type: type[Exception] = ApplicationError
                 ) -> None:
        """Initialise le handler avec un logger.

        Args:
            logger: Instance de Logger pour l'enregistrement des erreurs.
            base_error_type: Classe de base des erreurs connues.
        """
        self.logger = logger
        self.base_error_type = base_error_type

    def handle(self, error: Exception) -> None:
        """Log l'erreur avec le détail structuré disponible.

        Args:
            error: L'exception à logger.
        """
        if not isinstance(error, self.base_error_type):
            self.logger.log_error(
                f"Erreur inattendue: {type(error).__name__}: {str(error)}"
            )
            return

        message = f"{type(error).__name__}: {str(error)}"
        if isinstance(error, ConfigurationError) and error.reason:
            message += f" ({'; '.join(error.reason)})"
        elif isinstance(error, ProcessExitError) and error.command:
            message += f" [{' '.join(error.command)}]"
        self.logger.log_error(message)
