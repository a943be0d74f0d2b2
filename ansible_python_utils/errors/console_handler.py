"""
    ConsoleErrorHandler (générique, configurable)
"""
from ansible_python_utils.errors.base import ErrorHandler
from ansible_python_utils.errors.exceptions import (ApplicationError,
                                                    ConfigurationError,
                                                    ProcessExitError,
                                                    ProcessLaunchError)


class ConsoleErrorHandler(ErrorHandler):
    """Handler pour afficher les erreurs dans la console.

    Distingue les erreurs connues (ApplicationError) des erreurs
    inattendues, et affiche un message de solution adapté au type
    d'erreur. Les raisons d'un ConfigurationError sont listées une
    par ligne.
    """

    def __init__(
        self,
        base_error_type: type[Exception] = ApplicationError,
        solutions: dict[type[Exception], str] | None = None
    ) -> None:
        """Initialise le handler console.

        Args:
            base_error_type: Classe de base pour distinguer erreurs
                connues/inconnues (défaut: ApplicationError).
            solutions: Dictionnaire {TypeException: "message solution"}
                prioritaire sur les solutions par défaut.
        """
        self.base_error_type = base_error_type
        self.solutions = solutions or {}

    def handle(self, error: Exception) -> None:
        """Affiche l'erreur dans la console avec des messages utilisateur.

        Args:
            error: L'exception à afficher.
        """
        if isinstance(error, self.base_error_type):
            self._handle_known_error(error)
        else:
            self._handle_unknown_error(error)

    def _custom_solution(self, error: Exception) -> str | None:
        """Cherche une solution fournie à l'instanciation.

        Args:
            error: L'exception à traiter.

        Returns:
            Message de solution ou None.
        """
        for error_type, solution in self.solutions.items():
            if isinstance(error, error_type):
                return solution
        return None

    def _handle_known_error(self, error: Exception) -> None:
        """Gère les erreurs connues du projet.

        Affiche le type et le message de l'erreur, suivi d'une
        suggestion de solution adaptée via isinstance.

        Args:
            error: L'exception métier à traiter.
        """
        print(f"\n🛑 {type(error).__name__}: {str(error)}")

        if isinstance(error, ConfigurationError):
            for reason in error.reason:
                print(f"   - {reason}")

        custom = self._custom_solution(error)
        if custom:
            print(f"\n🔧 Solution : {custom}")
        elif isinstance(error, ConfigurationError):
            print("\n🔧 Solution : Complétez la configuration de la commande.")
        elif isinstance(error, ProcessLaunchError):
            print("\n🔧 Solution : Vérifiez qu'Ansible est installé et présent dans le PATH.")
        elif isinstance(error, ProcessExitError):
            print("\n🔧 Solution : Relancez avec debug=True pour voir la sortie d'Ansible.")
        else:
            print("\n🔧 Solution : Voir les suggestions ci-dessus.")

    def _handle_unknown_error(self, error: Exception) -> None:
        """Gère les erreurs inattendues.

        Args:
            error: L'exception non prévue à afficher.
        """
        print(f"\n💥 Erreur inattendue: {str(error)}")
        print(f"Type: {type(error).__name__}")
        print(
            "\n📋 Cela peut être un bug. Veuillez ouvrir une issue avec ces informations."
        )
