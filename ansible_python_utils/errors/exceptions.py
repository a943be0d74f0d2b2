"""
Module contenant les exceptions personnalisées pour ansible_python_utils.

Ce module suit le principe SRP en isolant la gestion des exceptions.
Trois familles d'échec sont remontées à l'appelant :
    - ConfigurationError : commande mal configurée, aucun processus lancé.
    - ProcessLaunchError : le programme n'a pas pu être démarré.
    - ProcessExitError : le programme s'est terminé avec un code non nul.
"""

from typing import List, Optional, Sequence


class ApplicationError(Exception):
    """Exception de base pour toutes les applications."""
    pass


class ConfigurationError(ApplicationError):
    """Configuration d'exécution invalide.

    Attributes:
        reason: Liste ordonnée des messages de validation.
    """

    def __init__(
        self,
        message: str = "L'exécution Ansible est mal configurée",
        reason: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(message)
        self.reason: List[str] = list(reason or [])


class FileConfigurationError(ConfigurationError):
    """Fichier de configuration des options d'exécution invalide."""
    pass


class ProcessError(ApplicationError):
    """Exception de base pour les échecs du processus externe."""
    pass


class ProcessLaunchError(ProcessError):
    """Le système n'a pas pu démarrer le programme externe.

    L'erreur système d'origine est disponible via __cause__.

    Attributes:
        program: Nom du programme qui n'a pas pu être lancé.
    """

    def __init__(self, program: str, message: str) -> None:
        super().__init__(
            f"Impossible de lancer '{program}' : {message}"
        )
        self.program = program


class ProcessExitError(ProcessError):
    """Le programme externe s'est terminé avec un code non nul.

    Attributes:
        code: Code de retour du processus.
        command: Commande exécutée sous forme de liste.
    """

    def __init__(
        self, code: int, command: Optional[Sequence[str]] = None
    ) -> None:
        super().__init__(f"Processus terminé avec code={code}")
        self.code = code
        self.command: List[str] = list(command or [])
