"""Interfaces abstraites et structures de données pour l'exécution
des programmes Ansible.

Ce module définit :
    - RunOptions : Options immuables d'une exécution.
    - OutputCallback : Signature du callback de sortie en streaming.
    - ProcessRunner : Interface abstraite pour les exécuteurs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

OutputCallback = Callable[[str, bytes], None]


@dataclass(frozen=True)
class RunOptions:
    """Options d'exécution d'un programme externe.

    Attributes:
        debug: Transmet chaque bloc de stdout/stderr et logue le
            code de retour.
        detached: Aucun flux standard n'est raccordé au processus.
        buffered: Si False, PYTHONUNBUFFERED=1 désactive le buffering
            du programme lancé.
        env: Variables d'environnement prioritaires sur PATH et
            PYTHONUNBUFFERED.
        cwd: Répertoire de travail (None : celui de l'appelant).
    """

    debug: bool = False
    detached: bool = False
    buffered: bool = False
    env: Optional[Dict[str, str]] = None
    cwd: Optional[str] = None


class ProcessRunner(ABC):
    """Interface abstraite pour l'exécution d'un programme externe."""

    @abstractmethod
    async def run(
        self,
        program: str,
        arguments: List[str],
        options: Optional[RunOptions] = None,
        on_output: Optional[OutputCallback] = None,
    ) -> None:
        """Lance le programme et attend sa fin.

        Args:
            program: Nom du programme à exécuter.
            arguments: Arguments ordonnés du programme.
            options: Options d'exécution (défaut: RunOptions()).
            on_output: Callback recevant (nom_du_flux, bloc) en
                mode debug.

        Raises:
            ProcessLaunchError: Si le programme ne peut pas démarrer.
            ProcessExitError: Si le code de retour est non nul.
        """
        pass
