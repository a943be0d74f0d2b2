"""Formateurs pour l'affichage des messages d'exécution Ansible.

Ce module fournit une hiérarchie de formateurs permettant d'afficher
les messages d'exécution différemment selon le contexte (fichier de
log ou console) et les privilèges d'exécution (root ou utilisateur).

Classes :
    CommandFormatter : Interface abstraite de formatage.
    PlainCommandFormatter : Texte brut avec préfixes [ROOT]/[user].
    AnsiCommandFormatter : Codes ANSI colorés pour la console.

Example :
    Utilisation typique avec AsyncProcessRunner :

        from ansible_python_utils.commands import (
            AsyncProcessRunner,
            AnsiCommandFormatter,
        )

        runner = AsyncProcessRunner(
            logger=logger,
            console_formatter=AnsiCommandFormatter(),
        )

Note :
    AnsiCommandFormatter vérifie automatiquement si la sortie est
    un terminal (TTY) avant d'émettre des codes ANSI.
"""

import sys
from abc import ABC, abstractmethod
from typing import List


class CommandFormatter(ABC):
    """Interface abstraite pour formater les messages d'exécution.

    Les formateurs reçoivent le contexte d'exécution (is_root)
    pour adapter leur affichage en conséquence.
    """

    @abstractmethod
    def format_start(
        self, command: List[str], is_root: bool
    ) -> str:
        """Formate le message de début d'exécution.

        Args:
            command: Programme suivi de ses arguments.
            is_root: True si la commande est exécutée en root.

        Returns:
            Message formaté prêt à l'affichage.
        """
        pass

    @abstractmethod
    def format_dry_run(
        self, command: List[str], is_root: bool
    ) -> str:
        """Formate le message de simulation (mode dry-run).

        Args:
            command: Programme suivi de ses arguments.
            is_root: True si la commande est exécutée en root.

        Returns:
            Message formaté prêt à l'affichage.
        """
        pass

    @abstractmethod
    def format_chunk(self, stream: str, chunk: bytes) -> str:
        """Formate un bloc de sortie reçu en mode debug.

        Args:
            stream: Nom du flux ('stdout' ou 'stderr').
            chunk: Données brutes reçues.

        Returns:
            Texte formaté prêt à l'affichage.
        """
        pass

    @abstractmethod
    def format_exit(self, code: int, is_root: bool) -> str:
        """Formate le message de fin de processus.

        Args:
            code: Code de retour du processus.
            is_root: True si la commande est exécutée en root.

        Returns:
            Message formaté prêt à l'affichage.
        """
        pass


def _decode(chunk: bytes) -> str:
    """Décode un bloc de sortie sans lever d'erreur."""
    return chunk.decode("utf-8", errors="replace").rstrip("\n")


class PlainCommandFormatter(CommandFormatter):
    """Formateur texte brut pour les logs fichier.

    Example :
        Sortie pour une commande root :
            [ROOT] Exécution : ansible local -m ping

        Sortie pour un utilisateur standard :
            [user] Exécution : ansible local -m ping
    """

    _ROOT_PREFIX = "[ROOT]"
    _USER_PREFIX = "[user]"

    def _prefix(self, is_root: bool) -> str:
        """Retourne le préfixe [ROOT] ou [user]."""
        return self._ROOT_PREFIX if is_root else self._USER_PREFIX

    def format_start(
        self, command: List[str], is_root: bool
    ) -> str:
        """Formate le début d'exécution avec préfixe textuel."""
        cmd_str = " ".join(command)
        return f"{self._prefix(is_root)} Exécution : {cmd_str}"

    def format_dry_run(
        self, command: List[str], is_root: bool
    ) -> str:
        """Formate le message de simulation avec préfixe."""
        cmd_str = " ".join(command)
        return f"{self._prefix(is_root)} [dry-run] {cmd_str}"

    def format_chunk(self, stream: str, chunk: bytes) -> str:
        """Préfixe le bloc décodé par le nom du flux."""
        return f"[{stream}] {_decode(chunk)}"

    def format_exit(self, code: int, is_root: bool) -> str:
        """Formate la fin de processus avec préfixe."""
        return f"{self._prefix(is_root)} Exit. Code={code}"


class AnsiCommandFormatter(CommandFormatter):
    """Formateur ANSI coloré pour la sortie console.

    Distingue visuellement les exécutions root (jaune-or gras)
    des exécutions utilisateur (vert). Les blocs de stderr sont
    affichés en rouge, ceux de stdout sans style.

    N'émet aucun code ANSI si stdout n'est pas un terminal TTY.
    """

    RESET = "\033[0m"
    ROOT_STYLE = "\033[1;33m"   # Jaune-or gras
    USER_STYLE = "\033[0;32m"   # Vert normal
    DRY_STYLE = "\033[0;90m"    # Gris discret
    STDERR_STYLE = "\033[0;31m"  # Rouge

    ROOT_PREFIX = "[ROOT]"
    USER_PREFIX = "[user]"

    def _is_tty(self) -> bool:
        """Vérifie si stdout est un terminal interactif (TTY)."""
        return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def _prefix(self, is_root: bool) -> str:
        return self.ROOT_PREFIX if is_root else self.USER_PREFIX

    def _style(self, text: str, style: str) -> str:
        """Applique le style ANSI si on est dans un TTY.

        Args:
            text: Texte à styliser.
            style: Code ANSI à appliquer.

        Returns:
            Texte avec codes ANSI si TTY, texte brut sinon.
        """
        if not self._is_tty():
            return text
        return f"{style}{text}{self.RESET}"

    def _context_style(self, is_root: bool) -> str:
        return self.ROOT_STYLE if is_root else self.USER_STYLE

    def format_start(
        self, command: List[str], is_root: bool
    ) -> str:
        """Formate le début d'exécution avec style ANSI."""
        cmd_str = " ".join(command)
        return self._style(
            f"{self._prefix(is_root)} Exécution : {cmd_str}",
            self._context_style(is_root),
        )

    def format_dry_run(
        self, command: List[str], is_root: bool
    ) -> str:
        """Formate le message de simulation avec style gris discret."""
        cmd_str = " ".join(command)
        return self._style(
            f"{self._prefix(is_root)} [dry-run] {cmd_str}",
            self.DRY_STYLE,
        )

    def format_chunk(self, stream: str, chunk: bytes) -> str:
        """Retourne le bloc décodé, en rouge pour stderr."""
        text = _decode(chunk)
        if stream == "stderr":
            return self._style(text, self.STDERR_STYLE)
        return text

    def format_exit(self, code: int, is_root: bool) -> str:
        """Formate la fin de processus, en rouge si le code est non nul."""
        style = (
            self._context_style(is_root) if code == 0
            else self.STDERR_STYLE
        )
        return self._style(
            f"{self._prefix(is_root)} Exit. Code={code}", style
        )
