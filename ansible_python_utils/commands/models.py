"""Configurations mutables des commandes Ansible.

Chaque constructeur (AdHoc, Playbook) possède sa propre instance de
configuration, créée vide à l'instanciation et modifiée uniquement
par ses setters fluent. Un setter écrase la valeur précédente.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional


@dataclass
class CommandConfig:
    """Options communes à ansible et ansible-playbook.

    Attributes:
        forks: Nombre de processus parallèles (-f).
        user: Utilisateur distant (-u).
        inventory: Chemin de l'inventaire (-i).
        limit: Motif de limitation des hôtes (-l).
        private_key: Chemin de la clé privée (--private-key).
        su: Utilisateur cible de l'élévation (-U).
        verbose: Niveau de verbosité, suite de 'v' (ex: 'vvv').
        sudo: Exécution via sudo (-s).
    """

    forks: Optional[int] = None
    user: Optional[str] = None
    inventory: Optional[str] = None
    limit: Optional[str] = None
    private_key: Optional[str] = None
    su: Optional[str] = None
    verbose: Optional[str] = None
    sudo: bool = False


@dataclass
class AdHocConfig(CommandConfig):
    """Configuration d'une commande ad-hoc (ansible).

    Attributes:
        hosts: Motif des hôtes ciblés (obligatoire).
        module: Module Ansible à exécuter (obligatoire).
        args: Arguments structurés clé=valeur du module.
        freeform: Argument libre placé avant les arguments structurés.
    """

    hosts: Optional[str] = None
    module: Optional[str] = None
    args: Optional[Mapping[str, Any]] = None
    freeform: Optional[str] = None


@dataclass
class PlaybookConfig(CommandConfig):
    """Configuration d'une commande ansible-playbook.

    Attributes:
        playbook: Nom du playbook sans extension (obligatoire).
        variables: Variables supplémentaires sérialisées en JSON (-e).
        ask_pass: Demander le mot de passe SSH.
        ask_sudo_pass: Demander le mot de passe sudo.
        tags: Tags à exécuter.
        skip_tags: Tags à ignorer.
    """

    playbook: Optional[str] = None
    variables: Any = None
    ask_pass: bool = False
    ask_sudo_pass: bool = False
    tags: Optional[List[str]] = None
    skip_tags: Optional[List[str]] = None
