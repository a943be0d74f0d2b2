"""Module de construction et d'exécution des commandes Ansible.

Ce module fournit des classes pour configurer les programmes
ansible et ansible-playbook, puis les exécuter de manière asynchrone.

Classes disponibles :
    CommandConfig, AdHocConfig, PlaybookConfig : Configurations.
    RunOptions : Options immuables d'une exécution.
    ProcessRunner : Interface abstraite pour les exécuteurs.
    AsyncProcessRunner : Exécuteur concret via asyncio.
    AnsibleCommand : Interface commune des commandes.
    AdHoc : Constructeur fluent de commandes ad-hoc.
    Playbook : Constructeur fluent de commandes playbook.
    ParamsBuilder : Constructeur fluent de vecteurs d'arguments.
    CommandFormatter : Interface abstraite de formatage.
    PlainCommandFormatter : Formatage texte brut (logs fichier).
    AnsiCommandFormatter : Formatage ANSI coloré (console).
"""

from ansible_python_utils.commands.base import (
    OutputCallback,
    ProcessRunner,
    RunOptions,
)
from ansible_python_utils.commands.builder import (
    AdHoc,
    AnsibleCommand,
    Playbook,
)
from ansible_python_utils.commands.formatter import (
    AnsiCommandFormatter,
    CommandFormatter,
    PlainCommandFormatter,
)
from ansible_python_utils.commands.models import (
    AdHocConfig,
    CommandConfig,
    PlaybookConfig,
)
from ansible_python_utils.commands.params import (
    ParamsBuilder,
    compile_common_params,
    format_args,
)
from ansible_python_utils.commands.runner import AsyncProcessRunner

__all__ = [
    # Configurations
    "CommandConfig",
    "AdHocConfig",
    "PlaybookConfig",
    # Exécution
    "RunOptions",
    "OutputCallback",
    "ProcessRunner",
    "AsyncProcessRunner",
    # Constructeurs
    "AnsibleCommand",
    "AdHoc",
    "Playbook",
    # Paramètres
    "ParamsBuilder",
    "compile_common_params",
    "format_args",
    # Formateurs
    "CommandFormatter",
    "PlainCommandFormatter",
    "AnsiCommandFormatter",
]
