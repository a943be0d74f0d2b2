"""Constructeurs fluent des commandes ansible et ansible-playbook.

Ce module fournit AnsibleCommand, l'interface commune, et ses deux
variantes AdHoc et Playbook. Chaque setter modifie un seul champ de
la configuration et retourne l'instance pour le chaînage.

Example:
    Exécution d'une commande ad-hoc :

        import asyncio
        from ansible_python_utils.commands import AdHoc

        command = (
            AdHoc()
            .hosts("local")
            .module("shell")
            .with_freeform_arg("echo 'hello'")
            .forks(10)
        )
        command.compile_params()
        # Résultat : ["local", "-m", "shell", "-a", "echo 'hello'",
        #             "-f", "10"]
        asyncio.run(command.exec())

    Exécution d'un playbook :

        playbook = (
            Playbook()
            .playbook("site")
            .variables({"env": "prod"})
            .tags("deploy", "config")
            .inventory("/etc/ansible/hosts")
        )
        asyncio.run(playbook.exec(RunOptions(debug=True)))
"""

import json
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Self, Sequence

from ansible_python_utils.commands.base import (
    OutputCallback,
    ProcessRunner,
    RunOptions,
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
    missing_fields,
)
from ansible_python_utils.commands.runner import AsyncProcessRunner
from ansible_python_utils.errors.exceptions import ConfigurationError

MISSING_FIELD = '"{field}" doit être spécifié'


class AnsibleCommand(ABC):
    """Interface commune des commandes Ansible.

    Les variantes fournissent la validation, le nom du programme et
    la compilation des paramètres ; la classe de base porte les
    setters des options communes et l'orchestration de exec().
    Une instance n'est pas protégée contre les accès concurrents.
    """

    def __init__(
        self,
        config: CommandConfig,
        runner: Optional[ProcessRunner] = None,
    ) -> None:
        """Initialise la commande.

        Args:
            config: Configuration vide propre à la variante.
            runner: Exécuteur à utiliser (défaut:
                AsyncProcessRunner()).
        """
        self._config = config
        self._runner = runner or AsyncProcessRunner()

    @property
    def config(self) -> CommandConfig:
        """Configuration courante de la commande."""
        return self._config

    @abstractmethod
    def validate(self) -> List[str]:
        """Vérifie la présence des champs obligatoires.

        Returns:
            Un message par champ manquant, liste vide si valide.
        """
        pass

    @abstractmethod
    def command_name(self) -> str:
        """Retourne le nom du programme à exécuter."""
        pass

    @abstractmethod
    def compile_params(self) -> List[str]:
        """Compile la configuration en arguments ordonnés.

        Returns:
            Liste d'arguments, identique d'un appel à l'autre tant
            que la configuration n'est pas modifiée.
        """
        pass

    def forks(self, forks: int) -> Self:
        self._config.forks = forks
        return self

    def user(self, user: str) -> Self:
        self._config.user = user
        return self

    def inventory(self, inventory: str) -> Self:
        self._config.inventory = inventory
        return self

    def limit(self, limit: str) -> Self:
        self._config.limit = limit
        return self

    def private_key(self, private_key: str) -> Self:
        self._config.private_key = private_key
        return self

    def su(self, su: str) -> Self:
        self._config.su = su
        return self

    def verbose(self, level: str) -> Self:
        """Définit la verbosité, insérée telle quelle (ex: 'vvv')."""
        self._config.verbose = level
        return self

    def as_sudo(self) -> Self:
        """Active l'exécution via sudo (-s)."""
        self._config.sudo = True
        return self

    def command_line(self) -> List[str]:
        """Retourne le programme suivi de ses paramètres compilés."""
        return [self.command_name()] + self.compile_params()

    async def exec(
        self,
        options: Optional[RunOptions] = None,
        on_output: Optional[OutputCallback] = None,
    ) -> None:
        """Valide, compile et exécute la commande.

        Aucun processus n'est lancé si la validation échoue.

        Args:
            options: Options d'exécution (défaut: RunOptions()).
            on_output: Callback recevant (nom_du_flux, bloc) en
                mode debug.

        Raises:
            ConfigurationError: Si des champs obligatoires manquent ;
                la liste des messages est dans l'attribut reason.
            ProcessLaunchError: Si le programme ne peut pas démarrer.
            ProcessExitError: Si le code de retour est non nul.
        """
        errors = self.validate()
        if errors:
            raise ConfigurationError(reason=errors)

        await self._runner.run(
            self.command_name(),
            self.compile_params(),
            options or RunOptions(),
            on_output=on_output,
        )


class AdHoc(AnsibleCommand):
    """Commande ad-hoc : un module exécuté sur un motif d'hôtes."""

    def __init__(self, runner: Optional[ProcessRunner] = None) -> None:
        super().__init__(AdHocConfig(), runner)

    def command_name(self) -> str:
        return "ansible"

    def hosts(self, hosts: str) -> Self:
        self._config.hosts = hosts
        return self

    def module(self, module: str) -> Self:
        self._config.module = module
        return self

    def with_structured_args(
        self, args: Optional[Mapping[str, Any]]
    ) -> Self:
        """Définit les arguments clé=valeur du module.

        Args:
            args: Arguments structurés, dans l'ordre d'émission.

        Returns:
            L'instance courante pour le chaînage.
        """
        self._config.args = args
        return self

    def with_freeform_arg(self, freeform: Optional[str]) -> Self:
        """Définit l'argument libre du module (ex: commande shell).

        Args:
            freeform: Texte émis avant les arguments structurés.

        Returns:
            L'instance courante pour le chaînage.
        """
        self._config.freeform = freeform
        return self

    def args(
        self,
        *,
        structured: Optional[Mapping[str, Any]] = None,
        freeform: Optional[str] = None,
    ) -> Self:
        """Définit les deux formes d'arguments en un seul appel.

        Les deux champs sont écrasés, y compris par None. Ils se
        passent par mot-clé : args(freeform="uptime").
        """
        return self.with_structured_args(structured).with_freeform_arg(
            freeform
        )

    def validate(self) -> List[str]:
        return missing_fields(
            self._config, ("hosts", "module"), MISSING_FIELD
        )

    def compile_params(self) -> List[str]:
        config = self._config
        builder = ParamsBuilder([config.hosts, "-m", config.module])
        builder.with_option_if(
            "-a", format_args(config.args, config.freeform)
        )
        return builder.with_params(compile_common_params(config)).build()


def _tag_list(tags: Sequence[str]) -> List[str]:
    """Copie une séquence de tags en refusant une chaîne seule.

    Raises:
        TypeError: Si tags est une chaîne de caractères.
    """
    if isinstance(tags, str):
        raise TypeError(
            "Les tags doivent être une séquence de chaînes, "
            f"reçu la chaîne {tags!r}"
        )
    return list(tags)


class Playbook(AnsibleCommand):
    """Commande ansible-playbook : exécution d'un playbook nommé."""

    def __init__(self, runner: Optional[ProcessRunner] = None) -> None:
        super().__init__(PlaybookConfig(), runner)

    def command_name(self) -> str:
        return "ansible-playbook"

    def playbook(self, playbook: str) -> Self:
        """Définit le playbook par son nom sans extension .yml."""
        self._config.playbook = playbook
        return self

    def variables(self, variables: Any) -> Self:
        """Définit les variables supplémentaires (sérialisées en JSON)."""
        self._config.variables = variables
        return self

    def ask_pass(self) -> Self:
        self._config.ask_pass = True
        return self

    def ask_sudo_pass(self) -> Self:
        self._config.ask_sudo_pass = True
        return self

    def with_tags(self, tags: Sequence[str]) -> Self:
        """Définit les tags à exécuter.

        Args:
            tags: Séquence ordonnée de tags.

        Returns:
            L'instance courante pour le chaînage.

        Raises:
            TypeError: Si tags est une chaîne seule.
        """
        self._config.tags = _tag_list(tags)
        return self

    def with_skip_tags(self, tags: Sequence[str]) -> Self:
        """Définit les tags à ignorer.

        Raises:
            TypeError: Si tags est une chaîne seule.
        """
        self._config.skip_tags = _tag_list(tags)
        return self

    def tags(self, *tags: str) -> Self:
        return self.with_tags(tags)

    def skip_tags(self, *tags: str) -> Self:
        return self.with_skip_tags(tags)

    def validate(self) -> List[str]:
        return missing_fields(self._config, ("playbook",), MISSING_FIELD)

    def compile_params(self) -> List[str]:
        config = self._config
        builder = ParamsBuilder([f"{config.playbook}.yml"])

        if config.variables is not None:
            builder.with_option_if(
                "-e",
                json.dumps(
                    config.variables,
                    separators=(",", ":"),
                    ensure_ascii=False,
                ),
            )

        builder.with_flag_if("--ask-pass", config.ask_pass)
        builder.with_flag_if("--ask-sudo-pass", config.ask_sudo_pass)
        if config.tags:
            builder.with_flag(f"--tags={','.join(config.tags)}")
        if config.skip_tags:
            builder.with_flag(f"--skip-tags={','.join(config.skip_tags)}")

        return builder.with_params(compile_common_params(config)).build()
