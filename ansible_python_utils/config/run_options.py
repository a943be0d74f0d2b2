"""Chargeur des options d'exécution Ansible.

Ce module fournit une classe pour charger un fichier de configuration
(TOML ou JSON) et créer un RunOptions.

Example:
    Fichier de configuration attendu:

        [run]
        debug = true
        buffered = false
        cwd = "/srv/ansible"

        [run.env]
        ANSIBLE_HOST_KEY_CHECKING = "False"

    Chargement et exécution:

        options = RunOptionsLoader("config/ansible.toml").load()
        await Playbook().playbook("site").exec(options)
"""

from typing import Any

from ansible_python_utils.commands.base import RunOptions
from ansible_python_utils.config.loader import ConfigFileLoader
from ansible_python_utils.errors.exceptions import FileConfigurationError

_BOOL_KEYS = ("debug", "detached", "buffered")


class RunOptionsLoader(ConfigFileLoader[RunOptions]):
    """Chargeur de configuration pour RunOptions.

    Toutes les clés de la section sont optionnelles ; les clés
    inconnues ou mal typées lèvent FileConfigurationError.

    Attributes:
        DEFAULT_SECTION: Nom de la section par défaut ("run").
    """

    DEFAULT_SECTION: str = "run"

    def load(self, section: str | None = None) -> RunOptions:
        """Charge et retourne un RunOptions.

        Args:
            section: Nom de la section à charger. Par défaut "run".

        Returns:
            Instance de RunOptions avec les valeurs du fichier.

        Raises:
            KeyError: Si la section n'existe pas.
            FileConfigurationError: Si une clé est inconnue ou mal typée.
        """
        section_name = section or self.DEFAULT_SECTION
        data: dict[str, Any] = self._get_section(section_name)

        errors = []
        for key, value in data.items():
            if key in _BOOL_KEYS:
                if not isinstance(value, bool):
                    errors.append(f"'{key}' doit être un booléen")
            elif key == "cwd":
                if not isinstance(value, str):
                    errors.append("'cwd' doit être une chaîne")
            elif key == "env":
                if not isinstance(value, dict) or not all(
                    isinstance(v, str) for v in value.values()
                ):
                    errors.append(
                        "'env' doit associer des noms à des chaînes"
                    )
            else:
                errors.append(f"Clé inconnue '{key}'")

        if errors:
            raise FileConfigurationError(
                f"Section [{section_name}] invalide", reason=errors
            )

        return RunOptions(
            debug=data.get("debug", False),
            detached=data.get("detached", False),
            buffered=data.get("buffered", False),
            env=dict(data["env"]) if "env" in data else None,
            cwd=data.get("cwd"),
        )
