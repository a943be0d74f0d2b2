"""Chargement des fichiers de configuration TOML et JSON.

Le format est détecté par l'extension du fichier. Les erreurs de
syntaxe sont remontées sous forme de FileConfigurationError pour
être traitées par les handlers d'erreurs comme toute erreur de
configuration.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Generic, TypeVar, Union

from ansible_python_utils.errors.exceptions import FileConfigurationError

T = TypeVar("T")


def _read_toml(path: Path) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


_READERS: Dict[str, Callable[[Path], Dict[str, Any]]] = {
    ".toml": _read_toml,
    ".json": _read_json,
}


class ConfigLoader(ABC):
    """
    Interface abstraite pour le chargement de configuration.

    Permet l'injection de dépendance et facilite les tests
    en permettant de substituer l'implémentation réelle par un mock.
    """

    @abstractmethod
    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        """
        Charge un fichier de configuration.

        Args:
            config_path: Chemin vers le fichier de configuration
            schema: Classe Pydantic BaseModel optionnelle. Si fourni,
                retourne une instance du modèle, sinon un dict brut.
        """
        pass


class FileConfigLoader(ConfigLoader):
    """Chargeur de configuration depuis un fichier .toml ou .json."""

    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        """
        Charge un fichier de configuration TOML ou JSON.

        Args:
            config_path: Chemin vers le fichier de configuration
            schema: Classe Pydantic BaseModel optionnelle

        Returns:
            Dictionnaire de configuration ou instance du schema

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si l'extension n'est pas supportée
            FileConfigurationError: Si le contenu est illisible
            ImportError: Si schema fourni mais pydantic absent
            TypeError: Si schema n'est pas un BaseModel
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Fichier de configuration non trouvé: {path}"
            )

        reader = _READERS.get(path.suffix.lower())
        if reader is None:
            raise ValueError(
                f"Extension non supportée: {path.suffix}. "
                "Utilisez .toml ou .json"
            )

        try:
            raw_config = reader(path)
        except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            raise FileConfigurationError(
                f"Fichier de configuration illisible: {path}",
                reason=[str(e)],
            ) from e

        if schema is None:
            return raw_config
        return self._validate_with_schema(raw_config, schema)

    @staticmethod
    def _validate_with_schema(data: Dict[str, Any], schema: type) -> Any:
        """Valide un dict via un modèle Pydantic.

        Raises:
            ImportError: Si pydantic n'est pas installé.
            TypeError: Si schema n'est pas un BaseModel.
        """
        try:
            from pydantic import BaseModel
        except ImportError:
            raise ImportError(
                "pydantic est requis pour la validation de schema. "
                "Installez-le avec: "
                "pip install ansible-python-utils[validation]"
            )

        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise TypeError(
                "Le schema doit être une sous-classe de "
                f"pydantic.BaseModel, reçu: {schema}"
            )
        return schema.model_validate(data)


class ConfigFileLoader(ABC, Generic[T]):
    """Base des chargeurs typés : fichier chargé, section extraite.

    Example:
        >>> class RunOptionsLoader(ConfigFileLoader[RunOptions]):
        ...     def load(self, section: str | None = None) -> RunOptions:
        ...         return RunOptions(**self._get_section(section or "run"))
    """

    def __init__(
        self,
        config_path: str | Path,
        config_loader: ConfigLoader | None = None
    ) -> None:
        """Charge le fichier de configuration.

        Args:
            config_path: Chemin vers le fichier (.toml ou .json).
            config_loader: Chargeur injectable (DIP). Si None,
                utilise FileConfigLoader.
        """
        loader = config_loader or FileConfigLoader()
        self._config: dict[str, Any] = loader.load(config_path)

    @property
    def config(self) -> dict[str, Any]:
        """Retourne le dictionnaire de configuration brut."""
        return self._config

    def _get_section(self, section: str) -> dict[str, Any]:
        """Extrait une section du fichier de configuration.

        Raises:
            KeyError: Si la section n'existe pas dans le fichier.
        """
        if section not in self._config:
            available = list(self._config.keys())
            raise KeyError(
                f"Section '{section}' non trouvée dans le fichier. "
                f"Sections disponibles: {available}"
            )
        return self._config[section]

    @abstractmethod
    def load(self, section: str | None = None) -> T:
        """Charge et retourne la dataclass de configuration."""
        pass
