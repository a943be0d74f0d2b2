"""Compilation des paramètres de ligne de commande Ansible.

Ce module regroupe ce que partagent les commandes ad-hoc et playbook :

    - ParamsBuilder : constructeur fluent d'un vecteur d'arguments.
    - format_args : mise en forme de l'argument unique passé après -a.
    - compile_common_params : suffixe d'options communes.
    - missing_fields : collecte des erreurs de validation.

Example:
    Construction d'un vecteur d'arguments :

        params = (
            ParamsBuilder(["site.yml"])
            .with_option_if("-e", '{"env":"prod"}')
            .with_flag_if("--ask-pass", False)
            .with_params(["-f", "10"])
            .build()
        )
        # Résultat : ["site.yml", "-e", '{"env":"prod"}', "-f", "10"]
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ansible_python_utils.commands.models import CommandConfig

# Ordre du suffixe commun : (attribut de CommandConfig, option)
COMMON_OPTIONS = (
    ("forks", "-f"),
    ("user", "-u"),
    ("inventory", "-i"),
    ("limit", "-l"),
    ("private_key", "--private-key"),
    ("su", "-U"),
)


class ParamsBuilder:
    """Constructeur fluent pour assembler des arguments de commande."""

    def __init__(self, positional: Optional[Iterable[str]] = None) -> None:
        """Initialise le constructeur.

        Args:
            positional: Arguments placés en tête du vecteur.
        """
        self._params: List[str] = list(positional or [])

    def with_flag(self, flag: str) -> "ParamsBuilder":
        """Ajoute un flag simple.

        Args:
            flag: Flag à ajouter (ex: '-s').

        Returns:
            L'instance courante pour le chaînage.
        """
        self._params.append(flag)
        return self

    def with_flag_if(
        self, flag: str, condition: bool
    ) -> "ParamsBuilder":
        """Ajoute un flag seulement si la condition est vraie.

        Args:
            flag: Flag à ajouter.
            condition: Condition d'ajout.

        Returns:
            L'instance courante pour le chaînage.
        """
        if condition:
            self._params.append(flag)
        return self

    def with_option_if(
        self, option: str, value: Any
    ) -> "ParamsBuilder":
        """Ajoute une option et sa valeur en deux arguments distincts.

        L'option est ignorée si value est None ou une chaîne vide,
        pour ne jamais produire d'argument vide. La valeur 0 est
        conservée. Les autres valeurs sont converties en chaîne.

        Args:
            option: Option (ex: '-u').
            value: Valeur de l'option (peut être None).

        Returns:
            L'instance courante pour le chaînage.
        """
        if value is not None and value != "":
            self._params.extend([option, str(value)])
        return self

    def with_params(self, params: Iterable[str]) -> "ParamsBuilder":
        """Ajoute une suite d'arguments déjà compilés.

        Args:
            params: Arguments à ajouter.

        Returns:
            L'instance courante pour le chaînage.
        """
        self._params.extend(params)
        return self

    def build(self) -> List[str]:
        """Retourne une copie du vecteur d'arguments."""
        return list(self._params)


def format_args(
    args: Optional[Mapping[str, Any]],
    freeform: Optional[str] = None,
) -> Optional[str]:
    """Met en forme les arguments d'un module ad-hoc.

    L'argument libre est placé en premier, suivi des paires
    'clé=valeur' dans l'ordre d'insertion. Le tout est joint par
    un espace et forme un seul argument, que le programme
    externe analyse lui-même.

    Args:
        args: Arguments structurés du module.
        freeform: Argument libre (ex: "echo 'hello'").

    Returns:
        La chaîne formatée, ou None si les deux entrées sont vides.
    """
    formatted: List[str] = []

    if freeform:
        formatted.append(freeform)

    if args:
        formatted.extend(f"{key}={value}" for key, value in args.items())

    if formatted:
        return " ".join(formatted)
    return None


def compile_common_params(config: CommandConfig) -> List[str]:
    """Compile les options communes aux deux types de commande.

    Ordre : -f, -u, -i, -l, --private-key, -U, verbosité, -s.

    Args:
        config: Configuration de la commande.

    Returns:
        Liste d'arguments, sans élément vide.
    """
    builder = ParamsBuilder()
    for attribute, option in COMMON_OPTIONS:
        builder.with_option_if(option, getattr(config, attribute))
    if config.verbose:
        builder.with_flag(f"-{config.verbose}")
    builder.with_flag_if("-s", config.sudo)
    return builder.build()


def missing_fields(
    config: Any, fields: Sequence[str], template: str
) -> List[str]:
    """Liste les champs obligatoires non renseignés.

    Args:
        config: Configuration à valider.
        fields: Noms des attributs obligatoires, dans l'ordre.
        template: Message avec un emplacement {field}.

    Returns:
        Un message par champ à None, vide si tout est renseigné.
    """
    return [
        template.format(field=field)
        for field in fields
        if getattr(config, field) is None
    ]
