"""Tests pour les constructeurs de commandes Ansible."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ansible_python_utils.commands import (
    AdHoc,
    AdHocConfig,
    ParamsBuilder,
    Playbook,
    PlaybookConfig,
    ProcessRunner,
    RunOptions,
    compile_common_params,
    format_args,
)
from ansible_python_utils.errors import ConfigurationError


def _mock_runner():
    """Crée un ProcessRunner simulé."""
    runner = MagicMock(spec=ProcessRunner)
    runner.run = AsyncMock(return_value=None)
    return runner


# --- Tests format_args ---


class TestFormatArgs:
    """Tests pour la mise en forme de l'argument -a."""

    def test_freeform_seul(self):
        """Test d'un argument libre seul."""
        assert format_args(None, "echo 'hello'") == "echo 'hello'"

    def test_arguments_structures(self):
        """Test des paires clé=valeur dans l'ordre d'insertion."""
        result = format_args({"src": "/a", "dest": "/b", "mode": 644})
        assert result == "src=/a dest=/b mode=644"

    def test_freeform_avant_structures(self):
        """Test que l'argument libre est placé en premier."""
        result = format_args({"chdir": "/tmp"}, "ls -la")
        assert result == "ls -la chdir=/tmp"

    def test_entrees_vides(self):
        """Test du retour None quand rien n'est fourni."""
        assert format_args(None, None) is None
        assert format_args({}, "") is None


# --- Tests ParamsBuilder ---


class TestParamsBuilder:
    """Tests pour le constructeur de vecteurs d'arguments."""

    def test_option_ignoree_si_none(self):
        """Test qu'une option à None n'ajoute aucun argument."""
        params = ParamsBuilder(["x"]).with_option_if("-u", None).build()
        assert params == ["x"]

    def test_option_convertie_en_chaine(self):
        """Test de la conversion de la valeur en chaîne."""
        params = ParamsBuilder().with_option_if("-f", 10).build()
        assert params == ["-f", "10"]

    def test_option_ignoree_si_chaine_vide(self):
        """Test qu'une chaîne vide ne produit aucun argument vide."""
        params = ParamsBuilder(["x"]).with_option_if("-u", "").build()
        assert params == ["x"]

    def test_option_zero_conservee(self):
        """Test que la valeur 0 est émise."""
        params = ParamsBuilder().with_option_if("-f", 0).build()
        assert params == ["-f", "0"]

    def test_flag_conditionnel(self):
        """Test de l'ajout conditionnel d'un flag."""
        params = (
            ParamsBuilder()
            .with_flag_if("-s", True)
            .with_flag_if("--ask-pass", False)
            .build()
        )
        assert params == ["-s"]

    def test_build_retourne_une_copie(self):
        """Test que build() ne partage pas la liste interne."""
        builder = ParamsBuilder(["a"])
        builder.build().append("b")
        assert builder.build() == ["a"]


# --- Tests compile_common_params ---


class TestCommonParams:
    """Tests pour le suffixe d'options communes."""

    def test_aucune_option(self):
        """Test qu'une configuration vide ne produit rien."""
        assert compile_common_params(AdHocConfig()) == []

    def test_ordre_complet(self):
        """Test de l'ordre -f, -u, -i, -l, --private-key, -U, -v, -s."""
        config = PlaybookConfig(
            forks=5,
            user="deploy",
            inventory="/etc/ansible/hosts",
            limit="web",
            private_key="~/.ssh/id_rsa",
            su="root",
            verbose="vv",
            sudo=True,
        )
        assert compile_common_params(config) == [
            "-f", "5",
            "-u", "deploy",
            "-i", "/etc/ansible/hosts",
            "-l", "web",
            "--private-key", "~/.ssh/id_rsa",
            "-U", "root",
            "-vv",
            "-s",
        ]

    def test_valeurs_vides_omises(self):
        """Test que user("") et limit("") n'ajoutent rien."""
        command = Playbook().playbook("test").user("").limit("")
        assert command.compile_params() == ["test.yml"]

    def test_ordre_identique_pour_les_deux_variantes(self):
        """Test que le suffixe est le même pour AdHoc et Playbook."""
        adhoc = (
            AdHoc().hosts("all").module("ping")
            .as_sudo().limit("db").forks(3)
        )
        playbook = (
            Playbook().playbook("site")
            .limit("db").as_sudo().forks(3)
        )
        assert adhoc.compile_params()[3:] == ["-f", "3", "-l", "db", "-s"]
        assert playbook.compile_params()[1:] == ["-f", "3", "-l", "db", "-s"]


# --- Tests AdHoc ---


class TestAdHoc:
    """Tests pour la commande ad-hoc."""

    def test_nom_du_programme(self):
        """Test du nom du programme."""
        assert AdHoc().command_name() == "ansible"

    def test_setters_chainables(self):
        """Test que chaque setter retourne la même instance."""
        command = AdHoc()
        assert command.hosts("local") is command
        assert command.module("ping") is command
        assert command.forks(2) is command
        assert command.as_sudo() is command
        assert command.with_freeform_arg("x") is command

    def test_freeform(self):
        """Test de la compilation avec un argument libre."""
        command = (
            AdHoc().module("shell").hosts("local")
            .with_freeform_arg("echo 'hello'")
        )
        assert command.compile_params() == [
            "local", "-m", "shell", "-a", "echo 'hello'",
        ]

    def test_arguments_structures_et_freeform(self):
        """Test de -a suivi d'un seul argument formaté."""
        command = (
            AdHoc().hosts("web").module("command")
            .args(structured={"chdir": "/srv"}, freeform="uptime")
        )
        params = command.compile_params()
        assert params[:3] == ["web", "-m", "command"]
        index = params.index("-a")
        assert params[index + 1] == "uptime chdir=/srv"
        assert len(params) == 5

    def test_sans_arguments(self):
        """Test que -a est omis sans argument."""
        command = AdHoc().hosts("all").module("ping")
        assert command.compile_params() == ["all", "-m", "ping"]

    def test_dernier_appel_gagne(self):
        """Test qu'un setter écrase la valeur précédente."""
        command = AdHoc().hosts("a").hosts("b").module("ping")
        command.with_structured_args({"x": 1}).with_structured_args({"y": 2})
        assert command.compile_params() == ["b", "-m", "ping", "-a", "y=2"]

    def test_args_ecrase_les_deux_formes(self):
        """Test que args() remplace freeform et arguments structurés."""
        command = (
            AdHoc().hosts("all").module("shell")
            .with_freeform_arg("ls")
            .args(structured={"chdir": "/tmp"})
        )
        assert command.config.freeform is None
        assert command.compile_params()[-1] == "chdir=/tmp"

    def test_setters_communs_gardent_la_variante(self):
        """Test qu'un setter commun retourne l'instance de la variante."""
        command = AdHoc().forks(2).hosts("all").module("ping")
        assert isinstance(command, AdHoc)
        assert command.compile_params() == ["all", "-m", "ping", "-f", "2"]

    def test_args_refuse_un_argument_positionnel(self):
        """Test que args("...") est rejeté au lieu d'être mal stocké."""
        command = AdHoc().module("shell").hosts("local")
        with pytest.raises(TypeError):
            command.args("echo 'hello'")
        assert command.config.args is None

    def test_args_freeform_par_mot_cle(self):
        """Test de la forme args(freeform=...)."""
        command = (
            AdHoc().module("shell").hosts("local")
            .args(freeform="echo 'hello'")
        )
        assert command.compile_params() == [
            "local", "-m", "shell", "-a", "echo 'hello'",
        ]

    def test_options_communes(self):
        """Test des options communes après les arguments."""
        command = (
            AdHoc().module("shell").hosts("local")
            .with_freeform_arg("echo 'hello'")
            .forks(10).verbose("vvv").user("root")
            .inventory("/etc/my/hosts").su("root")
        )
        assert command.compile_params() == [
            "local", "-m", "shell", "-a", "echo 'hello'",
            "-f", "10", "-u", "root", "-i", "/etc/my/hosts",
            "-U", "root", "-vvv",
        ]

    def test_compile_params_idempotent(self):
        """Test que deux compilations donnent le même résultat."""
        command = (
            AdHoc().hosts("all").module("copy")
            .with_structured_args({"src": "a", "dest": "b"})
            .private_key("/k")
        )
        assert command.compile_params() == command.compile_params()

    def test_validate_valide(self):
        """Test qu'une configuration complète est valide."""
        assert AdHoc().hosts("all").module("ping").validate() == []

    def test_validate_sans_hosts(self):
        """Test du message unique quand hosts manque."""
        errors = AdHoc().module("shell").validate()
        assert len(errors) == 1
        assert "hosts" in errors[0]

    def test_validate_sans_rien(self):
        """Test d'un message par champ obligatoire manquant."""
        errors = AdHoc().validate()
        assert len(errors) == 2
        assert "hosts" in errors[0]
        assert "module" in errors[1]

    def test_command_line(self):
        """Test de la ligne complète avec le programme."""
        command = AdHoc().hosts("all").module("ping")
        assert command.command_line() == ["ansible", "all", "-m", "ping"]


# --- Tests Playbook ---


class TestPlaybook:
    """Tests pour la commande playbook."""

    def test_nom_du_programme(self):
        """Test du nom du programme."""
        assert Playbook().command_name() == "ansible-playbook"

    def test_extension_yml(self):
        """Test de l'ajout de l'extension .yml."""
        assert Playbook().playbook("test").compile_params() == ["test.yml"]

    def test_variables_json_compact(self):
        """Test de la sérialisation JSON compacte des variables."""
        command = Playbook().playbook("test").variables({"foo": "bar"})
        assert command.compile_params() == [
            "test.yml", "-e", '{"foo":"bar"}',
        ]

    def test_variables_ordre_et_unicode(self):
        """Test de l'ordre d'insertion et des caractères non ASCII."""
        command = Playbook().playbook("p").variables(
            {"b": [1, 2], "a": {"nom": "clé"}}
        )
        assert command.compile_params()[2] == (
            '{"b":[1,2],"a":{"nom":"clé"}}'
        )

    def test_demande_des_mots_de_passe(self):
        """Test des flags --ask-pass et --ask-sudo-pass."""
        command = Playbook().playbook("p").ask_sudo_pass().ask_pass()
        assert command.compile_params() == [
            "p.yml", "--ask-pass", "--ask-sudo-pass",
        ]

    def test_tags_variadiques(self):
        """Test des tags passés en arguments multiples."""
        command = Playbook().playbook("test").tags("onetag", "twotags")
        assert "--tags=onetag,twotags" in command.compile_params()

    def test_tag_unique_non_decoupe(self):
        """Test qu'un tag unique n'est pas découpé en caractères."""
        command = Playbook().playbook("test").tags("deploy")
        assert command.compile_params() == ["test.yml", "--tags=deploy"]

    def test_with_tags_sequence(self):
        """Test des tags passés sous forme de liste."""
        command = (
            Playbook().playbook("test")
            .with_tags(["a", "b"])
            .with_skip_tags(("c",))
        )
        assert command.compile_params() == [
            "test.yml", "--tags=a,b", "--skip-tags=c",
        ]

    def test_with_tags_refuse_une_chaine(self):
        """Test qu'une chaîne seule est refusée."""
        with pytest.raises(TypeError):
            Playbook().with_tags("onetag")
        with pytest.raises(TypeError):
            Playbook().with_skip_tags("onetag")

    def test_tags_vides_omis(self):
        """Test qu'une liste de tags vide ne produit aucun argument."""
        command = Playbook().playbook("test").tags()
        assert command.compile_params() == ["test.yml"]

    def test_ordre_complet(self):
        """Test de l'ordre complet des arguments."""
        command = (
            Playbook().playbook("site")
            .skip_tags("slow")
            .tags("fast")
            .ask_pass()
            .variables({"x": 1})
            .user("deploy")
            .as_sudo()
        )
        assert command.compile_params() == [
            "site.yml", "-e", '{"x":1}', "--ask-pass",
            "--tags=fast", "--skip-tags=slow",
            "-u", "deploy", "-s",
        ]

    def test_validate_sans_playbook(self):
        """Test du message quand playbook manque."""
        errors = Playbook().tags("x").validate()
        assert len(errors) == 1
        assert "playbook" in errors[0]


# --- Tests exec ---


class TestExec:
    """Tests pour l'orchestration de exec()."""

    @pytest.mark.asyncio
    async def test_exec_delegue_au_runner(self):
        """Test que exec() transmet programme, paramètres et options."""
        runner = _mock_runner()
        options = RunOptions(debug=True)
        callback = MagicMock()
        command = AdHoc(runner=runner).hosts("local").module("ping")

        await command.exec(options, on_output=callback)

        runner.run.assert_awaited_once_with(
            "ansible",
            ["local", "-m", "ping"],
            options,
            on_output=callback,
        )

    @pytest.mark.asyncio
    async def test_exec_options_par_defaut(self):
        """Test que exec() sans options utilise RunOptions()."""
        runner = _mock_runner()
        await Playbook(runner=runner).playbook("test").exec()

        args = runner.run.call_args[0]
        assert args[2] == RunOptions()

    @pytest.mark.asyncio
    async def test_exec_rejete_sans_hosts(self):
        """Test du rejet avec reason quand hosts manque."""
        runner = _mock_runner()
        command = (
            AdHoc(runner=runner).module("shell")
            .with_freeform_arg("echo 'hello'")
        )

        with pytest.raises(ConfigurationError) as exc_info:
            await command.exec()

        assert len(exc_info.value.reason) == 1
        runner.run.assert_not_called()

    @pytest.mark.asyncio
    async def test_exec_rejete_sans_playbook(self):
        """Test du rejet d'un playbook non nommé."""
        runner = _mock_runner()

        with pytest.raises(ConfigurationError) as exc_info:
            await Playbook(runner=runner).exec()

        assert exc_info.value.reason == ['"playbook" doit être spécifié']
        runner.run.assert_not_called()

    @pytest.mark.asyncio
    async def test_exec_propage_les_erreurs_du_runner(self):
        """Test que les erreurs du runner remontent telles quelles."""
        runner = _mock_runner()
        runner.run.side_effect = OSError("boom")

        with pytest.raises(OSError):
            await AdHoc(runner=runner).hosts("a").module("b").exec()
