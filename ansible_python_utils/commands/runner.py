"""Exécuteur asynchrone des programmes Ansible via asyncio.

Ce module fournit AsyncProcessRunner, une implémentation concrète
de ProcessRunner qui lance un processus par invocation et attend
sa fin sur la boucle d'événements de l'appelant.

Les commandes exécutées par root sont distinguées visuellement des
commandes utilisateur :
    - Dans les logs fichier : préfixe textuel [ROOT] ou [user]
    - En console (optionnel) : codes ANSI couleur + gras via
      AnsiCommandFormatter

Example :
    Exécution avec récupération de la sortie en direct :

        import asyncio
        from ansible_python_utils.commands import (
            AsyncProcessRunner,
            RunOptions,
        )

        def on_output(stream, chunk):
            print(stream, chunk.decode())

        runner = AsyncProcessRunner(logger=logger)
        asyncio.run(
            runner.run(
                "ansible",
                ["local", "-m", "ping"],
                RunOptions(debug=True),
                on_output=on_output,
            )
        )
"""

import asyncio
import contextlib
import os
from typing import Dict, List, Optional

from ansible_python_utils.commands.base import (
    OutputCallback,
    ProcessRunner,
    RunOptions,
)
from ansible_python_utils.commands.formatter import (
    CommandFormatter,
    PlainCommandFormatter,
)
from ansible_python_utils.errors.exceptions import (
    ProcessExitError,
    ProcessLaunchError,
)
from ansible_python_utils.logging.base import Logger

CHUNK_SIZE = 4096


class AsyncProcessRunner(ProcessRunner):
    """Exécuteur de programmes externes via asyncio.

    Le coroutine run() reste en attente pendant toute la durée de
    vie du processus. Aucun timeout, aucune relance, aucune API
    d'annulation : le processus s'exécute jusqu'à sa fin.

    Attributes:
        _logger: Logger optionnel pour les logs fichier.
        _dry_run: Mode simulation.
        _is_root: True si le processus courant est root (uid 0).
        _plain: Formateur texte brut pour les logs fichier.
        _console_formatter: Formateur optionnel pour la console.
    """

    def __init__(
        self,
        logger: Optional[Logger] = None,
        dry_run: bool = False,
        console_formatter: Optional[CommandFormatter] = None,
    ) -> None:
        """Initialise l'exécuteur.

        Args:
            logger: Logger optionnel pour les sorties fichier.
            dry_run: Si True, logue la commande sans l'exécuter.
            console_formatter: Formateur optionnel pour la console
                (ex: AnsiCommandFormatter()).
        """
        self._logger = logger
        self._dry_run = dry_run
        self._is_root: bool = os.getuid() == 0
        self._plain = PlainCommandFormatter()
        self._console_formatter = console_formatter

    @staticmethod
    def build_env(options: RunOptions) -> Dict[str, str]:
        """Construit l'environnement transmis au processus.

        Seul PATH est hérité du processus hôte. PYTHONUNBUFFERED
        vaut "1" sauf en mode buffered où il vaut "". Les variables
        de options.env sont prioritaires.

        Args:
            options: Options d'exécution.

        Returns:
            Dictionnaire d'environnement complet.
        """
        env = {
            "PATH": os.environ.get("PATH", os.defpath),
            "PYTHONUNBUFFERED": "" if options.buffered else "1",
        }
        if options.env:
            env.update(options.env)
        return env

    def _log(self, message: str) -> None:
        if self._logger:
            self._logger.log_info(message)

    def _log_error(self, message: str) -> None:
        if self._logger:
            self._logger.log_error(message)

    def _console(self, message: str) -> None:
        if self._console_formatter:
            print(message)

    def _emit(
        self,
        stream: str,
        chunk: bytes,
        on_output: Optional[OutputCallback],
    ) -> None:
        """Transmet un bloc de sortie au callback ou au logger.

        Args:
            stream: Nom du flux ('stdout' ou 'stderr').
            chunk: Données brutes reçues.
            on_output: Callback optionnel de l'appelant.
        """
        if on_output is not None:
            on_output(stream, chunk)
        elif self._logger:
            self._logger.log_debug(
                self._plain.format_chunk(stream, chunk)
            )
        if self._console_formatter:
            self._console(
                self._console_formatter.format_chunk(stream, chunk)
            )

    async def _pump(
        self,
        reader: asyncio.StreamReader,
        stream: str,
        debug: bool,
        on_output: Optional[OutputCallback],
    ) -> None:
        """Lit un flux jusqu'à EOF.

        Le flux est toujours vidé pour ne pas bloquer le processus ;
        les blocs ne sont transmis qu'en mode debug.
        """
        while True:
            chunk = await reader.read(CHUNK_SIZE)
            if not chunk:
                break
            if debug:
                self._emit(stream, chunk, on_output)

    async def _drain(
        self,
        proc: asyncio.subprocess.Process,
        debug: bool,
        on_output: Optional[OutputCallback],
    ) -> None:
        """Vide stdout et stderr en parallèle jusqu'à EOF.

        Si la transmission d'un bloc lève une exception, la lecture
        restante est annulée, le processus est tué puis attendu avant
        que l'exception ne remonte à l'appelant.
        """
        pumps = [
            asyncio.ensure_future(
                self._pump(proc.stdout, "stdout", debug, on_output)
            ),
            asyncio.ensure_future(
                self._pump(proc.stderr, "stderr", debug, on_output)
            ),
        ]
        try:
            await asyncio.gather(*pumps)
        except BaseException:
            for pump in pumps:
                pump.cancel()
            await asyncio.gather(*pumps, return_exceptions=True)
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
            await proc.wait()
            raise

    async def run(
        self,
        program: str,
        arguments: List[str],
        options: Optional[RunOptions] = None,
        on_output: Optional[OutputCallback] = None,
    ) -> None:
        """Lance le programme et attend sa fin.

        En mode détaché, stdin, stdout et stderr sont redirigés vers
        /dev/null et aucun bloc n'est transmis, même en debug. Sinon
        stdout et stderr sont lus jusqu'à EOF avant d'attendre le
        code de retour : aucun bloc n'arrive après la fin.

        Args:
            program: Nom du programme à exécuter.
            arguments: Arguments ordonnés du programme.
            options: Options d'exécution (défaut: RunOptions()).
            on_output: Callback recevant (nom_du_flux, bloc).

        Raises:
            ProcessLaunchError: Si le programme ne peut pas démarrer.
            ProcessExitError: Si le code de retour est non nul.
        """
        options = options or RunOptions()
        command = [program] + list(arguments)

        if self._dry_run:
            self._log(self._plain.format_dry_run(command, self._is_root))
            if self._console_formatter:
                self._console(
                    self._console_formatter.format_dry_run(
                        command, self._is_root
                    )
                )
            return

        self._log(self._plain.format_start(command, self._is_root))
        if self._console_formatter:
            self._console(
                self._console_formatter.format_start(
                    command, self._is_root
                )
            )

        if options.detached:
            stdin = stdout = stderr = asyncio.subprocess.DEVNULL
        else:
            stdin = None
            stdout = stderr = asyncio.subprocess.PIPE

        try:
            proc = await asyncio.create_subprocess_exec(
                program,
                *arguments,
                stdin=stdin,
                stdout=stdout,
                stderr=stderr,
                env=self.build_env(options),
                cwd=options.cwd,
                start_new_session=options.detached,
            )
        except OSError as e:
            self._log_error(f"Erreur système : {e}")
            raise ProcessLaunchError(program, str(e)) from e

        if not options.detached:
            await self._drain(proc, options.debug, on_output)
        code = await proc.wait()

        if options.debug:
            self._log(self._plain.format_exit(code, self._is_root))
            if self._console_formatter:
                self._console(
                    self._console_formatter.format_exit(
                        code, self._is_root
                    )
                )

        if code != 0:
            self._log_error(f"Code retour {code} : {' '.join(command)}")
            raise ProcessExitError(code, command)
