"""Command line entry point for gitloom."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from typing import Callable

from gitloom.doctor import build_doctor_report
from gitloom.update import UpdateError, UpdateInfo, fetch_latest_version, needs_update, perform_update

VERSION = "dev"
GIT_COMMIT = "unknown"
BUILD_DATE = "unknown"

RELEASE_URL_ENV = "GITLOOM_RELEASE_URL"
INSTALL_SCRIPT_URL_ENV = "GITLOOM_INSTALL_SCRIPT_URL"

_COMMANDS = (
    ("doctor", "valida se o repositorio esta pronto para o gitloom"),
    ("help", "mostra ajuda sobre um commando"),
    ("update", "atualiza o gitloom para a versao mais recente"),
    ("version", "mostra a versao do gitloom"),
)


def root_help_text() -> str:
    """Return the long description of the root command."""
    return (
        "Git Loom automatiza commits semanticos com revisao antes de executar.\n"
        "\n"
        "O CLI hoje e focado no fluxo de commit, com agrupamento de arquivos, analise semantica,\n"
        "score de qualidade, sugestoes de melhoria e confirmacao interativa."
    )


def root_examples() -> str:
    """Return the usage examples of the root command."""
    return "\n".join(
        [
            "  gitloom help",
            "  gitloom help commit",
            "  gitloom analyze --json",
            "  gitloom config init",
            "  gitloom doctor",
            "  gitloom version",
            "  gitloom commit",
            "  gitloom commit --dry-run --preview",
            "  gitloom commit --yes --verbose",
        ]
    )


def commit_help_text() -> str:
    """Return the long description of the commit command."""
    return (
        "Planeja e cria commits semanticos a partir do estado atual do repositorio.\n"
        "\n"
        "O commando:\n"
        "  - le arquivos staged\n"
        "  - detecta arquivos em changes e oferece adicionar ao stage\n"
        "  - agrupa mudancas relacionadas em blocos pequenos\n"
        "  - gera mensagem semantica em Portuguese\n"
        "  - mostra score, detalhes, analise e sugestoes antes de commitar\n"
        "  - confirma cada bloco, ou executa direto com --yes"
    )


def commit_examples() -> str:
    """Return the usage examples of the commit command."""
    return "\n".join(
        [
            "  git add .",
            "  gitloom commit",
            "",
            "  gitloom commit --dry-run",
            "  gitloom commit --preview",
            "  gitloom commit --verbose",
            "  gitloom commit --json --dry-run",
            "  gitloom commit --strict",
            "  gitloom commit --yes",
            "",
            "Config:",
            "  .gitloom.yaml",
            "",
            "  commit:",
            "    scope: core",
            "",
            "  cli:",
            "    auto_confirm: false",
        ]
    )


def version_text(version: str, git_commit: str, build_date: str) -> str:
    """Return the text printed by the version command."""
    return f"gitloom {version}\ncommit: {git_commit}\nbuild date: {build_date}\n"


def _root_help() -> str:
    commands = "\n".join(f"  {name:<11} {short}" for name, short in _COMMANDS)
    return (
        f"{root_help_text()}\n"
        "\n"
        "Uso:\n"
        "  gitloom [command]\n"
        "\n"
        "Commands:\n"
        f"{commands}\n"
        "\n"
        "Flags:\n"
        "  -h, --help   ajuda para gitloom\n"
        "\n"
        "Exemplos:\n"
        f"{root_examples()}\n"
    )


def _commit_help() -> str:
    return f"{commit_help_text()}\n\nExemplos:\n{commit_examples()}\n"


class _GitRepository:
    """Answers the doctor's questions by running git."""

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(["git", *args], capture_output=True, text=True, check=False)

    def _lines(self, *args: str) -> list[str]:
        completed = self._run(*args)
        if completed.returncode != 0:
            raise subprocess.CalledProcessError(
                completed.returncode, ["git", *args], completed.stdout, completed.stderr
            )
        return [line.strip() for line in completed.stdout.splitlines() if line.strip()]

    def is_repository(self) -> bool:
        try:
            completed = self._run("rev-parse", "--is-inside-work-tree")
        except FileNotFoundError:
            return False
        return completed.returncode == 0 and completed.stdout.strip() == "true"

    def list_staged_files(self) -> list[str]:
        return self._lines("diff", "--cached", "--name-only")

    def list_changed_files(self) -> list[str]:
        changed = self._lines("diff", "--name-only")
        untracked = self._lines("ls-files", "--others", "--exclude-standard")
        return list(dict.fromkeys(changed + untracked))


def _run_version(args: argparse.Namespace) -> int:
    print(version_text(VERSION, GIT_COMMIT, BUILD_DATE), end="")
    return 0


def _run_doctor(args: argparse.Namespace) -> int:
    report = build_doctor_report(_GitRepository())
    print(report.to_json() if args.json else report.render())
    return 0


def _run_update(args: argparse.Namespace) -> int:
    current = VERSION.removeprefix("v")
    try:
        if not args.release_url:
            raise UpdateError(f"url de release nao configurada; use --release-url ou {RELEASE_URL_ENV}")
        latest = fetch_latest_version(args.release_url)
    except UpdateError as error:
        if args.json:
            print(f'{{"error":"falha ao buscar versao: {error}"}}', file=sys.stderr)
            return 0
        raise UpdateError(f"falha ao buscar versao mais recente: {error}") from error

    pending = needs_update(current, latest, args.force)
    if args.check or not pending:
        info = UpdateInfo(current=current, latest=latest, updated=not pending)
        if args.json:
            print(info.to_json())
            return 0
        if info.updated:
            print(f"gitloom {current} ja esta atualizado")
            return 0
        print(f"Atualizacao disponivel: {current} -> {latest}")
        print("Atualizando...")

    target = args.target_version or latest
    try:
        if not args.script_url:
            raise UpdateError(
                f"url do script nao configurada; use --script-url ou {INSTALL_SCRIPT_URL_ENV}"
            )
        perform_update(args.script_url, target)
    except UpdateError as error:
        if args.json:
            print(f'{{"error":"falha ao atualizar: {error}"}}', file=sys.stderr)
            return 0
        raise UpdateError(f"falha ao atualizar: {error}") from error

    if args.json:
        print(UpdateInfo(current=current, latest=target, updated=True).to_json())
        return 0
    print(f"Atualizado para versao {target}")
    return 0


def _run_help(args: argparse.Namespace) -> int:
    topic = args.topic
    if topic is None:
        print(_root_help(), end="")
    elif topic == "commit":
        print(_commit_help(), end="")
    elif topic in args.topics:
        print(args.topics[topic].format_help(), end="")
    else:
        print(f'Unknown help topic "{topic}".')
        print(_root_help(), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every subcommand."""
    parser = argparse.ArgumentParser(prog="gitloom", add_help=False)
    parser.add_argument("-h", "--help", action="store_true", dest="show_help")
    commands = parser.add_subparsers(dest="command", title="Commands", metavar="<command>")

    version = commands.add_parser("version", aliases=["ver"], help=_COMMANDS[3][1])
    version.set_defaults(handler=_run_version)

    doctor = commands.add_parser(
        "doctor",
        help=_COMMANDS[0][1],
        description="Valida se o repositorio e o ambiente atual estao prontos para usar o gitloom.",
    )
    doctor.add_argument("--json", action="store_true", help="saida em formato JSON")
    doctor.set_defaults(handler=_run_doctor)

    update = commands.add_parser(
        "update",
        help=_COMMANDS[2][1],
        description="Atualiza o gitloom para a versao mais recente.",
    )
    update.add_argument("--check", action="store_true", help="verifica se ha atualizacao disponivel sem instalar")
    update.add_argument(
        "--force", action="store_true", help="forca a atualizacao mesmo se ja estiver na versao mais recente"
    )
    update.add_argument("--json", action="store_true", help="saida em formato JSON")
    update.add_argument("--version", dest="target_version", default="", help="instalar versao especifica")
    update.add_argument(
        "--release-url",
        default=os.environ.get(RELEASE_URL_ENV, ""),
        help="endereco da descricao da release mais recente",
    )
    update.add_argument(
        "--script-url",
        default=os.environ.get(INSTALL_SCRIPT_URL_ENV, ""),
        help="endereco do script de instalacao",
    )
    update.set_defaults(handler=_run_update)

    help_command = commands.add_parser("help", help=_COMMANDS[1][1])
    help_command.add_argument("topic", nargs="?")
    help_command.set_defaults(handler=_run_help, topics=commands.choices)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)
    handler: Callable[[argparse.Namespace], int] | None = getattr(args, "handler", None)
    if args.show_help or handler is None:
        print(_root_help(), end="")
        return 0
    try:
        return handler(args)
    except (UpdateError, OSError, subprocess.CalledProcessError) as error:
        print(error, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())