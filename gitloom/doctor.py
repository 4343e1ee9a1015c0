"""Readiness checks for the repository and the local configuration."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

CONFIG_FILE = ".gitloom.yaml"

_ICONS = {"ok": "✔", "warn": "⚠", "fail": "✖"}


class Repository(Protocol):
    """The repository queries the doctor needs."""

    def is_repository(self) -> bool: ...

    def list_staged_files(self) -> list[str]: ...

    def list_changed_files(self) -> list[str]: ...


@dataclass
class DoctorCheck:
    """The outcome of one check."""

    name: str
    status: str
    message: str
    details: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "status": self.status, "message": self.message}
        if self.details:
            data["details"] = list(self.details)
        return data


@dataclass
class DoctorReport:
    """All checks with an overall status."""

    status: str
    checks: list[DoctorCheck] = field(default_factory=list)

    def to_json(self) -> str:
        """Render the report as indented JSON."""
        payload = {"status": self.status, "checks": [check.to_dict() for check in self.checks]}
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        for character, escaped in (("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026")):
            text = text.replace(character, escaped)
        return text

    def render(self) -> str:
        """Render the report as text lines."""
        lines = ["◆ doctor"]
        for check in self.checks:
            icon = _ICONS.get(check.status, "•")
            lines.append(f"{icon} {check.name}: {check.message}")
            lines.extend("  - " + detail for detail in check.details)
        lines.append(f"status geral: {self.status}")
        return "\n".join(lines)


def partially_staged_paths(staged_paths: list[str] | None, changed_paths: list[str] | None) -> list[str]:
    """Return changed paths that are also staged, in changed order."""
    staged = set(staged_paths or [])
    return [path for path in changed_paths or [] if path in staged]


def _load_config(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the simple two-level YAML layout of the configuration file."""
    config: dict[str, Any] = {}
    section: dict[str, Any] | None = None
    text = Path(path).read_text(encoding="utf-8")
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].rstrip()
        if not line.strip():
            continue
        if ":" not in line:
            raise ValueError(f"linha {number} invalida: {raw.strip()}")
        key, value = (part.strip() for part in line.split(":", 1))
        value = value.strip("\"'")
        if not line[0].isspace():
            if value:
                config[key] = value
                section = None
            else:
                section = {}
                config[key] = section
            continue
        if section is None:
            raise ValueError(f"linha {number} invalida: {raw.strip()}")
        section[key] = value
    return config


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = config.get(name)
    return value if isinstance(value, Mapping) else {}


def _is_true(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def inspect_config_check(
    path: str | os.PathLike[str] = CONFIG_FILE,
    load: Callable[[str | os.PathLike[str]], Mapping[str, Any]] | None = None,
) -> DoctorCheck:
    """Check that the configuration file exists and loads."""
    loader = load or _load_config
    name = Path(path).name
    try:
        os.stat(path)
    except FileNotFoundError:
        return DoctorCheck(
            name="configuracao",
            status="warn",
            message=f"arquivo {name} nao encontrado; o CLI usara defaults",
        )
    except OSError as error:
        return DoctorCheck(
            name="configuracao",
            status="fail",
            message=f"nao foi possivel inspecionar {name}",
            details=[str(error)],
        )

    try:
        config = loader(path)
    except Exception as error:  # any loader failure is reported as a failed check
        return DoctorCheck(
            name="configuracao",
            status="fail",
            message=f"falha ao carregar {name}",
            details=[str(error)],
        )

    details: list[str] = []
    scope = str(_section(config, "commit").get("scope") or "")
    if scope:
        details.append("scope padrao: " + scope)
    if _is_true(_section(config, "cli").get("auto_confirm", False)):
        details.append("auto_confirm: true")

    message = f"arquivo {name} carregado com sucesso"
    if not details:
        message = f"arquivo {name} presente sem overrides ativos"
    return DoctorCheck(name="configuracao", status="ok", message=message, details=details)


def build_working_tree_check(
    staged_paths: list[str], changed_paths: list[str], partial_paths: list[str]
) -> DoctorCheck:
    """Report staged and unstaged changes."""
    status = "ok"
    message = "working tree pronta para revisao"
    details = [f"staged: {len(staged_paths)}", f"changes: {len(changed_paths)}"]
    if changed_paths:
        status = "warn"
        message = "existem mudancas fora do stage que podem alterar o plano"
    if partial_paths:
        status = "fail"
        message = "existem arquivos parcialmente staged; o fluxo automation nao suporta esse estado"
        details.append("parcialmente staged: " + ", ".join(partial_paths))
    return DoctorCheck(name="working-tree", status=status, message=message, details=details)


def build_planning_check(staged_paths: list[str], partial_paths: list[str]) -> DoctorCheck:
    """Report whether there is something ready to plan."""
    if partial_paths:
        return DoctorCheck(
            name="planejamento",
            status="fail",
            message="corrija arquivos parcialmente staged antes de usar gitloom commit",
        )
    if not staged_paths:
        return DoctorCheck(
            name="planejamento",
            status="warn",
            message="nenhum arquivo staged; rode git add antes de gitloom commit",
        )
    return DoctorCheck(
        name="planejamento",
        status="ok",
        message=f"{len(staged_paths)} arquivo(s) staged prontos para analise",
    )


def summarize_doctor_status(checks: list[DoctorCheck]) -> str:
    """Return 'fail' if any check failed, else 'warn' if any warned, else 'ok'."""
    statuses = {check.status for check in checks}
    if "fail" in statuses:
        return "fail"
    if "warn" in statuses:
        return "warn"
    return "ok"


def build_doctor_report(
    repository: Repository,
    config_check: Callable[[], DoctorCheck] | None = None,
) -> DoctorReport:
    """Run every check against a repository; repository errors propagate."""
    if not repository.is_repository():
        failed = DoctorCheck(
            name="repositorio",
            status="fail",
            message="diretorio atual nao esta dentro de um repositorio git",
        )
        return DoctorReport(status="fail", checks=[failed])

    checks = [DoctorCheck(name="repositorio", status="ok", message="repositorio git detectado")]
    checks.append((config_check or inspect_config_check)())

    staged_paths = list(repository.list_staged_files() or [])
    changed_paths = list(repository.list_changed_files() or [])
    partial_paths = partially_staged_paths(staged_paths, changed_paths)

    checks.append(build_working_tree_check(staged_paths, changed_paths, partial_paths))
    checks.append(build_planning_check(staged_paths, partial_paths))
    return DoctorReport(status=summarize_doctor_status(checks), checks=checks)