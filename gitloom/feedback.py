"""Highlights and scope suggestions shown next to a planned commit."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field

from gitloom.models import CommitPlan

_GENERIC_SCOPES = frozenset(
    {"", "core", "app", "cli", "ui", "repo", "project", "misc", "general", "gitignore"}
)

_GENERIC_DESCRIPTIONS = frozenset(
    {
        "atualizar projeto",
        "ajustar projeto",
        "atualizar repositorio",
        "ajustar repositorio",
        "atualizar cli",
        "ajustar cli",
        "atualizar core",
        "ajustar core",
        "refinar core",
        "refinar app",
        "refinar cli",
        "refinar ui",
        "refinar config",
        "refinar commit",
    }
)

_SKIPPED_DIRECTORIES = frozenset(
    {"", ".", "internal", "cmd", "ui", "cli", "domain", "semantic", "shared", "app"}
)

_TAG_SCOPES: dict[str, list[str]] = {
    "config": ["config"],
    "prompt": ["ux"],
    "output": ["ux", "output"],
    "ui": ["ux", "output"],
    "suggest": ["semantic"],
    "strict": ["quality"],
    "score": ["quality"],
    "build": ["build"],
    "test": ["test"],
}

_MAX_SUGGESTIONS = 3


@dataclass
class CommitFeedback:
    """Notes on weak spots of a commit and better scopes to consider."""

    highlights: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def build_commit_feedback(plan: CommitPlan) -> CommitFeedback:
    """Collect highlights and scope suggestions for a planned commit."""
    return CommitFeedback(
        highlights=_build_highlights(plan),
        suggestions=_build_suggestions(plan),
    )


def _build_highlights(plan: CommitPlan) -> list[str]:
    highlights: list[str] = []
    scope = plan.result.commit.scope.strip()
    if not scope:
        highlights.append("escopo ausente")
    elif is_generic_scope(scope):
        highlights.append("escopo generico: " + scope)

    description = plan.result.commit.description.lower().strip()
    if not description:
        highlights.append("descricao ausente")
    elif is_generic_description(description):
        highlights.append("descricao generica")

    for reason in plan.quality.reasons:
        if reason not in highlights:
            highlights.append(reason)
    return highlights


def _build_suggestions(plan: CommitPlan) -> list[str]:
    current_scope = plan.result.commit.scope.strip().lower()
    candidates: set[str] = set()

    for changed in plan.context.files:
        for suggestion in scope_candidates_from_path(changed.path):
            if suggestion and suggestion != current_scope:
                candidates.add(suggestion)

    if not candidates:
        for tag in plan.context.tags:
            for suggestion in scope_candidates_from_tag(tag):
                if suggestion and suggestion != current_scope:
                    candidates.add(suggestion)

    return sorted(candidates)[:_MAX_SUGGESTIONS]


def is_generic_scope(scope: str) -> bool:
    """Return True for scopes too broad to say what changed."""
    return scope.strip().lower() in _GENERIC_SCOPES


def is_generic_description(description: str) -> bool:
    """Return True for descriptions that say nothing specific."""
    return description.strip().lower() in _GENERIC_DESCRIPTIONS


def _base_name(path: str) -> str:
    trimmed = path.rstrip("/")
    if not trimmed:
        return "/" if path else "."
    return trimmed.rsplit("/", 1)[-1]


def _directory(path: str) -> str:
    directory = posixpath.dirname(path)
    return posixpath.normpath(directory) if directory else "."


def scope_candidates_from_path(path: str) -> list[str]:
    """Derive possible scopes from the directories and name of a path."""
    name = _base_name(path)
    dot = name.rfind(".")
    stem = name[:dot] if dot >= 0 else name
    stem = stem.lower().removeprefix(".")

    candidates = [
        part.strip()
        for part in _directory(path).lower().split("/")
        if part.strip() not in _SKIPPED_DIRECTORIES
    ]

    if "gitignore" in path:
        candidates += ["config", "repo", "tooling"]
    elif "go.mod" in path or "go.sum" in path or "makefile" in path:
        candidates += ["deps", "build", "tooling"]
    elif path.endswith("_test.go"):
        candidates.append("test")

    if stem and stem not in ("readme", "main"):
        candidates.append(stem.replace("_", "-"))

    return _unique(candidates)


def scope_candidates_from_tag(tag: str) -> list[str]:
    """Map a semantic tag to the scopes it suggests."""
    return list(_TAG_SCOPES.get(tag.strip().lower(), []))


def _unique(values: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        normalized = value.strip().lower()
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result