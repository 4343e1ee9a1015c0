"""Rules that split and group changed paths into commit-sized blocks."""

from __future__ import annotations

import posixpath
from collections import Counter

from gitloom.models import CommitPlan

_DEPENDENCY_FILES = frozenset(
    {
        "go.mod",
        "go.sum",
        "package.json",
        "package-lock.json",
        "pnpm-lock.yaml",
        "yarn.lock",
        "cargo.toml",
        "cargo.lock",
        "composer.json",
        "composer.lock",
        "requirements.txt",
        "poetry.lock",
        "pyproject.toml",
    }
)

_SUPPORT_TYPES = frozenset({"test", "docs", "chore"})


def _dirname(path: str) -> str:
    directory = posixpath.dirname(path)
    return posixpath.normpath(directory) if directory else "."


def _extension(name: str) -> str:
    index = name.rfind(".")
    return name[index:] if index >= 0 else ""


def is_dependency_path(path: str) -> bool:
    """Return True for dependency manifests and lock files."""
    return posixpath.basename(path.strip()).lower() in _DEPENDENCY_FILES


def planning_groups(paths: list[str]) -> list[list[str]]:
    """Split paths into sorted dependency and regular groups, dropping empty ones."""
    dependencies = sorted(path for path in paths if is_dependency_path(path))
    regular = sorted(path for path in paths if not is_dependency_path(path))
    return [group for group in (dependencies, regular) if group]


def planning_area(path: str) -> str:
    """Return the top two directory levels of a path, or 'root'."""
    trimmed = path.strip()
    if not trimmed:
        return ""
    directory = _dirname(trimmed)
    if directory in (".", ""):
        return "root"
    segments = directory.split("/")
    return "/".join(segments[:2])


def chunk_paths(paths: list[str], chunk_size: int) -> list[list[str]]:
    """Split paths into chunks of at most chunk_size, keeping areas cohesive."""
    if not paths:
        return []
    if chunk_size <= 1:
        return [list(paths)]

    chunks: list[list[str]] = []
    current: list[str] = []
    for path in paths:
        if not current:
            current.append(path)
            continue
        # Avoid forcing a mixed-area last file into an already coherent chunk.
        if len(current) >= chunk_size - 1 and planning_area(current[0]) != planning_area(path):
            chunks.append(current)
            current = [path]
            continue
        current.append(path)
        if len(current) == chunk_size:
            chunks.append(current)
            current = []
    if current:
        chunks.append(current)

    return rebalance_single_file_tail(chunks)


def rebalance_single_file_tail(chunks: list[list[str]]) -> list[list[str]]:
    """Move one file into a lone trailing file's chunk when both share an area."""
    if len(chunks) < 2:
        return [list(chunk) for chunk in chunks]
    *head, previous, last = [list(chunk) for chunk in chunks]
    if len(last) != 1 or len(previous) <= 2:
        return [*head, previous, last]
    if planning_area(previous[0]) != planning_area(last[0]):
        return [*head, previous, last]
    moved = previous.pop()
    return [*head, previous, [moved, *last]]


def normalize_area_path(path: str) -> str:
    """Reduce a path to the area it belongs to, pairing code with its tests."""
    directory = _dirname(path)
    base = posixpath.basename(path)
    name = base[: len(base) - len(_extension(base))].removesuffix("_test")

    if directory in (".", ""):
        return name
    if path.startswith("internal/ui/"):
        return "internal/ui"
    if path.startswith("internal/cli/"):
        return "internal/cli/" + name
    if path.startswith("internal/shared/"):
        return "internal/shared"
    if path.startswith("internal/semantic/"):
        return "internal/semantic"
    if path.startswith("internal/domain/commit/"):
        return "internal/domain/commit/" + name
    return directory + "/" + name


def dominant_area(paths: list[str]) -> str:
    """Return the most common area among paths, the smallest name on ties."""
    if not paths:
        return ""
    votes = Counter(normalize_area_path(path) for path in paths)
    area, _ = min(votes.items(), key=lambda item: (-item[1], item[0]))
    return area


def is_support_plan(plan: CommitPlan) -> bool:
    """Return True for single-file test, docs or chore plans."""
    return len(plan.result.paths) == 1 and plan.result.commit.type in _SUPPORT_TYPES


def same_plan_area(left: CommitPlan, right: CommitPlan) -> bool:
    """Return True when both plans share a non-empty dominant area."""
    area = dominant_area(left.result.paths)
    return area != "" and area == dominant_area(right.result.paths)


def should_attach_support_plan(
    current_group: list[str],
    support: CommitPlan,
    primary: CommitPlan,
    max_files_per_commit: int,
) -> bool:
    """Decide whether a support plan can join the group anchored by primary."""
    if len(current_group) + len(support.result.paths) > max_files_per_commit:
        return False
    if not is_support_plan(support):
        return False
    # A support anchor only accepts plans that are not themselves support plans,
    # which can never happen here; the check mirrors the grouping rule.
    if is_support_plan(primary) and is_support_plan(support):
        return False
    return same_plan_area(primary, support)


def first_non_empty(*args: str) -> str:
    """Return the first argument that is not blank, stripped."""
    for value in args:
        if value.strip():
            return value.strip()
    return ""


def is_weak_description(description: str, scope: str) -> bool:
    """Return True for descriptions that only restate the scope."""
    normalized = description.strip().lower()
    scope_name = scope.strip().lower()
    if not normalized:
        return True

    prefixes = (
        "corrigir ",
        "refinar ",
        "atualizar ",
        "ajustar ",
        "adicionar ",
        "cobrir ",
        "ajustar testes de ",
        "testes de ",
        "ajustar testes de testes de ",
    )
    if normalized in {(prefix + scope_name).strip() for prefix in prefixes}:
        return True
    return "testes de testes de" in normalized


def description_specificity(description: str) -> int:
    """Count the words of at least four bytes in a description."""
    return sum(1 for token in description.strip().lower().split() if len(token.encode()) >= 4)