"""Block selection, path checks and strict validation for the commit flow."""

from __future__ import annotations

import re

from gitloom.models import CommitReview

STRICT_MODE_FAILED = "modo estrito falhou"
DEFAULT_MAX_FILES_PER_COMMIT = 4
MIN_STRICT_SCORE = 80

_INTEGER = re.compile(r"[+-]?[0-9]+")


class SelectionError(ValueError):
    """An --apply selection could not be parsed or is out of range."""


class StrictModeError(Exception):
    """A planned commit does not meet the strict-mode rules."""


def _quote(token: str) -> str:
    escaped = token.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _to_int(text: str, token: str) -> int:
    text = text.strip()
    if not _INTEGER.fullmatch(text):
        raise SelectionError(f"--apply invalido: {_quote(token)}")
    return int(text)


def parse_apply_selection(total: int, raw: str) -> set[int]:
    """Parse a selection such as '1,3-4' into 1-based block numbers."""
    selection: set[int] = set()
    for part in raw.strip().split(","):
        token = part.strip()
        if not token:
            continue

        if "-" in token:
            start_text, end_text = token.split("-", 1)
            start = _to_int(start_text, token)
            end = _to_int(end_text, token)
            if start <= 0 or end <= 0 or start > end or end > total:
                raise SelectionError(f"--apply fora do intervalo: {_quote(token)}")
            selection.update(range(start, end + 1))
            continue

        index = _to_int(token, token)
        if index <= 0 or index > total:
            raise SelectionError(f"--apply fora do intervalo: {_quote(token)}")
        selection.add(index)
    return selection


def unique_paths(paths: list[str]) -> list[str]:
    """Drop empty and repeated paths, keeping first occurrences in order."""
    return list(dict.fromkeys(path for path in paths if path))


def has_partially_staged_files(staged_paths: list[str], changed_paths: list[str]) -> bool:
    """Return True when a path is both staged and changed in the working tree."""
    staged = set(staged_paths)
    return any(path in staged for path in changed_paths)


def build_working_tree_status(staged_paths: list[str] | None, changed_paths: list[str] | None) -> str:
    """Describe what remains in the stage and working tree."""
    has_staged = bool(staged_paths)
    has_changed = bool(changed_paths)
    if not has_staged and not has_changed:
        return "working tree limpa"
    if has_staged and has_changed:
        return "restam mudancas staged e unstaged"
    if has_staged:
        return "restam mudancas staged"
    return "restam mudancas unstaged"


def validate_strict_review(review: CommitReview, max_files_per_commit: int) -> None:
    """Raise StrictModeError for a plan scoring under 80 or holding too many files."""
    if max_files_per_commit <= 0:
        max_files_per_commit = DEFAULT_MAX_FILES_PER_COMMIT
    for plan in review.plans:
        if plan.quality.score < MIN_STRICT_SCORE or len(plan.result.paths) > max_files_per_commit:
            raise StrictModeError(f"{STRICT_MODE_FAILED}: {plan.result.message.strip()}")