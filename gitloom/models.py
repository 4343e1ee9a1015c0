"""Data types shared by the commit planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ChangedFile:
    """A file touched by a diff."""

    path: str
    status: str = ""


@dataclass
class CommitModel:
    """The parts of a conventional commit message."""

    type: str = ""
    scope: str = ""
    intent: str = ""
    description: str = ""
    body: str = ""


@dataclass
class CommitResult:
    """A generated commit: its diff, message, model and paths."""

    diff: str = ""
    message: str = ""
    commit: CommitModel = field(default_factory=CommitModel)
    paths: list[str] = field(default_factory=list)


@dataclass
class CommitQuality:
    """A quality score for a planned commit and the reasons behind it."""

    score: int = 0
    reasons: list[str] = field(default_factory=list)


@dataclass
class CommitContext:
    """What a diff touches: its files and semantic tags."""

    files: list[ChangedFile] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass
class CommitPlan:
    """One planned commit with its analysis."""

    result: CommitResult = field(default_factory=CommitResult)
    context: CommitContext = field(default_factory=CommitContext)
    quality: CommitQuality = field(default_factory=CommitQuality)
    preview: dict[str, Any] = field(default_factory=dict)
    semantic_group: str = ""


@dataclass
class CommitSuggestion:
    """An improvement suggested for a review."""

    message: str
    auto_applicable: bool = False


@dataclass
class CommitReview:
    """A full plan of commits and the suggestions for it."""

    plans: list[CommitPlan] = field(default_factory=list)
    suggestions: list[CommitSuggestion] = field(default_factory=list)