"""Summaries and JSON output for a reviewed commit plan."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any

from gitloom.feedback import build_commit_feedback
from gitloom.models import CommitPlan, CommitReview, CommitSuggestion

_GO_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class ReviewSummary:
    """Totals over all plans of a review."""

    planned_commits: int
    average_quality: int
    changed_files: int
    suggestion_count: int


def _dump(value: Any) -> str:
    text = json.dumps(value, indent=2, ensure_ascii=False)
    for character, escaped in _GO_ESCAPES.items():
        text = text.replace(character, escaped)
    return text


def _truncating_divide(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def build_review_summary(review: CommitReview) -> ReviewSummary | None:
    """Summarize a review, or return None when it holds no plans."""
    if not review.plans:
        return None
    total_score = sum(plan.quality.score for plan in review.plans)
    total_files = sum(len(plan.result.paths) for plan in review.plans)
    return ReviewSummary(
        planned_commits=len(review.plans),
        average_quality=_truncating_divide(total_score, len(review.plans)),
        changed_files=total_files,
        suggestion_count=len(review.suggestions),
    )


def _suggestion_output(suggestion: CommitSuggestion) -> dict[str, Any]:
    return {"Message": suggestion.message, "AutoApplicable": suggestion.auto_applicable}


def _plan_output(index: int, total: int, plan: CommitPlan) -> dict[str, Any]:
    output: dict[str, Any] = {
        "message": plan.result.message.strip(),
        "type": plan.result.commit.type,
    }
    scope = plan.result.commit.scope.strip()
    if scope:
        output["scope"] = scope
    description = plan.result.commit.description.strip()
    if description:
        output["description"] = description
    feedback = build_commit_feedback(plan)
    output["feedback"] = {
        "Highlights": list(feedback.highlights),
        "Suggestions": list(feedback.suggestions),
    }
    output["paths"] = list(plan.result.paths)
    output["quality"] = {
        "score": plan.quality.score,
        "reasons": list(plan.quality.reasons),
    }
    output["preview"] = dict(plan.preview)
    output["index"] = index
    output["total"] = total
    return output


def build_plan_outputs(review: CommitReview) -> list[dict[str, Any]]:
    """Describe each plan as a JSON-ready mapping, numbered from 1."""
    total = len(review.plans)
    return [_plan_output(index, total, plan) for index, plan in enumerate(review.plans, start=1)]


def build_json_review_output(review: CommitReview) -> str:
    """Render a review as indented JSON."""
    output: dict[str, Any] = {"plans": build_plan_outputs(review)}
    summary = build_review_summary(review)
    if summary is not None:
        output["summary"] = asdict(summary)
    if review.suggestions:
        output["suggestions"] = [_suggestion_output(item) for item in review.suggestions]
    return _dump(output)


def filter_paths_by_focus(paths: list[str], focus: str) -> list[str]:
    """Keep paths containing the focus term, ignoring case; all paths when focus is blank."""
    needle = focus.strip().lower()
    if not needle:
        return list(paths)
    return [path for path in paths if needle in path.lower()]