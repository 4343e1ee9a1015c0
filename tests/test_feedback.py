import pytest

from gitloom.feedback import (
    CommitFeedback,
    build_commit_feedback,
    is_generic_description,
    is_generic_scope,
    scope_candidates_from_path,
    scope_candidates_from_tag,
)
from gitloom.models import (
    ChangedFile,
    CommitContext,
    CommitModel,
    CommitPlan,
    CommitQuality,
    CommitResult,
)


def make_plan(scope="", description="", reasons=(), paths=(), tags=()):
    return CommitPlan(
        result=CommitResult(
            commit=CommitModel(type="feat", scope=scope, description=description),
            paths=list(paths),
        ),
        context=CommitContext(
            files=[ChangedFile(path=path) for path in paths],
            tags=list(tags),
        ),
        quality=CommitQuality(score=90, reasons=list(reasons)),
    )


def test_missing_scope_and_description_are_highlighted():
    feedback = build_commit_feedback(make_plan())
    assert feedback.highlights == ["escopo ausente", "descricao ausente"]


def test_generic_scope_and_description_are_highlighted():
    feedback = build_commit_feedback(make_plan(scope="cli", description="Atualizar CLI"))
    assert feedback.highlights == ["escopo generico: cli", "descricao generica"]


def test_quality_reasons_are_appended_without_duplicates():
    feedback = build_commit_feedback(
        make_plan(
            scope="planner",
            description="dividir arquivos por area",
            reasons=["escopo ausente", "escopo ausente"],
        )
    )
    assert feedback.highlights == ["escopo ausente"]


@pytest.mark.parametrize("scope", ["", "core", "APP", " cli ", "gitignore"])
def test_generic_scopes(scope):
    assert is_generic_scope(scope) is True


def test_specific_scope_is_not_generic():
    assert is_generic_scope("planner") is False


def test_generic_description_ignores_case_and_spaces():
    assert is_generic_description("  Refinar Commit ") is True
    assert is_generic_description("adicionar fluxo de commit") is False


def test_path_candidates_for_gitignore():
    assert scope_candidates_from_path(".gitignore") == ["config", "repo", "tooling"]


def test_path_candidates_for_module_file():
    candidates = scope_candidates_from_path("go.mod")
    assert candidates[:3] == ["deps", "build", "tooling"]


def test_path_candidates_skip_known_directories_and_mark_tests():
    candidates = scope_candidates_from_path("internal/cli/commit_test.go")
    assert "internal" not in candidates
    assert "cli" not in candidates
    assert candidates[0] == "test"


def test_path_candidates_are_unique_and_lowercase():
    candidates = scope_candidates_from_path("Docs/docs/README.md")
    assert candidates == [value.lower() for value in candidates]
    assert len(candidates) == len(set(candidates))
    assert "readme" not in candidates


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("config", ["config"]),
        ("prompt", ["ux"]),
        ("output", ["ux", "output"]),
        ("UI", ["ux", "output"]),
        ("suggest", ["semantic"]),
        ("strict", ["quality"]),
        ("score", ["quality"]),
        ("build", ["build"]),
        ("test", ["test"]),
        ("unknown", []),
    ],
)
def test_tag_candidates(tag, expected):
    assert scope_candidates_from_tag(tag) == expected


def test_suggestions_fall_back_to_tags_when_paths_give_nothing():
    feedback = build_commit_feedback(
        make_plan(scope="commit", paths=["internal/cli/commit.go"], tags=["strict", "prompt"])
    )
    assert feedback.suggestions == ["quality", "ux"]


def test_suggestions_from_paths_ignore_tags():
    feedback = build_commit_feedback(
        make_plan(scope="cli", paths=["internal/cli/config.go"], tags=["prompt"])
    )
    assert feedback.suggestions == ["config"]


def test_suggestions_are_sorted_and_capped():
    paths = [
        "pkg/zeta/alpha.go",
        "pkg/beta/gamma.go",
        "tools/delta/epsilon.go",
    ]
    feedback = build_commit_feedback(make_plan(scope="x", paths=paths))
    assert len(feedback.suggestions) == 3
    assert feedback.suggestions == sorted(feedback.suggestions)


def test_feedback_defaults_are_empty():
    feedback = CommitFeedback()
    assert feedback.highlights == [] and feedback.suggestions == []