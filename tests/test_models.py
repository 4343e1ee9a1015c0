from dataclasses import asdict, replace

from gitloom.models import (
    ChangedFile,
    CommitContext,
    CommitModel,
    CommitPlan,
    CommitQuality,
    CommitResult,
    CommitReview,
    CommitSuggestion,
)


def test_result_defaults_are_empty():
    result = CommitResult()
    assert result.diff == ""
    assert result.message == ""
    assert result.paths == []
    assert result.commit == CommitModel()


def test_mutable_defaults_are_not_shared():
    first = CommitResult()
    second = CommitResult()
    first.paths.append("go.mod")
    assert second.paths == []

    review_a = CommitReview()
    review_b = CommitReview()
    review_a.plans.append(CommitPlan())
    assert review_b.plans == []


def test_suggestion_is_not_auto_applicable_by_default():
    suggestion = CommitSuggestion("agrupar commits 1 e 2")
    assert suggestion.auto_applicable is False
    assert suggestion.message == "agrupar commits 1 e 2"


def test_replace_keeps_other_fields():
    model = CommitModel(type="feat", scope="cli", description="adicionar fluxo de commit")
    changed = replace(model, scope="core")
    assert changed.type == "feat"
    assert changed.scope == "core"
    assert changed.description == model.description


def test_asdict_round_trip():
    plan = CommitPlan(
        result=CommitResult(
            diff="d",
            message="feat(cli): x",
            commit=CommitModel(type="feat", scope="cli"),
            paths=["internal/cli/commit.go"],
        ),
        context=CommitContext(files=[ChangedFile("internal/cli/commit.go")], tags=["output"]),
        quality=CommitQuality(score=100, reasons=[]),
    )
    data = asdict(plan)
    rebuilt = CommitPlan(
        result=CommitResult(
            diff=data["result"]["diff"],
            message=data["result"]["message"],
            commit=CommitModel(**data["result"]["commit"]),
            paths=data["result"]["paths"],
        ),
        context=CommitContext(
            files=[ChangedFile(**item) for item in data["context"]["files"]],
            tags=data["context"]["tags"],
        ),
        quality=CommitQuality(**data["quality"]),
        preview=data["preview"],
        semantic_group=data["semantic_group"],
    )
    assert rebuilt == plan