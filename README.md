# gitloom

gitloom holds the rules for splitting staged changes into small semantic
commits, the feedback and JSON output for a planned review, and a command
line tool with a repository health check and a self-update command.
Messages and output text are in Portuguese.

## Installation

```
pip install .
```

Python 3.10 or newer is required. There are no runtime dependencies beyond
the standard library. The `doctor` command runs `git`, and `update` runs
`bash`; both must be on your `PATH` for those commands.

## Command line

```
gitloom --help
gitloom version
gitloom doctor
gitloom doctor --json
gitloom help doctor
```

- `gitloom version` (alias `ver`) prints the version, commit and build date.
- `gitloom doctor` checks, in order: that the current directory is inside a
  Git repository, whether `.gitloom.yaml` is present and loads (reporting a
  default `commit.scope` and `cli.auto_confirm: true` when set), the state of
  the stage and working tree, and whether planning can proceed. Files that
  are both staged and changed make the check fail. The overall status is
  `ok`, `warn` or `fail`; `--json` prints the report as JSON.
- `gitloom help [topic]` prints help for the tool or for one command.
- `gitloom update` looks up the latest release and installs it by running
  the install script with `bash`. The release description URL comes from
  `--release-url` or the `GITLOOM_RELEASE_URL` environment variable, and the
  script URL from `--script-url` or `GITLOOM_INSTALL_SCRIPT_URL`; neither
  has a built-in default. `--check` only reports whether a newer version
  exists, `--force` installs even when up to date, `--version` picks the
  version to install and `--json` prints the result as JSON.

## Library

`gitloom.models` holds the dataclasses the rest of the package works on:
`CommitModel`, `CommitResult`, `CommitContext`, `CommitQuality`,
`CommitPlan`, `CommitSuggestion` and `CommitReview`.

`gitloom.planning` splits paths into commit-sized blocks. Dependency
manifests and lock files (`go.mod`, `package.json`, `pyproject.toml`,
`Cargo.lock` and so on) form a group apart from code, and `chunk_paths`
keeps files of the same area together and avoids a lone file in the last
chunk:

```python
from gitloom.planning import chunk_paths, planning_groups

paths = [f"internal/cli/{name}.go" for name in "abcde"] + ["go.mod"]
for group in planning_groups(paths):
    print(chunk_paths(group, 4))
# [['go.mod']]
# [['internal/cli/a.go', 'internal/cli/b.go', 'internal/cli/c.go'],
#  ['internal/cli/d.go', 'internal/cli/e.go']]
```

The module also decides whether a single-file test, docs or chore plan may
join a neighbouring plan from the same area (`should_attach_support_plan`)
and judges descriptions (`is_weak_description`, `description_specificity`).

`gitloom.feedback.build_commit_feedback` lists weak spots of a plan
(missing or generic scope or description, plus the quality reasons) and up
to three better scopes taken from the changed paths or tags.

`gitloom.selection` parses block selections and validates a review:

```python
from gitloom.selection import parse_apply_selection

parse_apply_selection(5, "1,3-4")  # {1, 3, 4}
```

Malformed tokens or numbers outside the plan raise `SelectionError`.
`validate_strict_review` raises `StrictModeError` for a plan scoring below
80 or holding more files than the limit (4 when the limit is not positive).

`gitloom.review` builds a `ReviewSummary`, the JSON output of a review
(`build_json_review_output`) and filters paths by a case-insensitive focus
term (`filter_paths_by_focus`).

## What it does not do

gitloom does not read diffs, classify changes or write commit messages, and
it has no `commit`, `analyze` or `config` command: it cannot create commits
or write a configuration file. The planning, feedback, selection and review
functions work on `CommitPlan` and `CommitReview` values that you build
yourself.

## Development

```
pip install -e .[test]
pytest
```