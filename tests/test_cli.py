import json

import pytest

from gitloom import cli


def test_root_help_lists_commands_and_examples(capsys):
    assert cli.main(["--help"]) == 0
    output = capsys.readouterr().out
    for part in [
        "Git Loom automatiza commits semanticos com revisao antes de executar.",
        "Commands:",
        "commit",
        "analyze",
        "config",
        "doctor",
        "version",
        "Exemplos:",
        "gitloom help commit",
        "Uso:",
    ]:
        assert part in output


def test_no_command_prints_root_help(capsys):
    assert cli.main([]) == 0
    assert cli.root_help_text() in capsys.readouterr().out


def test_help_commit_topic(capsys):
    assert cli.main(["help", "commit"]) == 0
    output = capsys.readouterr().out
    for part in [
        "Planeja e cria commits semanticos a partir do estado atual do repositorio.",
        "--dry-run",
        "--preview",
        "--strict",
        "--verbose",
        "--json",
        "Config:",
        ".gitloom.yaml",
    ]:
        assert part in output


def test_help_unknown_topic(capsys):
    assert cli.main(["help", "nothing"]) == 0
    output = capsys.readouterr().out
    assert 'Unknown help topic "nothing".' in output
    assert "Commands:" in output


def test_help_for_subcommand_shows_its_flags(capsys):
    assert cli.main(["help", "update"]) == 0
    output = capsys.readouterr().out
    assert "--check" in output
    assert "--force" in output


def test_version_text_parts():
    text = cli.version_text("1.2.3", "abc123", "2026-03-28")
    for part in ["gitloom 1.2.3", "commit: abc123", "build date: 2026-03-28"]:
        assert part in text


def test_version_command_prints_build_info(capsys):
    assert cli.main(["version"]) == 0
    output = capsys.readouterr().out
    assert output == cli.version_text(cli.VERSION, cli.GIT_COMMIT, cli.BUILD_DATE)
    assert output.startswith("gitloom ")


def test_version_alias_resolves(capsys):
    assert cli.main(["ver"]) == 0
    assert "build date:" in capsys.readouterr().out


def test_parser_reads_update_flags():
    args = cli.build_parser().parse_args(["update", "--check", "--force", "--version", "1.0.0"])
    assert args.check is True
    assert args.force is True
    assert args.target_version == "1.0.0"


def test_unknown_command_exits_with_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["bogus"])
    assert excinfo.value.code == 2


def _release(tmp_path, tag):
    release = tmp_path / "release.json"
    release.write_text(json.dumps({"tag_name": tag}, separators=(",", ":")), encoding="utf-8")
    return release.as_uri()


def test_update_reports_up_to_date(tmp_path, capsys):
    url = _release(tmp_path, "v" + cli.VERSION)
    assert cli.main(["update", "--release-url", url]) == 0
    assert capsys.readouterr().out == f"gitloom {cli.VERSION} ja esta atualizado\n"


def test_update_json_up_to_date(tmp_path, capsys):
    url = _release(tmp_path, "v" + cli.VERSION)
    assert cli.main(["update", "--json", "--release-url", url]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"current": cli.VERSION, "latest": cli.VERSION, "updated": True}


def test_update_fetch_failure_returns_error(tmp_path, capsys):
    url = (tmp_path / "missing.json").as_uri()
    assert cli.main(["update", "--release-url", url]) == 1
    assert "falha ao buscar versao mais recente" in capsys.readouterr().err


def test_update_fetch_failure_json(tmp_path, capsys):
    url = (tmp_path / "missing.json").as_uri()
    assert cli.main(["update", "--json", "--release-url", url]) == 0
    assert capsys.readouterr().err.startswith('{"error":"falha ao buscar versao: ')


def test_update_install_failure_reports_error(tmp_path, capsys):
    url = _release(tmp_path, "v9.9.9-next")
    script_url = (tmp_path / "missing.sh").as_uri()
    code = cli.main(["update", "--release-url", url, "--script-url", script_url])
    assert code == 1
    assert "falha ao atualizar" in capsys.readouterr().err