from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from relgit import __version__
from relgit.cli.app import app
from relgit.cli.context import CONFIG_ENV, PROJECT_ENV, REPO_ENV
from relgit.core.errors import ErrorCode
from relgit.core.result import Err, Ok, Result
from relgit.git import history as history_mod
from relgit.git import push as push_mod
from relgit.git import stage as stage_mod
from relgit.git import tag as tag_mod
from relgit.git.history import COMMIT_DELIMITER
from relgit.platform.process import ProcessError

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # The app callback writes these; setenv makes monkeypatch restore them.
    for name in (REPO_ENV, CONFIG_ENV, PROJECT_ENV):
        monkeypatch.setenv(name, "")


def _fake_run(
    module: object,
    monkeypatch: pytest.MonkeyPatch,
    responses: list[Result[str, ProcessError]],
) -> list[list[str]]:
    calls: list[list[str]] = []

    async def fake_run(cmd: list[str], *, cwd: Path, timeout: float | None = None):
        del timeout
        calls.append([str(cwd), *cmd])
        return responses.pop(0)

    monkeypatch.setattr(module, "run_process", fake_run)
    return calls


def _fake_log(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> list[list[str]]:
    calls: list[list[str]] = []

    async def fake_stream(
        cmd: list[str],
        *,
        cwd: Path,
        on_line: Callable[[str], None],
        timeout: float | None = None,
    ) -> Result[None, ProcessError]:
        del cwd
        del timeout
        calls.append(cmd)
        for line in lines:
            on_line(line)
        return Ok(None)

    monkeypatch.setattr(history_mod, "stream_process", fake_stream)
    return calls


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_commits_prints_bodies(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _fake_log(
        monkeypatch,
        ["feat: login\n", f"{COMMIT_DELIMITER}\n", "fix: typo\n", f"{COMMIT_DELIMITER}\n"],
    )

    result = runner.invoke(app, ["--repo", str(tmp_path), "commits", "--since", "v1.0.0"])

    assert result.exit_code == 0
    assert "feat: login" in result.output
    assert "fix: typo" in result.output
    assert "v1.0.0..HEAD" in calls[0]


def test_last_hash(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _fake_log(monkeypatch, ["abc123\n", f"{COMMIT_DELIMITER}\n"])

    result = runner.invoke(app, ["--repo", str(tmp_path), "last-hash"])

    assert result.exit_code == 0
    assert result.output.strip() == "abc123"


def test_stage_dry_run(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _fake_run(stage_mod, monkeypatch, [Ok("")])

    result = runner.invoke(app, ["--repo", str(tmp_path), "stage", "--dry-run", "a.txt"])

    assert result.exit_code == 0
    assert calls == [[str(tmp_path.resolve()), "git", "add", "--dry-run", "a.txt"]]


def test_stage_skip_from_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "relgit.toml").write_text("[stage]\nskip = true\n", encoding="utf-8")
    calls = _fake_run(stage_mod, monkeypatch, [])

    result = runner.invoke(app, ["--repo", str(tmp_path), "stage", "a.txt"])

    assert result.exit_code == 0
    assert calls == []
    assert "staged" not in result.output


def test_stage_skip_flag_reports_skip(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _fake_run(stage_mod, monkeypatch, [])

    result = runner.invoke(app, ["--repo", str(tmp_path), "stage", "--skip", "a.txt"])

    assert result.exit_code == 0
    assert calls == []
    assert "staging skipped" in result.output
    assert "staged 1 path(s)" not in result.output


def test_stage_reports_staged_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _fake_run(stage_mod, monkeypatch, [Ok("")])

    result = runner.invoke(app, ["--repo", str(tmp_path), "stage", "a.txt", "b.txt"])

    assert result.exit_code == 0
    assert "staged 2 path(s)" in result.output


def test_tag_defaults_to_last_commit(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _fake_log(monkeypatch, ["deadbeef\n", f"{COMMIT_DELIMITER}\n"])
    calls = _fake_run(tag_mod, monkeypatch, [Ok("")])

    result = runner.invoke(
        app, ["--repo", str(tmp_path), "--project", "app", "tag", "v1.0.0", "-m", "release"]
    )

    assert result.exit_code == 0
    assert calls == [[str(tmp_path.resolve()), "git", "tag", "-a", "v1.0.0", "deadbeef", "-m", "release"]]
    assert "Tagged" in result.output


def test_tag_empty_history_exits_before_tagging(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    _fake_log(monkeypatch, [])
    calls = _fake_run(tag_mod, monkeypatch, [])
    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    monkeypatch.setattr(tag_mod, "sleep", fake_sleep)

    result = runner.invoke(app, ["--repo", str(tmp_path), "tag", "v1.0.0", "-m", "release"])

    assert result.exit_code == int(ErrorCode.GIT_ERROR)
    assert "no commit found to tag" in result.output
    assert calls == []
    assert delays == []


def test_tag_default_commit_uses_history_path(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    (tmp_path / "relgit.toml").write_text('[history]\npath = "packages/app"\n', encoding="utf-8")
    log_calls = _fake_log(monkeypatch, ["cafe01\n", f"{COMMIT_DELIMITER}\n"])
    calls = _fake_run(tag_mod, monkeypatch, [Ok("")])

    result = runner.invoke(app, ["--repo", str(tmp_path), "tag", "v1.0.0", "-m", "release"])

    assert result.exit_code == 0
    assert log_calls[0][-2:] == ["--", "packages/app"]
    assert calls[0][-3:] == ["cafe01", "-m", "release"]


def test_tag_path_option_overrides_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "relgit.toml").write_text('[history]\npath = "packages/app"\n', encoding="utf-8")
    log_calls = _fake_log(monkeypatch, ["cafe01\n", f"{COMMIT_DELIMITER}\n"])
    _fake_run(tag_mod, monkeypatch, [Ok("")])

    result = runner.invoke(
        app, ["--repo", str(tmp_path), "tag", "v1.0.0", "-m", "release", "--path", "libs/core"]
    )

    assert result.exit_code == 0
    assert log_calls[0][-1] == str(Path("libs/core"))


def test_tag_conflict_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _fake_run(
        tag_mod,
        monkeypatch,
        [
            Err(
                ProcessError(
                    command=("git", "tag"),
                    returncode=128,
                    stdout="",
                    stderr="fatal: tag 'v1.0.0' already exists",
                )
            )
        ],
    )

    result = runner.invoke(
        app, ["--repo", str(tmp_path), "tag", "v1.0.0", "-m", "release", "--commit", "abc"]
    )

    assert result.exit_code == int(ErrorCode.CONFLICT)


def test_push_missing_branch(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _fake_run(push_mod, monkeypatch, [])

    result = runner.invoke(app, ["--repo", str(tmp_path), "push", "v1.0.0", "--remote", "origin"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "Missing option --branch" in result.output
    assert calls == []


def test_push_uses_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "relgit.toml").write_text(
        '[push]\nremote = "upstream"\nbranch = "release"\nno_verify = true\n',
        encoding="utf-8",
    )
    calls = _fake_run(push_mod, monkeypatch, [Ok("")])

    result = runner.invoke(app, ["--repo", str(tmp_path), "push", "v2.0.0"])

    assert result.exit_code == 0
    assert calls == [
        [str(tmp_path.resolve()), "git", "push", "--no-verify", "--atomic", "upstream", "release", "v2.0.0"]
    ]


def test_invalid_config_exits(tmp_path: Path) -> None:
    (tmp_path / "relgit.toml").write_text("[push\n", encoding="utf-8")

    result = runner.invoke(app, ["--repo", str(tmp_path), "first-commit"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
