"""Tests for relgit.git.stage and relgit.git.refs."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from relgit.core.result import Err, Ok, Result
from relgit.git import refs as refs_mod
from relgit.git import stage as stage_mod
from relgit.git.refs import pick_root_commit
from relgit.platform.process import ProcessError


def _patch(
    monkeypatch: pytest.MonkeyPatch,
    module: object,
    responses: list[Result[str, ProcessError]],
) -> list[list[str]]:
    calls: list[list[str]] = []

    async def fake_run(cmd: list[str], *, cwd: Path, timeout: float | None = None):
        del cwd
        del timeout
        calls.append(cmd)
        return responses.pop(0)

    monkeypatch.setattr(module, "run_process", fake_run)
    return calls


# =============================================================================
# add_to_stage
# =============================================================================


class TestAddToStage:
    def test_empty_paths_is_noop(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls = _patch(monkeypatch, stage_mod, [])

        first = asyncio.run(stage_mod.add_to_stage([], dry_run=False, skip_stage=False, cwd=tmp_path))
        second = asyncio.run(stage_mod.add_to_stage([], dry_run=False, skip_stage=False, cwd=tmp_path))

        assert first == Ok(None)
        assert second == first
        assert calls == []

    def test_skip_stage_is_success(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls = _patch(monkeypatch, stage_mod, [])

        result = asyncio.run(
            stage_mod.add_to_stage(["a.txt", "b.txt"], dry_run=False, skip_stage=True, cwd=tmp_path)
        )

        assert result == Ok(None)
        assert calls == []

    def test_stages_paths(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls = _patch(monkeypatch, stage_mod, [Ok("")])

        result = asyncio.run(
            stage_mod.add_to_stage(
                ["CHANGELOG.md", "package.json"], dry_run=False, skip_stage=False, cwd=tmp_path
            )
        )

        assert result == Ok(None)
        assert calls == [["git", "add", "CHANGELOG.md", "package.json"]]

    def test_dry_run_passes_flag(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        calls = _patch(monkeypatch, stage_mod, [Ok("add 'a.txt'\n")])

        result = asyncio.run(
            stage_mod.add_to_stage(["a.txt"], dry_run=True, skip_stage=False, cwd=tmp_path)
        )

        assert result == Ok(None)
        assert calls == [["git", "add", "--dry-run", "a.txt"]]

    def test_failure_propagates(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        error = Err(
            ProcessError(
                command=("git", "add", "missing.txt"),
                returncode=128,
                stdout="",
                stderr="fatal: pathspec 'missing.txt' did not match any files",
            )
        )
        _patch(monkeypatch, stage_mod, [error])

        result = asyncio.run(
            stage_mod.add_to_stage(["missing.txt"], dry_run=False, skip_stage=False, cwd=tmp_path)
        )

        assert result == error


# =============================================================================
# get_first_commit_ref
# =============================================================================


class TestPickRootCommit:
    def test_trailing_blank_lines(self) -> None:
        assert pick_root_commit("deadbeef\n\n") == "deadbeef"

    def test_empty_output(self) -> None:
        assert pick_root_commit("") == ""

    def test_last_root_wins(self) -> None:
        assert pick_root_commit("aaa111\n  bbb222  \n\n") == "bbb222"


def test_get_first_commit_ref(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _patch(monkeypatch, refs_mod, [Ok("deadbeef\n\n")])

    result = asyncio.run(refs_mod.get_first_commit_ref(cwd=tmp_path))

    assert result == Ok("deadbeef")
    assert calls == [["git", "rev-list", "--max-parents=0", "HEAD"]]


def test_get_first_commit_ref_propagates_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    error = Err(
        ProcessError(
            command=("git", "rev-list"),
            returncode=128,
            stdout="",
            stderr="fatal: ambiguous argument 'HEAD'",
        )
    )
    _patch(monkeypatch, refs_mod, [error])

    assert asyncio.run(refs_mod.get_first_commit_ref(cwd=tmp_path)) == error
