from __future__ import annotations

from dataclasses import dataclass

from relgit.platform.process import ProcessError

# Any git failure that is not one of the recognised cases below is handed
# back exactly as the runner reported it.
RawCommandError = ProcessError

CONFIGURE_DOCS_HINT = "see: README.md#configuration (set [push] remote/branch in relgit.toml)"


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """A required option is missing. Detected before any git command runs."""

    message: str
    hint: str | None = CONFIGURE_DOCS_HINT


@dataclass(frozen=True, slots=True)
class TagAlreadyExistsError:
    tag: str

    @property
    def message(self) -> str:
        return (
            f'Failed to tag "{self.tag}", this tag already exists. '
            "This happens when the same version was created before but the tag does not "
            "point to a commit of your base branch. "
            f'Please delete the tag by running "git tag -d {self.tag}", make sure the tag has '
            f'been removed from the remote repository as well ("git push <remote> '
            f':refs/tags/{self.tag}") and run this command again.'
        )


@dataclass(frozen=True, slots=True)
class HistoryReadError:
    """``git log`` failed; no partial history is returned."""

    message: str
    stderr: str = ""
    returncode: int = 1

    @property
    def hint(self) -> str | None:
        return self.stderr.strip() or None


TagError = TagAlreadyExistsError | ProcessError

PushError = ConfigurationError | ProcessError

GitOpsError = ConfigurationError | TagAlreadyExistsError | HistoryReadError | ProcessError
