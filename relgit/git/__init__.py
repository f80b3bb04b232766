"""Git operations for release pipelines.

Every operation is a coroutine returning a Result:

    from relgit.git import PushRequest, TagRequest, create_tag, try_push

    tagged = await create_tag(TagRequest(tag="v1.0.0", commit_hash=sha, message="release"))
    if isinstance(tagged, Ok):
        await try_push(PushRequest(remote="origin", branch="main", tag="v1.0.0"))
"""

from relgit.git.errors import (
    ConfigurationError,
    GitOpsError,
    HistoryReadError,
    PushError,
    RawCommandError,
    TagAlreadyExistsError,
    TagError,
)
from relgit.git.history import (
    CommitStream,
    get_commits,
    get_formatted_commits,
    get_last_commit_hash,
)
from relgit.git.push import PushRequest, try_push
from relgit.git.refs import get_first_commit_ref
from relgit.git.stage import add_to_stage
from relgit.git.tag import TagRequest, create_tag

__all__ = [
    # errors
    "ConfigurationError",
    "GitOpsError",
    "HistoryReadError",
    "PushError",
    "RawCommandError",
    "TagAlreadyExistsError",
    "TagError",
    # history
    "CommitStream",
    "get_commits",
    "get_formatted_commits",
    "get_last_commit_hash",
    # refs
    "get_first_commit_ref",
    # stage
    "add_to_stage",
    # tag
    "TagRequest",
    "create_tag",
    # push
    "PushRequest",
    "try_push",
]
