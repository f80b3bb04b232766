from __future__ import annotations

# Local git operations (add, tag, rev-list)
GIT_TIMEOUT_SECONDS = 30.0

# Network-bound git operations (push)
GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# History reads stream unbounded output; only a stuck process is cut off.
GIT_LOG_TIMEOUT_SECONDS = 10 * 60.0

# Tag creation backoff: 2 ** attempt seconds (1s, 2s, 4s, ...)
TAG_RETRY_BASE_SECONDS = 1.0
