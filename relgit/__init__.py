"""relgit: git operations for automated release pipelines."""

__version__ = "0.1.0"
