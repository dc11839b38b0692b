from .base import UNKNOWN_TAG, RevisionTag, VcsAdapter
from .fossil_adapter import FossilAdapter
from .git_adapter import GitAdapter
from .factory import detect_backend, query_revision, resolve_adapter

__all__ = [
    "UNKNOWN_TAG",
    "RevisionTag",
    "VcsAdapter",
    "FossilAdapter",
    "GitAdapter",
    "detect_backend",
    "query_revision",
    "resolve_adapter",
]
