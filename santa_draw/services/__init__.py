from .assignments import AssignmentStore, FileAssignmentStore
from .cache import STORAGE_KEY, LocalCacheStore

__all__ = ["AssignmentStore", "FileAssignmentStore", "LocalCacheStore", "STORAGE_KEY"]
