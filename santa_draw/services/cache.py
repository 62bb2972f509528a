from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from ..policies import StorageError
from .assignments import AssignmentStore


log = logging.getLogger(__name__)

STORAGE_KEY = "jb_assignments"


class LocalCacheStore(AssignmentStore):
    """
    Client-side copy of the draw.

    The cache file is a small key/value JSON document (like a browser's
    localStorage); the assignment lives under STORAGE_KEY and other keys are
    left untouched.
    """

    def __init__(self, path: str | Path, participants: Sequence[str], key: str = STORAGE_KEY, **kwargs):
        super().__init__(participants, **kwargs)
        self.path = Path(path)
        self.key = key

    def __repr__(self) -> str:
        return f"<LocalCacheStore {self.path}:{self.key}>"

    def _load_document(self) -> dict[str, Any]:
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except ValueError:
            log.warning("Cache %s is corrupt; starting empty", self.path)
            return {}
        except OSError as e:
            raise StorageError(f"Could not read {self.path}") from e
        return doc if isinstance(doc, dict) else {}

    def _store_document(self, doc: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write {self.path}") from e

    def _read(self) -> Any:
        return self._load_document().get(self.key)

    def _write(self, assignments: dict[str, str]) -> None:
        doc = self._load_document()
        doc[self.key] = assignments
        self._store_document(doc)

    def _clear(self) -> None:
        doc = self._load_document()
        if doc.pop(self.key, None) is not None:
            self._store_document(doc)
