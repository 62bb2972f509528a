from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any, Sequence

from ..policies import (
    AssignmentConflictError,
    StorageError,
    is_valid_assignment,
    validate_assignment,
)
from ..santa import MAX_ATTEMPTS, DrawResult, generate


log = logging.getLogger(__name__)


class AssignmentStore:
    """
    Holds at most one assignment for a fixed participant set.

    Subclasses only know how to read, write and clear the raw mapping; the
    reset and import rules live here so every storage location behaves the same.
    """

    def __init__(
        self,
        participants: Sequence[str],
        max_attempts: int = MAX_ATTEMPTS,
        rng: random.Random | None = None,
    ):
        self.participants = list(participants)
        self.max_attempts = max_attempts
        self.rng = rng

    # --- storage hooks ---

    def _read(self) -> Any:
        raise NotImplementedError

    def _write(self, assignments: dict[str, str]) -> None:
        raise NotImplementedError

    def _clear(self) -> None:
        raise NotImplementedError

    # --- contract ---

    def get(self) -> dict[str, str] | None:
        raw = self._read()
        if raw is None:
            return None
        if not is_valid_assignment(raw, self.participants):
            log.warning("%s holds an invalid assignment; ignoring it", self)
            return None
        return dict(raw)

    def reset(self) -> DrawResult:
        # the old draw is only replaced once a new one has been drawn
        previous = self.get()
        result = generate(self.participants, previous, self.max_attempts, self.rng)
        self._write(result.assignments)
        log.info("%s reset (repeated=%s)", self, result.repeated)
        return result

    def import_assignment(self, candidate: Any) -> dict[str, str]:
        assignments = validate_assignment(candidate, self.participants)
        existing = self.get()
        if existing is not None:
            raise AssignmentConflictError("An assignment is already stored.", existing)
        self._write(assignments)
        log.info("%s imported an assignment", self)
        return assignments

    def save(self, candidate: Any) -> dict[str, str]:
        assignments = validate_assignment(candidate, self.participants)
        self._write(assignments)
        return assignments

    def clear(self) -> None:
        self._clear()


class FileAssignmentStore(AssignmentStore):
    """The server copy: one JSON object in one file."""

    def __init__(self, path: str | Path, participants: Sequence[str], **kwargs):
        super().__init__(participants, **kwargs)
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"<FileAssignmentStore {self.path}>"

    def _read(self) -> Any:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Could not read {self.path}") from e

        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError:
            log.warning("%s is not valid UTF-8 JSON; treating it as empty", self.path)
            return None

    def _write(self, assignments: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(assignments, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            log.error("Failed to write %s: %s", self.path, e)
            raise StorageError(f"Could not write {self.path}") from e
        log.debug("Assignments written to %s", self.path)

    def _clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not remove {self.path}") from e
