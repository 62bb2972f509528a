from __future__ import annotations

from typing import Any, Sequence


class AssignmentError(RuntimeError):
    pass


class AssignmentValidationError(AssignmentError, ValueError):
    pass


class AssignmentConflictError(AssignmentError):
    def __init__(self, message: str, existing: dict[str, str]):
        super().__init__(message)
        self.existing = existing


class StorageError(AssignmentError):
    pass


def validate_assignment(candidate: Any, participants: Sequence[str]) -> dict[str, str]:
    """
    Returns a copy of `candidate` if it is a derangement over exactly
    `participants`; raises AssignmentValidationError otherwise.
    """
    if not isinstance(candidate, dict) or not candidate:
        raise AssignmentValidationError("Invalid payload.")
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in candidate.items()):
        raise AssignmentValidationError("Invalid payload: names must be strings.")

    expected = sorted(participants)
    if sorted(candidate.keys()) != expected:
        raise AssignmentValidationError("Assignment keys do not match the participants.")
    if sorted(candidate.values()) != expected:
        raise AssignmentValidationError("Assignment targets are not a permutation of the participants.")

    for giver, receiver in candidate.items():
        if giver == receiver:
            raise AssignmentValidationError(f"{giver} cannot be assigned to themselves.")

    return dict(candidate)


def is_valid_assignment(candidate: Any, participants: Sequence[str]) -> bool:
    try:
        validate_assignment(candidate, participants)
    except AssignmentValidationError:
        return False
    return True


def parse_participants(raw: str | Sequence[str]) -> list[str]:
    """Accepts "a, b, c" or a list; names are compared lower-cased."""
    if isinstance(raw, str):
        raw = raw.split(",")
    return [name.strip().lower() for name in raw if name and name.strip()]
