from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Mapping, Sequence

MAX_ATTEMPTS = 1000


class DerangementError(RuntimeError):
    pass


@dataclass(frozen=True)
class DrawResult:
    assignments: dict[str, str]
    # True when nothing differing from the previous draw turned up
    repeated: bool = False


def _differs(candidate: Mapping[str, str], previous: Mapping[str, str]) -> bool:
    return any(previous.get(giver) != receiver for giver, receiver in candidate.items())


def generate(
    participants: Sequence[str],
    previous: Mapping[str, str] | None = None,
    max_attempts: int = MAX_ATTEMPTS,
    rng: random.Random | None = None,
) -> DrawResult:
    """
    Shuffle until no one is paired with themselves.

    With `previous`, keep going until the draw also differs from it in at least
    one pairing; if that never happens within `max_attempts`, the first valid
    draw is returned with `repeated=True`.
    """
    givers = list(participants)
    if len(givers) < 2:
        raise DerangementError("Need at least 2 participants.")
    if len(set(givers)) != len(givers):
        raise DerangementError("Participant names must be unique.")

    rng = rng or random.Random()
    fallback: dict[str, str] | None = None

    for _ in range(max(max_attempts, 0)):
        receivers = givers[:]
        rng.shuffle(receivers)
        if any(g == r for g, r in zip(givers, receivers)):
            continue

        candidate = dict(zip(givers, receivers))
        if previous is None or _differs(candidate, previous):
            return DrawResult(candidate)
        if fallback is None:
            fallback = candidate

    if fallback is None:
        raise DerangementError(f"No valid draw found in {max_attempts} attempts.")
    return DrawResult(fallback, repeated=True)
