"""Tests for the derangement generator."""

import random

import pytest

from santa_draw.santa import DerangementError, generate

from conftest import CYCLE, OTHER_CYCLE, PARTICIPANTS


@pytest.mark.parametrize("n", [2, 3, 4, 5, 8, 30])
def test_generate_has_no_fixed_points(n):
    names = [f"P{i}" for i in range(n)]
    result = generate(names, rng=random.Random(n))

    assert set(result.assignments) == set(names)
    assert sorted(result.assignments.values()) == sorted(names)
    assert all(giver != receiver for giver, receiver in result.assignments.items())
    assert result.repeated is False


def test_two_people_swap():
    result = generate(["a", "b"])
    assert result.assignments == {"a": "b", "b": "a"}


def test_differs_from_previous_when_possible(rng):
    for _ in range(20):
        result = generate(PARTICIPANTS, previous=CYCLE, rng=rng)
        # three people only have two derangements
        assert result.assignments == OTHER_CYCLE
        assert result.repeated is False


def test_falls_back_to_previous_when_only_one_draw_exists():
    previous = {"a": "b", "b": "a"}
    result = generate(["a", "b"], previous=previous, max_attempts=10)
    assert result.assignments == previous
    assert result.repeated is True


def test_seeded_rng_is_reproducible():
    names = ["a", "b", "c", "d", "e"]
    first = generate(names, rng=random.Random(99))
    second = generate(names, rng=random.Random(99))
    assert first == second


@pytest.mark.parametrize("names", [[], ["solo"]])
def test_too_few_participants(names):
    with pytest.raises(DerangementError):
        generate(names)


def test_duplicate_names_rejected():
    with pytest.raises(DerangementError):
        generate(["a", "b", "a"])


def test_no_attempts_left():
    with pytest.raises(DerangementError):
        generate(PARTICIPANTS, max_attempts=0)
