from __future__ import annotations

import random

from fader.core.enums import Layer
from fader.rotation.models import SlotState, visible_set
from fader.rotation.selection import pick_random_excluding, pick_random_not_in, select_next


def test_select_next_should_return_unique_non_visible_candidate() -> None:
    pool = ["a", "b", "c", "d"]
    for seed in range(50):
        assert select_next(pool, {"a", "b", "c"}, "a", random.Random(seed)) == "d"


def test_select_next_should_avoid_current_when_everything_is_visible() -> None:
    pool = ["a", "b", "c"]
    results = {select_next(pool, {"a", "b", "c"}, "a", random.Random(seed)) for seed in range(100)}
    assert results <= {"b", "c"}
    assert results == {"b", "c"}


def test_select_next_should_return_single_entry() -> None:
    assert select_next(["only"], {"only"}, "only", random.Random(1)) == "only"
    assert select_next(["only"], set(), None, random.Random(1)) == "only"


def test_select_next_should_keep_current_for_duplicate_valued_pool() -> None:
    assert select_next(["a", "a", "a"], {"a"}, "a", random.Random(3)) == "a"


def test_select_next_should_prefer_non_visible_over_merely_different() -> None:
    pool = ["a", "b", "c", "d", "e"]
    for seed in range(50):
        assert select_next(pool, {"a", "b"}, "a", random.Random(seed)) in {"c", "d", "e"}


def test_select_next_should_be_deterministic_for_seeded_source() -> None:
    pool = ["a", "b", "c", "d", "e", "f"]
    first_rng, second_rng = random.Random(11), random.Random(11)
    first = [select_next(pool, {"a"}, "a", first_rng) for _ in range(10)]
    second = [select_next(pool, {"a"}, "a", second_rng) for _ in range(10)]
    assert first == second


def test_pick_helpers_should_return_none_without_candidates() -> None:
    rng = random.Random(0)
    assert pick_random_not_in(["a", "b"], {"a", "b"}, rng) is None
    assert pick_random_excluding(["a", "a"], "a", rng) is None
    assert pick_random_excluding(["a", "b"], "a", rng) == "b"


def test_visible_set_should_skip_empty_slots() -> None:
    slots = [SlotState(), SlotState.showing("a"), SlotState("a", "b", Layer.B)]
    assert visible_set(slots) == frozenset({"a", "b"})
