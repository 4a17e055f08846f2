"""Functional tests for the seeded shuffler."""

from __future__ import annotations

from itertools import islice

from hireassess.logic.shuffle import lcg_fractions, seeded_shuffle


def test_lcg_produces_known_sequence_for_seed_zero():
    first, second = islice(lcg_fractions(0), 2)
    assert first == 49297 / 233280
    assert second == 165494 / 233280


def test_shuffle_of_three_items_with_seed_zero():
    # i=2 -> j=int(0.211*3)=0 swaps ends; i=1 -> j=int(0.709*2)=1 keeps order
    assert seeded_shuffle([0, 1, 2], 0) == [2, 1, 0]


def test_same_seed_gives_same_permutation():
    items = list(range(40))
    assert seeded_shuffle(items, 7003) == seeded_shuffle(items, 7003)


def test_result_is_permutation_and_input_untouched():
    items = [f"q{i}" for i in range(25)]
    snapshot = list(items)
    shuffled = seeded_shuffle(items, 12345)
    assert items == snapshot
    assert sorted(shuffled) == sorted(items)
    assert shuffled is not items


def test_different_seeds_usually_differ():
    items = list(range(30))
    assert seeded_shuffle(items, 1007) != seeded_shuffle(items, 2007)


def test_empty_and_single_inputs_are_copied_unchanged():
    empty: list = []
    one = ["only"]
    assert seeded_shuffle(empty, 5) == []
    assert seeded_shuffle(one, 5) == ["only"]
    assert seeded_shuffle(one, 5) is not one
