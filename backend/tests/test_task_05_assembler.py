"""Task-05: result ordering"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

from app.news.assembler import assemble_results
from conftest import make_item

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_newest_first():
    items = [
        make_item("mid", BASE + timedelta(hours=1)),
        make_item("old", BASE),
        make_item("new", BASE + timedelta(hours=2)),
    ]

    result = assemble_results(items)

    assert [i.title for i in result] == ["new", "mid", "old"]


def test_empty_input():
    assert assemble_results([]) == []


def test_ties_keep_input_order():
    items = [make_item(f"t{i}", BASE) for i in range(5)]
    assert [i.title for i in assemble_results(items)] == ["t0", "t1", "t2", "t3", "t4"]


def test_length_and_order_invariant():
    rng = random.Random(7)
    items = [make_item(f"n{i}", BASE + timedelta(minutes=rng.randint(0, 50))) for i in range(40)]

    result = assemble_results(items)

    assert len(result) == len(items)
    assert all(a.published_at >= b.published_at for a, b in zip(result, result[1:]))


def test_input_not_mutated():
    items = [make_item("a", BASE), make_item("b", BASE + timedelta(days=1))]
    assemble_results(items)
    assert [i.title for i in items] == ["a", "b"]
