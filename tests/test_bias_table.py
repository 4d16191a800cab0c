from __future__ import annotations

import threading

import pytest

from elemental_bias.bias_table import BiasCache, build_bias_table
from elemental_bias.elements import Element


def test_table_always_holds_four_zeroed_elements() -> None:
    table = build_bias_table([], "plains")

    assert dict(table) == {Element.FIRE: 0.0, Element.FROST: 0.0, Element.NATURE: 0.0, Element.THUNDER: 0.0}
    assert Element.NONE not in table


def test_weights_accumulate_per_location() -> None:
    lines = ["x:fire,150", "x:fire,30", "x:all,20", "y:frost,50", "x:nonsense,5"]
    table = build_bias_table(lines, "x")

    assert table[Element.FIRE] == 150.0
    assert table[Element.FROST] == 20.0
    assert table[Element.NATURE] == 20.0
    assert table[Element.THUNDER] == 20.0


def test_table_is_read_only() -> None:
    table = build_bias_table(["x:fire,1"], "x")

    with pytest.raises(TypeError):
        table[Element.FIRE] = 5.0  # type: ignore[index]


def test_cache_returns_identical_table_until_invalidated() -> None:
    lines = ["x:nature,40"]
    cache = BiasCache(lambda: lines)

    first = cache.get("x")
    lines.append("x:nature,10")
    assert cache.get("x") is first
    assert first[Element.NATURE] == 40.0

    cache.invalidate_all()
    assert "x" not in cache
    assert cache.get("x")[Element.NATURE] == 50.0


def test_cache_builds_each_key_once() -> None:
    calls: list[int] = []

    def provider() -> list[str]:
        calls.append(1)
        return ["a:fire,1"]

    cache = BiasCache(provider)
    for _ in range(5):
        cache.get("a")
        cache.get("b")

    assert len(calls) == 2
    assert len(cache) == 2


def test_build_started_before_invalidation_is_not_stored() -> None:
    lines = ["x:fire,10"]
    cache: BiasCache

    def provider() -> list[str]:
        snapshot = list(lines)
        cache.invalidate_all()
        return snapshot

    cache = BiasCache(provider)
    assert cache.get("x")[Element.FIRE] == 10.0
    assert "x" not in cache


def test_concurrent_readers_see_one_table() -> None:
    cache = BiasCache(lambda: ["x:thunder,7"])
    results = []
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        for _ in range(200):
            results.append(cache.get("x"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = cache.get("x")
    assert all(table[Element.THUNDER] == 7.0 for table in results)
    assert all(table is stored for table in results)
