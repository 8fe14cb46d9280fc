from collections import Counter
from collections.abc import Sequence
from typing import Any

from keyed_repeat import (
	BindingSiteCache,
	MemoryContainer,
	ReusePool,
	RepeatOptions,
	count_operations,
	repeat,
)


def render(
	container: MemoryContainer,
	cache: BindingSiteCache,
	keys: Sequence[str],
	options: RepeatOptions | dict[str, Any] | None = None,
) -> Counter[str]:
	container.reset_operations()
	repeat(
		keys, lambda item, _i: item.upper(), key=lambda item, _i: item, options=options
	).commit(container, cache=cache)
	return count_operations(container.operations)


def test_take_exact_key():
	container = MemoryContainer()
	pool = ReusePool()
	a = container.create("a", None)
	b = container.create("b", None)
	pool.put(a)
	pool.put(b)
	assert len(pool) == 2
	assert "a" in pool
	assert pool.take("b") is b
	assert pool.take("b") is None
	assert pool.keys() == ["a"]


def test_take_arbitrary_returns_oldest():
	container = MemoryContainer()
	pool = ReusePool()
	a = container.create("a", None)
	b = container.create("b", None)
	pool.put(a)
	pool.put(b)
	assert pool.take("zzz") is None
	assert pool.take("zzz", arbitrary=True) is a
	assert pool.take("zzz", arbitrary=True) is b
	assert pool.take("zzz", arbitrary=True) is None


def test_put_returns_displaced_part():
	container = MemoryContainer()
	pool = ReusePool()
	first = container.create("a", None)
	second = container.create("a", None)
	assert pool.put(first) is None
	assert pool.put(second) is first
	assert list(pool) == [second]


def test_detach_all_and_clear():
	container = MemoryContainer()
	pool = ReusePool()
	a = container.create("a", None)
	b = container.create("b", None)
	pool.put(a)
	pool.detach_all(container)
	assert not a.attached
	assert container.keys() == ["b"]

	pool.put(b)
	pool.clear(container)
	assert len(pool) == 0
	assert container.keys() == []
	assert [op["type"] for op in container.operations][-2:] == ["detach", "remove"]


def test_persistent_pool_reattaches_same_part(
	container: MemoryContainer, cache: BindingSiteCache
):
	options = RepeatOptions(pool=ReusePool())
	render(container, cache, ["a", "b", "c"], options)
	b = container.parts()[1]
	content = b.nodes[1]

	counts = render(container, cache, ["a", "c"], options)
	assert counts["remove"] == 0
	assert counts["detach"] == 1
	assert container.keys() == ["a", "c"]
	assert isinstance(options.pool, ReusePool)
	assert "b" in options.pool

	counts = render(container, cache, ["a", "b", "c"], options)
	assert counts["create"] == 0
	assert counts["reattach"] == 1
	assert container.keys() == ["a", "b", "c"]
	assert container.parts()[1] is b
	assert b.nodes[1] is content
	assert len(options.pool) == 0


def test_without_pool_reintroduced_key_gets_new_part(
	container: MemoryContainer, cache: BindingSiteCache
):
	render(container, cache, ["a", "b", "c"])
	b = container.parts()[1]
	render(container, cache, ["a", "c"])
	counts = render(container, cache, ["a", "b", "c"])
	assert counts["create"] == 1
	assert container.parts()[1] is not b


def test_transient_pool_detaches_leftovers(
	container: MemoryContainer, cache: BindingSiteCache
):
	render(container, cache, ["a", "b", "c"], {"pool": True})
	b = container.parts()[1]
	counts = render(container, cache, ["a", "x", "c"], {"pool": True})
	assert counts["create"] == 1
	assert counts["detach"] == 1
	assert counts["remove"] == 0
	assert not b.attached
	assert container.keys() == ["a", "x", "c"]

	# the transient pool is gone; b cannot come back
	counts = render(container, cache, ["a", "b", "x", "c"], {"pool": True})
	assert counts["create"] == 1
	assert container.parts()[1] is not b


def test_reuse_repurposes_removed_part_in_same_pass(
	container: MemoryContainer, cache: BindingSiteCache
):
	render(container, cache, ["a", "b", "c"], {"reuse": True})
	b = container.parts()[1]
	counts = render(container, cache, ["a", "x", "c"], {"reuse": True})
	assert counts["create"] == 0
	assert counts["remove"] == 0
	assert counts["detach"] == 0
	assert container.parts()[1] is b
	assert b.key == "x"
	assert container.values() == ["A", "X", "C"]


def test_persistent_pool_with_reuse_across_passes(
	container: MemoryContainer, cache: BindingSiteCache
):
	options = RepeatOptions(pool=ReusePool(), reuse=True)
	render(container, cache, ["a", "b"], options)
	b = container.parts()[1]
	render(container, cache, ["a"], options)
	assert not b.attached

	counts = render(container, cache, ["y", "a"], options)
	assert counts["create"] == 0
	assert counts["reattach"] == 1
	assert container.parts()[0] is b
	assert container.keys() == ["y", "a"]
	assert b.key == "y"


def test_reuse_prefers_exact_key(container: MemoryContainer, cache: BindingSiteCache):
	options = RepeatOptions(pool=ReusePool(), reuse=True)
	render(container, cache, ["a", "b", "c"], options)
	b, c = container.parts()[1:]
	render(container, cache, ["a"], options)
	render(container, cache, ["a", "c"], options)
	assert container.parts()[1] is c
	assert isinstance(options.pool, ReusePool)
	assert list(options.pool) == [b]
