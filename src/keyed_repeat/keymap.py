from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import Protocol


class Keyed(Protocol):
	@property
	def key(self) -> Hashable: ...


def key_to_index_map(
	items: Sequence[Keyed | None], start: int, end: int
) -> dict[Hashable, int]:
	"""Map each key in ``items[start:end + 1]`` to its index.

	Consumed (``None``) slots are skipped. With duplicate keys the highest
	index wins.
	"""
	out: dict[Hashable, int] = {}
	for i in range(start, end + 1):
		item = items[i]
		if item is not None:
			out[item.key] = i
	return out
