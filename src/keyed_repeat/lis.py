from __future__ import annotations

from bisect import bisect_left
from collections.abc import Hashable, Mapping, Sequence

from keyed_repeat.keymap import Keyed


def lis(seq: Sequence[int]) -> list[int]:
	"""Longest strictly increasing subsequence, as indices into ``seq``."""
	# smallest tail value of an increasing run of each length, and where it sits
	tail_values: list[int] = []
	tail_positions: list[int] = []
	prev: list[int | None] = []
	for i, value in enumerate(seq):
		length = bisect_left(tail_values, value)
		prev.append(tail_positions[length - 1] if length else None)
		if length == len(tail_values):
			tail_values.append(value)
			tail_positions.append(i)
		else:
			tail_values[length] = value
			tail_positions[length] = i

	out: list[int] = []
	k = tail_positions[-1] if tail_positions else None
	while k is not None:
		out.append(k)
		k = prev[k]
	out.reverse()
	return out


def old_index_lis(
	old_key_to_index: Mapping[Hashable, int],
	new_results: Sequence[Keyed],
	new_start: int,
	new_end: int,
	old: Sequence[object | None] | None = None,
) -> set[int]:
	"""Old indices of the reused parts that are already in relative order.

	New results in ``new_results[new_start:new_end + 1]`` are matched to old
	indices through ``old_key_to_index``. A repeated key only counts at its
	last position in the range, which is where the backward walk claims the
	old part. Results without an old part are skipped, as are old slots that
	are already consumed when ``old`` is given. Parts whose old index is in the
	returned set never need a move.
	"""
	claimed: list[int] = []
	seen: set[Hashable] = set()
	for i in range(new_end, new_start - 1, -1):
		key = new_results[i].key
		if key in seen:
			continue
		seen.add(key)
		old_index = old_key_to_index.get(key)
		if old_index is None or (old is not None and old[old_index] is None):
			continue
		claimed.append(old_index)
	claimed.reverse()
	return {claimed[i] for i in lis(claimed)}
