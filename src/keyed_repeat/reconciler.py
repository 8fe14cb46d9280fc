from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence

from keyed_repeat.container import Container, Part
from keyed_repeat.keymap import key_to_index_map
from keyed_repeat.lis import old_index_lis
from keyed_repeat.pool import ReusePool
from keyed_repeat.results import RenderResult

logger = logging.getLogger(__name__)


class Reconciler:
	"""Brings a container's parts in line with a new list of keyed results.

	Old and new lists are scanned from both ends. Matching heads and tails are
	updated in place, and a head that became a tail (or the reverse) is moved
	across. Once none of the four ends match, a key-to-index map of the
	remaining old parts is built, parts whose keys are gone are removed in one
	sweep, and the remaining new results are placed walking backwards from the
	tail, each before the part that follows it in the new order.
	"""

	container: Container
	pool: ReusePool | None
	lis: bool
	reuse: bool

	def __init__(
		self,
		container: Container,
		*,
		pool: ReusePool | None = None,
		lis: bool = False,
		reuse: bool = False,
	) -> None:
		self.container = container
		self.pool = pool
		self.lis = lis
		self.reuse = reuse

	def reconcile(
		self, old_parts: Sequence[Part], new_results: Sequence[RenderResult]
	) -> list[Part]:
		old: list[Part | None] = list(old_parts)
		new_parts: list[Part | None] = [None] * len(new_results)
		debug = logger.isEnabledFor(logging.DEBUG)

		old_head, old_tail = 0, len(old) - 1
		new_head, new_tail = 0, len(new_results) - 1
		old_key_to_index: dict[Hashable, int] | None = None
		keep: set[int] | None = None

		def trace(msg: str) -> None:
			logger.debug(
				"%s\n%s",
				msg,
				format_scan(
					old, new_results, old_head, old_tail, new_head, new_tail, keep
				),
			)

		while old_head <= old_tail and new_head <= new_tail:
			old_start = old[old_head]
			old_end = old[old_tail]
			if old_start is None:
				old_head += 1
			elif old_end is None:
				old_tail -= 1
			elif old_start.key == new_results[new_head].key:
				if debug:
					trace(f"heads match {old_head}")
				new_parts[new_head] = self._update(old_start, new_results[new_head])
				old[old_head] = None
				old_head += 1
				new_head += 1
			elif old_end.key == new_results[new_tail].key:
				if debug:
					trace(f"tails match {old_tail}")
				new_parts[new_tail] = self._update(old_end, new_results[new_tail])
				old[old_tail] = None
				old_tail -= 1
				new_tail -= 1
			elif old_start.key == new_results[new_tail].key:
				if debug:
					trace(f"swap head {old_head} to tail")
				new_parts[new_tail] = self._update(old_start, new_results[new_tail])
				self.container.move(old_start, _successor(new_parts, new_tail))
				old[old_head] = None
				old_head += 1
				new_tail -= 1
			elif old_end.key == new_results[new_head].key:
				if debug:
					trace(f"swap tail {old_tail} to head")
				new_parts[new_head] = self._update(old_end, new_results[new_head])
				self.container.move(old_end, old_start)
				old[old_tail] = None
				old_tail -= 1
				new_head += 1
			else:
				if old_key_to_index is None:
					old_key_to_index = key_to_index_map(old, old_head, old_tail)
					if debug:
						trace("removing unused parts")
					if self._remove_unused(
						old, old_key_to_index, new_results, new_head, new_tail
					):
						continue
				# With lis enabled the rest of the new range is placed in one
				# backward sweep; otherwise one result per pass through the loop.
				while True:
					result = new_results[new_tail]
					old_index = old_key_to_index.get(result.key)
					old_part = old[old_index] if old_index is not None else None
					successor = _successor(new_parts, new_tail)
					if old_part is None or old_index is None:
						if debug:
							trace(f"new item {result.key!r}")
						new_parts[new_tail] = self._create(result, successor)
					else:
						new_parts[new_tail] = self._update(old_part, result)
						if self.lis and keep is None:
							keep = old_index_lis(
								old_key_to_index, new_results, new_head, new_tail, old
							)
						if keep is None or old_index not in keep:
							if debug:
								trace(f"move {old_index}")
							self.container.move(old_part, successor)
						elif debug:
							trace(f"LIS keep {old_index}")
						old[old_index] = None
					new_tail -= 1
					if not self.lis or new_tail < new_head:
						break

		while new_head <= new_tail:
			if debug:
				trace(f"new item {new_results[new_head].key!r}")
			new_parts[new_head] = self._create(
				new_results[new_head], _successor(new_parts, new_tail)
			)
			new_head += 1

		while old_head <= old_tail:
			part = old[old_head]
			if part is not None:
				if debug:
					trace(f"remove {old_head}")
				self._remove(part)
			old_head += 1

		if self.pool is not None:
			self.pool.detach_all(self.container)

		return [part for part in new_parts if part is not None]

	# ------------------------------------------------------------------
	# Part helpers
	# ------------------------------------------------------------------

	def _update(self, part: Part, result: RenderResult) -> Part:
		self.container.update(part, result)
		return part

	def _create(self, result: RenderResult, before: Part | None) -> Part:
		part: Part | None = None
		if self.pool is not None:
			part = self.pool.take(result.key, arbitrary=self.reuse)
			if part is not None:
				if part.attached:
					self.container.move(part, before)
				else:
					self.container.reattach(part, before)
		if part is None:
			part = self.container.create(result.key, before)
		self.container.update(part, result)
		return part

	def _remove(self, part: Part) -> None:
		if self.pool is None:
			self.container.remove(part)
			return
		evicted = self.pool.put(part)
		if evicted is not None and evicted is not part and evicted.attached:
			self.container.remove(evicted)

	def _remove_unused(
		self,
		old: list[Part | None],
		old_key_to_index: dict[Hashable, int],
		new_results: Sequence[RenderResult],
		new_head: int,
		new_tail: int,
	) -> bool:
		"""Remove every old part whose key is absent from the new range."""
		new_key_to_index = key_to_index_map(new_results, new_head, new_tail)
		removed = False
		for key, old_index in old_key_to_index.items():
			if key in new_key_to_index:
				continue
			part = old[old_index]
			if part is None:
				continue
			self._remove(part)
			old[old_index] = None
			removed = True
		return removed


def reconcile(
	container: Container,
	old_parts: Sequence[Part],
	new_results: Sequence[RenderResult],
	*,
	pool: ReusePool | None = None,
	lis: bool = False,
	reuse: bool = False,
) -> list[Part]:
	return Reconciler(container, pool=pool, lis=lis, reuse=reuse).reconcile(
		old_parts, new_results
	)


def _successor(new_parts: Sequence[Part | None], index: int) -> Part | None:
	if index + 1 < len(new_parts):
		return new_parts[index + 1]
	return None


def format_scan(
	old: Sequence[Part | None],
	new_results: Sequence[RenderResult],
	old_head: int,
	old_tail: int,
	new_head: int,
	new_tail: int,
	keep: set[int] | None = None,
) -> str:
	"""Render the pointer state of a scan as a small table of key rows."""

	def pointers(n: int, head: int, tail: int) -> list[str]:
		row: list[str] = []
		for i in range(n):
			if i == head and i == tail:
				row.append("se")
			elif i == head:
				row.append("s")
			elif i == tail:
				row.append("e")
			else:
				row.append("")
		return row

	old_keys = [str(p.key) if p is not None else "-" for p in old]
	new_keys = [str(r.key) for r in new_results]
	width = max((len(k) for k in [*old_keys, *new_keys]), default=1) + 2
	rows = [
		pointers(len(old), old_head, old_tail),
		old_keys,
		new_keys,
		pointers(len(new_results), new_head, new_tail),
	]
	rule = "+-" + "-" * (max(len(old), len(new_results)) * width)
	lines = [rule]
	lines.extend("| " + "".join(cell.rjust(width) for cell in row) for row in rows)
	if keep is not None:
		lines.append("| lis: " + " ".join(str(i) for i in sorted(keep)))
	lines.append(rule)
	return "\n".join(lines)
