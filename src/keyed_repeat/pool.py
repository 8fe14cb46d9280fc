from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from keyed_repeat.container import Container, Part

logger = logging.getLogger(__name__)


class ReusePool:
	"""Detached parts kept alive for reuse, keyed by their last key.

	A pool passed to ``RepeatOptions(pool=...)`` survives across passes and
	must only be used with a single container. Pools created with
	``pool=True`` live for one pass.
	"""

	__slots__: tuple[str, ...] = ("_parts",)
	_parts: dict[Hashable, "Part"]

	def __init__(self) -> None:
		self._parts = {}

	def __len__(self) -> int:
		return len(self._parts)

	def __contains__(self, key: object) -> bool:
		return key in self._parts

	def __iter__(self) -> Iterator["Part"]:
		return iter(self._parts.values())

	def keys(self) -> list[Hashable]:
		return list(self._parts)

	def put(self, part: "Part") -> "Part | None":
		"""Store ``part`` under its key, returning any part it displaced."""
		evicted = self._parts.pop(part.key, None)
		self._parts[part.key] = part
		return evicted

	def take(self, key: Hashable, *, arbitrary: bool = False) -> "Part | None":
		"""Remove and return the part pooled under ``key``.

		With ``arbitrary`` set, fall back to the oldest pooled part when no
		exact match exists. The caller is responsible for re-keying it.
		"""
		part = self._parts.pop(key, None)
		if part is None and arbitrary and self._parts:
			oldest = next(iter(self._parts))
			part = self._parts.pop(oldest)
			logger.debug("Reusing pooled part %r for key %r", oldest, key)
		return part

	def detach_all(self, container: "Container") -> None:
		"""Detach the output of every pooled part still in ``container``."""
		for part in self._parts.values():
			if part.attached:
				container.detach(part)

	def clear(self, container: "Container | None" = None) -> None:
		"""Drop every pooled part, removing attached output when a container is given."""
		if container is not None:
			for part in self._parts.values():
				if part.attached:
					container.remove(part)
		self._parts.clear()
