from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator

from keyed_repeat.container import Container, Part

logger = logging.getLogger(__name__)


class BindingSiteCache:
	"""Parts committed by the last pass, per binding site.

	A binding site is any hashable handle for the place a list is rendered
	into; ``Repeat.commit`` uses the container itself. Entries are replaced
	wholesale at the end of every pass and live until ``discard`` or
	``teardown`` is called for the site.
	"""

	__slots__: tuple[str, ...] = ("_entries",)
	_entries: dict[Hashable, list[Part]]

	def __init__(self) -> None:
		self._entries = {}

	def __len__(self) -> int:
		return len(self._entries)

	def __contains__(self, site: object) -> bool:
		return site in self._entries

	def __iter__(self) -> Iterator[Hashable]:
		return iter(self._entries)

	def get(self, site: Hashable) -> list[Part]:
		"""Copy of the parts committed for ``site``; empty for an unknown site."""
		return list(self._entries.get(site, ()))

	def set(self, site: Hashable, parts: list[Part]) -> None:
		self._entries[site] = list(parts)

	def discard(self, site: Hashable) -> list[Part]:
		"""Forget ``site`` without touching its output."""
		return self._entries.pop(site, [])

	def teardown(self, site: Hashable, container: Container) -> None:
		"""Forget ``site`` and remove every part it still has attached."""
		parts = self.discard(site)
		for part in parts:
			if part.attached:
				container.remove(part)
		logger.debug("Tore down binding site %r (%d parts)", site, len(parts))

	def clear(self) -> None:
		self._entries.clear()


default_cache = BindingSiteCache()
