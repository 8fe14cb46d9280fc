from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from keyed_repeat.cache import BindingSiteCache, default_cache
from keyed_repeat.container import Container, Part
from keyed_repeat.options import RepeatOptions
from keyed_repeat.reconciler import Reconciler
from keyed_repeat.results import KeyFn, Template, build_results, result_keys

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Repeat(Generic[T]):
	"""A keyed list waiting to be committed to a binding site.

	Created by ``repeat()``. Each ``commit`` is one reconciliation pass: the
	parts cached for the site from the previous pass are reconciled against
	freshly built results, and the new part list replaces the cache entry.
	"""

	items: Iterable[T]
	template: Template[T]
	key: KeyFn[T] | None
	options: RepeatOptions

	def commit(
		self,
		container: Container,
		*,
		cache: BindingSiteCache | None = None,
		site: Hashable | None = None,
	) -> list[Part]:
		"""Reconcile ``container`` with ``items``.

		The binding site defaults to the container itself. Pass ``site`` when
		one container hosts several independent lists.
		"""
		if cache is None:
			cache = default_cache
		if site is None:
			site = container
		results = build_results(
			self.items,
			self.template,
			self.key,
			strict_keys=self.options.strict_keys,
		)
		old_parts = cache.get(site)
		reconciler = Reconciler(
			container,
			pool=self.options.make_pool(),
			lis=self.options.lis,
			reuse=self.options.reuse,
		)
		new_parts = reconciler.reconcile(old_parts, results)
		cache.set(site, new_parts)
		if logger.isEnabledFor(logging.DEBUG):
			logger.debug(
				"Committed %d parts (was %d) to %r: %r",
				len(new_parts),
				len(old_parts),
				site,
				result_keys(results),
			)
		return new_parts


def repeat(
	items: Iterable[T],
	template: Template[T],
	key: KeyFn[T] | None = None,
	options: RepeatOptions | Mapping[str, Any] | None = None,
) -> Repeat[T]:
	"""Render ``items`` as a keyed list.

	Args:
		items: Items for this pass.
		template: ``template(item, index)`` returns the value rendered for an item.
		key: ``key(item, index)`` returns the item's identity. Defaults to the
			positional index.
		options: ``RepeatOptions`` or a mapping of its fields.

	Returns:
		A ``Repeat`` directive; call ``commit(container)`` to run the pass.
	"""
	if not callable(template):
		raise TypeError("repeat() template must be callable")
	if key is not None and not callable(key):
		raise TypeError("repeat() key must be callable or None")
	return Repeat(
		items=items, template=template, key=key, options=RepeatOptions.coerce(options)
	)
