from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias, TypeVar

from keyed_repeat.errors import DuplicateKeyError

T = TypeVar("T")

Key: TypeAlias = Hashable
Template: TypeAlias = Callable[[T, int], Any]
KeyFn: TypeAlias = Callable[[T, int], Key]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RenderResult:
	"""Template output for one item, tagged with the item's key for this pass."""

	key: Key
	value: Any
	index: int


def build_results(
	items: Iterable[T],
	template: Template[T],
	key_fn: KeyFn[T] | None = None,
	*,
	strict_keys: bool = False,
) -> list[RenderResult]:
	"""Map ``items`` through ``template`` and tag each output with its key.

	Keys default to the positional index. Duplicate keys are allowed unless
	``strict_keys`` is set; the reconciler's key maps then resolve to the last
	item carrying the key.
	"""
	results: list[RenderResult] = []
	seen: set[Key] = set()
	duplicates: list[Key] = []
	for index, item in enumerate(items):
		key = key_fn(item, index) if key_fn is not None else index
		if key_fn is not None:
			if key in seen:
				if strict_keys:
					raise DuplicateKeyError(key, index)
				duplicates.append(key)
			seen.add(key)
		results.append(RenderResult(key=key, value=template(item, index), index=index))
	if duplicates:
		logger.warning(
			"Duplicate keys in repeat(); last item wins for identity matching: %r",
			duplicates,
		)
	return results


def result_keys(results: Iterable[RenderResult]) -> list[Key]:
	return [r.key for r in results]
