from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from keyed_repeat.errors import OptionsError
from keyed_repeat.pool import ReusePool


@dataclass(frozen=True, slots=True)
class RepeatOptions:
	"""Reconciliation options for one ``repeat()`` directive.

	Attributes:
		pool: ``True`` pools removed parts for the current pass only. A
			``ReusePool`` instance is used as-is and keeps parts across passes.
		reuse: Allow any pooled part to stand in for a new key. Implies a
			transient pool when ``pool`` is ``False``.
		lis: Skip moves for parts already in increasing old order.
		strict_keys: Raise ``DuplicateKeyError`` on repeated keys instead of
			letting the last item win.
	"""

	pool: bool | ReusePool = False
	reuse: bool = False
	lis: bool = False
	strict_keys: bool = False

	def __post_init__(self) -> None:
		if not isinstance(self.pool, (bool, ReusePool)):
			raise TypeError(
				f"pool must be a bool or ReusePool, got {type(self.pool).__name__}"
			)
		for name in ("reuse", "lis", "strict_keys"):
			value = getattr(self, name)
			if not isinstance(value, bool):
				raise TypeError(f"{name} must be a bool, got {type(value).__name__}")

	@property
	def pooling(self) -> bool:
		return isinstance(self.pool, ReusePool) or self.pool or self.reuse

	def make_pool(self) -> ReusePool | None:
		"""Pool to use for one pass, or None when pooling is off."""
		if isinstance(self.pool, ReusePool):
			return self.pool
		if self.pooling:
			return ReusePool()
		return None

	@classmethod
	def coerce(cls, value: "RepeatOptions | Mapping[str, Any] | None") -> RepeatOptions:
		if value is None:
			return cls()
		if isinstance(value, RepeatOptions):
			return value
		if isinstance(value, Mapping):
			known = {f.name for f in fields(cls)}
			unknown = sorted(str(k) for k in value if k not in known)
			if unknown:
				raise OptionsError(f"Unknown repeat option(s): {', '.join(unknown)}")
			return cls(**value)
		raise TypeError(
			f"options must be RepeatOptions, a mapping or None, got {type(value).__name__}"
		)
