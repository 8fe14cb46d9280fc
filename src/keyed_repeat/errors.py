from __future__ import annotations

from typing import Literal

ErrorCode = Literal[
	"options",
	"duplicate_key",
	"container.create",
	"container.move",
	"container.remove",
	"container.detach",
	"container.reattach",
]


class RepeatError(Exception):
	"""Base class for errors raised by keyed_repeat."""

	code: ErrorCode | None = None


class OptionsError(RepeatError, ValueError):
	code = "options"


class DuplicateKeyError(RepeatError, ValueError):
	"""Raised for repeated keys within one pass when ``strict_keys`` is set."""

	code = "duplicate_key"
	key: object
	index: int

	def __init__(self, key: object, index: int) -> None:
		super().__init__(f"Duplicate key {key!r} at index {index}")
		self.key = key
		self.index = index


class ContainerError(RepeatError, RuntimeError):
	"""A container primitive was used against a part in the wrong state."""

	def __init__(self, message: str, *, code: ErrorCode) -> None:
		super().__init__(message)
		self.code = code
