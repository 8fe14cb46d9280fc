"""Typed operation records for the in-memory container.

Every container primitive appends one record to ``MemoryContainer.operations``.
Records are plain dicts so a pass can be logged, compared in tests, or dumped
as JSON by the CLI.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterable
from typing import Any, Literal, TypeAlias, TypedDict

OperationType: TypeAlias = Literal[
	"create", "update", "move", "remove", "detach", "reattach"
]


class CreateOperation(TypedDict):
	type: Literal["create"]
	key: Hashable
	before: Hashable | None


class UpdateOperation(TypedDict):
	type: Literal["update"]
	key: Hashable
	value: Any


class MoveOperation(TypedDict):
	type: Literal["move"]
	key: Hashable
	before: Hashable | None


class RemoveOperation(TypedDict):
	type: Literal["remove"]
	key: Hashable


class DetachOperation(TypedDict):
	type: Literal["detach"]
	key: Hashable


class ReattachOperation(TypedDict):
	type: Literal["reattach"]
	key: Hashable
	before: Hashable | None


Operation: TypeAlias = (
	CreateOperation
	| UpdateOperation
	| MoveOperation
	| RemoveOperation
	| DetachOperation
	| ReattachOperation
)


def count_operations(ops: Iterable[Operation]) -> Counter[str]:
	return Counter(op["type"] for op in ops)
