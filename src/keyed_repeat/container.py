from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from keyed_repeat.errors import ContainerError, ErrorCode
from keyed_repeat.operations import (
	CreateOperation,
	DetachOperation,
	MoveOperation,
	Operation,
	ReattachOperation,
	RemoveOperation,
	UpdateOperation,
)
from keyed_repeat.results import RenderResult

NodeKind = Literal["start", "content", "end"]


@dataclass(eq=False, slots=True)
class Node:
	kind: NodeKind
	value: Any = None
	owner: "Part | None" = None

	def __repr__(self) -> str:
		owner = self.owner.key if self.owner is not None else None
		return f"Node({self.kind}, owner={owner!r})"


@dataclass(eq=False, slots=True)
class Part:
	"""A keyed run of output between a start and an end marker.

	Parts compare by identity. ``attached`` is False once the run has been
	removed or detached; detached runs keep their nodes in ``pooled_nodes``.
	"""

	key: Hashable
	start: Node
	end: Node
	nodes: list[Node]
	value: Any = None
	attached: bool = True
	pooled_nodes: list[Node] | None = field(default=None, repr=False)

	def __repr__(self) -> str:
		return f"Part(key={self.key!r}, attached={self.attached})"


class Container(Protocol):
	"""Ordered output a list of parts lives in.

	``before=None`` always means the end of the container.
	"""

	def create(self, key: Hashable, before: Part | None) -> Part: ...

	def update(self, part: Part, result: RenderResult) -> None: ...

	def move(self, part: Part, before: Part | None) -> None: ...

	def remove(self, part: Part) -> None: ...

	def detach(self, part: Part) -> None: ...

	def reattach(self, part: Part, before: Part | None) -> None: ...


class MemoryContainer:
	"""Reference container backed by a flat list of marker and content nodes.

	Each part owns ``[start, content, end]``. Every primitive that changes the
	node list appends a record to ``operations``.
	"""

	nodes: list[Node]
	operations: list[Operation]

	def __init__(self) -> None:
		self._start = Node("start")
		self._end = Node("end")
		self.nodes = [self._start, self._end]
		self.operations = []

	# ------------------------------------------------------------------
	# Primitives
	# ------------------------------------------------------------------

	def create(self, key: Hashable, before: Part | None) -> Part:
		start = Node("start")
		content = Node("content")
		end = Node("end")
		part = Part(key=key, start=start, end=end, nodes=[start, content, end])
		for node in part.nodes:
			node.owner = part
		at = self._target_index(before, "container.create")
		self.nodes[at:at] = part.nodes
		self.operations.append(
			CreateOperation(type="create", key=key, before=_key_of(before))
		)
		return part

	def update(self, part: Part, result: RenderResult) -> None:
		part.key = result.key
		part.value = result.value
		for node in part.nodes:
			if node.kind == "content":
				node.value = result.value
		self.operations.append(
			UpdateOperation(type="update", key=part.key, value=result.value)
		)

	def move(self, part: Part, before: Part | None) -> None:
		if not part.attached:
			raise ContainerError(
				f"Cannot move detached part {part.key!r}", code="container.move"
			)
		lo, hi = self._span(part, "container.move")
		at = self._target_index(before, "container.move")
		if at == hi:
			return
		run = self.nodes[lo:hi]
		del self.nodes[lo:hi]
		if at > lo:
			at -= hi - lo
		self.nodes[at:at] = run
		self.operations.append(
			MoveOperation(type="move", key=part.key, before=_key_of(before))
		)

	def remove(self, part: Part) -> None:
		if not part.attached:
			raise ContainerError(
				f"Cannot remove detached part {part.key!r}", code="container.remove"
			)
		lo, hi = self._span(part, "container.remove")
		del self.nodes[lo:hi]
		part.attached = False
		part.pooled_nodes = None
		self.operations.append(RemoveOperation(type="remove", key=part.key))

	def detach(self, part: Part) -> None:
		if not part.attached:
			raise ContainerError(
				f"Part {part.key!r} is already detached", code="container.detach"
			)
		lo, hi = self._span(part, "container.detach")
		part.pooled_nodes = self.nodes[lo:hi]
		del self.nodes[lo:hi]
		part.attached = False
		self.operations.append(DetachOperation(type="detach", key=part.key))

	def reattach(self, part: Part, before: Part | None) -> None:
		if part.attached or part.pooled_nodes is None:
			raise ContainerError(
				f"Part {part.key!r} has no detached output to reattach",
				code="container.reattach",
			)
		at = self._target_index(before, "container.reattach")
		self.nodes[at:at] = part.pooled_nodes
		part.pooled_nodes = None
		part.attached = True
		self.operations.append(
			ReattachOperation(type="reattach", key=part.key, before=_key_of(before))
		)

	# ------------------------------------------------------------------
	# Inspection
	# ------------------------------------------------------------------

	def parts(self) -> list[Part]:
		return [
			node.owner
			for node in self.nodes
			if node.kind == "start" and node.owner is not None
		]

	def keys(self) -> list[Hashable]:
		return [part.key for part in self.parts()]

	def values(self) -> list[Any]:
		return [node.value for node in self.nodes if node.kind == "content"]

	def reset_operations(self) -> list[Operation]:
		ops = self.operations
		self.operations = []
		return ops

	# ------------------------------------------------------------------
	# Helpers
	# ------------------------------------------------------------------

	def _index(self, node: Node, code: ErrorCode) -> int:
		for i, candidate in enumerate(self.nodes):
			if candidate is node:
				return i
		raise ContainerError(f"{node!r} is not in this container", code=code)

	def _span(self, part: Part, code: ErrorCode) -> tuple[int, int]:
		return self._index(part.start, code), self._index(part.end, code) + 1

	def _target_index(self, before: Part | None, code: ErrorCode) -> int:
		if before is None:
			return self._index(self._end, code)
		if not before.attached:
			raise ContainerError(
				f"Cannot insert before detached part {before.key!r}", code=code
			)
		return self._index(before.start, code)


def _key_of(part: Part | None) -> Hashable | None:
	return part.key if part is not None else None
