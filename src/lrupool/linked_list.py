"""Index-linked doubly-linked list over a shared NodeArena.

Handles carry their own prev/next links, so removal and promotion to the
front are O(1). Several lists may share one arena; each node belongs to
at most one of them at a time.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from lrupool.arena import NIL, Node, NodeArena
from lrupool.errors import HandleError


class LinkedList:
    def __init__(self, arena: NodeArena) -> None:
        self._arena = arena
        self._gen = 0
        self.init()

    def init(self) -> None:
        """Reset to an empty list.

        Nodes that were linked here are left detached; bumping the
        generation invalidates their membership without walking them.
        Their arena slots stay allocated: push them onto another list or
        retire them through the arena, otherwise they are never reused.
        """
        self._head = NIL
        self._tail = NIL
        self._len = 0
        self._gen += 1

    def __len__(self) -> int:
        return self._len

    def front(self) -> Optional[int]:
        return None if self._head == NIL else self._head

    def back(self) -> Optional[int]:
        return None if self._tail == NIL else self._tail

    def prev_of(self, handle: int) -> Optional[int]:
        prev = self._owned(handle).prev
        return None if prev == NIL else prev

    def push_front(self, value: Any = None) -> int:
        # Fresh storage; only used while building or topping up a pool
        handle = self._arena.allocate()
        self._arena[handle].value = value
        return self.push_handle_front(handle)

    def push_handle_front(self, handle: int) -> int:
        node = self._arena[handle]
        if node.retired or node.attached():
            raise HandleError(f"Handle {handle} is not detached")

        self._link_front(handle, node)
        node.owner = self
        node.gen = self._gen
        self._len += 1
        return handle

    def remove(self, handle: int) -> int:
        node = self._owned(handle)
        self._unlink(node)
        node.owner = None
        node.prev = node.next = NIL
        self._len -= 1
        return handle

    def move_to_front(self, handle: int) -> None:
        node = self._owned(handle)
        if handle == self._head:
            return
        self._unlink(node)
        self._link_front(handle, node)

    def __contains__(self, handle: object) -> bool:
        node = self._arena.get(handle)  # type: ignore[arg-type]
        return node is not None and node.owner is self and node.gen == self._gen

    def __iter__(self) -> Iterator[int]:
        # Front to back
        handle = self._head
        while handle != NIL:
            nxt = self._arena[handle].next
            yield handle
            handle = nxt

    def __reversed__(self) -> Iterator[int]:
        # Back to front
        handle = self._tail
        while handle != NIL:
            prev = self._arena[handle].prev
            yield handle
            handle = prev

    def _owned(self, handle: int) -> Node:
        if handle not in self:
            raise HandleError(f"Handle {handle!r} does not belong to this list")
        return self._arena[handle]

    def _link_front(self, handle: int, node: Node) -> None:
        node.prev = NIL
        node.next = self._head
        if self._head != NIL:
            self._arena[self._head].prev = handle
        else:
            self._tail = handle
        self._head = handle

    def _unlink(self, node: Node) -> None:
        if node.prev != NIL:
            self._arena[node.prev].next = node.next
        else:
            self._head = node.next

        if node.next != NIL:
            self._arena[node.next].prev = node.prev
        else:
            self._tail = node.prev
