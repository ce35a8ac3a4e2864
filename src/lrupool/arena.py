"""Node storage addressed by stable integer handles.

Every node the cache will ever use lives in one NodeArena. Lists link
nodes together by index, so moving a node between lists never allocates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional

from lrupool.errors import HandleError

if TYPE_CHECKING:
    from lrupool.linked_list import LinkedList

# Marks a missing prev/next link
NIL = -1


@dataclass(slots=True)
class Node:
    # Payload + linkage; owner/gen record list membership
    key: Any = None
    value: Any = None
    expires_at: Optional[float] = None  # time.monotonic()
    prev: int = NIL
    next: int = NIL
    owner: Optional["LinkedList"] = None
    gen: int = 0
    retired: bool = False

    def attached(self) -> bool:
        # Stale owners from a list reset by init() do not count
        return self.owner is not None and self.owner._gen == self.gen

    def clear(self) -> None:
        self.key = None
        self.value = None
        self.expires_at = None


class NodeArena:
    def __init__(self) -> None:
        self._nodes: List[Node] = []
        self._retired: List[int] = []

    def allocate(self) -> int:
        """Return a handle to a blank, detached node.

        Retired slots are reused before the backing storage grows.
        """
        if self._retired:
            handle = self._retired.pop()
            self._nodes[handle].retired = False
            return handle

        self._nodes.append(Node())
        return len(self._nodes) - 1

    def retire(self, handle: int) -> None:
        node = self[handle]
        if node.retired or node.attached():
            raise HandleError(f"Cannot retire handle {handle}: still in use")

        node.clear()
        node.owner = None
        node.prev = node.next = NIL
        node.retired = True
        self._retired.append(handle)

    def get(self, handle: int) -> Optional[Node]:
        if not isinstance(handle, int) or handle < 0 or handle >= len(self._nodes):
            return None
        return self._nodes[handle]

    def __getitem__(self, handle: int) -> Node:
        node = self.get(handle)
        if node is None:
            raise HandleError(f"Unknown handle: {handle!r}")
        return node

    def __len__(self) -> int:
        # Live nodes only
        return len(self._nodes) - len(self._retired)

    @property
    def slots(self) -> int:
        return len(self._nodes)
