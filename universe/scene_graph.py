"""
TransformArena — flat scene graph of transform nodes.

Nodes live in parallel arrays and are addressed by integer handles:

    arena = TransformArena()
    plane = arena.add("Mars/plane", plane_matrix)
    pivot = arena.add("Mars/pivot", parent=plane)
    body  = arena.add("Mars",       parent=pivot)

    arena.set_local(pivot, rotation_y(angle))
    arena.world(body)          # parent chain composed root → node

A node's parent must already exist when it is added, so the structure is
always a forest: no cycles, no shared children. World matrices are cached
and invalidated for the whole subtree when a local transform changes.
"""

from __future__ import annotations
from typing import Dict, List, Optional

import numpy as np

from core.transforms import identity, position_of


ROOT = -1


class TransformArena:

    def __init__(self):
        self._names:    List[str] = []
        self._parent:   List[int] = []
        self._children: List[List[int]] = []
        self._local:    List[np.ndarray] = []
        self._world:    List[Optional[np.ndarray]] = []
        self._by_name:  Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._names)

    # ------------------------------------------------------------------

    def add(self, name: str, local: Optional[np.ndarray] = None,
            parent: int = ROOT) -> int:
        """Append a node and return its handle."""
        if name in self._by_name:
            raise ValueError(f"node '{name}' already exists")
        if parent != ROOT and not 0 <= parent < len(self._names):
            raise IndexError(f"parent handle {parent} does not exist")

        handle = len(self._names)
        self._names.append(name)
        self._parent.append(parent)
        self._children.append([])
        self._local.append(identity() if local is None else np.array(local, dtype=np.float64))
        self._world.append(None)
        self._by_name[name] = handle
        if parent != ROOT:
            self._children[parent].append(handle)
        return handle

    def handle(self, name: str) -> int:
        return self._by_name[name]

    def name(self, handle: int) -> str:
        return self._names[handle]

    def parent(self, handle: int) -> int:
        return self._parent[handle]

    def children(self, handle: int) -> List[int]:
        return list(self._children[handle])

    # ------------------------------------------------------------------

    def local(self, handle: int) -> np.ndarray:
        return self._local[handle]

    def set_local(self, handle: int, matrix: np.ndarray):
        self._local[handle] = matrix
        self._invalidate(handle)

    def _invalidate(self, handle: int):
        stack = [handle]
        while stack:
            h = stack.pop()
            if self._world[h] is None and h != handle:
                continue          # subtree already dirty
            self._world[h] = None
            stack.extend(self._children[h])

    def world(self, handle: int) -> np.ndarray:
        """World matrix of a node (root → node composition)."""
        cached = self._world[handle]
        if cached is not None:
            return cached

        # walk up to the nearest clean ancestor, then compose downwards
        chain = []
        h = handle
        while h != ROOT and self._world[h] is None:
            chain.append(h)
            h = self._parent[h]
        acc = identity() if h == ROOT else self._world[h]
        for h in reversed(chain):
            acc = acc @ self._local[h]
            self._world[h] = acc
        return acc

    def world_position(self, handle: int) -> np.ndarray:
        return position_of(self.world(handle))
