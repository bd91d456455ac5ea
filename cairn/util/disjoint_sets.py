"""Disjoint-set forest (union-find) over the integers ``0..n-1``.

Used by dungeon generation to know when every room has been joined into a
single connected structure.
"""

from __future__ import annotations


class DisjointSets:
    """A forest of disjoint sets with union-by-size and path compression.

    Each element starts in its own singleton set. Sets are identified by a
    representative element returned from :meth:`find`.
    """

    def __init__(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"Universe size must be non-negative, got {n}")
        self._parent: list[int] = list(range(n))
        self._size: list[int] = [1] * n
        self._set_count = n

    def __len__(self) -> int:
        return len(self._parent)

    @property
    def set_count(self) -> int:
        """Number of distinct sets currently in the forest."""
        return self._set_count

    def _check(self, i: int) -> None:
        # Negative indices would silently wrap around on a list.
        if not 0 <= i < len(self._parent):
            raise IndexError(
                f"Element {i} out of range for {len(self._parent)} elements"
            )

    def find(self, i: int) -> int:
        """Return the representative of the set containing ``i``.

        Every node visited on the way up is repointed straight at the root.
        Iterative, so long parent chains cannot exhaust the call stack.
        """
        self._check(i)
        parent = self._parent
        root = i
        while parent[root] != root:
            root = parent[root]
        while parent[i] != root:
            parent[i], i = root, parent[i]
        return root

    def merge(self, i: int, j: int) -> int:
        """Join the sets containing ``i`` and ``j`` and return the merged size.

        The smaller set is hung under the root of the larger one. Merging two
        elements that already share a set changes nothing and returns that
        set's size.
        """
        i = self.find(i)
        j = self.find(j)
        if i != j:
            if self._size[i] < self._size[j]:
                i, j = j, i
            self._parent[j] = i
            self._size[i] += self._size[j]
            self._set_count -= 1
        return self._size[i]

    def size(self, i: int) -> int:
        """Size of the set containing ``i``."""
        return self._size[self.find(i)]

    def connected(self, i: int, j: int) -> bool:
        return self.find(i) == self.find(j)

    def __repr__(self) -> str:
        return f"DisjointSets(n={len(self)}, sets={self._set_count})"
