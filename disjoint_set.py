from typing import List


# --- Disjoint Set Union (DSU) Data Structure for Kruskal's ---
# Tracks connected components over node ids 0..n-1.
class DisjointSet:
    def __init__(self, n: int) -> None:
        self.parent: List[int] = []
        self.make_set(n)

    def make_set(self, n: int) -> None:
        # Every node starts as its own parent (a set of one).
        self.parent = list(range(n))

    def find(self, x: int) -> int:
        """Return the root of x's component, re-pointing the visited path at it."""
        if x < 0:
            raise IndexError(f"node {x} is outside 0..{len(self.parent) - 1}")
        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        # Second pass: path compression
        while self.parent[x] != root:
            next_node = self.parent[x]
            self.parent[x] = root
            x = next_node
        return root

    def union(self, x: int, y: int) -> None:
        # The root of x always becomes the new root; no rank balancing.
        root_x = self.find(x)
        root_y = self.find(y)
        self.parent[root_y] = root_x

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def components(self) -> int:
        return sum(1 for i in range(len(self.parent)) if self.find(i) == i)

    def __len__(self) -> int:
        return len(self.parent)

    def __repr__(self) -> str:
        return f"DisjointSet({self.parent})"
