"""Incremental vertex neighbour store built from triangle index lists.

Triangles arrive as a flat sequence of vertex ids, three per face, exactly as
an icosphere builder emits them. Each vertex ends up listing every other vertex
it shares a face with, in the order those neighbours were first discovered.
"""

import logging
import operator
from collections.abc import Iterator, Sequence

import torch

from meshadjacency.neighbors._adjacency import Adjacency

logger = logging.getLogger(__name__)


def _check_integer_tensor(tensor: torch.Tensor) -> None:
    if tensor.is_floating_point() or tensor.is_complex() or tensor.dtype == torch.bool:
        raise TypeError(
            f"Vertex ids must be an integer tensor, got {tensor.dtype=}"
        )


def _as_vertex_id(value) -> int:
    """Convert a Python/NumPy integer or a 0-d integer tensor to a plain int."""
    if isinstance(value, torch.Tensor):
        _check_integer_tensor(value)
        return int(value.item())
    if isinstance(value, bool):
        raise TypeError(f"Vertex ids must be integers, got {value=}")
    return operator.index(value)


def _flatten_indices(indices: Sequence[int] | torch.Tensor) -> list[int]:
    """Normalize an index sequence or integer tensor to a flat list of ints."""
    if isinstance(indices, torch.Tensor):
        _check_integer_tensor(indices)
        return indices.reshape(-1).tolist()
    return [_as_vertex_id(i) for i in indices]


class AdjacencyStore:
    """Neighbours of every vertex of a triangulated (typically icosphere) mesh.

    On an icosphere every vertex has 5 or 6 neighbours. Vertices that never
    appear in an inserted triangle have no entry at all.

    Args:
        subdivisions: Subdivision level of the mesh the store describes. Carried
            for the caller's bookkeeping; it does not affect adjacency.

    Example:
        >>> store = AdjacencyStore.from_indices([0, 1, 2, 0, 2, 3])
        >>> store.neighbours(0)
        (1, 2, 3)
        >>> store.neighbours(3)
        (0, 2)
        >>> store.neighbours(7) is None
        True
    """

    def __init__(self, subdivisions: int = 0):
        self.subdivisions = subdivisions
        self._map: dict[int, list[int]] = {}

    @classmethod
    def new(cls) -> "AdjacencyStore":
        """Create an empty store."""
        return cls()

    @classmethod
    def from_indices(
        cls,
        indices: Sequence[int] | torch.Tensor,
        subdivisions: int = 0,
    ) -> "AdjacencyStore":
        """Build a store from the flattened triangle indices of a whole mesh.

        Args:
            indices: Vertex ids, three consecutive entries per triangle. Integer
                tensors of any shape are flattened in row-major order.
            subdivisions: Subdivision level recorded on the store.

        Returns:
            Store holding the neighbours of every vertex referenced by indices.

        Raises:
            ValueError: If the number of indices is not a multiple of 3.
        """
        store = cls(subdivisions=subdivisions)
        store.add_triangle_indices(indices)
        return store

    @classmethod
    def from_cells(
        cls,
        cells: torch.Tensor,
        subdivisions: int = 0,
    ) -> "AdjacencyStore":
        """Build a store from an (n_cells, 3) triangle connectivity tensor."""
        if cells.ndim != 2 or cells.shape[1] != 3:
            raise ValueError(
                f"Cells must have shape (n_cells, 3), but got {tuple(cells.shape)=}"
            )
        return cls.from_indices(cells, subdivisions=subdivisions)

    def add_triangle_indices(self, triangles: Sequence[int] | torch.Tensor) -> None:
        """Add triangles given as a flat sequence of vertex ids.

        Existing neighbour lists are extended, never replaced.

        Raises:
            ValueError: If the number of indices is not a multiple of 3. The
                store is left untouched in that case.
        """
        flat = _flatten_indices(triangles)
        if len(flat) % 3 != 0:
            raise ValueError(
                f"Triangle indices must come in groups of 3, but got {len(flat)=}"
            )

        for i in range(0, len(flat), 3):
            self._add_triangle(flat[i], flat[i + 1], flat[i + 2])

        logger.debug(
            "Added %d triangles; store now tracks %d vertices",
            len(flat) // 3,
            len(self._map),
        )

    def _add_triangle(self, a: int, b: int, c: int) -> None:
        # Each rotation makes one corner the owner of the other two.
        for owner, first, second in ((a, b, c), (b, c, a), (c, a, b)):
            neighbours = self._map.setdefault(owner, [])
            if first not in neighbours:
                neighbours.append(first)
            if second not in neighbours:
                neighbours.append(second)

    def neighbours(self, vertex_id: int | torch.Tensor) -> tuple[int, ...] | None:
        """Neighbours of a vertex, or None if it never appeared in a triangle.

        On an icosphere the result has length 5 or 6.
        """
        neighbours = self._map.get(_as_vertex_id(vertex_id))
        if neighbours is None:
            return None
        return tuple(neighbours)

    def degree(self, vertex_id: int | torch.Tensor) -> int:
        """Number of neighbours of a vertex (0 for unknown vertices)."""
        return len(self._map.get(_as_vertex_id(vertex_id), ()))

    def vertex_ids(self) -> Iterator[int]:
        """Iterate over vertices with an entry, in the order they were first seen."""
        return iter(self._map)

    def copy(self) -> "AdjacencyStore":
        """Return an independent copy; later insertions do not affect the original."""
        other = type(self)(subdivisions=self.subdivisions)
        other._map = {vertex: list(nbrs) for vertex, nbrs in self._map.items()}
        return other

    def to_adjacency(
        self,
        n_points: int | None = None,
        device: torch.device | str = "cpu",
    ) -> Adjacency:
        """Export to offset-indices encoding indexed directly by vertex id.

        Args:
            n_points: Number of rows in the result. Defaults to the largest
                vertex id plus one. Rows for vertices without an entry are empty.
            device: Device for the returned tensors.

        Returns:
            Adjacency whose to_list()[i] equals neighbours(i) (or [] if absent).

        Raises:
            ValueError: If a vertex id is negative or does not fit in n_points.
        """
        if self._map and min(self._map) < 0:
            raise ValueError(
                f"Vertex ids must be non-negative for dense export, got {min(self._map)=}"
            )
        required = max(self._map, default=-1) + 1
        if n_points is None:
            n_points = required
        elif n_points < required:
            raise ValueError(
                f"n_points must cover every stored vertex id, but got "
                f"{n_points=} < {required=}"
            )

        rows = [self._map.get(i, []) for i in range(n_points)]

        offsets = torch.zeros(n_points + 1, dtype=torch.int64, device=device)
        offsets[1:] = torch.cumsum(
            torch.tensor([len(row) for row in rows], dtype=torch.int64, device=device),
            dim=0,
        )
        indices = torch.tensor(
            [n for row in rows for n in row], dtype=torch.int64, device=device
        )

        return Adjacency(offsets=offsets, indices=indices)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, vertex_id: object) -> bool:
        return _as_vertex_id(vertex_id) in self._map

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(subdivisions={self.subdivisions}, "
            f"n_vertices={len(self._map)})"
        )
