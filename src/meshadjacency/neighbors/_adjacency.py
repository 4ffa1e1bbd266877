"""Dense export format for vertex neighbour lists.

Neighbour lists are ragged (5 or 6 entries on an icosphere, arbitrary on a
general mesh), so they are packed with offset-indices encoding into two flat
int64 tensors.
"""

import torch
from tensordict import tensorclass


@tensorclass
class Adjacency:
    """Ragged neighbour lists stored with offset-indices encoding.

    Attributes:
        offsets: Indices into the indices array marking the start of each list.
            Shape (n_sources + 1,), dtype int64. The i-th vertex's neighbours are
            indices[offsets[i]:offsets[i+1]].
        indices: Flattened array of all neighbour ids.
            Shape (total_neighbors,), dtype int64.

    Example:
        >>> # Single triangle (0, 1, 2)
        >>> adj = Adjacency(
        ...     offsets=torch.tensor([0, 2, 4, 6]),
        ...     indices=torch.tensor([1, 2, 2, 0, 0, 1]),
        ... )
        >>> adj.to_list()
        [[1, 2], [2, 0], [0, 1]]

        >>> # Vertex 1 never appeared in a triangle
        >>> adj = Adjacency(
        ...     offsets=torch.tensor([0, 2, 2, 4]),
        ...     indices=torch.tensor([2, 3, 0, 3]),
        ... )
        >>> adj.to_list()
        [[2, 3], [], [0, 3]]
    """

    offsets: torch.Tensor  # shape: (n_sources + 1,), dtype: int64
    indices: torch.Tensor  # shape: (total_neighbors,), dtype: int64

    def __post_init__(self):
        if torch.compiler.is_compiling():
            return

        # One row boundary per vertex plus the closing one; a store with no
        # vertices still exports offsets == [0].
        n_boundaries = len(self.offsets)
        if n_boundaries == 0:
            raise ValueError(
                f"Neighbour offsets need one boundary per vertex plus a closing one, "
                f"so at least [0], but got {n_boundaries=}"
            )

        first_row_start = self.offsets[0].item()
        if first_row_start != 0:
            raise ValueError(
                f"Vertex 0's neighbour row must start at position 0, "
                f"but got {first_row_start=}"
            )

        rows_end = self.offsets[-1].item()
        n_neighbour_ids = len(self.indices)
        if rows_end != n_neighbour_ids:
            raise ValueError(
                f"Neighbour rows must end exactly at the last neighbour id, "
                f"but got {rows_end=} != {n_neighbour_ids=}"
            )

    def to_list(self) -> list[list[int]]:
        """Convert to a ragged list-of-lists, preserving stored neighbour order.

        Returns:
            Ragged list where result[i] contains the neighbours of vertex i.
            Empty sublists represent vertices with no neighbours.
        """
        offsets = self.offsets.cpu().tolist()
        indices = self.indices.cpu().tolist()

        return [
            indices[start:end] for start, end in zip(offsets[:-1], offsets[1:])
        ]

    def counts(self) -> torch.Tensor:
        """Number of neighbours of each vertex, shape (n_sources,)."""
        return self.offsets[1:] - self.offsets[:-1]

    @property
    def n_sources(self) -> int:
        """Number of vertices covered by the adjacency."""
        return len(self.offsets) - 1

    @property
    def n_total_neighbors(self) -> int:
        """Total number of directed neighbour relationships (twice the edge count)."""
        return len(self.indices)
