"""Vertex neighbour indexing for triangulated meshes.

The AdjacencyStore accumulates, triangle by triangle, the set of vertices that
share a face with each vertex. It can be exported to an Adjacency tensorclass
using offset-indices encoding for dense, GPU-compatible consumption.
"""

from meshadjacency.neighbors._adjacency import Adjacency
from meshadjacency.neighbors._store import AdjacencyStore

__all__ = [
    "Adjacency",
    "AdjacencyStore",
]
