from meshadjacency.neighbors import Adjacency, AdjacencyStore

__all__ = [
    "Adjacency",
    "AdjacencyStore",
]
