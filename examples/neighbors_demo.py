"""Demonstration of vertex neighbour indexing with meshadjacency.

This script builds an AdjacencyStore for icospheres of increasing subdivision
level and shows:
- Per-vertex neighbour lookup
- Valence statistics (5 at the original icosahedron corners, 6 elsewhere)
- Dense offset-indices export
"""

import pyvista as pv
import torch

from meshadjacency import AdjacencyStore

print("=" * 70)
print("ICOSPHERE NEIGHBOUR DEMO")
print("=" * 70)

for nsub in range(1, 4):
    print(f"\n### Icosphere with {nsub} subdivision(s)")
    print("-" * 70)

    pv_mesh = pv.Icosphere(radius=1.0, nsub=nsub)
    cells = torch.as_tensor(pv_mesh.faces.reshape(-1, 4)[:, 1:], dtype=torch.int64)

    store = AdjacencyStore.from_cells(cells, subdivisions=nsub)
    print(store)
    print(f"Mesh: {pv_mesh.n_points} points, {pv_mesh.n_cells} cells")

    print(f"  Vertex 0 neighbours: {store.neighbours(0)}")
    last = pv_mesh.n_points - 1
    print(f"  Vertex {last} neighbours: {store.neighbours(last)}")
    # One past the last vertex was never part of a triangle
    print(f"  Vertex {last + 1} neighbours: {store.neighbours(last + 1)}")

    adj = store.to_adjacency(n_points=pv_mesh.n_points)
    degrees = adj.counts()
    print(f"  Total edges: {adj.n_total_neighbors // 2}")  # Divide by 2 (bidirectional)
    print(f"  Valence 5 vertices: {int((degrees == 5).sum())}")
    print(f"  Valence 6 vertices: {int((degrees == 6).sum())}")

print("\n" + "=" * 70)
print("DEMO COMPLETE")
print("=" * 70)
