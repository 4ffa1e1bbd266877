"""Pytest configuration and shared fixtures for meshadjacency tests.

All functions and fixtures defined here are automatically available to all test
files without explicit imports.
"""

import pytest
import torch


### Pytest Hooks ###


def pytest_collection_modifyitems(config, items):
    """Skip tests marked with 'cuda' if CUDA is not available."""
    if torch.cuda.is_available():
        return

    skip_cuda = pytest.mark.skip(reason="CUDA not available")
    for item in items:
        if "cuda" in item.keywords:
            item.add_marker(skip_cuda)


### Reference Meshes ###


# Base icosahedron (0 subdivisions): vertex 0 at the north pole, 1-5 on the
# upper ring, 6-10 on the lower ring, 11 at the south pole. Outward winding.
ICOSAHEDRON_FACES = [
    # North cap
    (0, 1, 2),
    (0, 2, 3),
    (0, 3, 4),
    (0, 4, 5),
    (0, 5, 1),
    # Upper belt
    (1, 7, 2),
    (2, 8, 3),
    (3, 9, 4),
    (4, 10, 5),
    (5, 6, 1),
    # Lower belt
    (1, 6, 7),
    (2, 7, 8),
    (3, 8, 9),
    (4, 9, 10),
    (5, 10, 6),
    # South cap
    (11, 7, 6),
    (11, 8, 7),
    (11, 9, 8),
    (11, 10, 9),
    (11, 6, 10),
]

ICOSAHEDRON_NEIGHBOURS = [
    [1, 2, 3, 4, 5],
    [0, 2, 7, 6, 5],
    [0, 1, 3, 8, 7],
    [0, 4, 2, 9, 8],
    [0, 5, 10, 9, 3],
    [0, 1, 6, 10, 4],
    [5, 1, 7, 11, 10],
    [1, 2, 8, 11, 6],
    [2, 3, 9, 11, 7],
    [3, 4, 10, 11, 8],
    [4, 5, 6, 11, 9],
    [6, 7, 8, 9, 10],
]


### Pytest Fixtures ###


@pytest.fixture(
    params=[
        "cpu",
        pytest.param("cuda", marks=pytest.mark.cuda),
    ]
)
def device(request):
    """Parametrize tests over all available devices (CPU, CUDA)."""
    return request.param


@pytest.fixture
def icosahedron_indices() -> list[int]:
    """The 20 icosahedron faces as 60 flattened vertex ids."""
    return [i for face in ICOSAHEDRON_FACES for i in face]


@pytest.fixture
def icosahedron_neighbours() -> list[list[int]]:
    """Reference neighbour table of the base icosahedron, indexed by vertex id."""
    return ICOSAHEDRON_NEIGHBOURS
