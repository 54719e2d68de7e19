"""Dense reference stepper built on PyTorch convolution.

Computes the same rule as ``LifeGrid.step`` over a dense window, with every
cell updated at once. Used to cross-check the sparse update.
"""

from typing import Iterable, Set
import numpy as np
import torch
import torch.nn.functional as F

from .grid import Cell, bounding_box

# Single-threaded, the windows are small
torch.set_num_threads(1)

_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


def neighbor_counts(cells: np.ndarray) -> np.ndarray:
    """Count live neighbours of every cell in a dense array.

    Args:
        cells: 2D array, non-zero meaning alive; cells outside are dead

    Returns:
        int8 array of the same shape with neighbour counts (0-8)
    """
    if cells.size == 0:
        return np.zeros(cells.shape, dtype=np.int8)

    torch_input = torch.from_numpy((cells > 0).astype(np.float32)).unsqueeze(0).unsqueeze(0)
    neighbors = F.conv2d(torch_input, _KERNEL, padding=1)
    return neighbors[0, 0].numpy().astype(np.int8)


def step_array(cells: np.ndarray) -> np.ndarray:
    """Apply one generation to a dense array, treating the border as dead.

    Args:
        cells: 2D array, non-zero meaning alive

    Returns:
        New int8 array with the next generation
    """
    counts = neighbor_counts(cells)
    alive = cells > 0

    birth_mask = ~alive & (counts == 3)
    survive_mask = alive & ((counts == 2) | (counts == 3))

    return (birth_mask | survive_mask).astype(np.int8)


def dense_step(live_cells: Iterable[Cell]) -> Set[Cell]:
    """Compute the next generation of a sparse live set via a dense window.

    The window is the bounding box padded by one cell on every side, which
    holds every cell that can be born.

    Args:
        live_cells: Current live cells

    Returns:
        Set of live cells in the next generation
    """
    live_cells = list(live_cells)
    bbox = bounding_box(live_cells)
    if bbox is None:
        return set()

    min_x, min_y, max_x, max_y = bbox
    origin_x, origin_y = min_x - 1, min_y - 1
    cells = np.zeros((max_x - min_x + 3, max_y - min_y + 3), dtype=np.int8)
    for x, y in live_cells:
        cells[x - origin_x, y - origin_y] = 1

    next_cells = step_array(cells)
    xs, ys = np.nonzero(next_cells)
    return {(int(x) + origin_x, int(y) + origin_y) for x, y in zip(xs, ys)}
