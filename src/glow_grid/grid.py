"""
Cell geometry for the 3x3 glow grid.

Cells are addressed by a fixed row-major index:

    0 1 2
    3 4 5
    6 7 8
"""

from typing import Iterable

GRID_SIZE = 3
NUM_CELLS = GRID_SIZE * GRID_SIZE
CENTER_CELL = 4


def cell_index(row: int, col: int) -> int:
    """Row/column (0-based) to cell index."""
    if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
        raise ValueError(f"Cell ({row}, {col}) is outside the {GRID_SIZE}x{GRID_SIZE} grid")
    return row * GRID_SIZE + col


def is_valid_cell(index: int) -> bool:
    return isinstance(index, int) and 0 <= index < NUM_CELLS


def validate_step(cells: Iterable[int]) -> tuple[int, ...]:
    """
    Validate one trigger step and return it as a tuple.

    Raises ValueError for out-of-range or repeated cell indices.
    """
    step = tuple(cells)
    for idx in step:
        if not is_valid_cell(idx):
            raise ValueError(f"Cell index {idx!r} out of range 0..{NUM_CELLS - 1}")
    if len(set(step)) != len(step):
        raise ValueError(f"Step {list(step)} repeats a cell index")
    return step


def blank_intensities() -> list[float]:
    """A fresh all-dark intensity vector."""
    return [0.0] * NUM_CELLS
