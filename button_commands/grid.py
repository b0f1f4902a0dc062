"""
Map grid labels ("K14") for world positions.

The map is divided in square cells of ``1024 / 7`` world units. Columns are
lettered from the west edge (A, B, ..., Z, AA, ...) and rows are numbered from
the north edge starting at 0, matching the labels players see on the in-game map.
"""
from __future__ import annotations

import math

from button_commands.models.entities import Vector3

CELLS_PER_1024_UNITS = 7


def column_letters(number: int) -> str:
    """1 -> "A", 26 -> "Z", 27 -> "AA"."""
    letters = ""
    while number > 0:
        number, remainder = divmod(number - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def position_to_cell(position: Vector3, world_size: float) -> tuple[int, int]:
    """Returns (column, row) with column starting at 1 and row at 0."""
    if world_size <= 0:
        raise ValueError(f"world_size must be positive, got {world_size}")

    half = world_size / 2.0
    normalized_x = (position.x + half) / world_size
    normalized_z = (position.z + half) / world_size

    cells = world_size / 1024.0 * CELLS_PER_1024_UNITS
    column = int(math.floor(normalized_x * cells)) + 1
    row = int(math.floor(cells - normalized_z * cells))

    # Positions outside the map stick to the border cells
    last = int(math.floor(cells))
    return min(max(1, column), last + 1), min(max(0, row), last)


def position_to_grid(position: Vector3, world_size: float) -> str:
    """Human-readable grid label for a world position."""
    column, row = position_to_cell(position, world_size)
    return f"{column_letters(column)}{row}"
