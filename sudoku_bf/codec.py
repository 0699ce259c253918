from typing import Optional

from rules.rules import BOX_SIZE, FIRST_VALUE_CHAR, MIN_VALUE, UNKNOWN_CHAR

from .grid import Grid
from .types import Position
from .validation import validate_encoding


def decode_char(char: str, grid: Grid) -> Optional[int]:
    # '1' maps to min_value, '2' to min_value + 1 and so on
    value = ord(char) - ord(FIRST_VALUE_CHAR) + grid.min_value
    if grid.in_range(value):
        return value
    return None


def encode_cell(grid: Grid, r: int, c: int) -> str:
    if not grid.is_filled(r, c):
        return UNKNOWN_CHAR
    return chr(ord(FIRST_VALUE_CHAR) + grid.value_at(r, c) - grid.min_value)


def apply_encoding(grid: Grid, encoding: str, strict: bool = False) -> Optional[Position]:
    # decoding stops at the first excluded value, keeping the valid prefix
    validate_encoding(encoding, grid.field_size, strict)

    for cell in range(min(len(encoding), grid.field_size)):
        r, c = divmod(cell, grid.unit_size)
        value = decode_char(encoding[cell], grid)
        if value is None:
            continue
        if not grid.could_place(r, c, value):
            if strict:
                raise ValueError(f"encoding repeats value {encoding[cell]!r} in a unit at ({r}, {c})")
            return r, c
        grid.place(r, c, value)

    return None


def decode_grid(
    encoding: str,
    box_size: int = BOX_SIZE,
    min_value: int = MIN_VALUE,
    strict: bool = False,
) -> Grid:
    grid = Grid(box_size=box_size, min_value=min_value)
    apply_encoding(grid, encoding, strict=strict)
    return grid


def encode_grid(grid: Grid) -> str:
    return "".join(encode_cell(grid, r, c) for r in range(grid.unit_size) for c in range(grid.unit_size))


def format_grid_rows(grid: Grid) -> list[str]:
    return [" ".join(encode_cell(grid, r, c) for c in range(grid.unit_size)) for r in range(grid.unit_size)]
