from rules.rules import BOX_SIZE, MIN_VALUE

from .types import Cells, GridSnapshot, Masks
from .utils import subsquare_index
from .validation import validate_box_size, validate_min_value


class Grid:
    # bit v of a unit mask is set iff value v is present in that unit

    def __init__(self, box_size: int = BOX_SIZE, min_value: int = MIN_VALUE) -> None:
        validate_box_size(box_size)
        validate_min_value(min_value)

        self.box_size = box_size
        self.unit_size = box_size * box_size
        self.field_size = self.unit_size * self.unit_size
        self.min_value = min_value
        self.max_value = min_value + self.unit_size - 1

        self.rows: Masks = [0] * self.unit_size
        self.columns: Masks = [0] * self.unit_size
        self.subsquares: Masks = [0] * self.unit_size
        self.cells: Cells = [[None for _ in range(self.unit_size)] for _ in range(self.unit_size)]

    def place(self, r: int, c: int, value: int) -> None:
        assert self.cells[r][c] is None, f"cell ({r}, {c}) is already filled"
        assert self.could_place(r, c, value), f"value {value} is excluded at ({r}, {c})"

        bit = 1 << value
        self.rows[r] |= bit
        self.columns[c] |= bit
        self.subsquares[subsquare_index(r, c, self.box_size)] |= bit

        self.cells[r][c] = value

    def unplace(self, r: int, c: int, value: int) -> None:
        assert self.cells[r][c] == value, f"cell ({r}, {c}) does not hold {value}"

        keep = ~(1 << value)
        self.rows[r] &= keep
        self.columns[c] &= keep
        self.subsquares[subsquare_index(r, c, self.box_size)] &= keep

        self.cells[r][c] = None

    def could_place(self, r: int, c: int, value: int) -> bool:
        bit = 1 << value
        if self.rows[r] & bit:
            return False
        if self.columns[c] & bit:
            return False
        if self.subsquares[subsquare_index(r, c, self.box_size)] & bit:
            return False
        return True

    def is_filled(self, r: int, c: int) -> bool:
        return self.cells[r][c] is not None

    def value_at(self, r: int, c: int) -> int:
        value = self.cells[r][c]
        assert value is not None, f"cell ({r}, {c}) is unknown"
        return value

    def values(self) -> range:
        return range(self.min_value, self.max_value + 1)

    def in_range(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def unknown_count(self) -> int:
        return sum(1 for row in self.cells for value in row if value is None)

    def snapshot(self) -> GridSnapshot:
        return (
            tuple(self.rows),
            tuple(self.columns),
            tuple(self.subsquares),
            tuple(tuple(row) for row in self.cells),
        )
