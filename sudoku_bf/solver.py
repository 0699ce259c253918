from typing import Callable, Optional

from rules.rules import BOX_SIZE, MIN_VALUE

from .codec import apply_encoding
from .grid import Grid
from .search import brute_force, new_progress_state
from .types import CountResult, ProgressState, TraceLog
from .utils import trace as _trace
from .validation import validate_count_options


def count_grid_solutions(grid: Grid) -> int:
    progress_state = new_progress_state()
    brute_force(grid, 0, 0, progress_state)
    return progress_state["solutions_found"]


def count_solutions(
    encoding: str,
    box_size: int = BOX_SIZE,
    min_value: int = MIN_VALUE,
    strict: bool = False,
    solution_limit: int = 0,
    progress_callback: Optional[Callable[[ProgressState], None]] = None,
    progress_interval: int = 200,
    trace: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_max_lines: Optional[int] = None,
) -> CountResult:
    validate_count_options(solution_limit, progress_interval, trace_max_lines)

    grid = Grid(box_size=box_size, min_value=min_value)
    conflict = apply_encoding(grid, encoding, strict=strict)
    unknown_cells = grid.unknown_count()
    progress_state = new_progress_state()
    solutions: list[str] = []

    # a repeated given leaves no completion to count
    if conflict is not None:
        _trace(
            trace,
            trace_log,
            f"Decoding stopped at ({conflict[0]}, {conflict[1]}): value already present in a unit",
            trace_max_lines,
        )
        return {
            "count": 0,
            "nodes_visited": progress_state["nodes_visited"],
            "placements": progress_state["placements"],
            "unknown_cells": unknown_cells,
            "decode_conflict": list(conflict),
            "solutions": solutions,
            "message": "Encoding repeats a value inside a unit; no completion exists.",
        }

    _trace(
        trace,
        trace_log,
        f"Initialized search: box_size={box_size}, min_value={min_value}, unknown_cells={unknown_cells}",
        trace_max_lines,
    )

    brute_force(
        grid=grid,
        start_row=0,
        start_col=0,
        progress_state=progress_state,
        progress_callback=progress_callback,
        progress_interval=progress_interval,
        solutions=solutions,
        solution_limit=solution_limit,
        trace_enabled=trace,
        trace_log=trace_log,
        trace_max_lines=trace_max_lines,
    )

    return {
        "count": progress_state["solutions_found"],
        "nodes_visited": progress_state["nodes_visited"],
        "placements": progress_state["placements"],
        "unknown_cells": unknown_cells,
        "decode_conflict": None,
        "solutions": solutions,
        "message": "Exact count completed.",
    }
