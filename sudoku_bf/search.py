from typing import Callable, Optional

from .codec import encode_grid
from .grid import Grid
from .types import Position, ProgressState, TraceLog
from .utils import indent, trace


def new_progress_state() -> ProgressState:
    return {"solutions_found": 0, "nodes_visited": 0, "placements": 0}


def next_unknown_cell(grid: Grid, start_row: int, start_col: int) -> Optional[Position]:
    for r in range(start_row, grid.unit_size):
        for c in range(start_col if r == start_row else 0, grid.unit_size):
            if not grid.is_filled(r, c):
                return r, c
    return None


def brute_force(
    grid: Grid,
    start_row: int,
    start_col: int,
    progress_state: ProgressState,
    progress_callback: Optional[Callable[[ProgressState], None]] = None,
    progress_interval: int = 200,
    solutions: Optional[list[str]] = None,
    solution_limit: int = 0,
    trace_enabled: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_max_lines: Optional[int] = None,
    depth: int = 0,
) -> None:
    progress_state["nodes_visited"] += 1
    if progress_callback is not None and progress_state["nodes_visited"] % progress_interval == 0:
        progress_callback(dict(progress_state))

    cell = next_unknown_cell(grid, start_row, start_col)
    if cell is None:
        # no unknown cells, must be a solution
        progress_state["solutions_found"] += 1
        trace(trace_enabled, trace_log, f"{indent(depth)}Solution {progress_state['solutions_found']}", trace_max_lines)
        if solutions is not None and len(solutions) < solution_limit:
            solutions.append(encode_grid(grid))
        if progress_callback is not None:
            progress_callback(dict(progress_state))
        return

    r, c = cell
    trace(trace_enabled, trace_log, f"{indent(depth)}Select cell ({r}, {c})", trace_max_lines)

    for value in grid.values():
        if not grid.could_place(r, c, value):
            continue

        trace(trace_enabled, trace_log, f"{indent(depth)}Try value {value} at ({r}, {c})", trace_max_lines)
        grid.place(r, c, value)
        progress_state["placements"] += 1

        brute_force(
            grid=grid,
            start_row=r,
            start_col=c,
            progress_state=progress_state,
            progress_callback=progress_callback,
            progress_interval=progress_interval,
            solutions=solutions,
            solution_limit=solution_limit,
            trace_enabled=trace_enabled,
            trace_log=trace_log,
            trace_max_lines=trace_max_lines,
            depth=depth + 1,
        )

        grid.unplace(r, c, value)
        trace(trace_enabled, trace_log, f"{indent(depth)}Backtrack on ({r}, {c}) value {value}", trace_max_lines)
