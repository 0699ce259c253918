from typing import Optional

from .types import TraceLog


SUBSQUARE_INDEX_UNIT_9 = (
    (0, 0, 0, 1, 1, 1, 2, 2, 2),
    (0, 0, 0, 1, 1, 1, 2, 2, 2),
    (0, 0, 0, 1, 1, 1, 2, 2, 2),
    (3, 3, 3, 4, 4, 4, 5, 5, 5),
    (3, 3, 3, 4, 4, 4, 5, 5, 5),
    (3, 3, 3, 4, 4, 4, 5, 5, 5),
    (6, 6, 6, 7, 7, 7, 8, 8, 8),
    (6, 6, 6, 7, 7, 7, 8, 8, 8),
    (6, 6, 6, 7, 7, 7, 8, 8, 8),
)


def subsquare_index(r: int, c: int, box_size: int) -> int:
    if box_size == 3:
        return SUBSQUARE_INDEX_UNIT_9[r][c]
    return (r // box_size) * box_size + (c // box_size)


def trace(enabled: bool, trace_log: Optional[TraceLog], message: str, max_lines: Optional[int] = None) -> None:
    if not enabled:
        return
    if trace_log is not None:
        if max_lines is not None and len(trace_log) >= max_lines:
            return
        trace_log.append(message)
    else:
        print(message)


def indent(depth: int) -> str:
    return "  " * depth
