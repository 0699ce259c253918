from typing import Optional


Cell = Optional[int]
Cells = list[list[Cell]]
Masks = list[int]
GridSnapshot = tuple[tuple[int, ...], tuple[int, ...], tuple[int, ...], tuple[tuple[Cell, ...], ...]]
Position = tuple[int, int]
TraceLog = list[str]
CountResult = dict[str, object]
ProgressState = dict[str, int]
