from typing import Optional

from rules.rules import MAX_BOX_SIZE, MAX_MIN_VALUE, MIN_BOX_SIZE


def validate_box_size(box_size: int) -> None:
    if not isinstance(box_size, int) or isinstance(box_size, bool):
        raise ValueError("box_size must be an integer")
    if box_size < MIN_BOX_SIZE or box_size > MAX_BOX_SIZE:
        raise ValueError(f"box_size must be between {MIN_BOX_SIZE} and {MAX_BOX_SIZE}")


def validate_min_value(min_value: int) -> None:
    if not isinstance(min_value, int) or isinstance(min_value, bool):
        raise ValueError("min_value must be an integer")
    if min_value < 0 or min_value > MAX_MIN_VALUE:
        raise ValueError(f"min_value must be between 0 and {MAX_MIN_VALUE}")


def validate_encoding(encoding: str, field_size: int, strict: bool) -> None:
    if not isinstance(encoding, str):
        raise ValueError("encoding must be a string")
    if strict and len(encoding) != field_size:
        raise ValueError(f"encoding must have exactly {field_size} characters, got {len(encoding)}")


def validate_count_options(
    solution_limit: int,
    progress_interval: int,
    trace_max_lines: Optional[int],
) -> None:
    if solution_limit < 0:
        raise ValueError("solution_limit must be >= 0")
    if progress_interval < 1:
        raise ValueError("progress_interval must be >= 1")
    if trace_max_lines is not None and trace_max_lines < 1:
        raise ValueError("trace_max_lines must be >= 1")
