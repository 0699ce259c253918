import argparse
import json
import sys
from typing import Optional

from rules.rules import BOX_SIZE, MAX_COUNT_EXIT_STATUS, MIN_VALUE, USAGE_EXIT_STATUS
from sudoku_bf.solver import count_solutions


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(USAGE_EXIT_STATUS, f"{self.prog}: error: {message}\n")


def run(
    encoding: str,
    box_size: int = BOX_SIZE,
    min_value: int = MIN_VALUE,
    strict: bool = False,
) -> int:
    # boundary validation
    if not isinstance(encoding, str):
        raise ValueError("encoding must be a string")

    result = count_solutions(encoding=encoding, box_size=box_size, min_value=min_value, strict=strict)
    return int(result["count"])


def run_with_trace(
    encoding: str,
    box_size: int = BOX_SIZE,
    min_value: int = MIN_VALUE,
    strict: bool = False,
    solution_limit: int = 0,
    trace_max_lines: Optional[int] = 1000,
) -> tuple[dict, list[str]]:
    trace_log: list[str] = []
    result = count_solutions(
        encoding=encoding,
        box_size=box_size,
        min_value=min_value,
        strict=strict,
        solution_limit=solution_limit,
        trace=True,
        trace_log=trace_log,
        trace_max_lines=trace_max_lines,
    )
    return result, trace_log


def exit_status_for_count(count: int) -> int:
    return min(count, MAX_COUNT_EXIT_STATUS)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        description="Count every solution of a Sudoku grid; the count is returned as the exit status",
    )
    parser.add_argument("encoding", help="Cells in row-major order, '1'.. for values and '0' for unknown cells")
    parser.add_argument("--box-size", type=int, default=BOX_SIZE, help="Side length of a subsquare")
    parser.add_argument("--min-value", type=int, default=MIN_VALUE, help="Cell value that '1' decodes to")
    parser.add_argument("--strict", action="store_true", help="Reject encodings of the wrong length or with repeated values")
    parser.add_argument("--verbose", action="store_true", help="Print a JSON summary of the count")
    parser.add_argument("--trace", action="store_true", help="Include solver trace output in the summary")
    parser.add_argument("--solutions", type=int, default=0, metavar="N", help="Include up to N solution encodings in the summary")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        if args.trace:
            result, trace_log = run_with_trace(
                encoding=args.encoding,
                box_size=args.box_size,
                min_value=args.min_value,
                strict=args.strict,
                solution_limit=args.solutions,
            )
            result["trace"] = trace_log
        elif args.verbose or args.solutions:
            result = count_solutions(
                encoding=args.encoding,
                box_size=args.box_size,
                min_value=args.min_value,
                strict=args.strict,
                solution_limit=args.solutions,
            )
        else:
            return exit_status_for_count(
                run(encoding=args.encoding, box_size=args.box_size, min_value=args.min_value, strict=args.strict)
            )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return USAGE_EXIT_STATUS

    print(json.dumps(result, indent=2))
    return exit_status_for_count(int(result["count"]))


if __name__ == "__main__":
    sys.exit(main())
