import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout

from main import exit_status_for_count, main, run, run_with_trace
from rules.rules import MAX_COUNT_EXIT_STATUS, USAGE_EXIT_STATUS


PUZZLE_9X9 = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLVED_4X4 = "1234341221434321"


class TestRun(unittest.TestCase):
    def test_run_returns_solution_count(self) -> None:
        self.assertEqual(run(PUZZLE_9X9), 1)
        self.assertEqual(run("1234" + "0" * 12, box_size=2), 12)

    def test_run_raises_on_non_string_encoding(self) -> None:
        with self.assertRaises(ValueError):
            run(1234)  # type: ignore[arg-type]

    def test_run_with_trace_returns_result_and_trace(self) -> None:
        result, trace_log = run_with_trace("123434122143432" + "0", box_size=2)
        self.assertEqual(result["count"], 1)
        self.assertTrue(any("Select cell (3, 3)" in line for line in trace_log))

    def test_exit_status_saturates_large_counts(self) -> None:
        self.assertEqual(exit_status_for_count(0), 0)
        self.assertEqual(exit_status_for_count(12), 12)
        self.assertEqual(exit_status_for_count(288), MAX_COUNT_EXIT_STATUS)
        self.assertNotEqual(exit_status_for_count(10**30), USAGE_EXIT_STATUS)


class TestMainCli(unittest.TestCase):
    def test_returns_count_as_exit_status_and_prints_nothing(self) -> None:
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            status = main([PUZZLE_9X9])
        self.assertEqual(status, 1)
        self.assertEqual(stdout.getvalue(), "")

    def test_box_size_option(self) -> None:
        self.assertEqual(main([SOLVED_4X4, "--box-size", "2"]), 1)
        self.assertEqual(main(["0" * 16, "--box-size", "2"]), MAX_COUNT_EXIT_STATUS)

    def test_contradictory_encoding_exits_with_zero_count(self) -> None:
        self.assertEqual(main(["11" + "0" * 14, "--box-size", "2"]), 0)

    def test_missing_argument_exits_with_usage_status(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as context:
            main([])
        self.assertEqual(context.exception.code, USAGE_EXIT_STATUS)

    def test_extra_argument_exits_with_usage_status(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as context:
            main([PUZZLE_9X9, PUZZLE_9X9])
        self.assertEqual(context.exception.code, USAGE_EXIT_STATUS)

    def test_invalid_box_size_exits_with_usage_status(self) -> None:
        with redirect_stderr(io.StringIO()) as stderr:
            status = main([SOLVED_4X4, "--box-size", "9"])
        self.assertEqual(status, USAGE_EXIT_STATUS)
        self.assertIn("box_size", stderr.getvalue())

    def test_huge_min_value_exits_with_usage_status(self) -> None:
        with redirect_stderr(io.StringIO()) as stderr:
            status = main(["1", "--box-size", "2", "--min-value", str(2**40)])
        self.assertEqual(status, USAGE_EXIT_STATUS)
        self.assertIn("min_value", stderr.getvalue())

    def test_strict_rejects_short_encoding(self) -> None:
        with redirect_stderr(io.StringIO()):
            status = main(["1234", "--box-size", "2", "--strict"])
        self.assertEqual(status, USAGE_EXIT_STATUS)

    def test_verbose_prints_json_summary(self) -> None:
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            status = main(["1234" + "0" * 12, "--box-size", "2", "--verbose", "--solutions", "2"])
        payload = json.loads(stdout.getvalue())
        self.assertEqual(status, 12)
        self.assertEqual(payload["count"], 12)
        self.assertEqual(payload["solutions"][0], SOLVED_4X4)
        self.assertEqual(len(payload["solutions"]), 2)

    def test_trace_prints_trace_lines(self) -> None:
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            main([SOLVED_4X4[:-1] + "0", "--box-size", "2", "--trace"])
        payload = json.loads(stdout.getvalue())
        self.assertIn("trace", payload)
        self.assertTrue(any("Try value" in line for line in payload["trace"]))


if __name__ == "__main__":
    unittest.main()
