import io
import unittest

from doubler.errors import ModeReadError, NumberReadError
from doubler.program import double, read_mode, read_number, run_program
from doubler.scanner import Scanner


def run(stdin: str) -> tuple[int, str]:
    out = io.StringIO()
    status = run_program(io.StringIO(stdin), out)
    return status, out.getvalue()


class TestProgram(unittest.TestCase):
    def test_double(self):
        self.assertEqual(run("1\n5"), (0, "Result: 10\n"))
        self.assertEqual(run("1\n-3"), (0, "Result: -6\n"))
        self.assertEqual(run("1\n0\n"), (0, "Result: 0\n"))
        self.assertEqual(run("+1\n+4"), (0, "Result: 8\n"))

    def test_any_single_char_after_mode(self):
        self.assertEqual(run("1 5"), (0, "Result: 10\n"))
        self.assertEqual(run("1x5"), (0, "Result: 10\n"))
        # extra blank lines are skipped like any whitespace
        self.assertEqual(run("1\n\n7"), (0, "Result: 14\n"))
        self.assertEqual(run("  1\n   7  "), (0, "Result: 14\n"))

    def test_other_modes_are_silent(self):
        for stdin in ["0\n", "2\n99", "-1", "42\nabc", "5abc"]:
            self.assertEqual(run(stdin), (0, ""), stdin)

    def test_invalid_mode(self):
        for stdin in ["", "abc", "Y", "-", "\n\n", "x1\n5"]:
            self.assertEqual(run(stdin), (1, "Error: Invalid mode\n"), stdin)

    def test_invalid_number(self):
        for stdin in ["1\n", "1", "1\nabc", "1\nX", "1\n-"]:
            self.assertEqual(run(stdin), (1, "Error reading number\n"), stdin)

    def test_wraps_like_int32(self):
        self.assertEqual(double(2147483647), -2)
        self.assertEqual(double(-2147483648), 0)
        self.assertEqual(double(1073741824), -2147483648)
        # operands too big for an int are truncated first
        self.assertEqual(double(2 ** 32 + 3), 6)
        self.assertEqual(run("1\n2147483647"), (0, "Result: -2\n"))

    def test_long_numbers_saturate_then_truncate(self):
        # strtol saturates at LONG_MAX, which is -1 once stored in an int
        self.assertEqual(run("1\n99999999999999999999"), (0, "Result: -2\n"))
        # LONG_MIN truncates to 0
        self.assertEqual(run("1\n-99999999999999999999"), (0, "Result: 0\n"))
        self.assertEqual(run("1\n4294967301"), (0, "Result: 10\n"))

    def test_long_mode_truncates(self):
        self.assertEqual(run("4294967297\n5"), (0, "Result: 10\n"))
        self.assertEqual(run("99999999999999999999\n5"), (0, ""))

    def test_only_c_whitespace_is_skipped(self):
        self.assertEqual(run("\v\f1\r5"), (0, "Result: 10\n"))
        for stdin in ["\x1c1\n5", "\xa01\n5", "\u20031\n5"]:
            self.assertEqual(run(stdin), (1, "Error: Invalid mode\n"), repr(stdin))
        self.assertEqual(run("1\n\x855"), (1, "Error reading number\n"))

    def test_read_mode_stops_after_one_char(self):
        stream = io.StringIO("7\n\n8")
        scanner = Scanner(stream)
        self.assertEqual(read_mode(scanner), 7)
        self.assertEqual(scanner.read_char(), "\n")
        self.assertEqual(read_number(scanner), 8)

    def test_read_errors(self):
        with self.assertRaises(ModeReadError) as ctx:
            read_mode(Scanner(io.StringIO("nope")))
        self.assertEqual(str(ctx.exception), "Error: Invalid mode")

        with self.assertRaises(NumberReadError) as ctx:
            read_number(Scanner(io.StringIO("")))
        self.assertEqual(ctx.exception.message, "Error reading number")

    def test_number_not_read_for_other_modes(self):
        stream = io.StringIO("3\n99")
        out = io.StringIO()
        self.assertEqual(run_program(stream, out), 0)
        self.assertEqual(stream.read(), "99")


if __name__ == "__main__":
    unittest.main()
