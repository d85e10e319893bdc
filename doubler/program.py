from logging import getLogger
from typing import TextIO

from doubler.errors import ModeReadError, NumberReadError, ReadError
from doubler.models import Mode, wrap_int32
from doubler.scanner import Scanner

logger = getLogger(__name__)


def double(num: int) -> int:
    """Multiply by two with 32-bit signed wraparound, no overflow detection."""
    return wrap_int32(wrap_int32(num) * 2)


def read_mode(scanner: Scanner) -> int:
    mode = scanner.read_int()
    if mode is None:
        raise ModeReadError()

    # the newline (or whatever single character) after the mode
    scanner.read_char()
    return mode


def read_number(scanner: Scanner) -> int:
    num = scanner.read_int()
    if num is None:
        raise NumberReadError()
    return num


def run_program(stdin: TextIO, stdout: TextIO) -> int:
    """
    Read a mode and, for mode 1, a number to double.

    Args:
        stdin: stream the mode and operand are read from
        stdout: stream the result or error message is written to

    Returns:
        Process exit status: 0 on success or an ignored mode, 1 on a read error
    """
    scanner = Scanner(stdin)
    try:
        mode = read_mode(scanner)
        logger.debug(f"Read mode: {mode=}")

        if Mode.from_int(mode) == Mode.DOUBLE:
            num = read_number(scanner)
            result = double(num)
            logger.debug(f"Doubled: {num=} {result=}")
            stdout.write(f"Result: {result}\n")
        else:
            logger.debug(f"Mode {mode} has no action")
    except ReadError as e:
        logger.debug(f"Read failed: {type(e).__name__}")
        stdout.write(e.message + "\n")
        stdout.flush()
        return 1

    stdout.flush()
    return 0
