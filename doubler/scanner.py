from typing import Optional, TextIO

from doubler.models import to_c_int

# what C isspace() accepts, str.isspace() also takes unicode spaces
C_WHITESPACE = ' \t\n\v\f\r'


class Scanner:
    """
    Reads integers from a text stream one character at a time, the way
    scanf("%d") and getchar() do.

    Reading char by char means nothing past the last token is consumed, so
    an interactive terminal never has to send EOF.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._pushback: Optional[str] = None

    def _next(self) -> str:
        if self._pushback is not None:
            ch, self._pushback = self._pushback, None
            return ch
        return self.stream.read(1)

    def _unread(self, ch: str):
        if ch:
            self._pushback = ch

    def read_char(self) -> str:
        """Consume exactly one character. Returns '' at end of input."""
        return self._next()

    def read_int(self) -> Optional[int]:
        """
        Read one integer token.

        Leading whitespace is skipped, an optional sign is accepted and digits
        are read up to the first non-digit, which is left in the stream.

        The value is stored like scanf stores it into an int: parsed as a
        saturating long, then truncated to 32 bits.

        Returns:
            The integer, or None if the input is exhausted or not a number
        """
        ch = self._next()
        while ch and ch in C_WHITESPACE:
            ch = self._next()

        sign = ''
        if ch in ('+', '-'):
            sign = ch
            ch = self._next()

        digits = []
        while ch and ch in '0123456789':
            digits.append(ch)
            ch = self._next()
        self._unread(ch)

        if not digits:
            return None
        return to_c_int(int(sign + ''.join(digits)))
