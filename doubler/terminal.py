from typing import List, Tuple

import pyte

RGB = Tuple[int, int, int]

DEFAULT_FG: RGB = (240, 240, 240) # light gray
DEFAULT_BG: RGB = (0, 0, 0)

ATTR_BOLD = 0x01
ATTR_ITALIC = 0x02
ATTR_UNDERLINE = 0x04
ATTR_INVERSE = 0x08

# xterm-ish palette for the 16 standard colors
ANSI_COLORS: List[RGB] = [
    (0, 0, 0),       # black
    (205, 49, 49),   # red
    (13, 188, 121),  # green
    (229, 229, 16),  # yellow
    (36, 114, 200),  # blue
    (188, 63, 188),  # magenta
    (17, 168, 205),  # cyan
    (229, 229, 229), # white
    (102, 102, 102), # bright black
    (241, 76, 76),   # bright red
    (35, 209, 139),  # bright green
    (245, 245, 67),  # bright yellow
    (59, 142, 234),  # bright blue
    (214, 112, 214), # bright magenta
    (41, 184, 219),  # bright cyan
    (255, 255, 255), # bright white
]


def ansi_to_rgb(idx: int) -> RGB:
    """Convert a 256-color palette index to RGB."""
    if idx < 16:
        return ANSI_COLORS[idx]
    if idx <= 231:
        # 6x6x6 color cube
        n = idx - 16
        to_val = lambda x: 0 if x == 0 else 55 + x * 40
        return (to_val((n // 36) % 6), to_val((n // 6) % 6), to_val(n % 6))
    gray = 8 + (idx - 232) * 10
    return (gray, gray, gray)


def normalize_line_endings(data: bytes) -> bytes:
    """Make every line end with CRLF. Existing CRLF and lone CR are kept."""
    result = bytearray()
    i = 0
    while i < len(data):
        if data[i:i + 2] == b'\r\n':
            result += b'\r\n'
            i += 2
        elif data[i:i + 1] == b'\n':
            result += b'\r\n'
            i += 1
        else:
            result.append(data[i])
            i += 1
    return bytes(result)


def filter_osc_sequences(data: bytes) -> bytes:
    '''
    Drop OSC (Operating System Command) sequences.
        - They start with ESC ] and end with BEL or ESC \\
        - Used for window titles, which differ between platforms
    '''
    result = bytearray()
    i = 0
    while i < len(data):
        if data[i:i + 2] == b'\x1b]':
            i += 2
            while i < len(data):
                if data[i] == 0x07:
                    i += 1
                    break
                if data[i:i + 2] == b'\x1b\\':
                    i += 2
                    break
                i += 1
        else:
            result.append(data[i])
            i += 1
    return bytes(result)


# SGR codes that select a palette color, mapped to the base palette index
FG_PALETTE = {**{30 + i: i for i in range(8)}, **{90 + i: 8 + i for i in range(8)}}
BG_PALETTE = {**{40 + i: i for i in range(8)}, **{100 + i: 8 + i for i in range(8)}}
SGR_FG_EXTENDED = 38
SGR_BG_EXTENDED = 48


def palette_to_truecolor(attrs: Tuple[int, ...]) -> List[int]:
    '''
    Rewrite palette color selections (30-37, 90-97, 40-47, 100-107, 38;5;n, 48;5;n)
    into 38;2;r;g;b / 48;2;r;g;b so every cell carries the RGB from `ansi_to_rgb`.
    Everything else passes through untouched.
    '''
    out: List[int] = []
    i = 0
    while i < len(attrs):
        attr = attrs[i]
        if attr in FG_PALETTE:
            out += [SGR_FG_EXTENDED, 2, *ansi_to_rgb(FG_PALETTE[attr])]
        elif attr in BG_PALETTE:
            out += [SGR_BG_EXTENDED, 2, *ansi_to_rgb(BG_PALETTE[attr])]
        elif attr in (SGR_FG_EXTENDED, SGR_BG_EXTENDED):
            rest = attrs[i + 1:]
            if len(rest) >= 2 and rest[0] == 5:
                out += [attr, 2, *ansi_to_rgb(min(rest[1], 255))]
                i += 3
                continue
            if len(rest) >= 4 and rest[0] == 2:
                out += [attr, 2, *(min(v, 255) for v in rest[1:4])]
                i += 5
                continue
            # malformed, leave the remainder for pyte to ignore
            out += attrs[i:]
            break
        else:
            out.append(attr)
        i += 1
    return out


class TruecolorScreen(pyte.Screen):
    """pyte screen that stores every color as RGB hex from our palette."""

    def select_graphic_rendition(self, *attrs, **kwargs):
        if kwargs.get('private'):
            return super().select_graphic_rendition(*attrs, **kwargs)
        return super().select_graphic_rendition(*palette_to_truecolor(attrs), **kwargs)


def color_to_rgb(color: str, default: RGB) -> RGB:
    if color == 'default':
        return default
    try:
        r, g, b = bytes.fromhex(color)
    except ValueError:
        return default
    return (r, g, b)


def cell_attrs(char) -> int:
    a = 0
    if char.bold: a |= ATTR_BOLD
    if char.italics: a |= ATTR_ITALIC
    if char.underscore: a |= ATTR_UNDERLINE
    if char.reverse: a |= ATTR_INVERSE
    return a


def cell_to_hex(char) -> str:
    # the right half of a wide character has no data of its own
    ch = char.data[:1] or ' '
    fg = color_to_rgb(char.fg, DEFAULT_FG)
    bg = color_to_rgb(char.bg, DEFAULT_BG)
    return f"{ord(ch):08X}{fg[0]:02X}{fg[1]:02X}{fg[2]:02X}{bg[0]:02X}{bg[1]:02X}{bg[2]:02X}{cell_attrs(char):02X}"


class Terminal:
    """
    Replays bytes written to a terminal and exposes the final screen.
    Emulation is done by pyte, this only renders its buffer.
    """

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self.screen = TruecolorScreen(cols, rows)
        self.stream = pyte.ByteStream(self.screen)

    def feed(self, data: bytes | str) -> "Terminal":
        self.stream.feed(data.encode('utf-8') if isinstance(data, str) else data)
        return self

    def cell(self, row: int, col: int):
        return self.screen.buffer[row][col]

    def cell_rgb(self, row: int, col: int) -> Tuple[RGB, RGB]:
        char = self.cell(row, col)
        return color_to_rgb(char.fg, DEFAULT_FG), color_to_rgb(char.bg, DEFAULT_BG)

    def to_hex(self) -> str:
        """Every cell row-major as CCCCCCCC RRGGBB RRGGBB AA, no separators."""
        return ''.join(cell_to_hex(self.cell(r, c)) for r in range(self.rows) for c in range(self.cols))

    def to_text(self) -> str:
        lines = []
        for r in range(self.rows):
            line = ''.join(self.cell(r, c).data for c in range(self.cols))
            lines.append(line.rstrip() + '\n')
        return ''.join(lines)
