from enum import Enum

INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Mode(Enum):
    DOUBLE = 1

    @staticmethod
    def from_int(value: int) -> "Mode | None":
        '''
        Returns the recognised mode for `value`, or None.
        Unrecognised modes are not an error, they just do nothing.
        '''
        for mode in Mode:
            if mode.value == value:
                return mode
        return None


class OutputFormat(Enum):
    HEX = 'hex'
    TEXT = 'text'
    RAW = 'raw'

    def __str__(self):
        return self.value

    @staticmethod
    def is_valid(value: str) -> bool:
        return value in [f.value for f in OutputFormat]


def wrap_int32(value: int) -> int:
    """Truncate to a signed 32-bit integer, wrapping like a native C int."""
    value &= 0xFFFFFFFF
    if value > INT32_MAX:
        value -= 2 ** 32
    return value


def clamp_int64(value: int) -> int:
    """Saturate at the 64-bit long range, like strtol on overflow."""
    return max(INT64_MIN, min(INT64_MAX, value))


def to_c_int(value: int) -> int:
    """What scanf("%d") leaves in an int for an arbitrarily long decimal."""
    return wrap_int32(clamp_int64(value))
