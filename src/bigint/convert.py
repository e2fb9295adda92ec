# src/bigint/convert.py
from __future__ import annotations

from typing import IO

from bigint.digits import Signed, compare_magnitude, from_native, is_zero
from bigint.errors import BigIntError, ErrorKind

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

_INT64_MAX_DIGITS = from_native(INT64_MAX)[0]
_INT64_MIN_DIGITS = from_native(INT64_MIN)[0]   # magnitude 2**63


def format_decimal(value: Signed) -> str:
    """Canonical text: '-' only for non-zero negatives, no leading zeros."""
    digits, negative = value
    if is_zero(digits):
        return "0"
    body = "".join(chr(48 + d) for d in reversed(digits))
    return "-" + body if negative else body


def in_int64_range(value: Signed) -> bool:
    digits, negative = value
    limit = _INT64_MIN_DIGITS if negative else _INT64_MAX_DIGITS
    return compare_magnitude(digits, limit) <= 0


def to_int64(value: Signed) -> int:
    if not in_int64_range(value):
        raise BigIntError(ErrorKind.OUT_OF_RANGE, "Value too large for a signed 64-bit integer")
    return to_native(value)


def to_native(value: Signed) -> int:
    """Unbounded reconstruction, most-significant digit first."""
    digits, negative = value
    result = 0
    for i in range(len(digits) - 1, -1, -1):
        result = result * 10 + digits[i]
    return -result if negative else result


def read_token(stream: IO[str]) -> str:
    """
    Read one whitespace-delimited token from a text stream.
    Returns '' when the stream is exhausted before any non-space character.
    """
    ch = stream.read(1)
    while ch and ch.isspace():
        ch = stream.read(1)
    chars: list[str] = []
    while ch and not ch.isspace():
        chars.append(ch)
        ch = stream.read(1)
    return "".join(chars)


def write_decimal(stream: IO[str], value: Signed) -> None:
    stream.write(format_decimal(value))
