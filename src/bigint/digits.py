# -----------------------------------------------------------------------------
#  digits.py
#  Digit-vector representation: normalization, comparison, parsing
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from bigint.errors import BigIntError, ErrorKind

# Least-significant digit first, one decimal digit per element
Digits = tuple[int, ...]
# (digits, negative)
Signed = tuple[Digits, bool]

ZERO_DIGITS: Digits = (0,)
ZERO: Signed = (ZERO_DIGITS, False)

_DIGITS_RE = re.compile(r"[0-9]+")


def strip_zeros(digits: Digits) -> Digits:
    """Drop most-significant zeros, keeping a single 0 for zero."""
    end = len(digits)
    while end > 1 and digits[end - 1] == 0:
        end -= 1
    if end == 0:
        return ZERO_DIGITS
    return digits if end == len(digits) else digits[:end]


def normalize(digits: Digits, negative: bool) -> Signed:
    digits = strip_zeros(digits)
    if digits == ZERO_DIGITS:
        negative = False
    return digits, negative


def is_zero(digits: Digits) -> bool:
    return digits == ZERO_DIGITS


def negate(value: Signed) -> Signed:
    digits, negative = value
    if is_zero(digits):
        return ZERO
    return digits, not negative


def compare_magnitude(a: Digits, b: Digits) -> int:
    """
    Compare |a| and |b| for normalized digit tuples.
    Returns -1, 0 or 1.
    """
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


def compare(a: Signed, b: Signed) -> int:
    (ad, an), (bd, bn) = a, b
    if an != bn:
        return -1 if an else 1
    c = compare_magnitude(ad, bd)
    return -c if an else c


def parse_decimal(text: str) -> Signed:
    """Parse ['+'|'-'] digit+ (ASCII digits only)."""
    if not isinstance(text, str):
        raise BigIntError(ErrorKind.INVALID_INPUT, f"Expected text, got {type(text).__name__}")
    if not text:
        raise BigIntError(ErrorKind.INVALID_INPUT, "Empty string")

    negative = text[0] == "-"
    body = text[1:] if text[0] in "+-" else text
    if not body:
        raise BigIntError(ErrorKind.INVALID_INPUT, "Invalid number format")
    if not _DIGITS_RE.fullmatch(body):
        raise BigIntError(ErrorKind.INVALID_INPUT, "Non-digit character in number")

    return normalize(tuple(ord(ch) - 48 for ch in reversed(body)), negative)


def from_native(n: int) -> Signed:
    """Sign is captured first, then the magnitude is split by repeated division by 10."""
    negative = n < 0
    if negative:
        n = -n
    if n == 0:
        return ZERO
    out: list[int] = []
    while n > 0:
        n, d = divmod(n, 10)
        out.append(d)
    return tuple(out), negative
