# -----------------------------------------------------------------------------
#  engine.py
#  Signed base-10 arithmetic on (digits, negative) pairs
# -----------------------------------------------------------------------------

"""
Every function takes and returns normalized `Signed` pairs as produced by
bigint.digits. Nothing here mutates its inputs; results are fresh tuples.

Division truncates toward zero: the quotient sign is the XOR of the operand
signs and the remainder takes the dividend's sign (-7 / 2 == -3, -7 % 2 == -1).
"""

from __future__ import annotations

from bigint.digits import (
    ZERO,
    Digits,
    Signed,
    compare_magnitude,
    is_zero,
    negate,
    normalize,
    strip_zeros,
)
from bigint.errors import BigIntError, ErrorKind

BASE = 10


# ---------- magnitude helpers -------------------------------------------------

def _add_magnitudes(a: Digits, b: Digits) -> Digits:
    out: list[int] = []
    carry = 0
    for i in range(max(len(a), len(b))):
        s = carry
        if i < len(a):
            s += a[i]
        if i < len(b):
            s += b[i]
        out.append(s % BASE)
        carry = s // BASE
    if carry:
        out.append(carry)
    return tuple(out)


def _sub_magnitudes(a: Digits, b: Digits) -> Digits:
    """|a| - |b| with borrow; caller guarantees |a| >= |b|."""
    out: list[int] = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - borrow
        if i < len(b):
            diff -= b[i]
        if diff < 0:
            diff += BASE
            borrow = 1
        else:
            borrow = 0
        out.append(diff)
    return strip_zeros(tuple(out))


def _mul_magnitudes(a: Digits, b: Digits) -> Digits:
    # schoolbook: one output column per digit pair position
    buf = [0] * (len(a) + len(b))
    for i, da in enumerate(a):
        if da == 0:
            continue
        carry = 0
        for j, db in enumerate(b):
            cur = buf[i + j] + da * db + carry
            buf[i + j] = cur % BASE
            carry = cur // BASE
        k = i + len(b)
        while carry:
            cur = buf[k] + carry
            buf[k] = cur % BASE
            carry = cur // BASE
            k += 1
    return tuple(buf)


# ---------- signed operations -------------------------------------------------

def add(a: Signed, b: Signed) -> Signed:
    (ad, an), (bd, bn) = a, b
    if an != bn:
        if an:
            return subtract(b, negate(a))
        return subtract(a, negate(b))
    return normalize(_add_magnitudes(ad, bd), an)


def subtract(a: Signed, b: Signed) -> Signed:
    (ad, an), (bd, bn) = a, b
    if an != bn:
        if an:
            return negate(add(negate(a), b))
        return add(a, negate(b))

    if an:
        # (-x) - (-y) == y - x
        return subtract(negate(b), negate(a))

    if compare_magnitude(ad, bd) < 0:
        return negate(subtract(b, a))

    return normalize(_sub_magnitudes(ad, bd), False)


def multiply(a: Signed, b: Signed) -> Signed:
    (ad, an), (bd, bn) = a, b
    if is_zero(ad) or is_zero(bd):
        return ZERO
    return normalize(_mul_magnitudes(ad, bd), an != bn)


def divide_with_remainder(a: Signed, b: Signed) -> tuple[Signed, Signed]:
    """
    Long division by repeated subtraction, most-significant digit first.

    Each step shifts the next dividend digit into the running remainder and
    subtracts |b| until the remainder drops below it; the number of
    subtractions is the next quotient digit.
    """
    (ad, an), (bd, bn) = a, b
    if is_zero(bd):
        raise BigIntError(ErrorKind.DIVISION_BY_ZERO)
    if is_zero(ad):
        return ZERO, ZERO

    remainder: Digits = (0,)
    quotient: list[int] = []
    for i in range(len(ad) - 1, -1, -1):
        remainder = strip_zeros((ad[i],) + remainder)
        q = 0
        while compare_magnitude(remainder, bd) >= 0:
            remainder = _sub_magnitudes(remainder, bd)
            q += 1
        quotient.append(q)

    quotient.reverse()
    return normalize(tuple(quotient), an != bn), normalize(remainder, an)
