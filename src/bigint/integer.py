# src/bigint/integer.py
from __future__ import annotations

from typing import IO, Any

from bigint import convert, engine
from bigint.digits import Digits, Signed, compare, from_native, negate, normalize, parse_decimal
from bigint.errors import BigIntError, ErrorKind


class BigInt:
    """
    Immutable arbitrary-precision signed integer, one decimal digit per element.

    Augmented assignment (`x += y`, `x //= y`, ...) rebinds `x` to a new value:
    the class defines no in-place operators, so there is no fast path that
    modifies an existing instance.

    `//` and `%` truncate toward zero (the remainder has the dividend's sign),
    which differs from Python's floor division on `int`.
    """

    __slots__ = ("_digits", "_negative")

    _digits: Digits
    _negative: bool

    ZERO: BigInt
    ONE: BigInt
    TWO: BigInt

    def __init__(self, value: BigInt | str | int = 0):
        if isinstance(value, BigInt):
            signed = value._signed
        elif isinstance(value, str):
            signed = parse_decimal(value)
        elif isinstance(value, int):
            signed = from_native(int(value))
        else:
            raise TypeError(f"cannot build BigInt from {type(value).__name__}")
        self._set(signed)

    def _set(self, signed: Signed) -> None:
        digits, negative = normalize(*signed)
        object.__setattr__(self, "_digits", digits)
        object.__setattr__(self, "_negative", negative)

    @classmethod
    def _wrap(cls, signed: Signed) -> BigInt:
        obj = object.__new__(cls)
        obj._set(signed)
        return obj

    # ---------- constructors --------------------------------------------------

    @classmethod
    def from_str(cls, text: str) -> BigInt:
        return cls._wrap(parse_decimal(text))

    @classmethod
    def from_int64(cls, n: int) -> BigInt:
        if not convert.INT64_MIN <= n <= convert.INT64_MAX:
            raise BigIntError(ErrorKind.OUT_OF_RANGE, f"{n} is outside the signed 64-bit range")
        return cls._wrap(from_native(n))

    @classmethod
    def read(cls, stream: IO[str]) -> BigInt:
        """Parse the next whitespace-delimited token of `stream`."""
        return cls.from_str(convert.read_token(stream))

    # ---------- immutability --------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("BigInt values are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("BigInt values are immutable")

    def __copy__(self) -> BigInt:
        return self

    def __deepcopy__(self, memo: dict) -> BigInt:
        return self

    def __reduce__(self):
        return (BigInt, (str(self),))

    # ---------- inspection ----------------------------------------------------

    @property
    def _signed(self) -> Signed:
        return self._digits, self._negative

    @property
    def digits(self) -> Digits:
        """Decimal digits, least-significant first."""
        return self._digits

    @property
    def is_negative(self) -> bool:
        return self._negative

    @property
    def is_zero(self) -> bool:
        return self._digits == (0,)

    @property
    def is_positive(self) -> bool:
        return not self._negative and not self.is_zero

    @property
    def digit_count(self) -> int:
        return len(self._digits)

    @property
    def sign(self) -> int:
        if self.is_zero:
            return 0
        return -1 if self._negative else 1

    def is_even(self) -> bool:
        return self._digits[0] % 2 == 0

    # ---------- conversion ----------------------------------------------------

    def __str__(self) -> str:
        return convert.format_decimal(self._signed)

    def __repr__(self) -> str:
        return f"BigInt('{self}')"

    def to_int64(self) -> int:
        return convert.to_int64(self._signed)

    def __int__(self) -> int:
        return convert.to_native(self._signed)

    def write(self, stream: IO[str]) -> None:
        convert.write_decimal(stream, self._signed)

    # ---------- comparison ----------------------------------------------------

    def _cmp(self, other: Any) -> int | None:
        o = _coerce(other)
        if o is None:
            return None
        return compare(self._signed, o._signed)

    def __eq__(self, other: object) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c == 0

    def __lt__(self, other: Any) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c < 0

    def __le__(self, other: Any) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c <= 0

    def __gt__(self, other: Any) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c > 0

    def __ge__(self, other: Any) -> bool:
        c = self._cmp(other)
        return NotImplemented if c is None else c >= 0

    def __hash__(self) -> int:
        # equal to hash(int(self)) so BigInt(5) and 5 collide in dicts/sets
        return hash(int(self))

    def __bool__(self) -> bool:
        return not self.is_zero

    # ---------- unary ---------------------------------------------------------

    def __neg__(self) -> BigInt:
        return BigInt._wrap(negate(self._signed))

    def __pos__(self) -> BigInt:
        return self

    def __abs__(self) -> BigInt:
        return BigInt._wrap((self._digits, False)) if self._negative else self

    # ---------- binary --------------------------------------------------------

    def __add__(self, other: Any) -> BigInt:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return BigInt._wrap(engine.add(self._signed, o._signed))

    def __radd__(self, other: Any) -> BigInt:
        return self.__add__(other)

    def __sub__(self, other: Any) -> BigInt:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return BigInt._wrap(engine.subtract(self._signed, o._signed))

    def __rsub__(self, other: Any) -> BigInt:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other: Any) -> BigInt:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return BigInt._wrap(engine.multiply(self._signed, o._signed))

    def __rmul__(self, other: Any) -> BigInt:
        return self.__mul__(other)

    def __divmod__(self, other: Any) -> tuple[BigInt, BigInt]:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        q, r = engine.divide_with_remainder(self._signed, o._signed)
        return BigInt._wrap(q), BigInt._wrap(r)

    def __rdivmod__(self, other: Any) -> tuple[BigInt, BigInt]:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return divmod(o, self)

    def __floordiv__(self, other: Any) -> BigInt:
        res = self.__divmod__(other)
        return res if res is NotImplemented else res[0]

    def __rfloordiv__(self, other: Any) -> BigInt:
        res = self.__rdivmod__(other)
        return res if res is NotImplemented else res[0]

    def __mod__(self, other: Any) -> BigInt:
        res = self.__divmod__(other)
        return res if res is NotImplemented else res[1]

    def __rmod__(self, other: Any) -> BigInt:
        res = self.__rdivmod__(other)
        return res if res is NotImplemented else res[1]

    # ---------- power ---------------------------------------------------------

    def power(self, exponent: BigInt | int, modulus: BigInt | int | None = None) -> BigInt:
        """Integer power by square-and-multiply; reduced mod `modulus` if given."""
        from bigint import ntheory  # ntheory imports this module

        if modulus is None:
            return ntheory.pow(self, exponent)
        return ntheory.mod_pow(self, exponent, modulus)

    def __pow__(self, exponent: Any, modulus: Any = None) -> BigInt:
        if _coerce(exponent) is None or (modulus is not None and _coerce(modulus) is None):
            return NotImplemented
        return self.power(exponent, modulus)

    def __rpow__(self, base: Any) -> BigInt:
        b = _coerce(base)
        if b is None:
            return NotImplemented
        return b.power(self)


def _coerce(value: Any) -> BigInt | None:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int):
        return BigInt(value)
    return None


def as_bigint(value: BigInt | str | int) -> BigInt:
    """Accept a BigInt, decimal text or int wherever a BigInt is expected."""
    return value if isinstance(value, BigInt) else BigInt(value)


def big(text: str) -> BigInt:
    """Literal shorthand: big("123") parses exactly like BigInt.from_str."""
    return BigInt.from_str(text)


BigInt.ZERO = BigInt(0)
BigInt.ONE = BigInt(1)
BigInt.TWO = BigInt(2)

ZERO = BigInt.ZERO
ONE = BigInt.ONE
TWO = BigInt.TWO
