from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("bigint-decimal")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .errors import BigIntError, ErrorKind, Result, UserInputError, attempt
from .integer import ONE, TWO, ZERO, BigInt, big
from .ntheory import (
    catalan,
    factorial,
    fibonacci,
    gcd,
    is_prime,
    lcm,
    miller_rabin,
    mod_pow,
    pow,
    prime_factorization,
    sqrt,
    witness_test,
)
from .runtime import APPLY, CFG

__all__ = [
    "APPLY",
    "CFG",
    "ONE",
    "TWO",
    "ZERO",
    "BigInt",
    "BigIntError",
    "ErrorKind",
    "Result",
    "UserInputError",
    "__version__",
    "attempt",
    "big",
    "catalan",
    "factorial",
    "fibonacci",
    "gcd",
    "is_prime",
    "lcm",
    "miller_rabin",
    "mod_pow",
    "pow",
    "prime_factorization",
    "sqrt",
    "witness_test",
]
