# -----------------------------------------------------------------------------
#  ntheory.py
#  Combinatorial and number-theoretic functions on BigInt
# -----------------------------------------------------------------------------

from __future__ import annotations

import random
from typing import Protocol

from bigint.errors import BigIntError, ErrorKind
from bigint.integer import ONE, TWO, ZERO, BigInt, as_bigint
from bigint.runtime import CFG, debug_line

# Miller-Rabin with the primes 2..37 as witnesses is exact below this bound
_MR_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)
_MR_DETERMINISTIC_LIMIT = BigInt("318665857834031151167461")

_SYSTEM_RNG = random.SystemRandom()


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def _invalid(msg: str) -> BigIntError:
    return BigIntError(ErrorKind.INVALID_INPUT, msg)


def _as_count(n: BigInt | int, what: str) -> int:
    """Native loop bound for factorial/fibonacci/catalan; negatives are rejected."""
    if isinstance(n, BigInt):
        if n.is_negative:
            raise _invalid(f"{what} not defined for negative numbers")
        return n.to_int64()
    if not isinstance(n, int):
        raise TypeError(f"{what} expects an integer, got {type(n).__name__}")
    if n < 0:
        raise _invalid(f"{what} not defined for negative numbers")
    return n


# ---------- sequences ---------------------------------------------------------

def factorial(n: BigInt | int) -> BigInt:
    k = _as_count(n, "Factorial")
    result = ONE
    for i in range(2, k + 1):
        result = result * BigInt(i)
    return result


def fibonacci(n: BigInt | int) -> BigInt:
    k = _as_count(n, "Fibonacci")
    if k <= 1:
        return BigInt(k)
    a, b = ZERO, ONE
    for _ in range(2, k + 1):
        a, b = b, a + b
    return b


def catalan(n: BigInt | int) -> BigInt:
    """C(n) = (2n)! / ((n+1)! n!)"""
    k = _as_count(n, "Catalan numbers")
    return factorial(2 * k) // (factorial(k + 1) * factorial(k))


# ---------- divisibility ------------------------------------------------------

def gcd(a: BigInt | int, b: BigInt | int) -> BigInt:
    x, y = abs(as_bigint(a)), abs(as_bigint(b))
    while not y.is_zero:
        x, y = y, x % y
    return x


def lcm(a: BigInt | int, b: BigInt | int) -> BigInt:
    a, b = as_bigint(a), as_bigint(b)
    if a.is_zero or b.is_zero:
        return ZERO
    return abs(a * b) // gcd(a, b)


# ---------- powers and roots --------------------------------------------------

def pow(base: BigInt | int, exponent: BigInt | int) -> BigInt:  # noqa: A001
    """base ** exponent by square-and-multiply, O(log exponent) multiplications."""
    b, e = as_bigint(base), as_bigint(exponent)
    if e.is_negative:
        raise _invalid("Negative exponent not supported")

    result = ONE
    while not e.is_zero:
        e, bit = divmod(e, TWO)
        if bit == ONE:
            result = result * b
        if not e.is_zero:
            b = b * b
    return result


def mod_pow(base: BigInt | int, exponent: BigInt | int, modulus: BigInt | int) -> BigInt:
    """
    (base ** exponent) % modulus, reducing after every multiplication.

    Reductions use the truncating `%`, so a negative base can give a negative
    result (mod_pow(-2, 1, 5) == -2).
    The starting value 1 is reduced too, so a modulus of 1 always gives 0,
    including mod_pow(b, 0, 1).
    """
    b, e, m = as_bigint(base), as_bigint(exponent), as_bigint(modulus)
    if m.is_negative or m.is_zero:
        raise _invalid("Modulus must be positive")
    if e.is_negative:
        raise _invalid("Negative exponent not supported")

    result = ONE % m
    b = b % m
    while not e.is_zero:
        e, bit = divmod(e, TWO)
        if bit == ONE:
            result = (result * b) % m
        if not e.is_zero:
            b = (b * b) % m
    return result


def sqrt(n: BigInt | int) -> BigInt:
    """Floor square root by binary search over [1, n]."""
    n = as_bigint(n)
    if n.is_negative:
        raise _invalid("Square root not defined for negative numbers")
    if n <= ONE:
        return n

    left, right = ONE, n
    result = ONE
    while left <= right:
        mid = (left + right) // TWO
        if mid * mid <= n:
            result = mid
            left = mid + ONE
        else:
            right = mid - ONE
    return result


# ---------- primality ---------------------------------------------------------

def _trial_division(num: BigInt) -> bool:
    i = TWO
    while i * i <= num:
        if (num % i).is_zero:
            return False
        i = i + ONE
    return True


def witness_test(n: BigInt | int, *, rng: RandomSource | None = None, rounds: int | None = None) -> bool:
    """
    The default primality check.

    Up to PRIMALITY.TRIAL_DIVISION_LIMIT it is exact trial division. Above it,
    `rounds` random witnesses w in [WITNESS_MIN, WITNESS_MAX] are drawn and n is
    rejected when gcd(w, n) != 1. That only catches composites sharing a small
    factor with a sampled witness: 101 * 103 always passes. It is not a
    primality proof for large n; use miller_rabin() when that matters.
    """
    num = abs(as_bigint(n))
    if num < TWO:
        return False
    limit = int(CFG("PRIMALITY.TRIAL_DIVISION_LIMIT", 100))
    if num <= limit:
        return _trial_division(num)

    rng = rng or _SYSTEM_RNG
    rounds = int(CFG("PRIMALITY.ROUNDS", 5)) if rounds is None else rounds
    lo = int(CFG("PRIMALITY.WITNESS_MIN", 2))
    hi = int(CFG("PRIMALITY.WITNESS_MAX", 100))
    debug_line(f"witness_test: {num.digit_count}-digit value, {rounds} gcd witness(es) in [{lo}, {hi}]")

    for _ in range(rounds):
        w = BigInt(rng.randint(lo, hi))
        if w >= num:
            continue  # gcd(n, n) == n says nothing about n
        if gcd(w, num) != ONE:
            return False
    return True


def miller_rabin(n: BigInt | int, *, rng: RandomSource | None = None, rounds: int | None = None) -> bool:
    """
    Miller-Rabin with witnesses 2..37, exact below 3.18e23; above that,
    `rounds` extra random witnesses are drawn from `rng`.
    """
    num = abs(as_bigint(n))
    if num < TWO:
        return False
    for p in _MR_BASES:
        if num == p:
            return True
        if (num % p).is_zero:
            return False

    n_minus_1 = num - ONE
    d, s = n_minus_1, 0
    while d.is_even():
        d = d // TWO
        s += 1

    witnesses = [BigInt(p) for p in _MR_BASES]
    if num >= _MR_DETERMINISTIC_LIMIT:
        rng = rng or _SYSTEM_RNG
        rounds = int(CFG("PRIMALITY.ROUNDS", 5)) if rounds is None else rounds
        upper = int(num) - 2
        witnesses += [BigInt(rng.randint(2, upper)) for _ in range(rounds)]
        debug_line(f"miller_rabin: {num.digit_count}-digit value, {rounds} random witness(es) added")

    for a in witnesses:
        x = mod_pow(a, d, num)
        if x == ONE or x == n_minus_1:
            continue
        for _ in range(s - 1):
            x = (x * x) % num
            if x == n_minus_1:
                break
        else:
            return False
    return True


def is_prime(n: BigInt | int, *, rng: RandomSource | None = None, method: str | None = None) -> bool:
    n = as_bigint(n)
    if n <= ONE:
        return False
    if n == TWO:
        return True
    if n.is_even():
        return False

    method = method or CFG("PRIMALITY.METHOD", "gcd-witness")
    if method == "miller-rabin":
        return miller_rabin(n, rng=rng)
    if method == "gcd-witness":
        return witness_test(n, rng=rng)
    raise _invalid(f"Unknown primality method {method!r}")


# ---------- factorization -----------------------------------------------------

def prime_factorization(n: BigInt | int, *, recompute_bound: bool | None = None) -> list[tuple[BigInt, int]]:
    """
    Trial-division factorization of |n| as [(prime, multiplicity), ...].

    2 comes first, then odd divisors in ascending order, then any leftover
    cofactor > 1. By default the search bound is sqrt of the odd part and is
    not lowered as factors are divided out (FACTORIZATION.RECOMPUTE_BOUND).
    """
    num = abs(as_bigint(n))
    factors: list[tuple[BigInt, int]] = []
    if num <= ONE:
        return factors

    if recompute_bound is None:
        recompute_bound = bool(CFG("FACTORIZATION.RECOMPUTE_BOUND", False))

    count = 0
    while num.is_even():
        num = num // TWO
        count += 1
    if count > 0:
        factors.append((TWO, count))

    i = BigInt(3)
    bound = sqrt(num)
    while i <= bound:
        count = 0
        while True:
            q, r = divmod(num, i)
            if not r.is_zero:
                break
            num = q
            count += 1
        if count > 0:
            factors.append((i, count))
            if recompute_bound:
                bound = sqrt(num)
        i = i + TWO

    if num > ONE:
        factors.append((num, 1))
    return factors
