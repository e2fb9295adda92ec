# src/bigint/verify.py
"""
Randomized cross-check of BigInt against gmpy2 and sympy.

Operands come from a seeded random.Random so a failing run can be replayed
with the same --seed. Division is compared with gmpy2.t_divmod, which uses the
same truncating convention as BigInt.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import gmpy2
from sympy import catalan as sp_catalan
from sympy import factorint, isprime

from bigint import ntheory
from bigint.integer import BigInt


@dataclass(frozen=True, slots=True)
class Mismatch:
    check: str
    operands: tuple[str, ...]
    expected: str
    got: str


@dataclass
class VerifyReport:
    seed: int
    checks: int = 0
    failures: list[Mismatch] = field(default_factory=list)
    per_check: dict[str, int] = field(default_factory=dict)
    elapsed_s: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures

    def record(self, check: str, operands: tuple[Any, ...], expected: Any, got: Any) -> None:
        self.checks += 1
        self.per_check[check] = self.per_check.get(check, 0) + 1
        if str(expected) != str(got):
            self.failures.append(
                Mismatch(check, tuple(str(o) for o in operands), str(expected), str(got))
            )


def _rand_int(rng: random.Random, max_digits: int, *, signed: bool = True) -> int:
    length = rng.randint(1, max_digits)
    lo = 10 ** (length - 1) if length > 1 else 0
    n = rng.randrange(lo, 10 ** length)
    if signed and rng.random() < 0.5:
        n = -n
    return n


def _arith_round(rep: VerifyReport, rng: random.Random, digits: int) -> None:
    x, y = _rand_int(rng, digits), _rand_int(rng, digits)
    a, b = BigInt(x), BigInt(y)
    mx, my = gmpy2.mpz(x), gmpy2.mpz(y)

    rep.record("text", (x,), str(x), str(a))
    rep.record("add", (x, y), mx + my, a + b)
    rep.record("sub", (x, y), mx - my, a - b)
    rep.record("mul", (x, y), mx * my, a * b)
    rep.record("cmp", (x, y), (x > y) - (x < y), (a > b) - (a < b))
    if y != 0:
        q, r = gmpy2.t_divmod(mx, my)
        got_q, got_r = divmod(a, b)
        rep.record("div", (x, y), q, got_q)
        rep.record("mod", (x, y), r, got_r)


def _ntheory_round(rep: VerifyReport, rng: random.Random, digits: int) -> None:
    k = rng.randint(0, 40)
    rep.record("factorial", (k,), gmpy2.fac(k), ntheory.factorial(k))

    k = rng.randint(0, 150)
    rep.record("fibonacci", (k,), gmpy2.fib(k), ntheory.fibonacci(k))

    k = rng.randint(0, 20)
    rep.record("catalan", (k,), sp_catalan(k), ntheory.catalan(k))

    x, y = _rand_int(rng, digits), _rand_int(rng, digits)
    rep.record("gcd", (x, y), gmpy2.gcd(x, y), ntheory.gcd(x, y))
    rep.record("lcm", (x, y), abs(gmpy2.lcm(x, y)), ntheory.lcm(x, y))

    n = _rand_int(rng, digits, signed=False)
    rep.record("sqrt", (n,), gmpy2.isqrt(n), ntheory.sqrt(n))

    base, e = _rand_int(rng, 6), rng.randint(0, 25)
    rep.record("pow", (base, e), gmpy2.mpz(base) ** e, ntheory.pow(base, e))

    base = _rand_int(rng, digits // 2 + 1, signed=False)
    e = _rand_int(rng, 4, signed=False)
    m = _rand_int(rng, 6, signed=False) + 1
    rep.record("mod_pow", (base, e, m), gmpy2.powmod(base, e, m), ntheory.mod_pow(base, e, m))

    n = rng.randint(2, 10**5)
    expected = [(int(p), c) for p, c in sorted(factorint(n).items())]
    got = [(int(p), c) for p, c in ntheory.prime_factorization(n)]
    rep.record("factorization", (n,), expected, got)

    n = rng.randint(2, 10**7)
    rep.record("is_prime", (n,), isprime(n), ntheory.is_prime(n, method="miller-rabin"))


def verify(count: int = 50, seed: int | None = None, digits: int = 30,
           progress: Callable[[int, int], None] | None = None) -> VerifyReport:
    """Run `count` rounds of arithmetic and number-theory comparisons."""
    if seed is None:
        seed = random.SystemRandom().randrange(2**32)
    rng = random.Random(seed)
    rep = VerifyReport(seed=seed)

    t0 = time.perf_counter()
    for i in range(count):
        _arith_round(rep, rng, digits)
        _ntheory_round(rep, rng, digits)
        if progress is not None:
            progress(i + 1, count)
    rep.elapsed_s = time.perf_counter() - t0
    return rep
