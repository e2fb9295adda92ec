# tests/test_verify.py
from __future__ import annotations

from bigint.verify import VerifyReport, verify


def test_verify_finds_no_mismatches():
    rep = verify(count=3, seed=11, digits=15)
    assert rep.ok, rep.failures[:3]
    assert rep.seed == 11
    for check in ("add", "sub", "mul", "div", "mod", "factorial", "fibonacci", "catalan",
                  "gcd", "lcm", "sqrt", "pow", "mod_pow", "factorization", "is_prime"):
        assert rep.per_check.get(check, 0) >= 1, check


def test_same_seed_same_checks():
    a = verify(count=2, seed=5, digits=10)
    b = verify(count=2, seed=5, digits=10)
    assert a.checks == b.checks
    assert a.per_check == b.per_check


def test_report_records_mismatch():
    rep = VerifyReport(seed=0)
    rep.record("add", (1, 2), 3, 3)
    rep.record("add", (1, 2), 3, 4)
    assert rep.checks == 2
    assert not rep.ok
    assert rep.failures[0].expected == "3"
    assert rep.failures[0].got == "4"
