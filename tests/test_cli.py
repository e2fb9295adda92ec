# tests/test_cli.py
from __future__ import annotations

import pytest

from bigint.cli import main

# ---------- helpers -----------------------------------------------------------


def run(capsys, *argv: str) -> tuple[int, str, str]:
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


# ---------- demo --------------------------------------------------------------

def test_demo_prints_every_section(capsys):
    code, out, _ = run(capsys, "demo")
    assert code == 0
    for line in (
        "a + b = 1111111110",
        "a - b = -864197532",
        "a * b = 121932631112635269",
        "b / a = 8",
        "b % a = 9",
        "Factorial of 15 = 1307674368000",
        "Fibonacci(30) = 832040",
        "Catalan(8) = 1430",
        "GCD(48, 18) = 6",
        "LCM(48, 18) = 144",
        "Square root of 100 = 10",
        "17 is prime",
        "100 is not prime",
        "Prime factors of 360 = 2^3 × 3^2 × 5",
        "Result has 65 digits",
        "All operations completed successfully!",
    ):
        assert line in out


# ---------- calc --------------------------------------------------------------

CALC_CASES = [
    (("7", "+", "5"), "12"),
    (("-7", "/", "2"), "-3"),
    (("-7", "%", "2"), "-1"),
    (("-7", "mod", "2"), "-1"),
    (("123456789", "*", "987654321"), "121932631112635269"),
    (("2", "**", "64"), "18446744073709551616"),
    (("2", "pow", "10"), "1024"),
    (("+0", "-", "-0"), "0"),
]


@pytest.mark.parametrize("argv,expected", CALC_CASES, ids=[" ".join(c[0]) for c in CALC_CASES])
def test_calc(capsys, argv, expected):
    code, out, _ = run(capsys, "calc", *argv)
    assert code == 0
    assert out.strip() == expected


@pytest.mark.parametrize("op", ["/", "%"])
def test_calc_division_by_zero_exits_nonzero(capsys, op):
    code, out, err = run(capsys, "calc", "5", op, "0")
    assert code == 1
    assert out == ""
    assert "DivisionByZero" in err
    assert "Division by zero" in err


def test_calc_bad_number(capsys):
    code, _, err = run(capsys, "calc", "12a", "+", "1")
    assert code == 1
    assert "InvalidInput" in err
    assert "Non-digit character" in err


def test_calc_unknown_operator_is_argparse_error(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["calc", "1", "^", "2"])
    assert ei.value.code == 2


def test_long_results_are_abbreviated_unless_full(capsys):
    _, short, _ = run(capsys, "fn", "factorial", "100")
    _, full, _ = run(capsys, "--full", "fn", "factorial", "100")
    assert "…" in short
    assert len(full.strip()) == 158
    assert full.strip().endswith("0" * 24)


# ---------- fn ----------------------------------------------------------------

FN_CASES = [
    (("factorial", "5"), "120"),
    (("fibonacci", "10"), "55"),
    (("catalan", "8"), "1430"),
    (("gcd", "48", "18"), "6"),
    (("lcm", "48", "18"), "144"),
    (("pow", "2", "10"), "1024"),
    (("modpow", "4", "13", "497"), "445"),
    (("sqrt", "99"), "9"),
    (("isprime", "17"), "17 is prime"),
    (("isprime", "1"), "1 is not prime"),
    (("factor", "360"), "2^3 × 3^2 × 5"),
    (("factor", "1"), "1"),
]


@pytest.mark.parametrize("argv,expected", FN_CASES, ids=[" ".join(c[0]) for c in FN_CASES])
def test_fn(capsys, argv, expected):
    code, out, _ = run(capsys, "fn", *argv)
    assert code == 0
    assert out.strip() == expected


@pytest.mark.parametrize("argv", [("factorial", "-1"), ("sqrt", "-4"), ("modpow", "2", "3", "0")])
def test_fn_invalid_input(capsys, argv):
    code, _, err = run(capsys, "fn", *argv)
    assert code == 1
    assert "InvalidInput" in err


def test_fn_wrong_arity_is_user_error(capsys):
    code, _, err = run(capsys, "fn", "gcd", "4")
    assert code == 2
    assert "takes 2 argument(s)" in err


def test_strict_profile_changes_primality(capsys):
    _, default_out, _ = run(capsys, "fn", "isprime", "10403")
    _, strict_out, _ = run(capsys, "--profile", "strict", "fn", "isprime", "10403")
    assert default_out.strip() == "10403 is prime"      # gcd-witness weakness
    assert strict_out.strip() == "10403 is not prime"


def test_unknown_profile(capsys):
    code, _, err = run(capsys, "--profile", "missing", "demo")
    assert code == 2
    assert "not found" in err


def test_debug_prints_timings(capsys):
    code, _, err = run(capsys, "--debug", "fn", "factorial", "20")
    assert code == 0
    assert "[debug]" in err
    assert "factorial" in err


# ---------- verify / profiles -------------------------------------------------

def test_verify_small_run(capsys):
    code, out, _ = run(capsys, "verify", "--count", "2", "--seed", "7", "--digits", "12", "--quiet")
    assert code == 0
    assert "OK" in out
    assert "seed 7" in out


def test_verify_rejects_bad_count(capsys):
    code, _, err = run(capsys, "verify", "--count", "0")
    assert code == 2
    assert "--count" in err


def test_profiles_lists_packaged(capsys):
    code, out, _ = run(capsys, "profiles")
    assert code == 0
    assert "default" in out
    assert "strict" in out


def test_profiles_creates_workspace_dir(capsys, tmp_path):
    code, out, _ = run(capsys, "profiles")
    assert code == 0
    assert (tmp_path / "home" / "profiles").is_dir()
    assert "workspace profiles:" in out
