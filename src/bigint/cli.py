# src/bigint/cli.py

"""
bigint - exact decimal arbitrary-precision integers from the command line

usage: see bigint -h

Commands:
    demo        sample computations (arithmetic, sequences, gcd/lcm, roots, primes)
    calc        one binary operation: bigint calc 123 '*' 456
    fn          one library function: bigint fn factorial 50
    verify      randomized cross-check against gmpy2 and sympy
    profiles    list available settings profiles
"""

from __future__ import annotations

import argparse
import sys
import textwrap
import time
import traceback
from collections.abc import Callable
from typing import Any

from colorama import Fore, Style
from colorama import init as colorama_init

from bigint import __version__ as _ver
from bigint import ntheory
from bigint.config import list_profiles_with_descriptions, load_settings
from bigint.errors import BigIntError, ErrorKind, Result, UserInputError, attempt
from bigint.fmt import abbr_value, format_duration, format_factorization
from bigint.integer import BigInt, big
from bigint.progress import Progress
from bigint.runtime import APPLY, current, debug_line, ensure_runtime_deps
from bigint.workspace import ensure_workspace

_RULE = "=" * 60

_HINTS = {
    ErrorKind.DIVISION_BY_ZERO: "the divisor must be non-zero",
    ErrorKind.INVALID_INPUT: "integers are written as ['+'|'-'] digits; some functions reject negatives",
    ErrorKind.OUT_OF_RANGE: "the value does not fit in a signed 64-bit integer",
}

_OPERATORS: dict[str, Callable[[BigInt, BigInt], BigInt]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a // b,
    "%": lambda a, b: a % b,
    "mod": lambda a, b: a % b,
    "**": lambda a, b: a.power(b),
    "pow": lambda a, b: a.power(b),
}

# name -> (arity, function)
_FUNCTIONS: dict[str, tuple[int, Callable[..., Any]]] = {
    "factorial": (1, ntheory.factorial),
    "fibonacci": (1, ntheory.fibonacci),
    "catalan": (1, ntheory.catalan),
    "gcd": (2, ntheory.gcd),
    "lcm": (2, ntheory.lcm),
    "pow": (2, ntheory.pow),
    "modpow": (3, ntheory.mod_pow),
    "sqrt": (1, ntheory.sqrt),
    "isprime": (1, ntheory.is_prime),
    "factor": (1, ntheory.prime_factorization),
}


# ---- reporting ---------------------------------------------------------------

def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    print(f"{Fore.RED}Error:{Style.RESET_ALL} {msg}", file=sys.stderr)


def _report_failure(err: BigIntError) -> None:
    line = f"[{err.kind.label}] {err.message}"
    hint = _HINTS.get(err.kind)
    if hint:
        line += f" {Style.DIM}({hint}){Style.RESET_ALL}"
    _print_user_error(line)


def _header(title: str) -> None:
    print(f"\n{_RULE}")
    print(f" {Fore.CYAN}{Style.BRIGHT}{title}{Style.RESET_ALL}")
    print(_RULE)


def _run(label: str, fn: Callable[..., Any], *args: Any) -> Result[Any]:
    """attempt() plus a timing line in debug mode."""
    t0 = time.perf_counter()
    res = attempt(fn, *args)
    status = f"{Fore.GREEN}OK{Style.RESET_ALL}" if res.ok else f"{Fore.RED}{res.kind.label}{Style.RESET_ALL}"
    debug_line(f"{label}: {status} in {format_duration(time.perf_counter() - t0)}")
    return res


def _render(value: Any, full: bool) -> str:
    if isinstance(value, BigInt):
        return abbr_value(value, full=full)
    return str(value)


# ---- commands ----------------------------------------------------------------

def _demo_sections() -> list[tuple[str, list[tuple[str, Callable[[], Any]]]]]:
    a = BigInt.from_int64(123456789)
    b = BigInt.from_int64(987654321)
    return [
        ("BASIC ARITHMETIC OPERATIONS", [
            ("a", lambda: a),
            ("b", lambda: b),
            ("a + b", lambda: a + b),
            ("a - b", lambda: a - b),
            ("a * b", lambda: a * b),
            ("b / a", lambda: b // a),
            ("b % a", lambda: b % a),
        ]),
        ("MATHEMATICAL FUNCTIONS", [
            ("Factorial of 15", lambda: ntheory.factorial(15)),
            ("Fibonacci(30)", lambda: ntheory.fibonacci(30)),
            ("Catalan(8)", lambda: ntheory.catalan(8)),
            ("GCD(48, 18)", lambda: ntheory.gcd(48, 18)),
            ("LCM(48, 18)", lambda: ntheory.lcm(48, 18)),
        ]),
        ("ADVANCED FEATURES", [
            ("Square root of 100", lambda: ntheory.sqrt(100)),
            ("17 is", lambda: "prime" if ntheory.is_prime(17) else "not prime"),
            ("100 is", lambda: "prime" if ntheory.is_prime(100) else "not prime"),
            ("Prime factors of 360", lambda: format_factorization(ntheory.prime_factorization(360))),
        ]),
    ]


def _cmd_demo(args: argparse.Namespace) -> int:
    print(f"{Style.BRIGHT}bigint {_ver} demo{Style.RESET_ALL}")

    for title, steps in _demo_sections():
        _header(title)
        for label, fn in steps:
            res = _run(label, fn)
            if not res.ok:
                _report_failure(res.error)
                return 1
            sep = " " if label.endswith(" is") else " = "
            print(f"{label}{sep}{_render(res.value, args.full)}")

    _header("PERFORMANCE DEMONSTRATION")
    t0 = time.perf_counter()
    res = _run("Factorial(50)", ntheory.factorial, 50)
    if not res.ok:
        _report_failure(res.error)
        return 1
    print(f"Factorial(50) calculated in {format_duration(time.perf_counter() - t0)}")
    print(f"Result has {res.value.digit_count} digits")

    print(f"\n{_RULE}")
    print(f" {Fore.GREEN}All operations completed successfully!{Style.RESET_ALL}")
    print(_RULE)
    return 0


def _cmd_calc(args: argparse.Namespace) -> int:
    lhs = _run("parse lhs", big, args.a)
    rhs = _run("parse rhs", big, args.b)
    for res in (lhs, rhs):
        if not res.ok:
            _report_failure(res.error)
            return 1

    res = _run(f"calc {args.op}", _OPERATORS[args.op], lhs.value, rhs.value)
    if not res.ok:
        _report_failure(res.error)
        return 1
    print(_render(res.value, args.full))
    return 0


def _cmd_fn(args: argparse.Namespace) -> int:
    arity, fn = _FUNCTIONS[args.name]
    if len(args.args) != arity:
        raise UserInputError(f"{args.name} takes {arity} argument(s), got {len(args.args)}.")

    operands: list[BigInt] = []
    for text in args.args:
        res = _run("parse", big, text)
        if not res.ok:
            _report_failure(res.error)
            return 1
        operands.append(res.value)

    res = _run(args.name, fn, *operands)
    if not res.ok:
        _report_failure(res.error)
        return 1

    value = res.value
    if args.name == "isprime":
        print(f"{operands[0]} is {'prime' if value else 'not prime'}")
    elif args.name == "factor":
        print(format_factorization(value))
    else:
        print(_render(value, args.full))
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    if not ensure_runtime_deps(strict=True):
        return 1
    from bigint.verify import verify  # needs gmpy2 + sympy

    if args.count < 1 or args.digits < 1:
        raise UserInputError("--count and --digits must be positive.")

    prog = Progress(args.count, enabled=not args.quiet and sys.stderr.isatty())
    report = verify(
        count=args.count,
        seed=args.seed,
        digits=args.digits,
        progress=lambda done, total: prog.update(done, f"round {done}/{total}"),
    )
    prog.done()

    status = f"{Fore.GREEN}OK{Style.RESET_ALL}" if report.ok else f"{Fore.RED}FAILED{Style.RESET_ALL}"
    print(f"verify: {status}  {report.checks} checks, {len(report.failures)} mismatch(es), "
          f"seed {report.seed}, {format_duration(report.elapsed_s)}")
    if not args.quiet:
        for name, n in sorted(report.per_check.items()):
            print(f"  {name:<14} {n}")
    for m in report.failures[:10]:
        print(f"  {Fore.RED}{m.check}{Style.RESET_ALL}({', '.join(m.operands)}): expected {m.expected}, got {m.got}")
    return 0 if report.ok else 1


def _cmd_profiles(args: argparse.Namespace) -> int:
    active = current().profile_name
    print(f"{Style.DIM}workspace profiles: {ensure_workspace() / 'profiles'}{Style.RESET_ALL}")
    for name, desc in list_profiles_with_descriptions():
        mark = f"{Fore.GREEN}*{Style.RESET_ALL}" if name == active else " "
        print(f"{mark} {name:<12} {desc}")
    return 0


# ---- argparse ----------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent("""\
    examples:
      bigint demo
      bigint calc 123456789 '*' 987654321
      bigint calc -7 / 2            (truncates: -3)
      bigint fn modpow 4 13 497
      bigint --profile strict fn isprime 10403
      bigint verify --count 20 --seed 1
    """)

    p = argparse.ArgumentParser(
        prog="bigint",
        description="Exact decimal arbitrary-precision integer arithmetic",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    p.add_argument("--profile", default=None, help="Settings profile (default: 'default')")
    p.add_argument("--debug", action="store_true", help="Print per-step timings and trace info to stderr")
    p.add_argument("--full", action="store_true", help="Never abbreviate long results")

    sub = p.add_subparsers(dest="command", metavar="command")
    sub.required = True

    sp = sub.add_parser("demo", help="Run the sample computations")
    sp.set_defaults(func=_cmd_demo)

    sp = sub.add_parser("calc", help="Apply one binary operator")
    sp.add_argument("a")
    sp.add_argument("op", choices=sorted(_OPERATORS))
    sp.add_argument("b")
    sp.set_defaults(func=_cmd_calc)

    sp = sub.add_parser("fn", help="Call one number-theory function")
    sp.add_argument("name", choices=sorted(_FUNCTIONS))
    sp.add_argument("args", nargs="+")
    sp.set_defaults(func=_cmd_fn)

    sp = sub.add_parser("verify", help="Cross-check against gmpy2 and sympy")
    sp.add_argument("--count", type=int, default=50, help="Number of random rounds (default 50)")
    sp.add_argument("--seed", type=int, default=None, help="Seed for replaying a run")
    sp.add_argument("--digits", type=int, default=30, help="Maximum operand length (default 30)")
    sp.add_argument("--quiet", action="store_true", help="Only print the summary line")
    sp.set_defaults(func=_cmd_verify)

    sp = sub.add_parser("profiles", help="List settings profiles")
    sp.set_defaults(func=_cmd_profiles)

    return p


def main(argv: list[str] | None = None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except BigIntError as e:
        _report_failure(e)
        return 1
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            traceback.print_exc()
        else:
            print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
            print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _main_impl(argv: list[str] | None = None) -> int:
    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)

    APPLY(load_settings(args.profile))
    rt = current()
    rt.debug = rt.debug or bool(args.debug)
    debug_line(f"profile {rt.profile_name}, primality {rt.get('PRIMALITY.METHOD', 'gcd-witness')}")

    return args.func(args)
