# src/bigint/runtime.py
"""
Per-context settings for the library.

A profile (see bigint.config) is applied once with APPLY(); library code reads
values lazily with CFG("SECTION.KEY", default), so explicit keyword arguments
and built-in defaults keep working when no profile was ever loaded.
"""

from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import Any

from colorama import Fore, Style


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # [debug] lines on stderr

    def apply(self, settings: Any) -> None:
        """Accept a config.Settings, a plain dict, or any object with UPPERCASE attributes."""
        if hasattr(settings, "as_dict") and callable(settings.as_dict):
            data = settings.as_dict()
        elif isinstance(settings, dict):
            data = settings
        else:
            data = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}

        self.settings = dict(data)
        self.profile_name = str(getattr(settings, "name", None) or "custom")

        dbg = self.get("BEHAVIOUR.DEBUG")
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup: 'PRIMALITY.METHOD' walks settings['PRIMALITY']['METHOD']."""
        if not key:
            return default
        node: Any = self.settings
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node


_current_runtime: ContextVar[Runtime | None] = ContextVar("bigint_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> None:
    """Forget applied settings; the next current() starts from built-in defaults."""
    _current_runtime.set(None)


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def debug_line(msg: str) -> None:
    if not current().debug:
        return
    sys.stderr.write(f"{Style.DIM}[debug]{Style.RESET_ALL} {msg}\n")
    sys.stderr.flush()


def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    The verify command compares against gmpy2 and sympy. Check they can be
    imported (find_spec, no import) and print an install hint if not.
    """
    missing = [name for name in ("gmpy2", "sympy") if find_spec(name) is None]
    if not missing:
        return True

    print(
        f"{Fore.RED}{Style.BRIGHT}verify needs:{Style.RESET_ALL} {', '.join(missing)}\n"
        f"Install with: {Fore.YELLOW}pip install {' '.join(missing)}{Style.RESET_ALL}",
        file=sys.stderr,
    )
    return not strict
