# src/bigint/fmt.py
from __future__ import annotations

from collections.abc import Iterable

from bigint.integer import BigInt
from bigint.runtime import CFG


def abbr_text(text: str, head: int = 20, tail: int = 20, threshold: int = 60, ellipsis: str = "…") -> str:
    """Abbreviate a long decimal string as first<head>…last<tail>, keeping the sign."""
    sign = "-" if text.startswith("-") else ""
    body = text[len(sign):]
    if len(body) <= threshold or head + tail >= len(body):
        return text
    return f"{sign}{body[:head]}{ellipsis}{body[-tail:]}"


def abbr_value(value: BigInt, *, full: bool = False) -> str:
    """Render a BigInt for display, abbreviated per DISPLAY.* unless full=True."""
    text = str(value)
    if full:
        return text
    return abbr_text(
        text,
        head=int(CFG("DISPLAY.NUM_ABBR_HEAD", 20)),
        tail=int(CFG("DISPLAY.NUM_ABBR_TAIL", 20)),
        threshold=int(CFG("DISPLAY.NUM_ABBR_THRESHOLD", 60)),
        ellipsis=str(CFG("DISPLAY.ELLIPSIS", "…")),
    )


def format_factorization(entries: Iterable[tuple[BigInt, int]]) -> str:
    """
    Turn [(p, e), ...] into a tidy string like: 2^3 × 3^2 × 5
    """
    parts: list[str] = []
    for p, e in entries:
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    return f"{int(m)}:{s:06.3f}"
