from __future__ import annotations

import tomllib as toml
from dataclasses import dataclass
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

from bigint.errors import UserInputError
from bigint.workspace import profiles_dir

PRIMALITY_METHODS = ("gcd-witness", "miller-rabin")


@dataclass
class Settings:
    """
    One loaded profile. `data` holds the PRIMALITY / FACTORIZATION / DISPLAY /
    BEHAVIOUR tables; the [PROFILE] header is consumed into name and description.
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _packaged_profile(name: str) -> Path | None:
    ref = pkg_files("bigint") / "profiles" / f"{name}.toml"
    return Path(str(ref)) if ref.is_file() else None


def _profile_path(name: str) -> Path | None:
    """Workspace profile first, then the packaged one."""
    ws = profiles_dir() / f"{name}.toml"
    if ws.is_file():
        return ws
    return _packaged_profile(name)


# --- I/O -------------------------------------------------------------------

def _describe_decode_error(e: toml.TOMLDecodeError) -> str:
    msg = getattr(e, "msg", None) or str(e)
    lineno, colno = getattr(e, "lineno", None), getattr(e, "colno", None)
    if lineno is None:
        return msg
    if colno is None:
        return f"{msg} (at line {lineno})"
    return f"{msg} (at line {lineno}, column {colno})"


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        raise UserInputError(f"reading {path.name}: {_describe_decode_error(e)}.") from None


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """(settings, name, description) with [PROFILE] removed from settings."""
    meta = raw.get("PROFILE") or {}
    data = {k: v for k, v in raw.items() if k != "PROFILE"}
    name = str(meta.get("name") or fallback_name)
    description = " ".join(str(meta.get("description") or "").split()) or "(no description)"
    return data, name, description


def _validate(data: dict[str, Any], source: str) -> None:
    prim = data.get("PRIMALITY", {}) or {}
    method = prim.get("METHOD")
    if method is not None and method not in PRIMALITY_METHODS:
        raise UserInputError(
            f"{source}: PRIMALITY.METHOD must be one of {', '.join(PRIMALITY_METHODS)}, got {method!r}."
        )
    for key in ("TRIAL_DIVISION_LIMIT", "ROUNDS", "WITNESS_MIN", "WITNESS_MAX"):
        val = prim.get(key)
        if val is not None and (not isinstance(val, int) or isinstance(val, bool) or val < 0):
            raise UserInputError(f"{source}: PRIMALITY.{key} must be a non-negative integer.")
    lo, hi = prim.get("WITNESS_MIN", 2), prim.get("WITNESS_MAX", 100)
    if lo < 2 or hi < lo:
        raise UserInputError(f"{source}: witness range [{lo}, {hi}] is empty or starts below 2.")
    limit = prim.get("TRIAL_DIVISION_LIMIT", 100)
    if hi > limit:
        raise UserInputError(
            f"{source}: PRIMALITY.WITNESS_MAX ({hi}) must not exceed TRIAL_DIVISION_LIMIT ({limit})."
        )

    fac = data.get("FACTORIZATION", {}) or {}
    rb = fac.get("RECOMPUTE_BOUND")
    if rb is not None and not isinstance(rb, bool):
        raise UserInputError(f"{source}: FACTORIZATION.RECOMPUTE_BOUND must be true or false.")


# --- Public API ------------------------------------------------------------

def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """
    Return [(name, description), ...] for packaged and workspace profiles.
    A workspace profile hides the packaged one of the same file name.
    """
    paths: dict[str, Path] = {}
    pkg_dir = pkg_files("bigint") / "profiles"
    for ref in pkg_dir.iterdir():
        if ref.name.endswith(".toml"):
            paths[ref.name[:-5]] = Path(str(ref))
    ws = profiles_dir()
    if ws.is_dir():
        for p in ws.glob("*.toml"):
            paths[p.stem] = p

    items: list[tuple[str, str]] = []
    for stem, p in paths.items():
        try:
            _, nm, desc = _split_profile_data(_load_toml(p), stem)
        except UserInputError:
            nm, desc = stem, "(unreadable profile)"
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _profile_path(name) is not None


def load_settings(name: str | None) -> Settings:
    """
    Load a profile by name (default 'default'), strip the [PROFILE] metadata,
    validate the known sections and return Settings(data, name, description, _source).
    """
    if not name:
        name = "default"

    path = _profile_path(name)
    if path is None:
        raise UserInputError(f"Profile '{name}' not found in {profiles_dir()} or the packaged profiles.")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)
    _validate(data, path.name)

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
