# tests/test_config.py
from __future__ import annotations

import os
from pathlib import Path

import pytest

from bigint import UserInputError
from bigint.config import has_profile, list_profiles_with_descriptions, load_settings
from bigint.runtime import APPLY, CFG, current, ensure_runtime_deps
from bigint.workspace import ensure_workspace, profiles_dir, workspace_dir

# ---------- helpers -----------------------------------------------------------


def _write_profile(name: str, body: str) -> Path:
    d = ensure_workspace() / "profiles"
    p = d / f"{name}.toml"
    p.write_text(body, encoding="utf-8")
    return p


# ---------- workspace ---------------------------------------------------------

def test_workspace_follows_env(tmp_path):
    assert workspace_dir() == (tmp_path / "home").resolve()
    assert profiles_dir() == workspace_dir() / "profiles"


# ---------- packaged profiles -------------------------------------------------

def test_default_profile_values():
    s = load_settings(None)
    assert s.name == "default"
    assert "PROFILE" not in s.data
    assert s.data["PRIMALITY"]["METHOD"] == "gcd-witness"
    assert s.data["PRIMALITY"]["TRIAL_DIVISION_LIMIT"] == 100
    assert s.data["FACTORIZATION"]["RECOMPUTE_BOUND"] is False


def test_strict_profile_switches_methods():
    APPLY(load_settings("strict"))
    assert current().profile_name == "strict"
    assert CFG("PRIMALITY.METHOD") == "miller-rabin"
    assert CFG("FACTORIZATION.RECOMPUTE_BOUND") is True


def test_list_profiles_includes_packaged():
    names = [n for n, _ in list_profiles_with_descriptions()]
    assert {"default", "strict"} <= set(names)
    assert has_profile("default")
    assert not has_profile("nope")


def test_missing_profile_is_user_error():
    with pytest.raises(UserInputError, match="not found"):
        load_settings("nope")


# ---------- workspace profiles ------------------------------------------------

def test_workspace_profile_overrides_packaged():
    _write_profile("default", '[PROFILE]\nname = "mine"\n[PRIMALITY]\nMETHOD = "miller-rabin"\n')
    s = load_settings("default")
    assert s.name == "mine"
    assert s.description == "(no description)"
    assert s.data["PRIMALITY"]["METHOD"] == "miller-rabin"
    assert os.fspath(s._source).startswith(os.fspath(workspace_dir()))


def test_toml_errors_report_location():
    _write_profile("broken", "[PRIMALITY\nMETHOD = 1\n")
    with pytest.raises(UserInputError, match=r"broken\.toml.*line 1"):
        load_settings("broken")


@pytest.mark.parametrize("body,fragment", [
    ('[PRIMALITY]\nMETHOD = "coin-flip"\n', "PRIMALITY.METHOD"),
    ("[PRIMALITY]\nROUNDS = -1\n", "PRIMALITY.ROUNDS"),
    ("[PRIMALITY]\nWITNESS_MIN = 50\nWITNESS_MAX = 10\n", "witness range"),
    ("[PRIMALITY]\nTRIAL_DIVISION_LIMIT = 10\n", "WITNESS_MAX"),
    ('[FACTORIZATION]\nRECOMPUTE_BOUND = "yes"\n', "RECOMPUTE_BOUND"),
])
def test_invalid_settings_are_rejected(body, fragment):
    _write_profile("bad", body)
    with pytest.raises(UserInputError, match=fragment):
        load_settings("bad")


# ---------- runtime -----------------------------------------------------------

def test_dotted_lookup_and_defaults():
    APPLY({"A": {"B": {"C": 3}}, "TOP": 1})
    assert CFG("A.B.C") == 3
    assert CFG("TOP") == 1
    assert CFG("A.X", "dflt") == "dflt"
    assert CFG("", "dflt") == "dflt"


def test_debug_flag_synced_from_profile():
    APPLY({"BEHAVIOUR": {"DEBUG": True}})
    assert current().debug is True


def test_debug_line_goes_to_stderr(capsys):
    from bigint.runtime import debug_line

    debug_line("hidden")
    current().debug = True
    debug_line("shown")
    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_runtime_deps_present():
    assert ensure_runtime_deps(strict=True) is True
