# -*- coding: utf-8 -*-
# Ramforge/ramforge/build/schema.py

"""
Project: Ramforge
Date: 10/5/2026 (Updated: 10/12/2026)

Purpose
-------
Lightweight schema layer for simulation configuration params. Canonicalizes the short
and macro-style keys users type (`nd`, `NDIM`, `ngroups`, ...) to the field names of
`SimulationConfig`, and checks the two enumerated fields (solver, simulation type),
raising `SchemaError` with actionable messages on violations.

Main Tasks
----------
    1. Canonicalize params via `normalize_keys` using curated `ALIASES`.
    2. Reject keys that do not name a configuration field.
    3. Enforce categorical constraints using `ENUMS` (case-insensitive matching).

Notes
-----
- No numeric range checks: dimensionality, precision and counts are handed to the
  Fortran compiler verbatim, which is where they get validated.
- `None` values are dropped so the record's defaults apply.
"""

from typing import Any, Dict, Mapping

from .errors import SchemaError

__all__ = ["normalize_keys", "validate", "enum_value", "flag_value", "ALIASES", "ENUMS", "FLAGS", "FIELDS"]

# Canonical field names, in the order they are described.
FIELDS = (
    "vector_length",
    "dimensionality",
    "precision",
    "variable_count",
    "energy_variable_count",
    "solver",
    "patch",
    "cooling",
    "executable",
    "ion_count",
    "photon_groups",
    "simulation_type",
)

# --------------------------
# Canonicalization (aliases)
# --------------------------
# Short keyword names and RAMSES macro names -> field names.
ALIASES = {
    # Grid / numerics
    "nvec": "vector_length",
    "nvector": "vector_length",
    "NVECTOR": "vector_length",
    "nd": "dimensionality",
    "ndim": "dimensionality",
    "NDIM": "dimensionality",
    "np": "precision",
    "npre": "precision",
    "NPRE": "precision",
    "nvar": "variable_count",
    "NVAR": "variable_count",
    "ne": "energy_variable_count",
    "nener": "energy_variable_count",
    "NENER": "energy_variable_count",
    "s": "solver",
    "SOLVER": "solver",

    # Build layout
    "p": "patch",
    "PATCH": "patch",
    "g": "cooling",
    "grackle": "cooling",
    "GRACKLE": "cooling",
    "e": "executable",
    "exec": "executable",
    "EXEC": "executable",

    # Radiative transfer
    "ni": "ion_count",
    "nions": "ion_count",
    "NIONS": "ion_count",
    "ng": "photon_groups",
    "ngroups": "photon_groups",
    "NGROUPS": "photon_groups",
    "t": "simulation_type",
    "type": "simulation_type",
}

# --------------------------
# Enumerations (exact sets)
# --------------------------
# Allowed values (matched case-insensitively); synonyms map onto the canonical value.
ENUMS = {
    "solver": {"hydro": "hydro", "mhd": "mhd", "rhd": "rhd"},
    "simulation_type": {
        "rt": "rt",
        "radiative-transfer": "rt",
        "radiative_transfer": "rt",
        "other": "other",
    },
}


# Boolean fields and the spellings accepted for them (matched case-insensitively).
FLAGS = ("cooling",)
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def flag_value(key: str, val: Any) -> bool:
    """
    Return the boolean for a switch field.

    Accepts bools, the integers 0/1 and the strings true/false, yes/no, on/off, 1/0.
    """
    if isinstance(val, bool):
        return val
    if isinstance(val, int) and val in (0, 1):
        return bool(val)
    if isinstance(val, str):
        sval = val.strip().lower()
        if sval in _TRUE:
            return True
        if sval in _FALSE:
            return False
    raise SchemaError(
        "Invalid value for {k}: {v!r}. Expected a boolean".format(k=key, v=val),
        {"true": list(_TRUE), "false": list(_FALSE)},
    )


def normalize_keys(params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Map alias keys to canonical field names and drop `None` values.

    Raises
    ------
    SchemaError
        If a key is neither a field name nor a known alias, or if two keys resolve
        to the same field.
    """
    out = {}  # type: Dict[str, Any]
    for k, v in params.items():
        can = ALIASES.get(k, k)
        if can not in FIELDS:
            raise SchemaError(
                "Unknown configuration key: {!r}".format(k),
                {"allowed": sorted(FIELDS)},
            )
        if v is None:
            continue
        if can in out:
            raise SchemaError("Duplicate configuration key for {}: {!r}".format(can, k))
        out[can] = v
    return out


def enum_value(key: str, val: Any) -> str:
    """
    Return the canonical string for an enumerated field.

    Accepts enum members (anything with a string `.value`) and plain strings.
    """
    raw = getattr(val, "value", val)
    sval = str(raw).strip().lower()
    options = ENUMS[key]
    if sval not in options:
        raise SchemaError(
            "Invalid value for {k}: {v!r}. Allowed: {opts}".format(
                k=key, v=val, opts=sorted(set(options.values()))
            )
        )
    return options[sval]


def validate(params: Mapping[str, Any]) -> None:
    """
    Validate a params dict *after* canonicalization via `normalize_keys`.

    Raises
    ------
    SchemaError
        On a bad enum value or a non-boolean switch value.
    """
    for k, v in params.items():
        if k in ENUMS:
            enum_value(k, v)
        elif k in FLAGS:
            flag_value(k, v)
