# -*- coding: utf-8 -*-
# Ramforge/ramforge/build/errors.py


"""
Project: Ramforge
Date: 10/4/2026

Purpose
-------
Typed exceptions for the build layer with compact, context-aware messages, shared by
the Makefile model, the simulation configuration record and the generator.

Main Tasks
----------
    1. Define BuildError(message, context) with a compact context suffix in __str__.
    2. Provide ConfigError / SchemaError for malformed simulation configurations.
    3. Provide UndefinedVariableError for `extend` calls on unknown variables.

Notes
-----
- Context is optional; long values are truncated for readability.
- I/O problems are not wrapped: OSError reaches the caller untouched.
"""

__all__ = [
    "BuildError",
    "ConfigError",
    "SchemaError",
    "UndefinedVariableError",
]


def _format_context(ctx):
    """Return a compact ' | key1=val1, key2=val2' string or '' if no context."""
    if not ctx:
        return ""
    parts = []
    for k in sorted(ctx.keys()):
        sv = repr(ctx[k])
        if len(sv) > 120:
            sv = sv[:117] + "..."
        parts.append("{}={}".format(k, sv))
    return " | " + ", ".join(parts)


class BuildError(Exception):
    """
    Base class for all errors raised by the build layer.

    Parameters
    ----------
    message : str
        Human-readable error.
    context : dict, optional
        Extra fields appended in the string form (e.g., {"name": "MODOBJ"}).
    """
    def __init__(self, message, context=None):
        self.context = dict(context) if context else None
        super().__init__(message)

    def __str__(self):
        base = super().__str__()
        return base + _format_context(self.context)


class ConfigError(BuildError):
    """
    Problems with a simulation configuration record (bad keys or values).
    """


class SchemaError(ConfigError):
    """
    Per-key issues detected while canonicalizing a params mapping:
      - unknown keys
      - values outside an enumeration (solver, simulation type)
      - a missing photon group count for radiative-transfer runs
    """


class UndefinedVariableError(BuildError, LookupError):
    """
    `extend` was called on a variable that was never `set` or `define`d.
    This is a call-ordering bug in the caller, not an input error.
    """
