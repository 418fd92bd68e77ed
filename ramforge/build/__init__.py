# -*- coding: utf-8 -*-
# Ramforge/ramforge/build/__init__.py

"""
Project: Ramforge
Date: 10/3/2026

Modules:
--------
- makefile:  Ordered Makefile model (definitions, variables, plain lines, rules) and its
             fixed text layout. define = macro + variable; set upserts; extend appends.

- config:    SimulationConfig record (grid, precision, solver, patch, Grackle, RT) with
             defaults, enum coercion and a `describe` summary.

- schema:    Alias keys (nd, NDIM, ngroups, ...) → config field names; enum checks.
             Raises SchemaError with clear, actionable messages.

- generator: Ordered step pipeline that fills a Makefile from a SimulationConfig and an
             object-listing collaborator; RT / Grackle / ATON fragments are feature-gated.

- errors:    Unified exceptions for the build layer.
             BuildError base plus ConfigError, SchemaError, UndefinedVariableError.
"""

from .makefile import Makefile, Rule
from .config import SimulationConfig, SolverKind, SimulationType
from .schema import normalize_keys, validate as validate_schema
from .generator import STEPS, StepSpec, populate, build_makefile, write_makefile
from .errors import BuildError, ConfigError, SchemaError, UndefinedVariableError

__all__ = [
    # Model
    "Makefile", "Rule",
    # Configuration
    "SimulationConfig", "SolverKind", "SimulationType",
    "normalize_keys", "validate_schema",
    # Generation
    "STEPS", "StepSpec", "populate", "build_makefile", "write_makefile",
    # Error types
    "BuildError", "ConfigError", "SchemaError", "UndefinedVariableError",
]
