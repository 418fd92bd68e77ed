# -*- coding: utf-8 -*-
# Ramforge/ramforge/__init__.py

"""
Project: Ramforge
Date: 10/3/2026 (Updated: 10/16/2026)

Modules:
--------
- build:    Makefile model, simulation configuration record and the generator.
- sources:  Object-listing collaborators (module directory → object names).
- api:      High-level pipeline: prepare a build directory (Makefile + manifest), sweeps.
- cli:      `ramforge generate` / `ramforge describe` command line.
"""

__version__ = "0.3.0"

__all__ = ["build", "sources", "api", "cli", "__version__"]
