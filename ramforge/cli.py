# -*- coding: utf-8 -*-
# Ramforge/ramforge/cli.py

"""
Project: Ramforge
Date: 10/10/2026 (Updated: 10/16/2026)

Purpose
-------
Command line front-end. Parses compile-time options into a params dict, turns it into a
SimulationConfig, and either writes the Makefile (`generate`) or prints the option
summary (`describe`).

Main Tasks
----------
    1. Build the argparse parser (one flag per option, plus a JSON params file).
    2. Merge the JSON file (if any) with the flags; flags win.
    3. Map failures to exit codes: 2 for configuration errors, 1 for I/O errors.

Notes
-----
- Flags left unset are omitted, so the record's defaults apply.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .build.config import SimulationConfig
from .build.errors import ConfigError
from .build.schema import normalize_keys
from .build.generator import write_makefile
from .sources.listing import DirectoryObjectLister

logger = logging.getLogger(__name__)

# flag -> params key (aliases understood by the schema layer)
_OPTION_FLAGS = [
    ("--nvector", "nvector", int, "vector length (NVECTOR, default 64)"),
    ("--ndim", "ndim", int, "number of dimensions (NDIM, default 3)"),
    ("--npre", "npre", int, "floating-point precision in bytes (NPRE, default 8)"),
    ("--nvar", "nvar", int, "number of hydro variables (NVAR, default 8)"),
    ("--nener", "nener", int, "extra energy variables (NENER, default 0)"),
    ("--solver", "solver", str, "hydro, mhd or rhd (default rhd)"),
    ("--patch", "patch", str, "patch directory overriding the base sources"),
    ("--exec", "exec", str, "executable prefix (default ramses)"),
    ("--nions", "nions", int, "ionisation species for RT (NIONS, default 3)"),
    ("--ngroups", "ngroups", int, "photon groups for RT (NGROUPS, required for RT)"),
    ("--type", "type", str, "simulation type: rt or other (default rt)"),
]


def _add_options(p: argparse.ArgumentParser) -> None:
    for flag, dest, typ, help_text in _OPTION_FLAGS:
        p.add_argument(flag, dest=dest, type=typ, default=None, help=help_text)
    p.add_argument("--grackle", dest="grackle", action="store_true", default=None,
                   help="link against the Grackle cooling library")
    p.add_argument("--params", default=None, help="JSON file with options (flags take precedence)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ramforge", description="Generate RAMSES Makefiles")
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")
    sub.required = True

    gen = sub.add_parser("generate", help="write a Makefile")
    _add_options(gen)
    gen.add_argument("-o", "--output", default="Makefile", help="output path (default ./Makefile)")
    gen.add_argument("--source-root", default="ramses",
                     help="RAMSES source root scanned for *.f90 files (default ./ramses)")

    desc = sub.add_parser("describe", help="print the resolved options")
    _add_options(desc)
    return parser


def params_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Collect a params dict from a JSON file (optional) and the option flags.
    """
    params = {}  # type: Dict[str, Any]
    if args.params:
        with open(args.params, "r", encoding="utf-8") as f:
            params.update(normalize_keys(json.load(f)))
    flags = {}  # type: Dict[str, Any]
    for _flag, dest, _typ, _help in _OPTION_FLAGS + [("--grackle", "grackle", bool, "")]:
        value = getattr(args, dest, None)
        if value is not None:
            flags[dest] = value
    params.update(normalize_keys(flags))
    return params


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        cfg = SimulationConfig.from_params(params_from_args(args))
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    except (OSError, ValueError) as e:
        logger.error("Cannot read params file: %s", e)
        return 1

    if args.command == "describe":
        print("\n".join(cfg.describe()))
        return 0

    try:
        path = write_makefile(cfg, args.output, DirectoryObjectLister(args.source_root))
    except OSError as e:
        logger.error("Makefile generation failed: %s", e)
        return 1
    logger.info("Makefile written to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
