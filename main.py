# -*- coding: utf-8 -*-
# Ramforge/main.py

"""
End-to-end driver:
  1) Describe the compile-time options of a radiative-transfer run
  2) Prepare its build directory (Makefile + manifest)
  3) Prepare a 1D/2D/3D hydro sweep (one build directory per case)
"""

import logging
import sys

from ramforge.api import describe, prepare_build, prepare_sweep
from ramforge.build.errors import ConfigError


if __name__ == "__main__":
    # ------------------------------------------------------------------
    # 0) Logging
    # ------------------------------------------------------------------
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    log = logging.getLogger("Ramforge")

    source_root = sys.argv[1] if len(sys.argv) > 1 else "ramses"

    # ------------------------------------------------------------------
    # 1) Options for a cold clump lit by a QSO: RT with three photon groups
    #    (HI, HeI, HeII ionising bands) and three ion species.
    # ------------------------------------------------------------------
    rt_params = {
        "NDIM": 3,
        "NPRE": 8,
        "solver": "rhd",
        "ngroups": 3,
        "nions": 3,
        "type": "rt",
        "patch": "../patch/rt/cold_clump",
    }

    try:
        for line in describe(rt_params):
            log.info(line)
    except ConfigError as e:
        log.error("Invalid options: %s", e)
        sys.exit(2)

    # ------------------------------------------------------------------
    # 2) Build directory for the RT run
    # ------------------------------------------------------------------
    info = prepare_build(rt_params, workdir="build_ramses/cold_clump", source_root=source_root)
    log.info("Makefile: %s (manifest: %s)", info["makefile"], info["manifest"])

    # ------------------------------------------------------------------
    # 3) Plain hydro sweep over dimensionality
    # ------------------------------------------------------------------
    cases = [{"ndim": nd, "solver": "hydro", "type": "other"} for nd in (1, 2, 3)]
    results = prepare_sweep(cases, base_workdir="build_ramses/hydro_sweep", source_root=source_root)
    for r in results:
        log.info("%s -> %s", r["executable"], r["makefile"])
