# -*- coding: utf-8 -*-
# Ramforge/ramforge/api.py

"""
Project: Ramforge
Date: 10/9/2026 (Updated: 10/16/2026)

Purpose
-------
High-level build preparation API. Given compile-time options (a `SimulationConfig` or a
params dict), this module prepares a RAMSES build directory: it generates the Makefile,
writes it next to a small provenance manifest, and can repeat that for a list of
parameter sets.

Main Tasks
----------
    1. Prepare: resolve the config, pick an object lister, write `Makefile` + `manifest.json`.
    2. Sweep: prepare one build directory per params dict and index them in `index.json`.
    3. Describe: one-line-per-option summary of a configuration.

Notes
-----
- `build.generator` is the single source of truth for the Makefile content.
- Without an explicit lister, objects are listed from `<source_root>/<module>/*.f90`.
- Nothing is compiled here; running `make` is left to the caller.
"""

import json
import logging
import os
import time

from .build.config import SimulationConfig
from .build.generator import build_makefile, step_ids
from .sources.listing import DirectoryObjectLister

logger = logging.getLogger(__name__)


def _resolve_config(config):
    """
    Accept a SimulationConfig, a params mapping, or None (all defaults).
    """
    if isinstance(config, SimulationConfig):
        return config
    return SimulationConfig.from_params(config or {})


def _timestamped_dir(base="build_ramses"):
    """
    Create a timestamped working directory under `base`, e.g. `base/run_YYYYMMDD_HHMMSS`.
    """
    ts = time.strftime("%Y%m%d_%H%M%S")
    path = os.path.join(base, "run_" + ts)
    os.makedirs(path, exist_ok=True)
    return path


def describe(config=None):
    """
    Return the 'LABEL: value' summary lines of a configuration.
    """
    return _resolve_config(config).describe()


def prepare_build(config=None,
                  workdir=None,
                  *,
                  source_root="ramses",
                  lister=None,
                  makefile_name="Makefile",
                  manifest=True):
    """
    Prepare a build directory with a generated Makefile.

    Steps
    -----
    1) Resolve `config` into a SimulationConfig (params dicts go through the schema).
    2) Generate the Makefile, listing module objects with `lister`.
    3) Write `<workdir>/<makefile_name>`.
    4) Optionally emit a `manifest.json` for provenance.

    Args
    ----
    config : SimulationConfig | dict | None
        Compile-time options; None means all defaults (which require photon groups
        for the default RT run, so pass at least `ngroups`).
    workdir : Optional[str]
        Directory to create/use. If None, a timestamped folder is created.
    source_root : str, keyword-only
        RAMSES source root scanned by the default lister.
    lister : Callable[[str], str] | None, keyword-only
        Object-listing collaborator; defaults to DirectoryObjectLister(source_root).
    makefile_name : str, keyword-only
        File name of the generated Makefile.
    manifest : bool, keyword-only
        Write `manifest.json` next to the Makefile.

    Returns
    -------
    dict
        {
          "workdir": str,
          "makefile": str,
          "manifest": Optional[str],
          "config": SimulationConfig
        }

    Raises
    ------
    ConfigError
        If `config` is a params mapping with bad keys or values.
    OSError
        Propagated from the object lister or from file I/O.
    """
    cfg = _resolve_config(config)
    lister = lister or DirectoryObjectLister(source_root)

    if workdir is None:
        workdir = _timestamped_dir("build_ramses")
    else:
        os.makedirs(workdir, exist_ok=True)

    makefile = build_makefile(cfg, lister)
    mk_path = makefile.write(os.path.join(workdir, makefile_name))
    logger.info("[prepare_build] Makefile written to %s", mk_path)

    manifest_path = None
    if manifest:
        manifest_path = os.path.join(workdir, "manifest.json")
        payload = {
            "makefile": os.path.abspath(mk_path),
            "config": cfg.to_dict(),
            "steps": step_ids(),
            "defines": ["-D{}={}".format(k, v) for k, v in makefile.defines],
            "time": time.strftime("%Y-%m-%d %H:%M:%S"),
        }
        with open(manifest_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        logger.debug("[prepare_build] manifest written to %s", manifest_path)

    return {"workdir": workdir, "makefile": mk_path, "manifest": manifest_path, "config": cfg}


def prepare_sweep(cases, base_workdir="build_ramses_sweep", **kwargs):
    """
    Prepare one build directory per params dict and index the results.

    Args
    ----
    cases : Iterable[dict | SimulationConfig]
        Params (or a ready record) for each build, e.g. NDIM=1, 2, 3 variants.
    base_workdir : str, optional
        Parent directory for all case folders (default: "build_ramses_sweep").
    **kwargs
        Forwarded to `prepare_build` (source_root, lister, makefile_name, manifest).

    Returns
    -------
    List[dict]
        One entry per case: workdir, makefile, executable name and the resolved
        config as plain values.
    """
    results = []
    for i, params in enumerate(cases):
        workdir = os.path.join(base_workdir, "case_{:03d}".format(i + 1))
        info = prepare_build(params, workdir, **kwargs)
        cfg = info["config"]
        results.append({
            "workdir": info["workdir"],
            "makefile": info["makefile"],
            "executable": "{}{}d".format(cfg.executable, cfg.dimensionality),
            "params": cfg.to_dict(),
        })
    os.makedirs(base_workdir, exist_ok=True)
    with open(os.path.join(base_workdir, "index.json"), "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2)
    logger.info("[prepare_sweep] %d build(s) prepared under %s", len(results), base_workdir)
    return results
