# -*- coding: utf-8 -*-
# Ramforge/ramforge/build/generator.py

"""
Project: Ramforge
Date: 10/7/2026 (Updated: 10/15/2026)

Purpose
-------
Translate a `SimulationConfig` into a populated `Makefile` for the RAMSES Fortran code:
toolchain, preprocessor macros, build provenance, libraries, per-module object lists,
optional radiative transfer, Grackle cooling and ATON (GPU) targets, and the fixed
rule set.

Main Tasks
----------
    1. Keep the fixed Makefile fragments in sectioned tables (toolchain, objects, rules).
    2. Apply an ordered pipeline of steps (`STEPS`), each one a small function that
       appends its fragments to the model, guarded by at most one feature check.
    3. Query the object-listing collaborator once per module directory.
    4. Expose `populate`, `build_makefile` and `write_makefile`.

Notes
-----
- Step order is the order of the output: definitions, variables and rules are all
  emitted in insertion order.
- Shell expressions ($(shell git ...), date) are written as text for make to expand.
- No validation happens here; whatever the record holds ends up in the Makefile.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from .config import SimulationConfig
from .makefile import Makefile

__all__ = ["StepSpec", "STEPS", "populate", "build_makefile", "write_makefile", "step_ids"]

Lister = Callable[[str], str]


# -----------------------------
# Toolchain
# -----------------------------
F90 = "mpif90 -frecord-marker=4 -O3 -ffree-line-length-none -g -fbacktrace"
FFLAGS = "-x f95-cpp-input $(DEFINES)"

# -----------------------------
# Provenance (expanded by make at build time)
# -----------------------------
_PROVENANCE = [
    ("GITBRANCH", "$(shell git rev-parse --abbrev-ref HEAD)"),
    ("GITHASH", "$(shell git log --pretty=format:'%H' -n 1)"),
    ("GITREPO", "$(shell git config --get remote.origin.url)"),
    ("BUILDDATE", '$(shell date +"%D-%T")'),
]

# -----------------------------
# Libraries
# -----------------------------
_INFRA = [
    ("MOD", "mod"),
    ("LIBMPI", "-L/usr/lib -lmpi"),
]

_GRACKLE_LIBS = [
    ("LIBS_GRACKLE", "-L$(HOME)/.local/lib -lgrackle -lhdf5 -lz -lgfortran -ldl"),
    ("LIBS_OBJ", "-I$(HOME)/.local/include -DCONFIG_BFLOAT_8 -DH5_USE_16_API -fPIC"),
]

VPATH = (
    "$(shell [ -z $(PATCH) ] || find $(PATCH) -type d):"
    "../$(SOLVER):../aton:../hydro:../pm:../poisson:../amr:../io:../rt"
)

# -----------------------------
# Objects
# -----------------------------
# (variable, module directory) in listing order; RT is handled separately.
_MODULE_OBJECTS = [
    ("AMROBJ", "amr"),
    ("EXTRAOBJ", None),
    ("PMOBJ", "pm"),
    ("POISSONOBJ", "poisson"),
    ("HYDROOBJ", "hydro"),
]

EXTRAOBJ = "dump_utils.o write_makefile.o write_patch.o"

# Modules that must be compiled before the rest of the sources.
MODOBJ = (
    "amr_parameters.o amr_commons.o random.o "
    "pm_parameters.o pm_commons.o poisson_parameters.o dump_utils.o "
    "poisson_commons.o hydro_parameters.o hydro_commons.o cooling_module.o "
    "bisection.o sparse_mat.o clfind_commons.o gadgetreadfile.o "
    "write_makefile.o write_patch.o write_gitinfo.o"
)
MODOBJ_RT = (
    "rt_parameters.o rt_hydro_commons.o coolrates_module.o "
    "rt_spectra.o rt_cooling_module.o rt_flux_module.o"
)
MODOBJ_GRACKLE = "grackle_parameters.o"

AMRLIB = "$(AMROBJ) $(HYDROOBJ) $(PMOBJ) $(POISSONOBJ) $(EXTRAOBJ)"

ATON_MODOBJ = "timing.o radiation_commons.o rad_step.o"
ATON_LIB = "../aton/atonlib/libaton.a"

# -----------------------------
# Rules: (target, deps, commands)
# -----------------------------
_CLEANUP = "rm write_makefile.f90 write_patch.f90"
_COMPILE = "$(F90) $(FFLAGS) -c $^ -o $@ $(LIBS_OBJ)"

_RULES = [
    ("ramses", "$(MODOBJ) $(AMRLIB) ramses.o", (
        "$(F90) $(AMRLIB) -o $(EXEC)$(NDIM)d $(LIBS)",
        _CLEANUP,
    )),
    ("ramses_aton", "$(MODOBJ) $(ATON_MODOBJ) $(AMRLIB) $(ATON_OBJ) ramses.o", (
        "$(F90) $(ATON_MODOBJ) $(AMRLIB) $(ATON_OBJ) -o $(EXEC)$(NDIM)d $(LIBS) $(LIBCUDA)",
        _CLEANUP,
    )),
    ("write_gitinfo.o", "FORCE", (
        "$(F90) $(FFLAGS) -DPATCH='\"$(PATCH)\"' "
        "-DGITBRANCH='\"$(GITBRANCH)\"' -DGITHASH='\"$(GITHASH)\"' "
        "-DGITREPO='\"$(GITREPO)\"' -DBUILDDATE='\"$(BUILDDATE)\"' "
        "-c ../amr/write_gitinfo.f90 -o $@",
    )),
    ("write_makefile.o", "FORCE", (
        "../utils/scripts/cr_write_makefile.sh $(MAKEFILE_LIST)",
        "$(F90) $(FFLAGS) -c write_makefile.f90 -o $@",
    )),
    ("write_patch.o", "FORCE", (
        "../utils/scripts/cr_write_patch.sh $(PATCH)",
        "$(F90) $(FFLAGS) -c write_patch.f90 -o $@",
    )),
    ("%.o", "%.F", (_COMPILE,)),
    ("%.o", "%.f90", (_COMPILE,)),
    ("FORCE", "", ("",)),
    ("clean", "", ("rm -f *.o *.$(MOD)",)),
]


# ---------- Steps ----------
def _toolchain(m: Makefile, cfg: SimulationConfig, lister: Lister) -> None:
    m.set("F90", F90)
    m.set("FFLAGS", FFLAGS)


def _core_macros(m, cfg, lister):
    m.define("NVECTOR", cfg.vector_length)
    m.define("NDIM", cfg.dimensionality)
    m.define("NPRE", cfg.precision)
    m.define("NENER", cfg.energy_variable_count)
    m.define("SOLVER", cfg.solver.value)


def _cooling_macro(m, cfg, lister):
    if cfg.cooling:
        m.define("grackle", 1)


def _rt_macros(m, cfg, lister):
    if cfg.is_rt:
        m.define("RT", 1)
        m.define("NIONS", cfg.ion_count)
        m.define("NGROUPS", cfg.photon_groups)


def _hydro_macro(m, cfg, lister):
    # NVAR goes after the RT block
    m.define("NVAR", cfg.variable_count)


def _runtime_vars(m, cfg, lister):
    if cfg.cooling:
        m.set("GRACKLE", 1)
    m.set("PATCH", cfg.patch)
    m.set("EXEC", cfg.executable)
    for name, value in _PROVENANCE:
        m.set(name, value)


def _infrastructure(m, cfg, lister):
    for name, value in _INFRA:
        m.set(name, value)


def _cooling_libs(m, cfg, lister):
    if cfg.cooling:
        for name, value in _GRACKLE_LIBS:
            m.set(name, value)


def _libs_and_paths(m, cfg, lister):
    m.set("LIBS", "$(LIBMPI)")
    if cfg.cooling:
        m.extend("LIBS", " ".join("$({})".format(name) for name, _ in _GRACKLE_LIBS))
    m.set("VPATH", VPATH)


def _module_objects(m, cfg, lister):
    for var, module in _MODULE_OBJECTS:
        m.set(var, lister(module) if module else EXTRAOBJ)
    if cfg.is_rt:
        m.set("RTOBJ", lister("rt"))


def _mod_objects(m, cfg, lister):
    m.set("MODOBJ", MODOBJ)
    if cfg.is_rt:
        m.extend("MODOBJ", MODOBJ_RT)
    if cfg.cooling:
        m.extend("MODOBJ", MODOBJ_GRACKLE)


def _amr_lib(m, cfg, lister):
    m.set("AMRLIB", AMRLIB)
    if cfg.is_rt:
        m.extend("AMRLIB", "$(RTOBJ)")


def _aton(m, cfg, lister):
    m.set("ATON_MODOBJ", ATON_MODOBJ)
    m.set("ATON_OBJ", lister("aton"))
    m.extend("ATON_OBJ", ATON_LIB)


def _patch_include(m, cfg, lister):
    m.plain("sinclude $(PATCH)/Makefile")


def _rules(m, cfg, lister):
    for target, deps, commands in _RULES:
        m.rule(target, deps, *commands)


@dataclass(frozen=True)
class StepSpec:
    """
    One generation step: id and function handle.
    """
    id: str
    fn: Callable  # signature: fn(makefile, config, lister) -> None


STEPS: Tuple[StepSpec, ...] = (
    StepSpec("toolchain", _toolchain),
    StepSpec("core_macros", _core_macros),
    StepSpec("cooling_macro", _cooling_macro),
    StepSpec("rt_macros", _rt_macros),
    StepSpec("hydro_macro", _hydro_macro),
    StepSpec("runtime_vars", _runtime_vars),
    StepSpec("infrastructure", _infrastructure),
    StepSpec("cooling_libs", _cooling_libs),
    StepSpec("libs_and_paths", _libs_and_paths),
    StepSpec("module_objects", _module_objects),
    StepSpec("mod_objects", _mod_objects),
    StepSpec("amr_lib", _amr_lib),
    StepSpec("aton", _aton),
    StepSpec("patch_include", _patch_include),
    StepSpec("rules", _rules),
)


# ---------- Public API ----------
def populate(m: Makefile, cfg: SimulationConfig, lister: Lister) -> Makefile:
    """
    Apply every step of `STEPS` to `m`, in order.

    Args
    ----
    m : Makefile
        Model to fill (normally fresh).
    cfg : SimulationConfig
        Compile-time options.
    lister : Callable[[str], str]
        Object-listing collaborator; called for amr, pm, poisson, hydro, rt (RT runs
        only) and aton, in that order.

    Returns
    -------
    Makefile
        The same model, for chaining.
    """
    for step in STEPS:
        step.fn(m, cfg, lister)
    return m


def build_makefile(cfg: SimulationConfig, lister: Lister) -> Makefile:
    """
    Return a fresh `Makefile` populated from `cfg`.
    """
    return populate(Makefile(), cfg, lister)


def write_makefile(cfg: SimulationConfig, path, lister: Lister) -> str:
    """
    Generate the Makefile for `cfg` and write it to `path`.

    Raises
    ------
    OSError
        If `path` cannot be written, or if the lister fails on a module directory.

    Returns
    -------
    str
        The path written.
    """
    return build_makefile(cfg, lister).write(path)


def step_ids() -> List[str]:
    return [s.id for s in STEPS]
