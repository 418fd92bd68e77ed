# -*- coding: utf-8 -*-
# Ramforge/ramforge/build/config.py

"""
Project: Ramforge
Date: 10/3/2026 (Updated: 10/12/2026)

Purpose
-------
Typed, immutable record of the compile-time options of one RAMSES build: grid and
vector sizes, precision, hydro variable counts, solver, patch directory, Grackle
cooling, executable name and the radiative-transfer parameters.

Main Tasks
----------
    1. Hold every option with its default (`SimulationConfig`).
    2. Coerce solver / simulation type strings to `SolverKind` / `SimulationType`.
    3. Build a record from a loose params mapping (`from_params`) through the schema layer.
    4. Summarize the record (`describe`, `to_dict`).

Notes
-----
- The only invariant enforced here is that radiative-transfer runs carry a photon group
  count. Numeric values are not range-checked.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import SchemaError
from .schema import enum_value, flag_value, normalize_keys, validate

__all__ = ["SimulationConfig", "SolverKind", "SimulationType"]


class SolverKind(str, Enum):
    HYDRO = "hydro"
    MHD = "mhd"
    RHD = "rhd"

    def __str__(self) -> str:
        return self.value


class SimulationType(str, Enum):
    RT = "rt"          # radiative transfer
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


# field -> label used by `describe` (the RAMSES macro / variable it feeds)
_LABELS = (
    ("vector_length", "NVECTOR"),
    ("dimensionality", "NDIM"),
    ("precision", "NPRE"),
    ("variable_count", "NVAR"),
    ("energy_variable_count", "NENER"),
    ("solver", "SOLVER"),
    ("patch", "PATCH"),
    ("cooling", "GRACKLE"),
    ("executable", "EXEC"),
    ("ion_count", "NIONS"),
    ("photon_groups", "NGROUPS"),
    ("simulation_type", "TYPE"),
)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Compile-time options for one RAMSES executable.

    Attributes
    ----------
    vector_length : int
        NVECTOR, cells processed per vector sweep.
    dimensionality : int
        NDIM (1, 2 or 3).
    precision : int
        NPRE, floating-point word width in bytes.
    variable_count : int
        NVAR, number of hydro variables.
    energy_variable_count : int
        NENER, extra energy variables for the hydro/MHD solver.
    solver : SolverKind
        hydro, mhd or rhd.
    patch : str
        Patch directory overriding the base source tree ('' for none).
    cooling : bool
        Link against the Grackle cooling library.
    executable : str
        Executable prefix; the build appends `<NDIM>d`.
    ion_count : int
        NIONS, ionisation species (RT only).
    photon_groups : int or None
        NGROUPS, number of photon groups; required for RT.
    simulation_type : SimulationType
        rt or other.
    """
    vector_length: Any = 64
    dimensionality: Any = 3
    precision: Any = 8
    variable_count: Any = 8
    energy_variable_count: Any = 0
    solver: Union[SolverKind, str] = SolverKind.RHD
    patch: str = ""
    cooling: bool = False
    executable: str = "ramses"
    ion_count: Any = 3
    photon_groups: Optional[Any] = None
    simulation_type: Union[SimulationType, str] = SimulationType.RT

    def __post_init__(self):
        object.__setattr__(self, "solver", SolverKind(enum_value("solver", self.solver)))
        object.__setattr__(
            self, "simulation_type", SimulationType(enum_value("simulation_type", self.simulation_type))
        )
        object.__setattr__(self, "cooling", flag_value("cooling", self.cooling))
        if self.patch is None:
            object.__setattr__(self, "patch", "")
        if self.is_rt and self.photon_groups is None:
            raise SchemaError(
                "Radiative-transfer runs require a photon group count (photon_groups / ngroups).",
                {"simulation_type": self.simulation_type.value},
            )

    @property
    def is_rt(self) -> bool:
        return self.simulation_type is SimulationType.RT

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]] = None) -> "SimulationConfig":
        """
        Build a record from a params mapping with alias keys (`nd`, `NDIM`, `ngroups`, ...).

        Missing keys and `None` values fall back to the defaults.

        Raises
        ------
        SchemaError
            Unknown keys, bad enum values, or RT without photon groups.
        """
        canon = normalize_keys(params or {})
        validate(canon)
        return cls(**canon)

    def to_dict(self) -> Dict[str, Any]:
        out = {}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = v.value if isinstance(v, Enum) else v
        return out

    def describe(self) -> List[str]:
        """
        Return 'LABEL: value' summary lines, one per option.
        """
        d = self.to_dict()
        return ["{}: {}".format(label, d[name]) for name, label in _LABELS]
