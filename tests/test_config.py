"""
Tests for SimulationConfig and the schema layer (aliases, enums, RT invariant).
"""

import dataclasses

import pytest

from ramforge.build.config import SimulationConfig, SimulationType, SolverKind
from ramforge.build.errors import ConfigError, SchemaError
from ramforge.build.schema import ALIASES, FIELDS, normalize_keys, validate


def test_defaults():
    cfg = SimulationConfig(photon_groups=2)

    assert cfg.vector_length == 64
    assert cfg.dimensionality == 3
    assert cfg.precision == 8
    assert cfg.variable_count == 8
    assert cfg.energy_variable_count == 0
    assert cfg.solver is SolverKind.RHD
    assert cfg.patch == ""
    assert cfg.cooling is False
    assert cfg.executable == "ramses"
    assert cfg.ion_count == 3
    assert cfg.simulation_type is SimulationType.RT
    assert cfg.is_rt


def test_rt_requires_photon_groups():
    with pytest.raises(SchemaError) as exc:
        SimulationConfig()
    assert "photon" in str(exc.value)
    assert isinstance(exc.value, ConfigError)


def test_non_rt_does_not_need_photon_groups():
    cfg = SimulationConfig(simulation_type="other")
    assert not cfg.is_rt
    assert cfg.photon_groups is None


def test_enum_strings_are_coerced_case_insensitively():
    cfg = SimulationConfig(solver="MHD", simulation_type="Radiative-Transfer", photon_groups=1)
    assert cfg.solver is SolverKind.MHD
    assert cfg.simulation_type is SimulationType.RT
    assert str(cfg.solver) == "mhd"


def test_unknown_solver_is_rejected():
    with pytest.raises(SchemaError) as exc:
        SimulationConfig(solver="sph", simulation_type="other")
    assert "solver" in str(exc.value)


def test_nonsensical_numbers_pass_through():
    cfg = SimulationConfig(dimensionality=-1, precision=3, simulation_type="other")
    assert cfg.dimensionality == -1
    assert cfg.precision == 3


def test_record_is_frozen():
    cfg = SimulationConfig(simulation_type="other")
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.dimensionality = 2


def test_from_params_accepts_short_and_macro_aliases():
    cfg = SimulationConfig.from_params({
        "nvec": 32, "nd": 2, "NPRE": 4, "nvar": 11, "ne": 2, "s": "mhd",
        "p": "../patch/x", "g": True, "e": "clump", "ni": 1, "ng": 3, "t": "rt",
    })

    assert cfg == SimulationConfig(
        vector_length=32, dimensionality=2, precision=4, variable_count=11,
        energy_variable_count=2, solver=SolverKind.MHD, patch="../patch/x", cooling=True,
        executable="clump", ion_count=1, photon_groups=3, simulation_type=SimulationType.RT,
    )


def test_from_params_none_values_fall_back_to_defaults():
    cfg = SimulationConfig.from_params({"ndim": None, "type": "other", "patch": None})
    assert cfg.dimensionality == 3
    assert cfg.patch == ""


def test_from_params_rejects_unknown_keys():
    with pytest.raises(SchemaError) as exc:
        SimulationConfig.from_params({"nx": 128, "type": "other"})
    assert "nx" in str(exc.value)


def test_normalize_keys_rejects_duplicates():
    with pytest.raises(SchemaError):
        normalize_keys({"nd": 2, "NDIM": 3})


def test_validate_checks_enums_and_switches_only():
    validate({"dimensionality": -5, "solver": "hydro", "cooling": "yes"})
    with pytest.raises(SchemaError):
        validate({"simulation_type": "sph"})
    with pytest.raises(SchemaError):
        validate({"cooling": "maybe"})


@pytest.mark.parametrize("raw, expected", [
    ("false", False), ("False", False), ("off", False), ("0", False), (0, False),
    ("true", True), (" YES ", True), ("1", True), (1, True), (True, True),
])
def test_cooling_switch_spellings(raw, expected):
    cfg = SimulationConfig.from_params({"grackle": raw, "type": "other"})
    assert cfg.cooling is expected


@pytest.mark.parametrize("raw", ["maybe", "", 2, 0.5, [1]])
def test_cooling_rejects_non_boolean_values(raw):
    with pytest.raises(SchemaError):
        SimulationConfig.from_params({"grackle": raw, "type": "other"})
    with pytest.raises(SchemaError):
        SimulationConfig(simulation_type="other", cooling=raw)


def test_every_alias_targets_a_field():
    assert set(ALIASES.values()) <= set(FIELDS)


def test_describe_lines():
    cfg = SimulationConfig(solver="hydro", simulation_type="rt", photon_groups=3)
    assert cfg.describe() == [
        "NVECTOR: 64",
        "NDIM: 3",
        "NPRE: 8",
        "NVAR: 8",
        "NENER: 0",
        "SOLVER: hydro",
        "PATCH: ",
        "GRACKLE: False",
        "EXEC: ramses",
        "NIONS: 3",
        "NGROUPS: 3",
        "TYPE: rt",
    ]


def test_to_dict_uses_plain_values():
    d = SimulationConfig(simulation_type="other").to_dict()
    assert d["solver"] == "rhd"
    assert d["simulation_type"] == "other"
    assert type(d["solver"]) is str
    assert list(d) == list(FIELDS)
