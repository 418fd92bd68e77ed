"""
Tests for the high-level build preparation API.
"""

import json
import logging
import os

import pytest

from ramforge.api import describe, prepare_build, prepare_sweep
from ramforge.build.config import SimulationConfig
from ramforge.build.errors import SchemaError


def test_prepare_build_writes_makefile_and_manifest(tmp_path, rt_config, static_lister):
    info = prepare_build(rt_config, str(tmp_path / "run"), lister=static_lister)

    assert info["workdir"] == str(tmp_path / "run")
    assert info["config"] is rt_config
    with open(info["makefile"], encoding="utf-8") as f:
        assert f.readline().startswith("DEFINES = -DNVECTOR=64")

    with open(info["manifest"], encoding="utf-8") as f:
        manifest = json.load(f)
    assert manifest["config"]["photon_groups"] == 4
    assert manifest["config"]["simulation_type"] == "rt"
    assert "-DNGROUPS=4" in manifest["defines"]
    assert manifest["steps"][0] == "toolchain"
    assert manifest["makefile"] == os.path.abspath(info["makefile"])


def test_prepare_build_accepts_params_and_scans_source_root(tmp_path, ramses_tree):
    info = prepare_build(
        {"nd": 2, "s": "hydro", "t": "other"},
        str(tmp_path / "out"),
        source_root=str(ramses_tree),
        makefile_name="Makefile.hydro",
        manifest=False,
    )

    assert info["manifest"] is None
    assert info["makefile"].endswith("Makefile.hydro")
    text = (tmp_path / "out" / "Makefile.hydro").read_text()
    assert "HYDROOBJ = godunov_fine.o umuscl.o \n" in text
    assert "-DNDIM=2" in text.splitlines()[0]
    assert not (tmp_path / "out" / "manifest.json").exists()


def test_prepare_build_rejects_bad_params(tmp_path, static_lister):
    with pytest.raises(SchemaError):
        prepare_build({"solver": "sph", "type": "other"}, str(tmp_path), lister=static_lister)
    assert not (tmp_path / "Makefile").exists()


def test_prepare_build_missing_source_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        prepare_build({"type": "other"}, str(tmp_path / "run"), source_root=str(tmp_path / "nowhere"))


def test_prepare_build_timestamped_workdir(tmp_path, monkeypatch, static_lister):
    monkeypatch.chdir(tmp_path)
    info = prepare_build({"type": "other"}, lister=static_lister)

    assert info["workdir"].startswith(os.path.join("build_ramses", "run_"))
    assert os.path.isfile(info["makefile"])


def test_prepare_build_logs(tmp_path, static_lister, caplog):
    with caplog.at_level(logging.INFO, logger="ramforge.api"):
        prepare_build({"type": "other"}, str(tmp_path), lister=static_lister)
    assert "[prepare_build] Makefile written to" in caplog.text


def test_prepare_sweep(tmp_path, static_lister):
    cases = [{"ndim": nd, "solver": "hydro", "type": "other"} for nd in (1, 2, 3)]
    base = str(tmp_path / "sweep")
    results = prepare_sweep(cases, base_workdir=base, lister=static_lister)

    assert [r["executable"] for r in results] == ["ramses1d", "ramses2d", "ramses3d"]
    assert results[1]["workdir"] == os.path.join(base, "case_002")
    for r in results:
        assert os.path.isfile(r["makefile"])

    with open(os.path.join(base, "index.json"), encoding="utf-8") as f:
        index = json.load(f)
    assert index == results


def test_prepare_sweep_accepts_records_and_indexes_resolved_config(tmp_path, static_lister):
    cases = [
        SimulationConfig(dimensionality=2, solver="mhd", simulation_type="other"),
        {"nd": 1, "g": "yes", "t": "other"},
    ]
    base = str(tmp_path / "sweep")
    results = prepare_sweep(cases, base_workdir=base, lister=static_lister)

    assert results[0]["params"] == cases[0].to_dict()
    assert results[0]["params"]["solver"] == "mhd"
    assert results[1]["params"]["dimensionality"] == 1
    assert results[1]["params"]["cooling"] is True
    with open(os.path.join(base, "index.json"), encoding="utf-8") as f:
        assert json.load(f) == results


def test_describe_accepts_config_or_params():
    cfg = SimulationConfig(simulation_type="other")
    assert describe(cfg) == cfg.describe()
    assert describe({"type": "other"})[-1] == "TYPE: other"
