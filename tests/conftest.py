"""
Shared fixtures for the Ramforge test suite.

The generator never touches the filesystem through its object lister in these tests:
listings come from in-memory listers, and on-disk trees are built under `tmp_path`.
"""

import pytest

from ramforge.build.config import SimulationConfig
from ramforge.sources.listing import ObjectLister, StaticObjectLister


class RecordingLister(ObjectLister):
    """Return a fixed listing and remember which modules were asked for."""

    def __init__(self, listing="a.o b.o "):
        self.listing = listing
        self.calls = []

    def list_objects(self, module):
        self.calls.append(module)
        return self.listing


@pytest.fixture
def lister():
    return RecordingLister()


@pytest.fixture
def static_lister():
    return StaticObjectLister(default="a.o b.o ")


@pytest.fixture
def hydro_config():
    return SimulationConfig(dimensionality=3, precision=8, solver="hydro", simulation_type="other", cooling=False)


@pytest.fixture
def rt_config():
    return SimulationConfig(solver="rhd", simulation_type="rt", ion_count=3, photon_groups=4)


@pytest.fixture
def ramses_tree(tmp_path):
    """A minimal RAMSES source root with one or two .f90 files per module."""
    root = tmp_path / "ramses"
    layout = {
        "amr": ["amr_step.f90", "amr_commons.f90"],
        "pm": ["move_fine.f90"],
        "poisson": ["phi_fine_cg.f90"],
        "hydro": ["godunov_fine.f90", "umuscl.f90", "README"],
        "rt": ["rt_step.f90"],
        "aton": ["aton_fortran.F90", "observe.f90"],
    }
    for module, files in layout.items():
        d = root / module
        d.mkdir(parents=True)
        for name in files:
            (d / name).write_text("! stub\n")
    return root
