"""
Shared fixtures: a BaTiO3 CIF with column-aligned cell parameters.
"""

from pathlib import Path

import numpy as np
import pytest

BATIO3_CIF = """\
#------------------------------------------------------------------------------
# BaTiO3, cubic perovskite
#------------------------------------------------------------------------------
data_BaTiO3

_chemical_name_systematic          'barium titanate'
_chemical_formula_sum              'Ba O3 Ti'
_chemical_formula_weight           233.19
_space_group_crystal_system        cubic
_space_group_IT_number             221
_symmetry_space_group_name_H-M     'P m -3 m'

_cell_length_a                     4.0094(2)
_cell_length_b                     4.0094(2)
_cell_length_c                     4.0094(2)
_cell_angle_alpha                  90.00
_cell_angle_beta                   90.00
_cell_angle_gamma                  90.00
_cell_volume                       64.45(1)
_cell_formula_units_Z              1
_diffrn_ambient_temperature        293

loop_
_atom_site_label
_atom_site_type_symbol
_atom_site_fract_x
_atom_site_fract_y
_atom_site_fract_z
_atom_site_occupancy
Ba1    Ba    0.00000    0.00000    0.00000    1.0
Ti1    Ti    0.50000    0.50000    0.50000    1.0
O1     O     0.50000    0.50000    0.00000    1.0
"""


@pytest.fixture
def batio3_lines():
    return BATIO3_CIF.splitlines()


@pytest.fixture
def batio3_cif(tmp_path) -> Path:
    path = tmp_path / "BaTiO3.cif"
    path.write_text(BATIO3_CIF, encoding="utf-8")
    return path


@pytest.fixture
def rng():
    return np.random.default_rng(0)
