#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Format constants and lookup tables used across PyENDF

Column positions follow the ENDF-6 Formats Manual [1]_ but are given as
0-based Python slice bounds.  Mapping dictionaries use plain integers
as keys so that look-ups from identifiers read off a line are O(1).

References
----------
.. [1] ENDF-6 Formats Manual (ENDF-102), BNL-90365-2009 Rev. 2, §0.6.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# ENDF-6 fixed-width column layout
# ---------------------------------------------------------------------------

LINE_WIDTH: int = 80
"""Total width of an ENDF record line in characters."""

DATA_WIDTH: int = 66
"""Width of the data portion of a line (columns 1–66)."""

FIELD_WIDTH: int = 11
"""Width of a single numeric field inside the data portion."""

FIELDS_PER_LINE: int = 6
"""Number of numeric fields per data line (66 / 11)."""

MAT_SLICE: slice = slice(66, 70)
"""Material number, columns 67–70."""

MF_SLICE: slice = slice(70, 72)
"""File number, columns 71–72."""

MT_SLICE: slice = slice(72, 75)
"""Section number, columns 73–75."""

NS_SLICE: slice = slice(75, 80)
"""Sequence number, columns 76–80."""

# ---------------------------------------------------------------------------
# INTG packing
# ---------------------------------------------------------------------------

INTG_INDEX_WIDTH: int = 5
"""Width of each of the two row/column indices (II, JJ) opening a row."""

INTG_LAYOUT: dict[int, tuple[int, int]] = {
    2: (11, 18),
    3: (11, 13),
    4: (11, 11),
    5: (11, 9),
    6: (10, 8),
}
"""``NDIGIT → (first data column, values per row)`` for INTG rows.

The Fortran formats are ``(2I5,1X,18I3)``, ``(2I5,1X,13I4)``,
``(2I5,1X,11I5)``, ``(2I5,1X,9I6)`` and ``(2I5,8I7)``: every value is
``NDIGIT + 1`` columns wide.
"""

# ---------------------------------------------------------------------------
# Interpolation laws
# ---------------------------------------------------------------------------

INTERPOLATION_NAMES: dict[int, str] = {
    1: "histogram",
    2: "linear-linear",
    3: "linear-log",
    4: "log-linear",
    5: "log-log",
    6: "special",
}
"""Base interpolation law codes (ENDF-6 Manual, Table 16)."""

INTERPOLATION_QUALIFIERS: dict[int, str] = {
    0: "",
    1: "corresponding-point",
    2: "unit-base",
}
"""Tens digit of a TAB2 interpolation code (11–16, 21–26)."""

# ---------------------------------------------------------------------------
# File (MF) categories
# ---------------------------------------------------------------------------

FILE_DESCRIPTIONS: dict[int, str] = {
    1: "general information",
    2: "resonance parameters",
    3: "reaction cross sections",
    4: "angular distributions",
    5: "energy distributions",
    6: "energy-angle distributions",
    7: "thermal neutron scattering",
    8: "radioactivity and fission-product yields",
    9: "multiplicities for radioactive nuclide production",
    10: "cross sections for radioactive nuclide production",
    12: "photon production multiplicities",
    13: "photon production cross sections",
    14: "photon angular distributions",
    15: "photon energy distributions",
    23: "photo-atomic and electro-atomic cross sections",
    26: "secondary distributions for photo- and electro-atomic data",
    27: "atomic form factors or scattering functions",
    28: "atomic relaxation data",
    31: "covariances of fission nu-bar",
    32: "covariances of resonance parameters",
    33: "covariances of neutron cross sections",
    34: "covariances for angular distributions",
    35: "covariances for energy distributions",
    40: "covariances for radioactive nuclide production",
}
"""Short description of each ENDF-6 file number, used in log messages."""

DESCRIPTION_SECTION: tuple[int, int] = (1, 451)
"""``(MF, MT)`` of the descriptive data and directory section."""

DELAYED_PHOTON_SECTION: tuple[int, int] = (1, 460)
"""``(MF, MT)`` of the delayed photon data section."""
