#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Interpreted section models

Field names follow the ENDF-6 Formats Manual mnemonics so that values
can be looked up against the manual directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from pyendf.models.records import Tab1Record


@dataclass(frozen=True)
class DirectoryEntry:
    """One line of the MF=1/MT=451 section directory

    Parameters
    ----------
    MF : int
        File number.
    MT : int
        Section number.
    NC : int
        Number of lines in the section.
    MOD : int
        Modification number of the section.
    """

    MF: int
    MT: int
    NC: int
    MOD: int


@dataclass
class Description:
    """Descriptive data and directory (MF=1, MT=451)

    Parameters
    ----------
    ZA : float
        ``1000 * Z + A`` of the material.
    AWR : float
        Mass of the material in neutron mass units.
    LRP : int
        Resonance parameter flag.
    LFI : int
        Fissionable-material flag.
    NLIB, NMOD : int
        Library identifier and modification number.
    ELIS, STA : float
        Target excitation energy and stability flag.
    LIS, LISO : int
        State number and isomeric state number of the target.
    NFOR : int
        Library format (6 for ENDF-6).
    AWI, EMAX : float
        Projectile mass and upper energy limit of the evaluation.
    LREL, NSUB, NVER : int
        Release, sub-library and library version numbers.
    TEMP : float
        Target temperature (K).
    LDRV : int
        Derived-evaluation flag.
    NWD, NXC : int
        Number of text lines and of directory entries.
    ZSYMAM, ALAB, EDATE, AUTH : str
        Material symbol, laboratory, evaluation date and authors.
    REF, DDATE, RDATE : str
        Reference, distribution date and revision date.
    ENDATE : int
        Master file entry date (``yyyymmdd``), 0 when blank.
    description : str
        The free-text comment lines joined with newlines.
    directory : list[DirectoryEntry]
        Sections present in the material.
    """

    ZA: float
    AWR: float
    LRP: int
    LFI: int
    NLIB: int
    NMOD: int
    ELIS: float
    STA: float
    LIS: int
    LISO: int
    NFOR: int
    AWI: float
    EMAX: float
    LREL: int
    NSUB: int
    NVER: int
    TEMP: float
    LDRV: int
    NWD: int
    NXC: int
    ZSYMAM: str
    ALAB: str
    EDATE: str
    AUTH: str
    REF: str
    DDATE: str
    RDATE: str
    ENDATE: int
    description: str = ""
    directory: list[DirectoryEntry] = field(default_factory=list)

    @property
    def z_a(self) -> tuple[int, int]:
        """``(Z, A)`` split out of :attr:`ZA`"""
        za = int(self.ZA)
        return za // 1000, za % 1000

    def find(self, mf: int, mt: int) -> DirectoryEntry | None:
        """Return the directory entry for ``(mf, mt)``, if listed"""
        for entry in self.directory:
            if (entry.MF, entry.MT) == (mf, mt):
                return entry
        return None


@dataclass
class DelayedPhotonData:
    """Delayed photon data (MF=1, MT=460)

    Parameters
    ----------
    ZA, AWR : float
        From the section HEAD record.
    LO : int
        Representation: 1 for discrete photons, 2 for continuous.
    NG : int
        Number of discrete photons (``LO=1``).
    tables : list[Tab1Record]
        ``LO=1``: one multiplicity table per photon; the record's C1
        holds the photon energy.
    decay_constants : numpy.ndarray | None
        ``LO=2``: decay constants of the NNF precursor families.
    """

    ZA: float
    AWR: float
    LO: int
    NG: int = 0
    tables: list[Tab1Record] = field(default_factory=list)
    decay_constants: np.ndarray | None = None

    @property
    def is_discrete(self) -> bool:
        return self.LO == 1

    @property
    def photon_energies(self) -> list[float]:
        return [table.c1 for table in self.tables]
