#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for decoded ENDF-6 data

Models are the sole output of the reader layer.  Records are frozen: once
the decoder has emitted one it is never changed.  Container nodes own
their children exclusively; there are no back-references.

Hierarchy
---------
::

    Line                 — one decoded 80-column line (data + identifiers)
    Record               — closed sum of the six record shapes:
        ContRecord       — C1, C2, L1, L2, N1, N2
        TextRecord       — 66-column text
        ListRecord       — CONT header + N1 values
        Tab2Record       — CONT header + NR interpolation regions
        Tab1Record       — TAB2 shape + NP (x, y) pairs
        IntgRecord       — CONT header + packed integer rows
    Section              — (MAT, MF, MT), ordered records
    File                 — (MAT, MF), ordered sections
    Material             — MAT, ordered files
    Tape                 — ordered materials

Numbering
---------
* ``line_number`` values are 1-based and counted from the start of the
  decoded input.
* Interpolation breakpoints are 1-based point indices, as in the file.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Union

import numpy as np

from pyendf.exceptions import CountMismatch


class RecordKind(enum.Enum):
    """Tag naming the shape of a :data:`Record`"""

    CONT = "CONT"
    TEXT = "TEXT"
    LIST = "LIST"
    TAB1 = "TAB1"
    TAB2 = "TAB2"
    INTG = "INTG"


class InterpolationLaw(enum.IntEnum):
    """Base interpolation schemes (ENDF-6 Manual, Table 16)"""

    HISTOGRAM = 1
    LINEAR_LINEAR = 2
    LINEAR_LOG = 3
    LOG_LINEAR = 4
    LOG_LOG = 5
    SPECIAL = 6


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Line:
    """One 80-column line split into its data and identifier columns

    Parameters
    ----------
    number : int
        1-based position of the line in the input.
    data : str
        Columns 1–66, always exactly 66 characters.
    mat, mf, mt : int
        Material, file and section identifiers (columns 67–75).
    ns : int
        Sequence number (columns 76–80); ``0`` when blank.
    """

    number: int
    data: str
    mat: int
    mf: int
    mt: int
    ns: int = 0

    @property
    def fields(self) -> tuple[str, ...]:
        """The six 11-column data slices"""
        return tuple(self.data[i : i + 11] for i in range(0, 66, 11))

    def field(self, index: int) -> str:
        """Return data slice *index* (0–5)"""
        if not 0 <= index < 6:
            raise IndexError(f"field index {index} outside 0..5")
        return self.data[11 * index : 11 * (index + 1)]

    @property
    def ids(self) -> tuple[int, int, int]:
        return (self.mat, self.mf, self.mt)

    @property
    def is_tape_end(self) -> bool:
        return self.mat == -1

    @property
    def is_material_end(self) -> bool:
        return self.mat == 0

    @property
    def is_file_end(self) -> bool:
        return self.mat > 0 and self.mf == 0

    @property
    def is_section_end(self) -> bool:
        return self.mat > 0 and self.mf > 0 and self.mt == 0

    @property
    def is_sentinel(self) -> bool:
        return self.mat <= 0 or self.mf == 0 or self.mt == 0


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InterpolationRegion:
    """One interpolation region of a TAB1 or TAB2 record

    Parameters
    ----------
    breakpoint : int
        NBT: 1-based index of the last point governed by this region.
    law : int
        INT: interpolation code.  1–6 are the base laws; TAB2 records
        may add 10 (corresponding point) or 20 (unit base).
    """

    breakpoint: int
    law: int

    @property
    def scheme(self) -> InterpolationLaw:
        """The base interpolation law, without qualifier"""
        return InterpolationLaw(self.law % 10)


@dataclass(frozen=True)
class ContRecord:
    """Control record: two floats and four integers"""

    kind: ClassVar[RecordKind] = RecordKind.CONT

    c1: float
    c2: float
    l1: int
    l2: int
    n1: int
    n2: int
    line_number: int | None = None

    @property
    def values(self) -> tuple[float, float, int, int, int, int]:
        return (self.c1, self.c2, self.l1, self.l2, self.n1, self.n2)


@dataclass(frozen=True)
class TextRecord:
    """A line of descriptive text (columns 1–66, trailing blanks trimmed)"""

    kind: ClassVar[RecordKind] = RecordKind.TEXT

    text: str
    line_number: int | None = None

    @property
    def padded(self) -> str:
        """The text restored to its fixed 66-column width"""
        return self.text.ljust(66)


@dataclass(frozen=True, eq=False)
class ListRecord:
    """LIST record: CONT header followed by N1 values

    Parameters
    ----------
    values : numpy.ndarray
        ``float64`` array of shape ``(N1,)``.
    """

    kind: ClassVar[RecordKind] = RecordKind.LIST

    c1: float
    c2: float
    l1: int
    l2: int
    n1: int
    n2: int
    values: np.ndarray
    line_number: int | None = None

    @property
    def npl(self) -> int:
        return self.n1

    @property
    def header(self) -> ContRecord:
        return ContRecord(
            self.c1, self.c2, self.l1, self.l2, self.n1, self.n2, self.line_number
        )


@dataclass(frozen=True)
class Tab2Record:
    """TAB2 record: header and interpolation regions for a 2-D table

    The NZ sub-records the regions refer to follow as separate records.
    """

    kind: ClassVar[RecordKind] = RecordKind.TAB2

    c1: float
    c2: float
    l1: int
    l2: int
    regions: tuple[InterpolationRegion, ...]
    nz: int
    line_number: int | None = None

    @property
    def nr(self) -> int:
        return len(self.regions)

    @property
    def n1(self) -> int:
        return self.nr

    @property
    def n2(self) -> int:
        return self.nz


@dataclass(frozen=True, eq=False)
class Tab1Record:
    """TAB1 record: interpolation regions and NP tabulated (x, y) pairs

    Parameters
    ----------
    regions : tuple[InterpolationRegion, ...]
        NR regions; the last breakpoint equals NP.
    x, y : numpy.ndarray
        ``float64`` arrays of shape ``(NP,)``.
    """

    kind: ClassVar[RecordKind] = RecordKind.TAB1

    c1: float
    c2: float
    l1: int
    l2: int
    regions: tuple[InterpolationRegion, ...]
    x: np.ndarray
    y: np.ndarray
    line_number: int | None = None

    @property
    def nr(self) -> int:
        return len(self.regions)

    @property
    def np_points(self) -> int:
        return int(self.x.size)

    @property
    def n1(self) -> int:
        return self.nr

    @property
    def n2(self) -> int:
        return self.np_points

    @property
    def breakpoints(self) -> np.ndarray:
        """NBT values as an ``int64`` array"""
        return np.array([r.breakpoint for r in self.regions], dtype="i8")

    @property
    def interpolation(self) -> np.ndarray:
        """INT values as an ``int64`` array"""
        return np.array([r.law for r in self.regions], dtype="i8")

    def region_slices(self) -> Iterator[tuple[InterpolationRegion, slice]]:
        """Yield each region with the 0-based slice of points it governs

        Adjacent regions share their boundary point, as in ENDF.
        """
        start = 0
        for region in self.regions:
            yield region, slice(start, region.breakpoint)
            start = region.breakpoint - 1


@dataclass(frozen=True)
class IntgRow:
    """One packed row of an INTG block

    Parameters
    ----------
    ii, jj : int
        1-based row and first-column index of the packed values.
    values : tuple[int, ...]
        Packed correlation coefficients, ``NDIGIT`` significant digits.
    """

    ii: int
    jj: int
    values: tuple[int, ...]


@dataclass(frozen=True)
class IntgRecord:
    """Compact correlation matrix: header plus packed INTG rows

    The header is ``[C1, C2, NDIGIT, NNN, NM, N2]``: values are packed
    with ``NDIGIT`` digits, the matrix has order ``NNN`` and ``NM`` rows
    follow.
    """

    kind: ClassVar[RecordKind] = RecordKind.INTG

    c1: float
    c2: float
    ndigit: int
    nnn: int
    rows: tuple[IntgRow, ...]
    n2: int = 0
    line_number: int | None = None

    @property
    def nm(self) -> int:
        return len(self.rows)

    def to_matrix(self) -> np.ndarray:
        """Expand the packed rows into a symmetric ``(NNN, NNN)`` matrix

        The diagonal is 1.  A packed value ``k`` stands for
        ``(k + 0.5) / 10**NDIGIT`` when positive and
        ``(k - 0.5) / 10**NDIGIT`` when negative; 0 stays 0.  Only the
        strictly lower triangle is read from the rows.

        Raises
        ------
        CountMismatch
            If a row's II or JJ lies outside ``1..NNN``.
        """
        factor = 10.0 ** self.ndigit
        matrix = np.identity(self.nnn, dtype="f8")
        for row in self.rows:
            if not (1 <= row.ii <= self.nnn and 1 <= row.jj <= self.nnn):
                raise CountMismatch(
                    f"INTG row II={row.ii} JJ={row.jj} outside a matrix of NNN={self.nnn}",
                    self.line_number,
                )
            i = row.ii - 1
            for offset, k in enumerate(row.values):
                j = row.jj - 1 + offset
                if j >= i or j >= self.nnn:
                    break
                if k > 0:
                    matrix[i, j] = (k + 0.5) / factor
                elif k < 0:
                    matrix[i, j] = (k - 0.5) / factor
        return matrix + matrix.T - np.diag(matrix.diagonal())


Record = Union[ContRecord, TextRecord, ListRecord, Tab1Record, Tab2Record, IntgRecord]
"""Closed sum of every record shape the decoder can produce."""


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass
class Section:
    """One section, identified by (MAT, MF, MT)

    Parameters
    ----------
    mat, mf, mt : int
        Identifiers shared by every line of the section.
    records : list[Record]
        Decoded records, excluding the section-end sentinel.  Without a
        layout for this (MF, MT) every line is a :class:`TextRecord`.
    lines : list[Line]
        The section's raw lines, kept so typed records can be read on
        demand with :meth:`cursor`.
    """

    mat: int
    mf: int
    mt: int
    records: list = field(default_factory=list)
    lines: list[Line] = field(default_factory=list, repr=False)

    @property
    def ids(self) -> tuple[int, int, int]:
        return (self.mat, self.mf, self.mt)

    @property
    def head(self) -> ContRecord | None:
        """The first line read as a CONT (HEAD) record, or ``None`` if empty"""
        if not self.lines:
            return None
        return self.cursor().cont()

    def cursor(self):
        """Return a :class:`~pyendf.readers.records.RecordCursor` over the lines"""
        from pyendf.readers.records import RecordCursor

        return RecordCursor(self.lines)


@dataclass
class File:
    """One file, identified by (MAT, MF)"""

    mat: int
    mf: int
    sections: list[Section] = field(default_factory=list)

    def section(self, mt: int) -> Section:
        """Return section *mt*

        Raises
        ------
        KeyError
            If the file holds no such section.
        """
        for sec in self.sections:
            if sec.mt == mt:
                return sec
        raise KeyError(f"MAT={self.mat} MF={self.mf} has no MT={mt}")

    @property
    def mts(self) -> list[int]:
        return [sec.mt for sec in self.sections]


@dataclass
class Material:
    """One evaluated material, identified by MAT"""

    mat: int
    files: list[File] = field(default_factory=list)

    def file(self, mf: int) -> File:
        """Return file *mf*

        Raises
        ------
        KeyError
            If the material holds no such file.
        """
        for f in self.files:
            if f.mf == mf:
                return f
        raise KeyError(f"MAT={self.mat} has no MF={mf}")

    def section(self, mf: int, mt: int) -> Section:
        return self.file(mf).section(mt)

    def sections(self) -> Iterator[Section]:
        for f in self.files:
            yield from f.sections


@dataclass
class Tape:
    """A complete decoded tape

    Parameters
    ----------
    materials : list[Material]
        Materials in input order.
    identification : TextRecord | None
        The tape identification (TPID) line, when the input starts with
        one.
    anomalies : list
        Recoverable :class:`~pyendf.exceptions.OutOfOrderSection`
        reports collected while decoding.
    """

    materials: list[Material] = field(default_factory=list)
    identification: TextRecord | None = None
    anomalies: list = field(default_factory=list)

    def material(self, mat: int) -> Material:
        """Return the first material numbered *mat*

        Raises
        ------
        KeyError
            If the tape holds no such material.
        """
        for m in self.materials:
            if m.mat == mat:
                return m
        raise KeyError(f"tape has no MAT={mat}")
