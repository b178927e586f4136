#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared pytest fixtures for PyENDF tests

Provides builders for synthetic ENDF-6 lines, records and tapes so that
decoders can be tested without real evaluated data files.
"""

from __future__ import annotations

from typing import Sequence

import pytest


def endf_float(value: float) -> str:
    """Format *value* as an 11-column ENDF float (``" 1.234567+5"``)"""
    if value == 0:
        return " 0.000000+0"
    for digits in range(6, -1, -1):
        mantissa, exponent = f"{value:.{digits}e}".split("e")
        text = f"{mantissa}{int(exponent):+d}"
        if len(text) <= 11:
            return text.rjust(11)
    raise ValueError(f"{value!r} does not fit 11 columns")


def endf_int(value: int) -> str:
    return f"{value:11d}"


def endf_line(data: str, mat: int, mf: int, mt: int, ns: int = 0) -> str:
    """Assemble an 80-column line from data columns and identifiers"""
    return f"{data[:66]:<66}{mat:4d}{mf:2d}{mt:3d}{ns:5d}"


def cont_data(c1: float = 0.0, c2: float = 0.0, l1: int = 0,
              l2: int = 0, n1: int = 0, n2: int = 0) -> str:
    return endf_float(c1) + endf_float(c2) + "".join(endf_int(v) for v in (l1, l2, n1, n2))


class TapeBuilder:
    """Accumulate the lines of a synthetic tape

    Data methods write lines with the identifiers set by
    :meth:`section` and numbered from 1 within each section.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.mat = self.mf = self.mt = 0
        self._ns = 0

    # -- structure ----------------------------------------------------------

    def tpid(self, text: str = " Synthetic test tape", mat: int = 1) -> "TapeBuilder":
        self.lines.append(endf_line(text, mat, 0, 0, 0))
        return self

    def section(self, mat: int, mf: int, mt: int) -> "TapeBuilder":
        self.mat, self.mf, self.mt = mat, mf, mt
        self._ns = 0
        return self

    def send(self) -> "TapeBuilder":
        self.lines.append(endf_line(cont_data(), self.mat, self.mf, 0, 99999))
        return self

    def fend(self) -> "TapeBuilder":
        self.lines.append(endf_line(cont_data(), self.mat, 0, 0, 0))
        return self

    def mend(self) -> "TapeBuilder":
        self.lines.append(endf_line(cont_data(), 0, 0, 0, 0))
        return self

    def tend(self) -> "TapeBuilder":
        self.lines.append(endf_line(cont_data(), -1, 0, 0, 0))
        return self

    # -- data ---------------------------------------------------------------

    def raw(self, data: str) -> "TapeBuilder":
        self._ns += 1
        self.lines.append(endf_line(data, self.mat, self.mf, self.mt, self._ns))
        return self

    def cont(self, c1: float = 0.0, c2: float = 0.0, l1: int = 0,
             l2: int = 0, n1: int = 0, n2: int = 0) -> "TapeBuilder":
        return self.raw(cont_data(c1, c2, l1, l2, n1, n2))

    def text(self, text: str) -> "TapeBuilder":
        return self.raw(text)

    def floats(self, values: Sequence[float]) -> "TapeBuilder":
        for start in range(0, len(values), 6):
            self.raw("".join(endf_float(v) for v in values[start : start + 6]))
        return self

    def ints(self, values: Sequence[int]) -> "TapeBuilder":
        for start in range(0, len(values), 6):
            self.raw("".join(endf_int(v) for v in values[start : start + 6]))
        return self

    def list(self, values: Sequence[float], c1: float = 0.0, c2: float = 0.0,
             l1: int = 0, l2: int = 0, n2: int = 0) -> "TapeBuilder":
        self.cont(c1, c2, l1, l2, len(values), n2)
        return self.floats(values)

    def tab1(self, x: Sequence[float], y: Sequence[float],
             regions: Sequence[tuple[int, int]] | None = None,
             c1: float = 0.0, c2: float = 0.0,
             l1: int = 0, l2: int = 0) -> "TapeBuilder":
        if regions is None:
            regions = [(len(x), 2)]
        self.cont(c1, c2, l1, l2, len(regions), len(x))
        self.ints([v for region in regions for v in region])
        pairs = [v for point in zip(x, y) for v in point]
        return self.floats(pairs)

    def tab2(self, nz: int, regions: Sequence[tuple[int, int]] | None = None,
             c1: float = 0.0, c2: float = 0.0,
             l1: int = 0, l2: int = 0) -> "TapeBuilder":
        if regions is None:
            regions = [(nz, 2)]
        self.cont(c1, c2, l1, l2, len(regions), nz)
        return self.ints([v for region in regions for v in region])

    def intg_row(self, ii: int, jj: int, values: Sequence[int],
                 ndigit: int) -> "TapeBuilder":
        pad = " " if ndigit < 6 else ""
        packed = "".join(f"{v:{ndigit + 1}d}" for v in values)
        return self.raw(f"{ii:5d}{jj:5d}{pad}{packed}")

    # -- output -------------------------------------------------------------

    def text_lines(self) -> list[str]:
        return list(self.lines)

    def build(self) -> str:
        return "\n".join(self.lines) + "\n"


@pytest.fixture
def tape_builder() -> TapeBuilder:
    """An empty :class:`TapeBuilder`"""
    return TapeBuilder()


@pytest.fixture
def fmt_float():
    return endf_float


@pytest.fixture
def fmt_int():
    return endf_int


@pytest.fixture
def make_line():
    return endf_line


def add_description(builder: TapeBuilder, mat: int = 9437) -> TapeBuilder:
    """Append a complete MF=1/MT=451 section for Pu-239"""
    builder.section(mat, 1, 451)
    builder.cont(94239.0, 236.9986, 1, 1, 0, 0)
    builder.cont(0.0, 0.0, 0, 0, 0, 6)
    builder.cont(1.0, 2.0e7, 0, 0, 10, 8)
    builder.cont(0.0, 0.0, 0, 0, 4, 3)
    builder.text(" 94-Pu-239 LANL       EVAL-DEC17 P. Talou, M.B. Chadwick")
    builder.text(f"{' ENDF/B-VIII.0':<22}{' DIST-FEB18':<11}{' REV1-FEB18':<11}{'':11}"
                 + endf_int(20180222))
    builder.text(" ---- ENDF/B-VIII.0      MATERIAL 9437")
    builder.text(" ----- INCIDENT NEUTRON DATA")
    builder.raw(" " * 22 + endf_int(1) + endf_int(451) + endf_int(7) + endf_int(0))
    builder.raw(" " * 22 + endf_int(1) + endf_int(460) + endf_int(5) + endf_int(0))
    builder.raw(" " * 22 + endf_int(3) + endf_int(1) + endf_int(6) + endf_int(2))
    return builder.send()


def add_cross_section(builder: TapeBuilder, mat: int = 9437, mt: int = 1,
                      x: Sequence[float] = (1.0e-5, 1.0, 2.0e7),
                      y: Sequence[float] = (10.0, 5.0, 1.0)) -> TapeBuilder:
    """Append an MF=3 section: HEAD plus one TAB1"""
    builder.section(mat, 3, mt)
    builder.cont(94239.0, 236.9986, 0, 0, 0, 0)
    builder.tab1(list(x), list(y), c2=1.0)
    return builder.send()


@pytest.fixture
def description_builder() -> TapeBuilder:
    """A builder holding one MF=1/MT=451 section (no sentinels after SEND)"""
    return add_description(TapeBuilder())


@pytest.fixture
def sample_tape_text() -> str:
    """TPID, then MAT=9437 with MF=1 (MT=451) and MF=3 (MT=1, MT=2)"""
    builder = TapeBuilder().tpid()
    add_description(builder).fend()
    add_cross_section(builder, mt=1)
    add_cross_section(builder, mt=2, y=(4.0, 3.0, 0.5))
    return builder.fend().mend().tend().build()


@pytest.fixture
def two_material_text() -> str:
    """Two complete materials, MAT=125 then MAT=9437"""
    builder = TapeBuilder()
    builder.section(125, 1, 451).text(" hydrogen").send().fend()
    add_cross_section(builder, mat=125)
    builder.fend().mend()
    add_cross_section(builder, mat=9437)
    return builder.fend().mend().tend().build()
