#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Record decoder: consecutive lines to typed ENDF-6 records

:class:`RecordCursor` walks an ordered sequence of
:class:`~pyendf.models.records.Line` values and materialises one record
per call.  The caller says which shape comes next (the format is not
self-describing at record level); the cursor consumes exactly the lines
that shape and its header counts require.

Lines Consumed
--------------
=======  ==================================================
Record   Lines
=======  ==================================================
CONT     1
TEXT     1
LIST     1 + ⌈N1 / 6⌉
TAB2     1 + ⌈2·NR / 6⌉  (plus NZ sub-records via ``tab2_table``)
TAB1     1 + ⌈2·NR / 6⌉ + ⌈2·NP / 6⌉
INTG     1 + NM  (one packed row per line)
=======  ==================================================

Failures
--------
* :class:`~pyendf.exceptions.UnexpectedEndOfInput` when the lines run
  out before the declared counts are satisfied.
* :class:`~pyendf.exceptions.CountMismatch` for negative counts,
  inconsistent breakpoint tables, blank values inside a declared array,
  and, from :meth:`RecordCursor.expect_end`, unread lines.

Data arrays are never truncated or padded to make a record fit.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from pyendf.exceptions import CountMismatch, MalformedField, UnexpectedEndOfInput
from pyendf.models.records import (
    ContRecord,
    IntgRecord,
    IntgRow,
    InterpolationRegion,
    Line,
    ListRecord,
    Record,
    RecordKind,
    Tab1Record,
    Tab2Record,
    TextRecord,
)
from pyendf.utils.constants import FIELDS_PER_LINE, INTG_INDEX_WIDTH, INTG_LAYOUT
from pyendf.utils.parsing import (
    decode_float_block,
    decode_int_block,
    parse_float,
    parse_int,
    parse_text,
)
from pyendf.utils.validation import validate_count, validate_regions

logger = logging.getLogger(__name__)


def rows_for(n_values: int) -> int:
    """Number of 6-field lines needed to hold *n_values* values

    Examples
    --------
    >>> rows_for(0), rows_for(6), rows_for(7)
    (0, 1, 2)
    """
    return -(-n_values // FIELDS_PER_LINE)


def decode_cont(line: Line) -> ContRecord:
    """Read the six data fields of *line* as a CONT record"""
    n = line.number
    return ContRecord(
        c1=parse_float(line.field(0), line_number=n),
        c2=parse_float(line.field(1), line_number=n),
        l1=parse_int(line.field(2), line_number=n),
        l2=parse_int(line.field(3), line_number=n),
        n1=parse_int(line.field(4), line_number=n),
        n2=parse_int(line.field(5), line_number=n),
        line_number=n,
    )


def decode_text(line: Line) -> TextRecord:
    """Read the 66 data columns of *line* as a TEXT record"""
    return TextRecord(text=parse_text(line.data), line_number=line.number)


class RecordCursor:
    """Sequential typed-record reader over a sequence of lines

    Parameters
    ----------
    lines : Sequence[Line] | Iterable[Line]
        The lines to read, in order.  Non-sequence iterables are
        materialised into a list.

    Examples
    --------
    >>> cursor = section.cursor()
    >>> head = cursor.cont()
    >>> sigma = cursor.tab1()
    >>> cursor.expect_end()
    """

    def __init__(self, lines: Sequence[Line] | Iterable[Line]) -> None:
        self._lines: Sequence[Line] = (
            lines if isinstance(lines, Sequence) else list(lines)
        )
        self._position = 0

    # -- position -----------------------------------------------------------

    @property
    def position(self) -> int:
        """Index of the next unread line"""
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._lines) - self._position

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._lines)

    def peek(self) -> Line | None:
        """Return the next line without consuming it, or ``None`` at the end"""
        if self.at_end:
            return None
        return self._lines[self._position]

    def expect_end(self) -> None:
        """Assert that every line has been consumed

        Raises
        ------
        CountMismatch
            If lines remain: the declared counts of the records read so
            far did not account for the whole input.
        """
        if not self.at_end:
            line = self._lines[self._position]
            raise CountMismatch(
                f"{self.remaining} line(s) left over after the declared records",
                line.number,
            )

    def _last_number(self) -> int | None:
        if self._lines:
            return self._lines[min(self._position, len(self._lines)) - 1].number
        return None

    def _next_line(self, what: str) -> Line:
        if self.at_end:
            raise UnexpectedEndOfInput(
                f"input ended where a {what} record was expected",
                self._last_number(),
            )
        line = self._lines[self._position]
        self._position += 1
        return line

    def _take(self, count: int, what: str, header: Line) -> Sequence[Line]:
        if count > self.remaining:
            raise UnexpectedEndOfInput(
                f"{what} declared at line {header.number} needs {count} more "
                f"line(s) but only {self.remaining} remain",
                self._lines[-1].number if self._lines else header.number,
            )
        start = self._position
        self._position += count
        return self._lines[start : self._position]

    # -- simple records -----------------------------------------------------

    def cont(self) -> ContRecord:
        """Read one CONT record"""
        return decode_cont(self._next_line("CONT"))

    def head(self) -> ContRecord:
        """Read a HEAD record (a CONT whose C1, C2 are ZA and AWR)"""
        return decode_cont(self._next_line("HEAD"))

    def text(self) -> TextRecord:
        """Read one TEXT record"""
        return decode_text(self._next_line("TEXT"))

    # -- variable-length records ----------------------------------------------

    def list(self) -> ListRecord:
        """Read a LIST record: header plus N1 values, six per line"""
        line = self._next_line("LIST")
        head = decode_cont(line)
        npl = validate_count(head.n1, "N1", line.number)
        rows = self._take(rows_for(npl), f"LIST with N1={npl}", line)
        values = decode_float_block(
            "".join(row.data for row in rows),
            npl,
            line_numbers=[row.number for row in rows],
        )
        return ListRecord(
            head.c1, head.c2, head.l1, head.l2, head.n1, head.n2,
            values=values,
            line_number=line.number,
        )

    def _regions(self, nr: int, header: Line) -> tuple[list[int], list[int]]:
        rows = self._take(rows_for(2 * nr), f"{nr} interpolation region(s)", header)
        pairs = decode_int_block(
            "".join(row.data for row in rows),
            2 * nr,
            line_numbers=[row.number for row in rows],
        )
        return pairs[0::2], pairs[1::2]

    def tab2(self) -> Tab2Record:
        """Read a TAB2 record: header plus NR interpolation regions"""
        line = self._next_line("TAB2")
        head = decode_cont(line)
        nr = validate_count(head.n1, "NR", line.number)
        nz = validate_count(head.n2, "NZ", line.number)
        breakpoints, laws = self._regions(nr, line)
        validate_regions(breakpoints, laws, nz, label="NZ", line_number=line.number)
        return Tab2Record(
            head.c1, head.c2, head.l1, head.l2,
            regions=tuple(InterpolationRegion(b, i) for b, i in zip(breakpoints, laws)),
            nz=nz,
            line_number=line.number,
        )

    def tab2_table(
        self, kind: RecordKind = RecordKind.TAB1
    ) -> tuple[Tab2Record, list[Record]]:
        """Read a TAB2 header followed by the NZ records it interpolates between

        Parameters
        ----------
        kind : RecordKind, optional
            Shape of each sub-record, usually TAB1 (the default) or LIST.

        Returns
        -------
        tuple[Tab2Record, list[Record]]
            The header and its NZ sub-records, in order.

        Examples
        --------
        >>> header, slices = cursor.tab2_table()
        >>> [s.c2 for s in slices]   # incident energies
        """
        header = self.tab2()
        return header, [self.read(kind) for _ in range(header.nz)]

    def tab1(self) -> Tab1Record:
        """Read a TAB1 record: header, NR regions, then NP (x, y) pairs"""
        line = self._next_line("TAB1")
        head = decode_cont(line)
        nr = validate_count(head.n1, "NR", line.number)
        n_points = validate_count(head.n2, "NP", line.number)
        breakpoints, laws = self._regions(nr, line)
        validate_regions(breakpoints, laws, n_points, label="NP", line_number=line.number)

        rows = self._take(rows_for(2 * n_points), f"TAB1 with NP={n_points}", line)
        values = decode_float_block(
            "".join(row.data for row in rows),
            2 * n_points,
            line_numbers=[row.number for row in rows],
        )
        return Tab1Record(
            head.c1, head.c2, head.l1, head.l2,
            regions=tuple(InterpolationRegion(b, i) for b, i in zip(breakpoints, laws)),
            x=values[0::2].copy(),
            y=values[1::2].copy(),
            line_number=line.number,
        )

    def intg_row(self, ndigit: int) -> IntgRow:
        """Read one packed INTG row written with *ndigit* digits per value"""
        line = self._next_line("INTG")
        try:
            first, per_row = INTG_LAYOUT[ndigit]
        except KeyError:
            raise MalformedField(str(ndigit), "NDIGIT in 2..6", line.number) from None

        data = line.data
        n = line.number
        width = ndigit + 1
        values = tuple(
            parse_int(data[first + k * width : first + (k + 1) * width], line_number=n)
            for k in range(per_row)
        )
        return IntgRow(
            ii=parse_int(data[:INTG_INDEX_WIDTH], line_number=n),
            jj=parse_int(data[INTG_INDEX_WIDTH : 2 * INTG_INDEX_WIDTH], line_number=n),
            values=values,
        )

    def intg(self) -> IntgRecord:
        """Read an INTG block: ``[C1, C2, NDIGIT, NNN, NM, N2]`` then NM rows"""
        line = self._next_line("INTG header")
        head = decode_cont(line)
        if head.l1 not in INTG_LAYOUT:
            raise MalformedField(line.field(2), "NDIGIT in 2..6", line.number)
        nnn = validate_count(head.l2, "NNN", line.number)
        nm = validate_count(head.n1, "NM", line.number)
        if nm > self.remaining:
            raise UnexpectedEndOfInput(
                f"INTG declared at line {line.number} needs {nm} row(s) "
                f"but only {self.remaining} remain",
                self._lines[-1].number,
            )
        rows = tuple(self.intg_row(head.l1) for _ in range(nm))
        return IntgRecord(
            head.c1, head.c2,
            ndigit=head.l1,
            nnn=nnn,
            rows=rows,
            n2=head.n2,
            line_number=line.number,
        )

    # -- dispatch -----------------------------------------------------------

    def read(self, kind: RecordKind) -> Record:
        """Read the next record as *kind*"""
        readers: dict[RecordKind, Callable[[], Record]] = {
            RecordKind.CONT: self.cont,
            RecordKind.TEXT: self.text,
            RecordKind.LIST: self.list,
            RecordKind.TAB1: self.tab1,
            RecordKind.TAB2: self.tab2,
            RecordKind.INTG: self.intg,
        }
        return readers[kind]()

    def read_all(self, kinds: Iterable[RecordKind]) -> list[Record]:
        """Read one record per entry of *kinds*, in order"""
        return [self.read(kind) for kind in kinds]
