#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Hierarchical walker: lines to the Tape → Material → File → Section tree

The walker makes a single forward pass over the input.  Scopes are
opened by the first data line carrying a new identifier and closed by
sentinel lines, recognised from their identifier columns alone:

=========  ==================  ============================
Sentinel   Identifiers         Closes
=========  ==================  ============================
SEND       MT = 0              the open Section
FEND       MF = 0, MT = 0      the open File
MEND       MAT = 0             the open Material
TEND       MAT = −1            the Tape
=========  ==================  ============================

A tape may start with an identification line (TPID) whose MF and MT
are 0; it is kept as :attr:`Tape.identification`.

Section Records
---------------
Without further information the walker cannot know which record shapes a
section holds, so every line becomes a :class:`TextRecord`.  Passing
``layouts={(MF, MT): callable}`` decodes the listed sections into typed
records instead; the callable receives a
:class:`~pyendf.readers.records.RecordCursor` and must consume every
line.  Raw lines are always kept, so :meth:`Section.cursor` can decode
any section later.

Errors
------
* A data line or a SEND/FEND whose identifiers differ from an open
  scope, a TEND with scopes still open, or the end of input with scopes
  still open raises
  :class:`UnterminatedSection`, :class:`UnterminatedFile` or
  :class:`UnterminatedMaterial` for the innermost open scope.
* Decreasing MAT, MF or MT is reported as :class:`OutOfOrderSection`,
  collected in :attr:`Tape.anomalies` and logged; ``strict=True``
  raises it instead.
* Every fatal error carries ``partial``: the tape decoded so far,
  including the scopes that were open when decoding stopped.

Parallel Decoding
-----------------
:func:`index_tape` scans identifiers only and returns the line range of
every File and Material.  :func:`read_file_range` decodes one File from
such a range, so independent Files can be handed to a process pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Mapping, Sequence

from pyendf.exceptions import (
    DecodeError,
    PyENDFError,
    OutOfOrderSection,
    UnterminatedFile,
    UnterminatedMaterial,
    UnterminatedSection,
)
from pyendf.models.records import File, Line, Material, Record, Section, Tape
from pyendf.readers.lines import DEFAULT_ENCODING, LineSource, iter_lines
from pyendf.readers.records import RecordCursor, decode_text
from pyendf.utils.constants import FILE_DESCRIPTIONS

logger = logging.getLogger(__name__)

Layout = Callable[[RecordCursor], Iterable[Record]]
"""Reads the typed records of one section from a cursor."""


@dataclass
class _OpenSection:
    mat: int
    mf: int
    mt: int
    lines: list[Line] = field(default_factory=list)
    out_of_sequence: bool = False


class _Walker:
    """The scope state machine, fed one line at a time"""

    def __init__(
        self,
        tape: Tape,
        *,
        strict: bool,
        layouts: Mapping[tuple[int, int], Layout],
        identification: bool = True,
    ) -> None:
        self.tape = tape
        self.strict = strict
        self.layouts = layouts
        self.material: Material | None = None
        self.file: File | None = None
        self.section: _OpenSection | None = None
        self.last_mat: int | None = None
        self.closed_file: File | None = None
        self.finished = False
        self._first_line = identification

    # -- errors -------------------------------------------------------------

    def fail(self, exc: PyENDFError) -> PyENDFError:
        """Attach the partial tape to *exc* and return it"""
        materials = list(self.tape.materials)
        if self.material is not None:
            files = list(self.material.files)
            if self.file is not None:
                sections = list(self.file.sections)
                if self.section is not None:
                    sec = self.section
                    sections.append(
                        Section(sec.mat, sec.mf, sec.mt,
                                [decode_text(ln) for ln in sec.lines], list(sec.lines))
                    )
                files.append(File(self.file.mat, self.file.mf, sections))
            materials.append(Material(self.material.mat, files))
        exc.partial = Tape(materials, self.tape.identification, list(self.tape.anomalies))
        return exc

    def _unterminated(self, line: Line | None, found: str) -> PyENDFError:
        number = line.number if line is not None else None
        if self.section is not None:
            sec = self.section
            exc: DecodeError = UnterminatedSection(
                f"MAT={sec.mat} MF={sec.mf} MT={sec.mt} not closed before {found}",
                number,
            )
        elif self.file is not None:
            exc = UnterminatedFile(
                f"MAT={self.file.mat} MF={self.file.mf} not closed before {found}",
                number,
            )
        else:
            exc = UnterminatedMaterial(
                f"MAT={self.material.mat} not closed before {found}", number
            )
        return self.fail(exc)

    def _anomaly(self, level: str, previous: int, found: int, line: Line) -> None:
        exc = OutOfOrderSection(level, previous, found, line.number)
        if self.strict:
            raise self.fail(exc)
        logger.warning("Out-of-order identifiers: %s", exc)
        self.tape.anomalies.append(exc)

    @property
    def is_open(self) -> bool:
        return self.material is not None or self.file is not None

    # -- transitions ----------------------------------------------------------

    def feed(self, line: Line) -> Material | None:
        """Process one line; return a Material when its MEND closes it"""
        first, self._first_line = self._first_line, False
        self.closed_file = None

        if first and line.mf == 0 and line.mt == 0 and line.mat > 0:
            self.tape.identification = decode_text(line)
            logger.debug("Tape identification: %s", self.tape.identification.text.strip())
            return None

        if line.is_tape_end:
            if self.is_open:
                raise self._unterminated(line, "tape end")
            self.finished = True
            logger.debug("Tape end at line %d", line.number)
            return None

        if line.is_material_end:
            return self._close_material(line)
        if line.is_file_end:
            self._close_file(line)
            return None
        if line.is_section_end:
            self._close_section(line)
            return None

        self._add_data_line(line)
        return None

    def _close_material(self, line: Line) -> Material | None:
        if self.file is not None:
            raise self._unterminated(line, "material end")
        if self.material is None:
            logger.warning("Line %d: material end with no open material, skipped", line.number)
            return None
        material, self.material = self.material, None
        self.last_mat = material.mat
        logger.debug(
            "Closed MAT=%d at line %d (%d files)", material.mat, line.number, len(material.files)
        )
        return material

    def _close_file(self, line: Line) -> None:
        if self.section is not None:
            raise self._unterminated(line, "file end")
        if self.file is None:
            logger.warning("Line %d: file end with no open file, skipped", line.number)
            return
        if line.mat != self.file.mat:
            raise self._unterminated(line, f"a file end of MAT={line.mat}")
        closed, self.file = self.file, None
        self.material.files.append(closed)
        self.closed_file = closed
        logger.debug(
            "Closed MAT=%d MF=%d (%s) at line %d (%d sections)",
            closed.mat, closed.mf, FILE_DESCRIPTIONS.get(closed.mf, "unknown"),
            line.number, len(closed.sections),
        )

    def _close_section(self, line: Line) -> None:
        if self.section is None:
            # An empty section carries no MT of its own
            logger.warning("Line %d: section end with no open section, skipped", line.number)
            return
        sec = self.section
        if line.mat != sec.mat or line.mf != sec.mf:
            raise self._unterminated(
                line, f"a section end of MAT={line.mat} MF={line.mf}"
            )
        section = self._build_section(sec)
        self.section = None
        self.file.sections.append(section)

    def _build_section(self, sec: _OpenSection) -> Section:
        layout = self.layouts.get((sec.mf, sec.mt))
        if layout is None:
            records: list = [decode_text(ln) for ln in sec.lines]
        else:
            cursor = RecordCursor(sec.lines)
            try:
                records = list(layout(cursor))
                cursor.expect_end()
            except PyENDFError as exc:
                raise self.fail(exc)
        logger.debug(
            "Closed MAT=%d MF=%d MT=%d (%d records)", sec.mat, sec.mf, sec.mt, len(records)
        )
        return Section(sec.mat, sec.mf, sec.mt, records, sec.lines)

    def _add_data_line(self, line: Line) -> None:
        if self.material is not None and line.mat != self.material.mat:
            raise self._unterminated(line, f"a line of MAT={line.mat}")
        if self.file is not None and line.mf != self.file.mf:
            raise self._unterminated(line, f"a line of MF={line.mf}")
        if self.section is not None and line.mt != self.section.mt:
            raise self._unterminated(line, f"a line of MT={line.mt}")

        if self.material is None:
            if self.last_mat is not None and line.mat < self.last_mat:
                self._anomaly("material", self.last_mat, line.mat, line)
            self.material = Material(line.mat)
            logger.debug("Opened MAT=%d at line %d", line.mat, line.number)

        if self.file is None:
            if self.material.files and line.mf < self.material.files[-1].mf:
                self._anomaly("file", self.material.files[-1].mf, line.mf, line)
            self.file = File(line.mat, line.mf)

        if self.section is None:
            if self.file.sections and line.mt < self.file.sections[-1].mt:
                self._anomaly("section", self.file.sections[-1].mt, line.mt, line)
            self.section = _OpenSection(line.mat, line.mf, line.mt)
        else:
            previous = self.section.lines[-1].ns
            if (
                line.ns and previous and line.ns <= previous
                and not self.section.out_of_sequence
            ):
                self.section.out_of_sequence = True
                logger.warning(
                    "Line %d: sequence number %d does not follow %d in MAT=%d MF=%d MT=%d",
                    line.number, line.ns, previous, line.mat, line.mf, line.mt,
                )

        self.section.lines.append(line)

    def finish(self, last: Line | None) -> None:
        """Check that the input did not end inside an open scope"""
        if self.section is not None or self.is_open:
            raise self._unterminated(last, "end of input")
        if not self.finished:
            logger.debug("Input ended without a tape end record")


class TapeReader:
    """Decode an ENDF-6 tape into Materials, Files, Sections and Records

    Parameters
    ----------
    source : LineSource | Sequence[Line]
        Tape text (``str`` or ``bytes``), an open file object, an
        iterable of raw lines, or already decoded :class:`Line` values.
    allow_short_lines : bool, optional
        Right-pad lines shorter than 80 columns (default ``True``).
    encoding : str, optional
        Codec for ``bytes`` input (default Latin-1).
    strict : bool, optional
        Raise :class:`OutOfOrderSection` instead of recording it in
        :attr:`Tape.anomalies`.  Default ``False``.
    layouts : Mapping[tuple[int, int], Layout] | None, optional
        Section layouts keyed by ``(MF, MT)``; see the module notes.

    Attributes
    ----------
    tape : Tape
        The tape being built.  While :meth:`iter_materials` runs it holds
        the identification record and the anomalies; :meth:`read` also
        collects the materials in it.

    Examples
    --------
    >>> with open("n-094_Pu_239.endf") as f:
    ...     tape = TapeReader(f).read()
    >>> tape.material(9437).section(1, 451).records[0].text
    """

    def __init__(
        self,
        source: LineSource | Sequence[Line],
        *,
        allow_short_lines: bool = True,
        encoding: str = DEFAULT_ENCODING,
        strict: bool = False,
        layouts: Mapping[tuple[int, int], Layout] | None = None,
    ) -> None:
        self._source = source
        self._allow_short_lines = allow_short_lines
        self._encoding = encoding
        self._strict = strict
        self._layouts = dict(layouts or {})
        self.tape = Tape()

    def _lines(self) -> Iterable[Line]:
        source = self._source
        if isinstance(source, Sequence) and not isinstance(source, (str, bytes)):
            if source and isinstance(source[0], Line):
                return source
        return iter_lines(
            source, allow_short_lines=self._allow_short_lines, encoding=self._encoding
        )

    def _walker(self) -> _Walker:
        return _Walker(self.tape, strict=self._strict, layouts=self._layouts)

    def iter_materials(self) -> Iterator[Material]:
        """Yield each Material as soon as its end sentinel has been read

        Every call starts a fresh pass over the source, so it can be
        repeated for sources that can be re-read (text, bytes, lists).

        Raises
        ------
        DecodeError
            The first fatal error; ``exc.partial`` holds the open scopes.
        """
        self.tape = Tape()
        walker = self._walker()
        last: Line | None = None
        lines = iter(self._lines())
        while True:
            try:
                line = next(lines)
            except StopIteration:
                break
            except DecodeError as exc:
                raise walker.fail(exc)
            last = line
            material = walker.feed(line)
            if material is not None:
                yield material
            if walker.finished:
                return
        walker.finish(last)

    def read(self) -> Tape:
        """Decode the whole source and return the complete :class:`Tape`

        Raises
        ------
        DecodeError
            The first fatal error; ``exc.partial`` holds every material
            completed before it plus the scopes still open.
        SectionFormatError
            Raised by a section layout; carries ``partial`` the same way.
        """
        materials: list[Material] = []
        for material in self.iter_materials():
            materials.append(material)
            self.tape.materials.append(material)
        logger.debug(
            "Decoded tape: %d materials, %d anomalies",
            len(materials), len(self.tape.anomalies),
        )
        return self.tape


def read_tape(source: LineSource | Sequence[Line], **kwargs) -> Tape:
    """Decode *source* into a :class:`Tape`; see :class:`TapeReader`"""
    return TapeReader(source, **kwargs).read()


def iter_materials(source: LineSource | Sequence[Line], **kwargs) -> Iterator[Material]:
    """Lazily yield the Materials of *source*; see :class:`TapeReader`"""
    return TapeReader(source, **kwargs).iter_materials()


# ---------------------------------------------------------------------------
# Index pre-pass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IndexEntry:
    """Line range of one Material or File

    Parameters
    ----------
    mat : int
        Material number.
    mf : int | None
        File number, or ``None`` for a Material entry.
    start, stop : int
        0-based line offsets; ``stop`` is exclusive and the range
        includes the closing sentinel line.
    """

    mat: int
    mf: int | None
    start: int
    stop: int

    @property
    def n_lines(self) -> int:
        return self.stop - self.start


@dataclass
class TapeIndex:
    """File and Material ranges found by :func:`index_tape`"""

    materials: list[IndexEntry] = field(default_factory=list)
    files: list[IndexEntry] = field(default_factory=list)

    def files_of(self, mat: int) -> list[IndexEntry]:
        return [entry for entry in self.files if entry.mat == mat]


def index_tape(
    source: LineSource | Sequence[Line],
    *,
    allow_short_lines: bool = True,
    encoding: str = DEFAULT_ENCODING,
) -> TapeIndex:
    """Record the line range of every File and Material without decoding data

    Only the identifier columns are interpreted.  Structural problems are
    left for the decoder to report.

    Parameters
    ----------
    source : LineSource | Sequence[Line]
        As for :class:`TapeReader`.
    allow_short_lines : bool, optional
        Passed to the line decoder.
    encoding : str, optional
        Codec for ``bytes`` input.

    Returns
    -------
    TapeIndex
        Offsets index the sequence ``list(iter_lines(source))``.
    """
    if isinstance(source, Sequence) and source and isinstance(source[0], Line):
        lines: Iterable[Line] = source
    else:
        lines = iter_lines(source, allow_short_lines=allow_short_lines, encoding=encoding)

    index = TapeIndex()
    mat_start: int | None = None
    file_start: int | None = None
    mat = mf = 0

    for offset, line in enumerate(lines):
        if offset == 0 and line.mf == 0 and line.mt == 0 and line.mat > 0:
            continue
        if line.is_tape_end:
            break
        if line.is_material_end:
            if mat_start is not None:
                index.materials.append(IndexEntry(mat, None, mat_start, offset + 1))
                mat_start = None
            continue
        if line.is_file_end:
            if file_start is not None:
                index.files.append(IndexEntry(mat, mf, file_start, offset + 1))
                file_start = None
            continue
        if line.is_section_end:
            continue
        if mat_start is None:
            mat_start, mat = offset, line.mat
        if file_start is None:
            file_start, mf = offset, line.mf

    logger.debug(
        "Indexed %d materials, %d files", len(index.materials), len(index.files)
    )
    return index


def read_file_range(
    lines: Sequence[Line],
    entry: IndexEntry,
    *,
    strict: bool = False,
    layouts: Mapping[tuple[int, int], Layout] | None = None,
) -> File:
    """Decode the File that *entry* locates in *lines*

    Parameters
    ----------
    lines : Sequence[Line]
        The decoded lines the index was built from.
    entry : IndexEntry
        A File entry of :attr:`TapeIndex.files`.
    strict, layouts
        As for :class:`TapeReader`.

    Raises
    ------
    ValueError
        If *entry* is a Material entry.
    UnterminatedSection, UnterminatedFile
        If the range does not end with the File's end sentinel.
    """
    if entry.mf is None:
        raise ValueError("read_file_range needs a File entry, not a Material entry")

    walker = _Walker(
        Tape(), strict=strict, layouts=dict(layouts or {}), identification=False
    )
    last: Line | None = None
    for line in lines[entry.start : entry.stop]:
        last = line
        walker.feed(line)
        if walker.closed_file is not None:
            return walker.closed_file

    if walker.section is not None:
        raise walker._unterminated(last, "end of range")
    raise walker.fail(
        UnterminatedFile(
            f"MAT={entry.mat} MF={entry.mf} range has no file end",
            last.number if last is not None else None,
        )
    )
