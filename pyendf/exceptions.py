#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the PyENDF package

All exceptions raised by PyENDF inherit from :class:`PyENDFError`, making it
possible to catch every library-specific error with a single ``except`` clause
while still allowing fine-grained handling when needed.

Exception Hierarchy
-------------------
::

    PyENDFError
    ├── DecodeError                 # Anything wrong with the input text
    │   ├── MalformedField          # Unparseable 11-column field
    │   ├── TruncatedLine           # Line does not fit 80 columns
    │   ├── UnexpectedEndOfInput    # Lines ran out inside a record
    │   ├── CountMismatch           # Declared counts disagree with data
    │   ├── OutOfOrderSection       # Non-monotonic MAT/MF/MT (recoverable)
    │   └── UnterminatedScope
    │       ├── UnterminatedSection
    │       ├── UnterminatedFile
    │       └── UnterminatedMaterial
    └── SectionFormatError          # Section content vs. interpreter layout
"""

from __future__ import annotations


class PyENDFError(Exception):
    """Base exception for all PyENDF errors

    Every exception raised by PyENDF is a subclass of this type.
    Catching ``PyENDFError`` therefore catches any library-specific failure
    while still allowing standard Python exceptions (``KeyError``,
    ``TypeError``, etc.) to propagate normally.

    Attributes
    ----------
    partial : Tape | None
        Set by the tape walker when the error stops a decode.
    """

    partial = None


class DecodeError(PyENDFError):
    """Raised when ENDF-6 input cannot be decoded

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    line_number : int | None
        1-based number of the offending line, counted from the start of
        input.  ``None`` when no line exists (e.g. an empty source).

    Attributes
    ----------
    partial : Tape | None
        Set by the tape walker on fatal errors: everything decoded up to
        the failure point, including the scopes that were still open.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.message = message
        self.line_number = line_number
        self.partial = None
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedField(DecodeError):
    """Raised when an 11-column field does not hold a value of the expected kind

    Parameters
    ----------
    field : str
        The offending slice, verbatim.
    expected : str
        The kind that was requested (``"integer"``, ``"float"``,
        ``"interpolation law"``, ...).
    line_number : int | None
        Line the slice was taken from.
    """

    def __init__(
        self,
        field: str,
        expected: str,
        line_number: int | None = None,
    ) -> None:
        self.field = field
        self.expected = expected
        super().__init__(f"cannot decode {field!r} as {expected}", line_number)


class TruncatedLine(DecodeError):
    """Raised when a line does not fit the 80-column ENDF layout

    Short lines only raise when padding is disabled
    (``allow_short_lines=False``); lines carrying non-blank text beyond
    column 80 always raise.
    """

    def __init__(self, length: int, line_number: int | None = None) -> None:
        self.length = length
        super().__init__(
            f"line has {length} columns, expected 80", line_number
        )


class UnexpectedEndOfInput(DecodeError):
    """Raised when the line source is exhausted before a record is complete"""


class CountMismatch(DecodeError):
    """Raised when a declared count (N1, NR, NP, NZ) disagrees with the data

    This covers negative counts, interpolation breakpoints that are not
    strictly increasing or do not end at the declared point count,
    missing values inside a declared data array, and lines left over
    after a section layout has been fully read.
    """


class OutOfOrderSection(DecodeError):
    """Reported when MAT, MF or MT identifiers decrease

    This anomaly is recoverable: the tape walker records it in
    :attr:`Tape.anomalies` and keeps decoding unless ``strict=True`` was
    requested.

    Parameters
    ----------
    level : str
        ``"material"``, ``"file"`` or ``"section"``.
    previous, found : int
        The identifier seen before and the one that broke the order.
    """

    def __init__(
        self,
        level: str,
        previous: int,
        found: int,
        line_number: int | None = None,
    ) -> None:
        self.level = level
        self.previous = previous
        self.found = found
        super().__init__(
            f"{level} {found} follows {level} {previous}", line_number
        )


class UnterminatedScope(DecodeError):
    """Base for a Section, File or Material that never saw its end sentinel"""


class UnterminatedSection(UnterminatedScope):
    """Raised when a Section is not closed by an MT=0 record"""


class UnterminatedFile(UnterminatedScope):
    """Raised when a File is not closed by an MF=0, MT=0 record"""


class UnterminatedMaterial(UnterminatedScope):
    """Raised when a Material is not closed by a MAT=0 record"""


class SectionFormatError(PyENDFError):
    """Raised when a section does not match the layout a reader expects

    For example, asking the MF=1/MT=451 reader to interpret an MF=3
    section, or an MF=1/MT=460 section whose ``LO`` flag is neither
    1 nor 2.
    """
