#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyENDF - Python library for decoding ENDF-6 evaluated nuclear data

Decode ENDF-6 tapes (fixed 80-column text) into a tree of Materials,
Files, Sections and typed records, with numeric data held in numpy
arrays.

Layers
------
1. **Fields**: fixed-width integer, float and text fields
   (:mod:`pyendf.utils.parsing`).
2. **Lines**: data columns plus MAT, MF, MT, NS identifiers
   (:mod:`pyendf.readers.lines`).
3. **Records**: CONT, TEXT, LIST, TAB1, TAB2, INTG
   (:mod:`pyendf.readers.records`).
4. **Tape**: the sentinel-delimited hierarchy
   (:mod:`pyendf.readers.tape`).
5. **Interpreters**: MF=1/MT=451 and MF=1/MT=460 models.

Modules
-------
readers
    Line, record and tape decoders plus section interpreters.
models
    Typed dataclass records returned by the readers.
utils
    Shared parsing helpers, constants and validation logic.

Examples
--------
>>> from pyendf import read_tape, DescriptionReader
>>> with open("n-094_Pu_239.endf") as f:
...     tape = read_tape(f)
>>> info = DescriptionReader().read(tape.materials[0].section(1, 451))
>>> info.z_a
(94, 239)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Melek Derman"

from pyendf.models import (
    ContRecord,
    DelayedPhotonData,
    Description,
    DirectoryEntry,
    File,
    IntgRecord,
    Line,
    ListRecord,
    Material,
    RecordKind,
    Section,
    Tab1Record,
    Tab2Record,
    Tape,
    TextRecord,
)
from pyendf.readers import (
    STANDARD_LAYOUTS,
    DelayedPhotonReader,
    DescriptionReader,
    RecordCursor,
    TapeReader,
    find_section,
    index_tape,
    interpret_section,
    iter_lines,
    iter_materials,
    read_file_range,
    read_tape,
)
from pyendf.exceptions import (
    PyENDFError,
    DecodeError,
    MalformedField,
    TruncatedLine,
    UnexpectedEndOfInput,
    CountMismatch,
    OutOfOrderSection,
    UnterminatedScope,
    UnterminatedSection,
    UnterminatedFile,
    UnterminatedMaterial,
    SectionFormatError,
)

__all__ = [
    # Version
    "__version__",
    # Decoding
    "read_tape",
    "iter_materials",
    "iter_lines",
    "index_tape",
    "read_file_range",
    "TapeReader",
    "RecordCursor",
    # Interpreters
    "DescriptionReader",
    "DelayedPhotonReader",
    "STANDARD_LAYOUTS",
    "find_section",
    "interpret_section",
    # Models
    "Line",
    "RecordKind",
    "ContRecord",
    "TextRecord",
    "ListRecord",
    "Tab1Record",
    "Tab2Record",
    "IntgRecord",
    "Section",
    "File",
    "Material",
    "Tape",
    "Description",
    "DirectoryEntry",
    "DelayedPhotonData",
    # Exceptions
    "PyENDFError",
    "DecodeError",
    "MalformedField",
    "TruncatedLine",
    "UnexpectedEndOfInput",
    "CountMismatch",
    "OutOfOrderSection",
    "UnterminatedScope",
    "UnterminatedSection",
    "UnterminatedFile",
    "UnterminatedMaterial",
    "SectionFormatError",
]
