#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
ENDF-6 decoding layers

* :mod:`~pyendf.readers.lines` — 80-column lines to :class:`Line` values
* :mod:`~pyendf.readers.records` — lines to typed records
* :mod:`~pyendf.readers.tape` — lines to the Tape → Material → File →
  Section tree
* :mod:`~pyendf.readers.description`,
  :mod:`~pyendf.readers.delayed_photon` — section interpreters sharing
  the :class:`~pyendf.readers.base.BaseSectionReader` interface
"""

from __future__ import annotations

from pyendf.readers.base import BaseSectionReader
from pyendf.readers.delayed_photon import DelayedPhotonReader
from pyendf.readers.description import DescriptionReader
from pyendf.readers.lines import decode_line, iter_lines
from pyendf.readers.records import RecordCursor, decode_cont, decode_text, rows_for
from pyendf.readers.registry import (
    STANDARD_LAYOUTS,
    STANDARD_READERS,
    find_section,
    interpret_section,
)
from pyendf.readers.tape import (
    IndexEntry,
    TapeIndex,
    TapeReader,
    index_tape,
    iter_materials,
    read_file_range,
    read_tape,
)

__all__ = [
    "decode_line",
    "iter_lines",
    "RecordCursor",
    "decode_cont",
    "decode_text",
    "rows_for",
    "TapeReader",
    "read_tape",
    "iter_materials",
    "index_tape",
    "read_file_range",
    "TapeIndex",
    "IndexEntry",
    "BaseSectionReader",
    "DescriptionReader",
    "DelayedPhotonReader",
    "STANDARD_READERS",
    "STANDARD_LAYOUTS",
    "find_section",
    "interpret_section",
]
