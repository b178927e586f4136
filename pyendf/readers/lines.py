#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Line decoder: 80-column text lines to :class:`~pyendf.models.records.Line`

The decoder is a pure function of its input.  It does not open files:
callers hand over text, bytes, an open file object, or any iterable of
lines, and get back numbered :class:`Line` values.

Column Layout
-------------
==========  ======  ==========================================
Columns     Width   Content
==========  ======  ==========================================
1–66        66      six 11-column data fields
67–70       4       MAT
71–72       2       MF
73–75       3       MT
76–80       5       NS (sequence number)
==========  ======  ==========================================
"""

from __future__ import annotations

import logging
from typing import IO, Iterable, Iterator, Union

from pyendf.exceptions import TruncatedLine
from pyendf.models.records import Line
from pyendf.utils.constants import (
    DATA_WIDTH,
    LINE_WIDTH,
    MAT_SLICE,
    MF_SLICE,
    MT_SLICE,
    NS_SLICE,
)
from pyendf.utils.parsing import parse_int

logger = logging.getLogger(__name__)

LineSource = Union[str, bytes, IO[str], IO[bytes], Iterable[str], Iterable[bytes]]
"""Anything :func:`iter_lines` accepts."""

DEFAULT_ENCODING = "latin-1"
"""Codec for byte input; one character per byte."""


def decode_line(
    raw: str,
    number: int,
    *,
    allow_short_lines: bool = True,
) -> Line:
    """Split one line into its data columns and identifiers

    Parameters
    ----------
    raw : str
        The line, with or without its terminator.
    number : int
        1-based line number, carried into every error.
    allow_short_lines : bool, optional
        Right-pad lines shorter than 80 columns with blanks (default).
        When ``False`` such lines raise :class:`TruncatedLine`.

    Returns
    -------
    Line

    Raises
    ------
    TruncatedLine
        If the line is short and padding is disabled, or if it carries
        non-blank text beyond column 80.
    MalformedField
        If an identifier column is not an integer.

    Examples
    --------
    >>> line = decode_line(" 9.423900+4 2.369986+2" + " " * 44 + "9437 1451    1", 1)
    >>> line.ids, line.ns
    ((9437, 1, 451), 1)
    """
    text = raw.rstrip("\r\n")
    length = len(text)
    if length > LINE_WIDTH:
        if text[LINE_WIDTH:].strip():
            raise TruncatedLine(length, number)
        text = text[:LINE_WIDTH]
    elif length < LINE_WIDTH:
        if not allow_short_lines:
            raise TruncatedLine(length, number)
        logger.debug("Line %d has %d columns, padding to %d", number, length, LINE_WIDTH)
        text = text.ljust(LINE_WIDTH)

    return Line(
        number=number,
        data=text[:DATA_WIDTH],
        mat=parse_int(text[MAT_SLICE], line_number=number),
        mf=parse_int(text[MF_SLICE], line_number=number),
        mt=parse_int(text[MT_SLICE], line_number=number),
        ns=parse_int(text[NS_SLICE], line_number=number),
    )


def _raw_lines(source: LineSource, encoding: str) -> Iterable:
    if isinstance(source, bytes):
        source = source.decode(encoding)
    if isinstance(source, str):
        return source.splitlines()
    return source


def iter_lines(
    source: LineSource,
    *,
    allow_short_lines: bool = True,
    encoding: str = DEFAULT_ENCODING,
) -> Iterator[Line]:
    """Yield decoded lines from *source*, numbered from 1

    Parameters
    ----------
    source : LineSource
        Whole-tape text (``str`` or ``bytes``), an open text or binary
        file object, or any iterable of ``str``/``bytes`` lines.
    allow_short_lines : bool, optional
        Passed to :func:`decode_line`.
    encoding : str, optional
        Codec for ``bytes`` input.  The default, Latin-1, maps every byte
        to one character, so column positions survive and non-ASCII
        text (accented author names) is kept as written.

    Notes
    -----
    Blank lines at the very end of the input are dropped.  A blank line
    followed by more content is decoded like any other line.
    """
    pending: list[tuple[int, str]] = []
    for number, raw in enumerate(_raw_lines(source, encoding), start=1):
        if isinstance(raw, bytes):
            raw = raw.decode(encoding)
        if not raw.strip():
            pending.append((number, raw))
            continue
        for blank_number, blank in pending:
            yield decode_line(blank, blank_number, allow_short_lines=allow_short_lines)
        pending.clear()
        yield decode_line(raw, number, allow_short_lines=allow_short_lines)

    if pending:
        logger.debug("Ignoring %d trailing blank line(s)", len(pending))
