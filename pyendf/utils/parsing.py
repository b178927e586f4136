#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Field-level ENDF-6 decoding helpers for the PyENDF package

Every conversion of an 11-column slice into a Python value lives here so
that the line, record and section layers never duplicate format-specific
logic.  Nothing in this module knows about record structure.

ENDF-6 Numeric Fields
---------------------
* **Blank** fields decode to ``0`` (integer) or ``0.0`` (float).
* **Integers** are right-justified digits with an optional sign.
* **Floats** carry an optional sign and a mantissa, followed by an
  exponent that is usually introduced *not* by a letter but by the sign
  of the exponent itself: ``" 1.23456+5"`` is 1.23456 × 10⁵ and
  ``"-2.50000-3"`` is −2.5 × 10⁻³.  Conventional ``E`` and Fortran
  ``D`` markers are accepted too.

The exponent sign is the last ``+``/``-`` in the field that is not the
field's first non-blank character; everything before it is the mantissa
and only digits may follow it.

Throughput
----------
:func:`parse_float` is the reference implementation and is used for
single control fields.  Data arrays (LIST values, TAB1 pairs) go through
:func:`decode_float_block`, which inserts the missing exponent marker for
a whole block of fields at once with NumPy and converts them in a single
cast.  Fields the block path cannot convert are handed back to
:func:`parse_float`, so both paths accept and reject exactly the same
text and errors always name the offending field.

References
----------
.. [1] ENDF-6 Formats Manual (ENDF-102), BNL-90365-2009 Rev. 2, §0.6.
"""

from __future__ import annotations

import enum
import logging
import math
import re
from typing import Sequence

import numpy as np

from pyendf.exceptions import CountMismatch, MalformedField
from pyendf.utils.constants import FIELD_WIDTH, FIELDS_PER_LINE

logger = logging.getLogger(__name__)

_FLOAT_PATTERN: re.Pattern[str] = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:E[+-]?\d+)?"
)
"""Normalised float grammar, matched after the exponent marker is restored."""

_INT_PATTERN: re.Pattern[str] = re.compile(r"[+-]?\d+")

_SPACE = ord(" ")
_PERIOD = ord(".")
_PLUS = ord("+")
_MINUS = ord("-")
_DIGIT_0 = ord("0")
_DIGIT_9 = ord("9")

_ALLOWED_BYTES = np.zeros(256, dtype=bool)
_ALLOWED_BYTES[np.frombuffer(b"0123456789+-.EeDd ", dtype=np.uint8)] = True


class FieldKind(enum.Enum):
    """The three ways an 11-column slice can be read"""

    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"


# ---------------------------------------------------------------------------
# Single fields
# ---------------------------------------------------------------------------

def parse_float(field: str, *, line_number: int | None = None) -> float:
    """Convert an ENDF-6 floating-point field to a Python float

    Parameters
    ----------
    field : str
        The 11-character slice (shorter slices are accepted).  Leading
        and trailing blanks are ignored.
    line_number : int | None, optional
        Line the slice came from, reported if decoding fails.

    Returns
    -------
    float
        The decoded value; ``0.0`` for a blank field.

    Raises
    ------
    MalformedField
        If the slice is not a number in any accepted notation, or its
        exponent overflows a double.

    Examples
    --------
    >>> parse_float("1.234567+5 ")
    123456.7
    >>> parse_float(" -2.5000-3 ")
    -0.0025
    >>> parse_float(" 1.23456D-03")
    0.00123456
    >>> parse_float("           ")
    0.0
    """
    text = field.strip()
    if not text:
        return 0.0

    body = text.upper().replace("D", "E")
    if "E" not in body:
        # The exponent sign is never the leading character of the value
        idx = max(body.rfind("+", 1), body.rfind("-", 1))
        if idx > 0:
            body = f"{body[:idx]}E{body[idx:]}"

    if _FLOAT_PATTERN.fullmatch(body) is None:
        raise MalformedField(field, FieldKind.FLOAT.value, line_number)
    value = float(body)
    if not math.isfinite(value):
        raise MalformedField(field, "a finite " + FieldKind.FLOAT.value, line_number)
    return value


def parse_int(field: str, *, line_number: int | None = None) -> int:
    """Convert an ENDF-6 integer field to a Python int

    Parameters
    ----------
    field : str
        The slice to decode; surrounding blanks are ignored.
    line_number : int | None, optional
        Line the slice came from, reported if decoding fails.

    Returns
    -------
    int
        The decoded value; ``0`` for a blank field.

    Raises
    ------
    MalformedField
        If the slice holds anything but an optionally signed integer.

    Examples
    --------
    >>> parse_int("         42")
    42
    >>> parse_int("           ")
    0
    """
    text = field.strip()
    if not text:
        return 0
    if _INT_PATTERN.fullmatch(text) is None:
        raise MalformedField(field, FieldKind.INTEGER.value, line_number)
    return int(text)


def parse_text(field: str) -> str:
    """Return a text field with trailing blanks removed

    Leading blanks are part of the fixed-column text and are preserved.

    Examples
    --------
    >>> parse_text(" 94-Pu-239 ")
    ' 94-Pu-239'
    """
    return field.rstrip()


def parse_field(
    field: str,
    kind: FieldKind,
    *,
    line_number: int | None = None,
) -> int | float | str:
    """Decode *field* as the requested :class:`FieldKind`"""
    if kind is FieldKind.INTEGER:
        return parse_int(field, line_number=line_number)
    if kind is FieldKind.FLOAT:
        return parse_float(field, line_number=line_number)
    return parse_text(field)


# ---------------------------------------------------------------------------
# Blocks of fields
# ---------------------------------------------------------------------------

def split_fields(data: str, count: int) -> list[str]:
    """Cut the first *count* 11-column fields out of concatenated line data"""
    return [
        data[i : i + FIELD_WIDTH]
        for i in range(0, count * FIELD_WIDTH, FIELD_WIDTH)
    ]


def _line_of(index: int, line_numbers: Sequence[int]) -> int | None:
    row = index // FIELDS_PER_LINE
    return line_numbers[row] if row < len(line_numbers) else None


def _missing_value(index: int, count: int, line_numbers: Sequence[int]) -> CountMismatch:
    return CountMismatch(
        f"declared {count} values but field {index % FIELDS_PER_LINE + 1} "
        f"(value {index + 1}) is blank",
        _line_of(index, line_numbers),
    )


def decode_int_block(
    data: str,
    count: int,
    *,
    line_numbers: Sequence[int] = (),
) -> list[int]:
    """Decode *count* integer fields from concatenated line data

    Used for interpolation-region tables, which are short enough that a
    plain loop is the fastest option.

    Raises
    ------
    CountMismatch
        If a field inside the declared count is blank.
    MalformedField
        If a field is not an integer.
    """
    values: list[int] = []
    for index, field in enumerate(split_fields(data, count)):
        if not field.strip():
            raise _missing_value(index, count, line_numbers)
        values.append(parse_int(field, line_number=_line_of(index, line_numbers)))
    return values


def _restore_exponent_marker(fields: np.ndarray) -> np.ndarray:
    """Insert ``e`` before the exponent sign of every row of an (N, 11) byte array

    Returns an (N, 12) array.  Rows without an implicit exponent gain a
    trailing blank instead.
    """
    width = fields.shape[1]
    upper = fields.copy()
    upper[(upper == ord("D")) | (upper == ord("d"))] = ord("E")

    previous = np.zeros_like(upper)
    previous[:, 1:] = upper[:, :-1]
    after_mantissa = (
        ((previous >= _DIGIT_0) & (previous <= _DIGIT_9)) | (previous == _PERIOD)
    )
    exponent_sign = ((upper == _PLUS) | (upper == _MINUS)) & after_mantissa

    has_exponent = exponent_sign.any(axis=1)
    last = width - 1 - np.argmax(exponent_sign[:, ::-1], axis=1)
    position = np.where(has_exponent, last, width)

    columns = np.arange(width + 1)
    source = np.where(
        columns[None, :] <= position[:, None], columns[None, :], columns[None, :] - 1
    )
    out = np.take_along_axis(upper, np.minimum(source, width - 1), axis=1)
    out[columns[None, :] == position[:, None]] = ord("e")
    out[~has_exponent, width] = _SPACE
    return np.ascontiguousarray(out)


def _decode_each(fields: list[str], line_numbers: Sequence[int]) -> np.ndarray:
    return np.array(
        [
            parse_float(field, line_number=_line_of(index, line_numbers))
            for index, field in enumerate(fields)
        ],
        dtype="f8",
    )


def decode_float_block(
    data: str,
    count: int,
    *,
    line_numbers: Sequence[int] = (),
) -> np.ndarray:
    """Decode *count* float fields from concatenated line data

    Parameters
    ----------
    data : str
        The 66-column data portions of consecutive lines, joined.
    count : int
        Number of fields to decode, starting at the first column.
        Fields after *count* (the unused tail of the last line) are
        ignored.
    line_numbers : Sequence[int], optional
        Line number of each 66-column chunk in *data*, for diagnostics.

    Returns
    -------
    numpy.ndarray
        ``float64`` array of shape ``(count,)``.

    Raises
    ------
    CountMismatch
        If *data* is too short or a field inside the declared count is
        blank.  Declared data arrays never default missing values to 0.
    MalformedField
        If a field is not a valid ENDF float.

    Examples
    --------
    >>> decode_float_block(" 1.000000+0 2.500000-1", 2)
    array([1.  , 0.25])
    """
    if count <= 0:
        return np.empty(0, dtype="f8")
    if len(data) < count * FIELD_WIDTH:
        raise CountMismatch(
            f"declared {count} values but only {len(data) // FIELD_WIDTH} fields present",
            _line_of(len(data) // FIELD_WIDTH, line_numbers),
        )

    raw = np.frombuffer(
        data[: count * FIELD_WIDTH].encode("ascii", "replace"), dtype=np.uint8
    )
    fields = raw.reshape(count, FIELD_WIDTH)

    blank = (fields == _SPACE).all(axis=1)
    if blank.any():
        raise _missing_value(int(np.argmax(blank)), count, line_numbers)

    if not _ALLOWED_BYTES[fields].all():
        return _decode_each(split_fields(data, count), line_numbers)

    normalised = _restore_exponent_marker(fields)
    try:
        values = normalised.view(f"S{FIELD_WIDTH + 1}").ravel().astype("f8")
    except ValueError:
        values = None
    if values is None or not np.isfinite(values).all():
        # Malformed or overflowing text: redo field by field to locate it
        logger.debug("Block decode of %d fields fell back to per-field parsing", count)
        return _decode_each(split_fields(data, count), line_numbers)
    return values
