#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Structural validation routines for decoded ENDF-6 records

Every function raises a :class:`~pyendf.exceptions.DecodeError` subclass
when a format-level constraint is violated.  The record decoder calls
them as soon as the fields they check have been read, so a malformed
header is reported before any of the data it describes is consumed.

Checked Constraints
-------------------
* Declared counts (N1, NR, NP, NZ) are non-negative.
* Interpolation breakpoints are strictly increasing, start above 0 and
  end exactly at the declared point count.
* A table with points declares at least one interpolation region.
* Interpolation law codes are 1–6, optionally qualified by a tens digit
  of 1 (corresponding point) or 2 (unit base).

Nothing here judges the physical plausibility of values.

Design Note
-----------
Validation functions accept plain integers and sequences, not record
instances, so that ``models`` never depends on ``utils``::

    utils ← models ← readers
"""

from __future__ import annotations

import logging
from typing import Sequence

from pyendf.exceptions import CountMismatch, MalformedField
from pyendf.utils.constants import INTERPOLATION_NAMES, INTERPOLATION_QUALIFIERS

logger = logging.getLogger(__name__)


def validate_count(value: int, label: str, line_number: int | None = None) -> int:
    """Verify that a declared count is non-negative and return it

    Raises
    ------
    CountMismatch
        If *value* is negative.

    Examples
    --------
    >>> validate_count(3, "NP")
    3
    """
    if value < 0:
        raise CountMismatch(f"{label}={value} is negative", line_number)
    return value


def validate_interpolation_law(code: int, line_number: int | None = None) -> int:
    """Verify that *code* is a known interpolation law and return it

    Raises
    ------
    MalformedField
        If the base law is outside 1–6 or the qualifier digit is unknown.

    Examples
    --------
    >>> validate_interpolation_law(2)
    2
    >>> validate_interpolation_law(22)
    22
    """
    qualifier, base = divmod(code, 10)
    if base not in INTERPOLATION_NAMES or qualifier not in INTERPOLATION_QUALIFIERS:
        raise MalformedField(str(code), "interpolation law", line_number)
    return code


def validate_regions(
    breakpoints: Sequence[int],
    laws: Sequence[int],
    n_points: int,
    *,
    label: str = "NP",
    line_number: int | None = None,
) -> None:
    """Validate an interpolation-region table against its point count

    Parameters
    ----------
    breakpoints : Sequence[int]
        NBT values, one per region.
    laws : Sequence[int]
        INT values, one per region.
    n_points : int
        The point count the last breakpoint must equal (NP for TAB1,
        NZ for TAB2).
    label : str, optional
        Name of the point count used in messages.
    line_number : int | None, optional
        Header line of the record being checked.

    Raises
    ------
    CountMismatch
        If breakpoints are not strictly increasing, are not positive,
        or do not end at *n_points*; or if points are declared without
        any region.
    MalformedField
        If an interpolation law code is invalid.
    """
    if not breakpoints:
        if n_points > 0:
            raise CountMismatch(
                f"{label}={n_points} points declared with no interpolation region",
                line_number,
            )
        return

    previous = 0
    for nbt in breakpoints:
        if nbt <= previous:
            raise CountMismatch(
                f"interpolation breakpoints are not strictly increasing "
                f"({nbt} after {previous})",
                line_number,
            )
        previous = nbt

    if previous != n_points:
        raise CountMismatch(
            f"final breakpoint {previous} does not match {label}={n_points}",
            line_number,
        )

    for law in laws:
        validate_interpolation_law(law, line_number)

    logger.debug(
        "Region table (%d regions, %s=%d) passed validation.",
        len(breakpoints), label, n_points,
    )
