#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Abstract base class for section interpreters

Every concrete interpreter (MF=1/MT=451, MF=1/MT=460) inherits from
:class:`BaseSectionReader`, names the section it understands, and turns
the section's typed records into a model from :mod:`pyendf.models`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from pyendf.exceptions import SectionFormatError
from pyendf.models.records import Record, Section
from pyendf.readers.records import RecordCursor

logger = logging.getLogger(__name__)


class BaseSectionReader(ABC):
    """Abstract base for interpreters of one (MF, MT) section

    Subclasses set :attr:`mf` and :attr:`mt` and implement two steps:

    * :meth:`read_records` reads the section's typed records from a
      :class:`RecordCursor`.  Bound to an instance it is a walker layout,
      see :attr:`layout`.
    * :meth:`interpret` turns those records into a model.

    Notes
    -----
    Interpreters never touch the line or identifier columns themselves;
    the dependency direction is::

        utils ← models ← readers (lines ← records ← tape) ← interpreters
    """

    mf: int
    mt: int

    @property
    def layout(self):
        """Walker layout for this section: ``{(mf, mt): layout}`` entries"""
        return self.read_records

    @abstractmethod
    def read_records(self, cursor: RecordCursor) -> list[Record]:
        """Read every record of the section from *cursor*

        Raises
        ------
        DecodeError
            If the lines do not hold the expected records.
        SectionFormatError
            If a flag in the section selects a layout that is not defined.
        """
        ...

    @abstractmethod
    def interpret(self, records: Sequence[Record]) -> Any:
        """Build the section model from records read by :meth:`read_records`"""
        ...

    def read(self, section: Section) -> Any:
        """Decode and interpret *section*

        Parameters
        ----------
        section : Section
            A section from a decoded tape; its raw lines are re-read.

        Raises
        ------
        SectionFormatError
            If *section* is not MF=:attr:`mf`, MT=:attr:`mt`.
        DecodeError
            If the lines do not hold the expected records, or lines are
            left over after them.
        """
        if (section.mf, section.mt) != (self.mf, self.mt):
            raise SectionFormatError(
                f"{type(self).__name__} reads MF={self.mf} MT={self.mt}, "
                f"got MF={section.mf} MT={section.mt}"
            )
        cursor = section.cursor()
        records = self.read_records(cursor)
        cursor.expect_end()
        logger.debug(
            "MAT=%d MF=%d MT=%d: %d records", section.mat, self.mf, self.mt, len(records)
        )
        return self.interpret(records)
