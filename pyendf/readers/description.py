#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Interpreter for descriptive data and directory (MF=1, MT=451)

Section Layout
--------------
::

    HEAD  [ZA,   AWR,  LRP,  LFI, NLIB, NMOD]
    CONT  [ELIS, STA,  LIS,  LISO, 0,   NFOR]
    CONT  [AWI,  EMAX, LREL, 0,   NSUB, NVER]
    CONT  [TEMP, 0.0,  LDRV, 0,   NWD,  NXC ]
    TEXT  ZSYMAM(11) ALAB(11) EDATE(11) AUTH(33)
    TEXT  REF(22) DDATE(11) RDATE(11) blank(11) ENDATE(11)
    TEXT  × (NWD − 2)   free-text description
    CONT  × NXC         [blank, blank, MF, MT, NC, MOD]

References
----------
ENDF-6 Formats Manual, section 1.1.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pyendf.exceptions import SectionFormatError
from pyendf.models.records import ContRecord, Record, TextRecord
from pyendf.models.sections import Description, DirectoryEntry
from pyendf.readers.base import BaseSectionReader
from pyendf.readers.records import RecordCursor
from pyendf.utils.constants import DESCRIPTION_SECTION
from pyendf.utils.parsing import parse_int
from pyendf.utils.validation import validate_count

logger = logging.getLogger(__name__)

_N_CONTROL = 4


class DescriptionReader(BaseSectionReader):
    """Read MF=1/MT=451 into a :class:`Description`

    Examples
    --------
    >>> tape = read_tape(text)
    >>> info = DescriptionReader().read(tape.materials[0].section(1, 451))
    >>> info.ZSYMAM, info.z_a
    (' 94-Pu-239', (94, 239))
    """

    mf, mt = DESCRIPTION_SECTION

    def read_records(self, cursor: RecordCursor) -> list[Record]:
        records: list[Record] = [cursor.head(), cursor.cont(), cursor.cont()]
        control = cursor.cont()
        records.append(control)
        nwd = validate_count(control.n1, "NWD", control.line_number)
        nxc = validate_count(control.n2, "NXC", control.line_number)
        if nwd < 2:
            raise SectionFormatError(
                f"MF=1 MT=451 needs NWD >= 2 identification lines, got {nwd}"
            )
        records.extend(cursor.text() for _ in range(nwd))
        records.extend(cursor.cont() for _ in range(nxc))
        return records

    def interpret(self, records: Sequence[Record]) -> Description:
        head, info, library, control = records[:_N_CONTROL]
        nwd = control.n1
        texts: Sequence[TextRecord] = records[_N_CONTROL : _N_CONTROL + nwd]
        entries: Sequence[ContRecord] = records[_N_CONTROL + nwd :]

        ident = texts[0].padded
        ref = texts[1].padded
        description = "\n".join(record.text for record in texts[2:])
        directory = [
            DirectoryEntry(MF=entry.l1, MT=entry.l2, NC=entry.n1, MOD=entry.n2)
            for entry in entries
        ]
        if len(directory) != control.n2:
            raise SectionFormatError(
                f"directory has {len(directory)} entries, NXC={control.n2}"
            )

        result = Description(
            ZA=head.c1, AWR=head.c2,
            LRP=head.l1, LFI=head.l2, NLIB=head.n1, NMOD=head.n2,
            ELIS=info.c1, STA=info.c2, LIS=info.l1, LISO=info.l2, NFOR=info.n2,
            AWI=library.c1, EMAX=library.c2,
            LREL=library.l1, NSUB=library.n1, NVER=library.n2,
            TEMP=control.c1, LDRV=control.l1, NWD=nwd, NXC=control.n2,
            ZSYMAM=ident[0:11], ALAB=ident[11:22], EDATE=ident[22:33], AUTH=ident[33:66],
            REF=ref[0:22], DDATE=ref[22:33], RDATE=ref[33:44],
            ENDATE=parse_int(ref[55:66], line_number=texts[1].line_number),
            description=description,
            directory=directory,
        )
        logger.debug(
            "Description of %s: NLIB=%d NVER=%d, %d directory entries",
            result.ZSYMAM.strip(), result.NLIB, result.NVER, len(directory),
        )
        return result
