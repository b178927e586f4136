#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Interpreter for delayed photon data (MF=1, MT=460)

``LO=1`` (discrete)::

    HEAD  [ZA, AWR, LO=1, 0, NG, 0]
    TAB1  [E_i, 0.0, i, 0, NR, NP] × NG     multiplicity vs. time

``LO=2`` (continuous)::

    HEAD  [ZA, AWR, LO=2, 0, 0, 0]
    LIST  [0.0, 0.0, 0, 0, NNF, 0]  decay constants

References
----------
ENDF-6 Formats Manual, section 1.6.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pyendf.exceptions import SectionFormatError
from pyendf.models.records import ContRecord, ListRecord, Record, Tab1Record
from pyendf.models.sections import DelayedPhotonData
from pyendf.readers.base import BaseSectionReader
from pyendf.readers.records import RecordCursor
from pyendf.utils.constants import DELAYED_PHOTON_SECTION
from pyendf.utils.validation import validate_count

logger = logging.getLogger(__name__)

DISCRETE = 1
CONTINUOUS = 2


def _unknown_lo(lo: int) -> SectionFormatError:
    return SectionFormatError(
        f"MF=1 MT=460 LO={lo} is neither {DISCRETE} (discrete) nor {CONTINUOUS} (continuous)"
    )


class DelayedPhotonReader(BaseSectionReader):
    """Read MF=1/MT=460 into a :class:`DelayedPhotonData`"""

    mf, mt = DELAYED_PHOTON_SECTION

    def read_records(self, cursor: RecordCursor) -> list[Record]:
        head = cursor.head()
        if head.l1 == DISCRETE:
            ng = validate_count(head.n1, "NG", head.line_number)
            return [head, *(cursor.tab1() for _ in range(ng))]
        if head.l1 == CONTINUOUS:
            return [head, cursor.list()]
        raise _unknown_lo(head.l1)

    def interpret(self, records: Sequence[Record]) -> DelayedPhotonData:
        head: ContRecord = records[0]
        if head.l1 == DISCRETE:
            tables: list[Tab1Record] = list(records[1:])
            logger.debug("Delayed photons: %d discrete lines", len(tables))
            return DelayedPhotonData(head.c1, head.c2, head.l1, NG=head.n1, tables=tables)
        if head.l1 == CONTINUOUS:
            constants: ListRecord = records[1]
            logger.debug("Delayed photons: %d precursor families", constants.npl)
            return DelayedPhotonData(
                head.c1, head.c2, head.l1, decay_constants=constants.values
            )
        raise _unknown_lo(head.l1)
