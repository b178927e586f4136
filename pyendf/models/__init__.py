#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for decoded ENDF-6 data

Lines, the six record shapes, and the Tape → Material → File → Section
tree that the reader layer produces.
"""

from __future__ import annotations

from pyendf.models.records import (
    ContRecord,
    File,
    IntgRecord,
    IntgRow,
    InterpolationLaw,
    InterpolationRegion,
    Line,
    ListRecord,
    Material,
    Record,
    RecordKind,
    Section,
    Tab1Record,
    Tab2Record,
    Tape,
    TextRecord,
)
from pyendf.models.sections import DelayedPhotonData, Description, DirectoryEntry

__all__ = [
    "Line",
    "RecordKind",
    "Record",
    "ContRecord",
    "TextRecord",
    "ListRecord",
    "Tab1Record",
    "Tab2Record",
    "IntgRecord",
    "IntgRow",
    "InterpolationLaw",
    "InterpolationRegion",
    "Section",
    "File",
    "Material",
    "Tape",
    "Description",
    "DirectoryEntry",
    "DelayedPhotonData",
]
