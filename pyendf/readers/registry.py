#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Section lookup and the standard interpreter registry
"""

from __future__ import annotations

from typing import Any, Union

from pyendf.models.records import Material, Section, Tape
from pyendf.readers.base import BaseSectionReader
from pyendf.readers.delayed_photon import DelayedPhotonReader
from pyendf.readers.description import DescriptionReader

STANDARD_READERS: dict[tuple[int, int], BaseSectionReader] = {
    (reader.mf, reader.mt): reader
    for reader in (DescriptionReader(), DelayedPhotonReader())
}
"""Interpreter instances keyed by ``(MF, MT)``."""

STANDARD_LAYOUTS = {key: reader.layout for key, reader in STANDARD_READERS.items()}
"""Walker layouts for every section with a standard interpreter."""


def find_section(source: Union[Tape, Material], mf: int, mt: int) -> Section | None:
    """Return the first ``(mf, mt)`` section of a Tape or Material

    Returns ``None`` when no such section exists.
    """
    materials = source.materials if isinstance(source, Tape) else [source]
    for material in materials:
        for file in material.files:
            if file.mf != mf:
                continue
            for section in file.sections:
                if section.mt == mt:
                    return section
    return None


def interpret_section(section: Section) -> Any:
    """Interpret *section* with its standard reader

    Raises
    ------
    KeyError
        If no standard reader handles the section's (MF, MT).
    """
    try:
        reader = STANDARD_READERS[(section.mf, section.mt)]
    except KeyError:
        raise KeyError(
            f"no standard reader for MF={section.mf} MT={section.mt}"
        ) from None
    return reader.read(section)
