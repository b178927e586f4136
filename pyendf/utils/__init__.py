#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared utilities for field parsing and validation

Column constants, fixed-width field decoding, and the count and
interpolation checks used by the record decoder live here so that no
logic is duplicated across the reader modules.
"""

from __future__ import annotations
