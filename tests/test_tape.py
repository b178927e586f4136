#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the hierarchical tape walker

Covers scope nesting, sentinel handling, unterminated scopes with
partial results, ordering anomalies, typed layouts and the index
pre-pass used for per-file decoding.
"""

from __future__ import annotations

import io
import logging

import numpy as np
import pytest

from pyendf.exceptions import (
    CountMismatch,
    DecodeError,
    OutOfOrderSection,
    UnterminatedFile,
    UnterminatedMaterial,
    UnterminatedSection,
)
from pyendf.models.records import ContRecord, Tab1Record, TextRecord
from pyendf.readers import STANDARD_LAYOUTS, find_section
from pyendf.readers.lines import iter_lines
from pyendf.readers.tape import (
    TapeReader,
    index_tape,
    iter_materials,
    read_file_range,
    read_tape,
)


def xs_layout(cursor):
    return [cursor.head(), cursor.tab1()]


class TestMinimalTape:
    def test_single_text_section(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" minimal").send().fend().mend().tend()
        tape = read_tape(tape_builder.build())
        assert len(tape.materials) == 1
        material = tape.materials[0]
        assert material.mat == 125
        assert [f.mf for f in material.files] == [1]
        section = material.section(1, 451)
        assert section.ids == (125, 1, 451)
        assert len(section.records) == 1
        assert isinstance(section.records[0], TextRecord)
        assert section.records[0].text == " minimal"
        assert tape.anomalies == []
        assert tape.identification is None

    def test_empty_input(self) -> None:
        tape = read_tape("")
        assert tape.materials == []

    def test_missing_tape_end_is_accepted(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" x").send().fend().mend()
        assert len(read_tape(tape_builder.build()).materials) == 1

    def test_lines_after_tape_end_ignored(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" x").send().fend().mend().tend()
        tape_builder.section(128, 1, 451).text(" y")
        tape = read_tape(tape_builder.build())
        assert [m.mat for m in tape.materials] == [125]


class TestHierarchy:
    def test_identification(self, sample_tape_text: str) -> None:
        tape = read_tape(sample_tape_text)
        assert tape.identification.text == " Synthetic test tape"

    def test_structure(self, sample_tape_text: str) -> None:
        tape = read_tape(sample_tape_text)
        material = tape.material(9437)
        assert [f.mf for f in material.files] == [1, 3]
        assert material.file(3).mts == [1, 2]
        assert len(material.section(1, 451).lines) == 11
        assert [s.ids for s in material.sections()] == [
            (9437, 1, 451), (9437, 3, 1), (9437, 3, 2),
        ]

    def test_default_records_are_text(self, sample_tape_text: str) -> None:
        section = read_tape(sample_tape_text).material(9437).section(3, 1)
        assert len(section.records) == len(section.lines) == 4
        assert all(isinstance(r, TextRecord) for r in section.records)

    def test_cursor_decodes_later(self, sample_tape_text: str) -> None:
        section = read_tape(sample_tape_text).material(9437).section(3, 2)
        assert section.head.c1 == pytest.approx(94239.0)
        cursor = section.cursor()
        cursor.head()
        table = cursor.tab1()
        cursor.expect_end()
        np.testing.assert_allclose(table.y, [4.0, 3.0, 0.5])

    def test_missing_lookups(self, sample_tape_text: str) -> None:
        tape = read_tape(sample_tape_text)
        with pytest.raises(KeyError):
            tape.material(1)
        with pytest.raises(KeyError):
            tape.material(9437).file(2)
        with pytest.raises(KeyError):
            tape.material(9437).section(3, 102)

    def test_find_section(self, sample_tape_text: str) -> None:
        tape = read_tape(sample_tape_text)
        assert find_section(tape, 3, 2).mt == 2
        assert find_section(tape.materials[0], 1, 451).mf == 1
        assert find_section(tape, 4, 2) is None

    def test_two_materials(self, two_material_text: str) -> None:
        tape = read_tape(two_material_text)
        assert [m.mat for m in tape.materials] == [125, 9437]
        assert tape.material(125).file(1).section(451).records[0].text == " hydrogen"

    def test_file_object_source(self, sample_tape_text: str) -> None:
        tape = TapeReader(io.StringIO(sample_tape_text)).read()
        assert len(tape.materials) == 1

    def test_line_sequence_source(self, sample_tape_text: str) -> None:
        lines = list(iter_lines(sample_tape_text))
        tape = read_tape(lines)
        assert tape.material(9437).file(3).mts == [1, 2]


class TestLayouts:
    def test_typed_section(self, sample_tape_text: str) -> None:
        tape = read_tape(sample_tape_text, layouts={(3, 1): xs_layout})
        typed = tape.material(9437).section(3, 1).records
        assert isinstance(typed[0], ContRecord)
        assert isinstance(typed[1], Tab1Record)
        np.testing.assert_allclose(typed[1].x, [1.0e-5, 1.0, 2.0e7])
        other = tape.material(9437).section(3, 2).records
        assert all(isinstance(r, TextRecord) for r in other)

    def test_standard_layouts(self, sample_tape_text: str) -> None:
        tape = read_tape(sample_tape_text, layouts=STANDARD_LAYOUTS)
        records = tape.material(9437).section(1, 451).records
        assert len(records) == 11
        assert isinstance(records[0], ContRecord)

    def test_layout_leaving_lines(self, sample_tape_text: str) -> None:
        with pytest.raises(CountMismatch) as info:
            read_tape(sample_tape_text, layouts={(3, 1): lambda c: [c.head()]})
        partial = info.value.partial
        assert partial is not None
        assert partial.materials[0].file(1).mts == [451]
        assert partial.materials[0].file(3).mts == [1]
        failed = partial.materials[0].section(3, 1)
        assert len(failed.records) == len(failed.lines)


class TestUnterminatedScopes:
    def test_section_runs_into_next_mt(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" a").section(125, 1, 452).text(" b")
        with pytest.raises(UnterminatedSection) as info:
            read_tape(tape_builder.build())
        assert info.value.line_number == 2

    def test_file_end_inside_section(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" a").fend()
        with pytest.raises(UnterminatedSection):
            read_tape(tape_builder.build())

    def test_material_end_inside_file(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" a").send().mend()
        with pytest.raises(UnterminatedFile):
            read_tape(tape_builder.build())

    def test_tape_end_inside_material(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" a").send().fend().tend()
        with pytest.raises(UnterminatedMaterial):
            read_tape(tape_builder.build())

    def test_input_ends_inside_section(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" a").text(" b")
        with pytest.raises(UnterminatedSection) as info:
            read_tape(tape_builder.build())
        assert info.value.line_number == 2

    def test_new_material_inside_material(self, tape_builder) -> None:
        tape_builder.section(125, 1, 451).text(" a").send().fend()
        tape_builder.section(128, 1, 451).text(" b")
        with pytest.raises(UnterminatedMaterial):
            read_tape(tape_builder.build())

    def test_section_end_of_other_material(self, make_line) -> None:
        lines = [
            make_line(" a", 125, 1, 451, 1),
            make_line("", 9999, 7, 0, 99999),
            make_line("", 125, 0, 0, 0),
        ]
        with pytest.raises(UnterminatedSection) as info:
            read_tape("\n".join(lines))
        assert info.value.line_number == 2
        assert info.value.partial.material(125).section(1, 451).lines

    def test_section_end_of_other_file(self, make_line) -> None:
        lines = [
            make_line(" a", 125, 1, 451, 1),
            make_line("", 125, 3, 0, 99999),
        ]
        with pytest.raises(UnterminatedSection):
            read_tape("\n".join(lines))

    def test_file_end_of_other_material(self, make_line) -> None:
        lines = [
            make_line(" a", 125, 1, 451, 1),
            make_line("", 125, 1, 0, 99999),
            make_line("", 8888, 0, 0, 0),
            make_line("", 0, 0, 0, 0),
        ]
        with pytest.raises(UnterminatedFile) as info:
            read_tape("\n".join(lines))
        assert info.value.line_number == 3
        assert info.value.partial.material(125).file(1).mts == [451]

    def test_partial_result(self, two_material_text: str) -> None:
        truncated = "\n".join(two_material_text.splitlines()[:-4])
        with pytest.raises(DecodeError) as info:
            read_tape(truncated)
        partial = info.value.partial
        assert [m.mat for m in partial.materials] == [125, 9437]
        open_section = partial.material(9437).section(3, 1)
        assert len(open_section.lines) == len(open_section.records) > 0

    def test_partial_while_iterating(self, two_material_text: str) -> None:
        truncated = "\n".join(two_material_text.splitlines()[:-4])
        seen = []
        with pytest.raises(UnterminatedSection) as info:
            for material in iter_materials(truncated):
                seen.append(material.mat)
        assert seen == [125]
        assert [m.mat for m in info.value.partial.materials] == [9437]


class TestSentinelsAndAnomalies:
    def test_stray_sentinels_skipped(self, tape_builder, caplog) -> None:
        tape_builder.mend()
        tape_builder.section(125, 1, 451).send()
        tape_builder.text(" a").send().fend().fend().mend().tend()
        with caplog.at_level(logging.WARNING, logger="pyendf.readers.tape"):
            tape = read_tape(tape_builder.build())
        assert tape.material(125).file(1).mts == [451]
        assert len([r for r in caplog.records if "skipped" in r.getMessage()]) == 3

    def test_out_of_order_sections(self, tape_builder, caplog) -> None:
        tape_builder.section(125, 3, 2).text(" b").send()
        tape_builder.section(125, 3, 1).text(" a").send().fend().mend().tend()
        with caplog.at_level(logging.WARNING):
            tape = read_tape(tape_builder.build())
        assert tape.material(125).file(3).mts == [2, 1]
        assert len(tape.anomalies) == 1
        anomaly = tape.anomalies[0]
        assert isinstance(anomaly, OutOfOrderSection)
        assert (anomaly.level, anomaly.previous, anomaly.found) == ("section", 2, 1)
        assert "Out-of-order" in caplog.text

    def test_out_of_order_files_and_materials(self, tape_builder) -> None:
        tape_builder.section(128, 3, 1).text(" a").send().fend()
        tape_builder.section(128, 1, 451).text(" b").send().fend().mend()
        tape_builder.section(125, 1, 451).text(" c").send().fend().mend().tend()
        tape = read_tape(tape_builder.build())
        assert [a.level for a in tape.anomalies] == ["file", "material"]
        assert [m.mat for m in tape.materials] == [128, 125]

    def test_strict_raises(self, tape_builder) -> None:
        tape_builder.section(125, 3, 2).text(" b").send()
        tape_builder.section(125, 3, 1).text(" a").send().fend().mend().tend()
        with pytest.raises(OutOfOrderSection) as info:
            read_tape(tape_builder.build(), strict=True)
        assert info.value.partial.material(125).file(3).mts == [2]

    def test_sequence_number_warning(self, make_line, caplog) -> None:
        lines = [
            make_line(" a", 125, 1, 451, 2),
            make_line(" b", 125, 1, 451, 1),
            make_line("", 125, 1, 0, 99999),
            make_line("", 125, 0, 0, 0),
            make_line("", 0, 0, 0, 0),
        ]
        with caplog.at_level(logging.WARNING):
            tape = read_tape("\n".join(lines))
        assert len(tape.material(125).section(1, 451).lines) == 2
        assert "sequence number" in caplog.text


class TestIterMaterials:
    def test_lazy(self, two_material_text: str) -> None:
        reader = TapeReader(two_material_text)
        materials = reader.iter_materials()
        first = next(materials)
        assert first.mat == 125
        assert reader.tape.materials == []
        assert [m.mat for m in materials] == [9437]

    def test_repeatable_for_text(self, two_material_text: str) -> None:
        reader = TapeReader(two_material_text)
        assert len(list(reader.iter_materials())) == 2
        assert len(list(reader.iter_materials())) == 2


class TestIndex:
    def test_ranges(self, sample_tape_text: str) -> None:
        index = index_tape(sample_tape_text)
        assert [(e.mat, e.mf) for e in index.files] == [(9437, 1), (9437, 3)]
        assert len(index.materials) == 1
        lines = list(iter_lines(sample_tape_text))
        material = index.materials[0]
        assert material.start == 1
        assert lines[material.stop - 1].is_material_end
        first = index.files[0]
        assert lines[first.stop - 1].is_file_end
        assert first.n_lines == 11 + 2

    def test_read_file_range(self, sample_tape_text: str) -> None:
        lines = list(iter_lines(sample_tape_text))
        index = index_tape(lines)
        xs = read_file_range(lines, index.files_of(9437)[1], layouts={(3, 1): xs_layout})
        assert (xs.mat, xs.mf) == (9437, 3)
        assert xs.mts == [1, 2]
        assert isinstance(xs.section(1).records[1], Tab1Record)

    def test_files_match_full_decode(self, two_material_text: str) -> None:
        lines = list(iter_lines(two_material_text))
        tape = read_tape(lines)
        index = index_tape(lines)
        decoded = [read_file_range(lines, entry) for entry in index.files]
        expected = [f for m in tape.materials for f in m.files]
        assert [(f.mat, f.mf, f.mts) for f in decoded] == [
            (f.mat, f.mf, f.mts) for f in expected
        ]

    def test_material_entry_rejected(self, sample_tape_text: str) -> None:
        lines = list(iter_lines(sample_tape_text))
        index = index_tape(lines)
        with pytest.raises(ValueError):
            read_file_range(lines, index.materials[0])

    def test_range_without_file_end(self, sample_tape_text: str) -> None:
        lines = list(iter_lines(sample_tape_text))
        entry = index_tape(lines).files[0]
        short = type(entry)(entry.mat, entry.mf, entry.start, entry.stop - 1)
        with pytest.raises(UnterminatedFile):
            read_file_range(lines, short)
