"""Tests for canvas filenames and identifiers."""

from datetime import date

import pytest

from filenames import generate_canvas_path, sanitize_filename, to_safe_filename
from ids import generate_cr_id, new_canvas_id, sequential_ids, validate_cr_id


class TestFilenames:

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Root to Gen 3", "root-to-gen-3"),
            ("Paternal Line (John Smith)", "paternal-line-john-smith"),
            ("  Gen 4-7  ", "gen-4-7"),
            ("Émile's line", "mile-s-line"),
        ],
    )
    def test_sanitize_filename(self, name, expected):
        assert sanitize_filename(name) == expected

    def test_to_safe_filename(self):
        assert to_safe_filename('Smith: "Line" / 1') == "smith-line-1"

    def test_default_pattern(self):
        assert generate_canvas_path("Trees", "{name}", "Gen 2", "generation") == "Trees/gen-2.canvas"

    def test_all_placeholders(self):
        path = generate_canvas_path("", "{date} {type} {name}", "Smith", "paternal", date(2024, 1, 5))
        assert path == "2024-01-05 paternal smith.canvas"

    def test_extension_not_doubled(self):
        assert generate_canvas_path("out/", "{name}.canvas", "Root", "generation") == "out/root.canvas"

    def test_empty_pattern_falls_back_to_name(self):
        assert generate_canvas_path("", "", "Root", "generation") == "root.canvas"


class TestIds:

    def test_sequential_ids(self):
        next_id = sequential_ids("edge")
        assert [next_id(), next_id(), next_id()] == ["edge-1", "edge-2", "edge-3"]

    def test_sequential_generators_are_independent(self):
        first, second = sequential_ids(), sequential_ids()
        first()
        assert second() == "id-1"

    def test_canvas_ids_unique(self):
        assert len({new_canvas_id() for _ in range(50)}) == 50

    def test_generated_cr_id_is_valid(self):
        for _ in range(20):
            assert validate_cr_id(generate_cr_id())

    @pytest.mark.parametrize("cr_id", ["abc-123-def", "ABC-123-def-456", "abc-12a-def-456", ""])
    def test_invalid_cr_ids(self, cr_id):
        assert not validate_cr_id(cr_id)
