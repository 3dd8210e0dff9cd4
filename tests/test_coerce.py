from __future__ import annotations

import pytest

from highlights.coerce import FALLBACK_LIMIT, coerce_to_string_list, normalize_item


class TestNormalizeItem:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1. Landed on the moon", "Landed on the moon"),
            ("12.First transatlantic cable", "First transatlantic cable"),
            ("- Cured a disease", "Cured a disease"),
            ("• Bullet point", "Bullet point"),
            ("  padded  ", "padded"),
            ("No marker at all", "No marker at all"),
        ],
    )
    def test_strips_one_marker_and_whitespace(self, raw: str, expected: str) -> None:
        assert normalize_item(raw) == expected

    def test_only_the_first_marker_is_removed(self) -> None:
        assert normalize_item("1. 2. nested") == "2. nested"

    def test_hyphen_inside_text_is_kept(self) -> None:
        assert normalize_item("Trans-Siberian railway opens") == "Trans-Siberian railway opens"


class TestStrictJson:
    def test_plain_array(self) -> None:
        assert coerce_to_string_list('["A","B"]') == ["A", "B"]

    def test_non_string_elements_dropped(self) -> None:
        assert coerce_to_string_list('["A", 1, null, {"x": 2}, "B"]') == ["A", "B"]

    def test_array_entries_are_normalized(self) -> None:
        assert coerce_to_string_list('["1. First", "- Second"]') == ["First", "Second"]

    def test_array_without_strings_is_empty(self) -> None:
        assert coerce_to_string_list("[1, 2, 3]") == []

    def test_json_object_is_not_an_array(self) -> None:
        # an object falls through to the line-split path
        assert coerce_to_string_list('{"a": 1}') == ['{"a": 1}']


class TestEmbeddedArray:
    def test_prose_around_array(self) -> None:
        text = 'Intro: ["1. Landed on the moon", "- Cured a disease"]'
        assert coerce_to_string_list(text) == ["Landed on the moon", "Cured a disease"]

    def test_code_fenced_array(self) -> None:
        text = '```json\n["Telephone patented", "Custer defeated at Little Bighorn"]\n```'
        assert coerce_to_string_list(text) == [
            "Telephone patented",
            "Custer defeated at Little Bighorn",
        ]

    def test_unparseable_brackets_fall_back_to_lines(self) -> None:
        text = "Highlights [see below]\n- Treaty signed\n- Bridge opened"
        assert coerce_to_string_list(text) == [
            "Highlights [see below]",
            "Treaty signed",
            "Bridge opened",
        ]


class TestLineSplitFallback:
    def test_numbered_lines(self) -> None:
        assert coerce_to_string_list("1. First\n2. Second\n3. Third") == [
            "First",
            "Second",
            "Third",
        ]

    def test_bullets_dashes_and_crlf(self) -> None:
        text = "• Alpha\r\n• Beta - Gamma\r\n\r\n"
        assert coerce_to_string_list(text) == ["Alpha", "Beta", "Gamma"]

    def test_blank_fragments_dropped(self) -> None:
        assert coerce_to_string_list("\n\n  \n1.\nOnly one\n") == ["Only one"]

    def test_capped_before_final_truncation(self) -> None:
        text = "\n".join(f"Event {i}" for i in range(25))
        items = coerce_to_string_list(text)
        assert len(items) == FALLBACK_LIMIT
        assert items[0] == "Event 0"

    def test_empty_text(self) -> None:
        assert coerce_to_string_list("   ") == []
