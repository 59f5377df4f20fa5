"""Tests for resource listing lines and overflow pagination."""

import logging

import pytest

from md2tg.compose import ResourceEntry, format_resource_lines, paginate_resources, rendered_length
from md2tg.options import ComposeOptions
from md2tg.renderers import to_formatted_text


def _groups(count: int) -> dict:
    return {"Sub Group": [ResourceEntry(f"{n:02d}", f"https://t.me/c/100/{n}") for n in range(1, count + 1)]}


@pytest.mark.unit
class TestFormatResourceLines:
    """Tests for the quoted listing lines."""

    def test_header_and_sorted_entries(self):
        lines = format_resource_lines({"Sub Group": [ResourceEntry("2"), ResourceEntry("1", "https://t.me/c/1/5")]})
        assert lines == ["> **#SubGroup**", "> [1](https://t.me/c/1/5)", "> 2"]

    def test_group_without_tag_characters_keeps_its_name(self):
        lines = format_resource_lines({"[*]": [ResourceEntry("1")]})
        assert lines[0] == "> **\\[\\*\\]**"

    def test_empty_groups_are_skipped(self):
        assert format_resource_lines({"Empty": [], "Subs": [ResourceEntry("1")]}) == ["> **#Subs**", "> 1"]
        assert format_resource_lines({}) == []

    def test_groups_keep_mapping_order(self):
        lines = format_resource_lines({"Zeta": [ResourceEntry("1")], "Alpha": [ResourceEntry("1")]})
        assert lines[0] == "> **#Zeta**"
        assert lines[2] == "> **#Alpha**"

    def test_label_is_escaped(self):
        assert format_resource_lines({"G": [ResourceEntry("01 [v2]")]})[1] == "> 01 \\[v2\\]"
        linked = format_resource_lines({"G": [ResourceEntry("[v2]", "https://x.org")]})
        assert linked[1] == "> [\\[v2\\]](https://x.org)"

    def test_plain_label_does_not_open_a_list(self):
        line = format_resource_lines({"G": [ResourceEntry("1. Pilot")]})[1]
        assert line == "> 1\\. Pilot"
        assert to_formatted_text(line).text == "1. Pilot"

    def test_rendered_listing(self):
        lines = format_resource_lines({"Sub Group": [ResourceEntry("01", "https://t.me/c/1/5"), ResourceEntry("02")]})
        formatted = to_formatted_text("\n".join(lines))
        assert formatted.text == "#SubGroup\n01\n02"
        kinds = [entity.type.kind for entity in formatted.entities]
        assert "block_quote" in kinds
        assert "bold" in kinds
        assert "text_url" in kinds


@pytest.mark.unit
class TestPaginateResources:
    """Tests for greedy packing into overflow pages."""

    def test_no_entries(self):
        assert paginate_resources({}, 4096) == []
        assert paginate_resources({"Empty": []}, 4096) == []

    def test_single_page_has_no_footer(self):
        pages = paginate_resources(_groups(3), 4096, header="Title\nResources:")
        assert len(pages) == 1
        assert pages[0].startswith("Title\nResources:\n> **#SubGroup**")
        assert "page 1/1" not in pages[0]

    def test_pages_are_filled_before_a_new_one_starts(self):
        # "#SubGroup" is 9 long and every entry adds 3, so 37 entries fill 120
        groups = _groups(40)
        lines = format_resource_lines(groups)
        pages = paginate_resources(groups, 120)
        assert pages == [
            "\n".join(lines[:38]),
            "\n".join(lines[38:]) + "\n\n« previous page | page 2/2",
        ]
        assert rendered_length(pages[0]) == 120

    def test_pages_fit_the_budget(self):
        pages = paginate_resources(_groups(40), 60)
        assert len(pages) > 1
        for page in pages:
            assert rendered_length(page) <= 60

    def test_every_line_appears_once_in_order(self):
        groups = _groups(30)
        pages = paginate_resources(groups, 40)
        assert len(pages) > 1
        expected = format_resource_lines(groups)
        found = [line for page in pages for line in page.split("\n") if line.startswith(">")]
        assert found == expected

    def test_exact_fit_is_one_page(self):
        groups = _groups(6)
        lines = format_resource_lines(groups)
        budget = rendered_length("\n".join(lines))
        assert paginate_resources(groups, budget) == ["\n".join(lines)]
        assert len(paginate_resources(groups, budget - 1)) > 1

    def test_header_on_every_page(self):
        pages = paginate_resources(_groups(30), 60, header="Frieren\nResources:")
        assert len(pages) > 1
        assert all(page.startswith("Frieren\nResources:\n> ") for page in pages)

    def test_footers_only_where_they_fit(self):
        entries = [
            ResourceEntry("01 " + "x" * 55),
            ResourceEntry("02"),
            ResourceEntry("03"),
            ResourceEntry("04 " + "x" * 55),
        ]
        pages = paginate_resources({"G": entries}, 61)
        assert pages == [
            "> **#G**\n> 01 " + "x" * 55,
            "> 02\n> 03\n\n« previous page | page 2/3 | next page »",
            "> 04 " + "x" * 55,
        ]

    def test_first_page_footer(self):
        groups = {"G": [ResourceEntry("01"), ResourceEntry("02 " + "x" * 55), ResourceEntry("03")]}
        pages = paginate_resources(groups, 58)
        assert pages == [
            "> **#G**\n> 01\n\npage 1/3 | next page »",
            "> 02 " + "x" * 55,
            "> 03\n\n« previous page | page 3/3",
        ]

    def test_footer_labels_from_options(self):
        options = ComposeOptions(
            primary_budget=120,
            overflow_budget=120,
            previous_page_label="<<",
            next_page_label=">>",
            page_number_format="{current} of {total}",
            footer_separator=" ",
        )
        pages = paginate_resources(_groups(40), 120, options=options)
        assert pages[-1].endswith("\n\n\\<\\< 2 of 2")
        assert to_formatted_text(pages[-1]).text.endswith("<< 2 of 2")

    def test_footer_omitted_when_it_does_not_fit(self):
        groups = _groups(2)
        lines = format_resource_lines(groups)
        pages = paginate_resources(groups, rendered_length(lines[0] + "\n" + lines[1]))
        assert pages == ["\n".join(lines[:2]), lines[2]]

    def test_group_header_moves_to_its_entries(self):
        groups = {"A": [ResourceEntry("01")], "B": [ResourceEntry("01"), ResourceEntry("02")]}
        pages = paginate_resources(groups, 8)
        assert pages == ["> **#A**\n> 01", "> **#B**\n> 01\n> 02"]

    def test_oversized_line_gets_its_own_page(self, caplog):
        groups = {"G": [ResourceEntry("01"), ResourceEntry("02 " + "x" * 300), ResourceEntry("03")]}
        with caplog.at_level(logging.WARNING, logger="md2tg"):
            pages = paginate_resources(groups, 100)
        bodies = [page.split("\n\n")[0] for page in pages]
        assert bodies == ["> **#G**\n> 01", "> 02 " + "x" * 300, "> 03"]
        assert "exceeds the overflow budget" in caplog.text
