"""Tests for the budget-fitting page composer."""

import logging

import pytest

from md2tg.compose import (
    AnimeDocument,
    PageComposer,
    ResourceEntry,
    compose,
    fit_primary_page,
    rendered_length,
)
from md2tg.exceptions import InvalidOptionsError, ValidationError
from md2tg.options import ComposeOptions
from md2tg.renderers import to_formatted_text

LONG_SUMMARY = " ".join(f"word{n}" for n in range(300))


def _many_resources(count: int = 80) -> dict:
    return {"Sub Group": [ResourceEntry(f"{n:02d}", f"https://t.me/c/100/{n}") for n in range(1, count + 1)]}


@pytest.mark.unit
class TestPrimaryPageLayout:
    """Tests for the Markdown layout of the primary page."""

    def test_full_page(self, sample_document):
        page = PageComposer().build_primary_page(sample_document, 250)
        assert page == (
            "\\#2023年10月 Frieren: Beyond Journey's End\n"
            "> **Localized name**: 葬送のフリーレン\n"
            "> **Episodes**: 28\n"
            "> **Air day**: unknown\n"
            "> **Score**: [9.1](https://example.com/stats)\n"
            "\n"
            "Summary:\n"
            ">> An elf mage outlives her companions.\n"
            ">> She sets out to understand humans.\n"
            "\n"
            "Resources:\n"
            "> **#SubGroup**\n"
            "> [01](https://t.me/c/100/1)\n"
            "> [02](https://t.me/c/100/2)\n"
            "> **#OtherSubs**\n"
            "> 01\n"
            "\n"
            "Tags:\n"
            ">> \\#Fantasy \\#Adventure"
        )

    def test_rendered_page(self, sample_document):
        formatted = to_formatted_text(PageComposer().build_primary_page(sample_document, 250))
        assert formatted.text.startswith("#2023年10月 Frieren: Beyond Journey's End\nLocalized name: 葬送のフリーレン\n")
        assert "\n\nSummary:\nAn elf mage outlives her companions.\nShe sets out" in formatted.text
        assert formatted.text.endswith("Tags:\n#Fantasy #Adventure")
        urls = [entity.type.url for entity in formatted.entities if entity.type.kind == "text_url"]
        assert urls == ["https://example.com/stats", "https://t.me/c/100/1", "https://t.me/c/100/2"]

    def test_title_is_escaped(self):
        page = PageComposer().build_primary_page(AnimeDocument(title="*Kiss* x Sis"), 250)
        assert page == "\\*Kiss\\* x Sis"
        assert to_formatted_text(page).text == "*Kiss* x Sis"

    @pytest.mark.parametrize("title", ["---", "3) Foo", "1. Pilot", "- Side Story", "+ Extra", "==="])
    def test_title_with_block_syntax_is_kept(self, title):
        page = compose(AnimeDocument(title=title))[0]
        assert to_formatted_text(page).text == title

    def test_summary_lines_with_block_syntax_are_kept(self):
        doc = AnimeDocument(title="Show", summary="line one\n---\n- x\n1) y\n=")
        formatted = to_formatted_text(compose(doc)[0])
        assert formatted.text.endswith("Summary:\nline one\n---\n- x\n1) y\n=")

    def test_nsfw_tag(self):
        page = PageComposer().build_primary_page(AnimeDocument(title="Show", nsfw=True, title_tag="Spring"), 250)
        assert page == "\\#Spring \\#NSFW Show"

    def test_custom_labels(self):
        options = ComposeOptions(summary_label="Synopsis", tags_label="Genres", unknown_value="?")
        doc = AnimeDocument(title="Show", fields={"Studio": ""}, summary="Short.", tags=["Drama"])
        page = PageComposer(options).build_primary_page(doc, 250)
        assert page == "Show\n> **Studio**: ?\n\nSynopsis:\n>> Short.\n\nGenres:\n>> \\#Drama"

    def test_truncated_summary_links_to_details(self):
        doc = AnimeDocument(title="Show", summary=LONG_SUMMARY, summary_detail_url="https://example.com/s/1")
        page = PageComposer().build_primary_page(doc, 100)
        assert page.endswith("[...more](https://example.com/s/1)")
        formatted = to_formatted_text(page)
        link = [entity for entity in formatted.entities if entity.type.kind == "text_url"][-1]
        assert formatted.entity_text(link) == "...more"

    def test_truncated_summary_without_link(self):
        doc = AnimeDocument(title="Show", summary=LONG_SUMMARY)
        page = PageComposer().build_primary_page(doc, 100)
        summary_line = page.split("\n")[-1]
        assert summary_line.startswith(">> word0 word1")
        assert summary_line.endswith("...more")
        assert len(summary_line) <= len(">> ") + 100 + len("...more")

    def test_summary_not_truncated_has_no_read_more(self, sample_document):
        page = PageComposer().build_primary_page(sample_document, 250)
        assert "...more" not in page

    def test_without_resources(self, sample_document):
        page = PageComposer().build_primary_page(sample_document, 250, include_resources=False)
        assert "Resources:" not in page
        assert "Tags:" in page

    def test_resource_page_header(self, sample_document):
        assert PageComposer().resource_page_header(sample_document) == "Frieren: Beyond Journey's End\nResources:"
        options = ComposeOptions(resource_page_header="Downloads")
        assert PageComposer(options).resource_page_header(sample_document) == "Downloads"

    def test_rejects_foreign_options(self):
        with pytest.raises(InvalidOptionsError):
            PageComposer(options={"primary_budget": 10})


@pytest.mark.unit
class TestFitPrimaryPage:
    """Tests for the degradation ladder."""

    def test_first_rung_fits(self, sample_document):
        fit = fit_primary_page(sample_document)
        assert fit.fits
        assert fit.summary_length == 250
        assert fit.resources_inline
        assert fit.rendered_length == rendered_length(fit.page)

    def test_shorter_summary_rung(self):
        doc = AnimeDocument(title="Show", summary=LONG_SUMMARY)
        composer = PageComposer()
        budget = rendered_length(composer.build_primary_page(doc, 200))
        fit = fit_primary_page(doc, ComposeOptions(primary_budget=budget))
        assert fit.fits
        assert fit.summary_length == 200
        assert fit.rendered_length <= budget

    def test_floor_without_resources(self):
        doc = AnimeDocument(title="Show", summary=LONG_SUMMARY, resource_groups=_many_resources())
        budget = rendered_length(PageComposer().build_primary_page(doc, 100, include_resources=False))
        fit = fit_primary_page(doc, ComposeOptions(primary_budget=budget))
        assert fit.fits
        assert fit.summary_length == 100
        assert not fit.resources_inline
        assert "Resources:" not in fit.page

    def test_nothing_fits(self, caplog):
        doc = AnimeDocument(title="Show " * 220, resource_groups=_many_resources(3))
        with caplog.at_level(logging.WARNING, logger="md2tg"):
            fit = fit_primary_page(doc)
        assert not fit.fits
        assert fit.page
        assert not fit.resources_inline
        assert fit.rendered_length > 1024
        assert "over the budget" in caplog.text

    def test_identical_rungs_are_measured_once(self, caplog):
        doc = AnimeDocument(title="x" * 1100, summary="Short.")
        with caplog.at_level(logging.DEBUG, logger="md2tg.compose.composer"):
            fit = fit_primary_page(doc)
        assert not fit.fits
        assert fit.summary_length == 250
        assert caplog.text.count("with summary length") == 1

    def test_unfitting_page_without_resources_is_measured_once_per_rung(self, caplog):
        doc = AnimeDocument(title="Show", summary=LONG_SUMMARY)
        with caplog.at_level(logging.DEBUG, logger="md2tg.compose.composer"):
            fit = fit_primary_page(doc, ComposeOptions(primary_budget=20))
        assert not fit.fits
        assert fit.summary_length == 100
        assert not fit.resources_inline
        assert fit.rendered_length == rendered_length(fit.page)
        assert caplog.text.count("with summary length") == 5
        assert "over the budget" in caplog.text

    def test_custom_ladder(self):
        doc = AnimeDocument(title="Show", summary=LONG_SUMMARY)
        options = ComposeOptions(primary_budget=60, summary_lengths=(40, 20))
        fit = fit_primary_page(doc, options)
        assert fit.summary_length in (40, 20)
        assert fit.fits == (fit.rendered_length <= 60)


@pytest.mark.unit
class TestCompose:
    """Tests for composing primary and overflow pages."""

    def test_single_page(self, sample_document):
        pages = compose(sample_document)
        assert len(pages) == 1
        assert "Resources:" in pages[0]

    def test_overflow_pages(self):
        doc = AnimeDocument(title="Show", summary=LONG_SUMMARY, resource_groups=_many_resources(400))
        pages = compose(doc, primary_budget=600, overflow_budget=1000)
        assert len(pages) > 2
        assert "Resources:" not in pages[0]
        assert rendered_length(pages[0]) <= 600
        for page in pages[1:]:
            assert page.startswith("Show\nResources:\n> ")
            assert rendered_length(page) <= 1000

    def test_overflow_pages_carry_every_entry(self):
        doc = AnimeDocument(title="Show", summary=LONG_SUMMARY, resource_groups=_many_resources(400))
        pages = compose(doc, primary_budget=600, overflow_budget=1000)
        text = "".join(to_formatted_text(page).text for page in pages[1:])
        for n in (1, 200, 400):
            assert f"{n:02d}" in text

    def test_oversized_minimal_page_is_still_sent(self):
        pages = compose(AnimeDocument(title="y" * 1100))
        assert pages == ["y" * 1100]

    def test_budget_overrides(self, sample_document):
        assert compose(sample_document, primary_budget=2000, overflow_budget=2000)

    def test_primary_budget_over_overflow_budget(self, sample_document):
        with pytest.raises(ValidationError):
            compose(sample_document, primary_budget=5000)

    def test_non_positive_budget(self, sample_document):
        with pytest.raises(ValidationError):
            compose(sample_document, overflow_budget=0)

    def test_invalid_options_type(self, sample_document):
        with pytest.raises(InvalidOptionsError):
            compose(sample_document, options="compact")
