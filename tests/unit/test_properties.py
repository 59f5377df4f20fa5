"""Property-based tests for conversion and composition."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from md2tg.ast import BlockQuote, Code, Document, Emphasis, Link, Paragraph, Strikethrough, Strong, Text
from md2tg.compose import ResourceEntry, paginate_resources, rendered_length
from md2tg.renderers import convert, to_formatted_text
from md2tg.utils import escape_markdown, truncate_utf16, utf16_len

MARKDOWN_ALPHABET = st.sampled_from(list("ab 😀é\n*_~`[]()>#-1.\\<!"))
markdown_text = st.text(alphabet=MARKDOWN_ALPHABET, max_size=80)

inline_text = st.text(alphabet=st.sampled_from(list("abc 😀")), min_size=1, max_size=6).map(lambda s: Text(content=s))
urls = st.sampled_from(["https://example.com", "example.com", "tg://user?id=42", "tg://user?id=x", "", "not a url"])

inline_nodes = st.recursive(
    inline_text | st.builds(Code, content=st.text(alphabet="xyz😀", min_size=1, max_size=4)),
    lambda children: st.one_of(
        st.builds(Strong, content=st.lists(children, min_size=1, max_size=3)),
        st.builds(Emphasis, content=st.lists(children, min_size=1, max_size=3)),
        st.builds(Strikethrough, content=st.lists(children, min_size=1, max_size=3)),
        st.builds(Link, url=urls, content=st.lists(children, min_size=1, max_size=3)),
    ),
    max_leaves=10,
)
paragraphs = st.lists(inline_nodes, min_size=1, max_size=4).map(lambda content: Paragraph(content=content))
blocks = st.recursive(
    paragraphs,
    lambda children: st.lists(children, min_size=1, max_size=3).map(lambda nested: BlockQuote(children=nested)),
    max_leaves=6,
)
documents = st.lists(blocks, max_size=4).map(lambda children: Document(children=children))


def _assert_entities_valid(formatted):
    total = utf16_len(formatted.text)
    for entity in formatted.entities:
        assert entity.offset >= 0
        assert entity.length > 0
        assert entity.offset + entity.length <= total


@pytest.mark.unit
class TestConversionProperties:
    """Properties that hold for any input."""

    @given(markdown_text)
    def test_entities_within_text(self, markdown):
        _assert_entities_valid(to_formatted_text(markdown))

    @given(markdown_text)
    def test_deterministic(self, markdown):
        assert to_formatted_text(markdown).to_dict() == to_formatted_text(markdown).to_dict()

    @given(documents)
    def test_random_trees(self, tree):
        _assert_entities_valid(convert(tree))

    @given(
        st.lists(
            st.text(alphabet=st.sampled_from(list("abcXYZ*_~[]#<>`-+)=12.")), min_size=1, max_size=12),
            min_size=1,
            max_size=4,
        ).map("\n".join)
    )
    def test_escaped_text_renders_literally(self, text):
        assert to_formatted_text(escape_markdown(text)).text == text


@pytest.mark.unit
class TestMeasurementProperties:
    """Properties of UTF-16 measurement and pagination."""

    @given(st.text(max_size=50), st.integers(min_value=0, max_value=60))
    def test_truncate_is_bounded_prefix(self, text, limit):
        truncated = truncate_utf16(text, limit)
        assert text.startswith(truncated)
        assert utf16_len(truncated) <= limit

    @given(
        st.lists(st.from_regex(r"[0-9]{1,3}(v2)?", fullmatch=True), min_size=1, max_size=60),
        st.integers(min_value=60, max_value=400),
    )
    def test_pages_fit_budget(self, labels, budget):
        groups = {"Subs": [ResourceEntry(label, "https://t.me/c/1/2") for label in labels]}
        for page in paginate_resources(groups, budget):
            assert rendered_length(page) <= budget
