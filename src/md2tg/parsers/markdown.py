#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/parsers/markdown.py
"""Markdown to AST converter.

This module parses Markdown with mistune and builds the md2tg syntax tree the
entity renderer walks.

mistune does not report source line numbers, but the entity renderer needs
them to reproduce blank lines between blocks. The block parser used here
records how many blank lines each blank run contains, and the converter
assigns every block a synthetic line position so that the distance between
two sibling blocks is one plus the number of blank lines separating them.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

import mistune
from mistune.helpers import parse_link as parse_link_destination
from mistune.helpers import parse_link_href
from mistune.plugins import import_plugin

from md2tg.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    GenericNode,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SourcePosition,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
)
from md2tg.exceptions import ParsingError

logger = logging.getLogger(__name__)


class CountingBlockParser(mistune.BlockParser):
    """mistune block parser that keeps the size of blank-line runs.

    The stock parser emits a bare ``blank_line`` token; this one adds
    ``attrs["lines"]`` with the number of blank lines matched.
    """

    def parse_blank_line(self, m: Any, state: Any) -> int:
        """Record a run of blank lines."""
        state.append_token({"type": "blank_line", "attrs": {"lines": max(1, m.group(0).count("\n"))}})
        return m.end()


class SourceKeepingInlineParser(mistune.InlineParser):
    """mistune inline parser that keeps the destination of inline links as written.

    mistune percent-escapes link targets; link tokens parsed here also carry
    ``attrs["raw_url"]``, the destination exactly as it appears in the source
    (angle brackets included).
    """

    def parse_link(self, m: Any, state: Any) -> Optional[int]:
        """Parse a link and record its raw destination."""
        count = len(state.tokens)
        end = super().parse_link(m, state)
        if end is None or len(state.tokens) <= count:
            return end
        token = state.tokens[-1]
        if token.get("type") == "link" and isinstance(token.get("attrs"), dict):
            raw_url = _raw_destination(state.src, m.end(), end)
            if raw_url is not None:
                token["attrs"]["raw_url"] = raw_url
        return end


def _raw_destination(src: str, start: int, end: int) -> Optional[str]:
    """Return the destination of the inline link ``src[start:end]`` ends with."""
    index = src.find("](", start, end)
    while index != -1:
        href_start = index + 2
        _attrs, link_end = parse_link_destination(src, href_start)
        if link_end == end:
            _href, href_end = parse_link_href(src, href_start)
            if href_end is not None:
                return src[href_start:href_end].strip()
        index = src.find("](", index + 1, end)
    return None


def _create_markdown() -> mistune.Markdown:
    return mistune.Markdown(
        renderer=None,
        block=CountingBlockParser(),
        inline=SourceKeepingInlineParser(),
        plugins=[import_plugin("strikethrough")],
    )


class MarkdownToAstConverter:
    r"""Convert Markdown to AST representation.

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\\n\\nThis is **bold**.")
        >>> [type(child).__name__ for child in doc.children]
        ['Heading', 'Paragraph']

    """

    def parse(self, markdown_content: str) -> Document:
        """Parse Markdown into an AST Document.

        Parameters
        ----------
        markdown_content : str
            Markdown text

        Returns
        -------
        Document
            AST document; the raw Markdown is kept in ``metadata["source"]``

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        if not isinstance(markdown_content, str):
            raise ParsingError(
                f"Markdown input must be str, got {type(markdown_content).__name__}", parsing_stage="input"
            )

        markdown = _create_markdown()
        try:
            tokens, _state = markdown.parse(markdown_content)
        except Exception as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="tokenize", original_error=e) from e

        try:
            children = self._process_tokens(tokens) if isinstance(tokens, list) else []
        except (RecursionError, AttributeError, TypeError, ValueError) as e:
            raise ParsingError(f"Failed to build AST: {e}", parsing_stage="ast", original_error=e) from e
        return Document(children=children, metadata={"source": markdown_content})

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process the block tokens of one container, assigning line positions.

        Parameters
        ----------
        tokens : list of dict
            Mistune token dictionaries

        Returns
        -------
        list of Node
            Block nodes, each with a synthetic ``SourcePosition``

        """
        nodes: list[Node] = []
        line = 1

        for token in tokens:
            if token.get("type") == "blank_line":
                attrs = token.get("attrs") or {}
                line += attrs.get("lines", 1)
                continue

            node = self._process_token(token)
            if node is None:
                continue
            node.position = SourcePosition(start_line=line, end_line=line)
            nodes.append(node)
            line += 1

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Optional[Node]:
        """Process a single block token into an AST node."""
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=_strip_final_newline(token.get("raw", "")))

        children = token.get("children")
        if isinstance(children, list):
            logger.debug("Keeping unsupported block token %r as a generic container", token_type)
            return GenericNode(node_type=token_type, children=self._process_tokens(children), block=True)
        if "raw" in token:
            return GenericNode(node_type=token_type, value=str(token["raw"]), block=True)
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1
        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process a fenced or indented code block.

        The language is the first word of the fence info string.
        """
        attrs = token.get("attrs") or {}
        info_string = (attrs.get("info") or "").strip()
        language = info_string.split(maxsplit=1)[0] if info_string else None
        metadata: dict[str, Any] = {"info_string": info_string} if info_string else {}
        return CodeBlock(
            content=_strip_final_newline(token.get("raw", "")), language=language or None, metadata=metadata
        )

    def _process_list(self, token: dict[str, Any]) -> List:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        bullet = token.get("bullet") if not ordered else None

        children = token.get("children", [])
        if not isinstance(children, list):
            children = []

        items = [
            ListItem(children=self._process_tokens(child.get("children", [])))
            for child in children
            if isinstance(child, dict) and child.get("type") == "list_item"
        ]
        return List(
            ordered=ordered,
            items=items,
            start=start if isinstance(start, int) else 1,
            bullet=bullet if bullet in ("-", "*", "+") else None,
        )

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: Any) -> list[Node]:
        """Process inline tokens into inline nodes."""
        if not isinstance(tokens, list):
            return []

        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        raw_url = attrs.get("raw_url")
        return Link(
            url=attrs.get("url", ""),
            content=self._process_inline_tokens(token.get("children", [])),
            title=attrs.get("title", None),
            metadata={"raw_url": raw_url} if isinstance(raw_url, str) else {},
        )

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        # Alt text is in children, not attrs
        alt_parts = [
            child.get("raw", "")
            for child in token.get("children", []) or []
            if isinstance(child, dict) and child.get("type") == "text"
        ]
        return Image(url=attrs.get("url", ""), alt_text="".join(alt_parts), title=attrs.get("title", None))

    def _process_inline_token(self, token: dict[str, Any]) -> Optional[Node]:
        """Process a single inline token."""
        token_type = token.get("type", "")

        if token_type == "text":
            return Text(content=token.get("raw", ""))
        elif token_type == "strong":
            return Strong(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "emphasis":
            return Emphasis(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "strikethrough":
            return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "codespan":
            return Code(content=token.get("raw", ""))
        elif token_type == "link":
            return self._handle_link_token(token)
        elif token_type == "image":
            return self._handle_image_token(token)
        elif token_type == "linebreak":
            return LineBreak(soft=False)
        elif token_type == "softbreak":
            return LineBreak(soft=True)
        elif token_type == "inline_html":
            return HTMLInline(content=token.get("raw", ""))

        if isinstance(token.get("children"), list):
            return GenericNode(node_type=token_type, children=self._process_inline_tokens(token["children"]))
        if "raw" in token:
            return GenericNode(node_type=token_type, value=str(token["raw"]))
        return None


def _strip_final_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


def markdown_to_ast(markdown_content: str) -> Document:
    r"""Convert Markdown string to AST.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownToAstConverter().parse(markdown_content)
