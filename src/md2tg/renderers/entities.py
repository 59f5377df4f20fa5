#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/renderers/entities.py
"""Telegram formatted text rendering from AST.

This module provides the EntityRenderer class which converts AST nodes into
a :class:`~md2tg.entities.FormattedText`: the visible plain text plus a flat
list of entities (bold, italic, links, quotes, code) addressed by UTF-16
offset and length.

Every ``visit_*`` method returns a fresh ``FormattedText`` for its node.
Containers concatenate the results of their children with ``+``, which
re-emits each child entity with its offset moved by the length of the text
already produced, so offsets are correct at every nesting level.

Rendering rules
---------------
- Text, headings, paragraphs, images (alt text), line breaks and raw HTML
  contribute text only.
- Strong, emphasis and strikethrough add one entity spanning their content.
- Inline code and code blocks add ``code`` and ``preCode`` entities.
- Links become ``textUrl`` or ``mentionName`` entities when the target is
  usable, and plain literal ``[text](url)`` otherwise.
- Block quotes add one ``blockQuote`` entity, or ``expandableBlockQuote``
  when they contain another quote.
- Lists become plain ``"N. "`` / ``"- "`` prefixed lines without entities.
- Consecutive block siblings are separated by newlines reproducing the
  blank lines of the source when positions are known.

"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Optional, Union

from md2tg.ast.nodes import (
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
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
    is_block_node,
)
from md2tg.ast.utils import block_quote_depth
from md2tg.ast.visitors import NodeVisitor
from md2tg.entities import (
    BlockQuoteType,
    BoldType,
    CodeType,
    ExpandableBlockQuoteType,
    FormattedText,
    ItalicType,
    MentionNameType,
    PreCodeType,
    StrikethroughType,
    TextUrlType,
)
from md2tg.exceptions import ParsingError, RenderingError
from md2tg.options.entities import EntityRendererOptions
from md2tg.parsers.markdown import markdown_to_ast
from md2tg.renderers.base import BaseRenderer
from md2tg.utils.urls import classify_link

logger = logging.getLogger(__name__)

_EMPTY = FormattedText()
_NEWLINE = FormattedText.plain("\n")


class EntityRenderer(NodeVisitor, BaseRenderer):
    """Render AST nodes to Telegram formatted text.

    The renderer holds no per-document state; one instance can render any
    number of trees, from any number of threads.

    Parameters
    ----------
    options : EntityRendererOptions or None, default = None
        Entity rendering options

    Examples
    --------
    Basic usage:

        >>> from md2tg.ast import Document, Paragraph, Strong, Text
        >>> doc = Document(children=[
        ...     Paragraph(content=[Text(content="Hello "), Strong(content=[Text(content="world")])])
        ... ])
        >>> result = EntityRenderer().render_to_formatted(doc)
        >>> result.text
        'Hello world'
        >>> result.entities[0].offset, result.entities[0].length
        (6, 5)

    """

    def __init__(self, options: EntityRendererOptions | None = None):
        """Initialize the entity renderer with options."""
        BaseRenderer._validate_options_type(options, EntityRendererOptions, "entities")
        options = options or EntityRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: EntityRendererOptions = options

    def render_to_formatted(self, node: Node) -> FormattedText:
        """Render a tree (or any subtree) to formatted text.

        Parameters
        ----------
        node : Node
            Root of the tree to render, usually a Document

        Returns
        -------
        FormattedText
            Plain text and entities

        Raises
        ------
        RenderingError
            If the tree cannot be walked (e.g. a malformed node)

        """
        try:
            result = node.accept(self)
        except RecursionError as e:
            raise RenderingError("Tree is nested too deeply to render", original_error=e) from e
        except (AttributeError, TypeError, ValueError) as e:
            raise RenderingError(
                f"Failed to render {type(node).__name__}: {e}", node_type=type(node).__name__, original_error=e
            ) from e
        if not isinstance(result, FormattedText):
            raise RenderingError(f"Cannot render object of type {type(node).__name__}", node_type=type(node).__name__)
        return result

    def render_to_string(self, doc: Document) -> str:
        """Render a document to TDLib ``formattedText`` JSON."""
        return json.dumps(self.render_to_formatted(doc).to_dict(), ensure_ascii=False)

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render a document and write its ``formattedText`` JSON to output."""
        self.write_text_output(self.render_to_string(doc), output)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _block_separator(self, previous: Node, following: Node) -> FormattedText:
        """Newlines placed between two consecutive block siblings."""
        if not self.options.preserve_blank_lines or previous.position is None or following.position is None:
            return _NEWLINE
        gap = following.position.start_line - previous.position.end_line
        if gap <= 1:
            return _NEWLINE
        return FormattedText.plain("\n" * gap)

    def _render_children(self, children: list[Node]) -> FormattedText:
        """Concatenate rendered children, separating block siblings."""
        result = _EMPTY
        previous: Optional[Node] = None
        for child in children:
            if previous is not None and is_block_node(previous) and is_block_node(child):
                result = result + self._block_separator(previous, child)
            result = result + child.accept(self)
            previous = child
        return result

    def visit_document(self, node: Document) -> FormattedText:
        """Render a Document node."""
        return self._render_children(node.children)

    def visit_generic(self, node: GenericNode) -> FormattedText:
        """Render a node without a dedicated class as a plain container."""
        if node.children:
            return self._render_children(node.children)
        return FormattedText.plain(node.value or "")

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_heading(self, node: Heading) -> FormattedText:
        """Render a Heading node (text only)."""
        return self._render_children(node.content)

    def visit_paragraph(self, node: Paragraph) -> FormattedText:
        """Render a Paragraph node."""
        return self._render_children(node.content)

    def visit_code_block(self, node: CodeBlock) -> FormattedText:
        """Render a CodeBlock node as a ``preCode`` entity."""
        return FormattedText.plain(node.content).wrap(PreCodeType(language=node.language or ""))

    def visit_block_quote(self, node: BlockQuote) -> FormattedText:
        """Render a BlockQuote node.

        Exactly one quote entity wraps the content of each quote node. A quote
        holding another quote is expandable; the nested quote contributes its
        own entity through the recursive call.

        """
        content = self._render_children(node.children)
        if block_quote_depth(node) >= 2:
            return content.wrap(ExpandableBlockQuoteType())
        return content.wrap(BlockQuoteType())

    def visit_list(self, node: List) -> FormattedText:
        """Render a List node as plain prefixed lines.

        Item text is the plain text of the item's subtree; formatting inside
        list items is dropped.

        """
        bullet = node.bullet or self.options.default_bullet
        lines = []
        for index, item in enumerate(node.items):
            marker = f"{node.start + index}. " if node.ordered else f"{bullet} "
            lines.append(marker + item.accept(self).text)
        return FormattedText.plain("\n".join(lines))

    def visit_list_item(self, node: ListItem) -> FormattedText:
        """Render a ListItem node's children."""
        return self._render_children(node.children)

    def visit_thematic_break(self, node: ThematicBreak) -> FormattedText:
        """Render a ThematicBreak node (no text)."""
        return _EMPTY

    def visit_html_block(self, node: HTMLBlock) -> FormattedText:
        """Render an HTMLBlock node as its raw text."""
        return FormattedText.plain(node.content)

    # ------------------------------------------------------------------
    # Inlines
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> FormattedText:
        """Render a Text node."""
        return FormattedText.plain(node.content)

    def visit_emphasis(self, node: Emphasis) -> FormattedText:
        """Render an Emphasis node as an ``italic`` entity."""
        return self._render_children(node.content).wrap(ItalicType())

    def visit_strong(self, node: Strong) -> FormattedText:
        """Render a Strong node as a ``bold`` entity."""
        return self._render_children(node.content).wrap(BoldType())

    def visit_strikethrough(self, node: Strikethrough) -> FormattedText:
        """Render a Strikethrough node as a ``strikethrough`` entity."""
        return self._render_children(node.content).wrap(StrikethroughType())

    def visit_code(self, node: Code) -> FormattedText:
        """Render a Code node as a ``code`` entity."""
        return FormattedText.plain(node.content).wrap(CodeType())

    def visit_link(self, node: Link) -> FormattedText:
        """Render a Link node.

        Usable targets wrap the visible text in a ``textUrl`` entity (or
        ``mentionName`` for ``tg://user?id=N``). Other targets are written
        back as plain literal ``[text](url)``: the visible text without its
        formatting and the target as written in the source.

        """
        content = self._render_children(node.content)
        target = classify_link(
            node.url,
            default_scheme=self.options.default_link_scheme,
            accept_bare_domains=self.options.accept_bare_domains,
            normalize_supergroup_links=self.options.normalize_supergroup_links,
        )
        if target.kind == "mention" and target.user_id is not None:
            return content.wrap(MentionNameType(user_id=target.user_id))
        if target.kind == "url":
            return content.wrap(TextUrlType(url=target.url))

        raw_url = node.metadata.get("raw_url", node.url)
        logger.debug("Link target %r is not actionable, keeping literal Markdown", raw_url)
        return FormattedText.plain(f"[{content.text}]({raw_url})")

    def visit_image(self, node: Image) -> FormattedText:
        """Render an Image node as its alt text."""
        return FormattedText.plain(node.alt_text)

    def visit_line_break(self, node: LineBreak) -> FormattedText:
        """Render a LineBreak node."""
        return _NEWLINE

    def visit_html_inline(self, node: HTMLInline) -> FormattedText:
        """Render an HTMLInline node as its raw text."""
        return FormattedText.plain(node.content)


def _fallback_source(tree: object, source: Optional[str]) -> str:
    if source is not None:
        return source
    metadata = getattr(tree, "metadata", None)
    if isinstance(metadata, dict) and isinstance(metadata.get("source"), str):
        return metadata["source"]
    return ""


def convert(tree: Node, source: Optional[str] = None, options: EntityRendererOptions | None = None) -> FormattedText:
    """Convert a syntax tree to formatted text, never raising for bad trees.

    Parameters
    ----------
    tree : Node
        Tree to convert, usually a Document
    source : str or None, default = None
        Markdown the tree was parsed from, returned verbatim if conversion
        fails; defaults to ``tree.metadata["source"]`` when present
    options : EntityRendererOptions or None, default = None
        Rendering options

    Returns
    -------
    FormattedText
        The rendered text, or the source text without entities on failure

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not an EntityRendererOptions

    """
    renderer = EntityRenderer(options)
    try:
        return renderer.render_to_formatted(tree)
    except Exception:
        logger.exception("Formatted text conversion failed, falling back to the literal source")
        return FormattedText.plain(_fallback_source(tree, source))


def to_formatted_text(markdown: str, options: EntityRendererOptions | None = None) -> FormattedText:
    r"""Parse Markdown and convert it to formatted text.

    Parameters
    ----------
    markdown : str
        Markdown source
    options : EntityRendererOptions or None, default = None
        Rendering options

    Returns
    -------
    FormattedText
        The rendered text, or ``markdown`` verbatim without entities when it
        cannot be parsed or rendered

    Examples
    --------
        >>> to_formatted_text("> outer\n> > inner").text
        'outer\ninner'

    """
    try:
        tree = markdown_to_ast(markdown)
    except ParsingError:
        logger.exception("Markdown parsing failed, falling back to the literal source")
        return FormattedText.plain(markdown if isinstance(markdown, str) else "")
    return convert(tree, source=markdown, options=options)
