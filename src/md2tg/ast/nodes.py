#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/ast/nodes.py
"""AST node classes for Markdown syntax trees.

This module defines the node hierarchy the entity renderer walks. Trees are
produced by the Markdown parser adapter (:mod:`md2tg.parsers.markdown`) or
loaded from mdast-shaped dictionaries (:mod:`md2tg.ast.serialization`), and
are treated as read-only input by every renderer.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, ThematicBreak, HTMLBlock

Inline nodes:
    - Text, Emphasis, Strong, Strikethrough, Code
    - Link, Image, LineBreak, HTMLInline

Anything else is represented by GenericNode, which renderers handle as a
plain container.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SourcePosition:
    """Line span of a node in its Markdown source.

    Only the difference between the end line of one block and the start line
    of the next sibling is used, to reproduce blank lines between blocks.

    Parameters
    ----------
    start_line : int
        First line of the node (1-based)
    end_line : int
        Last line of the node (1-based, inclusive)

    """

    start_line: int
    end_line: int


class Node(ABC):
    """Base class for all AST nodes.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node
    position : SourcePosition or None, default = None
        Where the node came from in the source, when known

    """

    metadata: dict[str, Any]
    position: Optional[SourcePosition]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root node containing block-level children.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata; the parser stores the raw Markdown under
        ``"source"`` so renderers can fall back to it

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (ATX or setext).

    Parameters
    ----------
    level : int
        Heading level (1-6)
    content : list of Node, default = empty list
        Inline content of the heading

    """

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def __post_init__(self) -> None:
        """Validate heading level."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    Parameters
    ----------
    content : str
        Literal code, without the fences
    language : str or None, default = None
        Language declared on the fence

    """

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote containing block-level children (possibly other quotes)."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool, default = False
        Whether the list is numbered
    items : list of ListItem, default = empty list
        Items of the list
    start : int, default = 1
        Number of the first item of an ordered list
    bullet : str or None, default = None
        Bullet character of an unordered list (``-``, ``*`` or ``+``)

    """

    ordered: bool = False
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    bullet: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """Item of a list, containing block-level children."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class ThematicBreak(Node):
    """Horizontal rule."""

    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block, kept as literal text."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML block."""
        return visitor.visit_html_block(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Literal text."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasized (italic) inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong."""
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Struck-through inline content (mdast ``delete``)."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class Code(Node):
    """Inline code span (mdast ``inlineCode``)."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code span."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Hyperlink.

    Parameters
    ----------
    url : str
        Link target as resolved by the parser
    content : list of Node, default = empty list
        Inline content forming the visible text
    title : str or None, default = None
        Optional link title
    metadata : dict, default = empty dict
        The Markdown parser stores the destination as written in the
        source under ``"raw_url"``

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image reference; only its alt text can be shown in a text message."""

    url: str
    alt_text: str = ""
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class LineBreak(Node):
    """Soft or hard line break inside a paragraph."""

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


@dataclass
class HTMLInline(Node):
    """Raw inline HTML, kept as literal text."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline HTML."""
        return visitor.visit_html_inline(self)


# ============================================================================
# Unknown nodes
# ============================================================================


@dataclass
class GenericNode(Node):
    """Node of a type md2tg has no dedicated class for.

    Trees loaded from external parsers may contain node types such as
    ``table`` or ``footnoteReference``; they are kept as generic containers
    so that their text still reaches the output.

    Parameters
    ----------
    node_type : str
        Type name reported by the source tree
    children : list of Node, default = empty list
        Child nodes, if any
    value : str or None, default = None
        Literal value of a leaf node

    """

    node_type: str
    children: list[Node] = field(default_factory=list)
    value: Optional[str] = None
    block: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node."""
        return visitor.visit_generic(self)


BLOCK_NODE_TYPES = (Paragraph, Heading, BlockQuote, CodeBlock, List, ThematicBreak, HTMLBlock)


def is_block_node(node: Node) -> bool:
    """Return True for nodes that are separated from their siblings by newlines.

    Parameters
    ----------
    node : Node
        Node to classify

    Returns
    -------
    bool
        True for paragraphs, headings, block quotes, code blocks, lists,
        thematic breaks and HTML blocks (and generic nodes flagged as block)

    """
    if isinstance(node, GenericNode):
        return node.block
    return isinstance(node, BLOCK_NODE_TYPES)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem, GenericNode)):
        return list(node.children)

    if isinstance(node, (Heading, Paragraph, Emphasis, Strong, Strikethrough, Link)):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    return []
