#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/ast/__init__.py
"""Syntax tree module for Markdown documents.

The module consists of:

- nodes: AST node classes representing document structure
- visitors: Visitor pattern implementation for AST traversal
- serialization: loading mdast JSON produced by external parsers
- utils: tree helpers (block quote depth)

Examples
--------
    >>> from md2tg.ast import Document, Paragraph, Strong, Text
    >>> from md2tg.renderers.entities import EntityRenderer
    >>> doc = Document(children=[Paragraph(content=[Strong(content=[Text("Hi")])])])
    >>> EntityRenderer().render_to_formatted(doc).text
    'Hi'

"""

from __future__ import annotations

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
    SourcePosition,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
    get_node_children,
    is_block_node,
)
from md2tg.ast.serialization import mdast_json_to_ast, mdast_to_ast
from md2tg.ast.utils import block_quote_depth
from md2tg.ast.visitors import NodeVisitor

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "GenericNode",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SourcePosition",
    "Strikethrough",
    "Strong",
    "Text",
    "ThematicBreak",
    "block_quote_depth",
    "get_node_children",
    "is_block_node",
    "mdast_json_to_ast",
    "mdast_to_ast",
]
