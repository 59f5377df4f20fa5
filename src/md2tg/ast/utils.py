#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
block_quote_depth : Count nested block quote levels

Examples
--------
    >>> from md2tg.ast import BlockQuote, Paragraph, Text
    >>> quote = BlockQuote(children=[BlockQuote(children=[Paragraph(content=[Text("x")])])])
    >>> block_quote_depth(quote)
    2

"""

from __future__ import annotations

from md2tg.ast.nodes import BlockQuote, Node


def block_quote_depth(node: Node) -> int:
    """Count the block quote levels rooted at ``node``.

    A quote without nested quotes has depth 1; each quote directly nested in
    a quote adds one level. Non-quote nodes have depth 0.

    Parameters
    ----------
    node : Node
        Node to measure

    Returns
    -------
    int
        Nesting depth of block quotes starting at ``node``

    """
    if not isinstance(node, BlockQuote):
        return 0
    nested = [block_quote_depth(child) for child in node.children if isinstance(child, BlockQuote)]
    return 1 + max(nested, default=0)
