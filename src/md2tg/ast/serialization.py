#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/ast/serialization.py
"""Loading syntax trees produced by external Markdown parsers.

Parsers outside Python (remark, micromark and other unified tools) exchange
Markdown syntax trees as mdast JSON. This module turns such dictionaries into
md2tg nodes so they can be rendered without re-parsing the Markdown.

Node types without a dedicated class become :class:`GenericNode` instances;
they are never rejected.

Examples
--------
    >>> tree = mdast_to_ast({
    ...     "type": "root",
    ...     "children": [{"type": "paragraph", "children": [{"type": "text", "value": "hi"}]}],
    ... })
    >>> type(tree.children[0]).__name__
    'Paragraph'

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

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
)
from md2tg.exceptions import ParsingError

logger = logging.getLogger(__name__)

# mdast types without a dedicated class that still occupy their own block
GENERIC_BLOCK_TYPES = frozenset({"table", "footnoteDefinition", "definition", "math", "yaml", "toml"})

_BLOCK_CONTAINERS = frozenset({"root", "blockquote", "listItem", "footnoteDefinition"})


def _deserialize_position(data: dict[str, Any]) -> Optional[SourcePosition]:
    """Read ``position.start.line`` / ``position.end.line`` when both are present."""
    position = data.get("position")
    if not isinstance(position, dict):
        return None
    start = position.get("start") or {}
    end = position.get("end") or {}
    start_line = start.get("line") if isinstance(start, dict) else None
    end_line = end.get("line") if isinstance(end, dict) else None
    if not isinstance(start_line, int) or not isinstance(end_line, int):
        return None
    return SourcePosition(start_line=start_line, end_line=end_line)


def _deserialize_children(data: dict[str, Any]) -> list[Node]:
    """Recursively deserialize the ``children`` array of an mdast node."""
    children = data.get("children")
    if children is None:
        return []
    if not isinstance(children, list):
        raise ParsingError(
            f"'children' of {data.get('type')!r} node must be a list, got {type(children).__name__}",
            parsing_stage="mdast",
        )
    parent_type = data.get("type", "")
    return [_deserialize_node(child, parent_type) for child in children]


def _deserialize_root(data: dict[str, Any]) -> Document:
    return Document(children=_deserialize_children(data), position=_deserialize_position(data))


def _deserialize_heading(data: dict[str, Any]) -> Heading:
    depth = data.get("depth", 1)
    if not isinstance(depth, int) or not 1 <= depth <= 6:
        depth = 1
    return Heading(level=depth, content=_deserialize_children(data), position=_deserialize_position(data))


def _deserialize_code(data: dict[str, Any]) -> CodeBlock:
    return CodeBlock(
        content=str(data.get("value", "")),
        language=data.get("lang") or None,
        position=_deserialize_position(data),
    )


def _deserialize_list(data: dict[str, Any]) -> List:
    start = data.get("start")
    items = [child for child in _deserialize_children(data) if isinstance(child, ListItem)]
    return List(
        ordered=bool(data.get("ordered", False)),
        items=items,
        start=start if isinstance(start, int) else 1,
        position=_deserialize_position(data),
    )


def _deserialize_link(data: dict[str, Any]) -> Link:
    return Link(
        url=str(data.get("url", "")),
        content=_deserialize_children(data),
        title=data.get("title"),
        position=_deserialize_position(data),
    )


def _deserialize_image(data: dict[str, Any]) -> Image:
    return Image(
        url=str(data.get("url", "")),
        alt_text=str(data.get("alt") or ""),
        title=data.get("title"),
        position=_deserialize_position(data),
    )


def _text_factory(cls: Callable[..., Node]) -> Callable[[dict[str, Any]], Node]:
    def build(data: dict[str, Any]) -> Node:
        return cls(content=str(data.get("value", "")), position=_deserialize_position(data))

    return build


def _inline_factory(cls: Callable[..., Node]) -> Callable[[dict[str, Any]], Node]:
    def build(data: dict[str, Any]) -> Node:
        return cls(content=_deserialize_children(data), position=_deserialize_position(data))

    return build


def _block_factory(cls: Callable[..., Node]) -> Callable[[dict[str, Any]], Node]:
    def build(data: dict[str, Any]) -> Node:
        return cls(children=_deserialize_children(data), position=_deserialize_position(data))

    return build


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any]], Node]] = {
    "root": _deserialize_root,
    "paragraph": _inline_factory(Paragraph),
    "heading": _deserialize_heading,
    "code": _deserialize_code,
    "blockquote": _block_factory(BlockQuote),
    "list": _deserialize_list,
    "listItem": _block_factory(ListItem),
    "thematicBreak": lambda data: ThematicBreak(position=_deserialize_position(data)),
    "text": _text_factory(Text),
    "emphasis": _inline_factory(Emphasis),
    "strong": _inline_factory(Strong),
    "delete": _inline_factory(Strikethrough),
    "inlineCode": _text_factory(Code),
    "link": _deserialize_link,
    "image": _deserialize_image,
    "break": lambda data: LineBreak(soft=False, position=_deserialize_position(data)),
}


def _deserialize_node(data: Any, parent_type: str = "") -> Node:
    """Deserialize one mdast node.

    Raises
    ------
    ParsingError
        If ``data`` is not a dictionary

    """
    if not isinstance(data, dict):
        raise ParsingError(f"mdast node must be an object, got {type(data).__name__}", parsing_stage="mdast")

    node_type = data.get("type")
    if node_type == "html":
        # mdast uses one type for block and inline HTML; the parent decides
        html_cls = HTMLBlock if parent_type in _BLOCK_CONTAINERS else HTMLInline
        return html_cls(content=str(data.get("value", "")), position=_deserialize_position(data))

    deserializer = _DESERIALIZATION_DISPATCH.get(node_type) if isinstance(node_type, str) else None
    if deserializer is not None:
        return deserializer(data)

    logger.debug("Keeping unknown mdast node type %r as a generic container", node_type)
    value = data.get("value")
    return GenericNode(
        node_type=str(node_type or "unknown"),
        children=_deserialize_children(data),
        value=value if isinstance(value, str) else None,
        block=node_type in GENERIC_BLOCK_TYPES,
        position=_deserialize_position(data),
    )


def mdast_to_ast(data: dict[str, Any]) -> Node:
    """Convert an mdast dictionary into md2tg nodes.

    Parameters
    ----------
    data : dict
        mdast node, usually of type ``root``

    Returns
    -------
    Node
        Converted node; a ``root`` becomes a :class:`Document`

    Raises
    ------
    ParsingError
        If the structure is not a tree of objects

    """
    return _deserialize_node(data)


def mdast_json_to_ast(json_str: str) -> Node:
    """Parse mdast JSON text and convert it into md2tg nodes.

    Raises
    ------
    ParsingError
        If the JSON is invalid or not an mdast tree

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid mdast JSON: {e}", parsing_stage="mdast", original_error=e) from e
    return mdast_to_ast(data)
