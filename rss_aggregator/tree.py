"""Helpers for walking the parsed XML node tree."""

import xml.etree.ElementTree as ET

from .models import ElementNode, TagNode, TextNode


def find_child_index(node: TagNode, tag: str, last_match: bool = True) -> int | None:
    """Find the index of a direct tag child labeled ``tag``.

    Every matching child overwrites the previous match, so when duplicates
    exist the last one wins. Text children are skipped.

    Args:
        node: Tag node whose children are scanned
        tag: Label to look for
        last_match: Return the first match instead when False

    Returns:
        Index into ``node.children``, or None if no tag child matches
    """
    index = None
    for i, child in enumerate(node.children):
        match child:
            case TagNode(label=label) if label == tag:
                index = i
                if not last_match:
                    break
    return index


def find_child(node: TagNode, tag: str, last_match: bool = True) -> TagNode | None:
    """Return the child located by :func:`find_child_index`, if any."""
    index = find_child_index(node, tag, last_match)
    if index is None:
        return None
    return node.children[index]


def first_text(node: TagNode | None) -> str | None:
    """Return the content of the node's first child when it is a text node."""
    if node is None or not node.children:
        return None
    match node.children[0]:
        case TextNode(content=content):
            return content
        case _:
            return None


def _local_name(tag: str) -> str:
    # "{uri}local" -> "local"
    if tag.startswith("{"):
        return tag.rpartition("}")[2]
    return tag


def from_element(element: ET.Element) -> TagNode:
    """Convert an ElementTree element into a :class:`TagNode`.

    Whitespace-only text between elements is dropped.
    """
    children: list[ElementNode] = []
    if element.text and element.text.strip():
        children.append(TextNode(element.text))
    for sub in element:
        # Comments and processing instructions carry a callable tag
        if isinstance(sub.tag, str):
            children.append(from_element(sub))
        if sub.tail and sub.tail.strip():
            children.append(TextNode(sub.tail))

    attributes = {_local_name(name): value for name, value in element.attrib.items()}
    return TagNode(
        label=_local_name(element.tag),
        attributes=attributes,
        children=tuple(children),
    )


def parse_xml(data: bytes | str) -> TagNode:
    """Parse an XML document into the node model.

    Raises:
        xml.etree.ElementTree.ParseError: If the document is not well formed
    """
    return from_element(ET.fromstring(data))
