# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Small helpers over lxml for reading inputs and copying fragments."""

import copy
from pathlib import Path
from typing import Iterator, Optional, Union
from lxml import etree

from .errors import MalformedInputError


def _make_parser() -> etree.XMLParser:
    # Inputs come from files and the network; never expand entities or fetch DTDs.
    return etree.XMLParser(resolve_entities=False, no_network=True)


def local_name(node: etree._Element) -> Optional[str]:
    """Tag name without namespace, or None for comments and processing instructions."""
    tag = node.tag
    if not isinstance(tag, str):
        return None
    return tag.split("}")[-1] if "}" in tag else tag


def parse_document(path: Union[str, Path]) -> etree._Element:
    """
    Parse an XML file and return its root element.

    Raises:
        MalformedInputError: If the file cannot be read or is not well-formed
    """
    try:
        tree = etree.parse(str(path), _make_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedInputError(f"Unable to parse {path}: {e}") from e
    except OSError as e:
        raise MalformedInputError(f"Unable to read {path}: {e}") from e
    return tree.getroot()


def parse_bytes(content: bytes) -> etree._Element:
    """Parse an in-memory document. Syntax errors propagate as etree.XMLSyntaxError."""
    return etree.fromstring(content, _make_parser())


def iter_descendants(node: etree._Element, name: str) -> Iterator[etree._Element]:
    """Yield every descendant element called ``name``, in document order."""
    for element in node.iter():
        if element is not node and local_name(element) == name:
            yield element


def get_optional_child(node: etree._Element, name: str) -> Optional[etree._Element]:
    """First descendant element called ``name``, or None."""
    return next(iter_descendants(node, name), None)


def get_first_child(node: etree._Element, name: str) -> etree._Element:
    """
    First descendant element called ``name``.

    Raises:
        MalformedInputError: If there is no such element
    """
    child = get_optional_child(node, name)
    if child is None:
        raise MalformedInputError.missing_child(name, local_name(node) or str(node.tag))
    return child


def squeeze_text(node: etree._Element) -> str:
    """Concatenate the direct text nodes of an element."""
    return "".join(node.xpath("text()"))


def append_text(target: etree._Element, text: str) -> None:
    """Append a text node at the end of ``target``."""
    if not text:
        return
    if len(target):
        last = target[-1]
        last.tail = (last.tail or "") + text
    else:
        target.text = (target.text or "") + text


def clone_children(source: etree._Element, target: etree._Element) -> None:
    """Deep-copy every child node of ``source`` (text included) to the end of ``target``."""
    append_text(target, source.text or "")
    for child in source:
        # deepcopy carries the child's tail text along with it
        target.append(copy.deepcopy(child))
