# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""The pamphlet document: an append-only HTML tree with a table of contents."""

from pathlib import Path
from typing import Optional, Sequence, Union
from lxml import etree

from .errors import PamphletError, PamphletWriteError
from .models import HeaderLevel, HtmlTag, Section
from .xml_utils import iter_descendants


def create_text_element(tag: HtmlTag, text: str) -> etree._Element:
    element = etree.Element(tag.value)
    element.text = text
    return element


def bold_text(text: str) -> etree._Element:
    return create_text_element(HtmlTag.BOLD, text)


def create_link(href: str, text: str) -> etree._Element:
    """Create a hotlink."""
    link = create_text_element(HtmlTag.ANCHOR, text)
    link.set("href", href)
    return link


def create_local_link(anchor: str, text: Optional[str] = None) -> etree._Element:
    """Create a link to a named anchor in the same document."""
    return create_link(f"#{anchor}", text if text is not None else anchor)


def create_list(parent: etree._Element) -> etree._Element:
    return etree.SubElement(parent, HtmlTag.LIST.value)


def add_list_item(list_element: etree._Element, item: etree._Element) -> etree._Element:
    list_item = etree.SubElement(list_element, HtmlTag.LIST_ELEMENT.value)
    list_item.append(item)
    return list_item


def add_headlined_item(list_element: etree._Element, headline: str, text: str) -> etree._Element:
    """Add "<b>headline</b> - text" to the end of a list."""
    list_item = etree.SubElement(list_element, HtmlTag.LIST_ELEMENT.value)
    bold = bold_text(headline)
    bold.tail = f" - {text}"
    list_item.append(bold)
    return list_item


def add_paragraph(parent: etree._Element, text: str) -> etree._Element:
    paragraph = create_text_element(HtmlTag.PARAGRAPH, text)
    parent.append(paragraph)
    return paragraph


def insert_row(table: etree._Element) -> etree._Element:
    return etree.SubElement(table, HtmlTag.ROW.value)


def insert_column(row: etree._Element) -> etree._Element:
    return etree.SubElement(row, HtmlTag.COLUMN.value)


def insert_line(parent: etree._Element) -> etree._Element:
    """Insert a horizontal rule."""
    return etree.SubElement(parent, HtmlTag.HORIZONTAL_LINE.value)


def create_table(parent: etree._Element, border_width: int, column_headings: Sequence[str]) -> etree._Element:
    """Insert a bordered table whose first row holds bold column headings."""
    table = etree.SubElement(parent, HtmlTag.TABLE.value)
    table.set("border", str(border_width))

    heading_row = insert_row(table)
    for heading in column_headings:
        insert_column(heading_row).append(bold_text(heading))

    return table


def create_header(parent: etree._Element, level: HeaderLevel, text: str) -> etree._Element:
    """
    Append a header and the indented block that follows it.

    The header carries an anchor named after its text so the table of contents
    can link to it.

    Returns:
        The block that holds the content under this header
    """
    header = etree.SubElement(parent, level.tag)
    anchor = etree.SubElement(header, HtmlTag.ANCHOR.value)
    anchor.set("name", text)
    anchor.tail = text
    return etree.SubElement(parent, HtmlTag.INDENT.value)


def create_section(
    parent: etree._Element,
    level: HeaderLevel,
    name: str,
    tocs: Sequence[etree._Element],
    toc_entry: Optional[str] = None
) -> etree._Element:
    """
    Append a section to ``parent`` and link to it from every given table of contents.

    Args:
        parent: Element receiving the header and block
        level: Header depth
        name: Section name, also the anchor name
        tocs: Lists to register the section in
        toc_entry: Link caption, defaults to the section name

    Returns:
        The block that holds the section content
    """
    for toc in tocs:
        add_list_item(toc, create_local_link(name, toc_entry))
    return create_header(parent, level, name)


class Pamphlet:
    """
    Builder handle for the output document.

    Content is only ever appended; the tree is serialized once at the end.
    """

    def __init__(self):
        self.root: Optional[etree._Element] = None
        self.body: Optional[etree._Element] = None
        self.toc: Optional[etree._Element] = None

    def begin(self, title: str) -> etree._Element:
        """Create the html, title and body elements. Returns the body."""
        if self.root is not None:
            raise PamphletError("Pamphlet has already been started.")
        self.root = etree.Element(HtmlTag.HTML.value)
        self.root.append(create_text_element(HtmlTag.TITLE, title))
        self.body = etree.SubElement(self.root, HtmlTag.BODY.value)
        return self.body

    def create_toc(self) -> etree._Element:
        """Create the master table of contents at the current end of the body."""
        self.toc = create_list(self.body)
        return self.toc

    def get_section(self, name: Union[Section, str], level: HeaderLevel = HeaderLevel.MAIN_SECTION) -> etree._Element:
        """
        Content block of a section, found by its header anchor.

        Raises:
            KeyError: If no header at that level has this name
        """
        if isinstance(name, Section):
            name = name.value
        for header in iter_descendants(self.root, level.tag):
            anchor = header.find(HtmlTag.ANCHOR.value)
            if anchor is not None and anchor.get("name") == name:
                # the indented block always follows its header
                return header.getnext()
        raise KeyError(name)

    def to_bytes(self, method: str = "html", pretty_print: bool = False) -> bytes:
        if self.root is None:
            raise PamphletError("Pamphlet has not been started.")
        return etree.tostring(
            self.root,
            method=method,
            encoding="utf-8",
            xml_declaration=(method == "xml"),
            pretty_print=pretty_print
        )

    def write(self, path: Union[str, Path], method: str = "html", pretty_print: bool = False) -> None:
        """
        Serialize the pamphlet to ``path`` in a single write.

        Raises:
            PamphletWriteError: If the file cannot be written
        """
        content = self.to_bytes(method=method, pretty_print=pretty_print)
        try:
            Path(path).write_bytes(content)
        except OSError as e:
            raise PamphletWriteError(f"Unable to write pamphlet to {path}: {e}") from e
