# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for the lxml helpers."""

import pytest
from lxml import etree

from release_pamphlet.errors import MalformedInputError
from release_pamphlet.xml_utils import (
    clone_children, get_first_child, get_optional_child, iter_descendants,
    local_name, parse_bytes, squeeze_text
)


def test_squeeze_text_joins_direct_text_only():
    element = etree.fromstring(b"<machine>Mac <b>bold</b>OS X</machine>")
    assert squeeze_text(element) == "Mac OS X"


def test_squeeze_text_empty_element():
    assert squeeze_text(etree.fromstring(b"<branch/>")) == ""


def test_get_first_child_searches_descendants():
    root = etree.fromstring(b"<rss><channel><item><key>A</key></item><item><key>B</key></item></channel></rss>")
    assert get_first_child(root, "key").text == "A"


def test_get_first_child_missing():
    root = etree.fromstring(b"<summary><branch>x</branch></summary>")

    with pytest.raises(MalformedInputError) as exc_info:
        get_first_child(root, "machine")
    assert str(exc_info.value) == "Could not find child element 'machine' in parent element 'summary'."


def test_get_optional_child_missing():
    root = etree.fromstring(b"<item><key>A</key></item>")
    assert get_optional_child(root, "attachments") is None


def test_iter_descendants_excludes_self():
    root = etree.fromstring(b"<item><item/><item/></item>")
    assert len(list(iter_descendants(root, "item"))) == 2


def test_namespaced_note_matches_by_local_name():
    note = parse_bytes(
        b'<html xmlns="http://www.w3.org/1999/xhtml"><body><h4>Summary</h4><p>Text</p></body></html>'
    )
    assert local_name(note) == "html"
    assert squeeze_text(get_first_child(note, "p")) == "Text"


def test_local_name_of_comment():
    root = etree.fromstring(b"<a><!-- c --></a>")
    assert local_name(root[0]) is None


def test_clone_children_copies_text_and_tails():
    source = etree.fromstring(b"<overview>lead <b>x</b> middle <i>y</i> end</overview>")
    target = etree.fromstring(b"<blockquote/>")

    clone_children(source, target)

    assert etree.tostring(target) == b"<blockquote>lead <b>x</b> middle <i>y</i> end</blockquote>"
    # the source is left untouched
    assert etree.tostring(source) == b"<overview>lead <b>x</b> middle <i>y</i> end</overview>"


def test_clone_children_appends_after_existing_content():
    source = etree.fromstring(b"<body>text<p>para</p></body>")
    target = etree.fromstring(b"<blockquote><hr/></blockquote>")

    clone_children(source, target)

    assert etree.tostring(target) == b"<blockquote><hr/>text<p>para</p></blockquote>"


def test_parse_bytes_does_not_expand_entities():
    document = parse_bytes(
        b'<!DOCTYPE p [<!ENTITY e "expanded">]><p>&e;</p>'
    )
    assert "expanded" not in "".join(document.itertext())
