# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for the pamphlet document builder."""

import pytest
from lxml import etree

from release_pamphlet.errors import PamphletError, PamphletWriteError
from release_pamphlet.models import HeaderLevel, Section
from release_pamphlet.pamphlet import (
    Pamphlet, add_headlined_item, create_header, create_list, create_section, create_table
)


@pytest.fixture
def pamphlet():
    pamphlet = Pamphlet()
    pamphlet.begin("Release Notes for Derby 10.3.1.4")
    return pamphlet


def test_begin_creates_title_and_body(pamphlet):
    assert pamphlet.root.tag == "html"
    assert pamphlet.root.findtext("title") == "Release Notes for Derby 10.3.1.4"
    assert pamphlet.body is pamphlet.root.find("body")


def test_begin_twice_is_rejected(pamphlet):
    with pytest.raises(PamphletError):
        pamphlet.begin("again")


def test_header_has_anchor_and_block(pamphlet):
    block = create_header(pamphlet.body, HeaderLevel.MAIN_SECTION, "Overview")

    header = pamphlet.body.find("h2")
    anchor = header.find("a")
    assert anchor.get("name") == "Overview"
    assert anchor.tail == "Overview"
    assert header.getnext() is block
    assert block.tag == "blockquote"


def test_section_is_linked_from_every_toc(pamphlet):
    toc = pamphlet.create_toc()
    sublist = create_list(pamphlet.body)

    create_section(pamphlet.body, HeaderLevel.ISSUE_DETAIL, "Note for PROJ-1", [toc, sublist], "Note for PROJ-1: x")

    for target in (toc, sublist):
        links = target.findall("li/a")
        assert len(links) == 1
        assert links[0].get("href") == "#Note for PROJ-1"
        assert links[0].text == "Note for PROJ-1: x"


def test_section_caption_defaults_to_name(pamphlet):
    toc = pamphlet.create_toc()

    create_section(pamphlet.body, HeaderLevel.MAIN_SECTION, "Bug Fixes", [toc])

    assert toc.find("li/a").text == "Bug Fixes"


def test_get_section_finds_block(pamphlet):
    toc = pamphlet.create_toc()
    overview = create_section(pamphlet.body, HeaderLevel.MAIN_SECTION, "Overview", [toc])
    issues = create_section(pamphlet.body, HeaderLevel.MAIN_SECTION, "Issues", [toc])

    assert pamphlet.get_section(Section.OVERVIEW) is overview
    assert pamphlet.get_section("Issues") is issues


def test_get_section_unknown_name(pamphlet):
    with pytest.raises(KeyError):
        pamphlet.get_section(Section.BUILD_ENVIRONMENT)


def test_headlined_item(pamphlet):
    items = create_list(pamphlet.body)

    item = add_headlined_item(items, "Machine", "Mac OS X")

    assert item.find("b").text == "Machine"
    assert "".join(item.itertext()) == "Machine - Mac OS X"


def test_table_has_border_and_bold_headings(pamphlet):
    table = create_table(pamphlet.body, 2, ["Issue Id", "Description"])

    assert table.get("border") == "2"
    assert [b.text for b in table.findall("tr/td/b")] == ["Issue Id", "Description"]


def test_serialize_before_begin_fails():
    with pytest.raises(PamphletError):
        Pamphlet().to_bytes()


def test_xml_method_has_declaration(pamphlet):
    content = pamphlet.to_bytes(method="xml")

    assert content.startswith(b"<?xml")
    assert etree.fromstring(content).tag == "html"


def test_html_method_closes_empty_anchors(pamphlet):
    create_header(pamphlet.body, HeaderLevel.MAIN_SECTION, "Overview")

    content = pamphlet.to_bytes()

    assert b'<a name="Overview"></a>Overview' in content


def test_write_creates_file(pamphlet, tmp_path):
    output = tmp_path / "RELEASE-NOTES.html"

    pamphlet.write(output)

    assert output.read_bytes() == pamphlet.to_bytes()


def test_write_failure_keeps_cause(pamphlet, tmp_path):
    output = tmp_path / "missing-dir" / "RELEASE-NOTES.html"

    with pytest.raises(PamphletWriteError) as exc_info:
        pamphlet.write(output)
    assert isinstance(exc_info.value.__cause__, OSError)
