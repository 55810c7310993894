# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for data models."""

from release_pamphlet.models import BUILD_ENVIRONMENT_FIELDS, HeaderLevel, Issue, Section


def test_issue_without_note():
    issue = Issue(key="DERBY-1", title="Crash")
    assert not issue.has_note
    assert issue.note_url("https://tracker/secure/attachment", "releaseNote.html") is None


def test_issue_urls():
    issue = Issue(key="DERBY-2", title="Defaults", note_attachment_id=12345)
    assert issue.has_note
    assert issue.tracker_url("https://tracker/browse/") == "https://tracker/browse/DERBY-2"
    assert issue.note_url("https://tracker/secure/attachment", "releaseNote.html") == \
        "https://tracker/secure/attachment/12345/releaseNote.html"


def test_attachment_id_zero_is_a_note():
    assert Issue(key="DERBY-3", title="x", note_attachment_id=0).has_note


def test_header_levels():
    assert HeaderLevel.BANNER.tag == "h1"
    assert HeaderLevel.MAIN_SECTION.tag == "h2"
    assert HeaderLevel.ISSUE_DETAIL.tag == "h3"


def test_section_order():
    assert [section.value for section in Section] == [
        "Overview", "New Features", "Bug Fixes", "Issues", "Build Environment"
    ]


def test_build_environment_order():
    assert [field.value for _, field in BUILD_ENVIRONMENT_FIELDS] == [
        "branch", "machine", "antVersion", "jdk1.4", "java6", "osgi", "compilers", "jsr169"
    ]
