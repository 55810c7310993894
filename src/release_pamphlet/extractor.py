# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Issue extraction from tracker XML exports."""

from typing import List, Optional
from lxml import etree
from rich.console import Console
from rich.markup import escape

from .errors import MalformedInputError
from .models import Issue, TrackerTag
from .xml_utils import get_first_child, get_optional_child, iter_descendants, squeeze_text

console = Console()

DEFAULT_NOTE_FILENAME = "releaseNote.html"


def strip_title(title: str) -> str:
    """
    Remove the leading tracker id from an issue title.

    A tracker title has the form "[DERBY-2598] new upgrade test failures"; the
    id already lives in the issue key.

    Raises:
        MalformedInputError: If the title has no closing bracket
    """
    end = title.find(']')
    if end < 0:
        raise MalformedInputError(
            f"Issue title '{title}' does not start with a bracketed tracker id.",
            field=TrackerTag.TITLE.value,
            parent=TrackerTag.ITEM.value
        )
    stripped = title[end + 1:]
    if stripped[:1].isspace():
        stripped = stripped[1:]
    return stripped


def parse_attachment_id(text: str) -> int:
    """
    Parse an attachment id written in decimal or hexadecimal.

    Accepts an optional sign followed by "0x", "0X" or "#" for hexadecimal;
    anything else is read as decimal.

    Raises:
        MalformedInputError: If the id is not a number
    """
    value = text.strip()
    sign = 1
    if value[:1] in ('-', '+'):
        if value[0] == '-':
            sign = -1
        value = value[1:]

    base = 10
    if value[:2].lower() == '0x':
        base, value = 16, value[2:]
    elif value[:1] == '#':
        base, value = 16, value[1:]

    try:
        if not value or not value.isalnum():
            raise ValueError(text)
        return sign * int(value, base)
    except ValueError:
        raise MalformedInputError(
            f"Invalid attachment id '{text}'.",
            field=TrackerTag.ID.value,
            parent=TrackerTag.ATTACHMENT.value
        )


def find_note_attachment_id(item: etree._Element, note_filename: str = DEFAULT_NOTE_FILENAME) -> Optional[int]:
    """
    Highest id among the item's attachments named ``note_filename``.

    Trackers keep every upload, so a corrected note is simply a later attachment
    with the same name. Negative ids never name a note. Returns None when the
    item has no such attachment.
    """
    attachments = get_optional_child(item, TrackerTag.ATTACHMENTS.value)
    if attachments is None:
        return None

    latest: Optional[int] = None
    for attachment in iter_descendants(attachments, TrackerTag.ATTACHMENT.value):
        if attachment.get(TrackerTag.NAME.value) != note_filename:
            continue
        attachment_id = parse_attachment_id(attachment.get(TrackerTag.ID.value, ""))
        if attachment_id < 0:
            continue
        if latest is None or attachment_id > latest:
            latest = attachment_id
    return latest


def make_issue(item: etree._Element, note_filename: str = DEFAULT_NOTE_FILENAME) -> Issue:
    """Build an Issue from an <item> element of a tracker export."""
    key = squeeze_text(get_first_child(item, TrackerTag.KEY.value))
    title = squeeze_text(get_first_child(item, TrackerTag.TITLE.value))

    return Issue(
        key=key,
        title=strip_title(title),
        note_attachment_id=find_note_attachment_id(item, note_filename)
    )


def extract_issues(
    report: etree._Element,
    note_filename: str = DEFAULT_NOTE_FILENAME,
    debug: bool = False
) -> List[Issue]:
    """
    Read every issue of a tracker export, in document order.

    Args:
        report: Root element of the export
        note_filename: Attachment name that marks a detailed release note
        debug: Print each extracted issue

    Returns:
        One Issue per <item> element
    """
    issues = []
    for item in iter_descendants(report, TrackerTag.ITEM.value):
        issue = make_issue(item, note_filename)
        if debug:
            note = f"note #{issue.note_attachment_id}" if issue.has_note else "no note"
            console.print(f"  [dim]{escape(issue.key)}: {escape(issue.title)} ({note})[/dim]")
        issues.append(issue)
    return issues
