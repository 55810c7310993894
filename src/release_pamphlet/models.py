# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Data models and fixed vocabularies for the release pamphlet."""

from enum import Enum, IntEnum
from typing import List, Optional, Tuple
from pydantic import BaseModel


class Section(str, Enum):
    """Top-level pamphlet sections, in document order."""
    OVERVIEW = "Overview"
    NEW_FEATURES = "New Features"
    BUG_FIXES = "Bug Fixes"
    ISSUES = "Issues"
    BUILD_ENVIRONMENT = "Build Environment"


class HeaderLevel(IntEnum):
    """Header depth for each kind of pamphlet heading."""
    BANNER = 1
    MAIN_SECTION = 2
    ISSUE_DETAIL = 3

    @property
    def tag(self) -> str:
        return f"h{self.value}"


class SummaryField(str, Enum):
    """Element names in the hand-filled release summary."""
    RELEASE_ID = "releaseID"
    PREVIOUS_RELEASE_ID = "previousReleaseID"
    BRANCH = "branch"
    MACHINE = "machine"
    ANT_VERSION = "antVersion"
    JDK14 = "jdk1.4"
    JAVA6 = "java6"
    OSGI = "osgi"
    COMPILERS = "compilers"
    JSR169 = "jsr169"
    OVERVIEW = "overview"
    NEW_FEATURES = "newFeatures"


class TrackerTag(str, Enum):
    """Element and attribute names in a tracker export."""
    ITEM = "item"
    KEY = "key"
    TITLE = "title"
    ATTACHMENTS = "attachments"
    ATTACHMENT = "attachment"
    NAME = "name"
    ID = "id"


class HtmlTag(str, Enum):
    """HTML vocabulary used to build the pamphlet and read notes."""
    ANCHOR = "a"
    BODY = "body"
    BOLD = "b"
    COLUMN = "td"
    HORIZONTAL_LINE = "hr"
    HTML = "html"
    INDENT = "blockquote"
    LIST = "ul"
    LIST_ELEMENT = "li"
    PARAGRAPH = "p"
    ROW = "tr"
    TABLE = "table"
    TITLE = "title"


class Headline(str, Enum):
    """Bold labels for table headings and build environment items."""
    ISSUE_ID = "Issue Id"
    DESCRIPTION = "Description"
    BRANCH = "Branch"
    MACHINE = "Machine"
    ANT = "Ant"
    JDK14 = "JDK 1.4"
    JAVA6 = "Java 6"
    OSGI = "OSGi"
    COMPILER = "Compiler"
    JSR169 = "JSR 169"


# Build environment items in pamphlet order. Branch is rendered through a
# sentence template, the rest are copied verbatim.
BUILD_ENVIRONMENT_FIELDS: List[Tuple[Headline, SummaryField]] = [
    (Headline.BRANCH, SummaryField.BRANCH),
    (Headline.MACHINE, SummaryField.MACHINE),
    (Headline.ANT, SummaryField.ANT_VERSION),
    (Headline.JDK14, SummaryField.JDK14),
    (Headline.JAVA6, SummaryField.JAVA6),
    (Headline.OSGI, SummaryField.OSGI),
    (Headline.COMPILER, SummaryField.COMPILERS),
    (Headline.JSR169, SummaryField.JSR169),
]


class Issue(BaseModel):
    """An issue read from a tracker export."""
    key: str  # e.g., "DERBY-2598"
    title: str  # title without its leading "[KEY] "
    note_attachment_id: Optional[int] = None  # latest detailed note, if any

    @property
    def has_note(self) -> bool:
        return self.note_attachment_id is not None

    def tracker_url(self, browse_url: str) -> str:
        """Public page for this issue on the tracker."""
        return f"{browse_url.rstrip('/')}/{self.key}"

    def note_url(self, attachment_url: str, note_filename: str) -> Optional[str]:
        """Download address of the detailed note, or None when there is none."""
        if not self.has_note:
            return None
        return f"{attachment_url.rstrip('/')}/{self.note_attachment_id}/{note_filename}"
