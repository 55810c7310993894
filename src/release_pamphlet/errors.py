# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Exceptions raised while generating a release pamphlet."""

from typing import Optional


class PamphletError(Exception):
    """Base class for every fatal pamphlet generation error."""
    pass


class UsageError(PamphletError):
    """The tool was invoked with the wrong arguments."""
    pass


class MalformedInputError(PamphletError):
    """A summary or tracker document is missing a required field or is unreadable."""

    def __init__(self, message: str, field: Optional[str] = None, parent: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.parent = parent

    @classmethod
    def missing_child(cls, field: str, parent: str) -> "MalformedInputError":
        return cls(
            f"Could not find child element '{field}' in parent element '{parent}'.",
            field=field,
            parent=parent
        )


class NetworkError(PamphletError):
    """
    A detailed release note could not be fetched or parsed.

    ``hint`` carries operator advice for host resolution failures; it does not
    change how the error is handled.
    """

    def __init__(self, message: str, issue_key: str, hint: Optional[str] = None):
        super().__init__(message)
        self.issue_key = issue_key
        self.hint = hint


class MalformedNoteError(PamphletError):
    """A fetched release note lacks the expected body/paragraph structure."""

    def __init__(self, message: str, issue_key: str):
        super().__init__(message)
        self.issue_key = issue_key


class PamphletWriteError(PamphletError):
    """The finished pamphlet could not be written."""
    pass
