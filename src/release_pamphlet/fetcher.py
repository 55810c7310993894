# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Download and parse detailed release notes attached to tracker issues."""

import socket
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse
import requests
from lxml import etree
from rich.console import Console
from urllib3.exceptions import NameResolutionError

from .config import TrackerConfig
from .errors import NetworkError
from .models import Issue
from .xml_utils import parse_bytes

console = Console(stderr=True)

UNKNOWN_HOST_HINT = (
    "Unknown host '{host}'. Can you ping this host from a shell window? "
    "Check your network connection before running the generator again."
)


@dataclass
class NoteFetchResult:
    """
    Outcome of fetching one issue's release note.

    Exactly one of ``document`` and ``error`` is set when the issue has a note;
    both are None when it has none.
    """
    issue: Issue
    document: Optional[etree._Element] = None
    error: Optional[NetworkError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Optional[etree._Element]:
        """Return the parsed note, or raise the fetch error."""
        if self.error is not None:
            raise self.error
        return self.document


def is_host_resolution_failure(exc: BaseException) -> bool:
    """Check whether a DNS lookup failure is anywhere in an exception's chain."""
    pending = [exc]
    seen = set()
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, (socket.gaierror, NameResolutionError)):
            return True

        # requests wraps urllib3 errors in args; urllib3 keeps the cause in .reason
        linked = [current.__cause__, current.__context__, getattr(current, 'reason', None)]
        linked.extend(current.args)
        pending.extend(e for e in linked if isinstance(e, BaseException))
    return False


class NoteFetcher:
    """Fetch detailed release notes from the tracker's attachment store."""

    def __init__(self, tracker: TrackerConfig, session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.

        Args:
            tracker: Tracker addresses and note filename
            session: HTTP session to use; a new one is created if not given
        """
        self.tracker = tracker
        self.session = session or requests.Session()

    def note_url(self, issue: Issue) -> Optional[str]:
        return issue.note_url(self.tracker.get_attachment_url(), self.tracker.note_filename)

    def fetch(self, issue: Issue) -> NoteFetchResult:
        """
        Download and parse the release note of an issue.

        Issues without a note attachment return an empty result without any
        network access. Failures are returned in the result, not raised.
        """
        url = self.note_url(issue)
        if url is None:
            return NoteFetchResult(issue=issue)

        try:
            with self.session.get(url, timeout=self.tracker.timeout, stream=True) as response:
                response.raise_for_status()
                document = parse_bytes(response.content)
        except (requests.RequestException, etree.XMLSyntaxError) as e:
            hint = None
            if is_host_resolution_failure(e):
                hint = UNKNOWN_HOST_HINT.format(host=urlparse(url).hostname)
                console.print(f"[yellow]{hint}[/yellow]")

            error = NetworkError(
                f"Unable to read or parse release note for {issue.key}: {e}",
                issue_key=issue.key,
                hint=hint
            )
            error.__cause__ = e
            return NoteFetchResult(issue=issue, error=error)

        return NoteFetchResult(issue=issue, document=document)

    def fetch_note(self, issue: Issue) -> Optional[etree._Element]:
        """Parsed release note of an issue, or None if it has none. Raises NetworkError."""
        return self.fetch(issue).unwrap()
