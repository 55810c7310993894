# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""
Release pamphlet generation.

The generator reads a hand-filled release summary and two tracker exports,
fetches the detailed release note of every issue that has one, and assembles
a single HTML document:

- a banner stating which two releases the notes compare
- a table of contents
- Overview and New Features, copied from the summary
- Bug Fixes, a table of every fixed issue
- Issues, one subsection per detailed release note
- Build Environment, copied from the summary

Sections are built in that order against one BuildState. A failing step stops
the run and nothing is written.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
import click
from lxml import etree
from rich.console import Console

from .config import Config
from .errors import MalformedInputError, MalformedNoteError
from .extractor import extract_issues
from .fetcher import NoteFetcher
from .models import BUILD_ENVIRONMENT_FIELDS, HeaderLevel, Headline, HtmlTag, Issue, Section, SummaryField
from .pamphlet import (
    Pamphlet, add_headlined_item, add_paragraph, create_header, create_link, create_list,
    create_section, create_table, insert_column, insert_line, insert_row
)
from .template_utils import render_template
from .xml_utils import clone_children, get_first_child, parse_document, squeeze_text

console = Console(stderr=True)

MISSING_NOTES_HEADER = "The following tracker issues still need release notes:"


class ReleaseSummary:
    """Read-only view over the hand-filled release summary document."""

    def __init__(self, root: etree._Element):
        self.root = root

    def text(self, summary_field: SummaryField) -> str:
        """Direct text of a required summary field."""
        return squeeze_text(self.fragment(summary_field))

    def fragment(self, summary_field: SummaryField) -> etree._Element:
        """Element of a required summary field."""
        return get_first_child(self.root, summary_field.value)

    @property
    def release_id(self) -> str:
        return self.text(SummaryField.RELEASE_ID)

    @property
    def previous_release_id(self) -> str:
        return self.text(SummaryField.PREVIOUS_RELEASE_ID)


@dataclass
class BuildState:
    """Everything one generator run reads and writes."""
    summary: ReleaseSummary
    bug_list: etree._Element
    notes_list: etree._Element
    pamphlet: Pamphlet = field(default_factory=Pamphlet)
    missing_notes: List[Issue] = field(default_factory=list)

    def add_missing_note(self, issue: Issue) -> None:
        self.missing_notes.append(issue)


class ReleaseNotesGenerator:
    """Build the release pamphlet from the summary, tracker exports and fetched notes."""

    def __init__(self, config: Config, fetcher: Optional[NoteFetcher] = None, debug: bool = False):
        self.config = config
        self.fetcher = fetcher or NoteFetcher(config.tracker)
        self.debug = debug

    def initialize(
        self,
        summary_path: Union[str, Path],
        bug_list_path: Union[str, Path],
        notes_list_path: Union[str, Path]
    ) -> BuildState:
        """Parse the three input documents into a fresh BuildState."""
        return BuildState(
            summary=ReleaseSummary(parse_document(summary_path)),
            bug_list=parse_document(bug_list_path),
            notes_list=parse_document(notes_list_path)
        )

    def build_steps(self) -> List[Callable[[BuildState], Any]]:
        return [
            self.begin_pamphlet,
            self.build_overview,
            self.build_new_features,
            self.build_bug_list,
            self.build_issues_list,
            self.build_environment,
        ]

    def build(self, state: BuildState) -> Pamphlet:
        """Run every section step in order. Any exception stops the remaining steps."""
        for step in self.build_steps():
            if self.debug:
                console.print(f"[dim]Running {step.__name__}...[/dim]")
            step(state)
        return state.pamphlet

    def generate(
        self,
        summary_path: Union[str, Path],
        bug_list_path: Union[str, Path],
        notes_list_path: Union[str, Path],
        pamphlet_path: Union[str, Path]
    ) -> BuildState:
        """
        Generate the pamphlet and write it to ``pamphlet_path``.

        The file is written only if every section was built. Issues missing a
        detailed note are reported afterwards.

        Returns:
            The finished BuildState
        """
        state = self.initialize(summary_path, bug_list_path, notes_list_path)
        self.build(state)
        self.print_pamphlet(state, pamphlet_path)
        report_missing_notes(state)
        return state

    def print_pamphlet(self, state: BuildState, pamphlet_path: Union[str, Path]) -> None:
        state.pamphlet.write(
            pamphlet_path,
            method=self.config.output.method,
            pretty_print=self.config.output.pretty_print
        )
        if self.debug:
            console.print(f"[dim]Wrote {pamphlet_path}[/dim]")

    def _render(self, template: str, state: BuildState, **extra: Any) -> str:
        context: Dict[str, Any] = {
            'product': self.config.pamphlet.product_name,
            'release_id': state.summary.release_id,
            'previous_release_id': state.summary.previous_release_id,
        }
        context.update(extra)
        return render_template(template, context)

    def begin_pamphlet(self, state: BuildState) -> None:
        """Start the document: title, banner with the delta statement, and table of contents."""
        pamphlet = state.pamphlet
        title = self._render(self.config.pamphlet.title_template, state)
        body = pamphlet.begin(title)

        banner = create_header(body, HeaderLevel.BANNER, title)
        add_paragraph(banner, self._render(self.config.pamphlet.delta_template, state))

        toc = pamphlet.create_toc()
        for section in Section:
            create_section(body, HeaderLevel.MAIN_SECTION, section.value, [toc])

    def build_overview(self, state: BuildState) -> None:
        block = state.pamphlet.get_section(Section.OVERVIEW)
        clone_children(state.summary.fragment(SummaryField.OVERVIEW), block)

    def build_new_features(self, state: BuildState) -> None:
        block = state.pamphlet.get_section(Section.NEW_FEATURES)
        clone_children(state.summary.fragment(SummaryField.NEW_FEATURES), block)

    def build_bug_list(self, state: BuildState) -> None:
        """Table of every issue addressed by the release."""
        block = state.pamphlet.get_section(Section.BUG_FIXES)
        bugs = extract_issues(state.bug_list, self.config.tracker.note_filename, debug=self.debug)
        browse_url = self.config.tracker.get_browse_url()

        add_paragraph(block, self._render(self.config.pamphlet.bug_fixes_template, state))

        table = create_table(
            block,
            self.config.pamphlet.table_border_width,
            [Headline.ISSUE_ID.value, Headline.DESCRIPTION.value]
        )
        for issue in bugs:
            row = insert_row(table)
            insert_column(row).append(create_link(issue.tracker_url(browse_url), issue.key))
            insert_column(row).text = issue.title

    def build_issues_list(self, state: BuildState) -> None:
        """One subsection per issue that should carry a detailed release note."""
        pamphlet = state.pamphlet
        block = pamphlet.get_section(Section.ISSUES)
        issues = extract_issues(state.notes_list, self.config.tracker.note_filename, debug=self.debug)

        add_paragraph(block, self._render(self.config.pamphlet.issues_template, state))
        section_toc = create_list(block)

        for issue in issues:
            note = self.fetcher.fetch(issue).unwrap()
            key = f"Note for {issue.key}"
            toc_entry = f"{key}: {self.get_note_summary(issue, note)}"

            insert_line(block)
            issue_block = create_section(
                block, HeaderLevel.ISSUE_DETAIL, key, [pamphlet.toc, section_toc], toc_entry
            )

            if note is None:
                state.add_missing_note(issue)
                continue

            try:
                details = get_first_child(note, HtmlTag.BODY.value)
            except MalformedInputError as e:
                raise MalformedNoteError(f"Badly formatted release note for {issue.key}: {e}", issue.key) from e
            clone_children(details, issue_block)

    def get_note_summary(self, issue: Issue, note: Optional[etree._Element]) -> str:
        """
        One-line summary of a release note.

        A release note starts with a "Summary of Change" heading followed by a
        paragraph holding the summary text. Issues without a note get the
        missing-note placeholder.

        Raises:
            MalformedNoteError: If the note has no paragraph
        """
        if note is None:
            return self.config.pamphlet.missing_note_placeholder
        try:
            paragraph = get_first_child(note, HtmlTag.PARAGRAPH.value)
        except MalformedInputError as e:
            raise MalformedNoteError(f"Badly formatted summary for {issue.key}: {e}", issue.key) from e
        return " ".join(squeeze_text(paragraph).split())

    def build_environment(self, state: BuildState) -> None:
        """List the build environment fields of the summary."""
        block = state.pamphlet.get_section(Section.BUILD_ENVIRONMENT)
        add_paragraph(block, self._render(self.config.pamphlet.environment_template, state))

        items = create_list(block)
        for headline, summary_field in BUILD_ENVIRONMENT_FIELDS:
            value = state.summary.text(summary_field)
            if summary_field == SummaryField.BRANCH:
                value = self._render(self.config.pamphlet.branch_template, state, branch=value)
            add_headlined_item(items, headline.value, value)


def report_missing_notes(state: BuildState, output: Optional[Console] = None) -> List[str]:
    """
    Print the issues that still lack a detailed release note.

    Each issue is written as one tab-separated key and title line, never
    wrapped and with its tabs kept. Prints nothing when every note was found.

    Returns:
        The printed lines
    """
    if not state.missing_notes:
        return []

    output = output or console
    lines = [MISSING_NOTES_HEADER]
    lines.extend(f"\t{issue.key}\t{issue.title}" for issue in state.missing_notes)
    for line in lines:
        click.echo(line, file=output.file)
    return lines
