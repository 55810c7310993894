# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Configuration management for the release pamphlet generator."""

import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Set
from pydantic import BaseModel, Field, model_validator
import tomli

from .template_utils import TemplateError, validate_template_vars

CONFIG_FILENAME = "release_pamphlet.toml"

DEFAULT_CONFIG_PATHS = [
    CONFIG_FILENAME,
    ".release_pamphlet.toml",
    "config/release_pamphlet.toml"
]

TRACKER_URL_ENV = "RELEASE_PAMPHLET_TRACKER_URL"

# Variables every sentence template may use
SENTENCE_VARIABLES: Set[str] = {"product", "release_id", "previous_release_id"}


class TrackerConfig(BaseModel):
    """Issue tracker addresses."""
    base_url: str = Field(
        default="https://issues.apache.org/jira",
        description="Tracker root URL (can also use RELEASE_PAMPHLET_TRACKER_URL env var)"
    )
    browse_url: Optional[str] = Field(
        default=None,
        description="Base URL of public issue pages. Defaults to {base_url}/browse"
    )
    attachment_url: Optional[str] = Field(
        default=None,
        description="Base URL of the attachment store. Defaults to {base_url}/secure/attachment"
    )
    note_filename: str = Field(
        default="releaseNote.html",
        description="Attachment name that marks a detailed release note"
    )
    timeout: Optional[float] = Field(
        default=None,
        description="Seconds to wait for a release note download. None waits forever."
    )

    def get_browse_url(self) -> str:
        if self.browse_url:
            return self.browse_url
        return f"{self.base_url.rstrip('/')}/browse"

    def get_attachment_url(self) -> str:
        if self.attachment_url:
            return self.attachment_url
        return f"{self.base_url.rstrip('/')}/secure/attachment"


class PamphletConfig(BaseModel):
    """Wording and layout of the generated pamphlet."""
    product_name: str = Field(default="Derby", description="Product name used in titles and sentences")
    table_border_width: int = Field(default=2, description="Border width of the bug fixes table")
    missing_note_placeholder: str = Field(
        default="???",
        description="Summary shown for issues whose detailed note is missing"
    )
    title_template: str = Field(
        default="Release Notes for {{ product }} {{ release_id }}",
        description="Document title and banner (Jinja2 syntax)"
    )
    delta_template: str = Field(
        default="These notes describe the difference between {{ product }} release {{ release_id }} "
                "and the preceding release {{ previous_release_id }}.",
        description="Sentence under the banner (Jinja2 syntax)"
    )
    bug_fixes_template: str = Field(
        default="The following issues are addressed by {{ product }} release {{ release_id }}. "
                "These issues are not addressed in the preceding {{ previous_release_id }} release.",
        description="Introduction of the Bug Fixes section (Jinja2 syntax)"
    )
    issues_template: str = Field(
        default="Compared with the previous release ({{ previous_release_id }}), {{ product }} release "
                "{{ release_id }} introduces the following new features and incompatibilities. "
                "These merit your special attention.",
        description="Introduction of the Issues section (Jinja2 syntax)"
    )
    environment_template: str = Field(
        default="{{ product }} release {{ release_id }} was built using the following environment:",
        description="Introduction of the Build Environment section (Jinja2 syntax)"
    )
    branch_template: str = Field(
        default="Source code came from the {{ branch }} branch.",
        description="Text of the Branch item. Also has {{ branch }} available (Jinja2 syntax)"
    )

    @model_validator(mode='after')
    def validate_templates(self):
        """Reject templates that reference variables the generator never provides."""
        templates = {
            'title_template': SENTENCE_VARIABLES,
            'delta_template': SENTENCE_VARIABLES,
            'bug_fixes_template': SENTENCE_VARIABLES,
            'issues_template': SENTENCE_VARIABLES,
            'environment_template': SENTENCE_VARIABLES,
            'branch_template': SENTENCE_VARIABLES | {"branch"},
        }
        for name, variables in templates.items():
            try:
                validate_template_vars(getattr(self, name), variables, name)
            except TemplateError as e:
                raise ValueError(str(e))
        return self


class OutputConfig(BaseModel):
    """Output configuration for the pamphlet file."""
    method: Literal["html", "xml"] = Field(
        default="html",
        description="Serialization method. 'xml' adds an XML declaration and self-closes empty elements"
    )
    pretty_print: bool = Field(default=False, description="Indent the generated HTML")


class PathsConfig(BaseModel):
    """Input and output files, for hosts that configure rather than pass arguments."""
    summary: Optional[str] = Field(default=None, description="Filled-in release summary XML")
    bug_list: Optional[str] = Field(default=None, description="Tracker export of issues fixed by the release")
    notes_list: Optional[str] = Field(default=None, description="Tracker export of issues with detailed notes")
    pamphlet: Optional[str] = Field(default=None, description="Output file, typically RELEASE-NOTES.html")

    def as_args(self) -> Optional[List[str]]:
        """The four paths in argument order, or None unless all are set."""
        paths = [self.summary, self.bug_list, self.notes_list, self.pamphlet]
        if all(paths):
            return paths
        return None


class Config(BaseModel):
    """Main configuration model."""
    config_version: str = Field(default="1.0", description="Config file format version")
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    pamphlet: PamphletConfig = Field(default_factory=PamphletConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)

    @classmethod
    def from_file(cls, config_path: str) -> "Config":
        """Load configuration from TOML file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'rb') as f:
            data = tomli.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Load configuration from dictionary."""
        # Override tracker URL from environment if the file leaves it out
        if 'tracker' not in data:
            data['tracker'] = {}
        if not data['tracker'].get('base_url'):
            env_url = os.getenv(TRACKER_URL_ENV)
            if env_url:
                data['tracker']['base_url'] = env_url

        return cls(**data)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from file, a default location, or built-in defaults.

    Args:
        config_path: Path to config file (optional, will search default locations if not provided)

    Returns:
        Config object
    """
    if config_path:
        return Config.from_file(config_path)

    for default_path in DEFAULT_CONFIG_PATHS:
        if Path(default_path).exists():
            return Config.from_file(default_path)

    return Config.from_dict({})
