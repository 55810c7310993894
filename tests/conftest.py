# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Shared pytest fixtures."""

import pytest
from unittest.mock import Mock

from release_pamphlet.config import Config
from release_pamphlet.fetcher import NoteFetcher, NoteFetchResult
from release_pamphlet.xml_utils import parse_bytes


@pytest.fixture
def test_config_dict():
    """
    Create a basic test configuration dictionary.

    Returns:
        Configuration dictionary
    """
    return {
        "tracker": {
            "base_url": "https://issues.example.org/jira"
        },
        "pamphlet": {
            "product_name": "Derby"
        }
    }


@pytest.fixture
def test_config(test_config_dict):
    """
    Create a Config object from test configuration.

    Returns:
        Config instance
    """
    return Config.from_dict(test_config_dict)


@pytest.fixture
def fake_notes():
    """
    Release notes served by the mock fetcher, keyed by issue key.

    Tests add raw note documents here before building.
    """
    return {}


@pytest.fixture
def mock_fetcher(fake_notes):
    """
    Create a mock NoteFetcher that doesn't make external calls.

    Issues with an attachment id are answered from ``fake_notes``.

    Returns:
        Mock fetcher
    """
    fetcher = Mock(spec=NoteFetcher)

    def fetch(issue):
        if not issue.has_note:
            return NoteFetchResult(issue=issue)
        return NoteFetchResult(issue=issue, document=parse_bytes(fake_notes[issue.key]))

    fetcher.fetch.side_effect = fetch
    return fetcher
