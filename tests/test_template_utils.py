# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for template utilities."""

import pytest
from release_pamphlet.template_utils import (
    render_template,
    validate_template_vars,
    TemplateError
)


def test_render_template_simple():
    """Test basic template rendering."""
    template = "Release Notes for {{ product }} {{ release_id }}"
    context = {'product': 'Derby', 'release_id': '10.3.1.4'}
    result = render_template(template, context)
    assert result == "Release Notes for Derby 10.3.1.4"


def test_render_template_undefined_variable():
    """Test that undefined variables raise TemplateError."""
    template = "Release {{ release_id }} after {{ previous_release_id }}"
    context = {'release_id': '10.3.1.4'}

    with pytest.raises(TemplateError) as exc_info:
        render_template(template, context)
    assert "undefined" in str(exc_info.value).lower()


def test_render_template_invalid_syntax():
    """Test that invalid template syntax raises TemplateError."""
    with pytest.raises(TemplateError) as exc_info:
        render_template("Release {{ release_id", {'release_id': '1'})
    assert "syntax" in str(exc_info.value).lower()


def test_render_template_keeps_brackets():
    """Issue ids in brackets pass through untouched."""
    assert render_template("[{{ key }}] done", {'key': 'PROJ-1'}) == "[PROJ-1] done"


def test_validate_template_vars_valid():
    validate_template_vars(
        "{{ product }} release {{ release_id }}",
        {'product', 'release_id', 'previous_release_id'}
    )


def test_validate_template_vars_undefined():
    with pytest.raises(TemplateError) as exc_info:
        validate_template_vars("{{ release_id }} on {{ branch }}", {'release_id'}, "delta_template")
    message = str(exc_info.value)
    assert "delta_template" in message
    assert "branch" in message


def test_validate_template_vars_invalid_syntax():
    with pytest.raises(TemplateError) as exc_info:
        validate_template_vars("{% if %}", {'release_id'}, "title_template")
    assert "title_template" in str(exc_info.value)
