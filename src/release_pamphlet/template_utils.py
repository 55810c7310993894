# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Template rendering utilities using Jinja2."""

from typing import Dict, Set, Any
from jinja2 import Environment, Template, TemplateSyntaxError, UndefinedError, StrictUndefined, meta


class TemplateError(Exception):
    """Exception raised for template-related errors."""
    pass


def render_template(template_str: str, context: Dict[str, Any]) -> str:
    """
    Render a Jinja2 template with the given context.

    Args:
        template_str: Jinja2 template string using {{ variable }} syntax
        context: Dictionary of variables available to the template

    Returns:
        Rendered template string

    Raises:
        TemplateError: If template syntax is invalid or uses undefined variables
    """
    try:
        template = Template(template_str, undefined=StrictUndefined)
        return template.render(**context)
    except TemplateSyntaxError as e:
        raise TemplateError(f"Invalid template syntax: {e}")
    except UndefinedError as e:
        raise TemplateError(f"Template uses undefined variable: {e}")


def validate_template_vars(
    template_str: str,
    available_vars: Set[str],
    template_name: str = "template"
) -> None:
    """
    Validate that a template only uses variables that are available.

    Args:
        template_str: Jinja2 template string to validate
        available_vars: Set of variable names that are available
        template_name: Name of the template for error messages

    Raises:
        TemplateError: If the syntax is invalid or the template uses variables
            not in available_vars
    """
    try:
        ast = Environment().parse(template_str)
    except TemplateSyntaxError as e:
        raise TemplateError(f"Invalid {template_name} syntax: {e}")

    undefined = meta.find_undeclared_variables(ast) - available_vars
    if undefined:
        raise TemplateError(
            f"{template_name} uses undefined variables: {', '.join(sorted(undefined))}. "
            f"Available variables: {', '.join(sorted(available_vars))}"
        )
