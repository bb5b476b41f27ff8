"""Validation utilities for sitemap-scout MCP tool arguments.

The services validate semantics; these helpers only coerce loosely typed
arguments left over after the tool wrapper's normalisation.
"""

import json
from typing import Any

from sitemapscout.exceptions import ValidationError


def validate_optional_int(value: Any, field_name: str) -> int | None:
    """
    Coerce an optional integer argument.

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        The integer, or None when not provided

    Raises:
        ValidationError: If the value is not an integer
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer", field=field_name, value=value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field_name} must be an integer", field=field_name, value=value)


def validate_rules(value: Any) -> dict[str, Any] | None:
    """
    Coerce the ``rules`` argument of ``build_crawl_frontier`` to a mapping.

    Args:
        value: A dict, a JSON object string, or None

    Returns:
        The rules mapping, or None when not provided

    Raises:
        ValidationError: If the value is not an object
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValidationError("rules must be an object", field="rules", value=value) from e
    if not isinstance(value, dict):
        raise ValidationError("rules must be an object", field="rules", value=value)
    return value
