"""
Tool registration helpers.

``create_tool_wrapper`` binds a services object to a tool function, hides the
injected parameter from the schema FastMCP generates, and normalises loosely
typed arguments (``"100"``, ``"null"``, JSON-encoded arrays and objects) that
some MCP clients send.

Usage:
    >>> wrapper = create_tool_wrapper(list_sitemap_urls, services)
    >>> mcp.tool(wrapper)
"""

import inspect
import json
import logging
import re
from collections.abc import Awaitable, Callable
from functools import update_wrapper
from types import NoneType, UnionType
from typing import Any, Union, get_args, get_origin

logger = logging.getLogger(__name__)

_INJECTED_PARAM = "api_client"
_INTEGER = re.compile(r"-?\d+")


def _union_members(annotation: Any) -> tuple[Any, ...]:
    """Return the members of a union annotation, or the annotation itself."""
    if isinstance(annotation, UnionType) or get_origin(annotation) is Union:
        return get_args(annotation)
    return (annotation,)


def _expects(annotation: Any, kind: type) -> bool:
    return any(member is kind or get_origin(member) is kind for member in _union_members(annotation))


def _widen_annotation(annotation: Any) -> Any:
    """Allow ``str`` where the tool expects an int, list or dict so normalisation can run."""
    if annotation is inspect.Parameter.empty:
        return annotation
    if any(_expects(annotation, kind) for kind in (int, list, dict)) and not _expects(annotation, str):
        return Union[annotation, str]  # noqa: UP007
    return annotation


def normalize_value(value: Any, annotation: Any, optional: bool, param_name: str = "") -> Any:
    """
    Normalise one tool argument to the type the tool declares.

    - ``"null"`` becomes None for optional parameters
    - digit strings become ints for integer parameters
    - JSON strings become lists or dicts for list/dict parameters

    Values that cannot be converted are returned unchanged, so the tool's own
    validation can report them.

    Args:
        value: Raw argument value.
        annotation: Declared annotation of the parameter.
        optional: Whether the parameter accepts None.
        param_name: Parameter name, for log messages.

    Returns:
        The normalised value.
    """
    if value is None or not isinstance(value, str):
        return value

    if value.strip().lower() == "null" and optional:
        logger.debug("Normalising string 'null' to None for %s", param_name)
        return None

    if _expects(annotation, int):
        stripped = value.strip()
        if _INTEGER.fullmatch(stripped):
            logger.debug("Normalising '%s' to int for %s", value, param_name)
            return int(stripped)

    if _expects(annotation, list) or _expects(annotation, dict):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            logger.debug("Cannot parse '%s' as JSON for %s", value, param_name)
            return value
        if (isinstance(parsed, list) and _expects(annotation, list)) or (
            isinstance(parsed, dict) and _expects(annotation, dict)
        ):
            return parsed

    return value


def create_tool_wrapper(
    endpoint_func: Callable[..., Awaitable[Any]],
    api_client: Any,
) -> Callable[..., Awaitable[Any]]:
    """
    Create a tool wrapper that injects ``api_client`` and preserves metadata.

    Args:
        endpoint_func: Tool function whose first parameter is ``api_client``
        api_client: Services object to inject

    Returns:
        Async function suitable for ``mcp.tool()``
    """
    original_sig = inspect.signature(endpoint_func)
    params = [param for name, param in original_sig.parameters.items() if name != _INJECTED_PARAM]

    new_params = [param.replace(annotation=_widen_annotation(param.annotation)) for param in params]
    new_sig = original_sig.replace(parameters=new_params)

    new_annotations: dict[str, Any] = {
        param.name: param.annotation for param in new_params if param.annotation is not inspect.Parameter.empty
    }
    if original_sig.return_annotation is not inspect.Signature.empty:
        new_annotations["return"] = original_sig.return_annotation

    optional_params = {
        param.name
        for param in params
        if param.default is None or NoneType in _union_members(param.annotation)
    }

    async def wrapper(**kwargs: Any) -> Any:
        for param in params:
            if param.name in kwargs:
                kwargs[param.name] = normalize_value(
                    kwargs[param.name],
                    param.annotation,
                    param.name in optional_params,
                    param.name,
                )
        return await endpoint_func(api_client, **kwargs)

    wrapper.__doc__ = endpoint_func.__doc__ or f"{endpoint_func.__name__} tool"
    update_wrapper(
        wrapper,
        endpoint_func,
        assigned=("__name__", "__module__", "__qualname__"),
        updated=(),
    )
    # FastMCP reads the signature to build the input schema
    wrapper.__signature__ = new_sig  # type: ignore[attr-defined]
    wrapper.__annotations__ = new_annotations

    return wrapper
