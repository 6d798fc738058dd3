import traceback
from functools import partial
from typing import Any, Dict, List, Optional

from graphql import GraphQLError

from .config import DebugFlag, ErrorFormatter
from .error import ClientAware


INTERNAL_MESSAGE = "Internal server error"


def is_client_safe(error: GraphQLError) -> bool:
    """Errors raised by user code are hidden unless they opt in"""
    original = error.original_error
    if original is None or isinstance(original, GraphQLError):
        return True
    if isinstance(original, ClientAware):
        return original.is_client_safe()
    return False


def add_debug_entries(
    formatted: Dict[str, Any], error: GraphQLError, debug: DebugFlag
) -> Dict[str, Any]:
    if not debug & (DebugFlag.INCLUDE_DEBUG_MESSAGE | DebugFlag.INCLUDE_TRACE):
        return formatted

    formatted = dict(formatted)
    extensions = dict(formatted.get("extensions") or {})

    if debug & DebugFlag.INCLUDE_DEBUG_MESSAGE and not is_client_safe(error):
        extensions["debugMessage"] = error.message

    if debug & DebugFlag.INCLUDE_TRACE:
        original = error.original_error or error
        if original.__traceback__ is not None:
            extensions["trace"] = traceback.format_tb(original.__traceback__)

    if extensions:
        formatted["extensions"] = extensions
    return formatted


def create_from_error(
    error: GraphQLError,
    debug: DebugFlag = DebugFlag.NONE,
    internal_message: str = INTERNAL_MESSAGE,
) -> Dict[str, Any]:
    """Default error formatter

    Starts from ``error.formatted`` and replaces message of internal errors
    with ``internal_message``.
    """
    formatted: Dict[str, Any] = dict(error.formatted)
    if not is_client_safe(error):
        formatted["message"] = internal_message
    return add_debug_entries(formatted, error, debug)


def prepare_formatter(
    formatter: Optional[ErrorFormatter], debug: DebugFlag
) -> ErrorFormatter:
    if formatter is None:
        return partial(create_from_error, debug=debug)

    def wrapper(error: GraphQLError) -> Dict[str, Any]:
        return add_debug_entries(formatter(error), error, debug)

    return wrapper


def default_errors_handler(
    errors: List[GraphQLError], formatter: ErrorFormatter
) -> List[Dict[str, Any]]:
    return [formatter(error) for error in errors]
