import json
from collections.abc import Mapping
from typing import Any, List

from graphql.pyutils import inspect

from .error import RequestError
from .request import OperationRequest


_MISSING = object()


def print_safe_json(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return inspect(value)


def _type_error(
    name: str, value: Any, expected: str = "string"
) -> RequestError:
    return RequestError(
        'GraphQL Request parameter "{}" must be {}, but got {}'.format(
            name, expected, print_safe_json(value)
        )
    )


def validate_request(request: OperationRequest) -> List[RequestError]:
    """Checks request shape and returns every problem found

    Never raises, empty list means that request is valid.
    """
    errors = []

    query = "" if request.query is None else request.query
    query_id = "" if request.query_id is None else request.query_id
    if query == "" and query_id == "":
        errors.append(
            RequestError(
                "GraphQL Request must include at least one of those two "
                'parameters: "query" or "queryId"'
            )
        )

    if not isinstance(query, str):
        errors.append(_type_error("query", request.query))

    if not isinstance(query_id, str):
        errors.append(_type_error("queryId", request.query_id))

    if request.operation_name is not None and not isinstance(
        request.operation_name, str
    ):
        errors.append(_type_error("operationName", request.operation_name))

    if request.variables is not None and not isinstance(
        request.variables, Mapping
    ):
        original = request.original_input.get("variables", _MISSING)
        errors.append(
            _type_error(
                "variables",
                request.variables if original is _MISSING else original,
                "object or JSON string parsed to object",
            )
        )

    return errors
