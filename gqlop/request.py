"""
gqlop.request
~~~~~~~~~~~~~

Single GraphQL operation request, as decoded by the transport layer.

"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


def _decode_if_json(value: Any) -> Any:
    # empty query string parameter means the value is not set
    if value == "":
        return None
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return value
        if decoded is None or isinstance(decoded, (dict, list)):
            return decoded
    return value


@dataclass(frozen=True)
class OperationRequest:
    """Represents one operation to execute

    Values are stored as received, :py:func:`gqlop.validate.validate_request`
    is responsible for type checks.
    """

    #: GraphQL source text
    query: Any = None
    #: persisted query identifier
    query_id: Any = None
    #: name of the operation to run, if the document has several
    operation_name: Any = None
    variables: Any = None
    extensions: Any = None
    #: request came through a side-effect-free transport method (e.g. GET)
    read_only: bool = False
    #: raw payload, used in error messages
    original_input: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls, params: Mapping[str, Any], read_only: bool = False
    ) -> "OperationRequest":
        """Creates request from the raw payload

        Example:

        .. code-block:: python

            request = OperationRequest.create({"query": "{ hello }"})

        :param params: {"query": str, "variables": dict,
                        "operationName": str, "queryId": str}
        :param read_only: request came via GET or another safe method
        """
        lowered: Dict[str, Any] = {
            str(key).lower(): value for key, value in params.items()
        }

        query_id = lowered.get("queryid")
        if query_id is None:
            query_id = lowered.get("documentid")
        if query_id is None:
            query_id = lowered.get("id")

        extensions = _decode_if_json(lowered.get("extensions"))

        # Apollo persisted queries
        if query_id is None and isinstance(extensions, dict):
            persisted = extensions.get("persistedQuery")
            if isinstance(persisted, dict):
                query_id = persisted.get("sha256Hash")

        return cls(
            query=lowered.get("query"),
            query_id=query_id,
            operation_name=lowered.get("operationname"),
            variables=_decode_if_json(lowered.get("variables")),
            extensions=extensions,
            read_only=read_only,
            original_input=dict(params),
        )

    @property
    def is_persisted(self) -> bool:
        return self.query_id is not None
